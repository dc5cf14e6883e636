"""Confidence and multi-frame stability gate in front of the estimator."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from common.types import Detection
from measurement import config

Box = Tuple[float, float, float, float]


@dataclass
class _Track:
    bbox: Box
    hits: int
    last_seen: float


def iou(a: Box, b: Box) -> float:
    ax1, ay1, ax2, ay2 = min(a[0], a[2]), min(a[1], a[3]), max(a[0], a[2]), max(a[1], a[3])
    bx1, by1, bx2, by2 = min(b[0], b[2]), min(b[1], b[3]), max(b[0], b[2]), max(b[1], b[3])
    inter_w = max(0.0, min(ax2, bx2) - max(ax1, bx1))
    inter_h = max(0.0, min(ay2, by2) - max(ay1, by1))
    inter_area = inter_w * inter_h
    union = (ax2 - ax1) * (ay2 - ay1) + (bx2 - bx1) * (by2 - by1) - inter_area
    return inter_area / union if union > 0 else 0.0


class DetectionStabilizer:
    """Emit a fish only after it has been seen confidently in enough frames."""

    def __init__(
        self,
        min_confidence: float = config.MIN_CONFIDENCE_THRESHOLD,
        min_hits: int = config.MIN_DETECTIONS_REQUIRED,
        match_iou: float = config.STABILIZER_MATCH_IOU,
        max_age_sec: float = config.STABILIZER_TRACK_MAX_AGE_SEC,
    ):
        self._min_confidence = min_confidence
        self._min_hits = max(1, min_hits)
        self._match_iou = match_iou
        self._max_age_sec = max_age_sec
        self._tracks: Dict[int, _Track] = {}
        self._next_id = 1

    def _expire(self, now: float) -> None:
        stale = [tid for tid, t in self._tracks.items() if (now - t.last_seen) > self._max_age_sec]
        for tid in stale:
            self._tracks.pop(tid, None)

    def _match(self, det: Detection, claimed: set[int]) -> int:
        if det.track_id is not None:
            return det.track_id

        best_id = None
        best_iou = self._match_iou
        for tid, track in self._tracks.items():
            if tid in claimed:
                continue
            overlap = iou(det.bounding_box, track.bbox)
            if overlap >= best_iou:
                best_iou = overlap
                best_id = tid

        if best_id is None:
            while self._next_id in self._tracks:
                self._next_id += 1
            best_id = self._next_id
            self._next_id += 1
        return best_id

    def update(self, detections: List[Detection], now: float) -> List[Detection]:
        """Feed one frame; returns the detections that are stable as of this frame."""
        self._expire(now)
        confident = [d for d in detections if d.confidence >= self._min_confidence]

        stable: List[Detection] = []
        claimed: set[int] = set()
        for det in sorted(confident, key=lambda d: d.confidence, reverse=True):
            tid = self._match(det, claimed)
            if tid in claimed:
                continue
            claimed.add(tid)

            track = self._tracks.get(tid)
            if track is None:
                track = _Track(bbox=det.bounding_box, hits=0, last_seen=now)
                self._tracks[tid] = track
            track.bbox = det.bounding_box
            track.hits += 1
            track.last_seen = now

            if track.hits >= self._min_hits:
                stable.append(det.model_copy(update={"track_id": tid}))
        return stable

    def reset(self) -> None:
        self._tracks.clear()
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._tracks)
