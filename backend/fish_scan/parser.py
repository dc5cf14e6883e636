"""
Parser for bilingual fish analysis text.

The analysis service answers with one ``Key: Value`` pair per line, an
English block first, then a ``----`` separator and a Vietnamese block
that opens with ``Tên thông thường``.
"""
from __future__ import annotations

import logging
import re

from pydantic import BaseModel

logger = logging.getLogger(__name__)

VIETNAMESE_SENTINEL_KEY = "Tên thông thường"
SEPARATOR = "----"

KEY_TO_FIELD = {
    "Common Name": "common_name",
    "Tên thông thường": "common_name",
    "Species": "species",
    "Total Number of Fish": "total_number_of_fish",
    "Tổng số cá": "total_number_of_fish",
    "Average Fish Size": "average_fish_size",
    "Kích thước cá trung bình": "average_fish_size",
    "Estimated Weight per Fish": "estimated_weight_per_fish",
    "Khối lượng ước tính mỗi con": "estimated_weight_per_fish",
    "Total Estimated Weight": "total_estimated_weight",
    "Tổng khối lượng ước tính": "total_estimated_weight",
}

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


class ScanFields(BaseModel):
    common_name: str = ""
    species: str = ""
    total_number_of_fish: str = ""
    average_fish_size: str = ""
    estimated_weight_per_fish: str = ""
    total_estimated_weight: str = ""


class ScanAnalysis(BaseModel):
    en: ScanFields
    vi: ScanFields


def parse_number(value: str | None, default: float = 0.0) -> float:
    """First decimal number in ``value`` ("1,250.5 kg" -> 1250.5)."""
    if not value:
        return default
    match = _NUMBER_RE.search(value.replace(",", ""))
    return float(match.group()) if match else default


def parse_scan_text(text: str) -> ScanAnalysis:
    values: dict[str, dict[str, str]] = {"en": {}, "vi": {}}
    lang = "en"

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or SEPARATOR in line or ":" not in line:
            continue

        key, value = (part.strip() for part in line.split(":", 1))
        if key == VIETNAMESE_SENTINEL_KEY:
            lang = "vi"
        if not key or not value:
            continue

        field = KEY_TO_FIELD.get(key)
        if field is None:
            logger.debug("Ignoring unknown scan key '%s'", key)
            continue
        values[lang][field] = value

    en = ScanFields(**values["en"])
    vi = ScanFields(**{f: values["vi"].get(f) or getattr(en, f) for f in ScanFields.model_fields})
    return ScanAnalysis(en=en, vi=vi)
