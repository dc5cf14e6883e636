"""
Traceability code allocation.

A code is species prefix (3) + trip suffix (4) + haul number (2) +
capture MMDD (4) + sequence (2). The starting sequence is the number of
codes the haul already has plus one. Each candidate is checked against
the registry and the sequence is bumped on collision, up to a fixed
number of attempts.
"""
from __future__ import annotations

import logging
import re
from datetime import date
from typing import Iterable

from traceability.exceptions import AllocationExhausted
from traceability.registry import CodeRegistry
from traceability.types import HaulContext, TraceabilityCodeParts

logger = logging.getLogger(__name__)

MAX_ALLOCATION_ATTEMPTS = 5
MAX_SEQUENCE = 99
CODE_LENGTH = 15

_CODE_PATTERN = re.compile(r"^(.{3})(.{4})(\d{2})(\d{4})(\d{2})$")


def species_prefix(species_code: str) -> str:
    return species_code.strip()[:3].upper()


def trip_suffix(trip_code: str) -> str:
    return trip_code.strip()[-4:]


def date_code(capture_date: date) -> str:
    return f"{capture_date.month:02d}{capture_date.day:02d}"


def code_parts(haul: HaulContext, sequence: int) -> TraceabilityCodeParts:
    return TraceabilityCodeParts(
        species_prefix=species_prefix(haul.species_code),
        trip_suffix=trip_suffix(haul.trip_code),
        haul_number=f"{haul.haul_number:02d}",
        date_code=date_code(haul.capture_date),
        sequence=f"{sequence:02d}",
    )


def compose_code(haul: HaulContext, sequence: int) -> str:
    return str(code_parts(haul, sequence))


def parse_code(code: str) -> TraceabilityCodeParts:
    """Split a traceability code back into its five parts."""
    match = _CODE_PATTERN.match(code.strip())
    if not match:
        raise ValueError(f"Not a {CODE_LENGTH}-character traceability code: {code!r}")
    month, day = int(match.group(4)[:2]), int(match.group(4)[2:])
    if not (1 <= month <= 12 and 1 <= day <= 31):
        raise ValueError(f"Invalid date code in traceability code: {code!r}")
    return TraceabilityCodeParts(*match.groups())


class TraceabilityCodeAllocator:
    def __init__(self, registry: CodeRegistry, max_attempts: int = MAX_ALLOCATION_ATTEMPTS):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._registry = registry
        self._max_attempts = max_attempts

    def _is_taken(self, haul_id: str, code: str, existing: set[str]) -> bool:
        return code in existing or self._registry.code_exists(haul_id, code)

    def allocate(self, haul: HaulContext, existing_codes: Iterable[str] | None = None) -> str:
        if existing_codes is None:
            existing: set[str] = set()
            sequence = self._registry.count_codes(haul.haul_id) + 1
        else:
            existing_list = list(existing_codes)
            existing = set(existing_list)
            sequence = len(existing_list) + 1

        candidate = None
        for attempt in range(1, self._max_attempts + 1):
            if sequence > MAX_SEQUENCE:
                logger.error("Sequence for haul '%s' passed %d", haul.haul_id, MAX_SEQUENCE)
                raise AllocationExhausted(
                    haul.haul_id, attempt - 1, candidate, sequence_overflow=True, max_sequence=MAX_SEQUENCE
                )
            candidate = compose_code(haul, sequence)
            if not self._is_taken(haul.haul_id, candidate, existing):
                logger.info("Allocated traceability code %s for haul '%s'", candidate, haul.haul_id)
                return candidate
            logger.debug("Code %s taken (attempt %d/%d)", candidate, attempt, self._max_attempts)
            sequence += 1

        raise AllocationExhausted(haul.haul_id, self._max_attempts, candidate)
