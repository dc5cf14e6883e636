"""Custom exceptions for traceability code allocation."""
from common.exceptions import ProvenanceError


class TraceabilityError(ProvenanceError):
    """Base traceability exception."""


class AllocationExhausted(TraceabilityError):
    """Raised when no unique code was found within the attempt budget or the sequence ran out."""

    def __init__(
        self,
        haul_id: str | None = None,
        attempts: int | None = None,
        last_code: str | None = None,
        sequence_overflow: bool = False,
        max_sequence: int = 99,
    ) -> None:
        if sequence_overflow and haul_id:
            msg = (
                f"Traceability sequence for haul '{haul_id}' passed {max_sequence} "
                f"after {attempts or 0} attempts"
            )
        elif haul_id and attempts is not None:
            msg = f"Failed to allocate a unique traceability code for haul '{haul_id}' after {attempts} attempts"
        else:
            msg = "Failed to allocate a unique traceability code"
        super().__init__(msg)
        self.haul_id = haul_id
        self.attempts = attempts
        self.last_code = last_code
        self.sequence_overflow = sequence_overflow
