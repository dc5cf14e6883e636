"""Traceability code allocation package."""

from .allocator import (
    MAX_ALLOCATION_ATTEMPTS,
    TraceabilityCodeAllocator,
    compose_code,
    parse_code,
)
from .exceptions import AllocationExhausted, TraceabilityError
from .registry import CodeRegistry, InMemoryCodeRegistry, SqlCodeRegistry
from .types import HaulContext, TraceabilityCodeParts

__all__ = [
    "MAX_ALLOCATION_ATTEMPTS",
    "AllocationExhausted",
    "CodeRegistry",
    "HaulContext",
    "InMemoryCodeRegistry",
    "SqlCodeRegistry",
    "TraceabilityCodeAllocator",
    "TraceabilityCodeParts",
    "TraceabilityError",
    "compose_code",
    "parse_code",
]
