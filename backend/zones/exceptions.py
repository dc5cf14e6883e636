"""Exceptions raised while resolving fishing zones."""
from common.exceptions import ProvenanceError


class ZoneError(ProvenanceError):
    """Base zone resolution exception."""


class ZoneLookupUnavailable(ZoneError):
    """Raised when the external nearest-seaport lookup cannot answer."""
