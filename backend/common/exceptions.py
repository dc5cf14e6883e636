"""Base exception shared by the provenance packages."""


class ProvenanceError(Exception):
    """Base exception for catch provenance errors."""
