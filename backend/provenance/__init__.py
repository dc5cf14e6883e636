from .engine import DEFAULT_POSITION, CatchProvenance, CatchProvenanceEngine, position_or_default

__all__ = ["DEFAULT_POSITION", "CatchProvenance", "CatchProvenanceEngine", "position_or_default"]
