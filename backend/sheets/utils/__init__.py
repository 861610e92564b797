from .identifiers import normalize_id

__all__ = ["normalize_id"]
