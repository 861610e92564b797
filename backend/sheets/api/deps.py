from fastapi import HTTPException
from sheets.services import SheetService, get_sheet_service
from sheets.utils import normalize_id


def sheet_service_dependency() -> SheetService:
    """Shared sheet service; tests override this via app.dependency_overrides."""
    return get_sheet_service()


def path_id(raw: str) -> str:
    """Normalize a path identifier, rejecting blank ids with 400."""
    try:
        return normalize_id(raw)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


__all__ = ["sheet_service_dependency", "path_id"]
