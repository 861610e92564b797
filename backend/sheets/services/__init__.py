from typing import Optional
from .sheet_service import SheetService
from sheets.storage import get_storage


_sheet_service: Optional[SheetService] = None


def get_sheet_service() -> SheetService:
    """Get the shared service bound to the configured storage (singleton)"""
    global _sheet_service

    if _sheet_service is None:
        _sheet_service = SheetService(get_storage())

    return _sheet_service


__all__ = ["SheetService", "get_sheet_service"]
