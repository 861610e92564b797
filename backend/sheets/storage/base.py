from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Mapping, Optional
from sheets.models import Cell, Sheet


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SheetStore(ABC):
    """
    Abstract base class for sheet storage backends.

    Backends persist whole sheet snapshots with last-write-wins semantics.
    `load` must return an object the caller may mutate freely.
    """

    @abstractmethod
    async def load(self, sheet_id: str) -> Optional[Sheet]:
        """Load a sheet snapshot, or None if it does not exist"""
        pass

    @abstractmethod
    async def save(self, sheet_id: str, cells: Mapping[str, Cell]) -> Sheet:
        """Replace a sheet's cells, creating the sheet if absent"""
        pass

    @abstractmethod
    async def touch(self, sheet_id: str) -> Optional[Sheet]:
        """Bump a sheet's modification time without changing cells"""
        pass

    @abstractmethod
    async def list_sheets(self) -> List[str]:
        """List all sheet names"""
        pass
