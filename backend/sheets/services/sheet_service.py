"""Caller-facing sheet operations with per-sheet write serialization."""
import asyncio
from collections import defaultdict
from typing import Dict, List

from sheets.core.engine import SheetEngine
from sheets.models import Cell
from sheets.storage import SheetStore


class SheetService:
    """
    Wraps the engine for the HTTP layer.

    Writes to the same sheet are serialized with an asyncio.Lock per sheet id,
    so two requests never read-modify-write one snapshot at the same time
    within this process. Writes to different sheets run concurrently.
    """

    def __init__(self, store: SheetStore):
        self.engine = SheetEngine(store)
        self._locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def upsert_cell(self, sheet_id: str, cell_id: str, value: str) -> Cell:
        async with self._locks[sheet_id]:
            return await self.engine.write(sheet_id, cell_id, value)

    async def get_cell(self, sheet_id: str, cell_id: str) -> Cell:
        return await self.engine.read_cell(sheet_id, cell_id)

    async def get_sheet(self, sheet_id: str) -> Dict[str, Cell]:
        return await self.engine.read_sheet(sheet_id)

    async def list_sheets(self) -> List[str]:
        return await self.engine.list_sheets()
