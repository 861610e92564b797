from typing import Dict, List, Mapping, Optional
from sheets.models import Cell, Sheet
from .base import SheetStore, utc_now


class MemoryStorage(SheetStore):
    """In-process storage backend, used for tests and ephemeral runs"""

    def __init__(self):
        # Serialized snapshots, so callers never share objects with the store
        self._sheets: Dict[str, dict] = {}

    async def load(self, sheet_id: str) -> Optional[Sheet]:
        data = self._sheets.get(sheet_id)
        if data is None:
            return None
        return Sheet.from_dict(data)

    async def save(self, sheet_id: str, cells: Mapping[str, Cell]) -> Sheet:
        now = utc_now()
        existing = self._sheets.get(sheet_id)
        sheet = Sheet(
            name=sheet_id,
            cells=dict(cells),
            created_at=existing["created_at"] if existing else now,
            updated_at=now,
        )
        self._sheets[sheet_id] = sheet.to_dict()
        return Sheet.from_dict(self._sheets[sheet_id])

    async def touch(self, sheet_id: str) -> Optional[Sheet]:
        data = self._sheets.get(sheet_id)
        if data is None:
            return None
        data["updated_at"] = utc_now()
        return Sheet.from_dict(data)

    async def list_sheets(self) -> List[str]:
        return list(self._sheets)
