import json
import os
import tempfile
from pathlib import Path
from typing import List, Mapping, Optional
from urllib.parse import quote, unquote
from sheets.models import Cell, Sheet
from sheets.core.config import settings
from .base import SheetStore, utc_now


class FileStorage(SheetStore):
    """File-based storage backend for local development"""

    def __init__(self, sheet_dir: str = None):
        self.sheets_dir = Path(sheet_dir or settings.SHEET_STORAGE_DIR)
        self.sheets_dir.mkdir(parents=True, exist_ok=True)

    def _get_file_path(self, sheet_id: str) -> Path:
        """Get file path for a sheet; ids are percent-encoded to stay filename-safe"""
        return self.sheets_dir / f"{quote(sheet_id, safe='')}.json"

    def _read(self, sheet_id: str) -> Optional[dict]:
        file_path = self._get_file_path(sheet_id)

        if not file_path.exists():
            return None

        with open(file_path, 'r') as f:
            return json.load(f)

    def _write(self, sheet_id: str, data: dict) -> None:
        file_path = self._get_file_path(sheet_id)

        # Write to temporary file first (atomic write)
        with tempfile.NamedTemporaryFile(
            mode='w',
            dir=file_path.parent,
            delete=False,
            suffix='.tmp',
            prefix='sheet_'
        ) as f:
            json.dump(data, f, indent=2)
            temp_path = f.name

        # Atomic rename (POSIX guarantees atomicity)
        os.replace(temp_path, file_path)

    async def load(self, sheet_id: str) -> Optional[Sheet]:
        """Load a sheet from its JSON file"""
        data = self._read(sheet_id)
        if data is None:
            return None
        return Sheet.from_dict(data)

    async def save(self, sheet_id: str, cells: Mapping[str, Cell]) -> Sheet:
        """Save a sheet to its JSON file"""
        now = utc_now()
        existing = self._read(sheet_id)

        sheet = Sheet(
            name=sheet_id,
            cells=dict(cells),
            created_at=(existing or {}).get("created_at") or now,
            updated_at=now,
        )
        self._write(sheet_id, sheet.to_dict())
        return sheet

    async def touch(self, sheet_id: str) -> Optional[Sheet]:
        data = self._read(sheet_id)
        if data is None:
            return None

        data["updated_at"] = utc_now()
        self._write(sheet_id, data)
        return Sheet.from_dict(data)

    async def list_sheets(self) -> List[str]:
        """List sheets from files"""
        return sorted(unquote(f.stem) for f in self.sheets_dir.glob("*.json"))
