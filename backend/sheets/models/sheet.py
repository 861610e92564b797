from dataclasses import dataclass, field
from typing import Dict, Optional
from .cell import Cell


@dataclass
class Sheet:
    name: str
    cells: Dict[str, Cell] = field(default_factory=dict)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "cells": {cell_id: cell.to_dict() for cell_id, cell in self.cells.items()},
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Sheet":
        return cls(
            name=data["name"],
            cells={
                cell_id: Cell.from_dict(cell_data)
                for cell_id, cell_data in (data.get("cells") or {}).items()
            },
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
