from pydantic import BaseModel, field_validator
from typing import Dict, List
from sheets.models import Cell


class UpsertCellRequest(BaseModel):
    value: str

    @field_validator("value", mode="before")
    @classmethod
    def coerce_number(cls, value):
        # Numbers are accepted and stored as their text form
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class CellResponse(BaseModel):
    value: str
    result: str

    @classmethod
    def from_cell(cls, cell: Cell) -> "CellResponse":
        return cls(value=cell.value, result=cell.result)


class FormulaErrorResponse(BaseModel):
    value: str
    result: str = "ERROR"


class ListSheetsResponse(BaseModel):
    sheets: List[str]


SheetResponse = Dict[str, CellResponse]
