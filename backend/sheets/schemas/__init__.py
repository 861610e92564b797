from .cell import (
    UpsertCellRequest, CellResponse, FormulaErrorResponse,
    ListSheetsResponse, SheetResponse
)

__all__ = [
    "UpsertCellRequest", "CellResponse", "FormulaErrorResponse",
    "ListSheetsResponse", "SheetResponse"
]
