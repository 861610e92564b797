from .cell import Cell, CellContent, Formula, Literal, parse_content, FORMULA_PREFIX
from .sheet import Sheet

__all__ = [
    "Cell", "CellContent", "Formula", "Literal", "parse_content", "FORMULA_PREFIX",
    "Sheet"
]
