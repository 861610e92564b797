from .config import settings
from .errors import SheetError, NotFoundError, FormulaError

__all__ = ["settings", "SheetError", "NotFoundError", "FormulaError"]
