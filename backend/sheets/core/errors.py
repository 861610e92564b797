"""Error taxonomy for sheet operations.

Both errors are expected, user-facing outcomes scoped to a single call.
The HTTP layer maps NotFoundError to 404 and FormulaError to 422.
"""
from typing import Optional


class SheetError(Exception):
    """Base class for sheet errors."""
    pass


class NotFoundError(SheetError):
    """Raised when a sheet or a cell does not exist."""

    def __init__(self, sheet_id: str, cell_id: Optional[str] = None):
        self.sheet_id = sheet_id
        self.cell_id = cell_id
        if cell_id is None:
            message = f"Sheet '{sheet_id}' not found"
        else:
            message = f"Cell '{cell_id}' not found in sheet '{sheet_id}'"
        super().__init__(message)


class FormulaError(SheetError):
    """
    Raised when a formula cannot be accepted.

    Covers undefined references, circular dependencies and evaluation
    failures. `value` is the raw input that was rejected.
    """

    def __init__(self, reason: str, value: Optional[str] = None):
        super().__init__(reason)
        self.reason = reason
        self.value = value

    def with_value(self, value: str) -> "FormulaError":
        """Attach the rejected raw value if it is not set yet."""
        if self.value is None:
            self.value = value
        return self
