"""Reactive recomputation engine for sheet cells."""
import logging
from typing import Dict, List, Mapping, Optional

from sheets.models import Cell, Formula, Sheet
from sheets.storage.base import SheetStore
from .errors import FormulaError, NotFoundError
from .expression import evaluate, extract_references
from .graph import SheetGraph

logger = logging.getLogger(__name__)


class SheetEngine:
    """
    Owns the write path for cells: formula evaluation, backlink upkeep
    and propagation to dependents.

    Every write works on a snapshot loaded from the store and saves the
    whole snapshot at the end; a rejected write saves nothing.
    """

    def __init__(self, store: SheetStore):
        self.store = store

    async def write(self, sheet_id: str, cell_id: str, raw_value) -> Cell:
        """
        Set a cell's value and recompute everything that depends on it.

        Args:
            sheet_id: Sheet to write into (created if absent)
            cell_id: Cell to write (created if absent)
            raw_value: Literal text or a formula starting with '='

        Returns:
            The written cell as persisted

        Raises:
            FormulaError: Unknown reference, circular dependency or evaluation failure
        """
        sheet = await self.store.load(sheet_id)
        if sheet is None:
            sheet = Sheet(name=sheet_id)

        value = str(raw_value)
        previous = sheet.cells.get(cell_id)

        if previous is not None and previous.value == value:
            logger.debug("No-op write to %s/%s, touching sheet", sheet_id, cell_id)
            await self.store.touch(sheet_id)
            return previous

        candidate = Cell(value=value, result=value)
        if previous is not None:
            candidate.used_in = dict(previous.used_in)

        try:
            self._apply(sheet, cell_id, candidate, previous)
        except FormulaError as e:
            logger.info("Rejected write to %s/%s (%r): %s", sheet_id, cell_id, value, e.reason)
            raise e.with_value(value)

        saved = await self.store.save(sheet_id, sheet.cells)
        logger.debug("Wrote %s/%s = %r -> %r", sheet_id, cell_id, value, candidate.result)
        return saved.cells[cell_id]

    async def read_cell(self, sheet_id: str, cell_id: str) -> Cell:
        """Return a stored cell without recomputing it."""
        sheet = await self.store.load(sheet_id)
        if sheet is None or cell_id not in sheet.cells:
            raise NotFoundError(sheet_id, cell_id)
        return sheet.cells[cell_id]

    async def read_sheet(self, sheet_id: str) -> Dict[str, Cell]:
        """Return every cell of a sheet."""
        sheet = await self.store.load(sheet_id)
        if sheet is None:
            raise NotFoundError(sheet_id)
        return sheet.cells

    async def list_sheets(self) -> List[str]:
        return await self.store.list_sheets()

    def _apply(self, sheet: Sheet, cell_id: str, candidate: Cell, previous: Optional[Cell]) -> None:
        """Validate the candidate, then mutate the snapshot in place."""
        content = candidate.content

        # Validation: nothing in the sheet is touched until all of it passes
        if isinstance(content, Formula):
            references = extract_references(content.expression)

            graph = SheetGraph(sheet.cells)
            offending = graph.find_cycle(cell_id, references)
            if offending is not None:
                raise FormulaError(f"Circular dependency: {offending} already depends on {cell_id}")

            references.pop(cell_id, None)
            candidate.vars = references
            candidate.result = self._compute(sheet.cells, content.expression, candidate.vars)

        # Mutation
        for ref in candidate.vars:
            sheet.cells[ref].used_in[cell_id] = True

        if previous is not None:
            for ref in previous.vars:
                if ref not in candidate.vars and ref in sheet.cells:
                    sheet.cells[ref].used_in.pop(cell_id, None)

        sheet.cells[cell_id] = candidate
        self._propagate(sheet, cell_id)

    def _propagate(self, sheet: Sheet, cell_id: str) -> None:
        """Recompute all transitive dependents of cell_id, each once."""
        order = SheetGraph(sheet.cells).recompute_order(cell_id)
        for dependent_id in order:
            dependent = sheet.cells.get(dependent_id)
            if dependent is None:
                raise FormulaError(f"Dependent cell {dependent_id} is missing")

            content = dependent.content
            if not isinstance(content, Formula):
                continue
            dependent.result = self._compute(sheet.cells, content.expression, dependent.vars)

        if order:
            logger.debug("Recomputed %d dependent(s) of %s/%s", len(order), sheet.name, cell_id)

    @staticmethod
    def _compute(cells: Mapping[str, Cell], expression: str, references: Mapping[str, bool]) -> str:
        """Build the scope from current results and evaluate."""
        scope: Dict[str, str] = {}
        for ref in references:
            cell = cells.get(ref)
            if cell is None:
                raise FormulaError(f"Undefined reference: {ref}")
            scope[ref] = cell.result
        return evaluate(expression, scope)
