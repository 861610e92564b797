"""Dependency graph over a sheet's cells."""
import networkx as nx
from typing import Iterable, List, Mapping, Optional

from sheets.models import Cell
from .errors import FormulaError


class SheetGraph:
    """
    Directed view of a sheet's backlinks.

    Edge from A to B means "B reads A" (B is in A.used_in). The graph is a
    read-only projection: cells own their vars/used_in maps and the engine
    mutates those; the graph is rebuilt from them when needed.
    """

    def __init__(self, cells: Mapping[str, Cell]):
        self._graph = nx.DiGraph()
        for cell_id, cell in cells.items():
            self._graph.add_node(cell_id)
            for dependent in cell.used_in:
                self._graph.add_edge(cell_id, dependent)
        # Stable tie-break for ordering: node insertion order
        self._position = {node: i for i, node in enumerate(self._graph.nodes)}

    def find_cycle(self, cell_id: str, references: Iterable[str]) -> Optional[str]:
        """
        Check whether making cell_id read the given references closes a loop.

        Adding edge ref→cell_id creates a cycle iff cell_id already reaches
        ref, i.e. ref transitively depends on cell_id.

        Returns:
            The first offending reference, or None if all edges are safe
        """
        if not self._graph.has_node(cell_id):
            return None

        for ref in references:
            if ref == cell_id or not self._graph.has_node(ref):
                continue
            if nx.has_path(self._graph, cell_id, ref):
                return ref
        return None

    def recompute_order(self, cell_id: str) -> List[str]:
        """
        Get the cells to recompute after cell_id changes.

        Returns every transitive dependent of cell_id in topological order,
        so each is recomputed once and after all of its changed inputs.

        Raises:
            FormulaError: If the stored links contain a cycle
        """
        if not self._graph.has_node(cell_id):
            return []

        affected = nx.descendants(self._graph, cell_id)
        if any(self._graph.has_edge(node, cell_id) for node in affected):
            raise FormulaError(f"Circular dependency through {cell_id}")
        subgraph = self._graph.subgraph(affected)
        try:
            return list(nx.lexicographical_topological_sort(subgraph, key=self._position.get))
        except nx.NetworkXUnfeasible:
            raise FormulaError(f"Circular dependency among dependents of {cell_id}")
