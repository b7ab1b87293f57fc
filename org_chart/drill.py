"""
Org Chart Engine — Drill Navigator v1.0

Holds the focused root-to-node path. Every ancestor on the path shows
only the selected child; every other level renders normally.

States:
  Idle      — empty path, nothing narrowed
  Focused   — path [root, c1, ..., target]

A find_path miss is a normal outcome (None). It never raises and never
leaves a partial update behind.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .collapse import CollapseStore
from .constants import VIRTUAL_ROOT_ID
from .domain_types import DrillPath, Node, NodePredicate, SelectedChildMap
from .tree import collect_ids, find_node, find_path

logger = logging.getLogger(__name__)


def build_selected_child_map(path: DrillPath) -> SelectedChildMap:
    """path[i] -> path[i + 1] for every consecutive pair."""
    return {path[i]: path[i + 1] for i in range(len(path) - 1)}


def valid_prefix(roots: List[Node], path: DrillPath) -> DrillPath:
    """
    Longest prefix of *path* that is still a root-to-node chain in
    *roots*.
    """
    prefix: DrillPath = []
    level = roots
    for node_id in path:
        match = next((n for n in level if n.id == node_id), None)
        if match is None:
            break
        prefix.append(node_id)
        level = match.children
    return prefix


class DrillNavigator:
    """Owns the DrillPath. The SelectedChildMap is always derived."""

    def __init__(self, path: Optional[DrillPath] = None) -> None:
        self._path: DrillPath = list(path or [])

    # -- State access -------------------------------------------------------

    @property
    def path(self) -> DrillPath:
        return list(self._path)

    @property
    def is_focused(self) -> bool:
        return bool(self._path)

    @property
    def target(self) -> Optional[int]:
        return self._path[-1] if self._path else None

    # -- Transitions --------------------------------------------------------

    def expand(
        self,
        roots: List[Node],
        node_id: int,
        collapse: CollapseStore,
        coordinator: NodePredicate,
        supervisor: NodePredicate,
    ) -> Optional[DrillPath]:
        """
        Open *node_id* and focus the path to it.

          1. Locate the path; on a miss return None, touching nothing
          2. Coordinator: gather every supervisor at or beneath it, so
             the chart reveals one level at a time
          3. Un-collapse the node, focus the path, collapse the supervisors

        Steps 1-2 only read, so a raising predicate leaves both the path
        and *collapse* as they were.
        """
        path = find_path(roots, node_id)
        if path is None:
            logger.debug("drill expand: id %s not in forest", node_id)
            return None

        node = find_node(roots, node_id)
        supervisor_ids: List[int] = []
        if node is not None and coordinator(node):
            supervisor_ids = collect_ids(node, supervisor)

        collapse.remove(node_id)
        self._path = path
        for sid in supervisor_ids:
            collapse.add(sid)

        return self.path

    def collapse(self, node_id: int) -> None:
        """Drop *node_id* and everything after it from the path."""
        if node_id not in self._path:
            return
        self._path = self._path[: self._path.index(node_id)]

    def clear(self) -> None:
        self._path = []

    def retain_valid(self, roots: List[Node]) -> DrillPath:
        """Truncate to the still-valid prefix. Returns the dropped tail."""
        kept = valid_prefix(roots, self._path)
        dropped = self._path[len(kept):]
        self._path = kept
        return dropped

    # -- Derived queries ----------------------------------------------------

    def selected_child_map(self) -> SelectedChildMap:
        return build_selected_child_map(self._path)

    def selected_child(self, parent_id: int) -> Optional[int]:
        if parent_id == VIRTUAL_ROOT_ID:
            return self._path[0] if self._path else None
        return self.selected_child_map().get(parent_id)

    def apply_drill(self, children: List[Node], parent_id: int) -> List[Node]:
        """
        Narrow *children* to the one selected for *parent_id*, or pass the
        list through unchanged when no selection applies.
        """
        selected = self.selected_child(parent_id)
        if selected is None:
            return children
        for child in children:
            if child.id == selected:
                return [child]
        return children

    def drill_roots(self, roots: List[Node]) -> List[Node]:
        return self.apply_drill(roots, VIRTUAL_ROOT_ID)

    def __repr__(self) -> str:
        return f"DrillNavigator({self._path!r})"
