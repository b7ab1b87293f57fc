"""
Org Chart Engine — Collapse Store

A set of node ids whose children are hidden. Independent of filtering:
ids that vanish after a refresh stay in the set and are simply inert.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, Iterator, List, Set

from .domain_types import Node
from .tree import all_ids, ids_with_children


class CollapseStore:

    def __init__(self, ids: Iterable[int] = ()) -> None:
        self._ids: Set[int] = set(ids)

    # -- Mutation -----------------------------------------------------------

    def add(self, node_id: int) -> None:
        self._ids.add(node_id)

    def remove(self, node_id: int) -> None:
        self._ids.discard(node_id)

    def replace_all(self, ids: Iterable[int]) -> None:
        self._ids = set(ids)

    def collapse_all(self, roots: List[Node]) -> None:
        """Collapse exactly the nodes that have something to hide."""
        self.replace_all(ids_with_children(roots))

    def expand_all(self) -> None:
        self.replace_all(())

    # -- Queries ------------------------------------------------------------

    @property
    def ids(self) -> FrozenSet[int]:
        return frozenset(self._ids)

    def effective(self, roots: List[Node]) -> FrozenSet[int]:
        """Collapsed ids that exist in *roots*."""
        return frozenset(self._ids.intersection(all_ids(roots)))

    def stale(self, roots: List[Node]) -> FrozenSet[int]:
        """Collapsed ids that no longer exist in *roots*."""
        return frozenset(self._ids.difference(all_ids(roots)))

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._ids))

    def __repr__(self) -> str:
        return f"CollapseStore({sorted(self._ids)!r})"
