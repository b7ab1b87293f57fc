"""
Forest Drift Comparator — pure function, no side effects.

Structured diff between two forests, used to summarise what a refresh
from the directory service changed. A node "moved" when it exists in
both forests under a different parent (None for roots).
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .domain_types import Node
from .tree import iter_preorder


def parent_map(roots: List[Node]) -> Dict[int, Optional[int]]:
    parents: Dict[int, Optional[int]] = {r.id: None for r in roots}
    for node in iter_preorder(roots):
        for child in node.children:
            parents[child.id] = node.id
    return parents


def compare_forests(before: List[Node], after: List[Node]) -> dict:
    """
    Returns dict with:
        node_count_delta, root_count_delta, added, removed, moved
    """
    parents_a = parent_map(before)
    parents_b = parent_map(after)

    ids_a = set(parents_a)
    ids_b = set(parents_b)

    moved = sorted(
        nid for nid in ids_a & ids_b if parents_a[nid] != parents_b[nid]
    )

    return {
        "node_count_delta": len(ids_b) - len(ids_a),
        "root_count_delta": len(after) - len(before),
        "added": sorted(ids_b - ids_a),
        "removed": sorted(ids_a - ids_b),
        "moved": moved,
    }


def is_unchanged(diff: dict) -> bool:
    return not (diff["added"] or diff["removed"] or diff["moved"])
