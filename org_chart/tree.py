"""
Org Chart Engine — Tree Utilities v1.0

Pure functions over a forest of Node. No state, no I/O.
Inputs are never mutated; filter_tree builds new Node objects.
"""

from __future__ import annotations

import dataclasses
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .domain_types import DescendantCountIndex, DrillPath, Node, NodePredicate


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

def iter_preorder(roots: List[Node]) -> Iterator[Node]:
    """Yield every node, parents before children, siblings in order."""
    stack: List[Node] = list(reversed(roots))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def iter_with_depth(roots: List[Node]) -> Iterator[Tuple[Node, int]]:
    """Pre-order walk yielding ``(node, depth)``; roots have depth 0."""
    stack: List[Tuple[Node, int]] = [(r, 0) for r in reversed(roots)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((c, depth + 1) for c in reversed(node.children))


def all_ids(roots: List[Node]) -> List[int]:
    return [n.id for n in iter_preorder(roots)]


def ids_with_children(roots: List[Node]) -> Set[int]:
    """Ids of every node that has at least one child."""
    return {n.id for n in iter_preorder(roots) if n.children}


# ---------------------------------------------------------------------------
# Tree Filter (flatten-and-splice)
# ---------------------------------------------------------------------------

def filter_tree(roots: List[Node], hide: NodePredicate) -> List[Node]:
    """
    Remove every node matching *hide*, promoting its filtered children
    into the exact slot it occupied among its siblings.

    Predicate exceptions propagate unchanged.
    """

    def _walk(node: Node) -> List[Node]:
        next_children: List[Node] = []
        for child in node.children:
            next_children.extend(_walk(child))
        if hide(node):
            return next_children
        return [dataclasses.replace(node, children=next_children)]

    result: List[Node] = []
    for root in roots:
        result.extend(_walk(root))
    return result


# ---------------------------------------------------------------------------
# Descendant Index
# ---------------------------------------------------------------------------

def count_descendants(roots: List[Node]) -> DescendantCountIndex:
    """
    Map every node id to the number of its strict descendants.

    count(n) = sum(1 + count(c) for c in n.children). Single post-order
    pass with an explicit stack.
    """
    counts: Dict[int, int] = {}
    stack: List[Tuple[Node, bool]] = [(r, False) for r in reversed(roots)]
    while stack:
        node, children_done = stack.pop()
        if children_done:
            counts[node.id] = sum(1 + counts[c.id] for c in node.children)
            continue
        stack.append((node, True))
        stack.extend((c, False) for c in reversed(node.children))
    return counts


# ---------------------------------------------------------------------------
# Predicate Collector
# ---------------------------------------------------------------------------

def collect_ids(root: Node, pred: NodePredicate) -> List[int]:
    """Pre-order ids of *root* and its subtree for which *pred* holds."""
    return [n.id for n in iter_preorder([root]) if pred(n)]


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

def find_path(roots: List[Node], target_id: int) -> Optional[DrillPath]:
    """
    Return the id path ``[root, ..., target]`` or None when absent.

    Pre-order DFS across roots in list order.
    """
    stack: List[Tuple[Node, DrillPath]] = [(r, [r.id]) for r in reversed(roots)]
    while stack:
        node, path = stack.pop()
        if node.id == target_id:
            return path
        for child in reversed(node.children):
            stack.append((child, path + [child.id]))
    return None


def find_node(roots: List[Node], target_id: int) -> Optional[Node]:
    for node in iter_preorder(roots):
        if node.id == target_id:
            return node
    return None


def max_depth(roots: List[Node]) -> int:
    """Number of levels in the forest (0 for an empty forest)."""
    deepest = -1
    for _, depth in iter_with_depth(roots):
        if depth > deepest:
            deepest = depth
    return deepest + 1
