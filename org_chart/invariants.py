"""
Org Chart Engine — Forest Checks

The engine assumes a well-formed tree from the directory service and
never validates on its own. These checks run only when a caller asks
for them (tests, or the backend with check=true).

Every check raises InvariantViolationError on failure.
"""

from __future__ import annotations

from typing import List, Set

from .constants import VIRTUAL_ROOT_ID
from .domain_types import DrillPath, Node
from .drill import valid_prefix


class InvariantViolationError(Exception):
    """Raised when a forest or drill path breaks a structural rule."""

    def __init__(self, rule: str, detail: str) -> None:
        self.rule = rule
        self.detail = detail
        super().__init__(f"[INVARIANT:{rule}] {detail}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def validate_forest(roots: List[Node]) -> None:
    """Raise on the first shared/cyclic node, duplicate id, reserved id or empty name."""
    _check_no_shared_nodes(roots)
    _check_unique_ids(roots)
    _check_reserved_id(roots)
    _check_names(roots)


def validate_drill_path(roots: List[Node], path: DrillPath) -> None:
    """Every id must exist and each pair must be a parent/child edge."""
    if not path:
        return
    prefix = valid_prefix(roots, path)
    if len(prefix) != len(path):
        raise InvariantViolationError(
            "drill_path",
            f"Drill path {path!r} breaks at position {len(prefix)} "
            f"(id {path[len(prefix)]!r})",
        )


# ---------------------------------------------------------------------------
# Individual checks (private)
# ---------------------------------------------------------------------------

def _check_no_shared_nodes(roots: List[Node]) -> None:
    """Each Node object appears once; a repeat means sharing or a cycle."""
    seen: Set[int] = set()
    stack: List[Node] = list(roots)
    while stack:
        node = stack.pop()
        if id(node) in seen:
            raise InvariantViolationError(
                "shared_node",
                f"Node {node.id!r} is reachable more than once (shared or cyclic)",
            )
        seen.add(id(node))
        stack.extend(node.children)


def _check_unique_ids(roots: List[Node]) -> None:
    seen: Set[int] = set()
    stack: List[Node] = list(roots)
    while stack:
        node = stack.pop()
        if node.id in seen:
            raise InvariantViolationError(
                "duplicate_id", f"Node id {node.id!r} appears more than once"
            )
        seen.add(node.id)
        stack.extend(node.children)


def _check_reserved_id(roots: List[Node]) -> None:
    stack: List[Node] = list(roots)
    while stack:
        node = stack.pop()
        if node.id == VIRTUAL_ROOT_ID:
            raise InvariantViolationError(
                "reserved_id",
                f"Node {node.name!r} uses the reserved virtual root id {VIRTUAL_ROOT_ID}",
            )
        stack.extend(node.children)


def _check_names(roots: List[Node]) -> None:
    stack: List[Node] = list(roots)
    while stack:
        node = stack.pop()
        if not node.name or not node.name.strip():
            raise InvariantViolationError(
                "empty_name", f"Node {node.id!r} has an empty name"
            )
        stack.extend(node.children)
