"""
Org Chart Engine — Core Domain Types v1.0

Pure data. No behaviour beyond shape helpers.

────────────────────────────────────────────────
DOMAIN GLOSSARY
────────────────────────────────────────────────

Promotion:
    When a hidden node is filtered out, its children take its place
    among its siblings.

Collapse:
    Suppressing the rendering of a node's children. Never removes nodes.

Drill:
    Focusing a root-to-node path so every ancestor on the path shows
    only the chosen child.

────────────────────────────────────────────────
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple


@dataclass
class Node:
    """A single person in the reporting-line hierarchy."""

    id: int
    name: str
    role: Optional[str] = None
    avatar_url: Optional[str] = None
    children: List["Node"] = field(default_factory=list)

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def to_dict(self) -> dict:
        """Wire shape, as delivered by the directory service."""
        d: dict = {"id": self.id, "name": self.name}
        if self.role is not None:
            d["role"] = self.role
        if self.avatar_url is not None:
            d["avatarUrl"] = self.avatar_url
        d["children"] = [c.to_dict() for c in self.children]
        return d


# ── Aliases ───────────────────────────────────────────────────

Forest = List[Node]
NodePredicate = Callable[[Node], bool]
DrillPath = List[int]
SelectedChildMap = Dict[int, int]
DescendantCountIndex = Dict[int, int]


@dataclass(frozen=True)
class CommandResult:
    """
    Structured, immutable outcome of one view command.

    applied is False only for a lookup miss (expand of an id that is
    not in the filtered forest); state is untouched in that case.
    """

    command_type: str = ""
    node_id: Optional[int] = None
    applied: bool = True
    reason: str = ""
    drill_path: Tuple[int, ...] = ()
    newly_collapsed: Tuple[int, ...] = ()
