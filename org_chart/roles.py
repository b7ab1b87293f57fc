"""
Org Chart Engine — Role Predicates

Directory titles are free text, so membership is a case-insensitive
substring match, never an enum.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .constants import (
    COORDINATOR_ROLE_KEYWORDS,
    HIDDEN_ROLE_KEYWORDS,
    SUPERVISOR_ROLE_KEYWORDS,
)
from .domain_types import Node, NodePredicate


def normalize_role(role: Optional[str]) -> str:
    return (role or "").strip().lower()


def role_matcher(keywords: Iterable[str]) -> NodePredicate:
    """Build a predicate matching nodes whose role contains any keyword."""
    needles = tuple(k.strip().lower() for k in keywords if k and k.strip())

    def _match(node: Node) -> bool:
        r = normalize_role(node.role)
        return any(k in r for k in needles)

    return _match


should_hide_from_org = role_matcher(HIDDEN_ROLE_KEYWORDS)
is_coordinator = role_matcher(COORDINATOR_ROLE_KEYWORDS)
is_supervisor = role_matcher(SUPERVISOR_ROLE_KEYWORDS)


@dataclass(frozen=True)
class RolePolicy:
    """The three role predicates the engine consults. Swappable by callers."""

    hide: NodePredicate = should_hide_from_org
    coordinator: NodePredicate = is_coordinator
    supervisor: NodePredicate = is_supervisor

    @classmethod
    def from_keywords(
        cls,
        hide: Iterable[str] = HIDDEN_ROLE_KEYWORDS,
        coordinator: Iterable[str] = COORDINATOR_ROLE_KEYWORDS,
        supervisor: Iterable[str] = SUPERVISOR_ROLE_KEYWORDS,
    ) -> "RolePolicy":
        return cls(
            hide=role_matcher(hide),
            coordinator=role_matcher(coordinator),
            supervisor=role_matcher(supervisor),
        )
