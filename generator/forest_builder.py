"""
Forest Builder — Deterministic generator producing directory forests.

build_forest(spec, seed) → List[Node]

Breadth-first: ids are assigned level by level starting at 1, so the
same (spec, seed) always yields the same ids, names and titles. Fan-out,
names and titles draw from separate forks of the seed. Hidden
titles (Analista, Admin...) are sprinkled below the roots and still get
reports, which exercises child promotion in the role filter.

Output is validated via validate_forest before returning.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Tuple

from org_chart.domain_types import Node
from org_chart.invariants import InvariantViolationError, validate_forest

from .deterministic_rng import DeterministicRNG
from .forest_spec import ForestSpec

FIRST_NAMES: List[str] = [
    "Ana", "Bruno", "Carla", "Duda", "Eduardo", "Fernanda", "Gabriel",
    "Helena", "Igor", "Júlia", "Lucas", "Marina", "Nicolas", "Olívia",
    "Paulo", "Rafaela", "Sérgio", "Tatiane", "Vinícius", "Yasmin",
]

SURNAMES: List[str] = [
    "Almeida", "Barbosa", "Costa", "Dias", "Ferreira", "Gomes", "Lima",
    "Moreira", "Nunes", "Oliveira", "Pereira", "Ribeiro", "Santos", "Souza",
]


class GeneratorInvariantError(Exception):
    """Raised when a generated forest fails structural validation."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Generated forest failed validation: {cause}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_forest(spec: ForestSpec, seed: int) -> List[Node]:
    """
    Build a forest matching *spec*. Generation stops adding nodes once
    spec.max_nodes is reached; levels beyond spec.levels are never built.

    Raises GeneratorInvariantError if the result is not a valid forest.
    """
    rng = DeterministicRNG(seed)
    fanout = rng.fork("fanout")
    names = rng.fork("names")
    titles = rng.fork("titles")
    next_id = 1
    roots: List[Node] = []
    queue: Deque[Tuple[Node, int]] = deque()

    def _make(depth: int) -> Node:
        nonlocal next_id
        nid = next_id
        next_id += 1
        return Node(
            id=nid,
            name=f"{names.rand_choice(FIRST_NAMES)} {names.rand_choice(SURNAMES)}",
            role=_pick_role(spec, titles, depth),
            avatar_url=f"/avatars/{nid}.png" if spec.with_avatars else None,
        )

    for _ in range(spec.root_count):
        if next_id > spec.max_nodes:
            break
        root = _make(0)
        roots.append(root)
        queue.append((root, 0))

    while queue:
        parent, depth = queue.popleft()
        if depth + 1 >= len(spec.levels):
            continue
        for _ in range(fanout.rand_int(spec.min_children, spec.max_children)):
            if next_id > spec.max_nodes:
                break
            child = _make(depth + 1)
            parent.children.append(child)
            queue.append((child, depth + 1))

    try:
        validate_forest(roots)
    except InvariantViolationError as exc:
        raise GeneratorInvariantError(exc) from exc

    return roots


def _pick_role(spec: ForestSpec, rng: DeterministicRNG, depth: int) -> str:
    """Ladder title for *depth*; non-roots may draw a hidden title instead."""
    if depth > 0 and rng.chance(spec.hidden_percent):
        return rng.rand_choice(list(spec.hidden_titles))
    return spec.levels[depth]
