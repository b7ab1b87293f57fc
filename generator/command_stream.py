"""
Command Stream — Seeded random view-command generator.

generate_commands(roots, seed, count) → List[BaseCommand]

Node commands target ids drawn from the raw forest, so hidden ids and
ids that do not exist show up too and exercise the lookup-miss paths.
"""

from __future__ import annotations

from typing import List

from org_chart.commands import (
    BaseCommand,
    ClearFocusCommand,
    CollapseAllCommand,
    CollapseCommand,
    ExpandAllCommand,
    ExpandCommand,
    ToggleCommand,
)
from org_chart.domain_types import Node
from org_chart.tree import all_ids

from .deterministic_rng import DeterministicRNG

# Weighted: node commands dominate, bulk commands are rare.
_ACTIONS: List[str] = [
    "expand", "expand", "expand", "expand",
    "collapse", "collapse",
    "toggle", "toggle", "toggle",
    "collapse_all",
    "expand_all",
    "clear_focus",
]

_NODE_COMMANDS = {
    "expand": ExpandCommand,
    "collapse": CollapseCommand,
    "toggle": ToggleCommand,
}

_BULK_COMMANDS = {
    "collapse_all": CollapseAllCommand,
    "expand_all": ExpandAllCommand,
    "clear_focus": ClearFocusCommand,
}


def generate_commands(roots: List[Node], seed: int, count: int) -> List[BaseCommand]:
    """Generate a deterministic stream of *count* commands over *roots*."""
    rng = DeterministicRNG(seed).fork("commands")
    ids = all_ids(roots)
    unknown = (max(ids) if ids else 0) + 1
    commands: List[BaseCommand] = []

    for _ in range(count):
        action = rng.rand_choice(_ACTIONS)
        if action in _BULK_COMMANDS:
            commands.append(_BULK_COMMANDS[action]())
            continue
        # roughly one in twenty node commands misses the forest entirely
        node_id = unknown if not ids or rng.chance(5) else rng.rand_choice(ids)
        commands.append(_NODE_COMMANDS[action](node_id=node_id))

    return commands
