"""
Org Chart Engine — Command Definitions v1.0

Commands are **pure data**: the user intent wired to a UI control.
They contain ZERO transition logic; OrgChartEngine.apply_command
dispatches on command_type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class BaseCommand:
    """Base for all view commands — pure data container."""

    command_type: str = ""
    node_id: Optional[int] = None

    def to_dict(self) -> dict:
        d: dict = {"command_type": self.command_type}
        if self.node_id is not None:
            d["node_id"] = self.node_id
        return d


@dataclass
class ExpandCommand(BaseCommand):
    """Open a node and focus the drill path on it."""

    command_type: str = "expand"


@dataclass
class CollapseCommand(BaseCommand):
    """Close a node; truncates the drill path at it."""

    command_type: str = "collapse"


@dataclass
class ToggleCommand(BaseCommand):
    """Expand when collapsed, otherwise collapse. What a card's caret does."""

    command_type: str = "toggle"


@dataclass
class CollapseAllCommand(BaseCommand):
    command_type: str = "collapse_all"


@dataclass
class ExpandAllCommand(BaseCommand):
    command_type: str = "expand_all"


@dataclass
class ClearFocusCommand(BaseCommand):
    command_type: str = "clear_focus"


_COMMAND_CLASS_MAP = {
    "expand": ExpandCommand,
    "collapse": CollapseCommand,
    "toggle": ToggleCommand,
    "collapse_all": CollapseAllCommand,
    "expand_all": ExpandAllCommand,
    "clear_focus": ClearFocusCommand,
}

# Commands that target a single node.
NODE_COMMANDS = frozenset({"expand", "collapse", "toggle"})


def reconstruct_command(command_dict: dict) -> BaseCommand:
    """
    Build a typed command from a plain dict.

    Raises ValueError for unknown types or a missing/non-integer node_id.
    Extra keys are ignored; node_id is dropped for bulk commands.
    """
    ctype = command_dict.get("command_type")
    cls = _COMMAND_CLASS_MAP.get(ctype)
    if cls is None:
        raise ValueError(
            f"Unknown command_type {ctype!r}. "
            f"Known types: {sorted(_COMMAND_CLASS_MAP)}"
        )
    node_id = command_dict.get("node_id")
    if ctype in NODE_COMMANDS:
        if isinstance(node_id, bool) or not isinstance(node_id, int):
            raise ValueError(
                f"Command {ctype!r} requires an integer node_id, got {node_id!r}"
            )
        return cls(node_id=node_id)
    return cls()
