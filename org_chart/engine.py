"""
Org Chart Engine — Engine v1.0

Top-level orchestrator. Delegates filtering and counting to tree.py,
collapse state to collapse.py, focus to drill.py, and reports via
view.py / diagnostics.py.

State ownership:
  - raw forest, filtered forest, descendant index: derived, replaced
    wholesale on every load_forest
  - collapse set, drill path: user state, survives refreshes
    (stale collapse ids stay inert, the drill path keeps its valid prefix)

Synchronous and single-threaded. Each command is one atomic transition.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Union

from .codec import coerce_forest
from .collapse import CollapseStore
from .commands import BaseCommand, reconstruct_command
from .config import OrgChartConfig
from .diagnostics import compute_diagnostics
from .domain_types import (
    CommandResult,
    DescendantCountIndex,
    DrillPath,
    Forest,
    Node,
    SelectedChildMap,
)
from .drift import compare_forests, is_unchanged
from .drill import DrillNavigator
from .roles import RolePolicy
from .tree import count_descendants, filter_tree, iter_preorder
from .view import OrgChartView, build_view

logger = logging.getLogger(__name__)

ForestInput = Union[Forest, List[dict]]


class OrgChartEngine:
    """
    Stateful engine that wraps the pure tree layer.

    The first non-empty forest collapses every coordinator that has
    reports, so the initial chart shows one level beneath them.
    """

    def __init__(
        self,
        config: OrgChartConfig | None = None,
        policy: RolePolicy | None = None,
    ) -> None:
        self._config = config or OrgChartConfig()
        self._policy = policy or self._config.role_policy()
        self.reset()

    def reset(self) -> None:
        """Drop every forest and all user state."""
        self._raw: List[Node] = []
        self._filtered: List[Node] = []
        self._counts: DescendantCountIndex = {}
        self._collapse = CollapseStore()
        self._drill = DrillNavigator()
        self._did_init_collapse: bool = False

    # -- State access -------------------------------------------------------

    @property
    def config(self) -> OrgChartConfig:
        return self._config

    @property
    def policy(self) -> RolePolicy:
        return self._policy

    @property
    def raw_forest(self) -> List[Node]:
        return self._raw

    @property
    def filtered_forest(self) -> List[Node]:
        return self._filtered

    @property
    def descendant_counts(self) -> DescendantCountIndex:
        return dict(self._counts)

    @property
    def collapse_store(self) -> CollapseStore:
        return self._collapse

    @property
    def collapsed_ids(self) -> frozenset:
        return self._collapse.ids

    @property
    def drill(self) -> DrillNavigator:
        return self._drill

    @property
    def drill_path(self) -> DrillPath:
        return self._drill.path

    @property
    def selected_child_map(self) -> SelectedChildMap:
        return self._drill.selected_child_map()

    # -- Forest refresh -----------------------------------------------------

    def load_forest(self, raw: ForestInput) -> dict:
        """
        Replace the raw forest and recompute everything derived from it.

        Returns the drift between the previous and new filtered forests.
        Nothing is assigned until filtering succeeds, so a raising hide
        predicate leaves the engine as it was.
        """
        roots = coerce_forest(raw)
        filtered = filter_tree(roots, self._policy.hide)
        counts = count_descendants(filtered)
        diff = compare_forests(self._filtered, filtered)

        self._raw = roots
        self._filtered = filtered
        self._counts = counts

        dropped = self._drill.retain_valid(filtered)
        if dropped:
            logger.info("drill path truncated after refresh, dropped %s", dropped)

        if filtered and not self._did_init_collapse:
            self._did_init_collapse = True
            if self._config.auto_collapse_coordinators:
                initial = self._initial_collapse(filtered)
                if initial:
                    self._collapse.replace_all(initial)

        logger.info(
            "forest loaded: %d raw, %d visible, %d root(s)%s",
            sum(1 for _ in iter_preorder(roots)),
            len(counts),
            len(filtered),
            "" if is_unchanged(diff) else
            f" (+{len(diff['added'])} -{len(diff['removed'])} ~{len(diff['moved'])})",
        )
        return diff

    def _initial_collapse(self, roots: List[Node]) -> List[int]:
        return [
            n.id for n in iter_preorder(roots)
            if n.children and self._policy.coordinator(n)
        ]

    # -- Commands -----------------------------------------------------------

    def expand(self, node_id: int) -> Optional[DrillPath]:
        """
        Open *node_id*: un-collapse it, focus the drill path on it and,
        for a coordinator, collapse the supervisors beneath it.

        Returns the new drill path, or None (state untouched) when the
        id is not in the filtered forest.
        """
        path = self._drill.expand(
            self._filtered,
            node_id,
            self._collapse,
            self._policy.coordinator,
            self._policy.supervisor,
        )
        if path is None:
            logger.warning("expand ignored: node %s not in filtered forest", node_id)
        return path

    def collapse(self, node_id: int) -> None:
        """Hide the node's children and truncate the drill path at it."""
        self._collapse.add(node_id)
        self._drill.collapse(node_id)

    def toggle(self, node_id: int) -> Optional[DrillPath]:
        if node_id in self._collapse:
            return self.expand(node_id)
        self.collapse(node_id)
        return self._drill.path

    def collapse_all(self) -> None:
        self._collapse.collapse_all(self._filtered)
        self._drill.clear()

    def expand_all(self) -> None:
        self._collapse.expand_all()
        self._drill.clear()

    def clear_focus(self) -> None:
        self._drill.clear()

    def apply_command(self, command: Union[BaseCommand, dict]) -> CommandResult:
        """Dispatch a command object (or its dict form) to the matching transition."""
        if isinstance(command, dict):
            command = reconstruct_command(command)

        before = self._collapse.ids
        ctype = command.command_type
        applied = True
        reason = ""

        if ctype == "expand":
            applied = self.expand(command.node_id) is not None
        elif ctype == "collapse":
            self.collapse(command.node_id)
        elif ctype == "toggle":
            was_collapsed = command.node_id in self._collapse
            path = self.toggle(command.node_id)
            applied = not was_collapsed or path is not None
        elif ctype == "collapse_all":
            self.collapse_all()
        elif ctype == "expand_all":
            self.expand_all()
        elif ctype == "clear_focus":
            self.clear_focus()
        else:
            raise ValueError(f"Unknown command type: {ctype}")

        if not applied:
            reason = f"node {command.node_id} not in filtered forest"

        logger.debug(
            "command %s(%s) -> path=%s collapsed=%d",
            ctype, command.node_id, self._drill.path, len(self._collapse),
        )
        return CommandResult(
            command_type=ctype,
            node_id=command.node_id,
            applied=applied,
            reason=reason,
            drill_path=tuple(self._drill.path),
            newly_collapsed=tuple(sorted(self._collapse.ids - before)),
        )

    def apply_sequence(
        self, commands: Iterable[Union[BaseCommand, dict]],
    ) -> List[CommandResult]:
        return [self.apply_command(c) for c in commands]

    def replay(
        self,
        raw: ForestInput,
        commands: Sequence[Union[BaseCommand, dict]] = (),
    ) -> List[CommandResult]:
        """
        Reconstruction from scratch: reset, load *raw*, then apply every
        command in order.
        """
        self.reset()
        self.load_forest(raw)
        return self.apply_sequence(commands)

    # -- Read model ---------------------------------------------------------

    def is_collapsed(self, node_id: int) -> bool:
        return node_id in self._collapse

    def visible_children(self, node: Node) -> List[Node]:
        """Children a renderer should paint under *node*."""
        if node.id in self._collapse:
            return []
        return self._drill.apply_drill(node.children, node.id)

    @property
    def drilled_roots(self) -> List[Node]:
        return self._drill.drill_roots(self._filtered)

    def view(self) -> OrgChartView:
        return build_view(self)

    def get_diagnostics(self) -> dict:
        return compute_diagnostics(self)
