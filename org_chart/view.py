"""
Org Chart View Projection v1.0

Composes the filtered forest, the collapse set and the drill-narrowed
children into the tree a renderer paints. The projection never modifies
engine state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from .domain_types import Node
from .layout import use_grid

if TYPE_CHECKING:
    from .engine import OrgChartEngine


@dataclass
class ViewNode:
    """One card of the rendered chart."""

    id: int
    name: str
    role: Optional[str] = None
    avatar_url: Optional[str] = None
    descendant_count: int = 0
    has_children: bool = False    # in the filtered forest, before drill
    collapsed: bool = False
    grid: bool = False
    children: List["ViewNode"] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role,
            "avatarUrl": self.avatar_url,
            "descendantCount": self.descendant_count,
            "hasChildren": self.has_children,
            "collapsed": self.collapsed,
            "grid": self.grid,
            "children": [c.to_dict() for c in self.children],
        }


@dataclass
class OrgChartView:
    roots: List[ViewNode] = field(default_factory=list)
    drill_path: List[int] = field(default_factory=list)
    collapsed_ids: List[int] = field(default_factory=list)
    descendant_counts: Dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "roots": [r.to_dict() for r in self.roots],
            "drillPath": list(self.drill_path),
            "collapsedIds": list(self.collapsed_ids),
            # JSON object keys are strings
            "descendantCounts": {str(k): v for k, v in sorted(self.descendant_counts.items())},
        }


def build_view(engine: "OrgChartEngine") -> OrgChartView:
    counts = engine.descendant_counts
    supervisor = engine.policy.supervisor
    threshold = engine.config.supervisor_grid_threshold

    def _project(node: Node) -> ViewNode:
        visible = engine.visible_children(node)
        return ViewNode(
            id=node.id,
            name=node.name,
            role=node.role,
            avatar_url=node.avatar_url,
            descendant_count=counts.get(node.id, 0),
            has_children=node.has_children,
            collapsed=engine.is_collapsed(node.id),
            grid=use_grid(supervisor(node), len(visible), threshold),
            children=[_project(c) for c in visible],
        )

    return OrgChartView(
        roots=[_project(r) for r in engine.drilled_roots],
        drill_path=engine.drill_path,
        collapsed_ids=sorted(engine.collapse_store.effective(engine.filtered_forest)),
        descendant_counts=counts,
    )
