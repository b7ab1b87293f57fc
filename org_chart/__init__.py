"""
Org Chart Engine v1.0
Deterministic, in-memory hierarchy engine behind the organization chart:
role filtering with child promotion, collapse state, drill navigation,
descendant counting and row-compaction decisions.
"""

from .constants import VIRTUAL_ROOT_ID
from .domain_types import Node, CommandResult
from .roles import (
    RolePolicy, normalize_role, role_matcher,
    should_hide_from_org, is_coordinator, is_supervisor,
)
from .tree import (
    filter_tree,
    count_descendants,
    collect_ids,
    find_path,
    find_node,
    ids_with_children,
    iter_preorder,
)
from .collapse import CollapseStore
from .drill import DrillNavigator, build_selected_child_map
from .layout import (
    RowLayout,
    next_compact,
    available_width,
    should_measure,
    use_grid,
    decide_row_layout,
)
from .commands import (
    BaseCommand,
    ExpandCommand,
    CollapseCommand,
    ToggleCommand,
    CollapseAllCommand,
    ExpandAllCommand,
    ClearFocusCommand,
    reconstruct_command,
)
from .codec import (
    ForestCodecError,
    ForestDecodeError,
    ForestEncodeError,
    decode_forest,
    encode_forest,
    forest_hash,
)
from .config import OrgChartConfig, load_config
from .engine import OrgChartEngine
from .invariants import InvariantViolationError, validate_forest, validate_drill_path
from .view import OrgChartView, ViewNode, build_view
from .diagnostics import compute_diagnostics
from .drift import compare_forests

__all__ = [
    "Node",
    "CommandResult",
    "VIRTUAL_ROOT_ID",
    "RolePolicy",
    "normalize_role",
    "role_matcher",
    "should_hide_from_org",
    "is_coordinator",
    "is_supervisor",
    "filter_tree",
    "count_descendants",
    "collect_ids",
    "find_path",
    "find_node",
    "ids_with_children",
    "iter_preorder",
    "CollapseStore",
    "DrillNavigator",
    "build_selected_child_map",
    "RowLayout",
    "next_compact",
    "available_width",
    "should_measure",
    "use_grid",
    "decide_row_layout",
    "BaseCommand",
    "ExpandCommand",
    "CollapseCommand",
    "ToggleCommand",
    "CollapseAllCommand",
    "ExpandAllCommand",
    "ClearFocusCommand",
    "reconstruct_command",
    "ForestCodecError",
    "ForestDecodeError",
    "ForestEncodeError",
    "decode_forest",
    "encode_forest",
    "forest_hash",
    "OrgChartConfig",
    "load_config",
    "OrgChartEngine",
    "InvariantViolationError",
    "validate_forest",
    "validate_drill_path",
    "OrgChartView",
    "ViewNode",
    "build_view",
    "compute_diagnostics",
    "compare_forests",
]
