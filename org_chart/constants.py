"""
Org Chart Engine — Default Constants

All magic numbers and keyword lists live here as module-level defaults.
Runtime overrides come from OrgChartConfig (see config.py).
"""

from typing import Tuple

# --- Drill ---
# Parent id used to narrow the top-level roots. Never a real directory id.
VIRTUAL_ROOT_ID: int = 0

# --- Role keywords (case-insensitive substrings) ---
HIDDEN_ROLE_KEYWORDS: Tuple[str, ...] = ("analist", "admin")
COORDINATOR_ROLE_KEYWORDS: Tuple[str, ...] = ("coorden", "coordinator")
SUPERVISOR_ROLE_KEYWORDS: Tuple[str, ...] = ("supervis",)

# --- Row layout (pixels) ---
COMPACT_MARGIN_PX: int = 24
WRAPPER_PADDING_PX: int = 60

# Rows wider than this are never compacted.
COMPACT_MAX_CHILDREN: int = 4

# Supervisor rows with more visible children than this render as a grid.
SUPERVISOR_GRID_THRESHOLD: int = 3
GRID_COLUMNS: int = 3
