"""
Org Chart Engine — Layout Compactor

Hysteresis decision for whether a row of children switches to its
compact arrangement. Pixel widths are measured by the renderer and
passed in; nothing here touches the logical model.

    overflow = row_width - available_width

    non-compact -> compact      when overflow >  margin
    compact     -> non-compact  when overflow <= -margin

The 2 * margin band damps oscillation when measurements jitter by a few
pixels between render passes.
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    COMPACT_MARGIN_PX,
    COMPACT_MAX_CHILDREN,
    GRID_COLUMNS,
    SUPERVISOR_GRID_THRESHOLD,
    WRAPPER_PADDING_PX,
)


def next_compact(
    prev_compact: bool,
    row_width: float,
    available_width: float,
    margin: float = COMPACT_MARGIN_PX,
) -> bool:
    """Pure and total. Degenerate inputs are filtered by the caller."""
    overflow = row_width - available_width
    if prev_compact:
        return overflow > -margin
    return overflow > margin


def available_width(
    wrapper_width: float, padding: float = WRAPPER_PADDING_PX,
) -> float:
    return wrapper_width - padding


def should_measure(
    is_collapsed: bool,
    child_count: int,
    max_children: int = COMPACT_MAX_CHILDREN,
) -> bool:
    """
    Caller gate. Collapsed rows and rows with more than *max_children*
    children are never compacted and are reset to non-compact instead.
    """
    if is_collapsed:
        return False
    return child_count <= max_children


def use_grid(
    is_supervisor_row: bool,
    visible_child_count: int,
    threshold: int = SUPERVISOR_GRID_THRESHOLD,
) -> bool:
    """Supervisor rows with many visible reports render as a grid."""
    return is_supervisor_row and visible_child_count > threshold


@dataclass(frozen=True)
class RowLayout:
    """Arrangement of one row of children."""

    compact: bool = False
    grid: bool = False

    @property
    def css_classes(self) -> str:
        classes = []
        if self.compact and not self.grid:
            classes.append("row-compact")
        if self.grid:
            classes.append(f"grid-children-{GRID_COLUMNS}")
        return " ".join(classes)


def decide_row_layout(
    prev_compact: bool,
    is_collapsed: bool,
    child_count: int,
    visible_child_count: int,
    is_supervisor_row: bool,
    row_width: float,
    wrapper_width: float,
    margin: float = COMPACT_MARGIN_PX,
    padding: float = WRAPPER_PADDING_PX,
    max_children: int = COMPACT_MAX_CHILDREN,
    grid_threshold: int = SUPERVISOR_GRID_THRESHOLD,
) -> RowLayout:
    """
    One measurement pass for a row: gate, then hysteresis, then the
    supervisor grid rule. The returned compact flag is the hysteresis state
    to feed back next pass; a grid row never gets the compact class.
    """
    grid = use_grid(is_supervisor_row, visible_child_count, grid_threshold)
    if not should_measure(is_collapsed, child_count, max_children):
        return RowLayout(compact=False, grid=grid)
    compact = next_compact(
        prev_compact, row_width, available_width(wrapper_width, padding), margin,
    )
    return RowLayout(compact=compact, grid=grid)
