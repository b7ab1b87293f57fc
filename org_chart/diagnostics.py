"""
Org Chart Engine — Diagnostics

Compute a diagnostic snapshot of the current engine state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .tree import iter_preorder, max_depth

if TYPE_CHECKING:
    from .engine import OrgChartEngine


def compute_diagnostics(engine: "OrgChartEngine") -> dict:
    """Return a diagnostic dict summarising the current view health."""
    raw_count = sum(1 for _ in iter_preorder(engine.raw_forest))
    visible_count = len(engine.descendant_counts)
    stale = sorted(engine.collapse_store.stale(engine.filtered_forest))
    max_children = engine.config.compact_max_children

    wide_rows = sorted(
        n.id for n in iter_preorder(engine.filtered_forest)
        if len(n.children) > max_children
    )

    warnings: list[str] = []

    if stale:
        warnings.append(
            f"{len(stale)} stale collapsed id(s) ignored: "
            f"{', '.join(str(s) for s in stale)}"
        )
    if wide_rows:
        warnings.append(
            f"{len(wide_rows)} row(s) wider than {max_children} children "
            f"are never compacted"
        )
    if raw_count and not visible_count:
        warnings.append("Every node is hidden by the role filter")

    return {
        "raw_node_count": raw_count,
        "visible_node_count": visible_count,
        "hidden_node_count": raw_count - visible_count,
        "root_count": len(engine.filtered_forest),
        "max_depth": max_depth(engine.filtered_forest),
        "collapsed_count": len(engine.collapse_store) - len(stale),
        "stale_collapsed_ids": stale,
        "drill_depth": len(engine.drill_path),
        "wide_rows": wide_rows,
        "warnings": warnings,
    }
