"""
JSON Forest Exporter.

Exports a generated forest + metadata to a JSON file in the directory
service wire shape.
"""

from __future__ import annotations

import json
from typing import List

from org_chart.domain_types import Node

from .forest_spec import ForestSpec


def export_forest(
    roots: List[Node],
    path: str,
    spec: ForestSpec,
    seed: int,
) -> None:
    """
    Write forest + metadata to a JSON file.

    Output format:
    {
        "metadata": {"seed": int, "spec": {...}},
        "forest": [node.to_dict(), ...]
    }
    """
    doc = {
        "metadata": {
            "seed": seed,
            "spec": spec.to_dict(),
        },
        "forest": [r.to_dict() for r in roots],
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(doc, f, ensure_ascii=False, indent=2)
