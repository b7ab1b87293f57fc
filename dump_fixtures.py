"""Dump deterministic forest + command-stream fixtures as JSON for cross-implementation testing."""
import json
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from generator import ForestSpec, build_forest, generate_commands
from org_chart.codec import encode_forest, forest_hash
from org_chart.engine import OrgChartEngine

COMBOS = [
    (42, 30), (42, 80), (42, 200),
    (99, 30), (99, 80), (99, 200),
    (123, 30), (123, 80), (123, 200),
]

N_COMMANDS = 40


def main():
    results = []

    for seed, max_nodes in COMBOS:
        spec = ForestSpec(root_count=2, hidden_percent=20, max_nodes=max_nodes)
        roots = build_forest(spec, seed)
        commands = generate_commands(roots, seed, N_COMMANDS)

        engine = OrgChartEngine()
        engine.replay(roots, commands)
        view = engine.view()

        results.append({
            "seed": seed,
            "max_nodes": max_nodes,
            "forest": json.loads(encode_forest(roots)),
            "commands": [c.to_dict() for c in commands],
            "expected_filtered_hash": forest_hash(engine.filtered_forest),
            "expected_descendant_counts": view.to_dict()["descendantCounts"],
            "expected_collapsed_ids": sorted(engine.collapsed_ids),
            "expected_drill_path": engine.drill_path,
            "expected_view": view.to_dict(),
        })
        print(
            f"seed={seed}, nodes<={max_nodes}: hash={forest_hash(engine.filtered_forest)[:12]}, "
            f"drill={engine.drill_path}, collapsed={len(engine.collapsed_ids)}"
        )

    out_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "fixtures", "org_chart_fixtures.json")
    os.makedirs(os.path.dirname(out_path), exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(results, f, ensure_ascii=True, separators=(",", ":"))

    print(f"\nDumped {len(results)} fixtures to {out_path}")


if __name__ == "__main__":
    main()
