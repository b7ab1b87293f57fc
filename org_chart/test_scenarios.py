"""
Org Chart Engine v1.0 — Engine Scenario Tests

End-to-end scenarios through OrgChartEngine:

  1. Filter + drill + auto-collapse walk-through
  2. First non-empty load collapses coordinators once
  3. auto_collapse_coordinators=False leaves the set empty
  4. Refresh keeps the valid drill prefix and inert stale collapse ids
  5. Expand miss is reported, state untouched
  6. Toggle expands collapsed nodes, collapses the rest
  7. collapse_all / expand_all clear the drill path
  8. apply_command accepts dicts and reports newly collapsed ids
  9. replay is deterministic
 10. View projection honours collapse + drill
 11. Diagnostics
 12. Raising hide predicate leaves the engine unchanged
 13. Raising supervisor predicate leaves expand/toggle unapplied

Run:  py -3 -m org_chart.test_scenarios
"""

from __future__ import annotations

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from org_chart.commands import CollapseCommand, ExpandCommand, ToggleCommand
from org_chart.config import OrgChartConfig
from org_chart.domain_types import Node
from org_chart.engine import OrgChartEngine
from org_chart.roles import RolePolicy


def _scenario_forest() -> list:
    return [
        {"id": 1, "name": "CEO", "role": "Diretor", "children": [
            {"id": 2, "name": "Ana", "role": "Coordenador", "children": [
                {"id": 3, "name": "Bruno", "role": "Supervisor", "children": [
                    {"id": 4, "name": "Carla", "role": "Técnico"},
                    {"id": 5, "name": "Duda", "role": "Analista"},
                ]},
            ]},
        ]},
    ]


def _team_forest() -> list:
    """Gerente with a coordinator (2 supervisors) and a wide supervisor row."""
    return [
        Node(1, "Marta", "Gerente Regional", children=[
            Node(2, "Rui", "Coordenador", children=[
                Node(3, "Lia", "Supervisor", children=[Node(4, "T1", "Técnico")]),
                Node(5, "Caio", "Supervisor", children=[Node(6, "T2", "Técnico")]),
            ]),
            Node(7, "Nina", "Supervisora", children=[
                Node(8, "T3", "Técnico"),
                Node(9, "T4", "Técnico"),
                Node(10, "T5", "Técnico"),
                Node(11, "T6", "Técnico"),
                Node(12, "Bia", "Analista de RH"),
            ]),
        ]),
    ]


def _header(title: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}")


def test_01_filter_drill_autocollapse() -> None:
    _header("Test 01 — Filter + drill + auto-collapse")
    engine = OrgChartEngine()
    engine.load_forest(_scenario_forest())

    root = engine.filtered_forest[0]
    assert [c.id for c in root.children[0].children[0].children] == [4]
    assert engine.descendant_counts == {1: 3, 2: 2, 3: 1, 4: 0}
    assert engine.collapsed_ids == frozenset({2})   # initial coordinator collapse

    engine.collapse_all()
    assert engine.collapsed_ids == frozenset({1, 2, 3})
    assert engine.drill_path == []

    assert engine.expand(2) == [1, 2]
    assert engine.drill_path == [1, 2]
    assert engine.collapsed_ids == frozenset({1, 3})
    assert engine.selected_child_map == {1: 2}

    engine.collapse(2)
    assert engine.drill_path == [1]
    assert 2 in engine.collapsed_ids
    print("[PASS]")


def test_02_initial_collapse_runs_once() -> None:
    _header("Test 02 — Initial coordinator collapse")
    engine = OrgChartEngine()
    engine.load_forest([])
    assert engine.collapsed_ids == frozenset()

    engine.load_forest(_team_forest())
    assert engine.collapsed_ids == frozenset({2})

    engine.expand_all()
    engine.load_forest(_team_forest())
    assert engine.collapsed_ids == frozenset()

    engine.reset()
    engine.load_forest(_team_forest())
    assert engine.collapsed_ids == frozenset({2})
    print("[PASS]")


def test_03_auto_collapse_disabled() -> None:
    _header("Test 03 — auto_collapse_coordinators=False")
    engine = OrgChartEngine(OrgChartConfig(auto_collapse_coordinators=False))
    engine.load_forest(_team_forest())
    assert engine.collapsed_ids == frozenset()
    print("[PASS]")


def test_04_refresh_retains_user_state() -> None:
    _header("Test 04 — Refresh")
    engine = OrgChartEngine()
    engine.load_forest(_team_forest())
    engine.expand(3)
    assert engine.drill_path == [1, 2, 3]
    engine.collapse(4)

    # supervisor 3 leaves; 4 is gone with it
    refreshed = _team_forest()
    refreshed[0].children[0].children.pop(0)
    diff = engine.load_forest(refreshed)

    assert diff["removed"] == [3, 4]
    assert engine.drill_path == [1, 2]
    assert 4 in engine.collapsed_ids
    view = engine.view()
    assert 4 not in view.collapsed_ids
    assert engine.get_diagnostics()["stale_collapsed_ids"] == [4]
    print("[PASS]")


def test_05_expand_miss() -> None:
    _header("Test 05 — Expand miss")
    engine = OrgChartEngine()
    engine.load_forest(_team_forest())
    engine.expand(5)
    before_path = engine.drill_path
    before_collapsed = engine.collapsed_ids

    result = engine.apply_command(ExpandCommand(node_id=12))   # hidden analyst
    assert result.applied is False
    assert "not in filtered forest" in result.reason
    assert engine.drill_path == before_path
    assert engine.collapsed_ids == before_collapsed
    print("[PASS]")


def test_06_toggle() -> None:
    _header("Test 06 — Toggle")
    engine = OrgChartEngine()
    engine.load_forest(_team_forest())
    assert 2 in engine.collapsed_ids

    result = engine.apply_command(ToggleCommand(node_id=2))
    assert result.applied
    assert result.drill_path == (1, 2)
    assert result.newly_collapsed == (3, 5)
    assert 2 not in engine.collapsed_ids

    result = engine.apply_command(ToggleCommand(node_id=2))
    assert 2 in engine.collapsed_ids
    assert result.drill_path == (1,)
    assert result.newly_collapsed == (2,)

    # toggling a stale collapsed id is a miss
    engine.collapse(99)
    result = engine.apply_command(ToggleCommand(node_id=99))
    assert result.applied is False
    assert 99 in engine.collapsed_ids
    print("[PASS]")


def test_07_bulk_commands_clear_drill() -> None:
    _header("Test 07 — collapse_all / expand_all / clear_focus")
    engine = OrgChartEngine()
    engine.load_forest(_team_forest())

    engine.expand(7)
    engine.collapse_all()
    assert engine.drill_path == []
    assert engine.collapsed_ids == frozenset({1, 2, 3, 5, 7})

    engine.expand(7)
    engine.expand_all()
    assert engine.drill_path == []
    assert engine.collapsed_ids == frozenset()

    engine.expand(3)
    engine.clear_focus()
    assert engine.drill_path == []
    print("[PASS]")


def test_08_apply_command_dicts() -> None:
    _header("Test 08 — apply_command with dicts")
    engine = OrgChartEngine()
    engine.load_forest(_team_forest())
    results = engine.apply_sequence([
        {"command_type": "collapse_all"},
        {"command_type": "expand", "node_id": 1},
        {"command_type": "collapse", "node_id": 1},
    ])
    assert [r.command_type for r in results] == ["collapse_all", "expand", "collapse"]
    assert results[0].newly_collapsed == (1, 3, 5, 7)   # 2 was already collapsed
    assert results[1].drill_path == (1,)
    assert results[2].drill_path == ()
    assert results[2].newly_collapsed == (1,)

    try:
        engine.apply_command({"command_type": "zoom", "node_id": 1})
        raise AssertionError("unknown command accepted")
    except ValueError:
        pass
    print("[PASS]")


def test_09_replay_is_deterministic() -> None:
    _header("Test 09 — Replay")
    commands = [
        ExpandCommand(node_id=2),
        ExpandCommand(node_id=5),
        CollapseCommand(node_id=2),
        {"command_type": "toggle", "node_id": 7},
    ]
    a = OrgChartEngine()
    b = OrgChartEngine()
    results_a = a.replay(_team_forest(), commands)
    b.load_forest(_scenario_forest())
    b.expand(3)
    results_b = b.replay(_team_forest(), commands)

    assert results_a == results_b
    assert a.view().to_dict() == b.view().to_dict()
    print("[PASS]")


def test_10_view_projection() -> None:
    _header("Test 10 — View projection")
    engine = OrgChartEngine()
    engine.load_forest(_team_forest())

    view = engine.view()
    root = view.roots[0]
    coord, sup = root.children
    assert root.descendant_count == 10
    assert coord.collapsed and coord.children == [] and coord.has_children
    assert sup.grid and [c.id for c in sup.children] == [8, 9, 10, 11]

    engine.expand(2)
    engine.expand(3)
    view = engine.view()
    root = view.roots[0]
    assert [c.id for c in root.children] == [2]
    assert [c.id for c in root.children[0].children] == [3]
    assert view.drill_path == [1, 2, 3]

    d = view.to_dict()
    assert d["drillPath"] == [1, 2, 3]
    assert d["descendantCounts"]["1"] == 10
    assert d["roots"][0]["children"][0]["hasChildren"] is True
    print("[PASS]")


def test_11_diagnostics() -> None:
    _header("Test 11 — Diagnostics")
    engine = OrgChartEngine()
    engine.load_forest(_team_forest())
    diag = engine.get_diagnostics()
    assert diag["raw_node_count"] == 12
    assert diag["visible_node_count"] == 11
    assert diag["hidden_node_count"] == 1
    assert diag["max_depth"] == 4
    assert diag["collapsed_count"] == 1
    assert diag["wide_rows"] == []
    assert diag["warnings"] == []

    engine.load_forest([Node(1, "Só", "Analista")])
    diag = engine.get_diagnostics()
    assert diag["visible_node_count"] == 0
    assert any("hidden" in w for w in diag["warnings"])
    print("[PASS]")


def test_12_raising_predicate_keeps_state() -> None:
    _header("Test 12 — Raising hide predicate")
    calls = {"n": 0}

    def flaky(node: Node) -> bool:
        calls["n"] += 1
        if calls["n"] > 5:   # succeeds for the 5-node scenario only
            raise RuntimeError("directory lookup failed")
        return False

    engine = OrgChartEngine(policy=RolePolicy(hide=flaky))
    engine.load_forest(_scenario_forest())
    engine.expand(3)
    before = engine.filtered_forest
    try:
        engine.load_forest(_team_forest())
        raise AssertionError("predicate exception was swallowed")
    except RuntimeError:
        pass
    assert engine.filtered_forest is before
    assert engine.descendant_counts == {1: 4, 2: 3, 3: 2, 4: 0, 5: 0}
    assert engine.drill_path == [1, 2, 3]
    print("[PASS]")


def test_13_raising_supervisor_predicate_keeps_state() -> None:
    _header("Test 13 — Raising supervisor predicate during expand")

    def boom(node: Node) -> bool:
        raise RuntimeError(f"cannot classify {node.id}")

    engine = OrgChartEngine(policy=RolePolicy(supervisor=boom))
    engine.load_forest(_scenario_forest())
    engine.collapse_all()
    assert engine.collapsed_ids == frozenset({1, 2, 3})

    for command in (ExpandCommand(node_id=2), ToggleCommand(node_id=2)):
        try:
            engine.apply_command(command)
            raise AssertionError("predicate exception was swallowed")
        except RuntimeError:
            pass
        assert engine.drill_path == []
        assert engine.collapsed_ids == frozenset({1, 2, 3})

    # non-coordinators never consult the supervisor predicate
    assert engine.expand(3) == [1, 2, 3]
    assert engine.collapsed_ids == frozenset({1, 2})
    print("[PASS]")


def main() -> None:
    tests = [
        test_01_filter_drill_autocollapse,
        test_02_initial_collapse_runs_once,
        test_03_auto_collapse_disabled,
        test_04_refresh_retains_user_state,
        test_05_expand_miss,
        test_06_toggle,
        test_07_bulk_commands_clear_drill,
        test_08_apply_command_dicts,
        test_09_replay_is_deterministic,
        test_10_view_projection,
        test_11_diagnostics,
        test_12_raising_predicate_keeps_state,
        test_13_raising_supervisor_predicate_keeps_state,
    ]
    failed = 0
    for fn in tests:
        try:
            fn()
        except Exception as e:
            print(f"\n[ERROR] {fn.__name__}: {e}")
            import traceback
            traceback.print_exc()
            failed += 1

    print(f"\n{'='*60}")
    print(f"  RESULTS: {len(tests) - failed}/{len(tests)} tests passed")
    print(f"{'='*60}")
    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
