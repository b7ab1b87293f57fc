# file: backend/main.py
"""
FastAPI Backend — Org Chart API v1.

Stateless: every request builds a fresh engine, loads the posted forest
and replays the posted command stream. No in-memory state between
requests, no fetching, no persistence.

Endpoints:
  GET  /api/health       — liveness
  POST /api/org/view     — forest + commands → view projection
  POST /api/org/compact  — one row-layout decision (compaction hysteresis)
  GET  /api/org/sample   — deterministic generated forest
"""
from __future__ import annotations

import dataclasses
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

env_path = os.path.join(os.path.dirname(__file__), ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

# Add project root to path for engine imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from org_chart.codec import ForestDecodeError, decode_forest, forest_hash
from org_chart.commands import reconstruct_command
from org_chart.config import load_config
from org_chart.engine import OrgChartEngine
from org_chart.invariants import InvariantViolationError, validate_forest
from org_chart.layout import decide_row_layout

from generator.forest_builder import GeneratorInvariantError, build_forest
from generator.forest_spec import ForestSpec

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

CONFIG = load_config()
FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:5173")

logging.basicConfig(
    level=CONFIG.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="OrgChart API",
    version="1.0.0",
    description="Hierarchy engine behind the organization chart — stateless replay API",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        FRONTEND_URL,
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------


class ViewRequest(BaseModel):
    forest: List[Dict[str, Any]]
    commands: List[Dict[str, Any]] = []
    check: bool = False


class CompactRequest(BaseModel):
    prev_compact: bool = False
    row_width: float
    wrapper_width: float
    margin: Optional[float] = None
    is_collapsed: bool = False
    child_count: int = 0
    visible_child_count: Optional[int] = None
    is_supervisor_row: bool = False


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/api/health")
def health():
    return {"status": "ok", "version": "1.0.0"}


@app.post("/api/org/view")
def org_view(req: ViewRequest):
    """
    Replay *commands* over *forest* through a fresh engine.

    400 — undecodable forest or unknown/malformed command
    422 — check=true and the forest breaks a structural invariant
    """
    try:
        roots = decode_forest(req.forest)
    except ForestDecodeError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    if req.check:
        try:
            validate_forest(roots)
        except InvariantViolationError as exc:
            raise HTTPException(status_code=422, detail=str(exc))

    commands = []
    for i, cmd in enumerate(req.commands):
        try:
            commands.append(reconstruct_command(cmd))
        except ValueError as exc:
            raise HTTPException(
                status_code=400, detail=f"Invalid command at index {i}: {exc}",
            )

    engine = OrgChartEngine(CONFIG)
    results = engine.replay(roots, commands)
    logger.info(
        "view replayed: %d root(s), %d command(s), drill=%s",
        len(roots), len(commands), engine.drill_path,
    )

    return {
        "view": engine.view().to_dict(),
        "diagnostics": engine.get_diagnostics(),
        "forest_hash": forest_hash(engine.filtered_forest),
        "command_results": [dataclasses.asdict(r) for r in results],
    }


@app.post("/api/org/compact")
def org_compact(req: CompactRequest):
    margin = CONFIG.compact_margin_px if req.margin is None else req.margin
    visible = req.child_count if req.visible_child_count is None else req.visible_child_count
    layout = decide_row_layout(
        prev_compact=req.prev_compact,
        is_collapsed=req.is_collapsed,
        child_count=req.child_count,
        visible_child_count=visible,
        is_supervisor_row=req.is_supervisor_row,
        row_width=req.row_width,
        wrapper_width=req.wrapper_width,
        margin=margin,
        padding=CONFIG.wrapper_padding_px,
        max_children=CONFIG.compact_max_children,
        grid_threshold=CONFIG.supervisor_grid_threshold,
    )
    return {
        "compact": layout.compact,
        "grid": layout.grid,
        "css_classes": layout.css_classes,
    }


@app.get("/api/org/sample")
def org_sample(
    seed: int = 42,
    roots: int = 1,
    max_children: int = 4,
    hidden_percent: int = 15,
    max_nodes: int = 200,
):
    try:
        spec = ForestSpec(
            root_count=roots,
            max_children=max_children,
            hidden_percent=hidden_percent,
            max_nodes=max_nodes,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    try:
        forest = build_forest(spec, seed)
    except GeneratorInvariantError as exc:
        raise HTTPException(status_code=500, detail=str(exc))

    return {
        "metadata": {"seed": seed, "spec": spec.to_dict()},
        "forest": [r.to_dict() for r in forest],
    }
