"""
Org Chart Engine — Configuration

Role keywords and layout thresholds are configuration, not engine
internals. Resolution order: explicit kwargs > ORGCHART_* environment
variables (optionally loaded from a .env file) > defaults.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Literal, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from .constants import (
    COMPACT_MARGIN_PX,
    COMPACT_MAX_CHILDREN,
    COORDINATOR_ROLE_KEYWORDS,
    HIDDEN_ROLE_KEYWORDS,
    SUPERVISOR_GRID_THRESHOLD,
    SUPERVISOR_ROLE_KEYWORDS,
    WRAPPER_PADDING_PX,
)
from .roles import RolePolicy

ENV_PREFIX = "ORGCHART_"

# Environment variables holding comma-separated keyword lists.
_LIST_FIELDS = ("hidden_role_keywords", "coordinator_role_keywords", "supervisor_role_keywords")


class OrgChartConfig(BaseModel):
    hidden_role_keywords: Tuple[str, ...] = HIDDEN_ROLE_KEYWORDS
    coordinator_role_keywords: Tuple[str, ...] = COORDINATOR_ROLE_KEYWORDS
    supervisor_role_keywords: Tuple[str, ...] = SUPERVISOR_ROLE_KEYWORDS
    compact_margin_px: int = COMPACT_MARGIN_PX
    wrapper_padding_px: int = WRAPPER_PADDING_PX
    compact_max_children: int = COMPACT_MAX_CHILDREN
    supervisor_grid_threshold: int = SUPERVISOR_GRID_THRESHOLD
    auto_collapse_coordinators: bool = True
    log_level: Literal["debug", "info", "warning", "error"] = "info"

    def role_policy(self) -> RolePolicy:
        return RolePolicy.from_keywords(
            hide=self.hidden_role_keywords,
            coordinator=self.coordinator_role_keywords,
            supervisor=self.supervisor_role_keywords,
        )


def load_config(env_file: Optional[str] = None, **overrides: Any) -> OrgChartConfig:
    """Build an OrgChartConfig from the environment. Raises ValueError when invalid."""
    if env_file and os.path.exists(env_file):
        load_dotenv(env_file)

    raw: Dict[str, Any] = {}
    for name in OrgChartConfig.model_fields:
        value = os.environ.get(ENV_PREFIX + name.upper())
        if value is None:
            continue
        if name in _LIST_FIELDS:
            raw[name] = tuple(v.strip() for v in value.split(",") if v.strip())
        elif name == "log_level":
            raw[name] = value.strip().lower()
        else:
            raw[name] = value
    raw.update(overrides)

    try:
        return OrgChartConfig(**raw)
    except ValidationError as e:
        raise ValueError(f"Invalid org chart config: {e}") from e
