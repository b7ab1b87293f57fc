"""
Org Chart Engine — Forest Codec v1.0

JSON wire shape (directory service):

    [{"id": 1, "name": "...", "role": "...", "avatarUrl": "...",
      "children": [...]}, ...]

Decoding validates shape and types through pydantic models. It does
NOT enforce structural invariants (unique ids etc.); see invariants.py.
Encoding is canonical: identical forests give byte-identical output.
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError

from .domain_types import Node

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════
# Exception Hierarchy
# ══════════════════════════════════════════════════════════════

class ForestCodecError(Exception):
    """Base exception for all forest codec operations."""


class ForestDecodeError(ForestCodecError):
    """Raised when JSON-shaped input cannot be turned into Nodes."""


class ForestEncodeError(ForestCodecError):
    """Raised when a forest cannot be serialized."""


# ══════════════════════════════════════════════════════════════
# Wire models
# ══════════════════════════════════════════════════════════════

class RawNodeModel(BaseModel):
    """One directory entry as delivered over HTTP."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: StrictInt
    name: str = Field(min_length=1)
    role: Optional[str] = None
    avatar_url: Optional[str] = Field(default=None, alias="avatarUrl")
    children: List["RawNodeModel"] = Field(default_factory=list)

    def to_node(self) -> Node:
        return Node(
            id=self.id,
            name=self.name,
            role=self.role,
            avatar_url=self.avatar_url,
            children=[c.to_node() for c in self.children],
        )


RawNodeModel.model_rebuild()


class RawForestModel(BaseModel):
    roots: List[RawNodeModel]


# ══════════════════════════════════════════════════════════════
# Decoder
# ══════════════════════════════════════════════════════════════

def decode_forest(data: Union[str, bytes, List[Any]]) -> List[Node]:
    """
    Decode a JSON string or an already-parsed list into a forest.

    Raises ForestDecodeError on malformed JSON, a non-list top level or
    any node failing validation.
    """
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise ForestDecodeError(f"Invalid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise ForestDecodeError(
            f"Forest must be a JSON array, got {type(data).__name__}"
        )

    try:
        model = RawForestModel(roots=data)
    except ValidationError as exc:
        raise ForestDecodeError(f"Invalid forest: {exc}") from exc

    logger.debug("decoded forest with %d root(s)", len(model.roots))
    return [r.to_node() for r in model.roots]


def coerce_forest(
    data: Union[Iterable[Node], Iterable[RawNodeModel], Iterable[dict]],
) -> List[Node]:
    """Accept Nodes, wire models or plain dicts, from any iterable."""
    data = list(data)
    if all(isinstance(d, Node) for d in data):
        return data
    if all(isinstance(d, RawNodeModel) for d in data):
        return [d.to_node() for d in data]
    return decode_forest(data)


# ══════════════════════════════════════════════════════════════
# Encoder
# ══════════════════════════════════════════════════════════════

def encode_forest(roots: List[Node]) -> str:
    """Canonical JSON. Sibling order is part of the data and is kept."""
    try:
        return json.dumps(
            [r.to_dict() for r in roots],
            ensure_ascii=False,
            separators=(",", ":"),
            sort_keys=True,
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise ForestEncodeError(f"Failed to encode forest: {exc}") from exc


def forest_hash(roots: List[Node]) -> str:
    """SHA-256 of the canonical encoding. Lowercase hex string."""
    return hashlib.sha256(encode_forest(roots).encode("utf-8")).hexdigest()
