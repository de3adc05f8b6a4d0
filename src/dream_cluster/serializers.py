"""Serializers: convert clustering results to JSON for renderers."""

from __future__ import annotations

import json
from typing import Any

from .layout.dendrogram_layout import DendrogramSpec
from .transform.cluster import DendrogramNode
from .transform.pipeline import AxisResult, PipelineResult


def _default(obj: Any) -> Any:
    # numpy scalars and object-array IDs
    if hasattr(obj, "item"):
        return obj.item()
    return str(obj)


def serialize_dendrogram(root: DendrogramNode | None) -> str:
    """Serialize a merge tree as nested JSON (``null`` for no tree)."""
    return json.dumps(root.to_dict() if root is not None else None)


def serialize_layout(layout: DendrogramSpec) -> str:
    """Serialize dendrogram lines as a JSON string."""
    return json.dumps(layout.to_dict())


def serialize_axis(axis: AxisResult) -> str:
    """Serialize one axis: order, ordered IDs, tree and layout."""
    return json.dumps(axis.to_dict(), default=_default)


def serialize_result(result: PipelineResult, **extra: Any) -> str:
    """Serialize both axes (plus any extra top-level keys) as a JSON string."""
    return json.dumps({**result.to_dict(), **extra}, default=_default)
