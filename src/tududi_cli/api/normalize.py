# src/tududi_cli/api/normalize.py

"""
Response normalizer.

Collection endpoints answer in one of three envelopes:
- a bare JSON array,
- {"data": [...]},
- {"<kind>": [...]} where kind is "tasks", "projects" or "tags".

Decoding tries them in that order and returns the first match. An unknown
envelope is an explicit `Unrecognized` value, never an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

CollectionKind = Literal["tasks", "projects", "tags"]


@dataclass(frozen=True, slots=True)
class Extracted:
    items: list[dict[str, Any]]
    shape: str  # "list", "data" or the kind key


@dataclass(frozen=True, slots=True)
class Unrecognized:
    reason: str


NormalizeResult = Extracted | Unrecognized


def _objects(seq: list[Any]) -> list[dict[str, Any]]:
    return [item for item in seq if isinstance(item, dict)]


def normalize(raw: Any, kind: CollectionKind) -> NormalizeResult:
    """Extract the entity sequence from `raw`, preserving server order."""
    if isinstance(raw, list):
        return Extracted(items=_objects(raw), shape="list")

    if not isinstance(raw, dict):
        return Unrecognized(reason=f"expected array or object, got {type(raw).__name__}")

    for key in ("data", kind):
        seq = raw.get(key)
        if isinstance(seq, list):
            return Extracted(items=_objects(seq), shape=key)

    keys = ", ".join(sorted(str(k) for k in raw)) or "none"
    return Unrecognized(reason=f"no 'data' or '{kind}' array (keys: {keys})")


def _has_id_and_name(item: dict[str, Any], id_key: str) -> bool:
    return item.get(id_key) is not None and bool(item.get("name"))


def normalize_projects(raw: Any) -> NormalizeResult:
    """Like `normalize`, but drops projects without an id or a name."""
    result = normalize(raw, "projects")
    if isinstance(result, Unrecognized):
        return result
    return Extracted(
        items=[p for p in result.items if _has_id_and_name(p, "id")],
        shape=result.shape,
    )


def normalize_tags(raw: Any) -> NormalizeResult:
    """Like `normalize`, but drops tags without a name or any identifier."""
    result = normalize(raw, "tags")
    if isinstance(result, Unrecognized):
        return result
    return Extracted(
        items=[t for t in result.items if _has_id_and_name(t, "uid") or _has_id_and_name(t, "id")],
        shape=result.shape,
    )
