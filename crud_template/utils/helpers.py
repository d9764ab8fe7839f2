# ==============================================================================
# HELPER UTILITIES
# ==============================================================================
# Document helpers shared by the repository and the HTTP layer
# ==============================================================================

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Mapping
from uuid import uuid4

from bson import ObjectId


def generate_request_id() -> str:
    """Generate a new correlation id."""
    return str(uuid4())


def build_set_document(
    existing: Mapping[str, Any],
    partial: Mapping[str, Any],
    parent_key: str = "",
    separator: str = ".",
) -> Dict[str, Any]:
    """
    Build a ``$set`` document that deep-merges ``partial`` into ``existing``.

    A key becomes dotted paths only when both the stored and the incoming
    value are non-empty mappings; anything else (null, scalars, lists,
    empty mappings) is written whole at its path. ``_id`` is never set.

    Args:
        existing: Stored document
        partial: Incoming partial document
        parent_key: Path prefix of the current level
        separator: Path separator

    Returns:
        Single level dict keyed by dotted path

    Example:
        >>> build_set_document({"a": {"b": 1}, "c": None}, {"a": {"d": 2}, "c": {"x": 1}})
        {'a.d': 2, 'c': {'x': 1}}
    """
    items: Dict[str, Any] = {}
    for key, value in partial.items():
        if not parent_key and key == "_id":
            continue
        path = f"{parent_key}{separator}{key}" if parent_key else str(key)
        current = existing.get(key)
        if (
            isinstance(value, Mapping) and value
            and isinstance(current, Mapping) and current
        ):
            items.update(build_set_document(current, value, path, separator))
        else:
            items[path] = value
    return items


def build_identifier_filter(value: Any, field_identifier: str) -> Dict[str, Any]:
    """
    Build the lookup filter for one entity.

    A 24-hex string on ``_id`` matches both the ObjectId and the
    literal string, so documents with store-assigned and client-assigned
    ids are both addressable from a URL path.
    """
    if field_identifier == "_id" and isinstance(value, str) and ObjectId.is_valid(value):
        return {"_id": {"$in": [ObjectId(value), value]}}
    return {field_identifier: value}


def serialize_document(value: Any) -> Any:
    """
    Convert a stored document into JSON friendly values.

    ObjectIds become strings and datetimes ISO 8601 strings; nested
    mappings and lists are converted recursively.
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(k): serialize_document(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_document(v) for v in value]
    return value


def identifier_key(value: Any, field_identifier: str) -> Any:
    """
    Comparable form of an identifier value.

    On ``_id`` an ObjectId and its hex string are the same entity, the
    same equivalence ``build_identifier_filter`` applies in lookups.
    """
    if field_identifier == "_id" and isinstance(value, ObjectId):
        return str(value)
    return value
