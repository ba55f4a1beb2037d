"""Field picking utilities for shaping Sentry API responses.

Sentry payloads are large. Tools accept a comma-separated ``fields`` string
and return only those top-level keys, for a single object or for each
object of a list.
"""

from collections.abc import Iterable, Mapping
from typing import Any


def parse_field_spec(fields: Any) -> tuple[str, ...]:
    """Parse a comma-separated field specification.

    Args:
        fields: The raw specification, e.g. ``"id, title,,culprit"``.

    Returns:
        The trimmed, non-empty key names in first-seen order. An empty tuple
        when ``fields`` is not a string or names no keys.
    """
    if not fields or not isinstance(fields, str):
        return ()

    keys: dict[str, None] = {}
    for raw in fields.split(","):
        key = raw.strip()
        if key:
            keys.setdefault(key, None)
    return tuple(keys)


def prune(item: Mapping[str, Any], keys: Iterable[str]) -> dict[str, Any]:
    """Return a new dict holding only the entries of ``item`` named in ``keys``.

    Keys absent from ``item`` are skipped. Source key order is preserved.
    """
    wanted = set(keys)
    return {key: value for key, value in item.items() if key in wanted}


def select_fields(data: Any, fields: str | None) -> Any:
    """Apply field picking to a JSON value.

    Args:
        data: A decoded JSON value, usually an object or a list of objects.
        fields: Comma-separated keys to keep. ``None``, an empty string or a
            string holding only separators leaves ``data`` untouched.

    Returns:
        ``data`` itself when there is nothing to select, otherwise a reduced
        copy with the same shape as ``data``. Scalars and ``None`` are
        returned as-is, and so are list items that are not mappings.
    """
    keys = parse_field_spec(fields)
    if not keys:
        return data

    if isinstance(data, list):
        return [
            prune(item, keys) if isinstance(item, Mapping) else item
            for item in data
        ]
    if isinstance(data, Mapping):
        return prune(data, keys)

    return data
