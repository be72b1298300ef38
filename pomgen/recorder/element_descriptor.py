"""Expansion of recorded element descriptors into verification maps.

A descriptor is captured when an element is recorded::

    {
        "tagName": {"value": "BUTTON", "show": "ignore"},
        "elementText": {"value": "OK", "show": "must"},
        "checked": {"value": "false", "show": "ignore"},
        "attributes": {
            "class": {"value": "primary", "show": "must"},
        },
    }

Entries flagged ``show == "must"`` are the ones a verify step asserts.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping

from ..core.errors import DataShapeError

MUST_VERIFY = "must"
_SKIPPED_KEYS = {"tagName", "attributes", "parentElem"}


def _entry_value(owner: str, name: str, entry: Any) -> Any:
    if not isinstance(entry, Mapping) or "value" not in entry:
        raise DataShapeError(
            f"Descriptor entry '{name}' of element '{owner}' must be a {{value, show}} map, got {entry!r}"
        )
    return entry


def get_attrs_to_verify(
    descriptor: Any,
    quote: Callable[[Any], str],
    elem_id: str = "",
) -> Dict[str, str]:
    """Return field name -> quoted literal for every entry that must be verified."""
    if not descriptor:
        return {}
    if not isinstance(descriptor, Mapping):
        raise DataShapeError(f"Descriptor of element '{elem_id}' must be a map, got {type(descriptor).__name__}")

    attrs: Dict[str, str] = {}
    for name, entry in descriptor.items():
        if name in _SKIPPED_KEYS:
            continue
        entry = _entry_value(elem_id, name, entry)
        if entry.get("show") == MUST_VERIFY:
            attrs[name] = quote(entry["value"])

    nested = descriptor.get("attributes") or {}
    if not isinstance(nested, Mapping):
        raise DataShapeError(f"Descriptor attributes of element '{elem_id}' must be a map")
    for name, entry in nested.items():
        entry = _entry_value(elem_id, name, entry)
        if entry.get("show") == MUST_VERIFY:
            attrs.setdefault(name, quote(entry["value"]))
    return attrs


def get_tag_name(descriptor: Any) -> str:
    if isinstance(descriptor, Mapping):
        entry = descriptor.get("tagName")
        if isinstance(entry, Mapping):
            return str(entry.get("value") or "")
        if isinstance(entry, str):
            return entry
    return ""
