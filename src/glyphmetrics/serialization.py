"""JSON text form of compact documents."""

from __future__ import annotations

from collections.abc import Mapping
import json
from typing import Any

from glyphmetrics.charset import CHARACTER_SET, CharacterSet
from glyphmetrics.core.exceptions import MalformedCompactDocument


REQUIRED_FIELDS = ("k", "b", "g", "s")
KNOWN_FIELDS = frozenset({"k", "b", "v", "g", "t", "s", "c"})


def dumps_compact(compact: Mapping[str, Any]) -> str:
    """Serialise a compact document without insignificant whitespace."""
    return json.dumps(compact, ensure_ascii=False, separators=(",", ":"), allow_nan=False)


def validate_compact(
    payload: Any, *, order: CharacterSet = CHARACTER_SET
) -> dict[str, Any]:
    """Check the structural shape of a compact document and return it as a dict."""
    if not isinstance(payload, Mapping):
        raise MalformedCompactDocument("Compact document must be a JSON object.")
    missing = [name for name in REQUIRED_FIELDS if name not in payload]
    if missing:
        raise MalformedCompactDocument(
            f"Compact document is missing fields: {', '.join(missing)}"
        )
    unknown = sorted(set(payload) - KNOWN_FIELDS)
    if unknown:
        raise MalformedCompactDocument(
            f"Compact document has unexpected fields: {', '.join(unknown)}"
        )
    if not isinstance(payload["k"], Mapping) or not all(
        isinstance(row, Mapping) for row in payload["k"].values()
    ):
        raise MalformedCompactDocument("Field 'k' must map keys to objects.")
    if not isinstance(payload["b"], Mapping):
        raise MalformedCompactDocument("Field 'b' must be an object.")
    glyphs = payload["g"]
    if not isinstance(glyphs, list) or len(glyphs) != len(order):
        raise MalformedCompactDocument(
            f"Field 'g' must be a list of {len(order)} entries."
        )
    for name in ("v", "t"):
        if name in payload and not isinstance(payload[name], list):
            raise MalformedCompactDocument(f"Field {name!r} must be a list.")
    spacing = payload["s"]
    if spacing is not None and (isinstance(spacing, bool) or not isinstance(spacing, (int, float))):
        raise MalformedCompactDocument("Field 's' must be a number or null.")
    return dict(payload)


def loads_compact(text: str, *, order: CharacterSet = CHARACTER_SET) -> dict[str, Any]:
    """Parse and validate the JSON text of a compact document."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedCompactDocument(f"Compact document is not valid JSON: {exc}") from exc
    return validate_compact(payload, order=order)


__all__ = ["dumps_compact", "loads_compact", "validate_compact"]
