"""Encoding tiers of the compact document and their detection."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from glyphmetrics.core.exceptions import (
    LegacyFormatError,
    MalformedCompactDocument,
    MissingTupletTable,
    MissingValueTable,
)


class Tier(str, Enum):
    """Decode strategy of a compact document."""

    LEGACY = "legacy"
    VALUE_INDEXED = "value-indexed"
    TUPLET = "tuplet"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _first_glyph_entry(glyphs: Any) -> Any:
    if not isinstance(glyphs, list):
        raise MalformedCompactDocument("Compact document field 'g' must be a list.")
    for entry in glyphs:
        if entry is not None:
            return entry
    return None


def detect_tier(compact: Mapping[str, Any]) -> Tier:
    """Pick the decode strategy from the fields present in ``compact``.

    Array-shaped glyph entries decode directly (``legacy``) unless a value
    lookup table is present, in which case each element is a ``v`` index.
    Integer glyph entries require both the tuplet and the value lookup table.
    """
    if "c" in compact:
        raise LegacyFormatError(
            "Legacy minified format detected: the 'c' character order field is no "
            "longer supported, rebuild the asset."
        )
    if "g" not in compact:
        raise MalformedCompactDocument("Compact document is missing the 'g' field.")

    has_values = compact.get("v") is not None
    has_tuplets = compact.get("t") is not None
    entry = _first_glyph_entry(compact["g"])

    # A 'v' field always selects index decoding; decode_value_indexed refuses
    # raw scalars instead of reading them as indices.
    if entry is None or isinstance(entry, list):
        return Tier.VALUE_INDEXED if has_values else Tier.LEGACY

    if not _is_number(entry) or int(entry) != entry:
        raise MalformedCompactDocument(
            f"Glyph entries must be 5-element arrays or integers, got {entry!r}."
        )

    if has_tuplets:
        if not has_values:
            raise MissingValueTable(
                "Missing value lookup table ('v') required to resolve tuplet indices."
            )
        return Tier.TUPLET
    if not has_values:
        raise MissingValueTable(
            "Missing value lookup table ('v') and tuplet lookup table ('t') for "
            "integer glyph indices."
        )
    raise MissingTupletTable(
        "Missing tuplet lookup table ('t') for integer glyph indices."
    )


__all__ = ["Tier", "detect_tier"]
