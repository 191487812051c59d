"""Rebuild a metrics document from its compact form."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
import logging
from typing import Any

from glyphmetrics.charset import CHARACTER_SET, CharacterSet
from glyphmetrics.codec.kerning import decompress_kerning
from glyphmetrics.codec.tiers import Tier, detect_tier
from glyphmetrics.codec.tuplets import TUPLET_SIZE, TupletTable
from glyphmetrics.codec.values import ValueTable
from glyphmetrics.core.exceptions import MalformedCompactDocument
from glyphmetrics.models import (
    BaseMetrics,
    CharacterMetrics,
    FontMetricsDocument,
    is_metric_value,
)


logger = logging.getLogger(__name__)

GlyphValues = tuple[float, ...] | None


def _check_record(record: Any, position: int) -> Sequence[Any]:
    if not isinstance(record, list) or len(record) != TUPLET_SIZE:
        raise MalformedCompactDocument(
            f"Glyph entry {position} must be a {TUPLET_SIZE}-element array, got {record!r}."
        )
    return record


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def decode_legacy(compact: Mapping[str, Any]) -> list[GlyphValues]:
    """Glyph entries already hold the five raw scalars."""
    decoded: list[GlyphValues] = []
    for position, entry in enumerate(compact["g"]):
        if entry is None:
            decoded.append(None)
            continue
        record = _check_record(entry, position)
        if not all(is_metric_value(value) for value in record):
            raise MalformedCompactDocument(
                f"Glyph entry {position} must hold five numbers, got {record!r}."
            )
        decoded.append(tuple(record))
    return decoded


def _value_table(compact: Mapping[str, Any]) -> ValueTable:
    try:
        return ValueTable.from_values(compact["v"])
    except (TypeError, ValueError) as exc:
        raise MalformedCompactDocument(f"Invalid value lookup table: {exc}") from exc


def decode_value_indexed(compact: Mapping[str, Any]) -> list[GlyphValues]:
    """Each of the five elements of a glyph entry indexes the value table."""
    values = _value_table(compact)
    decoded: list[GlyphValues] = []
    for position, entry in enumerate(compact["g"]):
        if entry is None:
            decoded.append(None)
            continue
        record = _check_record(entry, position)
        if not all(_is_index(index) for index in record):
            raise MalformedCompactDocument(
                f"Glyph entry {position} must hold value-table indices, got {record!r}; "
                "raw scalars cannot be combined with a 'v' field."
            )
        try:
            decoded.append(tuple(values.value(index) for index in record))
        except (IndexError, TypeError) as exc:
            raise MalformedCompactDocument(f"Glyph entry {position}: {exc}") from exc
    return decoded


def decode_tuplets(compact: Mapping[str, Any]) -> list[GlyphValues]:
    """Glyph entries index the tuplet table, whose tuplets index the value table."""
    values = _value_table(compact)
    try:
        tuplets = TupletTable.from_tuplets(compact["t"])
    except (TypeError, ValueError) as exc:
        raise MalformedCompactDocument(f"Invalid tuplet lookup table: {exc}") from exc
    decoded: list[GlyphValues] = []
    for position, entry in enumerate(compact["g"]):
        if entry is None:
            decoded.append(None)
            continue
        try:
            tuplet = tuplets.tuplet(entry)
            decoded.append(tuple(values.value(index) for index in tuplet))
        except (IndexError, TypeError) as exc:
            raise MalformedCompactDocument(f"Glyph entry {position}: {exc}") from exc
    return decoded


_DECODERS: dict[Tier, Callable[[Mapping[str, Any]], list[GlyphValues]]] = {
    Tier.LEGACY: decode_legacy,
    Tier.VALUE_INDEXED: decode_value_indexed,
    Tier.TUPLET: decode_tuplets,
}


def _base_metrics(compact: Mapping[str, Any]) -> BaseMetrics:
    raw = compact.get("b")
    if not isinstance(raw, Mapping):
        raise MalformedCompactDocument("Compact document field 'b' must be an object.")
    try:
        return BaseMetrics.from_compact(raw)
    except KeyError as exc:
        raise MalformedCompactDocument(str(exc.args[0])) from exc


def _kerning(compact: Mapping[str, Any]) -> Mapping[str, Mapping[str, float]]:
    raw = compact.get("k") or {}
    if not isinstance(raw, Mapping):
        raise MalformedCompactDocument("Compact document field 'k' must be an object.")
    for key, row in raw.items():
        if not isinstance(row, Mapping):
            raise MalformedCompactDocument(
                f"Kerning entry {key!r} must be an object, got {type(row).__name__}."
            )
    return raw


def expand(
    compact: Mapping[str, Any], *, order: CharacterSet = CHARACTER_SET
) -> FontMetricsDocument:
    """Expand a compact document produced by :func:`minify`.

    The decode tier is chosen once from the fields present, then the matching
    decoder resolves every glyph entry against ``order``.
    """
    tier = detect_tier(compact)
    glyphs = compact["g"]
    if len(glyphs) != len(order):
        raise MalformedCompactDocument(
            f"Compact document holds {len(glyphs)} glyph entries, expected {len(order)}."
        )

    base = _base_metrics(compact)
    decoded = _DECODERS[tier](compact)
    character_metrics = {
        char: CharacterMetrics.from_parts(values, base)
        for char, values in zip(order, decoded)
        if values is not None
    }
    kerning = decompress_kerning(_kerning(compact), order)

    logger.debug(
        "Expanded %d characters and %d kerning rows from the %s tier.",
        len(character_metrics),
        len(kerning),
        tier.value,
    )
    return FontMetricsDocument(
        character_metrics=character_metrics,
        kerning_table=kerning,
        space_advancement_override=compact.get("s"),
    )


__all__ = [
    "decode_legacy",
    "decode_tuplets",
    "decode_value_indexed",
    "expand",
]
