"""Turn a verbose metrics document into its compact, embeddable form."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from glyphmetrics.charset import CHARACTER_SET, CharacterSet
from glyphmetrics.codec.base_metrics import extract_base_metrics
from glyphmetrics.codec.expander import expand
from glyphmetrics.codec.kerning import compress_kerning
from glyphmetrics.codec.tiers import Tier
from glyphmetrics.codec.tuplets import TupletTable, to_tuplet
from glyphmetrics.codec.values import DEFAULT_PRECISION, ValueTable
from glyphmetrics.core.exceptions import (
    BuildIntegrityError,
    InvalidMetricsRecord,
    MetricsCodecError,
    UnsupportedCharacterError,
)
from glyphmetrics.models import FontMetricsDocument, coerce_document, is_metric_value


logger = logging.getLogger(__name__)

CompactDocument = dict[str, Any]

MAX_REPORTED_DIFFERENCES = 5


def _check_characters(document: FontMetricsDocument, order: CharacterSet) -> None:
    unknown = sorted(char for char in document.character_metrics if char not in order)
    if unknown:
        raise UnsupportedCharacterError(
            f"Characters outside the character set: {', '.join(repr(c) for c in unknown)}"
        )


def _check_values(document: FontMetricsDocument) -> None:
    for char, record in document.character_metrics.items():
        invalid = record.invalid_fields()
        if invalid:
            raise InvalidMetricsRecord(
                f"Metrics for {char!r} hold non-numeric values in: {', '.join(invalid)}"
            )
    for left, row in document.kerning_table.items():
        for right, value in row.items():
            if not is_metric_value(value):
                raise InvalidMetricsRecord(
                    f"Kerning adjustment {left!r} -> {right!r} is not a number: {value!r}"
                )
    override = document.space_advancement_override
    if override is not None and not is_metric_value(override):
        raise InvalidMetricsRecord(f"Space advancement override is not a number: {override!r}")


def minify(
    document: FontMetricsDocument | Mapping[str, Any],
    *,
    tier: Tier = Tier.TUPLET,
    order: CharacterSet = CHARACTER_SET,
    precision: int = DEFAULT_PRECISION,
) -> CompactDocument:
    """Build the compact document for one font configuration.

    Glyph entries are positional: ``g[i]`` describes ``order.at(i)``, and
    characters missing from the document are written as ``None``.
    """
    document = coerce_document(document)
    tier = Tier(tier)
    _check_characters(document, order)
    _check_values(document)
    base = extract_base_metrics(document.character_metrics, order)

    records = [
        document.character_metrics[char].glyph_values
        if char in document.character_metrics
        else None
        for char in order
    ]
    present = [record for record in records if record is not None]

    compact: CompactDocument = {
        "k": compress_kerning(document.kerning_table, order),
        "b": base.to_compact(),
    }

    if tier is Tier.LEGACY:
        compact["g"] = [None if record is None else list(record) for record in records]
    else:
        values = ValueTable.build(
            (value for record in present for value in record), precision=precision
        )
        compact["v"] = values.values
        if tier is Tier.VALUE_INDEXED:
            compact["g"] = [
                None if record is None else list(to_tuplet(record, values))
                for record in records
            ]
        else:
            tuplets = TupletTable.build(present, values)
            compact["g"] = [
                None if record is None else tuplets.index_of(to_tuplet(record, values))
                for record in records
            ]
            compact["t"] = tuplets.to_lists()
        logger.debug(
            "Pooled %d scalars into %d values for %d characters.",
            len(present) * 5,
            len(values),
            len(present),
        )

    compact["s"] = document.space_advancement_override
    return compact


def _differences(expected: FontMetricsDocument, actual: FontMetricsDocument) -> list[str]:
    problems: list[str] = []
    characters = sorted(
        set(expected.character_metrics) | set(actual.character_metrics), key=ord
    )
    for char in characters:
        if expected.character_metrics.get(char) != actual.character_metrics.get(char):
            problems.append(f"metrics for {char!r}")
    lefts = sorted(set(expected.kerning_table) | set(actual.kerning_table))
    for left in lefts:
        if expected.kerning_table.get(left) != actual.kerning_table.get(left):
            problems.append(f"kerning row {left!r}")
    if expected.space_advancement_override != actual.space_advancement_override:
        problems.append("space advancement override")
    return problems


def minify_with_verification(
    document: FontMetricsDocument | Mapping[str, Any],
    *,
    tier: Tier = Tier.TUPLET,
    order: CharacterSet = CHARACTER_SET,
    precision: int = DEFAULT_PRECISION,
) -> CompactDocument:
    """Minify and prove that the result expands back to the source document.

    Zero kerning adjustments are equivalent to absent ones and are ignored by
    the comparison.
    """
    document = coerce_document(document)
    compact = minify(document, tier=tier, order=order, precision=precision)
    try:
        restored = expand(compact, order=order)
    except MetricsCodecError as exc:
        raise BuildIntegrityError(f"Compact document failed to expand: {exc}") from exc

    expected = document.normalized()
    if restored != expected:
        problems = _differences(expected, restored)
        shown = ", ".join(problems[:MAX_REPORTED_DIFFERENCES])
        more = len(problems) - MAX_REPORTED_DIFFERENCES
        suffix = f" and {more} more" if more > 0 else ""
        raise BuildIntegrityError(
            f"Round-trip verification failed: {shown or 'documents differ'}{suffix}."
        )
    return compact


__all__ = ["CompactDocument", "minify", "minify_with_verification"]
