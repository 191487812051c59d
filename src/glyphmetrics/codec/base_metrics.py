"""Factor the font-wide baseline scalars out of per-character records."""

from __future__ import annotations

from collections.abc import Mapping

from glyphmetrics.charset import CharacterSet
from glyphmetrics.core.exceptions import EmptyMetricsDocument, InconsistentBaseMetrics
from glyphmetrics.models import BASE_FIELDS, OPTIONAL_BASE_FIELDS, BaseMetrics, CharacterMetrics


def _ordered_characters(
    character_metrics: Mapping[str, CharacterMetrics], order: CharacterSet
) -> list[str]:
    known = [char for char in order if char in character_metrics]
    extra = sorted((char for char in character_metrics if char not in order), key=ord)
    return known + extra


def extract_base_metrics(
    character_metrics: Mapping[str, CharacterMetrics], order: CharacterSet
) -> BaseMetrics:
    """Return the baseline scalars shared by every character.

    The first character in canonical order is the reference; every other
    character must carry exactly the same five values, plus the same
    pixel density when one was captured.
    """
    characters = _ordered_characters(character_metrics, order)
    if not characters:
        raise EmptyMetricsDocument("Metrics document has no character records.")

    reference_char = characters[0]
    reference = character_metrics[reference_char].base
    for char in characters[1:]:
        candidate = character_metrics[char].base
        if candidate == reference:
            continue
        diverging = [
            wire
            for attr, wire, _ in [*BASE_FIELDS, *OPTIONAL_BASE_FIELDS]
            if getattr(candidate, attr) != getattr(reference, attr)
        ]
        raise InconsistentBaseMetrics(
            f"Character {char!r} disagrees with {reference_char!r} on "
            f"{', '.join(diverging)}."
        )
    return reference


__all__ = ["extract_base_metrics"]
