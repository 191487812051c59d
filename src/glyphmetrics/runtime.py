"""Read-only metrics consumed by text measurement and glyph placement."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from glyphmetrics.charset import CHARACTER_SET, CharacterSet
from glyphmetrics.codec.expander import expand
from glyphmetrics.codec.tiers import detect_tier
from glyphmetrics.core.diagnostics import DiagnosticEmitter, NullEmitter
from glyphmetrics.models import CharacterMetrics, FontMetricsDocument


class FontMetrics:
    """Immutable metrics of one font configuration."""

    __slots__ = ("_character_metrics", "_kerning_table", "_space_advancement_override")

    def __init__(self, document: FontMetricsDocument) -> None:
        self._character_metrics = MappingProxyType(dict(document.character_metrics))
        self._kerning_table = MappingProxyType(
            {left: MappingProxyType(dict(row)) for left, row in document.kerning_table.items()}
        )
        self._space_advancement_override = document.space_advancement_override

    def character_metrics(self, char: str) -> CharacterMetrics | None:
        return self._character_metrics.get(char)

    def kerning_adjustment(self, left: str, right: str) -> float:
        """Return the adjustment between two characters, ``0`` when none is set."""
        if not left or not right:
            return 0
        row = self._kerning_table.get(left)
        if row is None:
            return 0
        return row.get(right, 0)

    def has_glyph(self, char: str) -> bool:
        return char in self._character_metrics

    def available_characters(self) -> list[str]:
        return list(self._character_metrics)

    @property
    def kerning_table(self) -> Mapping[str, Mapping[str, float]]:
        return self._kerning_table

    @property
    def space_advancement_override(self) -> float | None:
        return self._space_advancement_override


class FontMetricsStore:
    """Expanded metrics indexed by an opaque font configuration key."""

    def __init__(
        self,
        *,
        order: CharacterSet = CHARACTER_SET,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.order = order
        self.emitter = emitter or NullEmitter()
        self._fonts: dict[str, FontMetrics] = {}

    def load(self, key: str, compact: Mapping[str, Any]) -> FontMetrics:
        """Expand ``compact`` once and register it under ``key``.

        Load errors propagate unchanged; nothing is registered on failure.
        """
        tier = detect_tier(compact)
        metrics = FontMetrics(expand(compact, order=self.order))
        self._fonts[key] = metrics
        self.emitter.event("font_expanded", {"key": key, "tier": tier.value})
        return metrics

    def get(self, key: str) -> FontMetrics:
        try:
            return self._fonts[key]
        except KeyError:
            raise KeyError(f"No metrics loaded for font {key!r}") from None

    def __contains__(self, key: object) -> bool:
        return key in self._fonts

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._fonts))

    def __len__(self) -> int:
        return len(self._fonts)


__all__ = ["FontMetrics", "FontMetricsStore"]
