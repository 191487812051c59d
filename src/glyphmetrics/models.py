"""In-memory metrics document handled by the codec.

The wire names (``actualBoundingBoxLeft``, ``kerningTable``...) mirror the
browser ``TextMetrics`` vocabulary used by the capture pipeline; the Python
attributes use snake case.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import math
from typing import Any

from glyphmetrics.core.exceptions import InvalidMetricsRecord


KerningTable = dict[str, dict[str, float]]

GLYPH_FIELDS = (
    ("width", "width"),
    ("actual_bounding_box_left", "actualBoundingBoxLeft"),
    ("actual_bounding_box_right", "actualBoundingBoxRight"),
    ("actual_bounding_box_ascent", "actualBoundingBoxAscent"),
    ("actual_bounding_box_descent", "actualBoundingBoxDescent"),
)

BASE_FIELDS = (
    ("font_bounding_box_ascent", "fontBoundingBoxAscent", "fba"),
    ("font_bounding_box_descent", "fontBoundingBoxDescent", "fbd"),
    ("hanging_baseline", "hangingBaseline", "hb"),
    ("alphabetic_baseline", "alphabeticBaseline", "ab"),
    ("ideographic_baseline", "ideographicBaseline", "ib"),
)

# Optional font-wide scalar, written to ``b`` only when captured.
OPTIONAL_BASE_FIELDS = (("pixel_density", "pixelDensity", "pd"),)

# Browser fields that duplicate a base field.
DERIVED_FIELDS = (
    ("emHeightAscent", "font_bounding_box_ascent"),
    ("emHeightDescent", "font_bounding_box_descent"),
)


def is_metric_value(value: Any) -> bool:
    """Return whether ``value`` is a finite real number (booleans excluded)."""
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


@dataclass(frozen=True, slots=True)
class BaseMetrics:
    """Baseline scalars shared by every character of a font."""

    font_bounding_box_ascent: float
    font_bounding_box_descent: float
    hanging_baseline: float
    alphabetic_baseline: float
    ideographic_baseline: float
    pixel_density: float | None = None

    @classmethod
    def from_compact(cls, data: Mapping[str, Any]) -> BaseMetrics:
        """Create base metrics from the short ``b`` field names."""
        try:
            required = {attr: data[short] for attr, _, short in BASE_FIELDS}
        except KeyError as exc:
            raise KeyError(f"Base metrics are missing the {exc.args[0]!r} field") from None
        optional = {attr: data.get(short) for attr, _, short in OPTIONAL_BASE_FIELDS}
        return cls(**required, **optional)

    def to_compact(self) -> dict[str, float]:
        payload = {short: getattr(self, attr) for attr, _, short in BASE_FIELDS}
        for attr, _, short in OPTIONAL_BASE_FIELDS:
            if getattr(self, attr) is not None:
                payload[short] = getattr(self, attr)
        return payload


@dataclass(frozen=True, slots=True)
class CharacterMetrics:
    """Measured metrics of one character, shaped like a ``TextMetrics``."""

    width: float
    actual_bounding_box_left: float
    actual_bounding_box_right: float
    actual_bounding_box_ascent: float
    actual_bounding_box_descent: float
    font_bounding_box_ascent: float
    font_bounding_box_descent: float
    hanging_baseline: float
    alphabetic_baseline: float
    ideographic_baseline: float
    pixel_density: float | None = None

    @property
    def em_height_ascent(self) -> float:
        return self.font_bounding_box_ascent

    @property
    def em_height_descent(self) -> float:
        return self.font_bounding_box_descent

    @property
    def glyph_values(self) -> tuple[float, float, float, float, float]:
        """Return the five per-character scalars in wire order."""
        return (
            self.width,
            self.actual_bounding_box_left,
            self.actual_bounding_box_right,
            self.actual_bounding_box_ascent,
            self.actual_bounding_box_descent,
        )

    @property
    def base(self) -> BaseMetrics:
        shared = [*BASE_FIELDS, *OPTIONAL_BASE_FIELDS]
        return BaseMetrics(**{attr: getattr(self, attr) for attr, _, _ in shared})

    @classmethod
    def from_parts(cls, values: tuple[float, ...] | list[float], base: BaseMetrics) -> CharacterMetrics:
        """Combine five glyph scalars with the shared base metrics."""
        if len(values) != len(GLYPH_FIELDS):
            raise ValueError(
                f"Expected {len(GLYPH_FIELDS)} glyph values, got {len(values)}: {values!r}"
            )
        glyph = {attr: value for (attr, _), value in zip(GLYPH_FIELDS, values)}
        shared = {
            attr: getattr(base, attr) for attr, _, _ in [*BASE_FIELDS, *OPTIONAL_BASE_FIELDS]
        }
        return cls(**glyph, **shared)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CharacterMetrics:
        """Create a record from camel-case ``TextMetrics`` field names.

        Fields the codec cannot carry are rejected rather than dropped, and the
        ``emHeight*`` duplicates must agree with the font bounding box.
        """
        if not isinstance(data, Mapping):
            raise InvalidMetricsRecord(
                f"Character metrics must be an object, got {type(data).__name__}."
            )
        names = list(GLYPH_FIELDS)
        names.extend((attr, wire) for attr, wire, _ in BASE_FIELDS)
        missing = [wire for _, wire in names if wire not in data]
        if missing:
            raise KeyError(f"Character metrics are missing fields: {', '.join(missing)}")

        optional = {attr: wire for attr, wire, _ in OPTIONAL_BASE_FIELDS}
        known = {wire for _, wire in names} | set(optional.values())
        known.update(wire for wire, _ in DERIVED_FIELDS)
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise InvalidMetricsRecord(
                f"Character metrics carry unsupported fields: {', '.join(unknown)}"
            )

        record = cls(
            **{attr: data[wire] for attr, wire in names},
            **{attr: data.get(wire) for attr, wire in optional.items()},
        )
        for wire, attr in DERIVED_FIELDS:
            if wire in data and data[wire] != getattr(record, attr):
                raise InvalidMetricsRecord(
                    f"Character metrics field {wire} ({data[wire]!r}) differs from "
                    f"{attr} ({getattr(record, attr)!r})."
                )
        return record

    def invalid_fields(self) -> list[str]:
        """Return the wire names of fields that do not hold a finite number."""
        names = [*GLYPH_FIELDS, *((attr, wire) for attr, wire, _ in BASE_FIELDS)]
        invalid = [wire for attr, wire in names if not is_metric_value(getattr(self, attr))]
        for attr, wire, _ in OPTIONAL_BASE_FIELDS:
            value = getattr(self, attr)
            if value is not None and not is_metric_value(value):
                invalid.append(wire)
        return invalid

    def to_mapping(self) -> dict[str, float]:
        payload = {wire: getattr(self, attr) for attr, wire in GLYPH_FIELDS}
        payload.update({wire: getattr(self, attr) for attr, wire, _ in BASE_FIELDS})
        payload["emHeightAscent"] = self.em_height_ascent
        payload["emHeightDescent"] = self.em_height_descent
        for attr, wire, _ in OPTIONAL_BASE_FIELDS:
            if getattr(self, attr) is not None:
                payload[wire] = getattr(self, attr)
        return payload


def prune_kerning_table(table: Mapping[str, Mapping[str, float]]) -> KerningTable:
    """Drop zero adjustments and the rows they leave empty."""
    pruned: KerningTable = {}
    for left, row in table.items():
        kept = {right: value for right, value in row.items() if value != 0}
        if kept:
            pruned[left] = kept
    return pruned


@dataclass(slots=True)
class FontMetricsDocument:
    """Verbose metrics of a single font configuration."""

    character_metrics: dict[str, CharacterMetrics]
    kerning_table: KerningTable = field(default_factory=dict)
    space_advancement_override: float | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> FontMetricsDocument:
        """Create a document from the capture pipeline's mapping."""
        raw_metrics = data.get("characterMetrics") or {}
        raw_kerning = data.get("kerningTable") or {}
        if not isinstance(raw_metrics, Mapping):
            raise InvalidMetricsRecord("characterMetrics must map characters to records.")
        if not isinstance(raw_kerning, Mapping) or not all(
            isinstance(row, Mapping) for row in raw_kerning.values()
        ):
            raise InvalidMetricsRecord("kerningTable must map characters to objects.")
        return cls(
            character_metrics={
                char: record
                if isinstance(record, CharacterMetrics)
                else CharacterMetrics.from_mapping(record)
                for char, record in raw_metrics.items()
            },
            kerning_table={left: dict(row) for left, row in raw_kerning.items()},
            space_advancement_override=data.get("spaceAdvancementOverrideForSmallSizesInPx"),
        )

    def to_mapping(self) -> dict[str, Any]:
        return {
            "kerningTable": {left: dict(row) for left, row in self.kerning_table.items()},
            "characterMetrics": {
                char: record.to_mapping() for char, record in self.character_metrics.items()
            },
            "spaceAdvancementOverrideForSmallSizesInPx": self.space_advancement_override,
        }

    def normalized(self) -> FontMetricsDocument:
        """Return a copy whose kerning table holds only non-zero adjustments."""
        return FontMetricsDocument(
            character_metrics=dict(self.character_metrics),
            kerning_table=prune_kerning_table(self.kerning_table),
            space_advancement_override=self.space_advancement_override,
        )


def coerce_document(document: FontMetricsDocument | Mapping[str, Any]) -> FontMetricsDocument:
    if isinstance(document, FontMetricsDocument):
        return document
    if not isinstance(document, Mapping):
        raise InvalidMetricsRecord(
            f"Metrics document must be an object, got {type(document).__name__}."
        )
    return FontMetricsDocument.from_mapping(document)


__all__ = [
    "BASE_FIELDS",
    "DERIVED_FIELDS",
    "GLYPH_FIELDS",
    "OPTIONAL_BASE_FIELDS",
    "BaseMetrics",
    "CharacterMetrics",
    "FontMetricsDocument",
    "KerningTable",
    "coerce_document",
    "is_metric_value",
    "prune_kerning_table",
]
