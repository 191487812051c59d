"""Custom exception hierarchy for the metrics codec."""

from __future__ import annotations


class MetricsCodecError(ValueError):
    """Base exception for metrics minification and expansion failures."""


class MetricsBuildError(MetricsCodecError):
    """Raised while producing a compact document from a metrics document."""


class MetricsLoadError(MetricsCodecError):
    """Raised while expanding a compact document."""


class InconsistentBaseMetrics(MetricsBuildError):
    """Raised when characters disagree on the font-wide baseline scalars."""


class BuildIntegrityError(MetricsBuildError):
    """Raised when a compact document does not expand back to its source."""


class UnsupportedCharacterError(MetricsBuildError):
    """Raised when a metrics record targets a character outside the alphabet."""


class EmptyMetricsDocument(MetricsBuildError):
    """Raised when a metrics document carries no character records."""


class InvalidMetricsRecord(MetricsBuildError):
    """Raised when a metrics record has unknown fields or non-numeric values."""


class MissingValueTable(MetricsLoadError):
    """Raised when glyph entries reference a value lookup table that is absent."""


class MissingTupletTable(MetricsLoadError):
    """Raised when glyph entries reference a tuplet lookup table that is absent."""


class InvalidRangeKey(MetricsLoadError):
    """Raised when a kerning range key cannot be resolved against the alphabet."""


class LegacyFormatError(MetricsLoadError):
    """Raised for compact documents written by a retired minifier."""


class MalformedCompactDocument(MetricsLoadError):
    """Raised when a compact document does not have the expected shape."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "BuildIntegrityError",
    "EmptyMetricsDocument",
    "InconsistentBaseMetrics",
    "InvalidMetricsRecord",
    "InvalidRangeKey",
    "LegacyFormatError",
    "MalformedCompactDocument",
    "MetricsBuildError",
    "MetricsCodecError",
    "MetricsLoadError",
    "MissingTupletTable",
    "MissingValueTable",
    "UnsupportedCharacterError",
    "exception_hint",
    "exception_messages",
]
