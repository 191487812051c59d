"""Build compact documents for many font configurations at once.

Each font is minified independently. A build error aborts that font only:
its key is reported in `BuildReport.failures` and no compact document is
produced for it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from glyphmetrics.charset import CHARACTER_SET, CharacterSet
from glyphmetrics.codec.minifier import CompactDocument, minify, minify_with_verification
from glyphmetrics.core.config import CodecConfig
from glyphmetrics.core.diagnostics import DiagnosticEmitter, NullEmitter
from glyphmetrics.core.exceptions import MetricsBuildError, exception_hint
from glyphmetrics.logging import MetricsPipelineLogger
from glyphmetrics.models import FontMetricsDocument, coerce_document
from glyphmetrics.serialization import dumps_compact


@dataclass(slots=True)
class BuildReport:
    """Outcome of a batch build."""

    documents: dict[str, CompactDocument] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

    def serialized(self) -> dict[str, str]:
        """Return the JSON text of every successfully built document."""
        return {key: dumps_compact(compact) for key, compact in self.documents.items()}


def build_compact_document(
    document: FontMetricsDocument | Mapping[str, Any],
    config: CodecConfig | None = None,
    *,
    order: CharacterSet = CHARACTER_SET,
) -> CompactDocument:
    """Minify one document using the settings carried by ``config``."""
    config = config or CodecConfig()
    builder = minify_with_verification if config.verify else minify
    return builder(
        coerce_document(document),
        tier=config.tier,
        order=order,
        precision=config.precision,
    )


def build_compact_documents(
    documents: Mapping[str, FontMetricsDocument | Mapping[str, Any]],
    config: CodecConfig | None = None,
    *,
    order: CharacterSet = CHARACTER_SET,
    logger: MetricsPipelineLogger | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> BuildReport:
    """Minify every document, keyed by font configuration, in sorted key order."""
    config = config or CodecConfig()
    logger = logger or MetricsPipelineLogger()
    emitter = emitter or NullEmitter()
    report = BuildReport()

    keys = sorted(documents)
    with logger.progress("Minifying font metrics", total=len(keys)) as advance:
        for key in keys:
            try:
                compact = build_compact_document(documents[key], config, order=order)
            except (MetricsBuildError, KeyError) as exc:
                reason = exception_hint(exc) or exc.__class__.__name__
                report.failures[key] = reason
                logger.warning("Unable to build metrics for %s: %s", key, reason)
                emitter.event("font_failed", {"key": key, "reason": reason})
            else:
                report.documents[key] = compact
                logger.debug("Built metrics for %s.", key)
                emitter.event(
                    "font_minified",
                    {
                        "key": key,
                        "tier": config.tier.value,
                        "values": len(compact["v"]) if "v" in compact else None,
                        "tuplets": len(compact["t"]) if "t" in compact else None,
                    },
                )
            advance()

    logger.info(
        "Built %d of %d font metrics documents.", len(report.documents), len(keys)
    )
    return report


__all__ = ["BuildReport", "build_compact_document", "build_compact_documents"]
