"""Compact, lossless codec for bitmap-font metrics.

Architecture
: `CHARACTER_SET` fixes the canonical 204-character alphabet. Every positional
  array of a compact document is indexed against it.
: `minify` factors the shared baseline scalars out of each character, pools
  the remaining scalars in a frequency-ranked `ValueTable`, deduplicates whole
  glyph records in a `TupletTable`, and range-compresses the kerning table.
: `expand` detects the encoding `Tier` once and rebuilds the original
  `FontMetricsDocument`. `minify_with_verification` proves the round trip
  before an asset is written.
: `FontMetricsStore` keeps expanded `FontMetrics` per font configuration for
  text measurement, while `build_compact_documents` minifies many fonts with
  per-font failure isolation.
"""

from __future__ import annotations

from glyphmetrics.charset import CHARACTER_SET, CharacterSet
from glyphmetrics.codec import (
    Tier,
    TupletTable,
    ValueTable,
    compress_kerning,
    decompress_kerning,
    detect_tier,
    expand,
    minify,
    minify_with_verification,
)
from glyphmetrics.core.config import CodecConfig, load_codec_config
from glyphmetrics.core.exceptions import (
    BuildIntegrityError,
    InconsistentBaseMetrics,
    InvalidMetricsRecord,
    InvalidRangeKey,
    MetricsBuildError,
    MetricsCodecError,
    MetricsLoadError,
    MissingTupletTable,
    MissingValueTable,
)
from glyphmetrics.models import BaseMetrics, CharacterMetrics, FontMetricsDocument
from glyphmetrics.pipeline import BuildReport, build_compact_document, build_compact_documents
from glyphmetrics.runtime import FontMetrics, FontMetricsStore
from glyphmetrics.serialization import dumps_compact, loads_compact
from glyphmetrics.version import get_version


__version__ = get_version()

__all__ = [
    "CHARACTER_SET",
    "BaseMetrics",
    "BuildIntegrityError",
    "BuildReport",
    "CharacterMetrics",
    "CharacterSet",
    "CodecConfig",
    "FontMetrics",
    "FontMetricsDocument",
    "FontMetricsStore",
    "InconsistentBaseMetrics",
    "InvalidMetricsRecord",
    "InvalidRangeKey",
    "MetricsBuildError",
    "MetricsCodecError",
    "MetricsLoadError",
    "MissingTupletTable",
    "MissingValueTable",
    "Tier",
    "TupletTable",
    "ValueTable",
    "__version__",
    "build_compact_document",
    "build_compact_documents",
    "compress_kerning",
    "decompress_kerning",
    "detect_tier",
    "dumps_compact",
    "expand",
    "get_version",
    "load_codec_config",
    "loads_compact",
    "minify",
    "minify_with_verification",
]
