"""Multi-tier codec between verbose and compact font metrics documents."""

from glyphmetrics.codec.base_metrics import extract_base_metrics
from glyphmetrics.codec.expander import expand
from glyphmetrics.codec.kerning import compress_kerning, decompress_kerning, parse_range_key
from glyphmetrics.codec.minifier import CompactDocument, minify, minify_with_verification
from glyphmetrics.codec.tiers import Tier, detect_tier
from glyphmetrics.codec.tuplets import TupletTable
from glyphmetrics.codec.values import ValueEntry, ValueTable


__all__ = [
    "CompactDocument",
    "Tier",
    "TupletTable",
    "ValueEntry",
    "ValueTable",
    "compress_kerning",
    "decompress_kerning",
    "detect_tier",
    "expand",
    "extract_base_metrics",
    "minify",
    "minify_with_verification",
    "parse_range_key",
]
