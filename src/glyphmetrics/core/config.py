"""Configuration models used by the metrics build pipeline.

CodecConfig

`tier` (`Tier`)
: Encoding tier written by the minifier. `tuplet` (default) deduplicates whole
  glyph records, `value-indexed` only deduplicates scalars, and `legacy` keeps
  raw numbers in every glyph entry.

`precision` (`int`)
: Number of decimals kept when scalar values are pooled into the value lookup
  table. Values must already be quantised to this precision for the round
  trip to be lossless.

`verify` (`bool`)
: Expand every compact document right after building it and abort the font
  when the result differs from the source document.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
import yaml

from glyphmetrics.codec.tiers import Tier
from glyphmetrics.codec.values import DEFAULT_PRECISION


class CodecConfig(BaseModel):
    """Settings applied to every font processed by a build."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tier: Tier = Tier.TUPLET
    precision: int = Field(default=DEFAULT_PRECISION, ge=0, le=10)
    verify: bool = True


class ConfigError(ValueError):
    """Raised when a configuration file cannot be turned into a CodecConfig."""


def codec_config_from_mapping(data: Mapping[str, Any] | None) -> CodecConfig:
    """Validate a plain mapping, accepting an optional ``codec`` section."""
    if not data:
        return CodecConfig()
    payload = data.get("codec", data)
    if not isinstance(payload, Mapping):
        raise ConfigError("The 'codec' section must be a mapping.")
    try:
        return CodecConfig.model_validate(dict(payload))
    except ValidationError as exc:
        raise ConfigError(f"Invalid codec configuration: {exc}") from exc


def load_codec_config(path: Path) -> CodecConfig:
    """Read a YAML configuration file."""
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Unable to parse {path}: {exc}") from exc
    if raw is not None and not isinstance(raw, Mapping):
        raise ConfigError(f"{path} must contain a mapping at the top level.")
    return codec_config_from_mapping(raw)


__all__ = [
    "CodecConfig",
    "ConfigError",
    "codec_config_from_mapping",
    "load_codec_config",
]
