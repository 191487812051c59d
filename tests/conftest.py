from __future__ import annotations

from collections.abc import Callable

import pytest

from glyphmetrics.charset import CHARACTER_SET
from glyphmetrics.models import CharacterMetrics, FontMetricsDocument


MetricFactory = Callable[..., CharacterMetrics]


def _metric(
    width: float,
    height: float = 13.23,
    descent: float = 0,
    *,
    left: float = 0,
    ascent: float = 17,
) -> CharacterMetrics:
    return CharacterMetrics(
        width=width,
        actual_bounding_box_left=left,
        actual_bounding_box_right=width,
        actual_bounding_box_ascent=height,
        actual_bounding_box_descent=descent,
        font_bounding_box_ascent=ascent,
        font_bounding_box_descent=4,
        hanging_baseline=16.75,
        alphabetic_baseline=0,
        ideographic_baseline=-3.92,
    )


@pytest.fixture
def make_metric() -> MetricFactory:
    return _metric


@pytest.fixture
def full_document() -> FontMetricsDocument:
    """Every canonical character, realistic widths, and a small kerning table."""
    metrics: dict[str, CharacterMetrics] = {}
    for index, char in enumerate(CHARACTER_SET):
        if char == " ":
            metrics[char] = _metric(5.14, height=0)
        elif "A" <= char <= "Z":
            metrics[char] = _metric(12, height=13.23)
        elif "a" <= char <= "z":
            metrics[char] = _metric(9, height=9.5, descent=0.2188 if char in "gjpqy" else 0)
        elif "0" <= char <= "9":
            metrics[char] = _metric(10.5)
        else:
            metrics[char] = _metric(5 + (index % 15), height=13 + (index % 4))
    kerning = {
        "A": {"s": -20, "t": -20, "u": -20},
        "B": {"s": -20, "t": -20, "u": -20},
        "C": {"s": -20, "t": -20, "u": -20},
        "D": {"v": -15, "w": -15},
        "E": {"v": -15, "w": -15},
        "F": {"v": -15, "w": -15},
        "G": {"a": -25, "b": -25, "c": -25, "d": -25, "e": -25},
        "T": {"o": -1.5, "-": -3},
        "-": {"T": -2},
    }
    return FontMetricsDocument(
        character_metrics=metrics,
        kerning_table=kerning,
        space_advancement_override=5,
    )


@pytest.fixture
def scenario_document() -> FontMetricsDocument:
    """First 50 characters share M1, the next 50 share M2, the rest vary."""
    metrics: dict[str, CharacterMetrics] = {}
    for index, char in enumerate(CHARACTER_SET):
        if index < 50:
            metrics[char] = _metric(10, 13, 0)
        elif index < 100:
            metrics[char] = _metric(12, 14, 0.2188)
        else:
            metrics[char] = _metric(
                5 + (index % 15), 13 + (index % 4), 0 if index % 3 == 0 else 0.2188
            )
    return FontMetricsDocument(character_metrics=metrics, space_advancement_override=5)
