from __future__ import annotations

import logging

import pytest

from glyphmetrics.core.diagnostics import LoggingEmitter, NullEmitter, format_event_message
from glyphmetrics.core.exceptions import (
    BuildIntegrityError,
    MetricsBuildError,
    MetricsCodecError,
    MissingTupletTable,
    exception_hint,
    exception_messages,
)


def _raise_nested_build_error() -> None:
    try:
        raise MissingTupletTable("Missing tuplet lookup table ('t').")
    except MissingTupletTable as exc:
        raise BuildIntegrityError("Compact document failed to expand") from exc


def test_null_emitter_is_noop(caplog: pytest.LogCaptureFixture) -> None:
    emitter = NullEmitter()
    with caplog.at_level(logging.WARNING):
        emitter.warning("nothing to see")
        emitter.error("still quiet")
    assert not caplog.records
    emitter.event("ignored", {"value": 1})
    assert emitter.debug_enabled is False


def test_logging_emitter_logs_messages(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(debug_enabled=True)
    with caplog.at_level(logging.DEBUG):
        emitter.error("boom")
        emitter.event("font_failed", {"key": "serif-12", "reason": "bad baseline"})
        emitter.event("custom", {"flag": True})
    messages = [record.message for record in caplog.records]
    assert "boom" in messages
    assert "Skipped metrics for serif-12: bad baseline" in messages
    assert any("diagnostic event custom" in message for message in messages)
    assert emitter.debug_enabled is True


def test_format_event_message_summaries() -> None:
    assert (
        format_event_message("font_minified", {"key": "a", "tier": "tuplet", "values": 3, "tuplets": 2})
        == "Minified metrics for a (tier=tuplet, values=3, tuplets=2)"
    )
    assert format_event_message("font_minified", {"key": "a"}) == "Minified metrics for a"
    assert format_event_message("font_expanded", {"key": "a", "tier": "legacy"}) == (
        "Loaded metrics for a from legacy tier"
    )
    assert format_event_message("other", {}) is None


def test_exception_chain_helpers_report_root_cause() -> None:
    with pytest.raises(BuildIntegrityError) as info:
        _raise_nested_build_error()
    assert exception_messages(info.value) == [
        "Compact document failed to expand",
        "Missing tuplet lookup table ('t').",
    ]
    assert exception_hint(info.value) == "Missing tuplet lookup table ('t')."
    assert exception_hint(MetricsCodecError()) is None


def test_error_hierarchy() -> None:
    assert issubclass(BuildIntegrityError, MetricsBuildError)
    assert issubclass(MetricsCodecError, ValueError)
