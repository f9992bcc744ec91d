"""Tests for the exception hierarchy and error handling utilities."""

import logging

import pytest

from chaindeck.exceptions import (
    ChainDeckError,
    DeviceNotFoundError,
    DeviceWriteError,
    EmptyCatalogError,
    ErrorContext,
    MalformedEventError,
    collect_errors,
    format_error_for_display,
)


@pytest.mark.unit
class TestMessages:
    """Test user-facing messages."""

    def test_full_message_includes_hint(self):
        error = DeviceNotFoundError("studio", ["Stream Deck XL"])

        message = error.get_full_message()

        assert "No Stream Deck studio found" in message
        assert "--list-devices" in message

    def test_empty_catalog_names_source(self):
        error = EmptyCatalogError("chains.json")

        assert str(error) == "No chains found in the JSON file."
        assert "chains.json" in error.technical_message

    def test_malformed_event_is_recoverable(self):
        error = MalformedEventError("button index", {"key": 1})

        assert error.recoverable

    def test_format_custom_error(self):
        message, hint = format_error_for_display(DeviceWriteError(4, "timeout"))

        assert message == "Could not update button 4"
        assert hint is None

    def test_format_standard_error(self):
        message, hint = format_error_for_display(ValueError("bad"))

        assert message == "ValueError: bad"
        assert hint is None


@pytest.mark.unit
class TestErrorContext:
    """Test ErrorContext."""

    def test_re_raises_by_default(self):
        with pytest.raises(ValueError):
            with ErrorContext("parse"):
                raise ValueError("x")

    def test_suppresses_and_records(self, caplog):
        with caplog.at_level(logging.ERROR):
            with ErrorContext("activate module", re_raise=False) as ctx:
                raise OSError("port closed")

        assert isinstance(ctx.error, OSError)
        assert "Failed to activate module" in caplog.text

    def test_keyboard_interrupt_passes_through(self):
        with pytest.raises(KeyboardInterrupt):
            with ErrorContext("wait", re_raise=False):
                raise KeyboardInterrupt


@pytest.mark.unit
class TestErrorCollector:
    """Test batch error collection."""

    def test_collects_and_continues(self):
        collector = collect_errors("redraw")
        for index in range(4):
            with collector.try_operation(f"button {index}"):
                if index % 2:
                    raise DeviceWriteError(index, "io")

        assert collector.success_count == 2
        assert collector.error_count == 2
        assert collector.failed_steps == ["button 1", "button 3"]
        summary = collector.get_summary()
        assert "Failed 2 of 4 operations (redraw)" in summary
        assert "button 1: Could not update button 1" in summary

    def test_all_ok(self):
        collector = collect_errors("redraw")
        with collector.try_operation("button 0"):
            pass

        assert not collector.has_errors
        assert "successfully (1 total)" in collector.get_summary()

    def test_base_class_catches_all(self):
        assert issubclass(EmptyCatalogError, ChainDeckError)
        assert issubclass(DeviceNotFoundError, ChainDeckError)
