"""Tests for input routing and payload normalization."""

import threading
from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from chaindeck.core import InputRouter, SlotAction, normalize_key_index, resolve_dial
from chaindeck.exceptions import MalformedEventError
from chaindeck.models import Dial
from chaindeck.protocols import ButtonDown, ButtonUp, DialPress, DialRelease, DialRotate


@pytest.mark.unit
class TestNormalizeKeyIndex:
    """Test key payload normalization."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (5, 5),
            (0, 0),
            (7.0, 7),
            ("12", 12),
            ({"index": 3}, 3),
            (SimpleNamespace(index=4), 4),
            ({"index": "9"}, 9),
        ],
    )
    def test_valid_payloads(self, raw, expected):
        assert normalize_key_index(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [None, -1, 2.5, "abc", "\u00b2", {"index": "\u00b2"}, "--5", {}, {"key": 1}, True, SimpleNamespace(key=1), []],
    )
    def test_malformed_payloads(self, raw):
        with pytest.raises(MalformedEventError):
            normalize_key_index(raw)


@pytest.mark.unit
class TestResolveDial:
    """Test dial id resolution."""

    @pytest.mark.parametrize(
        "raw, expected",
        [(0, Dial.LEFT), (1, Dial.RIGHT), ("left", Dial.LEFT), ("RIGHT", Dial.RIGHT), (Dial.LEFT, Dial.LEFT)],
    )
    def test_valid(self, raw, expected):
        assert resolve_dial(raw) is expected

    @pytest.mark.parametrize("raw", [2, -1, "middle", None, True])
    def test_invalid(self, raw):
        with pytest.raises(MalformedEventError):
            resolve_dial(raw)


@pytest.mark.unit
class TestSlotTable:
    """Test slot installation and direct dispatch."""

    def test_press_and_release(self, router):
        action = SlotAction(on_press=Mock(), on_release=Mock())
        router.install_slots({4: action})

        router.on_button_down(4)
        router.on_button_up({"index": 4})

        action.on_press.assert_called_once_with()
        action.on_release.assert_called_once_with()

    def test_install_replaces_table(self, router):
        old = SlotAction(on_press=Mock())
        new = SlotAction(on_press=Mock())
        router.install_slots({2: old, 3: old})

        router.install_slots({3: new})
        router.on_button_down(2)
        router.on_button_down(3)

        old.on_press.assert_not_called()
        new.on_press.assert_called_once()
        assert router.installed_indices == [3]

    def test_clear_slots(self, router):
        action = SlotAction(on_press=Mock())
        router.install_slots({1: action})

        router.clear_slots()
        router.on_button_down(1)

        action.on_press.assert_not_called()

    def test_release_without_handler_is_noop(self, router):
        router.install_slots({1: SlotAction(on_press=Mock())})

        router.on_button_up(1)

    def test_malformed_payload_is_dropped(self, router, caplog):
        action = SlotAction(on_press=Mock())
        router.install_slots({0: action})

        router.on_button_down("not-a-key")

        action.on_press.assert_not_called()
        assert "Dropped button down event" in caplog.text

    def test_non_ascii_digit_payload_is_dropped(self, router, caplog):
        action = SlotAction(on_press=Mock())
        router.install_slots({2: action})

        router.on_button_down({"index": "\u00b2"})
        router.dispatch(ButtonUp("\u00b2"))

        action.on_press.assert_not_called()
        assert "Dropped button down event" in caplog.text
        assert "Dropped button up event" in caplog.text


@pytest.mark.unit
class TestDials:
    """Test dial bindings."""

    def test_rotate_press_release(self, router):
        rotate, press, release = Mock(), Mock(), Mock()
        router.register_dial(Dial.LEFT, on_rotate=rotate, on_press=press, on_release=release)

        router.on_dial_rotate(0, -3)
        router.on_dial_press("left")
        router.on_dial_release(Dial.LEFT)

        rotate.assert_called_once_with(-3)
        press.assert_called_once_with()
        release.assert_called_once_with()

    def test_unbound_dial_is_noop(self, router):
        router.register_dial(Dial.LEFT, on_rotate=Mock())

        router.on_dial_rotate(1, 2)
        router.on_dial_press(1)

    def test_unknown_dial_is_dropped(self, router):
        rotate = Mock()
        router.register_dial(Dial.RIGHT, on_rotate=rotate)

        router.on_dial_rotate(5, 1)

        rotate.assert_not_called()

    def test_dials_survive_slot_changes(self, router):
        rotate = Mock()
        router.register_dial(Dial.RIGHT, on_rotate=rotate)

        router.install_slots({})
        router.on_dial_rotate(1, 1)

        rotate.assert_called_once_with(1)


@pytest.mark.unit
class TestQueuedDispatch:
    """Test submit/process_pending on the calling thread."""

    def test_events_dispatched_in_order(self, router):
        calls = []
        router.install_slots(
            {
                0: SlotAction(on_press=lambda: calls.append("down 0"), on_release=lambda: calls.append("up 0")),
                1: SlotAction(on_press=lambda: calls.append("down 1")),
            }
        )
        router.register_dial(Dial.LEFT, on_rotate=lambda d: calls.append(f"rotate {d}"))

        router.submit(ButtonDown(0))
        router.submit(DialRotate(0, 2))
        router.submit(ButtonUp(0))
        router.submit(ButtonDown(1))

        assert router.process_pending() == 4
        assert calls == ["down 0", "rotate 2", "up 0", "down 1"]

    def test_dial_press_release_messages(self, router):
        press, release = Mock(), Mock()
        router.register_dial(Dial.RIGHT, on_press=press, on_release=release)

        router.submit(DialPress(1))
        router.submit(DialRelease(1))
        router.process_pending()

        press.assert_called_once()
        release.assert_called_once()

    def test_handler_exception_does_not_stop_dispatch(self, router):
        after = Mock()
        router.install_slots({0: SlotAction(on_press=Mock(side_effect=RuntimeError("boom"))), 1: SlotAction(on_press=after)})

        router.submit(ButtonDown(0))
        router.submit(ButtonDown(1))
        router.process_pending()

        after.assert_called_once()

    def test_full_queue_drops_events(self):
        router = InputRouter(queue_size=2)

        assert router.submit(ButtonDown(0))
        assert router.submit(ButtonDown(1))
        assert not router.submit(ButtonDown(2))
        assert router.process_pending() == 2

    def test_unknown_message_is_ignored(self, router):
        router.dispatch(object())


@pytest.mark.integration
class TestWorkerThread:
    """Test the consumer thread."""

    def test_worker_dispatches_submitted_events(self, router):
        done = threading.Event()
        router.install_slots({7: SlotAction(on_press=done.set)})

        router.start()
        try:
            assert router.is_running
            router.submit(ButtonDown(7))
            assert done.wait(timeout=2.0)
        finally:
            router.stop()

        assert not router.is_running

    def test_handlers_run_one_at_a_time(self, router):
        active = []
        overlap = []
        finished = threading.Event()

        def handler():
            if active:
                overlap.append(True)
            active.append(True)
            threading.Event().wait(0.01)
            active.pop()

        router.install_slots({0: SlotAction(on_press=handler), 1: SlotAction(on_press=finished.set)})
        router.start()
        try:
            for _ in range(5):
                router.submit(ButtonDown(0))
            router.submit(ButtonDown(1))
            assert finished.wait(timeout=2.0)
        finally:
            router.stop()

        assert overlap == []

    def test_double_start_is_harmless(self, router):
        router.start()
        router.start()
        router.stop()
