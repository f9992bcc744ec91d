"""Tests for the Stream Deck transport adapter (library mocked)."""

from unittest.mock import MagicMock, Mock, patch

import pytest
from StreamDeck.Devices.StreamDeck import DialEventType

from chaindeck.devices import EventKind
from chaindeck.devices.streamdeck import StreamDeckHandle, StreamDeckTransport
from chaindeck.rendering import PixelBuffer


def make_deck(deck_id="hid-1", deck_type="Stream Deck Studio", dials=2):
    deck = MagicMock()
    deck.id.return_value = deck_id
    deck.deck_type.return_value = deck_type
    deck.key_count.return_value = 32
    deck.dial_count.return_value = dials
    deck.key_image_format.return_value = {"size": (144, 112)}
    return deck


@pytest.mark.unit
class TestStreamDeckHandle:
    """Test event translation and drawing."""

    def test_properties(self):
        handle = StreamDeckHandle(make_deck())

        assert handle.model == "Stream Deck Studio"
        assert handle.button_count == 32
        assert handle.button_size == (144, 112)

    def test_key_events(self):
        deck = make_deck()
        handle = StreamDeckHandle(deck)
        down, up = Mock(), Mock()
        handle.on(EventKind.DOWN, down)
        handle.on(EventKind.UP, up)

        key_callback = deck.set_key_callback.call_args.args[0]
        key_callback(deck, 5, True)
        key_callback(deck, 5, False)

        down.assert_called_once_with(5)
        up.assert_called_once_with(5)

    def test_dial_events(self):
        deck = make_deck()
        handle = StreamDeckHandle(deck)
        rotate, press, release = Mock(), Mock(), Mock()
        handle.on(EventKind.DIAL, rotate)
        handle.on(EventKind.DIAL_DOWN, press)
        handle.on(EventKind.DIAL_UP, release)

        dial_callback = deck.set_dial_callback.call_args.args[0]
        dial_callback(deck, 1, DialEventType.TURN, -2)
        dial_callback(deck, 0, DialEventType.PUSH, True)
        dial_callback(deck, 0, DialEventType.PUSH, False)

        rotate.assert_called_once_with(1, -2)
        press.assert_called_once_with(0)
        release.assert_called_once_with(0)

    def test_deck_without_dials(self):
        deck = make_deck(dials=0)

        StreamDeckHandle(deck)

        deck.set_dial_callback.assert_not_called()

    def test_unsubscribed_event_is_ignored(self):
        deck = make_deck()
        StreamDeckHandle(deck)

        deck.set_key_callback.call_args.args[0](deck, 1, True)

    def test_fill_button(self):
        deck = make_deck()
        handle = StreamDeckHandle(deck)
        pixels = PixelBuffer(width=2, height=1, data=bytes(6))

        with patch("chaindeck.devices.streamdeck.PILHelper.to_native_key_format", return_value=b"native") as convert:
            handle.fill_button(3, pixels)

        assert convert.call_args.args[1].size == (2, 1)
        deck.set_key_image.assert_called_once_with(3, b"native")

    def test_clear_all(self):
        deck = make_deck()
        handle = StreamDeckHandle(deck)

        handle.clear_all()

        assert deck.set_key_image.call_count == 32
        deck.set_key_image.assert_called_with(31, None)

    def test_brightness_and_close(self):
        deck = make_deck()
        handle = StreamDeckHandle(deck)

        handle.set_brightness(70)
        handle.close()

        deck.set_brightness.assert_called_once_with(70)
        deck.close.assert_called_once()


@pytest.mark.unit
class TestStreamDeckTransport:
    """Test enumeration and opening."""

    @pytest.fixture
    def decks(self):
        return [make_deck("hid-1", "Stream Deck Mini"), make_deck("hid-2", "Stream Deck Studio")]

    @pytest.fixture
    def transport(self, decks):
        with patch("chaindeck.devices.streamdeck.DeviceManager") as manager_cls:
            manager_cls.return_value.enumerate.return_value = decks
            yield StreamDeckTransport()

    def test_list_devices(self, transport):
        devices = transport.list_devices()

        assert [(d.path, d.model) for d in devices] == [
            ("hid-1", "Stream Deck Mini"),
            ("hid-2", "Stream Deck Studio"),
        ]

    def test_open(self, transport, decks):
        transport.list_devices()

        handle = transport.open("hid-2")

        decks[1].open.assert_called_once()
        assert handle.model == "Stream Deck Studio"

    def test_open_unknown_path(self, transport):
        with pytest.raises(OSError):
            transport.open("hid-9")
