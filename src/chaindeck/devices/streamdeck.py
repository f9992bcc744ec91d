"""Transport adapter for Elgato Stream Deck panels (python-elgato-streamdeck).

The library reports keys as (key, pressed) and dials as (dial, event, value);
this adapter re-emits them as the down/up/dial/dialDown/dialUp callbacks the
controller subscribes to. Callbacks run on the library's reader thread.
"""

import logging
from collections.abc import Callable

from StreamDeck.DeviceManager import DeviceManager
from StreamDeck.Devices.StreamDeck import DialEventType
from StreamDeck.ImageHelpers import PILHelper

from chaindeck.rendering import PixelBuffer

from .protocols import DeviceInfo, EventKind

logger = logging.getLogger(__name__)


class StreamDeckHandle:
    """An opened Stream Deck."""

    def __init__(self, deck):
        """
        Wrap an opened deck and hook its key and dial callbacks.

        Args:
            deck: An opened StreamDeck.Devices.StreamDeck instance
        """
        self._deck = deck
        self._callbacks: dict[EventKind, Callable[..., None]] = {}

        deck.set_key_callback(self._on_key)
        if deck.dial_count():
            deck.set_dial_callback(self._on_dial)

    @property
    def model(self) -> str:
        return self._deck.deck_type()

    @property
    def button_count(self) -> int:
        return self._deck.key_count()

    @property
    def button_size(self) -> tuple[int, int]:
        return tuple(self._deck.key_image_format()["size"])

    def on(self, kind: EventKind, callback: Callable[..., None]) -> None:
        self._callbacks[EventKind(kind)] = callback

    def fill_button(self, index: int, pixels: PixelBuffer) -> None:
        native = PILHelper.to_native_key_format(self._deck, pixels.to_image())
        with self._deck:
            self._deck.set_key_image(index, native)

    def clear_all(self) -> None:
        with self._deck:
            for key in range(self._deck.key_count()):
                self._deck.set_key_image(key, None)

    def set_brightness(self, percent: int) -> None:
        with self._deck:
            self._deck.set_brightness(percent)

    def close(self) -> None:
        with self._deck:
            self._deck.close()

    def _emit(self, kind: EventKind, *args) -> None:
        callback = self._callbacks.get(kind)
        if callback:
            callback(*args)

    def _on_key(self, deck, key: int, pressed: bool) -> None:
        self._emit(EventKind.DOWN if pressed else EventKind.UP, key)

    def _on_dial(self, deck, dial: int, event, value) -> None:
        if event == DialEventType.TURN:
            self._emit(EventKind.DIAL, dial, value)
        elif event == DialEventType.PUSH:
            self._emit(EventKind.DIAL_DOWN if value else EventKind.DIAL_UP, dial)


class StreamDeckTransport:
    """Enumerates and opens Stream Decks over USB HID."""

    def __init__(self):
        self._manager = DeviceManager()
        self._decks: dict[str, object] = {}

    def list_devices(self) -> list[DeviceInfo]:
        self._decks = {deck.id(): deck for deck in self._manager.enumerate()}
        devices = [DeviceInfo(path=path, model=deck.deck_type()) for path, deck in self._decks.items()]
        return devices

    def open(self, path: str) -> StreamDeckHandle:
        if path not in self._decks:
            self.list_devices()

        deck = self._decks.get(path)
        if deck is None:
            raise OSError(f"Device {path} is no longer connected")

        deck.open()
        return StreamDeckHandle(deck)
