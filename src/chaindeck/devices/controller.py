"""
Panel controller: the composition root of chaindeck.

Architecture Overview
=====================

::

    ┌──────────────────────────────────────────────────────────────┐
    │                       DeckController                         │
    │                  (devices/controller.py)                     │
    │  - Finds and opens the panel, releases it on stop()          │
    │  - Serializes every redraw (clear → header → content)        │
    │  - Converts render/write failures to per-button errors       │
    └──────┬──────────────────────┬──────────────────────┬─────────┘
           │ transport callbacks  │ redraw(slots)         │ load_catalog
           ↓                      ↑                       ↓
    ┌──────────────┐      ┌───────┴───────────────────────────────┐
    │ InputRouter  │ ───► │        NavigationStateMachine          │
    │ (FIFO queue) │ slot │  CatalogView ⇄ ChainDetailView(chain)  │
    └──────────────┘ act. └───────┬───────────────────────────────┘
                                  │ layout per view
                                  ↓
                          ButtonLayoutEngine

The controller never knows what a slot means; the state machine never
touches hardware.

Usage Example
-------------

.. code-block:: python

    with DeckController(StreamDeckTransport(), config) as controller:
        controller.load_catalog_file(Path("chains.json"))
        ...
"""

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from chaindeck.catalog import load_catalog_file
from chaindeck.core import InputRouter, ModuleActivator, NavigationStateMachine
from chaindeck.exceptions import (
    DeviceNotFoundError,
    DeviceOpenFailedError,
    DeviceWriteError,
    RenderError,
    collect_errors,
)
from chaindeck.layout import ButtonLayoutEngine
from chaindeck.models import AppConfig, ButtonSlot, CatalogModel, Dial, LabelSpec
from chaindeck.protocols import ButtonDown, ButtonUp, DialPress, DialRelease, DialRotate
from chaindeck.rendering import PixelBuffer, render_label

from .protocols import DeviceHandle, DeviceInfo, DeviceTransport, EventKind

logger = logging.getLogger(__name__)

Renderer = Callable[[LabelSpec, tuple[int, int]], PixelBuffer]


class DeckController:
    """
    Drives one panel: device lifecycle, redraws, catalog loading.

    Navigation and routing work without a device (redraws are skipped),
    which is what the tests and ``--check`` rely on.
    """

    # ================================================================
    # INITIALIZATION
    # ================================================================

    def __init__(
        self,
        transport: DeviceTransport,
        config: AppConfig | None = None,
        renderer: Renderer = render_label,
        activator: ModuleActivator | None = None,
    ):
        """
        Initialize the controller.

        Args:
            transport: Panel transport used to find and open the device
            config: Application settings (defaults if None)
            renderer: Turns a LabelSpec into pixels for the button size
            activator: Receives module button presses (logs if None)
        """
        self._transport = transport
        self._config = config or AppConfig()
        self._renderer = renderer

        self._handle: DeviceHandle | None = None
        self._device_info: DeviceInfo | None = None
        self._write_lock = threading.Lock()

        self._router = InputRouter(queue_size=self._config.event_queue_size)
        self._layout = ButtonLayoutEngine(
            nav_font_size=self._config.nav_font_size,
            module_font_size=self._config.module_font_size,
            corner_radius=self._config.corner_radius,
        )
        self._navigation = NavigationStateMachine(
            router=self._router,
            layout=self._layout,
            render=self.redraw,
            activator=activator,
        )

    # ================================================================
    # LIFECYCLE MANAGEMENT
    # ================================================================

    def start(self) -> None:
        """
        Find and open the configured panel, then start routing input.

        Raises:
            DeviceNotFoundError: No panel of the configured model is connected
            DeviceOpenFailedError: The panel could not be opened
        """
        info = self._find_device()
        logger.info(f"Attempting to connect to: {info.model} ({info.path})")

        try:
            handle = self._transport.open(info.path)
        except Exception as e:
            logger.error(f"Failed to open Stream Deck: {e}")
            raise DeviceOpenFailedError(info.path, str(e)) from e

        self._handle = handle
        self._device_info = info
        logger.info(f"Connected to Stream Deck: {handle.model}")

        handle.on(EventKind.DOWN, lambda key: self._router.submit(ButtonDown(key)))
        handle.on(EventKind.UP, lambda key: self._router.submit(ButtonUp(key)))
        handle.on(EventKind.DIAL, lambda dial, delta: self._router.submit(DialRotate(dial, delta)))
        handle.on(EventKind.DIAL_DOWN, lambda dial: self._router.submit(DialPress(dial)))
        handle.on(EventKind.DIAL_UP, lambda dial: self._router.submit(DialRelease(dial)))

        self.reset_deck()
        self._router.start()

    def stop(self) -> None:
        """Stop routing input and release the panel."""
        self._router.stop()

        if self._handle:
            with self._write_lock:
                try:
                    self._handle.close()
                    logger.info("Stream Deck closed")
                except Exception as e:
                    logger.error(f"Error closing Stream Deck: {e}")
                self._handle = None

        logger.info("DeckController stopped")

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    def _find_device(self) -> DeviceInfo:
        devices = self._transport.list_devices()
        logger.info(f"Found devices: {devices}")

        wanted = self._config.device_model.lower()
        for info in devices:
            if wanted in info.model.lower():
                return info

        raise DeviceNotFoundError(self._config.device_model, [d.model for d in devices])

    # ================================================================
    # CATALOG
    # ================================================================

    def load_catalog(self, raw_tree: Any, source: str | None = None) -> CatalogModel:
        """
        Load a decoded chain layout and show the chain list.

        Raises:
            EmptyCatalogError: The document has no chains (previous catalog kept)
        """
        return self._navigation.load_catalog(raw_tree, source=source)

    def load_catalog_file(self, path: Path) -> CatalogModel:
        """
        Load a chain layout file and show the chain list.

        Raises:
            CatalogError: File missing, invalid JSON, or no chains
        """
        catalog = load_catalog_file(path)
        self._navigation.set_catalog(catalog)
        return catalog

    # ================================================================
    # DRAWING
    # ================================================================

    def redraw(self, slots: list[ButtonSlot]) -> None:
        """
        Clear the panel and draw every slot.

        A slot that fails to render or write is logged and skipped; the
        rest of the layout is still drawn.
        """
        if not self._handle:
            logger.debug(f"No device connected, skipping redraw of {len(slots)} buttons")
            return

        with self._write_lock:
            self._reset_locked()

            size = self._handle.button_size
            count = self._handle.button_count
            collector = collect_errors("redraw")
            for slot in slots:
                if slot.index >= count:
                    logger.warning(f"Button {slot.index} does not exist on {self._handle.model}")
                    continue
                with collector.try_operation(f"button {slot.index}"):
                    self._draw_slot(slot, size)

            if collector.has_errors:
                logger.error(collector.get_summary())
            logger.debug(f"Drew {collector.success_count} buttons")

    def _draw_slot(self, slot: ButtonSlot, size: tuple[int, int]) -> None:
        try:
            pixels = self._renderer(slot.label, size)
        except Exception as e:
            raise RenderError(slot.index, slot.display_text, str(e)) from e

        try:
            self._handle.fill_button(slot.index, pixels)
        except Exception as e:
            raise DeviceWriteError(slot.index, str(e)) from e

        logger.debug(f"Set text for button {slot.index}: '{slot.display_text}'")

    def reset_deck(self) -> None:
        """Blank every button and restore the configured brightness."""
        if not self._handle:
            return
        with self._write_lock:
            self._reset_locked()

    def _reset_locked(self) -> None:
        try:
            self._handle.clear_all()
            self._handle.set_brightness(self._config.brightness)
        except Exception as e:
            logger.error(f"Error resetting Stream Deck: {e}")

    def set_brightness(self, percent: int) -> bool:
        """
        Set panel brightness.

        Returns:
            True if sent successfully, False if not connected or the write failed
        """
        if not self._handle:
            logger.warning("Cannot set brightness: No device connected")
            return False

        with self._write_lock:
            try:
                self._handle.set_brightness(percent)
                return True
            except Exception as e:
                logger.error(f"Error setting brightness: {e}")
                return False

    # ================================================================
    # DIALS
    # ================================================================

    def register_dial(
        self,
        dial: Dial,
        on_rotate: Callable[[int], None] | None = None,
        on_press: Callable[[], None] | None = None,
        on_release: Callable[[], None] | None = None,
    ) -> None:
        """Bind callbacks to a dial; bindings are not affected by navigation."""
        self._router.register_dial(dial, on_rotate, on_press, on_release)

    # ================================================================
    # PROPERTIES
    # ================================================================

    @property
    def navigation(self) -> NavigationStateMachine:
        return self._navigation

    @property
    def router(self) -> InputRouter:
        return self._router

    @property
    def is_connected(self) -> bool:
        return self._handle is not None

    @property
    def device_name(self) -> str:
        """Model name of the connected panel."""
        if self._handle:
            return self._handle.model
        return "No Device"
