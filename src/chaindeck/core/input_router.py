"""Routing of panel input to the installed button slots and dial handlers.

Input Flow
==========

::

    Transport reader thread              Router worker thread
    ───────────────────────              ────────────────────
    down(key) ──► submit(ButtonDown) ─┐
    dial(0, -2) ► submit(DialRotate) ─┤  FIFO queue
    up(key) ────► submit(ButtonUp) ───┘     │
                                            ▼
                                       dispatch(event)
                                            │
                         ┌──────────────────┴──────────────────┐
                         ▼                                     ▼
              normalize_key_index(raw)                  resolve_dial(raw)
              slot table[index].on_press          dial binding.on_rotate(delta)

One consumer drains the queue, so handlers run one at a time in arrival
order. Payloads that can't be normalized are logged and dropped; handler
exceptions are logged and never stop the router.
"""

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from queue import Empty, Full, Queue
from typing import Any

from chaindeck.exceptions import MalformedEventError
from chaindeck.models import Dial
from chaindeck.protocols import (
    ButtonDown,
    ButtonUp,
    DialPress,
    DialRelease,
    DialRotate,
    InputEvent,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotAction:
    """Callbacks bound to one button in the current view."""

    on_press: Callable[[], None] | None = None
    on_release: Callable[[], None] | None = None


@dataclass(frozen=True)
class DialBinding:
    """Callbacks bound to one dial."""

    on_rotate: Callable[[int], None] | None = None
    on_press: Callable[[], None] | None = None
    on_release: Callable[[], None] | None = None


# =================================================================
# Payload normalization
# =================================================================


def normalize_key_index(raw: Any) -> int:
    """
    Normalize a raw key payload to a button index.

    Accepts a bare number (int, integral float, numeric string), a mapping
    with an ``index`` key, or an object with an ``index`` attribute.

    Raises:
        MalformedEventError: If no non-negative integer index can be read
    """
    value = raw
    if isinstance(value, Mapping):
        value = value.get("index")
    elif not isinstance(value, (int, float, str)) and hasattr(value, "index"):
        value = getattr(value, "index")

    if isinstance(value, bool):
        raise MalformedEventError("button index", raw)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    elif isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise MalformedEventError("button index", raw) from None

    if isinstance(value, int) and value >= 0:
        return value
    raise MalformedEventError("button index", raw)


def resolve_dial(raw: Any) -> Dial:
    """
    Resolve a raw dial id to LEFT or RIGHT.

    Accepts a Dial, the hardware index (0 = left, 1 = right), or the
    names "left"/"right" in any case.

    Raises:
        MalformedEventError: For anything else
    """
    if isinstance(raw, Dial):
        return raw
    if isinstance(raw, int) and not isinstance(raw, bool):
        if raw == 0:
            return Dial.LEFT
        if raw == 1:
            return Dial.RIGHT
    if isinstance(raw, str):
        try:
            return Dial(raw.strip().lower())
        except ValueError:
            pass
    raise MalformedEventError("dial id", raw)


# =================================================================
# Router
# =================================================================


class InputRouter:
    """
    Binds panel input events to the current slot table and dial bindings.

    The slot table is replaced wholesale by install_slots(); indices missing
    from the latest table are no-ops. Dial bindings are independent of the
    slot table and survive navigation.
    """

    def __init__(self, queue_size: int = 256):
        """
        Initialize the router.

        Args:
            queue_size: Maximum pending events; further events are dropped
        """
        self._lock = threading.Lock()
        self._slots: dict[int, SlotAction] = {}
        self._dials: dict[Dial, DialBinding] = {}
        self._queue: Queue[InputEvent] = Queue(maxsize=queue_size)
        self._running = False
        self._worker: threading.Thread | None = None

    # ================================================================
    # REGISTRATION
    # ================================================================

    def install_slots(self, actions: Mapping[int, SlotAction]) -> None:
        """Replace the whole slot table."""
        with self._lock:
            self._slots = dict(actions)
        logger.debug(f"Installed {len(actions)} slot actions: {sorted(actions)}")

    def clear_slots(self) -> None:
        """Remove every slot action."""
        self.install_slots({})

    @property
    def installed_indices(self) -> list[int]:
        """Button indices that currently have an action."""
        with self._lock:
            return sorted(self._slots)

    def register_dial(
        self,
        dial: Dial,
        on_rotate: Callable[[int], None] | None = None,
        on_press: Callable[[], None] | None = None,
        on_release: Callable[[], None] | None = None,
    ) -> None:
        """
        Bind callbacks to a dial, replacing any earlier binding.

        Args:
            dial: Which dial
            on_rotate: Called with the rotation delta
            on_press: Called when the dial is pushed
            on_release: Called when the dial is released
        """
        with self._lock:
            self._dials[dial] = DialBinding(on_rotate, on_press, on_release)
        logger.info(f"Registered {dial.value} dial actions")

    # ================================================================
    # DIRECT HANDLERS
    # ================================================================

    def on_button_down(self, raw: Any) -> None:
        """Run the press action of the slot at the normalized index."""
        action = self._lookup_slot(raw, "down")
        if action and action.on_press:
            action.on_press()

    def on_button_up(self, raw: Any) -> None:
        """Run the release action of the slot at the normalized index, if any."""
        action = self._lookup_slot(raw, "up")
        if action and action.on_release:
            action.on_release()

    def on_dial_rotate(self, dial_id: Any, delta: int) -> None:
        binding = self._lookup_dial(dial_id)
        if binding and binding.on_rotate:
            binding.on_rotate(delta)

    def on_dial_press(self, dial_id: Any) -> None:
        binding = self._lookup_dial(dial_id)
        if binding and binding.on_press:
            binding.on_press()

    def on_dial_release(self, dial_id: Any) -> None:
        binding = self._lookup_dial(dial_id)
        if binding and binding.on_release:
            binding.on_release()

    def _lookup_slot(self, raw: Any, what: str) -> SlotAction | None:
        try:
            index = normalize_key_index(raw)
        except MalformedEventError as e:
            logger.warning(f"Dropped button {what} event: {e.technical_message}")
            return None

        with self._lock:
            action = self._slots.get(index)
        if action is None:
            logger.debug(f"Button {index} {what}: no action registered")
        return action

    def _lookup_dial(self, raw: Any) -> DialBinding | None:
        try:
            dial = resolve_dial(raw)
        except MalformedEventError as e:
            logger.warning(f"Dropped dial event: {e.technical_message}")
            return None

        with self._lock:
            return self._dials.get(dial)

    # ================================================================
    # QUEUED DISPATCH
    # ================================================================

    def submit(self, event: InputEvent) -> bool:
        """
        Queue an event for the consumer. Safe to call from any thread.

        Returns:
            False if the queue was full and the event was dropped
        """
        try:
            self._queue.put_nowait(event)
            return True
        except Full:
            logger.warning(f"Input queue full, dropped {event}")
            return False

    def dispatch(self, event: InputEvent) -> None:
        """Handle one event; never raises."""
        logger.debug(f"Dispatching {event}")
        try:
            if isinstance(event, ButtonDown):
                self.on_button_down(event.index)
            elif isinstance(event, ButtonUp):
                self.on_button_up(event.index)
            elif isinstance(event, DialRotate):
                self.on_dial_rotate(event.dial, event.delta)
            elif isinstance(event, DialPress):
                self.on_dial_press(event.dial)
            elif isinstance(event, DialRelease):
                self.on_dial_release(event.dial)
            else:
                logger.warning(f"Unhandled input event: {event!r}")
        except Exception as e:
            logger.error(f"Error handling {event}: {e}", exc_info=True)

    def process_pending(self) -> int:
        """
        Drain the queue on the calling thread.

        Returns:
            Number of events dispatched
        """
        count = 0
        while True:
            try:
                event = self._queue.get_nowait()
            except Empty:
                return count
            self.dispatch(event)
            count += 1

    def start(self) -> None:
        """Start the consumer thread."""
        if self._running:
            logger.warning("InputRouter is already running")
            return

        self._running = True
        self._worker = threading.Thread(target=self._run, name="chaindeck-input", daemon=True)
        self._worker.start()
        logger.debug("InputRouter started")

    def stop(self) -> None:
        """Stop the consumer thread; pending events are discarded."""
        self._running = False
        if self._worker and self._worker.is_alive():
            self._worker.join(timeout=1.0)
        self._worker = None
        logger.debug("InputRouter stopped")

    @property
    def is_running(self) -> bool:
        return self._running

    def _run(self) -> None:
        while self._running:
            try:
                event = self._queue.get(timeout=0.1)
            except Empty:
                continue
            self.dispatch(event)
