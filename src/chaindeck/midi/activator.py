"""MIDI module activation.

A module button press sends note_on for the module's note on its chain's
MIDI channel; the release sends the matching note_off. Chain channels are
1-based in the catalog and 0-based on the wire.
"""

import logging
import threading

import mido

from chaindeck.exceptions import MidiPortError
from chaindeck.models import Chain, Module

logger = logging.getLogger(__name__)

NOTE_ON_VELOCITY = 127


def wire_channel(chain: Chain) -> int:
    """Convert a chain's 1-based MIDI channel to a 0-based wire channel (0 if unset)."""
    if chain.midi_channel is None:
        return 0
    return min(max(chain.midi_channel - 1, 0), 15)


class MidiActivator:
    """
    Sends module presses to a MIDI output port.

    Modules without a MIDI note are logged and skipped.
    """

    def __init__(self, port_name: str):
        """
        Initialize MIDI activator.

        Args:
            port_name: Name of the MIDI output port (see mido.get_output_names())
        """
        self._port_name = port_name
        self._port: mido.ports.BaseOutput | None = None
        self._port_lock = threading.Lock()

    def start(self) -> None:
        """
        Open the output port.

        Raises:
            MidiPortError: If the port cannot be opened
        """
        with self._port_lock:
            if self._port:
                logger.warning("MidiActivator is already running")
                return

            try:
                self._port = mido.open_output(self._port_name)
            except (OSError, IOError) as e:
                raise MidiPortError(self._port_name, mido.get_output_names(), str(e)) from e

        logger.info(f"Opened MIDI output: {self._port_name}")

    def stop(self) -> None:
        """Close the output port."""
        with self._port_lock:
            if self._port:
                try:
                    self._port.close()
                except Exception as e:
                    logger.error(f"Error closing MIDI output port: {e}")
                self._port = None

        logger.debug("MidiActivator stopped")

    close = stop

    def activate(self, chain: Chain, module: Module) -> None:
        self._send_note("note_on", chain, module, NOTE_ON_VELOCITY)

    def release(self, chain: Chain, module: Module) -> None:
        self._send_note("note_off", chain, module, 0)

    def _send_note(self, kind: str, chain: Chain, module: Module, velocity: int) -> None:
        if module.midi_note is None:
            logger.debug(f"Module '{module.device_name}' has no MIDI note, skipping {kind}")
            return

        message = mido.Message(
            kind,
            channel=wire_channel(chain),
            note=min(max(module.midi_note, 0), 127),
            velocity=velocity,
        )

        with self._port_lock:
            if not self._port:
                logger.warning(f"MIDI output not open, dropping {message}")
                return
            self._port.send(message)

        logger.debug(f"Sent {message} for '{module.device_name}'")

    @property
    def is_open(self) -> bool:
        return self._port is not None

    @property
    def port_name(self) -> str:
        return self._port_name
