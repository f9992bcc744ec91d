"""Device and rendering exceptions.

- DeviceError: Base class for panel transport errors
- DeviceNotFoundError: No matching panel at startup (fatal)
- DeviceOpenFailedError: Panel found but could not be opened (fatal)
- DeviceWriteError: Writing one button's pixels failed (per button)
- RenderError: Rendering one button's label failed (per button)
- MidiPortError: MIDI output for module activation unavailable (degrades to logging)
"""

from .base import ChainDeckError


class DeviceError(ChainDeckError):
    """Panel transport initialization or operation failed."""

    def __init__(self, user_message: str, device_path: str | None = None, **kwargs):
        """
        Initialize device error.

        Args:
            user_message: User-friendly error message
            device_path: Transport path of the device involved (if known)
        """
        super().__init__(user_message, **kwargs)
        self.device_path = device_path


class DeviceNotFoundError(DeviceError):
    """No panel of the requested model is connected."""

    def __init__(self, model: str, available_models: list[str] | None = None):
        """
        Initialize device-not-found error.

        Args:
            model: The model name that was searched for
            available_models: Models of the panels that were found instead
        """
        available_models = available_models or []
        if available_models:
            user_msg = (
                f"No Stream Deck {model} found. "
                f"Available devices: {', '.join(available_models)}"
            )
        else:
            user_msg = "No Stream Deck devices found"

        super().__init__(
            user_message=user_msg,
            technical_message=f"Device model '{model}' not in {available_models}",
            recoverable=False,
            recovery_hint=(
                "Check the USB connection, or pick another model with --model. "
                "Run 'chaindeck --list-devices' to see connected panels."
            ),
        )
        self.model = model
        self.available_models = available_models


class DeviceOpenFailedError(DeviceError):
    """The panel exists but the transport could not claim it."""

    def __init__(self, device_path: str, original_error: str | None = None):
        """
        Initialize device-open error.

        Args:
            device_path: Transport path of the device
            original_error: Error message from the transport library
        """
        user_msg = "Could not open Stream Deck"
        if original_error:
            user_msg += f": {original_error}"

        super().__init__(
            user_message=user_msg,
            device_path=device_path,
            technical_message=f"Failed to open {device_path}: {original_error}",
            recoverable=False,
            recovery_hint=(
                "If you have the Stream Deck app running, please close it and try again."
            ),
        )
        self.original_error = original_error


class DeviceWriteError(DeviceError):
    """Writing to a single button failed."""

    def __init__(self, button_index: int, original_error: str | None = None):
        super().__init__(
            user_message=f"Could not update button {button_index}",
            technical_message=f"Device write to button {button_index} failed: {original_error}",
            recoverable=True,
        )
        self.button_index = button_index


class RenderError(ChainDeckError):
    """Rendering a single button face failed."""

    def __init__(self, button_index: int, text: str, original_error: str | None = None):
        super().__init__(
            user_message=f"Could not render button {button_index} ('{text}')",
            technical_message=f"Render of '{text}' for button {button_index} failed: {original_error}",
            recoverable=True,
        )
        self.button_index = button_index
        self.text = text


class MidiPortError(DeviceError):
    """The MIDI output port for module activation could not be opened."""

    def __init__(self, port_name: str, available_ports: list[str] | None = None, original_error: str | None = None):
        """
        Initialize MIDI port error.

        Args:
            port_name: Requested output port name
            available_ports: Output ports that exist on this system
            original_error: Error message from the MIDI backend
        """
        available_ports = available_ports or []
        super().__init__(
            user_message=f"Could not open MIDI output '{port_name}'",
            device_path=port_name,
            technical_message=f"Opening MIDI output '{port_name}' failed: {original_error}",
            recoverable=True,
            recovery_hint=(
                f"Available MIDI outputs: {', '.join(available_ports)}"
                if available_ports
                else "No MIDI outputs found. Module presses will only be logged."
            ),
        )
        self.port_name = port_name
        self.available_ports = available_ports
