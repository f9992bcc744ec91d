"""Panel transport protocols.

The transport is the only code that talks to hardware. It hands the
controller raw callbacks per EventKind and draws pre-rendered pixel buffers.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from chaindeck.rendering import PixelBuffer


class EventKind(str, Enum):
    """Event kinds a DeviceHandle can subscribe to."""

    DOWN = "down"  # callback(key)
    UP = "up"  # callback(key)
    DIAL = "dial"  # callback(dial, delta)
    DIAL_DOWN = "dialDown"  # callback(dial)
    DIAL_UP = "dialUp"  # callback(dial)


class DeviceInfo(BaseModel):
    """A panel found during enumeration."""

    model_config = ConfigDict(frozen=True)

    path: str
    model: str
    serial_number: str | None = None


# =================================================================
# Transport
# =================================================================


class DeviceHandle(Protocol):
    """An opened panel."""

    @property
    def model(self) -> str:
        """Model name of the panel."""
        ...

    @property
    def button_count(self) -> int:
        """Number of addressable buttons."""
        ...

    @property
    def button_size(self) -> tuple[int, int]:
        """Button face resolution (width, height) in pixels."""
        ...

    def on(self, kind: EventKind, callback: Callable[..., None]) -> None:
        """Subscribe to an event kind (see EventKind for callback arguments)."""
        ...

    def fill_button(self, index: int, pixels: PixelBuffer) -> None:
        """Draw a rendered face on one button."""
        ...

    def clear_all(self) -> None:
        """Blank every button."""
        ...

    def set_brightness(self, percent: int) -> None:
        """Set global brightness (0-100)."""
        ...

    def close(self) -> None:
        """Release the panel."""
        ...


class DeviceTransport(Protocol):
    """Enumerates and opens panels."""

    def list_devices(self) -> list[DeviceInfo]:
        """List connected panels."""
        ...

    def open(self, path: str) -> DeviceHandle:
        """Open a panel by its transport path."""
        ...
