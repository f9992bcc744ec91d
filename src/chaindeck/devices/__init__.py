"""Panel transport abstractions and the deck controller."""

from .controller import DeckController
from .protocols import DeviceHandle, DeviceInfo, DeviceTransport, EventKind

__all__ = [
    "DeckController",
    "DeviceHandle",
    "DeviceInfo",
    "DeviceTransport",
    "EventKind",
]
