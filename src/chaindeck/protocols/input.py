"""Input event messages.

The controller turns every transport callback into one of these messages
and queues it for the input router. Payloads stay raw here; the router
normalizes them.
"""

from dataclasses import dataclass
from typing import Any


class InputEvent:
    """Input from the panel, delivered to the router in arrival order."""

    pass


@dataclass(frozen=True)
class ButtonDown(InputEvent):
    """Button was pressed."""

    index: Any  # Raw key payload (int, or object/mapping carrying `index`)


@dataclass(frozen=True)
class ButtonUp(InputEvent):
    """Button was released."""

    index: Any


@dataclass(frozen=True)
class DialRotate(InputEvent):
    """Dial was turned by delta ticks (negative is counter-clockwise)."""

    dial: Any
    delta: int


@dataclass(frozen=True)
class DialPress(InputEvent):
    """Dial was pushed."""

    dial: Any


@dataclass(frozen=True)
class DialRelease(InputEvent):
    """Dial was released."""

    dial: Any
