"""Domain events, input messages and observer protocols."""

from .events import NavigationEvent
from .input import ButtonDown, ButtonUp, DialPress, DialRelease, DialRotate, InputEvent
from .observers import NavigationObserver

__all__ = [
    "ButtonDown",
    "ButtonUp",
    "DialPress",
    "DialRelease",
    "DialRotate",
    "InputEvent",
    "NavigationEvent",
    "NavigationObserver",
]
