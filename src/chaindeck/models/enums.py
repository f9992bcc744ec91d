"""Enumerations for chaindeck."""

from enum import Enum


class Channel(str, Enum):
    """Stereo side a module sits on within a cell item."""

    LEFT = "L"
    RIGHT = "R"


class ModuleRole(str, Enum):
    """Routing role of a module within a chain."""

    SOURCE = "source"
    PROC = "proc"
    DEST = "dest"
    UNKNOWN = "unknown"  # Anything the document doesn't name, or no role at all

    @classmethod
    def from_raw(cls, value: object) -> "ModuleRole":
        """Map a raw role string to a role; unrecognized values become UNKNOWN."""
        if not isinstance(value, str):
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN


class SlotKind(str, Enum):
    """What a button slot does in the current view."""

    SYSTEM_NAV = "system_nav"  # Slot 0, back to the chain list
    CHAIN_HEADER = "chain_header"  # Slot 1 in chain detail view
    CHAIN_ENTRY = "chain_entry"  # A chain in the catalog view
    MODULE_ENTRY = "module_entry"  # A module in the chain detail view


class Dial(str, Enum):
    """Physical rotary encoders."""

    LEFT = "left"
    RIGHT = "right"
