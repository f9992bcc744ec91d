"""Data models for chaindeck."""

from .catalog import UNKNOWN_DEVICE, UNNAMED_CHAIN, CatalogModel, Chain, Module
from .color import Color
from .config import AppConfig
from .enums import Channel, Dial, ModuleRole, SlotKind
from .slot import ButtonSlot, LabelSpec

__all__ = [
    "UNKNOWN_DEVICE",
    "UNNAMED_CHAIN",
    # Models
    "AppConfig",
    "ButtonSlot",
    "CatalogModel",
    "Chain",
    # Enums
    "Channel",
    "Color",
    "Dial",
    "LabelSpec",
    "Module",
    "ModuleRole",
    "SlotKind",
]
