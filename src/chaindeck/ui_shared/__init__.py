"""Shared UI definitions used by the layout engine and renderer."""

from .colors import (
    CHAIN_COLOR,
    ROLE_COLORS,
    SHOW_CHAINS_COLOR,
    TEXT_COLOR,
    get_role_color,
)

__all__ = [
    "CHAIN_COLOR",
    "ROLE_COLORS",
    "SHOW_CHAINS_COLOR",
    "TEXT_COLOR",
    "get_role_color",
]
