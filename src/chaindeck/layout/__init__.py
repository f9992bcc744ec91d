"""Button layout engine."""

from .engine import (
    CHAIN_HEADER_INDEX,
    FIRST_CONTENT_INDEX,
    MAX_CONTENT_SLOTS,
    SHOW_CHAINS_INDEX,
    SHOW_CHAINS_TEXT,
    ButtonLayoutEngine,
)

__all__ = [
    "CHAIN_HEADER_INDEX",
    "FIRST_CONTENT_INDEX",
    "MAX_CONTENT_SLOTS",
    "SHOW_CHAINS_INDEX",
    "SHOW_CHAINS_TEXT",
    "ButtonLayoutEngine",
]
