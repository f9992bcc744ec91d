"""Chaindeck: browse routing chains on an Elgato Stream Deck."""

__version__ = "1.0.4"

from .devices import DeckController
from .models import AppConfig, CatalogModel, Chain, Module

__all__ = [
    "AppConfig",
    "CatalogModel",
    "Chain",
    "DeckController",
    "Module",
]
