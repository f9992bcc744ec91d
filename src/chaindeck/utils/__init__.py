"""Shared utilities."""

from .observer import ObserverManager

__all__ = ["ObserverManager"]
