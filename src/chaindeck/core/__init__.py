"""Navigation and input routing core."""

from .activation import LoggingActivator, ModuleActivator
from .input_router import (
    DialBinding,
    InputRouter,
    SlotAction,
    normalize_key_index,
    resolve_dial,
)
from .state_machine import (
    CatalogView,
    ChainDetailView,
    NavigationSession,
    NavigationState,
    NavigationStateMachine,
)

__all__ = [
    "CatalogView",
    "ChainDetailView",
    "DialBinding",
    "InputRouter",
    "LoggingActivator",
    "ModuleActivator",
    "NavigationSession",
    "NavigationState",
    "NavigationStateMachine",
    "SlotAction",
    "normalize_key_index",
    "resolve_dial",
]
