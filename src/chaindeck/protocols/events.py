"""Domain events for the observer pattern."""

from enum import Enum


class NavigationEvent(Enum):
    """Events from the navigation state machine."""

    CATALOG_LOADED = "catalog_loaded"  # A new catalog replaced the old one
    VIEW_CHANGED = "view_changed"  # Catalog or chain detail view was (re)drawn
    MODULE_ACTIVATED = "module_activated"  # A module button was pressed
    MODULE_RELEASED = "module_released"  # A module button was released
