"""Observer protocol definitions."""

from typing import Any, Protocol, runtime_checkable

from .events import NavigationEvent


@runtime_checkable
class NavigationObserver(Protocol):
    """
    Observer that receives navigation events.

    Keyword arguments depend on the event:
    - CATALOG_LOADED: catalog
    - VIEW_CHANGED: view, slots
    - MODULE_ACTIVATED / MODULE_RELEASED: chain, module

    Note:
        Called from the input router thread while the navigation lock is
        held; implementations must not block.
    """

    def on_navigation_event(self, event: NavigationEvent, **kwargs: Any) -> None:
        ...
