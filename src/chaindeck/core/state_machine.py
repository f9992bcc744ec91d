"""Two-level navigation over the chain catalog.

Views::

    ┌──────────────┐  chain button pressed   ┌────────────────────────┐
    │ CatalogView  │ ──────────────────────► │ ChainDetailView(chain) │
    │              │ ◄────────────────────── │                        │
    └──────────────┘   Show Chains (0)       └────────────────────────┘
       ▲      │                                 │  header (1): log chain
       └──────┘ Show Chains (0): redraw         │  module (2..): activate

Every transition redraws the whole panel and then installs a fresh slot
table on the input router, so no button keeps an action from an earlier
view. Until a catalog loads successfully no slots exist and every press is
a no-op.

The session (catalog, view, slots) is guarded by one re-entrant lock held
for the whole handling of an event, redraw included. Loads take the same
lock, so a reload waits for the current redraw and vice versa.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from chaindeck.catalog import load_catalog
from chaindeck.exceptions import ErrorContext
from chaindeck.layout import ButtonLayoutEngine
from chaindeck.models import ButtonSlot, CatalogModel, Chain, Module, SlotKind
from chaindeck.protocols import NavigationEvent, NavigationObserver
from chaindeck.utils import ObserverManager

from .activation import LoggingActivator, ModuleActivator
from .input_router import InputRouter, SlotAction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogView:
    """The chain list; no chain selected."""


@dataclass(frozen=True)
class ChainDetailView:
    """One chain's modules."""

    chain: Chain


NavigationState = CatalogView | ChainDetailView


@dataclass
class NavigationSession:
    """Mutable navigation state owned by the state machine."""

    catalog: CatalogModel = field(default_factory=CatalogModel.empty)
    view: NavigationState | None = None
    slots: list[ButtonSlot] = field(default_factory=list)
    # Bumped on every slot table change; actions from older tables are ignored
    generation: int = 0


class NavigationStateMachine:
    """
    Holds the current view and binds button slots to navigation or module actions.

    Args:
        router: Router whose slot table this machine owns
        layout: Layout engine producing the slots of each view
        render: Called with the full slot list before each transition;
                must clear the panel and draw every slot
        activator: Receives module presses (defaults to LoggingActivator)
    """

    def __init__(
        self,
        router: InputRouter,
        layout: ButtonLayoutEngine,
        render: Callable[[list[ButtonSlot]], None],
        activator: ModuleActivator | None = None,
    ):
        self._router = router
        self._layout = layout
        self._render = render
        self._activator = activator or LoggingActivator()
        self._lock = threading.RLock()
        self._session = NavigationSession()
        self._observers = ObserverManager[NavigationObserver](observer_type_name="navigation")

    # ================================================================
    # OBSERVERS
    # ================================================================

    def register_observer(self, observer: NavigationObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: NavigationObserver) -> None:
        self._observers.unregister(observer)

    def _notify(self, event: NavigationEvent, **kwargs: Any) -> None:
        self._observers.notify("on_navigation_event", event, **kwargs)

    # ================================================================
    # CATALOG
    # ================================================================

    def load_catalog(self, raw_tree: Any, source: str | None = None) -> CatalogModel:
        """
        Parse a decoded document and make it the current catalog.

        Args:
            raw_tree: Decoded chain layout document
            source: Where the document came from, for error messages

        Raises:
            EmptyCatalogError: If the document has no chains; the previous
                catalog and view stay in place
        """
        with self._lock:
            catalog = load_catalog(raw_tree, source=source)
            self.set_catalog(catalog)
            return catalog

    def set_catalog(self, catalog: CatalogModel) -> None:
        """Replace the catalog and show the chain list."""
        if catalog.is_empty:
            logger.warning("Ignoring empty catalog")
            return

        with self._lock:
            self._session.catalog = catalog
            logger.info(f"Catalog loaded: {len(catalog.chains)} chains")
            self._notify(NavigationEvent.CATALOG_LOADED, catalog=catalog)
            self.show_catalog()

    # ================================================================
    # TRANSITIONS
    # ================================================================

    def show_catalog(self) -> None:
        """Enter (or redraw) the chain list."""
        with self._lock:
            catalog = self._session.catalog
            if catalog.is_empty:
                logger.warning("No catalog loaded, navigation disabled")
                return

            logger.info("Showing chains")
            self._enter(CatalogView(), self._layout.layout_catalog_view(catalog))

    def show_chain(self, chain: Chain) -> None:
        """Enter the detail view of a chain."""
        with self._lock:
            logger.info(f"Loading chain: {chain.name}")
            self._enter(ChainDetailView(chain), self._layout.layout_chain_detail_view(chain))

    def select_chain_by_text(self, text: str) -> bool:
        """
        Enter the first chain named text.

        Returns:
            False if no chain has that name
        """
        with self._lock:
            chain = self._session.catalog.find_chain_by_display_name(text)
            if chain is None:
                names = [c.name for c in self._session.catalog.chains]
                logger.info(f"No chain found with text '{text}'. Available chains: {names}")
                return False

            self.show_chain(chain)
            return True

    def _enter(self, view: NavigationState, slots: list[ButtonSlot]) -> None:
        try:
            self._render(slots)
        except Exception as e:
            logger.error(f"Redraw failed while entering {view}: {e}", exc_info=True)

        self._session.generation += 1
        self._session.view = view
        self._session.slots = slots
        self._router.install_slots(self._bind_actions(slots, self._session.generation))
        self._notify(NavigationEvent.VIEW_CHANGED, view=view, slots=slots)

    # ================================================================
    # SLOT ACTIONS
    # ================================================================

    def _bind_actions(self, slots: list[ButtonSlot], generation: int) -> dict[int, SlotAction]:
        actions: dict[int, SlotAction] = {}
        for slot in slots:
            if slot.kind == SlotKind.SYSTEM_NAV:
                action = SlotAction(on_press=self._guard(generation, self.show_catalog))
            elif slot.kind == SlotKind.CHAIN_ENTRY:
                action = SlotAction(
                    on_press=self._guard(generation, self.select_chain_by_text, slot.display_text)
                )
            elif slot.kind == SlotKind.CHAIN_HEADER:
                action = SlotAction(on_press=self._guard(generation, self._describe_chain, slot.chain))
            else:
                action = SlotAction(
                    on_press=self._guard(generation, self._activate, slot.chain, slot.module),
                    on_release=self._guard(generation, self._release, slot.chain, slot.module),
                )
            actions[slot.index] = action
        return actions

    def _guard(self, generation: int, func: Callable[..., Any], *args: Any) -> Callable[[], None]:
        def run() -> None:
            with self._lock:
                if generation != self._session.generation:
                    logger.debug(f"Ignoring action from a replaced layout: {func.__name__}")
                    return
                func(*args)

        return run

    def _describe_chain(self, chain: Chain) -> None:
        logger.info(f"Current chain button pressed: '{chain.name}'\n{chain.model_dump_json(indent=2)}")

    def _activate(self, chain: Chain, module: Module) -> None:
        logger.info(f"Module button pressed: '{module.device_name}'")
        with ErrorContext(f"activate module '{module.device_name}'", logger, re_raise=False):
            self._activator.activate(chain, module)
        self._notify(NavigationEvent.MODULE_ACTIVATED, chain=chain, module=module)

    def _release(self, chain: Chain, module: Module) -> None:
        with ErrorContext(f"release module '{module.device_name}'", logger, re_raise=False):
            self._activator.release(chain, module)
        self._notify(NavigationEvent.MODULE_RELEASED, chain=chain, module=module)

    # ================================================================
    # PROPERTIES
    # ================================================================

    @property
    def catalog(self) -> CatalogModel:
        with self._lock:
            return self._session.catalog

    @property
    def view(self) -> NavigationState | None:
        """Current view, or None before the first successful load."""
        with self._lock:
            return self._session.view

    @property
    def slots(self) -> list[ButtonSlot]:
        """Slots of the current view, ordered by index."""
        with self._lock:
            return list(self._session.slots)

    @property
    def is_navigation_enabled(self) -> bool:
        with self._lock:
            return not self._session.catalog.is_empty
