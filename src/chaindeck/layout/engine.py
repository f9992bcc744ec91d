"""Button layout for the catalog and chain detail views.

Button map (Stream Deck Studio, 32 keys)::

    index 0      Show Chains (always)
    index 1      Chain header (chain detail view only)
    index 2..31  Content: chains, or the selected chain's modules

Layouts are pure: the same catalog or chain always yields equal slot lists,
so re-entering a view redraws exactly what was there before.
"""

import logging

from chaindeck.models import ButtonSlot, CatalogModel, Chain, LabelSpec, Module, SlotKind
from chaindeck.ui_shared import CHAIN_COLOR, SHOW_CHAINS_COLOR, TEXT_COLOR, get_role_color

logger = logging.getLogger(__name__)

SHOW_CHAINS_INDEX = 0
CHAIN_HEADER_INDEX = 1
FIRST_CONTENT_INDEX = 2
MAX_CONTENT_SLOTS = 30

SHOW_CHAINS_TEXT = "Show Chains"


class ButtonLayoutEngine:
    """Assigns catalog entries to button indices and builds their labels."""

    def __init__(self, nav_font_size: int = 16, module_font_size: int = 12, corner_radius: int = 20):
        """
        Initialize the layout engine.

        Args:
            nav_font_size: Font size for Show Chains, chains and the chain header
            module_font_size: Font size for module buttons
            corner_radius: Corner radius of every button background
        """
        self.nav_font_size = nav_font_size
        self.module_font_size = module_font_size
        self.corner_radius = corner_radius

    # ================================================================
    # VIEWS
    # ================================================================

    def layout_catalog_view(self, catalog: CatalogModel) -> list[ButtonSlot]:
        """
        Lay out the chain list.

        Chains beyond the 30th are not shown.

        Args:
            catalog: Loaded catalog

        Returns:
            Slots ordered by button index
        """
        slots = [self._show_chains_slot()]

        chains = self._truncate(catalog.chains, "chains")
        for offset, chain in enumerate(chains):
            slots.append(
                ButtonSlot(
                    index=FIRST_CONTENT_INDEX + offset,
                    kind=SlotKind.CHAIN_ENTRY,
                    label=self._chain_label(chain),
                    chain=chain,
                )
            )

        return slots

    def layout_chain_detail_view(self, chain: Chain) -> list[ButtonSlot]:
        """
        Lay out one chain's modules under the Show Chains and header buttons.

        Modules beyond the 30th are not shown.

        Args:
            chain: The selected chain

        Returns:
            Slots ordered by button index
        """
        slots = [
            self._show_chains_slot(),
            ButtonSlot(
                index=CHAIN_HEADER_INDEX,
                kind=SlotKind.CHAIN_HEADER,
                label=self._chain_label(chain),
                chain=chain,
            ),
        ]

        modules = self._truncate(chain.modules, f"modules of '{chain.name}'")
        for offset, module in enumerate(modules):
            slots.append(
                ButtonSlot(
                    index=FIRST_CONTENT_INDEX + offset,
                    kind=SlotKind.MODULE_ENTRY,
                    label=self._module_label(module),
                    chain=chain,
                    module=module,
                )
            )

        return slots

    # ================================================================
    # LABELS
    # ================================================================

    def _show_chains_slot(self) -> ButtonSlot:
        return ButtonSlot(
            index=SHOW_CHAINS_INDEX,
            kind=SlotKind.SYSTEM_NAV,
            label=LabelSpec(
                text=SHOW_CHAINS_TEXT,
                font_size=self.nav_font_size,
                text_color=TEXT_COLOR,
                background_color=SHOW_CHAINS_COLOR,
                corner_radius=self.corner_radius,
            ),
        )

    def _chain_label(self, chain: Chain) -> LabelSpec:
        return LabelSpec(
            text=chain.name,
            font_size=self.nav_font_size,
            text_color=TEXT_COLOR,
            background_color=CHAIN_COLOR,
            corner_radius=self.corner_radius,
            overlay_text=str(chain.midi_channel) if chain.midi_channel is not None else None,
        )

    def _module_label(self, module: Module) -> LabelSpec:
        return LabelSpec(
            text=module.device_name,
            font_size=self.module_font_size,
            text_color=TEXT_COLOR,
            background_color=get_role_color(module.role),
            corner_radius=self.corner_radius,
        )

    @staticmethod
    def _truncate[T](entries: list[T], what: str) -> list[T]:
        if len(entries) > MAX_CONTENT_SLOTS:
            logger.debug(
                f"Reached maximum button count ({MAX_CONTENT_SLOTS}). "
                f"Skipping remaining {len(entries) - MAX_CONTENT_SLOTS} {what}."
            )
        return entries[:MAX_CONTENT_SLOTS]
