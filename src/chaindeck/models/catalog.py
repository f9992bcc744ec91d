"""Chain catalog models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .enums import Channel, ModuleRole

UNNAMED_CHAIN = "Unnamed Chain"
UNKNOWN_DEVICE = "Unknown Device"


class Module(BaseModel):
    """One leaf entry of a chain: a source, processor or destination."""

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, description="Module name from the document")
    device_name: str = Field(default=UNKNOWN_DEVICE, min_length=1, description="Display label")
    role: ModuleRole = Field(default=ModuleRole.UNKNOWN, description="Routing role")
    midi_note: int | None = Field(default=None, description="MIDI note that activates the module")
    channel: Channel = Field(description="Side of the cell item (L/R)")
    tags: list[str] | None = Field(default=None, description="Free-form tags")
    ab_group: str | int | None = Field(default=None, description="A/B group of the enclosing cell")
    phonia: Any | None = Field(default=None, description="Opaque phonia record, passed through")


class Chain(BaseModel):
    """A named, ordered routing path of modules."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default=UNNAMED_CHAIN, min_length=1, description="Display name")
    id: str | int | None = Field(default=None, description="Chain identifier")
    midi_channel: int | None = Field(default=None, description="MIDI channel shown on the button")
    active: bool = Field(default=False, description="Whether the chain is active")
    modules: list[Module] = Field(default_factory=list, description="Modules in source order")


class CatalogModel(BaseModel):
    """All chains loaded from one catalog document.

    Chain names are not required to be unique; name lookup returns the
    first match.
    """

    model_config = ConfigDict(frozen=True)

    chains: list[Chain] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when no chains are loaded."""
        return not self.chains

    def find_chain_by_display_name(self, text: str) -> Chain | None:
        """Return the first chain whose name equals text (case-sensitive)."""
        for chain in self.chains:
            if chain.name == text:
                return chain
        return None

    @classmethod
    def empty(cls) -> "CatalogModel":
        """Create a catalog with no chains."""
        return cls()
