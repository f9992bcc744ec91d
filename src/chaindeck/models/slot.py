"""Button slot and label models."""

from pydantic import BaseModel, ConfigDict, Field

from .catalog import Chain, Module
from .color import Color
from .enums import SlotKind


class LabelSpec(BaseModel):
    """Everything the renderer needs to draw one button face."""

    model_config = ConfigDict(frozen=True)

    text: str
    font_size: int = Field(default=20, gt=0)
    text_color: Color = Field(default_factory=lambda: Color(r=255, g=255, b=255))
    background_color: Color = Field(default_factory=Color.off)
    corner_radius: int = Field(default=20, ge=0)
    overlay_text: str | None = Field(default=None, description="Corner text, e.g. MIDI channel")


class ButtonSlot(BaseModel):
    """Binding of a physical button index to a label and its target in one view."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    kind: SlotKind
    label: LabelSpec
    chain: Chain | None = None
    module: Module | None = None

    @property
    def display_text(self) -> str:
        """Text shown on the button."""
        return self.label.text
