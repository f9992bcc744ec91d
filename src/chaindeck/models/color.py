"""Color model for button faces."""

from pydantic import BaseModel, ConfigDict, Field


class Color(BaseModel):
    """Standard 8-bit RGB color model.

    The model is frozen so label specs built from it compare by value and
    can be reused across redraws.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @classmethod
    def off(cls) -> "Color":
        """Create off (black) color."""
        return cls(r=0, g=0, b=0)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Create a color from a CSS hex string ('#RRGGBB' or 'RRGGBB').

        Example:
            >>> Color.from_hex("#8B4513")
            Color(r=139, g=69, b=19)
        """
        digits = value.lstrip("#")
        if len(digits) != 6:
            raise ValueError(f"Expected a #RRGGBB color, got {value!r}")
        return cls(r=int(digits[0:2], 16), g=int(digits[2:4], 16), b=int(digits[4:6], 16))

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Convert to CSS hex color string (e.g., '#FF0000')."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"
