"""Color definitions - single source of truth for button face colors.

Colors are standard 8-bit RGB `Color` objects. The renderer converts them to
the panel's pixel format; nothing above the renderer knows about pixels.

Example:
    ```python
    from chaindeck.colors import COLORS

    red = COLORS.RED          # Color(r=255, g=0, b=0)
    brown = COLORS.BROWN      # Color(r=139, g=69, b=19)
    ```
"""

from chaindeck.models import Color


class COLORS:
    """Named color constants."""

    # ============================================================================
    # PRIMARY COLORS
    # ============================================================================

    RED: Color = Color(r=255, g=0, b=0)
    """Red - Used for the Show Chains button"""

    WHITE: Color = Color(r=255, g=255, b=255)
    """White - Default label text"""

    BLACK: Color = Color(r=0, g=0, b=0)
    """Black (off) - Cleared buttons"""

    # ============================================================================
    # ACCENTS
    # ============================================================================

    BROWN: Color = Color(r=139, g=69, b=19)
    """Saddle brown - Used for chain buttons"""

    DARK_BLUE: Color = Color(r=0, g=0, b=139)
    """Dark blue - Source modules"""

    DARK_ORANGE: Color = Color(r=255, g=140, b=0)
    """Dark orange - Processor modules"""

    DARK_GREEN: Color = Color(r=0, g=100, b=0)
    """Dark green - Destination modules"""

    # ============================================================================
    # GREYS
    # ============================================================================

    GREY_NEUTRAL: Color = Color(r=51, g=51, b=51)
    """Neutral dark grey - Modules with no known role"""


__all__ = ["COLORS"]
