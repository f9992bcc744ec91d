"""Button color scheme.

- Show Chains (slot 0): Red
- Chains and the chain header: Brown
- Modules: Role-specific colors (source=dark blue, proc=dark orange,
  dest=dark green, anything else=neutral grey)
- Label text: White
"""

from chaindeck.colors import COLORS
from chaindeck.models import Color, ModuleRole

SHOW_CHAINS_COLOR = COLORS.RED

CHAIN_COLOR = COLORS.BROWN

TEXT_COLOR = COLORS.WHITE

ROLE_COLORS: dict[ModuleRole, Color] = {
    ModuleRole.SOURCE: COLORS.DARK_BLUE,
    ModuleRole.PROC: COLORS.DARK_ORANGE,
    ModuleRole.DEST: COLORS.DARK_GREEN,
    ModuleRole.UNKNOWN: COLORS.GREY_NEUTRAL,
}


def get_role_color(role: ModuleRole) -> Color:
    """Get the background color for a module role."""
    return ROLE_COLORS.get(role, COLORS.GREY_NEUTRAL)
