"""Button face rendering."""

from .label import PixelBuffer, render_label

__all__ = ["PixelBuffer", "render_label"]
