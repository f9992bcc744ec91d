"""Render button labels into pixel buffers with Pillow."""

import logging
from dataclasses import dataclass

from PIL import Image, ImageDraw, ImageFont

from chaindeck.models import LabelSpec

logger = logging.getLogger(__name__)

OVERLAY_FONT_SIZE = 14
TEXT_MARGIN = 6


@dataclass(frozen=True)
class PixelBuffer:
    """Raw RGB pixels (row-major, 3 bytes per pixel) for one button face."""

    width: int
    height: int
    data: bytes

    def to_image(self) -> Image.Image:
        """Convert back to a Pillow image."""
        return Image.frombytes("RGB", (self.width, self.height), self.data)


def render_label(spec: LabelSpec, size: tuple[int, int]) -> PixelBuffer:
    """
    Draw a label onto a rounded background.

    The text is centered and wrapped on word boundaries to fit the button
    width. The overlay (MIDI channel) sits in the top-right corner.

    Args:
        spec: What to draw
        size: Button face resolution (width, height)

    Returns:
        PixelBuffer of exactly width * height * 3 bytes
    """
    width, height = size
    image = Image.new("RGB", size, (0, 0, 0))
    draw = ImageDraw.Draw(image)

    draw.rounded_rectangle(
        (0, 0, width - 1, height - 1),
        radius=spec.corner_radius,
        fill=spec.background_color.to_rgb_tuple(),
    )

    font = _font(spec.font_size)
    text = _wrap(draw, spec.text, font, width - 2 * TEXT_MARGIN)
    left, top, right, bottom = draw.multiline_textbbox((0, 0), text, font=font, align="center")
    origin = ((width - (right - left)) / 2 - left, (height - (bottom - top)) / 2 - top)
    draw.multiline_text(origin, text, font=font, fill=spec.text_color.to_rgb_tuple(), align="center")

    if spec.overlay_text is not None:
        draw.text(
            (width * 0.95, height * 0.15),
            spec.overlay_text,
            font=_font(OVERLAY_FONT_SIZE),
            fill=spec.text_color.to_rgb_tuple(),
            anchor="rm",
        )

    return PixelBuffer(width=width, height=height, data=image.tobytes())


def _font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    return ImageFont.load_default(size=size)


def _wrap(draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> str:
    words = text.split()
    if not words:
        return text

    lines: list[str] = []
    current = words[0]
    for word in words[1:]:
        candidate = f"{current} {word}"
        if draw.textlength(candidate, font=font) <= max_width:
            current = candidate
        else:
            lines.append(current)
            current = word
    lines.append(current)
    return "\n".join(lines)
