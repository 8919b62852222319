"""Parameter label drawn over rendered frames."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import PIL.Image
import PIL.ImageDraw
import PIL.ImageFont

MONOSPACE_FONTS = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/truetype/freefont/FreeMono.ttf",
)

LABEL_ORIGIN = (8, 8)
LABEL_PADDING = 6
LABEL_FONT_SIZE = 20
LABEL_BACKGROUND = (0, 0, 0, 160)
LABEL_FOREGROUND = (255, 255, 255, 255)


def label_font(size: int = LABEL_FONT_SIZE) -> PIL.ImageFont.ImageFont:
    existing = [path for path in MONOSPACE_FONTS if Path(path).is_file()]
    if existing:
        return PIL.ImageFont.truetype(existing[0], size)
    return PIL.ImageFont.load_default()


def draw_label(rgba: np.ndarray, label: str) -> np.ndarray:
    """Return a copy of ``rgba`` with ``label`` on a translucent box at the top left."""

    image = PIL.Image.fromarray(np.ascontiguousarray(rgba, dtype=np.uint8))
    draw = PIL.ImageDraw.Draw(image, "RGBA")
    font = label_font()

    x, y = LABEL_ORIGIN
    left, top, right, bottom = draw.textbbox((x, y), label, font=font)
    draw.rounded_rectangle(
        (left - LABEL_PADDING, top - LABEL_PADDING, right + LABEL_PADDING, bottom + LABEL_PADDING),
        radius=LABEL_PADDING,
        fill=LABEL_BACKGROUND,
    )
    draw.text((x, y), label, font=font, fill=LABEL_FOREGROUND)
    return np.array(image)
