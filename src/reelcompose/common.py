"""reelcompose.common — shared constants and utilities.

Contains: timing defaults, seconds-to-frames conversion, color parsing,
font loading, and text rendering for preview slates.
"""

import math
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont


# ── Timing defaults ───────────────────────────────────────────────
# Bookends are authored in seconds; the transition overlap is authored
# in frames and does not scale with fps.

DEFAULT_FPS = 30
INTRO_SECONDS = 5.0
OUTRO_SECONDS = 5.0
TRANSITION_FRAMES = 10

NARRATION_PADDING_SECONDS = 1.0       # 0.5s lead-in + 0.5s lead-out
LAYER_PADDING_SECONDS = 1.0           # 0.5s fade-in + 0.5s fade-out
LAYER_FADE_SECONDS = 0.5
ANNOTATION_TRAILING_SECONDS = 1.0


def seconds_to_frames(seconds: float, fps: int) -> int:
    """Convert seconds to a whole frame count, rounding half up (2.5 -> 3)."""
    return math.floor(seconds * fps + 0.5)


# ── Font paths ─────────────────────────────────────────────────────
# Inter preferred for slate text, DejaVu Sans as fallback.

FONT_PATHS = [
    Path.home() / ".local/share/fonts/Inter.ttc",
    Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
]


# ── Color utilities ────────────────────────────────────────────────

def parse_hex_color(hex_str: str) -> tuple[int, int, int]:
    """Convert '#RRGGBB' or 'RRGGBB' string to (R, G, B) tuple."""
    hex_str = hex_str.lstrip("#")
    if len(hex_str) != 6:
        raise ValueError(f"Invalid hex color: '#{hex_str}'")
    return (int(hex_str[0:2], 16), int(hex_str[2:4], 16), int(hex_str[4:6], 16))


# ── Font loading ───────────────────────────────────────────────────

def load_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load Inter (or fallback) at the given size.

    Inter.ttc is a font collection; index 0 is Regular.
    """
    for font_path in FONT_PATHS:
        if font_path.exists():
            try:
                return ImageFont.truetype(str(font_path), size=size, index=0)
            except (OSError, IndexError):
                continue
    # Last resort: Pillow default bitmap font.
    return ImageFont.load_default()


# ── Text rendering ─────────────────────────────────────────────────

def render_text_on_image(
    img: Image.Image,
    text: str,
    position: tuple[int, int],
    font: ImageFont.FreeTypeFont,
    color: tuple[int, int, int],
    max_width: int | None = None,
) -> int:
    """Draw text on a Pillow image and return the text height.

    If max_width is set and text exceeds it, the text is truncated
    with an ellipsis so it fits within the specified pixel width.
    """
    draw = ImageDraw.Draw(img)

    if max_width:
        bbox = draw.textbbox((0, 0), text, font=font)
        while (bbox[2] - bbox[0]) > max_width and len(text) > 5:
            text = text[:-4] + "..."
            bbox = draw.textbbox((0, 0), text, font=font)

    draw.text(position, text, fill=color, font=font)
    bbox = draw.textbbox((0, 0), text, font=font)
    return bbox[3] - bbox[1]
