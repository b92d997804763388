"""Color parsing and palette generation for the terminal theme."""

from .color import parse_color
from .models import PALETTE_SIZE, ColorValue, NamedColors
from .palette import build_palette, default_color

__all__ = [
    "ColorValue",
    "NamedColors",
    "PALETTE_SIZE",
    "build_palette",
    "default_color",
    "parse_color",
]
