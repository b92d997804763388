"""Color string parsing into normalized RGBA values."""

from __future__ import annotations

import re

from PIL import ImageColor

from .models import ColorValue


# #rrrgggbbb and #rrrrggggbbbb are accepted by X11-style parsers but not by Pillow.
_WIDE_HEX = re.compile(r"^#(?:[0-9a-fA-F]{9}|[0-9a-fA-F]{12})$")


def _parse_wide_hex(text: str) -> ColorValue:
    digits = (len(text) - 1) // 3
    scale = float(16**digits - 1)
    channels = [int(text[1 + i * digits : 1 + (i + 1) * digits], 16) / scale for i in range(3)]
    return ColorValue(red=channels[0], green=channels[1], blue=channels[2], alpha=1.0)


def parse_color(spec: str | None) -> ColorValue | None:
    """Parse a color specification, returning None when it is not understood.

    Named colors, ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``, the wide
    ``#rrrgggbbb``/``#rrrrggggbbbb`` forms and the functional ``rgb()``,
    ``hsl()`` and ``hsv()`` notations are recognized.
    """
    if not spec:
        return None
    text = spec.strip()
    if not text:
        return None

    if _WIDE_HEX.match(text):
        return _parse_wide_hex(text)

    try:
        rgba = ImageColor.getrgb(text)
    except ValueError:
        return None

    if len(rgba) == 3:
        rgba = (*rgba, 255)
    # Functional notations are not range checked by Pillow.
    r, g, b, a = (min(max(channel, 0), 255) for channel in rgba)
    return ColorValue(red=r / 255.0, green=g / 255.0, blue=b / 255.0, alpha=a / 255.0)
