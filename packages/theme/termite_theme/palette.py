"""256-color palette generation with sparse user overrides."""

from __future__ import annotations

import logging
from typing import Mapping

from .color import parse_color
from .models import PALETTE_SIZE, ColorValue

ANSI_COLORS = 16
CUBE_END = 232

_ANSI_BASE = 0xC000
_ANSI_BRIGHT = 0x3FFF
_CHANNEL_MAX = 65535.0

logger = logging.getLogger("termite.theme")


def _ansi_color(index: int) -> ColorValue:
    bright = _ANSI_BRIGHT if index > 7 else 0

    def channel(bit: int) -> float:
        return ((_ANSI_BASE if index & bit else 0) + bright) / _CHANNEL_MAX

    return ColorValue(red=channel(1), green=channel(2), blue=channel(4), alpha=0.0)


def _cube_level(component: int) -> float:
    v = 0 if component == 0 else component * 40 + 55
    return (v | v << 8) / _CHANNEL_MAX


def _cube_color(index: int) -> ColorValue:
    j = index - ANSI_COLORS
    r, g, b = j // 36, (j // 6) % 6, j % 6
    return ColorValue(red=_cube_level(r), green=_cube_level(g), blue=_cube_level(b), alpha=0.0)


def _gray_color(index: int) -> ColorValue:
    shade = 8 + (index - CUBE_END) * 10
    value = (shade | shade << 8) / _CHANNEL_MAX
    return ColorValue(red=value, green=value, blue=value, alpha=0.0)


def default_color(index: int) -> ColorValue:
    """Generated color for a palette slot that has no user override.

    Generated entries carry alpha 0; the terminal widget treats that as the
    opaque base color, so it must not be normalized to 1.
    """
    if not 0 <= index < PALETTE_SIZE:
        raise IndexError(f"palette index out of range: {index}")
    if index < ANSI_COLORS:
        return _ansi_color(index)
    if index < CUBE_END:
        return _cube_color(index)
    return _gray_color(index)


def build_palette(overrides: Mapping[int, str] | None = None) -> tuple[ColorValue, ...]:
    overrides = overrides or {}
    palette: list[ColorValue] = []
    for index in range(PALETTE_SIZE):
        raw = overrides.get(index)
        if raw is not None:
            color = parse_color(raw)
            if color is not None:
                palette.append(color)
                continue
            logger.warning(
                f"invalid color string: {raw}",
                extra={"event": "invalid_color", "key": f"color{index}"},
            )
        palette.append(default_color(index))
    return tuple(palette)
