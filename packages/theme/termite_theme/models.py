"""Typed color models."""

from __future__ import annotations

from dataclasses import dataclass


PALETTE_SIZE = 256


@dataclass(frozen=True)
class ColorValue:
    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def to_css(self) -> str:
        r = int(round(self.red * 255))
        g = int(round(self.green * 255))
        b = int(round(self.blue * 255))
        if self.alpha >= 1.0:
            return f"rgb({r},{g},{b})"
        return f"rgba({r},{g},{b},{self.alpha:g})"

    def to_rgb8(self) -> tuple[int, int, int]:
        return (
            int(round(self.red * 255)),
            int(round(self.green * 255)),
            int(round(self.blue * 255)),
        )


@dataclass(frozen=True)
class NamedColors:
    foreground: ColorValue | None = None
    foreground_bold: ColorValue | None = None
    background: ColorValue | None = None
    cursor: ColorValue | None = None
    cursor_foreground: ColorValue | None = None
    highlight: ColorValue | None = None
