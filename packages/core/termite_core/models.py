"""Typed models for resolved terminal settings and session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from termite_theme import ColorValue, NamedColors, build_palette


DEFAULT_BROWSER = "xdg-open"


class CursorBlinkMode(str, Enum):
    SYSTEM = "system"
    ON = "on"
    OFF = "off"


class CursorShape(str, Enum):
    BLOCK = "block"
    IBEAM = "ibeam"
    UNDERLINE = "underline"


class WindowMode(str, Enum):
    WINDOWED = "Windowed"
    FULLSCREEN = "Fullscreen"


class KeyAction(str, Enum):
    ZOOM_IN = "ZoomIn"
    ZOOM_OUT = "ZoomOut"
    ZOOM_RESET = "ZoomReset"
    COPY = "Copy"
    PASTE = "Paste"
    RELOAD = "Reload"
    TOGGLE_FULLSCREEN = "ToggleFullscreen"


def _default_palette() -> tuple[ColorValue, ...]:
    return build_palette({})


@dataclass(frozen=True)
class Settings:
    scroll_on_output: bool = False
    scroll_on_keystroke: bool = True
    audible_bell: bool = False
    mouse_autohide: bool = False
    allow_bold: bool = True
    urgent_on_bell: bool = True
    clickable_url: bool = True
    browser: str = DEFAULT_BROWSER
    font: str | None = None
    scrollback_lines: int | None = None
    # None leaves the widget's current mode untouched.
    cursor_blink: CursorBlinkMode | None = None
    cursor_shape: CursorShape | None = None
    palette: tuple[ColorValue, ...] = field(default_factory=_default_palette)
    colors: NamedColors = field(default_factory=NamedColors)
    url_tag: int | None = None


@dataclass(frozen=True)
class ButtonEvent:
    button: int
    x: float
    y: float
    press: bool = True
