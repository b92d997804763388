"""Option schema resolution and pushing settings to the terminal widget."""

from __future__ import annotations

import logging
import os
from typing import Mapping

from termite_theme import PALETTE_SIZE, ColorValue, NamedColors, build_palette, parse_color

from .capabilities import POINTING_HAND_CURSOR, TerminalWidget, TerminalWindow
from .config import COLORS_SECTION, OPTIONS_SECTION, ConfigDocument
from .models import DEFAULT_BROWSER, CursorBlinkMode, CursorShape, Settings
from .urls import URL_PATTERN

logger = logging.getLogger("termite.resolver")

BOOL_OPTIONS: dict[str, bool] = {
    "scroll_on_output": False,
    "scroll_on_keystroke": True,
    "audible_bell": False,
    "mouse_autohide": False,
    "allow_bold": True,
    "urgent_on_bell": True,
    "clickable_url": True,
}

NAMED_COLOR_KEYS = (
    "foreground",
    "foreground_bold",
    "background",
    "cursor",
    "cursor_foreground",
    "highlight",
)

_BLINK_MODES = {mode.value: mode for mode in CursorBlinkMode}
_CURSOR_SHAPES = {shape.value: shape for shape in CursorShape}


def get_config_color(document: ConfigDocument, section: str, key: str) -> ColorValue | None:
    raw = document.get_string(section, key)
    if raw is None:
        return None
    color = parse_color(raw)
    if color is None:
        logger.warning(f"invalid color string: {raw}", extra={"event": "invalid_color", "key": key})
    return color


def palette_overrides(document: ConfigDocument) -> dict[int, str]:
    overrides: dict[int, str] = {}
    for index in range(PALETTE_SIZE):
        raw = document.get_string(COLORS_SECTION, f"color{index}")
        if raw is not None:
            overrides[index] = raw
    return overrides


def load_named_colors(document: ConfigDocument) -> NamedColors:
    values = {key: get_config_color(document, COLORS_SECTION, key) for key in NAMED_COLOR_KEYS}
    return NamedColors(**values)


def resolve_browser(document: ConfigDocument, environ: Mapping[str, str]) -> str:
    configured = document.get_string(OPTIONS_SECTION, "browser")
    if configured is not None:
        return configured
    return environ.get("BROWSER") or DEFAULT_BROWSER


def _lookup_enum(document: ConfigDocument, key: str, table: dict):
    # Unrecognized values are ignored without a warning; the widget keeps its mode.
    raw = document.get_string(OPTIONS_SECTION, key)
    if raw is None:
        return None
    return table.get(raw.lower())


class ConfigResolver:
    """Turns a loaded document into Settings and pushes them to the widget."""

    def __init__(
        self,
        terminal: TerminalWidget,
        window: TerminalWindow,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.terminal = terminal
        self.window = window
        self.environ = environ if environ is not None else os.environ

    def _flag(self, document: ConfigDocument, key: str) -> bool:
        value = document.get_bool(OPTIONS_SECTION, key)
        return BOOL_OPTIONS[key] if value is None else value

    def resolve(self, document: ConfigDocument | None, previous: Settings) -> Settings:
        if document is None:
            return previous

        flags = {key: self._flag(document, key) for key in BOOL_OPTIONS}
        settings = Settings(
            **flags,
            browser=resolve_browser(document, self.environ),
            font=document.get_string(OPTIONS_SECTION, "font"),
            scrollback_lines=document.get_int(OPTIONS_SECTION, "scrollback_lines"),
            cursor_blink=_lookup_enum(document, "cursor_blink", _BLINK_MODES),
            cursor_shape=_lookup_enum(document, "cursor_shape", _CURSOR_SHAPES),
            palette=build_palette(palette_overrides(document)),
            colors=load_named_colors(document),
            url_tag=self._sync_url_match(flags["clickable_url"], previous.url_tag),
        )
        self.apply(settings)
        logger.info("settings applied", extra={"event": "settings_applied"})
        return settings

    def _sync_url_match(self, enabled: bool, tag: int | None) -> int | None:
        if enabled:
            if tag is None:
                tag = self.terminal.match_add_regex(URL_PATTERN)
                self.terminal.match_set_cursor(tag, POINTING_HAND_CURSOR)
            return tag
        if tag is not None:
            self.terminal.match_remove(tag)
        return None

    def apply(self, settings: Settings) -> None:
        t = self.terminal
        t.set_scroll_on_output(settings.scroll_on_output)
        t.set_scroll_on_keystroke(settings.scroll_on_keystroke)
        t.set_audible_bell(settings.audible_bell)
        t.set_mouse_autohide(settings.mouse_autohide)
        t.set_allow_bold(settings.allow_bold)

        if settings.font is not None:
            t.set_font(settings.font)
        if settings.scrollback_lines is not None:
            t.set_scrollback_lines(settings.scrollback_lines)
        if settings.cursor_blink is not None:
            t.set_cursor_blink_mode(settings.cursor_blink)
        if settings.cursor_shape is not None:
            t.set_cursor_shape(settings.cursor_shape)

        self.apply_theme(settings)

    def apply_theme(self, settings: Settings) -> None:
        t = self.terminal
        colors = settings.colors
        t.set_colors(settings.palette)
        if colors.foreground is not None:
            t.set_color_foreground(colors.foreground)
            t.set_color_bold(colors.foreground)
        if colors.foreground_bold is not None:
            t.set_color_bold(colors.foreground_bold)
        if colors.background is not None:
            t.set_color_background(colors.background)
            self.window.set_background_override(colors.background)
        if colors.cursor is not None:
            t.set_color_cursor(colors.cursor)
        if colors.cursor_foreground is not None:
            t.set_color_cursor_foreground(colors.cursor_foreground)
        if colors.highlight is not None:
            t.set_color_highlight(colors.highlight)
