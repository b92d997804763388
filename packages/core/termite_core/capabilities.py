"""Interfaces of the external terminal widget, window, and browser collaborators."""

from __future__ import annotations

from typing import Protocol, Sequence

from termite_theme import ColorValue

from .models import ButtonEvent, CursorBlinkMode, CursorShape


POINTING_HAND_CURSOR = "pointing-hand"


class TerminalWidget(Protocol):
    def set_font(self, description: str) -> None: ...

    def set_font_scale(self, scale: float) -> None: ...

    def get_font_scale(self) -> float: ...

    def set_scrollback_lines(self, lines: int) -> None: ...

    def set_cursor_blink_mode(self, mode: CursorBlinkMode) -> None: ...

    def set_cursor_shape(self, shape: CursorShape) -> None: ...

    def set_scroll_on_output(self, enabled: bool) -> None: ...

    def set_scroll_on_keystroke(self, enabled: bool) -> None: ...

    def set_audible_bell(self, enabled: bool) -> None: ...

    def set_mouse_autohide(self, enabled: bool) -> None: ...

    def set_allow_bold(self, enabled: bool) -> None: ...

    def set_colors(self, palette: Sequence[ColorValue]) -> None: ...

    def set_color_foreground(self, color: ColorValue) -> None: ...

    def set_color_bold(self, color: ColorValue) -> None: ...

    def set_color_background(self, color: ColorValue) -> None: ...

    def set_color_cursor(self, color: ColorValue) -> None: ...

    def set_color_cursor_foreground(self, color: ColorValue) -> None: ...

    def set_color_highlight(self, color: ColorValue) -> None: ...

    def match_add_regex(self, pattern: str) -> int:
        """Register a match pattern and return its tag."""
        ...

    def match_set_cursor(self, tag: int, cursor: str) -> None: ...

    def match_remove(self, tag: int) -> None: ...

    def match_check_event(self, event: ButtonEvent) -> str | None:
        """Return the text matched by a registered pattern under the event position."""
        ...

    def copy_clipboard(self) -> None: ...

    def paste_clipboard(self) -> None: ...


class TerminalWindow(Protocol):
    def fullscreen(self) -> None: ...

    def unfullscreen(self) -> None: ...

    def set_urgency_hint(self, urgent: bool) -> None: ...

    def set_background_override(self, color: ColorValue) -> None: ...

    def set_role(self, role: str) -> None: ...


class BrowserLauncher(Protocol):
    def __call__(self, browser: str | None, url: str) -> None: ...
