"""Two-state fullscreen toggle over the window capability."""

from __future__ import annotations

from .capabilities import TerminalWindow
from .models import WindowMode


class FullscreenToggle:
    def __init__(self, window: TerminalWindow) -> None:
        self.window = window
        self._mode = WindowMode.WINDOWED

    @property
    def mode(self) -> WindowMode:
        return self._mode

    @property
    def is_fullscreen(self) -> bool:
        return self._mode == WindowMode.FULLSCREEN

    def toggle(self) -> WindowMode:
        if self.is_fullscreen:
            self.window.unfullscreen()
            self._mode = WindowMode.WINDOWED
        else:
            self.window.fullscreen()
            self._mode = WindowMode.FULLSCREEN
        return self._mode
