"""Session state owner: settings, zoom, fullscreen, key bindings, and reload."""

from __future__ import annotations

import logging
import signal
from pathlib import Path
from typing import Callable, Mapping

from .browser import launch_browser
from .capabilities import BrowserLauncher, TerminalWidget, TerminalWindow
from .config import ConfigDocument, load_config
from .fullscreen import FullscreenToggle
from .models import ButtonEvent, KeyAction, Settings
from .resolver import ConfigResolver
from .urls import handle_button_press
from .zoom import ZoomStepper

logger = logging.getLogger("termite.session")

# Keys bound with Ctrl+Shift held, by lowercase key name.
CTRL_SHIFT_BINDINGS: dict[str, KeyAction] = {
    "plus": KeyAction.ZOOM_IN,
    "c": KeyAction.COPY,
    "v": KeyAction.PASTE,
    "r": KeyAction.RELOAD,
    "underscore": KeyAction.ZOOM_OUT,
    "parenright": KeyAction.ZOOM_RESET,
}
FULLSCREEN_KEY = "F11"


def action_for_key(key: str, ctrl: bool = False, shift: bool = False, alt: bool = False) -> KeyAction | None:
    if ctrl and shift and not alt:
        return CTRL_SHIFT_BINDINGS.get(key.lower())
    if key == FULLSCREEN_KEY:
        return KeyAction.TOGGLE_FULLSCREEN
    return None


class TerminalSession:
    """Owns all mutable terminal state; every method runs on the main loop."""

    def __init__(
        self,
        terminal: TerminalWidget,
        window: TerminalWindow,
        config_path: Path | str | None = None,
        environ: Mapping[str, str] | None = None,
        launcher: BrowserLauncher = launch_browser,
        loader: Callable[[Path | str | None], ConfigDocument | None] = load_config,
    ) -> None:
        self.terminal = terminal
        self.window = window
        self.config_path = config_path
        self.launcher = launcher
        self.loader = loader
        self.resolver = ConfigResolver(terminal, window, environ)
        self.zoom = ZoomStepper(terminal)
        self.fullscreen = FullscreenToggle(window)
        self.settings = Settings()
        self.reload_requested = False

    def load(self) -> Settings:
        document = self.loader(self.config_path)
        self.settings = self.resolver.resolve(document, self.settings)
        return self.settings

    def request_reload(self) -> None:
        self.reload_requested = True

    def process_pending_reload(self) -> bool:
        if not self.reload_requested:
            return False
        self.reload_requested = False
        logger.info("reloading config", extra={"event": "config_reload"})
        self.load()
        return True

    def perform(self, action: KeyAction) -> None:
        if action == KeyAction.ZOOM_IN:
            self.zoom.increase()
        elif action == KeyAction.ZOOM_OUT:
            self.zoom.decrease()
        elif action == KeyAction.ZOOM_RESET:
            self.zoom.reset()
        elif action == KeyAction.COPY:
            self.terminal.copy_clipboard()
        elif action == KeyAction.PASTE:
            self.terminal.paste_clipboard()
        elif action == KeyAction.RELOAD:
            self.load()
        elif action == KeyAction.TOGGLE_FULLSCREEN:
            self.fullscreen.toggle()

    def handle_key(self, key: str, ctrl: bool = False, shift: bool = False, alt: bool = False) -> bool:
        action = action_for_key(key, ctrl=ctrl, shift=shift, alt=alt)
        if action is None:
            return False
        self.perform(action)
        return True

    def handle_button_press(self, event: ButtonEvent) -> bool:
        return handle_button_press(event, self.settings, self.terminal, self.launcher)

    def on_bell(self) -> None:
        if self.settings.urgent_on_bell:
            self.window.set_urgency_hint(True)

    def on_focus_changed(self) -> None:
        self.window.set_urgency_hint(False)


def install_reload_signal(session: TerminalSession, signum: int = signal.SIGUSR1) -> None:
    """Route the reload signal to a flag checked by the main loop."""

    def _handler(_signum, _frame) -> None:
        session.request_reload()

    signal.signal(signum, _handler)
