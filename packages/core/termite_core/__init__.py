"""Core terminal services: config loading, option resolution, zoom, fullscreen, and URLs."""

from .browser import launch_browser
from .config import ConfigDocument, candidate_paths, load_config
from .fullscreen import FullscreenToggle
from .models import ButtonEvent, CursorBlinkMode, CursorShape, KeyAction, Settings, WindowMode
from .resolver import ConfigResolver
from .session import TerminalSession, action_for_key, install_reload_signal
from .urls import URL_PATTERN, UrlMatcher, handle_button_press
from .zoom import ZOOM_FACTORS, ZoomStepper

__all__ = [
    "ButtonEvent",
    "ConfigDocument",
    "ConfigResolver",
    "CursorBlinkMode",
    "CursorShape",
    "FullscreenToggle",
    "KeyAction",
    "Settings",
    "TerminalSession",
    "URL_PATTERN",
    "UrlMatcher",
    "WindowMode",
    "ZOOM_FACTORS",
    "ZoomStepper",
    "action_for_key",
    "candidate_paths",
    "handle_button_press",
    "install_reload_signal",
    "launch_browser",
    "load_config",
]
