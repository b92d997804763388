"""Clickable URL pattern and pointer click handling."""

from __future__ import annotations

import re

from .capabilities import BrowserLauncher, TerminalWidget
from .models import ButtonEvent, Settings


PRIMARY_BUTTON = 1

_USERCHARS = r"[-A-Za-z0-9]"
_PASSCHARS = r"""[-A-Za-z0-9,?;.:/!%$^*&~"#']"""
_HOSTCHARS = r"[-A-Za-z0-9]"
_HOST = _HOSTCHARS + r"+(?:\." + _HOSTCHARS + r"+)*"
_PORT = r"(?::[0-9]{1,5})?"
_PATHCHARS = r"[-A-Za-z0-9_$.+!*,:;@&=?/~#|%']"
_PATHTERM = r"""[^\]'.:}>) \t\r\n,"]"""
_SCHEME = r"(?:news:|telnet:|nntp:|file:/|https?:|ftps?:|sftp:|webcal:)"
_USERPASS = _USERCHARS + r"+(?:" + _PASSCHARS + r"+)?"
_URLPATH = (
    r"(?:(?:/" + _PATHCHARS + r"+(?:[(]" + _PATHCHARS + r"*[)])*" + _PATHCHARS + r"*)*" + _PATHTERM + r")?"
)

URL_PATTERN = _SCHEME + r"//(?:" + _USERPASS + r"@)?" + _HOST + _PORT + _URLPATH


class UrlMatcher:
    """Finds URLs (or any registered pattern) in a line of terminal text."""

    def __init__(self, pattern: str = URL_PATTERN) -> None:
        self.pattern = pattern
        self.regex = re.compile(pattern, re.MULTILINE)

    def find_all(self, text: str) -> list[str]:
        return [m.group(0) for m in self.regex.finditer(text)]

    def match_at(self, line: str, column: int) -> str | None:
        for m in self.regex.finditer(line):
            if m.start() <= column < m.end():
                return m.group(0)
            if m.start() > column:
                break
        return None


def handle_button_press(
    event: ButtonEvent,
    settings: Settings,
    terminal: TerminalWidget,
    launcher: BrowserLauncher,
) -> bool:
    """Open the URL under the pointer. Returns True when the event is consumed."""
    if not settings.clickable_url or not event.press:
        return False
    match = terminal.match_check_event(event)
    if match and event.button == PRIMARY_BUTTON:
        launcher(settings.browser, match)
        return True
    return False
