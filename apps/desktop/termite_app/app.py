"""Desktop runtime: Qt window and terminal view wired to the terminal session."""

from __future__ import annotations

import os
import re
import sys
from typing import Callable, Sequence

from PySide6.QtCore import QEvent, QPoint, QProcess, QProcessEnvironment, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QFont, QFontDatabase, QGuiApplication, QKeyEvent, QMouseEvent, QPalette
from PySide6.QtWidgets import QApplication, QMainWindow, QPlainTextEdit

from termite_core import ButtonEvent, CursorBlinkMode, CursorShape, TerminalSession, UrlMatcher, install_reload_signal
from termite_core.capabilities import POINTING_HAND_CURSOR
from termite_core.logging_setup import configure_logging, get_logger, install_crash_hooks
from termite_theme import ColorValue

from .cli import TERM_NAME, LaunchOptions


RELOAD_POLL_MS = 100

# Output is shown as plain text; control sequences are dropped.
_CONTROL_SEQ = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)|\x1b[@-Z\\-_]|\r(?!\n)")
_FONT_SIZE = re.compile(r"^(?P<family>.*?)\s*(?P<size>\d+(?:\.\d+)?)$")

_KEY_NAMES = {
    Qt.Key.Key_Plus: "plus",
    Qt.Key.Key_Underscore: "underscore",
    Qt.Key.Key_ParenRight: "parenright",
    Qt.Key.Key_F11: "F11",
}

_MOUSE_BUTTONS = {
    Qt.MouseButton.LeftButton: 1,
    Qt.MouseButton.MiddleButton: 2,
    Qt.MouseButton.RightButton: 3,
}


def _qcolor(color: ColorValue) -> QColor:
    return QColor.fromRgbF(color.red, color.green, color.blue, 1.0 if color.alpha == 0 else color.alpha)


def _font_from_description(description: str) -> QFont:
    """Build a QFont from a Pango-style "Family Size" description."""
    m = _FONT_SIZE.match(description.strip())
    if m and m.group("family"):
        font = QFont(m.group("family"))
        font.setPointSizeF(float(m.group("size")))
    else:
        font = QFont(description.strip())
    font.setStyleHint(QFont.StyleHint.Monospace)
    return font


def _key_name(event: QKeyEvent) -> str:
    key = event.key()
    if key in _KEY_NAMES:
        return _KEY_NAMES[key]
    if Qt.Key.Key_A <= key <= Qt.Key.Key_Z:
        return chr(int(key)).lower()
    return event.text()


class TerminalView(QPlainTextEdit):
    """Minimal terminal widget over QProcess; no emulation beyond plain text."""

    bell = Signal()
    childExited = Signal(int)

    def __init__(self) -> None:
        super().__init__()
        self.setUndoRedoEnabled(False)
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.WidgetWidth)
        self.setMouseTracking(True)
        self.viewport().setMouseTracking(True)

        self.key_handler: Callable[[QKeyEvent], bool] | None = None
        self.button_handler: Callable[[ButtonEvent], bool] | None = None

        self._base_font = QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont)
        self._scale = 1.0
        self._palette: tuple[ColorValue, ...] = ()
        self._bold_color: ColorValue | None = None
        self._cursor_color: ColorValue | None = None
        self._cursor_foreground: ColorValue | None = None
        self._cursor_shape = CursorShape.BLOCK
        self._default_flash_time = QApplication.cursorFlashTime()

        self._scroll_on_output = False
        self._scroll_on_keystroke = True
        self._audible_bell = False
        self._mouse_autohide = False
        self._allow_bold = True

        self._matchers: dict[int, UrlMatcher] = {}
        self._match_cursors: dict[int, str] = {}
        self._next_tag = 0

        self._process = QProcess(self)
        self._process.setProcessChannelMode(QProcess.ProcessChannelMode.MergedChannels)
        self._process.readyReadStandardOutput.connect(self._read_output)
        self._process.finished.connect(self._on_finished)

        self._apply_font()

    # -- process -----------------------------------------------------------

    def spawn(self, argv: Sequence[str], env: dict[str, str], cwd: str | None = None) -> bool:
        environment = QProcessEnvironment()
        for key, value in env.items():
            environment.insert(key, value)
        self._process.setProcessEnvironment(environment)
        self._process.setProgram(argv[0])
        self._process.setArguments(list(argv[1:]))
        if cwd:
            self._process.setWorkingDirectory(cwd)
        self._process.start()
        return self._process.waitForStarted()

    def spawn_error(self) -> str:
        return self._process.errorString()

    def _read_output(self) -> None:
        text = bytes(self._process.readAllStandardOutput()).decode("utf-8", errors="replace")
        if "\x07" in text:
            text = text.replace("\x07", "")
            if self._audible_bell:
                QApplication.beep()
            self.bell.emit()
        text = _CONTROL_SEQ.sub("", text)
        if not text:
            return
        bar = self.verticalScrollBar()
        at_bottom = bar.value() == bar.maximum()
        cursor = self.textCursor()
        cursor.movePosition(cursor.MoveOperation.End)
        cursor.insertText(text)
        if self._scroll_on_output or at_bottom:
            bar.setValue(bar.maximum())

    def _on_finished(self, exit_code: int, exit_status: QProcess.ExitStatus) -> None:
        code = exit_code if exit_status == QProcess.ExitStatus.NormalExit else 1
        self.childExited.emit(int(code))

    # -- input -------------------------------------------------------------

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if self.key_handler is not None and self.key_handler(event):
            event.accept()
            return
        if self._mouse_autohide:
            self.viewport().setCursor(Qt.CursorShape.BlankCursor)
        data = event.text()
        if event.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            data = "\n"
        if data and self._process.state() == QProcess.ProcessState.Running:
            self._process.write(data.encode("utf-8"))
            if self._scroll_on_keystroke:
                self.verticalScrollBar().setValue(self.verticalScrollBar().maximum())
        event.accept()

    def _button_event(self, event: QMouseEvent) -> ButtonEvent:
        pos = event.position()
        return ButtonEvent(button=_MOUSE_BUTTONS.get(event.button(), 0), x=pos.x(), y=pos.y())

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if self.button_handler is not None and self.button_handler(self._button_event(event)):
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        hit = self._match_under(pos.x(), pos.y())
        if hit is not None and self._match_cursors.get(hit[0]) == POINTING_HAND_CURSOR:
            self.viewport().setCursor(Qt.CursorShape.PointingHandCursor)
        else:
            self.viewport().setCursor(Qt.CursorShape.IBeamCursor)
        super().mouseMoveEvent(event)

    # -- TerminalWidget capability -------------------------------------------

    def _apply_font(self) -> None:
        font = QFont(self._base_font)
        size = self._base_font.pointSizeF()
        if size > 0:
            font.setPointSizeF(size * self._scale)
        self.setFont(font)
        self._apply_cursor_shape()

    def set_font(self, description: str) -> None:
        self._base_font = _font_from_description(description)
        self._apply_font()

    def set_font_scale(self, scale: float) -> None:
        self._scale = float(scale)
        self._apply_font()

    def get_font_scale(self) -> float:
        return self._scale

    def set_scrollback_lines(self, lines: int) -> None:
        self.setMaximumBlockCount(max(0, lines))

    def set_cursor_blink_mode(self, mode: CursorBlinkMode) -> None:
        if mode == CursorBlinkMode.OFF:
            QApplication.setCursorFlashTime(0)
        elif mode == CursorBlinkMode.ON:
            QApplication.setCursorFlashTime(self._default_flash_time or 1000)
        else:
            QApplication.setCursorFlashTime(self._default_flash_time)

    def _apply_cursor_shape(self) -> None:
        if self._cursor_shape == CursorShape.BLOCK:
            self.setCursorWidth(self.fontMetrics().horizontalAdvance("M"))
        elif self._cursor_shape == CursorShape.UNDERLINE:
            self.setCursorWidth(2)
        else:
            self.setCursorWidth(1)

    def set_cursor_shape(self, shape: CursorShape) -> None:
        self._cursor_shape = shape
        self._apply_cursor_shape()

    def set_scroll_on_output(self, enabled: bool) -> None:
        self._scroll_on_output = enabled

    def set_scroll_on_keystroke(self, enabled: bool) -> None:
        self._scroll_on_keystroke = enabled

    def set_audible_bell(self, enabled: bool) -> None:
        self._audible_bell = enabled

    def set_mouse_autohide(self, enabled: bool) -> None:
        self._mouse_autohide = enabled

    def set_allow_bold(self, enabled: bool) -> None:
        self._allow_bold = enabled

    def _set_role_color(self, role: QPalette.ColorRole, color: ColorValue) -> None:
        palette = self.palette()
        palette.setColor(role, _qcolor(color))
        self.setPalette(palette)

    def set_colors(self, palette: Sequence[ColorValue]) -> None:
        self._palette = tuple(palette)

    def set_color_foreground(self, color: ColorValue) -> None:
        self._set_role_color(QPalette.ColorRole.Text, color)

    def set_color_bold(self, color: ColorValue) -> None:
        self._bold_color = color

    def set_color_background(self, color: ColorValue) -> None:
        self._set_role_color(QPalette.ColorRole.Base, color)

    def set_color_cursor(self, color: ColorValue) -> None:
        self._cursor_color = color

    def set_color_cursor_foreground(self, color: ColorValue) -> None:
        self._cursor_foreground = color

    def set_color_highlight(self, color: ColorValue) -> None:
        self._set_role_color(QPalette.ColorRole.Highlight, color)

    def match_add_regex(self, pattern: str) -> int:
        tag = self._next_tag
        self._next_tag += 1
        self._matchers[tag] = UrlMatcher(pattern)
        return tag

    def match_set_cursor(self, tag: int, cursor: str) -> None:
        self._match_cursors[tag] = cursor

    def match_remove(self, tag: int) -> None:
        self._matchers.pop(tag, None)
        self._match_cursors.pop(tag, None)

    def _match_under(self, x: float, y: float) -> tuple[int, str] | None:
        if not self._matchers:
            return None
        cursor = self.cursorForPosition(QPoint(int(x), int(y)))
        line = cursor.block().text()
        column = cursor.positionInBlock()
        for tag, matcher in self._matchers.items():
            found = matcher.match_at(line, column)
            if found is not None:
                return tag, found
        return None

    def match_check_event(self, event: ButtonEvent) -> str | None:
        hit = self._match_under(event.x, event.y)
        return None if hit is None else hit[1]

    def copy_clipboard(self) -> None:
        self.copy()

    def paste_clipboard(self) -> None:
        text = QGuiApplication.clipboard().text()
        if text and self._process.state() == QProcess.ProcessState.Running:
            self._process.write(text.encode("utf-8"))


class TermiteWindow(QMainWindow):
    focusChanged = Signal()

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("termite")
        self.resize(800, 480)

    def changeEvent(self, event: QEvent) -> None:
        if event.type() == QEvent.Type.ActivationChange:
            self.focusChanged.emit()
        super().changeEvent(event)

    # -- TerminalWindow capability -------------------------------------------

    def fullscreen(self) -> None:
        self.showFullScreen()

    def unfullscreen(self) -> None:
        self.showNormal()

    def set_urgency_hint(self, urgent: bool) -> None:
        # Qt clears the alert itself once the window is activated.
        if urgent and not self.isActiveWindow():
            QApplication.alert(self, 0)

    def set_background_override(self, color: ColorValue) -> None:
        self.setStyleSheet(f"QMainWindow {{ background-color: {color.to_css()}; }}")

    def set_role(self, role: str) -> None:
        self.setObjectName(role)


def _child_environment(window: TermiteWindow) -> dict[str, str]:
    env = dict(os.environ)
    if QGuiApplication.platformName() == "xcb":
        env["WINDOWID"] = str(int(window.winId()))
    env["TERM"] = TERM_NAME
    return env


def run_gui(options: LaunchOptions) -> int:
    configure_logging()
    install_crash_hooks()
    logger = get_logger()

    app = QApplication(sys.argv[:1])
    app.setApplicationName("termite")

    window = TermiteWindow()
    view = TerminalView()
    window.setCentralWidget(view)
    if options.role:
        window.set_role(options.role)

    session = TerminalSession(view, window, config_path=options.config_file)
    session.load()

    install_reload_signal(session)
    reload_timer = QTimer(window)
    reload_timer.timeout.connect(session.process_pending_reload)
    reload_timer.start(RELOAD_POLL_MS)

    def _on_key(event: QKeyEvent) -> bool:
        mods = event.modifiers()
        return session.handle_key(
            _key_name(event),
            ctrl=bool(mods & Qt.KeyboardModifier.ControlModifier),
            shift=bool(mods & Qt.KeyboardModifier.ShiftModifier),
            alt=bool(mods & Qt.KeyboardModifier.AltModifier),
        )

    view.key_handler = _on_key
    view.button_handler = session.handle_button_press
    view.bell.connect(session.on_bell)
    window.focusChanged.connect(session.on_focus_changed)
    if not options.hold:
        view.childExited.connect(app.exit)

    window.show()
    view.setFocus()

    if not view.spawn(options.command, _child_environment(window), cwd=os.getcwd()):
        message = view.spawn_error()
        print(f"the command failed to run: {message}", file=sys.stderr)
        logger.error(f"the command failed to run: {message}", extra={"event": "spawn_failed"})
        return 1

    exit_code = app.exec()
    logger.info("app shutdown", extra={"event": "shutdown", "exit_code": int(exit_code)})
    return int(exit_code)
