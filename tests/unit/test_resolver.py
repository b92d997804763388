import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "theme"))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from fakes import RecordingTerminal, RecordingWindow
from termite_core.capabilities import POINTING_HAND_CURSOR
from termite_core.config import ConfigDocument
from termite_core.models import CursorBlinkMode, CursorShape, Settings
from termite_core.resolver import BOOL_OPTIONS, ConfigResolver
from termite_core.urls import URL_PATTERN
from termite_theme import build_palette, default_color, parse_color


def _doc(text: str) -> ConfigDocument:
    return ConfigDocument.parse(text)


class ResolverTestCase(unittest.TestCase):
    def setUp(self):
        self.terminal = RecordingTerminal()
        self.window = RecordingWindow()
        self.environ: dict[str, str] = {}
        self.resolver = ConfigResolver(self.terminal, self.window, self.environ)

    def resolve(self, text: str, previous: Settings | None = None) -> Settings:
        return self.resolver.resolve(_doc(text), previous or Settings())


class BooleanOptionTests(ResolverTestCase):
    def test_defaults_when_section_empty(self):
        settings = self.resolve("[options]\n")
        for key, default in BOOL_OPTIONS.items():
            self.assertEqual(getattr(settings, key), default, key)
        self.assertEqual(self.terminal.calls_to("set_scroll_on_keystroke"), [(True,)])
        self.assertEqual(self.terminal.calls_to("set_audible_bell"), [(False,)])

    def test_configured_values(self):
        settings = self.resolve("[options]\nscroll_on_output = true\nallow_bold = false\nurgent_on_bell = false\n")
        self.assertTrue(settings.scroll_on_output)
        self.assertFalse(settings.allow_bold)
        self.assertFalse(settings.urgent_on_bell)
        self.assertEqual(self.terminal.calls_to("set_allow_bold"), [(False,)])

    def test_defaults_not_previous(self):
        previous = Settings(scroll_on_output=True, allow_bold=False)
        settings = self.resolve("[options]\n", previous)
        self.assertFalse(settings.scroll_on_output)
        self.assertTrue(settings.allow_bold)

    def test_malformed_boolean_uses_default(self):
        with self.assertLogs("termite.config", level="WARNING") as logs:
            settings = self.resolve("[options]\nmouse_autohide = sometimes\n")
        self.assertFalse(settings.mouse_autohide)
        self.assertIn("sometimes", logs.output[0])


class BrowserTests(ResolverTestCase):
    def test_configured_browser(self):
        self.environ["BROWSER"] = "firefox"
        self.assertEqual(self.resolve("[options]\nbrowser = chromium\n").browser, "chromium")

    def test_environment_browser(self):
        self.environ["BROWSER"] = "firefox"
        self.assertEqual(self.resolve("[options]\n").browser, "firefox")

    def test_empty_environment_falls_back(self):
        self.environ["BROWSER"] = ""
        self.assertEqual(self.resolve("[options]\n").browser, "xdg-open")

    def test_literal_fallback(self):
        self.assertEqual(self.resolve("[options]\n").browser, "xdg-open")


class OptionPushTests(ResolverTestCase):
    def test_font_and_scrollback(self):
        settings = self.resolve("[options]\nfont = Monospace 9\nscrollback_lines = 10000\n")
        self.assertEqual(settings.font, "Monospace 9")
        self.assertEqual(settings.scrollback_lines, 10000)
        self.assertEqual(self.terminal.calls_to("set_font"), [("Monospace 9",)])
        self.assertEqual(self.terminal.calls_to("set_scrollback_lines"), [(10000,)])

    def test_absent_font_and_scrollback_not_pushed(self):
        self.resolve("[options]\n")
        self.assertNotIn("set_font", self.terminal.names())
        self.assertNotIn("set_scrollback_lines", self.terminal.names())

    def test_malformed_scrollback_not_pushed(self):
        with self.assertLogs("termite.config", level="WARNING"):
            settings = self.resolve("[options]\nscrollback_lines = lots\n")
        self.assertIsNone(settings.scrollback_lines)
        self.assertNotIn("set_scrollback_lines", self.terminal.names())

    def test_cursor_enums_case_insensitive(self):
        settings = self.resolve("[options]\ncursor_blink = ON\ncursor_shape = IBeam\n")
        self.assertEqual(settings.cursor_blink, CursorBlinkMode.ON)
        self.assertEqual(settings.cursor_shape, CursorShape.IBEAM)
        self.assertEqual(self.terminal.calls_to("set_cursor_blink_mode"), [(CursorBlinkMode.ON,)])
        self.assertEqual(self.terminal.calls_to("set_cursor_shape"), [(CursorShape.IBEAM,)])

    def test_unrecognized_cursor_enum_is_silent_noop(self):
        # Documented quirk: unknown values leave the widget's mode alone and log nothing.
        with self.assertNoLogs("termite", level="WARNING"):
            settings = self.resolve("[options]\ncursor_blink = foo\ncursor_shape = triangle\n")
        self.assertIsNone(settings.cursor_blink)
        self.assertIsNone(settings.cursor_shape)
        self.assertNotIn("set_cursor_blink_mode", self.terminal.names())
        self.assertNotIn("set_cursor_shape", self.terminal.names())

    def test_missing_document_skips_resolution(self):
        previous = Settings(browser="lynx")
        settings = self.resolver.resolve(None, previous)
        self.assertIs(settings, previous)
        self.assertEqual(self.terminal.calls, [])
        self.assertEqual(self.window.calls, [])


class ThemeTests(ResolverTestCase):
    def test_default_palette_pushed(self):
        settings = self.resolve("[options]\n")
        self.assertEqual(settings.palette, build_palette({}))
        self.assertEqual(self.terminal.calls_to("set_colors"), [(settings.palette,)])

    def test_palette_overrides(self):
        with self.assertLogs("termite.theme", level="WARNING"):
            settings = self.resolve("[colors]\ncolor1 = #ff0000\ncolor2 = bogus\ncolor255 = white\ncolor256 = red\n")
        self.assertEqual(len(settings.palette), 256)
        self.assertEqual(settings.palette[1], parse_color("#ff0000"))
        self.assertEqual(settings.palette[2], default_color(2))
        self.assertEqual(settings.palette[255], parse_color("white"))

    def test_named_colors(self):
        settings = self.resolve(
            "[colors]\n"
            "foreground = #dcdccc\n"
            "foreground_bold = #ffffff\n"
            "background = #3f3f3f\n"
            "cursor = #dcdccc\n"
            "highlight = #2f2f2f\n"
        )
        fg = parse_color("#dcdccc")
        bg = parse_color("#3f3f3f")
        self.assertEqual(settings.colors.foreground, fg)
        self.assertEqual(settings.colors.background, bg)
        self.assertIsNone(settings.colors.cursor_foreground)
        self.assertEqual(self.terminal.calls_to("set_color_foreground"), [(fg,)])
        self.assertEqual(self.terminal.calls_to("set_color_bold"), [(fg,), (parse_color("#ffffff"),)])
        self.assertEqual(self.terminal.calls_to("set_color_background"), [(bg,)])
        self.assertEqual(self.window.calls, [("set_background_override", bg)])
        self.assertNotIn("set_color_cursor_foreground", self.terminal.names())

    def test_foreground_sets_bold_when_no_bold_color(self):
        self.resolve("[colors]\nforeground = #aaaaaa\n")
        self.assertEqual(self.terminal.calls_to("set_color_bold"), [(parse_color("#aaaaaa"),)])

    def test_invalid_named_color_logged_and_skipped(self):
        with self.assertLogs("termite.resolver", level="WARNING") as logs:
            settings = self.resolve("[colors]\nbackground = nonsense\n")
        self.assertIsNone(settings.colors.background)
        self.assertIn("nonsense", logs.output[0])
        self.assertEqual(self.window.calls, [])


class ClickableUrlTests(ResolverTestCase):
    def test_registers_once(self):
        first = self.resolve("[options]\n")
        self.assertEqual(first.url_tag, 0)
        self.assertEqual(self.terminal.calls_to("match_add_regex"), [(URL_PATTERN,)])
        self.assertEqual(self.terminal.calls_to("match_set_cursor"), [(0, POINTING_HAND_CURSOR)])

        second = self.resolve("[options]\nclickable_url = true\n", first)
        self.assertEqual(second.url_tag, 0)
        self.assertEqual(len(self.terminal.calls_to("match_add_regex")), 1)
        self.assertEqual(len(self.terminal.matches), 1)

    def test_disable_removes_once(self):
        enabled = self.resolve("[options]\n")
        disabled = self.resolve("[options]\nclickable_url = false\n", enabled)
        self.assertIsNone(disabled.url_tag)
        self.assertEqual(self.terminal.calls_to("match_remove"), [(0,)])

        again = self.resolve("[options]\nclickable_url = false\n", disabled)
        self.assertIsNone(again.url_tag)
        self.assertEqual(len(self.terminal.calls_to("match_remove")), 1)
        self.assertEqual(self.terminal.matches, {})

    def test_reenable_registers_new_tag(self):
        enabled = self.resolve("[options]\n")
        disabled = self.resolve("[options]\nclickable_url = false\n", enabled)
        reenabled = self.resolve("[options]\nclickable_url = true\n", disabled)
        self.assertEqual(reenabled.url_tag, 1)
        self.assertEqual(list(self.terminal.matches), [1])


if __name__ == "__main__":
    unittest.main()
