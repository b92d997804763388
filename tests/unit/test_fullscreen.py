import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "theme"))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from fakes import RecordingWindow
from termite_core.fullscreen import FullscreenToggle
from termite_core.models import WindowMode


class FullscreenToggleTests(unittest.TestCase):
    def test_starts_windowed(self):
        toggle = FullscreenToggle(RecordingWindow())
        self.assertEqual(toggle.mode, WindowMode.WINDOWED)
        self.assertFalse(toggle.is_fullscreen)

    def test_double_toggle_round_trips(self):
        window = RecordingWindow()
        toggle = FullscreenToggle(window)
        self.assertEqual(toggle.toggle(), WindowMode.FULLSCREEN)
        self.assertEqual(toggle.toggle(), WindowMode.WINDOWED)
        self.assertEqual(window.calls, [("fullscreen",), ("unfullscreen",)])

    def test_mode_values(self):
        self.assertEqual(WindowMode.WINDOWED.value, "Windowed")
        self.assertEqual(WindowMode.FULLSCREEN.value, "Fullscreen")


if __name__ == "__main__":
    unittest.main()
