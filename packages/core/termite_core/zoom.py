"""Font scale stepping over a fixed ladder of zoom factors."""

from __future__ import annotations

from .capabilities import TerminalWidget


SCALE_MEDIUM = 1.0
SCALE_EPSILON = 1e-6

# Pango's named scales.
SCALE_XX_SMALL = 0.5787037037037
SCALE_X_SMALL = 0.6944444444444
SCALE_SMALL = 0.8333333333333
SCALE_LARGE = 1.2
SCALE_X_LARGE = 1.44
SCALE_XX_LARGE = 1.728

SCALE_XXX_SMALL = SCALE_XX_SMALL / 1.2
SCALE_XXXX_SMALL = SCALE_XXX_SMALL / 1.2
SCALE_XXXXX_SMALL = SCALE_XXXX_SMALL / 1.2
SCALE_XXX_LARGE = SCALE_XX_LARGE * 1.2
SCALE_XXXX_LARGE = SCALE_XXX_LARGE * 1.2
SCALE_XXXXX_LARGE = SCALE_XXXX_LARGE * 1.2
SCALE_MINIMUM = SCALE_XXXXX_SMALL / 1.2
SCALE_MAXIMUM = SCALE_XXXXX_LARGE * 1.2

ZOOM_FACTORS: tuple[float, ...] = (
    SCALE_MINIMUM,
    SCALE_XXXXX_SMALL,
    SCALE_XXXX_SMALL,
    SCALE_XXX_SMALL,
    SCALE_XX_SMALL,
    SCALE_X_SMALL,
    SCALE_SMALL,
    SCALE_MEDIUM,
    SCALE_LARGE,
    SCALE_X_LARGE,
    SCALE_XX_LARGE,
    SCALE_XXX_LARGE,
    SCALE_XXXX_LARGE,
    SCALE_XXXXX_LARGE,
    SCALE_MAXIMUM,
)


def next_scale(current: float) -> float | None:
    for factor in ZOOM_FACTORS:
        if factor - current > SCALE_EPSILON:
            return factor
    return None


def previous_scale(current: float) -> float | None:
    for factor in reversed(ZOOM_FACTORS):
        if current - factor > SCALE_EPSILON:
            return factor
    return None


class ZoomStepper:
    """Steps the widget's font scale up and down the zoom ladder.

    The current scale is read back from the widget on every step, so a scale
    set elsewhere is honored and rounding in the widget is tolerated.
    """

    def __init__(self, terminal: TerminalWidget) -> None:
        self.terminal = terminal

    @property
    def scale(self) -> float:
        return float(self.terminal.get_font_scale())

    def increase(self) -> float:
        target = next_scale(self.scale)
        if target is not None:
            self.terminal.set_font_scale(target)
        return self.scale

    def decrease(self) -> float:
        target = previous_scale(self.scale)
        if target is not None:
            self.terminal.set_font_scale(target)
        return self.scale

    def reset(self) -> float:
        self.terminal.set_font_scale(SCALE_MEDIUM)
        return SCALE_MEDIUM
