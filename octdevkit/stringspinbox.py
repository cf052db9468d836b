"""A spin box that steps through a fixed list of strings."""

from __future__ import annotations

from enum import Flag

from .plugin import Signal

_SPIN_BUTTONS_WIDTH_ESTIMATE = 25


class StepEnabled(Flag):
    """Which step directions are currently possible."""

    NONE = 0
    STEP_UP = 1
    STEP_DOWN = 2


def _bound(low: int, value: int, high: int) -> int:
    return max(low, min(value, high))


class StringSpinBox:
    """Read-only spin box whose values are strings.

    Widths are measured as the string length times *char_width*, plus an
    allowance for the spin buttons.
    """

    def __init__(self, char_width: int = 8) -> None:
        self.strings: list[str] = []
        self.index = -1
        self.char_width = char_width
        self.maximum_width: int | None = None
        self.index_changed = Signal()

    @property
    def text(self) -> str:
        """The currently shown string, or an empty string if there are none."""
        return self.strings[self.index] if self.strings else ""

    def set_strings(self, strings: list[str]) -> None:
        """Replace the strings, show the first one and fit the width to them."""
        strings = list(strings)
        if not strings:
            raise ValueError("a string spin box needs at least one string")
        self.strings = strings
        self.index = 0
        self.maximum_width = self.preferred_width()

    def step_by(self, steps: int) -> None:
        """Move *steps* entries, clamped to the list, and emit ``index_changed``."""
        if not self.strings:
            raise IndexError("no strings to step through")
        self.index = _bound(0, self.index + steps, len(self.strings) - 1)
        self.index_changed.emit()

    def index_of(self, text: str) -> int:
        """Return the position of *text*, or -1 if it is not among the strings."""
        try:
            return self.strings.index(text)
        except ValueError:
            return -1

    def set_index(self, index: int) -> None:
        """Show the entry at *index*; out-of-range indices are ignored."""
        if 0 <= index < len(self.strings):
            self.index = index
            self.index_changed.emit()

    def step_enabled(self) -> StepEnabled:
        """Return the directions in which stepping would change the value."""
        enabled = StepEnabled.STEP_UP | StepEnabled.STEP_DOWN
        max_index = len(self.strings) - 1
        bounded = _bound(0, self.index, max_index)
        if bounded == 0:
            enabled ^= StepEnabled.STEP_DOWN
        if bounded == max_index:
            enabled ^= StepEnabled.STEP_UP
        return enabled

    def preferred_width(self) -> int:
        """Width needed for the longest string plus the spin buttons."""
        longest = ""
        for string in self.strings:
            if len(longest) < len(string):
                longest = string
        return len(longest) * self.char_width + _SPIN_BUTTONS_WIDTH_ESTIMATE