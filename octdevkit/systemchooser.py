"""Choice of one acquisition system out of a list of names."""

from __future__ import annotations

from typing import Callable, Optional


class SystemChooser:
    """Presents system names and records the one the user picks.

    *interact* plays the part of the user: it is called with the chooser
    while it is open and may call :meth:`select`, :meth:`on_ok_clicked` or
    :meth:`on_double_clicked`. Without it the preselected first entry is
    confirmed.
    """

    label = "The following systems are available:"

    def __init__(self, interact: Optional[Callable[["SystemChooser"], None]] = None) -> None:
        self.selected_system = ""
        self.items: list[str] = []
        self.selected_index: Optional[int] = None
        self.is_open = False
        self._interact = interact

    def _populate(self, systems: list[str]) -> None:
        self.items = list(systems)
        self.selected_index = None

    def select_system(self, systems: list[str]) -> str:
        """Show *systems*, let the user choose, and return the chosen name."""
        self._populate(systems)
        if self.items:
            self.selected_index = 0
        self.is_open = True
        if self._interact is None:
            self.on_ok_clicked()
        else:
            self._interact(self)
        self.is_open = False
        return self.selected_system

    def select(self, index: int) -> None:
        """Highlight the entry at *index*."""
        if not 0 <= index < len(self.items):
            raise IndexError(f"no system at index {index}")
        self.selected_index = index

    def on_ok_clicked(self) -> None:
        """Accept the highlighted entry, if any, and close."""
        if self.selected_index is not None:
            self.selected_system = self.items[self.selected_index]
        self._close()

    def on_double_clicked(self, item: str) -> None:
        """Accept *item* directly and close."""
        self.selected_system = item
        self._close()

    def _close(self) -> None:
        self.is_open = False
        self.items = []
        self.selected_index = None