"""Registry of the acquisition systems known to the application."""

from __future__ import annotations

from typing import Optional

from .acquisition import AcquisitionSystem


class SystemManager:
    """Keeps acquisition systems in the order they were added, looked up by name."""

    def __init__(self) -> None:
        self._systems: list[AcquisitionSystem] = []
        self._system_names: list[str] = []

    @property
    def systems(self) -> list[AcquisitionSystem]:
        """The registered systems, in insertion order."""
        return list(self._systems)

    @property
    def system_names(self) -> list[str]:
        """Names of the registered systems, as they were when added."""
        return list(self._system_names)

    def add_system(self, system: Optional[AcquisitionSystem]) -> None:
        """Register *system*; ``None`` and systems already registered are ignored."""
        if system is None:
            return
        if any(known is system for known in self._systems):
            return
        self._systems.append(system)
        self._system_names.append(str(system.name))

    def get_system_by_name(self, name: str) -> Optional[AcquisitionSystem]:
        """Return the first system registered under *name*, or ``None``."""
        try:
            index = self._system_names.index(name)
        except ValueError:
            return None
        return self._systems[index]