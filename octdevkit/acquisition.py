"""Acquisition parameters, page-aligned-style buffers and the acquisition system base."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Optional

import numpy as np

from .plugin import Plugin, PluginType, Signal


@dataclass
class AcquisitionParams:
    """Geometry and bit depth of the raw data an acquisition system delivers."""

    samples_per_line: int = 0
    ascans_per_bscan: int = 0
    bscans_per_buffer: int = 0
    buffers_per_volume: int = 0
    bit_depth: int = 0


class AcquisitionParameter:
    """Holds the current acquisition parameters and announces changes."""

    def __init__(self) -> None:
        self.params = AcquisitionParams()
        self.updated = Signal()

    def update_params(self, new_params: AcquisitionParams) -> None:
        """Replace the parameters and emit ``updated`` with them."""
        self.params = replace(new_params)
        self.updated.emit(self.params)


class AcquisitionBuffer:
    """A ring of zero-initialised byte buffers with per-buffer ready flags."""

    def __init__(self) -> None:
        self.buffers: list[np.ndarray] = []
        self.ready: list[bool] = []
        self.current_index = -1
        self.buffer_count = 0
        self.bytes_per_buffer = 0
        self.error = Signal()
        self.info = Signal()

    def allocate_memory(self, buffer_count: int, bytes_per_buffer: int) -> None:
        """Release any buffers held and allocate *buffer_count* zeroed buffers.

        Emits ``error`` and re-raises if the memory cannot be allocated.
        """
        if buffer_count < 0 or bytes_per_buffer < 0:
            raise ValueError("buffer count and buffer size must not be negative")
        self.release_memory()
        self.buffer_count = buffer_count
        self.bytes_per_buffer = bytes_per_buffer
        for _ in range(buffer_count):
            try:
                self.buffers.append(np.zeros(bytes_per_buffer, dtype=np.uint8))
            except MemoryError as exc:
                self.error.emit(f"Buffer memory allocation error: {exc}")
                raise
            self.ready.append(False)

    def release_memory(self) -> None:
        """Drop all buffers and their ready flags."""
        self.buffers.clear()
        self.ready.clear()


class AcquisitionSystem(Plugin, ABC):
    """Base class of plugins that deliver raw OCT data.

    ``acquisition_running`` must be true while data is acquired;
    ``acquisition_started`` is emitted with the system itself when
    acquisition begins, ``acquisition_stopped`` when it ends.
    """

    def __init__(self, name: str = "") -> None:
        super().__init__(name=name, plugin_type=PluginType.SYSTEM)
        self.params = AcquisitionParameter()
        self.buffer = AcquisitionBuffer()
        self.settings_dialog: Optional[Any] = None
        self.acquisition_running = False
        self.acquisition_started = Signal()
        self.acquisition_stopped = Signal()

    @abstractmethod
    def start_acquisition(self) -> None:
        """Initialise the hardware and start acquiring."""

    @abstractmethod
    def stop_acquisition(self) -> None:
        """Stop acquiring and release the hardware."""