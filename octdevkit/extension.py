"""Base class of processing extensions that receive raw or processed OCT data."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from .plugin import Plugin, PluginType


class DisplayStyle(Enum):
    """Where the host shows an extension's user interface."""

    SIDEBAR_TAB = 0
    SEPARATE_WINDOW = 1


class Extension(Plugin, ABC):
    """Plugin that consumes data produced by the host.

    ``raw_grabbing_allowed`` and ``processed_grabbing_allowed`` tell the
    extension whether a buffer it was handed may still be read.
    """

    def __init__(self, name: str = "", tool_tip: str = "") -> None:
        super().__init__(name=name, plugin_type=PluginType.EXTENSION)
        self.raw_grabbing_allowed = True
        self.processed_grabbing_allowed = True
        self.extension_widget: Optional[Any] = None
        self.display_style = DisplayStyle.SIDEBAR_TAB
        self.tool_tip = tool_tip
        self.raw_buffers_received = 0
        self.processed_buffers_received = 0

    @abstractmethod
    def get_widget(self) -> Any:
        """Return the user interface of the extension."""

    @abstractmethod
    def activate_extension(self) -> None:
        """Called when the user activates the extension."""

    @abstractmethod
    def deactivate_extension(self) -> None:
        """Called when the user deactivates the extension."""

    def raw_data_received(
        self,
        buffer: Any,
        bit_depth: int,
        samples_per_line: int,
        lines_per_frame: int,
        frames_per_buffer: int,
        buffers_per_volume: int,
        current_buffer_nr: int,
    ) -> None:
        """Called whenever new raw data is available; counts the buffers handed over."""
        self.raw_buffers_received += 1

    def processed_data_received(
        self,
        buffer: Any,
        bit_depth: int,
        samples_per_line: int,
        lines_per_frame: int,
        frames_per_buffer: int,
        buffers_per_volume: int,
        current_buffer_nr: int,
    ) -> None:
        """Called whenever new processed data is available; counts the buffers handed over."""
        self.processed_buffers_received += 1

    def enable_raw_data_grabbing(self, enabled: bool) -> None:
        """Tell the extension whether reading raw buffers is safe."""
        self.raw_grabbing_allowed = bool(enabled)

    def enable_processed_data_grabbing(self, enabled: bool) -> None:
        """Tell the extension whether reading processed buffers is safe."""
        self.processed_grabbing_allowed = bool(enabled)