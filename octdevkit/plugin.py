"""Plugin base class and a minimal signal mechanism used by all plugins."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Optional


class Signal:
    """A list of callables that are invoked together when the signal is emitted."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., Any]] = []

    def connect(self, slot: Callable[..., Any]) -> None:
        """Register *slot* to be called on every emission."""
        if not callable(slot):
            raise TypeError("slot must be callable")
        self._slots.append(slot)

    def disconnect(self, slot: Callable[..., Any]) -> None:
        """Remove every connection of *slot*; raise ValueError if it is not connected."""
        if slot not in self._slots:
            raise ValueError("slot is not connected to this signal")
        self._slots = [connected for connected in self._slots if connected != slot]

    def emit(self, *args: Any) -> None:
        """Call every connected slot with *args*, in connection order."""
        for slot in list(self._slots):
            slot(*args)

    def __len__(self) -> int:
        return len(self._slots)


class PluginType(Enum):
    """Kind of plugin: an acquisition system or a processing extension."""

    SYSTEM = 0
    EXTENSION = 1


class Plugin:
    """Common base of acquisition systems and extensions.

    Requests to the host application are made by emitting the signals below.
    A coefficient passed as ``None`` to the k-linearisation or dispersion
    requests is left unchanged; a NaN passed to the grayscale request is
    left unchanged as well.
    """

    def __init__(self, name: str = "", plugin_type: Optional[PluginType] = None) -> None:
        self.name = name
        self.plugin_type = plugin_type
        self.settings_map: dict[str, Any] = {}
        self.last_command: Optional[tuple[str, dict[str, Any]]] = None
        self.accepted_klin_coeffs: Optional[tuple[float, float, float, float]] = None
        self.accepted_disp_comp_coeffs: Optional[tuple[float, float, float, float]] = None

        self.info = Signal()
        self.error = Signal()
        self.store_settings = Signal()
        self.set_klin_coeffs_request = Signal()
        self.set_disp_comp_coeffs_request = Signal()
        self.set_grayscale_conversion_request = Signal()
        self.start_processing_request = Signal()
        self.stop_processing_request = Signal()
        self.start_recording_request = Signal()
        self.set_custom_resampling_curve_request = Signal()
        self.load_settings_file_request = Signal()
        self.save_settings_file_request = Signal()
        self.send_command = Signal()

    def settings_loaded(self, settings: dict[str, Any]) -> None:
        """Called with the stored settings at start-up; keeps a copy in ``settings_map``."""
        self.settings_map = dict(settings)

    def receive_command(self, command: str, params: dict[str, Any]) -> None:
        """Called when another plugin sends a command; remembers it in ``last_command``."""
        self.last_command = (command, dict(params))

    def set_klin_coeffs_request_accepted(self, k0: float, k1: float, k2: float, k3: float) -> None:
        """Called when a k-linearisation request was accepted; records the coefficients."""
        self.accepted_klin_coeffs = (k0, k1, k2, k3)

    def set_disp_comp_coeffs_request_accepted(self, d0: float, d1: float, d2: float, d3: float) -> None:
        """Called when a dispersion compensation request was accepted; records the coefficients."""
        self.accepted_disp_comp_coeffs = (d0, d1, d2, d3)