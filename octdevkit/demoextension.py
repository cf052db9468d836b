"""Demo extension showing how an extension receives settings and data."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional

import numpy as np

from .extension import DisplayStyle, Extension
from .plugin import PluginType, Signal

LIKE = "demo_like"
PARAM = "demo_param"


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    return bool(value)


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


@dataclass
class DemoParams:
    """Parameters the demo form edits."""

    like: bool = False
    demo_param: float = 0.0


class DemoExtensionForm:
    """User interface state of the demo extension.

    Every change made through :meth:`set_like` or :meth:`set_demo_param`
    applies the parameters and emits ``parameters_updated``.
    """

    def __init__(self) -> None:
        self.like = False
        self.demo_param = 0.0
        self.parameters = DemoParams()
        self.parameters_updated = Signal()

    def set_settings(self, settings: dict[str, Any]) -> None:
        """Show stored *settings* and apply them."""
        self.like = _to_bool(settings.get(LIKE, False))
        self.demo_param = _to_float(settings.get(PARAM, 0.0))
        self.apply()

    def to_settings(self) -> dict[str, Any]:
        """The applied parameters as a settings mapping."""
        return {LIKE: self.parameters.like, PARAM: self.parameters.demo_param}

    def set_like(self, like: bool) -> None:
        """Tick or untick the "like" box."""
        self.like = bool(like)
        self.apply()

    def set_demo_param(self, value: float) -> None:
        """Change the demo parameter; applying only if the value changed."""
        value = float(value)
        if value != self.demo_param:
            self.demo_param = value
            self.apply()

    def apply(self) -> None:
        """Copy the shown values into the parameters and announce them."""
        self.parameters = DemoParams(like=self.like, demo_param=self.demo_param)
        self.parameters_updated.emit(replace(self.parameters))


class DemoExtension(Extension):
    """Extension that sums the first line of every processed buffer."""

    def __init__(self) -> None:
        super().__init__(
            name="DemoExtension",
            tool_tip="This is a demo Extension intended for developers.",
        )
        self.plugin_type = PluginType.EXTENSION
        self.display_style = DisplayStyle.SIDEBAR_TAB
        self.form = DemoExtensionForm()
        self.current_parameters = DemoParams()
        self.widget_displayed = False
        self.is_calculating = False
        self.active = False
        self.last_sum: Optional[int] = None
        self.form.parameters_updated.connect(self.set_parameters)

    def get_widget(self) -> DemoExtensionForm:
        """Return the form; it is now owned by the host."""
        self.widget_displayed = True
        return self.form

    def activate_extension(self) -> None:
        """Start reacting to incoming data."""
        self.active = True

    def deactivate_extension(self) -> None:
        """Stop reacting to incoming data."""
        self.active = False

    def settings_loaded(self, settings: dict[str, Any]) -> None:
        """Show the stored settings in the form."""
        self.form.set_settings(settings)

    def set_parameters(self, params: DemoParams) -> None:
        """Take over *params* from the form and ask the host to store them."""
        self.current_parameters = replace(params)
        self.settings_map.update(self.form.to_settings())
        self.store_settings.emit(self.name, dict(self.settings_map))

    def processed_data_received(
        self,
        buffer: Any,
        bit_depth: int,
        samples_per_line: int,
        lines_per_frame: int,
        frames_per_buffer: int,
        buffers_per_volume: int,
        current_buffer_nr: int,
    ) -> Optional[int]:
        """Sum the first line of 9 to 16 bit data; return the sum, or None if skipped.

        The sum wraps at 32 bits. Data of any other bit depth leaves the
        extension marked as calculating, so later buffers are skipped.
        """
        if not (self.active and not self.is_calculating and self.processed_grabbing_allowed):
            return None
        self.is_calculating = True
        if not 9 <= bit_depth <= 16:
            return None
        samples = np.frombuffer(memoryview(buffer).cast("B"), dtype=np.uint16)
        line = samples[: max(0, samples_per_line)]
        total = int(line.astype(np.uint64).sum()) % (1 << 32)
        self.last_sum = total
        self.is_calculating = False
        return total