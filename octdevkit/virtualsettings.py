"""Settings of the virtual OCT system, which replays raw data from a file."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from .plugin import Signal

SYSNAME = "sys_name"
FILEPATH = "file_path"
BITDEPTH = "bit_depth"
WIDTH = "width"
HEIGHT = "height"
DEPTH = "depth"
BUFFERS_PER_VOLUME = "buffers_per_volume"
BUFFERS_FROM_FILE = "buffers_from_file"
BSCAN_OFFSET = "bscan_offset"
WAITTIME = "wait_time"
COPY_TO_RAM = "copy_file_to_ram"
SYNC_WITH_PROCESSING = "sync_with_processing"

_FIELD_KEYS = {
    "file_path": FILEPATH,
    "bit_depth": BITDEPTH,
    "width": WIDTH,
    "height": HEIGHT,
    "depth": DEPTH,
    "buffers_per_volume": BUFFERS_PER_VOLUME,
    "buffers_from_file": BUFFERS_FROM_FILE,
    "bscan_offset": BSCAN_OFFSET,
    "wait_time_us": WAITTIME,
    "copy_file_to_ram": COPY_TO_RAM,
    "sync_with_processing": SYNC_WITH_PROCESSING,
}

# Defaults used when a stored setting is missing.
_SETTING_DEFAULTS = {
    FILEPATH: "",
    BITDEPTH: 12,
    WIDTH: 1664,
    HEIGHT: 512,
    DEPTH: 16,
    BUFFERS_PER_VOLUME: 16,
    BUFFERS_FROM_FILE: 16,
    BSCAN_OFFSET: 0,
    WAITTIME: 0,
    COPY_TO_RAM: True,
    SYNC_WITH_PROCESSING: True,
}


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    return bool(value)


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return 0


@dataclass
class SimulatorParams:
    """What the virtual system reads from the file and how it replays it."""

    file_path: str = ""
    bit_depth: int = 8
    width: int = 256
    height: int = 256
    depth: int = 16
    buffers_per_volume: int = 2
    buffers_from_file: int = 2
    bscan_offset: int = 0
    wait_time_us: int = 100000
    copy_file_to_ram: bool = True
    sync_with_processing: bool = True


class VirtualOCTSystemSettings:
    """Editable settings of the virtual OCT system.

    ``form`` holds the values as currently entered; :meth:`apply` copies them
    to ``params`` and emits ``settings_updated``.
    """

    title = "Virtual OCT System Settings"

    def __init__(self) -> None:
        self.form = SimulatorParams()
        self.params = SimulatorParams()
        self.gui_enabled = True
        self.settings_updated = Signal()

    @property
    def editable_fields(self) -> frozenset[str]:
        """Names of the fields the user may currently change."""
        if self.gui_enabled:
            return frozenset(f.name for f in fields(SimulatorParams))
        # the wait time can safely be changed while acquiring
        return frozenset({"wait_time_us"})

    def set_settings(self, settings: dict[str, Any]) -> None:
        """Show stored *settings*, filling in defaults, and apply them."""
        values: dict[str, Any] = {}
        for name, key in _FIELD_KEYS.items():
            raw = settings.get(key, _SETTING_DEFAULTS[key])
            if key == FILEPATH:
                values[name] = "" if raw is None else str(raw)
            elif key in (COPY_TO_RAM, SYNC_WITH_PROCESSING):
                values[name] = _to_bool(raw)
            else:
                values[name] = _to_int(raw)
        self.form = SimulatorParams(**values)
        self.apply()

    def to_settings(self) -> dict[str, Any]:
        """The values as currently entered, as a settings mapping."""
        return {key: getattr(self.form, name) for name, key in _FIELD_KEYS.items()}

    def apply(self) -> None:
        """Take over the entered values and emit ``settings_updated``."""
        self.params = replace(self.form)
        self.settings_updated.emit(replace(self.params))

    def enable_gui(self, enable: bool) -> None:
        """Allow or forbid editing; the wait time always stays editable."""
        self.gui_enabled = bool(enable)

    def check_width_value(self) -> None:
        """Round an odd width down to the next even number."""
        if self.form.width % 2 != 0:
            self.form.width -= 1

    def select_file(self, file_name: str) -> None:
        """Use *file_name* as the raw data file; an empty name keeps the current one."""
        if file_name:
            self.form.file_path = file_name