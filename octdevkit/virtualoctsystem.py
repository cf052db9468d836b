"""Acquisition system that replays raw OCT data from a file."""

from __future__ import annotations

import math
import time
from typing import Any, BinaryIO, Optional

from .acquisition import AcquisitionBuffer, AcquisitionParams, AcquisitionSystem
from .plugin import PluginType, Signal
from .virtualsettings import SimulatorParams, VirtualOCTSystemSettings

STREAM_BUFFER_SIZE = 2097152


class VirtualOCTSystem(AcquisitionSystem):
    """Virtual OCT system: reads buffers from a raw file and hands them out in turn.

    Two acquisition buffers are filled alternately. Depending on the
    settings the data is read once into two buffers, copied from a set of
    in-memory file buffers, or streamed from the file on every step.
    ``release_delay`` is how long, in seconds, the last buffers stay
    allocated after acquisition stops so consumers can finish with them.
    """

    release_delay = 0.5

    def __init__(self) -> None:
        super().__init__(name="Virtual OCT System")
        self.plugin_type = PluginType.SYSTEM
        self.system_dialog = VirtualOCTSystemSettings()
        self.settings_dialog = self.system_dialog
        self.file: Optional[BinaryIO] = None
        self.stream_buffer: Optional[AcquisitionBuffer] = None
        self.is_cleanup_pending = False
        self.curr_params = SimulatorParams()

        self.enable_gui = Signal()
        self.system_dialog.settings_updated.connect(self.update_params)
        self.enable_gui.connect(self.system_dialog.enable_gui)

    # -- geometry -----------------------------------------------------------

    def _element_size(self) -> int:
        return math.ceil(self.curr_params.bit_depth / 8.0)

    def _buffer_size(self) -> int:
        p = self.curr_params
        return p.width * p.height * p.depth * self._element_size()

    def _offset(self) -> int:
        p = self.curr_params
        return p.bscan_offset * p.width * p.height * self._element_size()

    # -- lifecycle ----------------------------------------------------------

    def _open_file(self) -> bool:
        path = self.curr_params.file_path
        if len(path) < 2:
            self.error.emit("No file selected for virtual OCT system.")
            return False
        try:
            self.file = open(path, "rb")
        except OSError:
            self.file = None
            self.error.emit("Unable to open file for virtual OCT system!")
            return False
        return True

    def init(self) -> bool:
        """Open the data file and allocate buffers; return False if the file cannot be used."""
        if not self._open_file():
            return False

        buffer_size = self._buffer_size()
        self.buffer.allocate_memory(2, buffer_size)

        p = self.curr_params
        if p.buffers_from_file > 2:
            self.stream_buffer = AcquisitionBuffer()
            if p.copy_file_to_ram:
                self.stream_buffer.allocate_memory(p.buffers_from_file, buffer_size)
            else:
                self.stream_buffer.allocate_memory(1, STREAM_BUFFER_SIZE)

        self.info.emit("Virtual OCT system initialized!")
        return True

    def cleanup(self) -> None:
        """Release all buffers and close the data file if it is still open."""
        self.buffer.release_memory()
        if self.stream_buffer is not None:
            self.stream_buffer.release_memory()
            self.stream_buffer = None
        if self.file is not None:
            self.file.close()
            self.file = None

    def _close_file(self) -> None:
        if self.file is not None:
            self.file.close()
            self.file = None

    def start_acquisition(self) -> None:
        """Initialise and run the acquisition loop until :meth:`stop_acquisition` is called."""
        if self.is_cleanup_pending:
            self.cleanup()

        if not self.init():
            self.enable_gui.emit(True)
            self.info.emit("Initialization unsuccessful. Acquisition stopped.")
            self.cleanup()
            self.acquisition_stopped.emit()
            return

        self.info.emit("Acquisition started")
        p = self.curr_params
        if p.buffers_from_file <= 2:
            self._simulate_two_buffers()
        elif p.copy_file_to_ram:
            self._simulate_multi_file_buffers()
        else:
            self._simulate_large_file()

        self.is_cleanup_pending = True
        self.enable_gui.emit(True)
        self.info.emit("Acquisistion stopped!")
        self.acquisition_stopped.emit()
        if self.release_delay > 0:
            time.sleep(self.release_delay)
        self.cleanup()
        self.is_cleanup_pending = False

    def stop_acquisition(self) -> None:
        """Ask the acquisition loop to end."""
        self.acquisition_running = False
        self.enable_gui.emit(True)

    # -- acquisition loops --------------------------------------------------

    def _wait_for_processing(self, sync_enabled: bool) -> bool:
        """Block while the current buffer is still being processed; return the sync flag."""
        if not sync_enabled:
            return False
        while (
            self.acquisition_running
            and sync_enabled
            and self.buffer.ready[self.buffer.current_index]
        ):
            time.sleep(0)
            sync_enabled = self.curr_params.sync_with_processing
        return sync_enabled

    def _pause(self) -> None:
        wait_us = self.curr_params.wait_time_us
        if wait_us > 0:
            time.sleep(wait_us / 1_000_000)

    def _begin(self, current_index: int) -> None:
        self.enable_gui.emit(False)
        self.acquisition_running = True
        self.buffer.current_index = current_index
        self.acquisition_started.emit(self)

    def _simulate_two_buffers(self) -> None:
        buffer_size = self._buffer_size()
        offset = self._offset()
        assert self.file is not None

        self.file.seek(offset)
        self.file.readinto(memoryview(self.buffer.buffers[0]))
        if self.curr_params.buffers_from_file == 2:
            self.file.seek(buffer_size + offset)
        else:
            self.file.seek(offset)
        self.file.readinto(memoryview(self.buffer.buffers[1]))
        self._close_file()

        self._begin(1)
        sync_enabled = True
        while self.acquisition_running:
            sync_enabled = self._wait_for_processing(sync_enabled)
            next_index = (self.buffer.current_index + 1) % 2
            self.buffer.current_index = next_index
            if not self.buffer.ready[next_index]:
                # the buffer already holds the data; just hand it over
                self.buffer.ready[next_index] = True
            self._pause()

    def _simulate_large_file(self) -> None:
        buffer_size = self._buffer_size()
        offset = self._offset()
        self._close_file()
        try:
            big_file = open(self.curr_params.file_path, "rb")
        except OSError:
            self.error.emit("could not open file")
            return

        with big_file:
            big_file.seek(offset)
            read_buffers = 0
            self._begin(1)
            next_index = 0
            sync_enabled = True
            while self.acquisition_running:
                sync_enabled = self._wait_for_processing(sync_enabled)
                if not self.buffer.ready[next_index]:
                    target = memoryview(self.buffer.buffers[next_index])[:buffer_size]
                    big_file.readinto(target)
                    read_buffers += 1
                    if read_buffers >= self.curr_params.buffers_from_file:
                        big_file.seek(offset)
                        read_buffers = 0
                    self.buffer.current_index = next_index
                    self.buffer.ready[next_index] = True
                    next_index = (self.buffer.current_index + 1) % 2
                self._pause()

    def _simulate_multi_file_buffers(self) -> None:
        buffer_size = self._buffer_size()
        offset = self._offset()
        buffers_from_file = self.curr_params.buffers_from_file
        assert self.file is not None and self.stream_buffer is not None

        for i, file_buffer in enumerate(self.stream_buffer.buffers[:buffers_from_file]):
            self.file.seek(i * buffer_size + offset)
            self.file.readinto(memoryview(file_buffer))
        self._close_file()

        self._begin(0)
        next_index = 1
        stream_index = buffers_from_file - 1
        sync_enabled = True
        while self.acquisition_running:
            sync_enabled = self._wait_for_processing(sync_enabled)
            self.buffer.current_index = next_index
            if not self.buffer.ready[next_index]:
                stream_index = (stream_index + 1) % buffers_from_file
                self.buffer.buffers[next_index][:] = self.stream_buffer.buffers[stream_index]
                self.buffer.ready[next_index] = True
                next_index = (self.buffer.current_index + 1) % 2
            self._pause()

    # -- settings -----------------------------------------------------------

    def settings_loaded(self, settings: dict[str, Any]) -> None:
        """Show the stored settings in the settings dialog, which applies them."""
        self.system_dialog.set_settings(settings)

    def update_params(self, new_params: SimulatorParams) -> None:
        """Take over *new_params*, publish the acquisition geometry and store the settings."""
        self.curr_params = new_params
        self.params.update_params(
            AcquisitionParams(
                samples_per_line=new_params.width,
                ascans_per_bscan=new_params.height,
                bscans_per_buffer=new_params.depth,
                buffers_per_volume=new_params.buffers_per_volume,
                bit_depth=new_params.bit_depth,
            )
        )
        self.settings_map.update(self.system_dialog.to_settings())
        self.store_settings.emit(self.name, dict(self.settings_map))