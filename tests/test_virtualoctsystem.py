import threading
import time

import pytest

from octdevkit.plugin import PluginType
from octdevkit.virtualoctsystem import STREAM_BUFFER_SIZE, VirtualOCTSystem
from octdevkit.virtualsettings import WIDTH, SimulatorParams


def _small_params(path, buffers_from_file=2, copy=True, offset=0, bit_depth=8):
    return SimulatorParams(
        file_path=str(path),
        bit_depth=bit_depth,
        width=2,
        height=2,
        depth=1,
        buffers_per_volume=2,
        buffers_from_file=buffers_from_file,
        bscan_offset=offset,
        wait_time_us=1000,
        copy_file_to_ram=copy,
        sync_with_processing=True,
    )


def _make_system(params):
    system = VirtualOCTSystem()
    system.release_delay = 0
    system.update_params(params)
    return system


def _run(system, wanted):
    started = threading.Event()
    stopped = []
    failures = []
    system.acquisition_started.connect(lambda sys_: started.set())
    system.acquisition_stopped.connect(lambda: stopped.append(True))

    def target():
        try:
            system.start_acquisition()
        except Exception as exc:  # surfaced by the assertions below
            failures.append(exc)

    thread = threading.Thread(target=target)
    thread.start()
    assert started.wait(5)
    seen = []
    deadline = time.monotonic() + 5
    while len(seen) < wanted and time.monotonic() < deadline:
        buf = system.buffer
        idx = buf.current_index
        if buf.ready and buf.ready[idx]:
            seen.append(bytes(buf.buffers[idx]))
            buf.ready[idx] = False
        time.sleep(0.001)
    system.stop_acquisition()
    thread.join(5)
    assert not thread.is_alive()
    assert failures == []
    assert stopped == [True]
    return seen


def test_defaults():
    system = VirtualOCTSystem()
    assert system.name == "Virtual OCT System"
    assert system.plugin_type is PluginType.SYSTEM
    assert system.settings_dialog is system.system_dialog
    assert system.curr_params == SimulatorParams()
    assert system.stream_buffer is None


def test_update_params_publishes_geometry_and_stores_settings():
    system = VirtualOCTSystem()
    stored = []
    system.store_settings.connect(lambda name, settings: stored.append((name, settings)))
    params = SimulatorParams(width=64, height=32, depth=4, buffers_per_volume=3, bit_depth=12)
    system.update_params(params)
    acq = system.params.params
    assert (acq.samples_per_line, acq.ascans_per_bscan, acq.bscans_per_buffer) == (64, 32, 4)
    assert acq.buffers_per_volume == 3
    assert acq.bit_depth == 12
    assert system.curr_params is params
    assert stored[-1][0] == "Virtual OCT System"


def test_settings_loaded_goes_through_dialog():
    system = VirtualOCTSystem()
    stored = []
    system.store_settings.connect(lambda name, settings: stored.append(settings))
    system.settings_loaded({WIDTH: 128})
    assert system.curr_params.width == 128
    assert system.params.params.samples_per_line == 128
    assert stored[-1][WIDTH] == 128


def test_init_without_file_fails():
    system = VirtualOCTSystem()
    errors = []
    system.error.connect(errors.append)
    assert system.init() is False
    assert errors == ["No file selected for virtual OCT system."]


def test_init_with_missing_file_fails(tmp_path):
    system = _make_system(_small_params(tmp_path / "missing.raw"))
    errors = []
    system.error.connect(errors.append)
    assert system.init() is False
    assert errors == ["Unable to open file for virtual OCT system!"]


def test_init_allocates_two_buffers(tmp_path):
    path = tmp_path / "data.raw"
    path.write_bytes(bytes(32))
    system = _make_system(_small_params(path, bit_depth=12))
    infos = []
    system.info.connect(infos.append)
    assert system.init() is True
    assert len(system.buffer.buffers) == 2
    assert all(len(b) == 2 * 2 * 1 * 2 for b in system.buffer.buffers)
    assert system.stream_buffer is None
    assert infos == ["Virtual OCT system initialized!"]
    system.cleanup()
    assert system.buffer.buffers == []
    assert system.file is None


def test_init_stream_buffers(tmp_path):
    path = tmp_path / "data.raw"
    path.write_bytes(bytes(32))
    copying = _make_system(_small_params(path, buffers_from_file=4, copy=True))
    assert copying.init()
    assert copying.stream_buffer.buffer_count == 4
    copying.cleanup()
    assert copying.stream_buffer is None

    streaming = _make_system(_small_params(path, buffers_from_file=4, copy=False))
    assert streaming.init()
    assert streaming.stream_buffer.buffer_count == 1
    assert streaming.stream_buffer.bytes_per_buffer == STREAM_BUFFER_SIZE
    streaming.cleanup()


def test_start_without_file_stops_immediately():
    system = VirtualOCTSystem()
    infos, stopped, gui = [], [], []
    system.info.connect(infos.append)
    system.acquisition_stopped.connect(lambda: stopped.append(True))
    system.enable_gui.connect(gui.append)
    system.start_acquisition()
    assert stopped == [True]
    assert gui == [True]
    assert "Initialization unsuccessful. Acquisition stopped." in infos
    assert system.system_dialog.gui_enabled is True


def test_two_buffers_from_file(tmp_path):
    path = tmp_path / "data.raw"
    path.write_bytes(bytes(range(8)))
    system = _make_system(_small_params(path, buffers_from_file=2))
    seen = _run(system, 4)
    assert set(seen) == {bytes([0, 1, 2, 3]), bytes([4, 5, 6, 7])}
    assert seen[0] == bytes([0, 1, 2, 3])
    assert system.buffer.buffers == []
    assert system.is_cleanup_pending is False
    assert system.acquisition_running is False


def test_single_buffer_from_file_repeats(tmp_path):
    path = tmp_path / "data.raw"
    path.write_bytes(bytes(range(8)))
    system = _make_system(_small_params(path, buffers_from_file=1))
    seen = _run(system, 4)
    assert set(seen) == {bytes([0, 1, 2, 3])}


def test_bscan_offset_skips_data(tmp_path):
    path = tmp_path / "data.raw"
    path.write_bytes(bytes(range(12)))
    system = _make_system(_small_params(path, buffers_from_file=2, offset=1))
    seen = _run(system, 4)
    assert set(seen) == {bytes([4, 5, 6, 7]), bytes([8, 9, 10, 11])}


def test_multi_file_buffers_cycle(tmp_path):
    path = tmp_path / "data.raw"
    path.write_bytes(bytes(range(12)))
    system = _make_system(_small_params(path, buffers_from_file=3, copy=True))
    seen = _run(system, 6)
    chunks = [bytes(range(i, i + 4)) for i in (0, 4, 8)]
    assert set(seen) == set(chunks)
    assert seen[:3] == chunks


def test_large_file_streaming_cycle(tmp_path):
    path = tmp_path / "data.raw"
    path.write_bytes(bytes(range(12)))
    system = _make_system(_small_params(path, buffers_from_file=3, copy=False))
    seen = _run(system, 6)
    chunks = [bytes(range(i, i + 4)) for i in (0, 4, 8)]
    assert set(seen) == set(chunks)
    assert seen[:3] == chunks
    assert system.stream_buffer is None


def test_gui_disabled_during_acquisition(tmp_path):
    path = tmp_path / "data.raw"
    path.write_bytes(bytes(range(8)))
    system = _make_system(_small_params(path))
    states = []
    system.enable_gui.connect(states.append)
    _run(system, 2)
    assert states[0] is False
    assert states[-1] is True
    assert system.system_dialog.gui_enabled is True