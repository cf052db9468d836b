from octdevkit.virtualsettings import (
    BITDEPTH,
    BUFFERS_FROM_FILE,
    COPY_TO_RAM,
    FILEPATH,
    HEIGHT,
    SYNC_WITH_PROCESSING,
    WAITTIME,
    WIDTH,
    SimulatorParams,
    VirtualOCTSystemSettings,
)


def test_defaults_from_empty_settings():
    dialog = VirtualOCTSystemSettings()
    dialog.set_settings({})
    p = dialog.params
    assert p.file_path == ""
    assert p.bit_depth == 12
    assert p.width == 1664
    assert p.height == 512
    assert p.depth == 16
    assert p.buffers_per_volume == 16
    assert p.buffers_from_file == 16
    assert p.bscan_offset == 0
    assert p.wait_time_us == 0
    assert p.copy_file_to_ram is True
    assert p.sync_with_processing is True


def test_settings_round_trip():
    dialog = VirtualOCTSystemSettings()
    settings = {
        FILEPATH: "volume.raw",
        BITDEPTH: 8,
        WIDTH: 256,
        HEIGHT: 256,
        BUFFERS_FROM_FILE: 2,
        WAITTIME: 100000,
        COPY_TO_RAM: False,
        SYNC_WITH_PROCESSING: False,
    }
    dialog.set_settings(settings)
    stored = dialog.to_settings()
    for key, value in settings.items():
        assert stored[key] == value
    other = VirtualOCTSystemSettings()
    other.set_settings(stored)
    assert other.params == dialog.params


def test_string_values_are_converted():
    dialog = VirtualOCTSystemSettings()
    dialog.set_settings({WIDTH: "256", COPY_TO_RAM: "false"})
    assert dialog.params.width == 256
    assert dialog.params.copy_file_to_ram is False


def test_apply_emits_copy_of_params():
    dialog = VirtualOCTSystemSettings()
    received = []
    dialog.settings_updated.connect(received.append)
    dialog.form.height = 256
    dialog.apply()
    assert received[-1] == dialog.params
    assert received[-1].height == 256
    received[-1].height = 1
    assert dialog.params.height == 256


def test_apply_does_not_happen_without_call():
    dialog = VirtualOCTSystemSettings()
    dialog.form.bit_depth = 16
    assert dialog.params.bit_depth == SimulatorParams().bit_depth


def test_check_width_rounds_odd_down():
    dialog = VirtualOCTSystemSettings()
    dialog.form.width = 257
    dialog.check_width_value()
    assert dialog.form.width == 256
    dialog.check_width_value()
    assert dialog.form.width == 256


def test_select_file_keeps_current_on_empty():
    dialog = VirtualOCTSystemSettings()
    dialog.select_file("first.raw")
    assert dialog.form.file_path == "first.raw"
    dialog.select_file("")
    assert dialog.form.file_path == "first.raw"


def test_enable_gui_keeps_wait_time_editable():
    dialog = VirtualOCTSystemSettings()
    dialog.enable_gui(False)
    assert dialog.editable_fields == frozenset({"wait_time_us"})
    dialog.enable_gui(True)
    assert "width" in dialog.editable_fields
    assert "file_path" in dialog.editable_fields


def test_simulator_params_defaults():
    p = SimulatorParams()
    assert (p.bit_depth, p.width, p.height, p.depth) == (8, 256, 256, 16)
    assert p.wait_time_us == 100000
    assert p.buffers_from_file == 2