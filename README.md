# octdevkit

`octdevkit` is a library for building optical coherence tomography (OCT)
acquisition systems and the extensions that consume their data. It contains:

- `octdevkit.plugin`: the `Plugin` base class, `PluginType` (`SYSTEM`,
  `EXTENSION`) and a small `Signal` class (`connect`, `disconnect`, `emit`)
  that plugins use for their requests and notifications (`info`, `error`,
  `store_settings`, `set_klin_coeffs_request`, `send_command` and others).
- `octdevkit.acquisition`: `AcquisitionParams` (samples per line, A-scans per
  B-scan, B-scans per buffer, buffers per volume, bit depth),
  `AcquisitionParameter`, which holds them and emits `updated`, and
  `AcquisitionBuffer`, a set of zero-initialised numpy byte buffers with one
  ready flag each. `AcquisitionSystem` is the abstract base of data sources;
  subclasses implement `start_acquisition` and `stop_acquisition`.
- `octdevkit.extension`: the abstract `Extension` with its `DisplayStyle`
  (`SIDEBAR_TAB`, `SEPARATE_WINDOW`). Extensions receive buffers through
  `raw_data_received` and `processed_data_received`, and are told whether
  reading them is safe by `enable_raw_data_grabbing` and
  `enable_processed_data_grabbing`.
- `octdevkit.systemmanager`: `SystemManager` registers systems in order and
  looks them up with `get_system_by_name`.
- `octdevkit.systemchooser`: `SystemChooser.select_system` returns the name
  picked from a list. A callable passed as `interact` plays the user and may
  call `select`, `on_ok_clicked` or `on_double_clicked`; without it the first
  entry is chosen.
- `octdevkit.stringspinbox`: `StringSpinBox` steps through a list of strings
  with `step_by` and `set_index`, reports possible directions as
  `StepEnabled` flags and estimates its `preferred_width`.
- `octdevkit.windowfunction`: `WindowFunction` computes single-precision
  window curves for the shapes in `WindowType` (Hanning, Gauss, Sine,
  Lanczos, Rectangular, Flat Top).
- `octdevkit.trackball`: `TrackBall` turns pointer drags in
  [-1, 1] x [-1, 1] into a `Quaternion` rotation, in `TrackMode.PLANE` or
  `TrackMode.SPHERE`, and keeps spinning after release. A custom `clock` can
  be passed in.
- `octdevkit.demoextension`: `DemoExtension` with its `DemoExtensionForm`
  and `DemoParams`, an example extension that sums the first line of 9 to 16
  bit processed buffers.
- `octdevkit.virtualsettings` and `octdevkit.virtualoctsystem`:
  `VirtualOCTSystem`, which replays raw OCT data from a file, configured with
  `SimulatorParams` through `VirtualOCTSystemSettings`.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Window functions

```python
from octdevkit.windowfunction import WindowFunction, WindowType

window = WindowFunction(WindowType.HANNING, 0.5, 0.95, 1024)
curve = window.data()  # numpy float32 array of 1024 samples
```

The center position is clamped to [0, 1]. After `set_function_params` or
`set_size` the curve is computed again the next time `data()` is called.

## Writing an acquisition system

```python
from octdevkit.acquisition import AcquisitionSystem


class MySystem(AcquisitionSystem):
    def start_acquisition(self):
        self.buffer.allocate_memory(2, 1024 * 1024)
        self.acquisition_running = True
        self.acquisition_started.emit(self)

    def stop_acquisition(self):
        self.acquisition_running = False
        self.acquisition_stopped.emit()
```

Register systems with `SystemManager.add_system`; `None` and systems already
registered are ignored.

## Virtual OCT system

`VirtualOCTSystem` reads buffers of `width * height * depth` elements (one or
more bytes each, depending on the bit depth) from a raw file, starting
`bscan_offset` B-scans in, and hands them out alternately in two acquisition
buffers. With `buffers_from_file` of 2 or less the data is read once; with
more it is either copied into memory up front (`copy_file_to_ram`) or read
from the file on every step. With `sync_with_processing` it waits until the
consumer has cleared the ready flag of the current buffer; `wait_time_us`
adds a pause between buffers.

Configure it through `update_params` with a `SimulatorParams`, or through
`settings_loaded` with a settings dictionary (missing keys take the defaults
of `VirtualOCTSystemSettings.set_settings`). `start_acquisition` runs the
loop in the calling thread and returns only after `stop_acquisition` has been
called, for example from another thread or from a slot connected to
`acquisition_started`.

## What the package does not do

There is no application around these pieces: no command to run, no
graphical interface, and no processing of the raw data into images (no
resampling, dispersion compensation, FFT or display). The forms and dialogs
here hold their values as plain attributes, and the host that would load
plugins, connect them and store their settings is left to the user.

## Running the tests

```
pytest
```