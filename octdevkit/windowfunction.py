"""Spectral window functions used to apodise OCT raw spectra."""

from __future__ import annotations

from enum import Enum

import numpy as np

_F32 = np.float32
_UPPER_EDGE = _F32(0.999)
_LOWER_EDGE = _F32(0.0001)
_FLAT_TOP_COEFFS = (
    _F32(0.215578948),
    _F32(0.416631580),
    _F32(0.277263158),
    _F32(0.083578947),
    _F32(0.006947368),
)


class WindowType(Enum):
    """Shape of the window."""

    HANNING = 0
    GAUSS = 1
    SINE = 2
    LANCZOS = 3
    RECTANGULAR = 4
    FLAT_TOP = 5


class WindowFunction:
    """A window of *size* single-precision samples, recomputed lazily.

    *center_position* is a fraction of the size, clamped to [0, 1];
    *fill_factor* is the fraction of the size the window covers (for the
    Gauss window it scales the width instead).
    """

    def __init__(
        self,
        window_type: WindowType = WindowType.HANNING,
        center_position: float = 0.0,
        fill_factor: float = 0.0,
        size: int = 0,
    ) -> None:
        self._changed = False
        self._data = np.zeros(0, dtype=np.float32)
        self._type = WindowType.HANNING
        self._center = 0.0
        self._fill = 0.0
        self._size = 0
        self.set_function_params(window_type, center_position, fill_factor, size)

    @property
    def size(self) -> int:
        """Number of samples."""
        return self._size

    @property
    def window_type(self) -> WindowType:
        """Current window shape."""
        return self._type

    @property
    def center_position(self) -> float:
        """Current (clamped) center position."""
        return self._center

    @property
    def fill_factor(self) -> float:
        """Current fill factor."""
        return self._fill

    def set_function_params(
        self,
        window_type: WindowType,
        center_position: float,
        fill_factor: float,
        size: int,
    ) -> None:
        """Set all parameters; the window is recomputed on the next :meth:`data`."""
        window_type = WindowType(window_type)
        if self._size != size:
            self.set_size(size)
        center = float(_F32(center_position))
        fill = float(_F32(fill_factor))
        if window_type != self._type or center != self._center or fill != self._fill:
            self._type = window_type
            self._center = min(1.0, max(0.0, center))
            self._fill = fill
            self._changed = True

    def set_size(self, size: int) -> None:
        """Change the number of samples."""
        if size < 0:
            raise ValueError("window size must not be negative")
        if self._size != size:
            self._data = np.zeros(size, dtype=np.float32)
            self._size = size
            self._changed = True

    def data(self) -> np.ndarray:
        """Return the window samples, recomputing them if parameters changed."""
        if self._changed:
            self._update_data()
            self._changed = False
        return self._data

    def _update_data(self) -> None:
        if self._size <= 0:
            return
        calculators = {
            WindowType.HANNING: self._hanning,
            WindowType.GAUSS: self._gauss,
            WindowType.SINE: self._sine,
            WindowType.LANCZOS: self._lanczos,
            WindowType.RECTANGULAR: self._rectangular,
            WindowType.FLAT_TOP: self._flat_top,
        }
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            self._data = calculators[self._type]().astype(np.float32)

    def _normalised_positions(self) -> tuple[np.ndarray, np.ndarray]:
        """Positions scaled to [0, 1] over the window, and the mask of samples outside it."""
        size_f = _F32(self._size)
        width = max(0, int(_F32(self._fill) * size_f))
        center = max(0, int(_F32(self._center) * size_f))
        min_pos = center - width // 2
        xi = np.arange(self._size, dtype=np.int64) - min_pos
        xi_norm = xi.astype(np.float32) / (_F32(width) - _F32(1.0))
        outside = (xi_norm > _UPPER_EDGE) | (xi_norm < _LOWER_EDGE)
        return xi_norm, outside

    def _rectangular(self) -> np.ndarray:
        _, outside = self._normalised_positions()
        return np.where(outside, _F32(0.0), _F32(1.0))

    def _hanning(self) -> np.ndarray:
        xi_norm, outside = self._normalised_positions()
        values = 0.5 * (1.0 - np.cos(2.0 * np.pi * xi_norm.astype(np.float64)))
        return np.where(outside, 0.0, values)

    def _gauss(self) -> np.ndarray:
        center = max(0, int(_F32(self._center) * _F32(self._size)))
        xi = np.arange(self._size, dtype=np.int64) - center
        xi_norm = (xi.astype(np.float32) / (_F32(self._size) - _F32(1.0))) / _F32(self._fill)
        return np.exp(_F32(-10.0) * (xi_norm * xi_norm)).astype(np.float32)

    def _sine(self) -> np.ndarray:
        xi_norm, outside = self._normalised_positions()
        values = np.sin(np.pi * xi_norm.astype(np.float64))
        return np.where(outside, 0.0, values)

    def _lanczos(self) -> np.ndarray:
        xi_norm, outside = self._normalised_positions()
        argument = _F32(2.0) * xi_norm - _F32(1.0)
        scaled = np.pi * argument.astype(np.float64)
        sinc = np.where(argument == 0, 1.0, np.sin(scaled) / scaled)
        return np.where(outside, 0.0, sinc)

    def _flat_top(self) -> np.ndarray:
        xi_norm, outside = self._normalised_positions()
        x = xi_norm.astype(np.float64)
        a0, a1, a2, a3, a4 = _FLAT_TOP_COEFFS
        values = (
            a0
            - a1 * np.cos(2.0 * np.pi * x).astype(np.float32)
            + a2 * np.cos(4.0 * np.pi * x).astype(np.float32)
            - a3 * np.cos(6.0 * np.pi * x).astype(np.float32)
            + a4 * np.cos(8.0 * np.pi * x).astype(np.float32)
        )
        return np.where(outside, _F32(0.0), values)