"""Trackball rotation control driven by pointer positions in [-1, 1] x [-1, 1]."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

Vector3 = tuple[float, float, float]
Point = tuple[float, float]


def _length(v: Vector3) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def _normalized(v: Vector3) -> Vector3:
    length = _length(v)
    if length == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / length, v[1] / length, v[2] / length)


def _dot(a: Vector3, b: Vector3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Vector3, b: Vector3) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


@dataclass(frozen=True)
class Quaternion:
    """Rotation quaternion; the default is the identity."""

    scalar: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_axis_and_angle(cls, axis: Vector3, angle_degrees: float) -> "Quaternion":
        """Rotation by *angle_degrees* about *axis*."""
        ax, ay, az = _normalized(tuple(float(c) for c in axis))
        half = math.radians(angle_degrees) / 2.0
        s = math.sin(half)
        return cls(math.cos(half), ax * s, ay * s, az * s).normalized()

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        w1, x1, y1, z1 = self.scalar, self.x, self.y, self.z
        w2, x2, y2, z2 = other.scalar, other.x, other.y, other.z
        return Quaternion(
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        )

    def length(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.scalar ** 2 + self.x ** 2 + self.y ** 2 + self.z ** 2)

    def normalized(self) -> "Quaternion":
        """Unit-length copy, or the zero quaternion if this one is zero."""
        length = self.length()
        if length == 0.0:
            return Quaternion(0.0, 0.0, 0.0, 0.0)
        return Quaternion(self.scalar / length, self.x / length, self.y / length, self.z / length)

    def conjugated(self) -> "Quaternion":
        """Conjugate quaternion."""
        return Quaternion(self.scalar, -self.x, -self.y, -self.z)

    @property
    def vector(self) -> Vector3:
        """The vector part."""
        return (self.x, self.y, self.z)

    def rotated_vector(self, vector: Vector3) -> Vector3:
        """Rotate *vector* by this quaternion."""
        pure = Quaternion(0.0, float(vector[0]), float(vector[1]), float(vector[2]))
        return (self * pure * self.conjugated()).vector


class TrackMode(Enum):
    """How pointer motion maps to rotation."""

    PLANE = 0
    SPHERE = 1


class TrackBall:
    """Turns pointer drags into a rotation that keeps spinning after release.

    *clock* returns seconds; it defaults to :func:`time.monotonic`.
    """

    def __init__(
        self,
        mode: TrackMode = TrackMode.SPHERE,
        angular_velocity: float = 0.0,
        axis: Vector3 = (0.0, 1.0, 0.0),
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.mode = mode
        self.angular_velocity = float(angular_velocity)
        self.axis: Vector3 = tuple(float(c) for c in axis)
        self._clock = clock if clock is not None else time.monotonic
        self._rotation = Quaternion()
        self._last_pos: Point = (0.0, 0.0)
        self._last_time = self._clock()
        self.paused = False
        self.pressed = False

    def _msecs_since_last(self, now: float) -> int:
        return int(round((now - self._last_time) * 1000.0))

    def push(self, point: Point, transformation: Quaternion) -> None:
        """Start a drag at *point*; spinning stops."""
        self._rotation = self.rotation()
        self.pressed = True
        self._last_time = self._clock()
        self._last_pos = (float(point[0]), float(point[1]))
        self.angular_velocity = 0.0

    def move(self, point: Point, transformation: Quaternion) -> None:
        """Continue a drag to *point*; moves within 20 ms of the last are ignored."""
        if not self.pressed:
            return
        now = self._clock()
        msecs = self._msecs_since_last(now)
        if msecs <= 20:
            return

        px, py = float(point[0]), float(point[1])
        if self.mode is TrackMode.PLANE:
            dx = px - self._last_pos[0]
            dy = py - self._last_pos[1]
            angle = math.degrees(math.hypot(dx, dy))
            self.angular_velocity = angle / msecs
            axis = _normalized((-dy, dx, 0.0))
        else:
            last3d = self._sphere_point(self._last_pos)
            current3d = self._sphere_point((px, py))
            axis = _cross(last3d, current3d)
            angle = math.degrees(math.asin(min(1.0, _length(axis))))
            self.angular_velocity = angle / msecs
            axis = _normalized(axis)

        self.axis = transformation.rotated_vector(axis)
        self._rotation = Quaternion.from_axis_and_angle(self.axis, angle) * self._rotation
        self._last_pos = (px, py)
        self._last_time = now

    @staticmethod
    def _sphere_point(point: Point) -> Vector3:
        v = (point[0], point[1], 0.0)
        sqr_z = 1.0 - _dot(v, v)
        if sqr_z > 0:
            return (v[0], v[1], math.sqrt(sqr_z))
        return _normalized(v)

    def release(self, point: Point, transformation: Quaternion) -> None:
        """End a drag at *point*; the ball keeps its last angular velocity."""
        self.move(point, transformation)
        self.pressed = False

    def start(self) -> None:
        """Restart the clock and resume spinning."""
        self._last_time = self._clock()
        self.paused = False

    def stop(self) -> None:
        """Freeze the current rotation."""
        self._rotation = self.rotation()
        self.paused = True

    def rotation(self) -> Quaternion:
        """Current rotation, including spin accumulated since the last update."""
        if self.paused or self.pressed:
            return self._rotation
        angle = self.angular_velocity * self._msecs_since_last(self._clock())
        return Quaternion.from_axis_and_angle(self.axis, angle) * self._rotation