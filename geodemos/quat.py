"""Quaternion helpers (xyzw order) and rigid poses."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _vec(a, size: int) -> np.ndarray:
    arr = np.asarray(a, dtype=float)
    if arr.shape != (size,):
        raise ValueError(f"expected {size} components, got shape {arr.shape}")
    return arr


def qmul(a, b) -> np.ndarray:
    """Hamilton product of two xyzw quaternions."""
    ax, ay, az, aw = _vec(a, 4)
    bx, by, bz, bw = _vec(b, 4)
    return np.array([
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
        aw * bw - ax * bx - ay * by - az * bz,
    ])


def qconj(q) -> np.ndarray:
    """Conjugate of a quaternion."""
    x, y, z, w = _vec(q, 4)
    return np.array([-x, -y, -z, w])


def qrot(q, v) -> np.ndarray:
    """Rotate vector ``v`` by unit quaternion ``q``."""
    q = _vec(q, 4)
    v = _vec(v, 3)
    return qmul(qmul(q, np.append(v, 0.0)), qconj(q))[:3]


def quat_from_axis_angle(axis, angle: float) -> np.ndarray:
    """Unit quaternion rotating by ``angle`` radians about ``axis``."""
    axis = _vec(axis, 3)
    norm = np.linalg.norm(axis)
    if norm == 0:
        raise ValueError("rotation axis must not be zero")
    half = angle / 2.0
    return np.append(axis / norm * np.sin(half), np.cos(half))


def _identity() -> np.ndarray:
    return np.array([0.0, 0.0, 0.0, 1.0])


@dataclass(eq=False)
class Pose:
    """A position and orientation pair describing a rigid transform."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    orientation: np.ndarray = field(default_factory=_identity)

    def __post_init__(self) -> None:
        self.position = _vec(self.position, 3).copy()
        self.orientation = _vec(self.orientation, 4).copy()

    def transform(self, point) -> np.ndarray:
        """Map a point from local space into this pose's parent space."""
        return self.position + qrot(self.orientation, point)

    def inverse(self) -> Pose:
        q = qconj(self.orientation)
        return Pose(qrot(q, -self.position), q)

    def __mul__(self, other):
        if isinstance(other, Pose):
            return Pose(
                self.transform(other.position),
                qmul(self.orientation, other.orientation),
            )
        return self.transform(other)