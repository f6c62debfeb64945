"""Mass-spring cloth patches solved with position-based constraints.

A :class:`ConstraintNetwork` holds four square cloth sections that share the
same constraint layout and are stepped together.  Points are addressed either
per section, or with a flat index ``section * points_count + point``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math

import numpy as np

SECTIONS = 4

# Each section is kept slightly further from the walls than the previous one,
# so overlapping sections resting on the floor do not fight for the same depth.
_SEPARATION_SCALE = np.array([1.3, 1.2, 1.1, 1.0])

_SOLVER_EPSILON = 0.000001
_NORMAL_EPSILON = 0.00000001


@dataclass(frozen=True)
class ClothSettings:
    """Global simulation parameters."""

    gravity: tuple[float, float, float] = (0.0, 0.0, -20.0)
    timestep: float = 0.016
    velocity_damp: float = 0.9
    bias: float = 0.3
    bias_decay: float = 0.95
    room_min: tuple[float, float, float] = (-10.0, -10.0, 0.0)
    room_max: tuple[float, float, float] = (10.0, 32.0, 6.0)
    separation_epsilon: float = 0.01
    solver_count: int = 4


@dataclass(frozen=True)
class Constraint:
    """A distance constraint between points ``a`` and ``b``."""

    a: int
    b: int
    restlen: float


@dataclass
class ConstraintNetwork:
    """Four square cloth sections of ``width`` x ``height`` points."""

    width: int
    height: int
    size: float
    settings: ClothSettings = field(default_factory=ClothSettings)

    def __init__(
        self,
        width: int,
        height: int,
        size: float,
        settings: ClothSettings | None = None,
    ) -> None:
        if width != height:
            raise ValueError("cloth sections must be square")
        if width < 2:
            raise ValueError("cloth needs at least two points per side")
        self.width = width
        self.height = height
        self.size = float(size)
        self.settings = settings if settings is not None else ClothSettings()
        self.mesh_width = width
        self.points_count = width * height
        shape = (SECTIONS, self.points_count, 3)
        self.positions = np.zeros(shape)
        self.old_positions = np.zeros(shape)
        self.velocity = np.zeros(shape)
        self.normals = np.zeros(shape)
        self.inverse_mass = np.ones((SECTIONS, self.points_count))
        self.damp_air = 60.0
        self.wind = np.zeros((SECTIONS, 3))
        self.bbox_min = np.zeros((SECTIONS, 3))
        self.bbox_max = np.zeros((SECTIONS, 3))
        self.triangles = self._make_triangles()
        self._layout()

    def _make_triangles(self) -> list[tuple[int, int, int]]:
        w = self.mesh_width
        tris: list[tuple[int, int, int]] = []
        for i in range(w - 1):
            for j in range(w - 1):
                for s in range(SECTIONS):
                    t = (
                        s + SECTIONS * (i * w + j),
                        s + SECTIONS * ((i + 1) * w + j),
                        s + SECTIONS * ((i + 1) * w + j + 1),
                    )
                    r = (
                        s + SECTIONS * (i * w + j),
                        s + SECTIONS * (i * w + j + 1),
                        s + SECTIONS * ((i + 1) * w + j + 1),
                    )
                    tris.extend([t, (t[0], t[2], t[1]), r, (r[0], r[2], r[1])])
        return tris

    def _layout(self) -> None:
        w, h, size = self.width, self.height, self.size
        for i in range(h):
            for j in range(w):
                local = np.array([-0.5 + j / (w - 1.0), -0.5 + 1.0 - i / (w - 1.0), 0.0])
                self.positions[:, i * w + j] = local * size

        r = size / (w - 1.0)
        diag = r * math.sqrt(2.0)
        cons: list[Constraint] = []
        cons += [Constraint(i * w + j, (i + 1) * w + j, r)
                 for i in range(h) for j in range(w) if i < h - 1]
        cons += [Constraint(i * w + j, i * w + j + 1, r)
                 for j in range(w) for i in range(h) if j < w - 1]
        cons += [Constraint(i * w + j, (i + 1) * w + j + 1, diag)
                 for i in range(h) for j in range(w) if j < w - 1 and i < h - 1]
        cons += [Constraint(i * w + j, (i + 1) * w + j - 1, diag)
                 for i in range(h) for j in range(w) if j > 0 and i < h - 1]
        cons += [Constraint(i * w + j, (i + 2) * w + j, r * 2.0)
                 for i in range(h) for j in range(w) if i < h - 2]
        cons += [Constraint(i * w + j, i * w + j + 2, r * 2.0)
                 for j in range(w) for i in range(h) if j < w - 2]
        self.constraints = cons

        self.quads = np.array(
            [
                (i * w + j, i * w + j + 1, (i + 1) * w + j + 1, (i + 1) * w + j)
                for i in range(h - 1)
                for j in range(w - 1)
            ],
            dtype=int,
        )
        self.update_bbox()

    def _locate(self, index: int) -> tuple[int, int]:
        if not 0 <= index < self.points_count * SECTIONS:
            raise IndexError(f"point index {index} out of range")
        return index // self.points_count, index % self.points_count

    def point(self, index: int) -> np.ndarray:
        """Position of the point with flat index ``index``."""
        section, local = self._locate(index)
        return self.positions[section, local].copy()

    def set_point(self, index: int, value) -> None:
        section, local = self._locate(index)
        arr = np.asarray(value, dtype=float)
        if arr.shape != (3,):
            raise ValueError("a point needs three coordinates")
        self.positions[section, local] = arr

    def set_inverse_mass(self, index: int, invm: float) -> None:
        """Set a point's inverse mass; zero makes the point fixed."""
        section, local = self._locate(index)
        self.inverse_mass[section, local] = invm

    def update_bbox(self) -> None:
        """Recompute the bounding box of each section."""
        self.bbox_min = self.positions.min(axis=1)
        self.bbox_max = self.positions.max(axis=1)

    def room_collision(self) -> None:
        """Keep every point inside the room, a little off the walls."""
        st = self.settings
        ce = (st.separation_epsilon * _SEPARATION_SCALE)[:, None, None]
        low = np.asarray(st.room_min, dtype=float) + ce
        high = np.asarray(st.room_max, dtype=float) - ce
        self.positions = np.maximum(low, np.minimum(high, self.positions))

    def calc_normals(self) -> None:
        """Area-weighted unit vertex normals from the quads."""
        normals = np.zeros_like(self.positions)
        q = self.quads
        v0, v1, v2, v3 = (self.positions[:, q[:, k]] for k in range(4))
        n = np.cross(v1 - v0, v2 - v1) + np.cross(v3 - v2, v0 - v3)
        for k in range(4):
            np.add.at(normals, (slice(None), q[:, k]), n)
        lengths = np.sqrt(_NORMAL_EPSILON + np.sum(normals * normals, axis=2))
        self.normals = normals / lengths[..., None]

    def calc_velocity(self) -> None:
        """Velocity from the last position change."""
        self.velocity = (self.positions - self.old_positions) / self.settings.timestep

    def _integrate(self) -> None:
        st = self.settings
        gravity = np.asarray(st.gravity, dtype=float)
        rel = self.velocity - self.wind[:, None, :]
        along = np.sum(rel * self.normals, axis=2) * self.damp_air
        force = -self.normals * along[..., None]
        step = (self.inverse_mass * st.timestep)[..., None]
        self.velocity = self.velocity + (gravity + force) * step
        self.old_positions = self.positions.copy()
        self.positions = self.positions + self.velocity * (st.velocity_damp * st.timestep)

    def _solve(self) -> None:
        st = self.settings
        pos = self.positions
        mi = self.inverse_mass
        bias = st.bias
        for _ in range(st.solver_count):
            for c in self.constraints:
                v = pos[:, c.b] - pos[:, c.a]
                dp = np.sum(v * v, axis=1) + _SOLVER_EPSILON
                invm = 1.0 / np.sqrt(dp)
                u = v * invm[:, None]
                dif = (invm * dp - c.restlen) * bias
                pos[:, c.a] += u * (dif * mi[:, c.a])[:, None]
                pos[:, c.b] -= u * (dif * mi[:, c.b])[:, None]
            bias *= st.bias_decay

    def simulate(self) -> None:
        """Advance all four sections by one timestep."""
        self._integrate()
        self._solve()
        self.room_collision()
        self.calc_velocity()
        self.update_bbox()
        self.calc_normals()

    def vertices(self) -> tuple[np.ndarray, np.ndarray]:
        """Render vertices as ``(positions, texcoords)``.

        Vertex ``point * 4 + section`` belongs to that point of that section,
        matching the indices in :attr:`triangles`.
        """
        positions = self.positions.transpose(1, 0, 2).reshape(-1, 3).copy()
        idx = np.arange(self.points_count)
        denom = self.mesh_width - 1.0
        tex = np.stack([(idx % self.mesh_width) / denom, (idx // self.mesh_width) / denom], axis=1)
        texcoords = np.repeat(tex, SECTIONS, axis=0)
        return positions, texcoords