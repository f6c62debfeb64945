"""Level-of-detail rendering of a progressively reduced mesh.

After the reduction the vertices are sorted by collapse order, so drawing the
model with ``n`` vertices uses vertices ``0 .. n-1``; any vertex beyond that
follows the collapse chain until it lands within range.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np

from geodemos.progmesh import progressive_mesh
from geodemos.quat import qmul, quat_from_axis_angle

RenderedTriangle = tuple[np.ndarray, "np.ndarray | None"]


def map_vertex(collapse_map: Sequence[int], index: int, limit: int) -> int:
    """Follow the collapse chain of ``index`` until it is below ``limit``."""
    if limit <= 0:
        return 0
    while index >= limit:
        index = collapse_map[index]
    return index


def permute_vertices(
    vertices: Sequence[Sequence[float]],
    triangles: Iterable[Sequence[int]],
    permutation: Sequence[int],
) -> tuple[np.ndarray, list[tuple[int, int, int]]]:
    """Reorder vertices so original vertex ``i`` moves to ``permutation[i]``.

    Returns the reordered vertices and the triangles with remapped indices.
    """
    points = np.asarray(vertices, dtype=float)
    if len(permutation) != len(points):
        raise ValueError("permutation length does not match the vertex count")
    reordered = np.empty_like(points)
    reordered[list(permutation)] = points
    remapped = [tuple(permutation[i] for i in tri) for tri in triangles]
    return reordered, remapped  # type: ignore[return-value]


class LodModel:
    """A mesh reduced once and then drawable at any vertex count."""

    def __init__(
        self,
        vertices: Sequence[Sequence[float]],
        triangles: Iterable[Sequence[int]],
    ) -> None:
        triangles = [tuple(int(i) for i in tri) for tri in triangles]
        self.collapse_map, permutation = progressive_mesh(vertices, triangles)
        self.vertices, self.triangles = permute_vertices(
            vertices, triangles, permutation
        )
        self.position = np.array([0.0, 0.0, -3.0])
        yaw = quat_from_axis_angle((0.0, 1.0, 0.0), -3.14 / 4)
        pitch = quat_from_axis_angle((1.0, 0.0, 0.0), 3.14 / 12)
        self.orientation = qmul(pitch, yaw)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    def render_triangles(
        self, render_num: int, lodbase: float = 0.5, morph: float = 1.0
    ) -> list[RenderedTriangle]:
        """Triangles that survive at ``render_num`` vertices.

        Each corner is blended between its position at ``render_num``
        vertices and at ``render_num * lodbase`` vertices by ``morph``.  Every
        entry is ``(corners, normal)``; ``normal`` is ``None`` when the
        blended triangle has no area.
        """
        coarse = int(render_num * lodbase)
        result: list[RenderedTriangle] = []
        for tri in self.triangles:
            p = [map_vertex(self.collapse_map, v, render_num) for v in tri]
            if p[0] == p[1] or p[1] == p[2] or p[2] == p[0]:
                continue
            q = [map_vertex(self.collapse_map, v, coarse) for v in p]
            corners = self.vertices[p] * morph + self.vertices[q] * (1.0 - morph)
            normal = np.cross(corners[1] - corners[0], corners[2] - corners[1])
            size = float(np.linalg.norm(normal))
            result.append((corners, normal / size if size > 0 else None))
        return result

    def status(
        self, render_num: int, lodbase: float = 0.5, morph: float = 1.0
    ) -> str:
        """Status line with the polygon and vertex counts being drawn."""
        polys = len(self.render_triangles(render_num, lodbase, morph))
        text = f"Polys: {polys}  Vertices: {render_num} "
        if morph < 1.0:
            text += f"<-> {int(lodbase * render_num)}  morph: {morph:4.2f} "
        return text


@dataclass(frozen=True)
class Keyframe:
    """Animation key: vertex fraction ``n`` and morph ``m`` with their rates."""

    t: float
    n: float
    dn: float
    m: float
    dm: float


_KEYS = (
    Keyframe(0, 1, 0, 1, 0),
    Keyframe(2, 1, -1, 1, 0),
    Keyframe(10, 0, 1, 1, 0),
    Keyframe(18, 1, 0, 1, 0),
    Keyframe(20, 1, 0, 1, -1),
    Keyframe(24, 0.5, 0, 1, 0),
    Keyframe(26, 0.5, 0, 1, -1),
    Keyframe(30, 0.25, 0, 1, 0),
    Keyframe(32, 0.25, 0, 1, -1),
    Keyframe(36, 0.125, 0, 1, 0),
    Keyframe(38, 0.25, 0, 0, 1),
    Keyframe(42, 0.5, 0, 0, 1),
    Keyframe(46, 1, 0, 0, 1),
    Keyframe(50, 1, 0, 1, 0),
)


class LodAnimator:
    """Cycles the vertex count and morph value through the keyframes."""

    keys: tuple[Keyframe, ...] = _KEYS

    def __init__(self, vertex_count: int) -> None:
        if vertex_count < 0:
            raise ValueError("vertex count must not be negative")
        self.vertex_count = vertex_count
        self.time = 0.0
        self.render_num = vertex_count
        self.morph = 1.0

    @property
    def period(self) -> float:
        return self.keys[-1].t

    def advance(self, dt: float) -> tuple[int, float]:
        """Move the clock by ``dt`` seconds; return ``(render_num, morph)``."""
        self.time += dt
        if self.time >= self.period:
            self.time = 0.0
        k = 0
        while self.time > self.keys[k + 1].t:
            k += 1
        key, nxt = self.keys[k], self.keys[k + 1]
        interp = (self.time - key.t) / (nxt.t - key.t)
        render_num = int(self.vertex_count * (key.n + interp * key.dn))
        self.morph = min(key.m + interp * key.dm, 1.0)
        self.render_num = max(0, min(render_num, self.vertex_count))
        return self.render_num, self.morph


@dataclass
class FrameClock:
    """Frame timing: time step since the last tick and a running frame rate.

    Times are in seconds.
    """

    delta_t: float = 0.1
    fps: float = 0.0
    _started: bool = field(default=False, repr=False)
    _start: float = field(default=0.0, repr=False)
    _start2: float = field(default=0.0, repr=False)
    _last: float = field(default=0.0, repr=False)
    _frame: int = field(default=0, repr=False)
    _frame2: int = field(default=0, repr=False)

    def tick(self, now: float) -> tuple[float, float]:
        """Record a frame at time ``now``; return ``(delta_t, fps)``."""
        if not self._started:
            self._frame = 0
            self._start = now
            self._started = True
        self._frame += 1
        self._frame2 += 1
        elapsed = now - self._start
        rate = self._frame / elapsed if elapsed else -1.0
        if elapsed > 2.0 and self._frame > 10:
            self._start = self._start2
            self._frame = self._frame2
            self._start2 = now
            self._frame2 = 0
        self.delta_t = now - self._last
        if now == self._last:
            self.delta_t = 0.0001
        self.fps = rate
        self._last = now
        return self.delta_t, self.fps