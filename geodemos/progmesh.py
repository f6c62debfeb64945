"""Progressive-mesh polygon reduction by repeated minimum-cost edge collapse.

The mesh is reduced all the way down to zero vertices.  The result says in
which order the vertices disappear and onto which neighbour each one
collapses, so that a model can later be drawn with any number of vertices.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

Vec3 = tuple[float, float, float]

_NO_NEIGHBOUR_COST = -0.01
_UNSET_COST = 1000000.0


def _sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _length(a: Vec3) -> float:
    return math.sqrt(_dot(a, a))


class _Vertex:
    __slots__ = ("position", "id", "neighbors", "faces", "cost", "collapse")

    def __init__(self, position: Sequence[float], index: int) -> None:
        coords = tuple(float(c) for c in position)
        if len(coords) != 3:
            raise ValueError(f"vertex {index} does not have three coordinates")
        self.position: Vec3 = coords  # type: ignore[assignment]
        self.id = index
        self.neighbors: list[_Vertex] = []
        self.faces: list[_Triangle] = []
        self.cost = 0.0
        self.collapse: _Vertex | None = None

    def add_neighbor(self, other: _Vertex) -> None:
        if not any(n is other for n in self.neighbors):
            self.neighbors.append(other)

    def remove_if_non_neighbor(self, other: _Vertex) -> None:
        """Drop ``other`` from the neighbours unless a face still joins them."""
        if not any(n is other for n in self.neighbors):
            return
        if any(face.has_vertex(other) for face in self.faces):
            return
        self.neighbors.remove(other)


class _Triangle:
    __slots__ = ("vertices", "normal")

    def __init__(self, v0: _Vertex, v1: _Vertex, v2: _Vertex) -> None:
        if v0 is v1 or v1 is v2 or v2 is v0:
            raise ValueError("triangle uses the same vertex more than once")
        self.vertices = [v0, v1, v2]
        self.normal: Vec3 = (0.0, 0.0, 0.0)
        self.compute_normal()
        for vertex in self.vertices:
            vertex.faces.append(self)
            for other in self.vertices:
                if other is not vertex:
                    vertex.add_neighbor(other)

    def has_vertex(self, v: _Vertex) -> bool:
        return any(x is v for x in self.vertices)

    def compute_normal(self) -> None:
        p0, p1, p2 = (v.position for v in self.vertices)
        normal = _cross(_sub(p1, p0), _sub(p2, p1))
        size = _length(normal)
        if size == 0:
            self.normal = normal
            return
        self.normal = (normal[0] / size, normal[1] / size, normal[2] / size)

    def replace_vertex(self, old: _Vertex, new: _Vertex) -> None:
        slot = next(i for i, v in enumerate(self.vertices) if v is old)
        self.vertices[slot] = new
        old.faces.remove(self)
        new.faces.append(self)
        for vertex in self.vertices:
            old.remove_if_non_neighbor(vertex)
            vertex.remove_if_non_neighbor(old)
        for vertex in self.vertices:
            for other in self.vertices:
                if other is not vertex:
                    vertex.add_neighbor(other)
        self.compute_normal()


class _Mesh:
    """Vertex/triangle adjacency structure used during reduction."""

    def __init__(
        self,
        vertices: Iterable[Sequence[float]],
        triangles: Iterable[Sequence[int]],
    ) -> None:
        self.vertices: list[_Vertex] = [
            _Vertex(p, i) for i, p in enumerate(vertices)
        ]
        self.triangles: list[_Triangle] = []
        by_index = list(self.vertices)
        for tri in triangles:
            indices = [int(i) for i in tri]
            if len(indices) != 3:
                raise ValueError("a triangle needs exactly three indices")
            for i in indices:
                if not 0 <= i < len(by_index):
                    raise ValueError(f"triangle index {i} out of range")
            self.triangles.append(_Triangle(*(by_index[i] for i in indices)))

    def remove_triangle(self, tri: _Triangle) -> None:
        self.triangles.remove(tri)
        for vertex in tri.vertices:
            vertex.faces.remove(tri)
        for i, a in enumerate(tri.vertices):
            b = tri.vertices[(i + 1) % 3]
            a.remove_if_non_neighbor(b)
            b.remove_if_non_neighbor(a)

    def remove_vertex(self, vertex: _Vertex) -> None:
        while vertex.neighbors:
            other = vertex.neighbors[0]
            other.neighbors.remove(vertex)
            vertex.neighbors.remove(other)
        self.vertices.remove(vertex)

    def collapse(self, u: _Vertex, v: _Vertex | None) -> None:
        """Move ``u`` onto ``v``, removing the triangles on edge uv."""
        if v is None:
            self.remove_vertex(u)
            return
        touched = list(u.neighbors)
        for face in reversed(list(u.faces)):
            if face.has_vertex(v):
                self.remove_triangle(face)
        for face in reversed(list(u.faces)):
            face.replace_vertex(u, v)
        self.remove_vertex(u)
        for vertex in touched:
            _compute_cost_at_vertex(vertex)

    def minimum_cost_vertex(self) -> _Vertex:
        best = self.vertices[0]
        for vertex in self.vertices:
            if vertex.cost < best.cost:
                best = vertex
        return best


def edge_collapse_cost(u, v) -> float:
    """Cost of collapsing edge uv by moving ``u`` onto ``v``.

    The cost is the edge length times a curvature term that is low where the
    faces around ``u`` are coplanar with the faces on the edge.
    """
    edge_length = _length(_sub(v.position, u.position))
    sides = [face for face in u.faces if face.has_vertex(v)]
    curvature = 0.0
    for face in u.faces:
        min_curv = 1.0
        for side in sides:
            min_curv = min(min_curv, (1.0 - _dot(face.normal, side.normal)) / 2.0)
        curvature = max(curvature, min_curv)
    return edge_length * curvature


def _compute_cost_at_vertex(vertex: _Vertex) -> None:
    if not vertex.neighbors:
        vertex.collapse = None
        vertex.cost = _NO_NEIGHBOUR_COST
        return
    vertex.cost = _UNSET_COST
    vertex.collapse = None
    for neighbor in vertex.neighbors:
        cost = edge_collapse_cost(vertex, neighbor)
        if cost < vertex.cost:
            vertex.collapse = neighbor
            vertex.cost = cost


def progressive_mesh(
    vertices: Iterable[Sequence[float]],
    triangles: Iterable[Sequence[int]],
) -> tuple[list[int], list[int]]:
    """Reduce a mesh to nothing and return ``(collapse_map, permutation)``.

    ``permutation[i]`` is the new position of original vertex ``i``; after
    reordering the vertices by it, ``collapse_map[j]`` is the (reordered)
    vertex that vertex ``j`` collapses onto.
    """
    mesh = _Mesh(vertices, triangles)
    for vertex in mesh.vertices:
        _compute_cost_at_vertex(vertex)
    count = len(mesh.vertices)
    permutation = [0] * count
    collapse_to = [0] * count
    while mesh.vertices:
        chosen = mesh.minimum_cost_vertex()
        slot = len(mesh.vertices) - 1
        permutation[chosen.id] = slot
        collapse_to[slot] = chosen.collapse.id if chosen.collapse else -1
        mesh.collapse(chosen, chosen.collapse)
    collapse_map = [0 if t == -1 else permutation[t] for t in collapse_to]
    return collapse_map, permutation