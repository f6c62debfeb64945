import math

import pytest

from geodemos.progmesh import _Mesh, edge_collapse_cost, progressive_mesh

OCTAHEDRON_VERTS = [
    (1, 0, 0), (-1, 0, 0), (0, 1, 0), (0, -1, 0), (0, 0, 1), (0, 0, -1),
]
OCTAHEDRON_TRIS = [
    (0, 2, 4), (2, 1, 4), (1, 3, 4), (3, 0, 4),
    (2, 0, 5), (1, 2, 5), (3, 1, 5), (0, 3, 5),
]


def test_single_triangle_worked_example():
    cmap, perm = progressive_mesh([(0, 0, 0), (1, 0, 0), (0, 1, 0)], [(0, 1, 2)])
    assert perm == [2, 1, 0]
    assert cmap == [0, 0, 1]


def test_octahedron_permutation_is_complete():
    cmap, perm = progressive_mesh(OCTAHEDRON_VERTS, OCTAHEDRON_TRIS)
    assert sorted(perm) == list(range(len(OCTAHEDRON_VERTS)))
    assert len(cmap) == len(OCTAHEDRON_VERTS)


def test_collapse_targets_are_lower_indices():
    cmap, _ = progressive_mesh(OCTAHEDRON_VERTS, OCTAHEDRON_TRIS)
    assert cmap[0] == 0
    for i, target in enumerate(cmap[1:], start=1):
        assert target < i


def test_isolated_vertex_goes_first():
    verts = OCTAHEDRON_VERTS + [(5, 5, 5)]
    cmap, perm = progressive_mesh(verts, OCTAHEDRON_TRIS)
    last = len(verts) - 1
    assert perm[last] == last
    assert cmap[last] == 0


def test_empty_mesh():
    assert progressive_mesh([], []) == ([], [])


def test_degenerate_triangle_rejected():
    with pytest.raises(ValueError):
        progressive_mesh([(0, 0, 0), (1, 0, 0), (0, 1, 0)], [(0, 0, 1)])


def test_out_of_range_index_rejected():
    with pytest.raises(ValueError):
        progressive_mesh([(0, 0, 0), (1, 0, 0), (0, 1, 0)], [(0, 1, 7)])


def test_flat_patch_costs_nothing():
    mesh = _Mesh([(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)], [(0, 1, 2), (0, 2, 3)])
    v = mesh.vertices
    assert edge_collapse_cost(v[0], v[2]) == pytest.approx(0.0)
    assert edge_collapse_cost(v[0], v[1]) == pytest.approx(0.0)


def _fold(scale):
    pts = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 0, 1)]
    pts = [tuple(c * scale for c in p) for p in pts]
    return _Mesh(pts, [(0, 1, 2), (0, 3, 1)])


def test_fold_has_positive_cost():
    mesh = _fold(1.0)
    assert edge_collapse_cost(mesh.vertices[0], mesh.vertices[2]) > 0


def test_cost_scales_with_edge_length():
    small = _fold(1.0)
    large = _fold(2.0)
    c_small = edge_collapse_cost(small.vertices[0], small.vertices[2])
    c_large = edge_collapse_cost(large.vertices[0], large.vertices[2])
    assert c_large == pytest.approx(2 * c_small)


def test_cost_bounded_by_edge_length():
    mesh = _fold(1.0)
    u, v = mesh.vertices[0], mesh.vertices[2]
    length = math.dist(u.position, v.position)
    assert 0 <= edge_collapse_cost(u, v) <= length