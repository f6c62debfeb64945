import numpy as np
import pytest

from geodemos.lod import (
    FrameClock,
    Keyframe,
    LodAnimator,
    LodModel,
    map_vertex,
    permute_vertices,
)

OCTA_VERTS = [
    (1.0, 0.0, 0.0),
    (-1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, -1.0, 0.0),
    (0.0, 0.0, 1.0),
    (0.0, 0.0, -1.0),
]
OCTA_TRIS = [
    (0, 2, 4), (2, 1, 4), (1, 3, 4), (3, 0, 4),
    (2, 0, 5), (1, 2, 5), (3, 1, 5), (0, 3, 5),
]


@pytest.fixture
def model():
    return LodModel(OCTA_VERTS, OCTA_TRIS)


def test_map_vertex_in_range_is_unchanged():
    assert map_vertex([0, 0, 1, 2], 1, 4) == 1


def test_map_vertex_follows_chain():
    assert map_vertex([0, 0, 1, 2], 3, 2) == 1


def test_map_vertex_zero_limit():
    assert map_vertex([0, 0, 1, 2], 3, 0) == 0


def test_permute_vertices_moves_points_and_indices():
    verts = [(0, 0, 0), (1, 0, 0), (0, 1, 0)]
    new_verts, new_tris = permute_vertices(verts, [(0, 1, 2)], [2, 0, 1])
    assert np.allclose(new_verts[2], verts[0])
    assert np.allclose(new_verts[0], verts[1])
    assert new_tris == [(2, 0, 1)]
    for old_tri, new_tri in zip([(0, 1, 2)], new_tris):
        for o, n in zip(old_tri, new_tri):
            assert np.allclose(new_verts[n], verts[o])


def test_permute_vertices_length_mismatch():
    with pytest.raises(ValueError):
        permute_vertices([(0, 0, 0), (1, 0, 0)], [], [0])


def test_model_keeps_same_vertex_set(model):
    assert sorted(map(tuple, model.vertices.tolist())) == sorted(OCTA_VERTS)
    assert len(model.collapse_map) == len(OCTA_VERTS)


def test_full_detail_renders_all_triangles(model):
    tris = model.render_triangles(model.vertex_count)
    assert len(tris) == len(OCTA_TRIS)
    for corners, normal in tris:
        assert normal is not None
        assert np.isclose(np.linalg.norm(normal), 1.0)
        assert any(np.allclose(corners[0], v) for v in OCTA_VERTS)


def test_zero_vertices_renders_nothing(model):
    assert model.render_triangles(0) == []


def test_triangle_count_never_grows_with_fewer_vertices(model):
    counts = [len(model.render_triangles(n)) for n in range(model.vertex_count, -1, -1)]
    assert all(a >= b for a, b in zip(counts, counts[1:]))


def test_collapse_map_points_lower(model):
    for i, target in enumerate(model.collapse_map):
        assert target < i or (i == 0 and target == 0)


def test_status_full_detail(model):
    assert model.status(6) == "Polys: 8  Vertices: 6 "


def test_status_with_morph(model):
    text = model.status(6, 0.5, 0.5)
    assert "<-> 3  morph: 0.50 " in text


def test_keyframe_table_spans_cycle():
    keys = LodAnimator.keys
    assert keys[0] == Keyframe(0, 1, 0, 1, 0)
    assert keys[-1].t == 50
    assert all(a.t < b.t for a, b in zip(keys, keys[1:]))


def test_animator_starts_full():
    anim = LodAnimator(100)
    assert anim.advance(0.0) == (100, 1.0)


def test_animator_reduction_phase():
    anim = LodAnimator(100)
    render_num, morph = anim.advance(6.0)
    assert render_num == 50
    assert morph == 1.0


def test_animator_stays_in_bounds():
    anim = LodAnimator(100)
    for _ in range(600):
        render_num, morph = anim.advance(0.1)
        assert 0 <= render_num <= 100
        assert morph <= 1.0
        assert 0.0 <= anim.time < 50


def test_animator_wraps():
    anim = LodAnimator(10)
    anim.advance(49.0)
    anim.advance(1.0)
    assert anim.time == 0.0


def test_animator_rejects_negative():
    with pytest.raises(ValueError):
        LodAnimator(-1)


def test_frame_clock_same_time_is_not_zero():
    clock = FrameClock()
    clock.tick(1.0)
    delta, _ = clock.tick(1.0)
    assert delta == 0.0001


def test_frame_clock_delta_and_rate():
    clock = FrameClock()
    _, fps = clock.tick(1.0)
    assert fps == -1.0
    delta, fps = clock.tick(1.5)
    assert delta == pytest.approx(0.5)
    assert fps == pytest.approx(2 / 0.5)