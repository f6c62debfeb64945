"""Least-squares paraboloid fitting of point clouds."""

from __future__ import annotations

import numpy as np

from geodemos.quat import Pose


def paraboloid_fit(points) -> np.ndarray:
    """Fit ``z = h0*x*x + h1*y*y + h2*x*y + h3`` and return ``h``."""
    pts = np.asarray(points, dtype=float)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise ValueError("points must be an (n, 3) array")
    x, y, z = pts[:, 0], pts[:, 1], pts[:, 2]
    basis = np.stack([x * x, y * y, x * y, np.ones_like(x)], axis=1)
    m = basis.T @ basis
    b = basis.T @ z
    try:
        return np.linalg.solve(m, b)
    except np.linalg.LinAlgError as exc:
        raise ValueError("points do not determine a paraboloid") from exc


def _vrand(rng: np.random.Generator) -> np.ndarray:
    return rng.uniform(-1.0, 1.0, 3)


def random_parabolic_cloud(rng=None, extent=(1.5, 1.0, 0.25)) -> np.ndarray:
    """A 5x5 jittered grid on a random paraboloid, placed at a random pose."""
    rng = np.random.default_rng() if rng is None else rng
    scale = np.asarray(extent, dtype=float)
    k = _vrand(rng) * 4.0
    q = np.append(_vrand(rng), 1.0)
    pose = Pose((1.0, 1.0, 1.0), q / np.linalg.norm(q))
    steps = np.arange(5) * 0.25 - 0.5
    result = []
    for y in steps:
        for x in steps:
            v = _vrand(rng) * 0.1 + np.array([x, y, 0.0])
            height = v[0] * v[0] * k[0] + v[1] * v[1] * k[1] + k[2] * v[0] * v[1]
            result.append(pose * (np.array([v[0], v[1], height]) * scale))
    return np.array(result)


def curvature_axes(h) -> tuple[float, np.ndarray, np.ndarray]:
    """Principal curvature directions of a fitted paraboloid.

    Returns ``(angle, axes, curvatures)``: ``axes[i]`` is a unit direction in
    the xy plane and ``curvatures[i]`` the curvature of the height along it.
    """
    h = np.asarray(h, dtype=float)
    if h.shape[0] < 3:
        raise ValueError("expected at least three paraboloid coefficients")
    hess = np.array([[h[0], h[2] / 2.0], [h[2] / 2.0, h[1]]])
    angle = 0.5 * float(np.arctan2(2.0 * hess[0, 1], hess[0, 0] - hess[1, 1]))
    c, s = np.cos(angle), np.sin(angle)
    axes = np.array([[c, s], [-s, c]])
    curvatures = np.array([a @ hess @ a for a in axes])
    return angle, axes, curvatures