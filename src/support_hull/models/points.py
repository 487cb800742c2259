# src/support_hull/models/points.py
from __future__ import annotations

import numpy as np


def _as_xyz(p):
    if hasattr(p, "x") and hasattr(p, "y") and hasattr(p, "z"):
        return (p.x, p.y, p.z)
    return p


def as_points3d(points) -> np.ndarray:
    """
    Convert a collection of 3D points into a new (n, 3) float array.

    Accepts an (n, 3) array, a list of 3-sequences, or objects exposing
    x, y, z attributes. The result never aliases the input.
    """
    if isinstance(points, np.ndarray):
        pts = np.array(points, dtype=float)
    else:
        rows = [_as_xyz(p) for p in points]
        if len(rows) == 0:
            return np.zeros((0, 3), dtype=float)
        pts = np.array(rows, dtype=float)

    if pts.size == 0:
        return np.zeros((0, 3), dtype=float)
    if pts.ndim == 1 and pts.shape[0] == 3:
        pts = pts.reshape(1, 3)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise ValueError(f"Expected points of shape (n, 3), got {pts.shape}")
    return pts


def project_to_plane(points,
                     normal=(0.0, 0.0, 1.0),
                     offset: float = 0.0,
                     ransac_distance_threshold: float = 0.001) -> np.ndarray:
    """
    Orthogonal projection of every point onto the plane n . p + offset = 0:
        p' = p - ((n . p + offset) / |n|^2) n
    For the ground plane (0, 0, 1) / 0 this replaces z with 0 and leaves x, y
    untouched.

    ransac_distance_threshold is unused (no plane fitting is done, the plane
    is fixed by the caller).
    """
    pts = as_points3d(points)
    if pts.shape[0] == 0:
        return pts

    n = np.asarray(normal, dtype=float).reshape(3,)
    nn = float(n @ n)
    if nn == 0.0:
        raise ValueError("plane normal must be non-zero")

    dist = (pts @ n + float(offset)) / nn   # (n,)
    return pts - dist[:, None] * n[None, :]


def unique_points(points: np.ndarray, tol: float = 1e-12) -> np.ndarray:
    """
    Drop duplicate rows (within tol per coordinate), keeping first-seen order.
    """
    pts = np.asarray(points, dtype=float)
    if pts.shape[0] == 0:
        return pts.copy()
    keep = []
    for i in range(pts.shape[0]):
        if not any(np.all(np.abs(pts[i] - pts[j]) <= tol) for j in keep):
            keep.append(i)
    return pts[keep].copy()
