# src/support_hull/models/hull.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
from scipy.spatial import ConvexHull, QhullError

from support_hull.errors import DegenerateInputError, MultiplePolygonsError
from support_hull.models.points import as_points3d, unique_points

logger = logging.getLogger(__name__)


@dataclass
class HullPolygon:
    points: np.ndarray                          # (m, 3) points on the hull boundary
    loops: list = field(default_factory=list)   # each: int array of indices into points, CCW

    @property
    def n_edges(self) -> int:
        return int(sum(len(loop) for loop in self.loops))

    def vertices(self, loop: int = 0) -> np.ndarray:
        """Ordered (k, 2) vertices of one loop."""
        return self.points[self.loops[loop], 0:2].copy()


def polygon_signed_area(verts: np.ndarray) -> float:
    """
    Shoelace area of an ordered polygon; > 0 for counterclockwise.
    """
    v = np.asarray(verts, dtype=float)[:, 0:2]
    x, y = v[:, 0], v[:, 1]
    return 0.5 * float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def _chain_loops(edges: np.ndarray) -> list:
    """
    Chain undirected boundary edges (k, 2) into closed vertex loops.
    Every vertex of a closed polygon has exactly two boundary neighbours.
    """
    nbrs = {}
    for u, v in edges:
        nbrs.setdefault(int(u), []).append(int(v))
        nbrs.setdefault(int(v), []).append(int(u))

    if any(len(n) != 2 for n in nbrs.values()):
        return []

    loops = []
    seen = set()
    for start in sorted(nbrs):
        if start in seen:
            continue
        loop = [start]
        seen.add(start)
        prev, cur = start, nbrs[start][0]
        while cur != start:
            loop.append(cur)
            seen.add(cur)
            a, b = nbrs[cur]
            prev, cur = cur, (b if a == prev else a)
        loops.append(loop)
    return loops


def convex_hull_2d(points, collinear_tol: float = 1e-9) -> HullPolygon:
    """
    Convex hull of planar (z = 0) points.

    Returns the hull boundary points and the boundary loop(s) as
    counterclockwise index lists into them.
    Raises DegenerateInputError for < 3 distinct or collinear points,
    MultiplePolygonsError unless exactly one loop comes out.
    """
    pts = unique_points(as_points3d(points))
    n = pts.shape[0]
    if n < 3:
        raise DegenerateInputError(f"Need at least 3 distinct points for a hull, got {n}")

    xy = pts[:, 0:2]
    s = np.linalg.svd(xy - xy.mean(axis=0), compute_uv=False)
    if s[1] <= collinear_tol * max(1.0, s[0]):
        raise DegenerateInputError("Points are collinear, hull has zero area")

    try:
        hull = ConvexHull(xy)
    except QhullError as e:
        raise DegenerateInputError(f"Qhull could not build a hull: {e}") from e

    # edge extraction: simplices are the boundary segments in 2D
    loops_global = _chain_loops(hull.simplices)

    # keep only boundary points, renumber indices into them
    used = np.unique(hull.simplices.reshape(-1))
    remap = {int(g): i for i, g in enumerate(used)}
    hull_pts = pts[used].copy()

    loops = []
    for loop in loops_global:
        idx = np.array([remap[g] for g in loop], dtype=int)
        if polygon_signed_area(hull_pts[idx]) < 0.0:
            idx = idx[::-1].copy()
        loops.append(idx)

    if len(loops) != 1:
        raise MultiplePolygonsError(len(loops))

    logger.debug("hull: %d input points, %d on boundary", n, hull_pts.shape[0])
    return HullPolygon(points=hull_pts, loops=loops)
