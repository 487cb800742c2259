# src/support_hull/models/support_polygon.py
from __future__ import annotations

import logging

import numpy as np

from support_hull.config import HullConfig
from support_hull.errors import DegenerateInputError, MultiplePolygonsError
from support_hull.models.hull import HullPolygon, convex_hull_2d, polygon_signed_area
from support_hull.models.points import project_to_plane

logger = logging.getLogger(__name__)


def rect_corners(center: np.ndarray, half_sizes: np.ndarray):
    cx, cy = float(center[0]), float(center[1])
    hx, hy = float(half_sizes[0]), float(half_sizes[1])
    return np.array([
        [cx - hx, cy - hy],
        [cx + hx, cy - hy],
        [cx + hx, cy + hy],
        [cx - hx, cy + hy],
    ], dtype=float)


def line_coefficients(p0, p1):
    """
    Implicit line a*x + b*y + c = 0 through p0 -> p1:
        a = y0 - y1,  b = x1 - x0,  c = -b*y0 - a*x0
    (a, b) is the edge direction rotated +90 deg, i.e. it points to the left.
    """
    x0, y0 = float(p0[0]), float(p0[1])
    x1, y1 = float(p1[0]), float(p1[1])
    a = y0 - y1
    b = x1 - x0
    c = -b * y0 - a * x0
    return a, b, c


def halfspaces_from_hull(hull: HullPolygon, boundary_margin: float = 0.01):
    """
    Turn every hull edge into one row of A p <= b, shrunk by boundary_margin.

    For each loop and each consecutive vertex pair (p_j, p_{j+1 mod n}):
      - (a, b, c) from line_coefficients
      - orient the row so the hull interior is on the <= side. The interior
        side follows from the loop winding; when the origin (the CoM) is
        strictly inside, this is the same as testing the sign of c:
            c <= 0: A_i = +(a, b), b_i = -c
            c >  0: A_i = -(a, b), b_i = +c
      - |c| <= boundary_margin: b_i = 0, otherwise b_i -= boundary_margin

    Returns A (E, 2), b (E,), one row per edge in traversal order. Rows are
    not normalised.
    """
    if boundary_margin < 0.0:
        raise ValueError("boundary_margin must be non-negative")

    E = hull.n_edges
    A = np.zeros((E, 2), dtype=float)
    b = np.zeros(E, dtype=float)

    origin_inside = True
    z = 0
    for loop in hull.loops:
        verts = hull.points[loop, 0:2]
        ccw = polygon_signed_area(verts) > 0.0
        n = len(loop)
        for j in range(n):
            k = (j + 1) % n
            a_, b_, c_ = line_coefficients(verts[j], verts[k])

            # interior is left of the edge for CCW loops, right for CW
            if ccw:
                A[z, 0], A[z, 1], b[z] = -a_, -b_, c_
            else:
                A[z, 0], A[z, 1], b[z] = a_, b_, -c_

            # A_i @ 0 <= b_i must hold strictly for the origin to be inside
            if b[z] <= 0.0:
                origin_inside = False

            if abs(c_) <= boundary_margin:
                b[z] = 0.0
            else:
                b[z] -= boundary_margin
            z += 1

    if not origin_inside:
        logger.warning(
            "Reference origin is not strictly inside the support polygon; "
            "constraints describe the hull but the CoM lies on or outside it"
        )
    return A, b


def margin_halfspaces(A: np.ndarray, b: np.ndarray, p: np.ndarray) -> float:
    """
    min_i (b_i - A_i p)
    Negative => violation.
    Works even with +inf padded b rows.
    """
    m = b - A @ np.asarray(p, dtype=float).reshape(2,)
    return float(np.min(m))


def pad_halfspaces(A: np.ndarray, b: np.ndarray, m_target: int = 8):
    """
    Pad halfspace constraints to fixed size:
      Apad p <= bpad
    Padded rows are 0 <= +inf (never active).
    """
    m = A.shape[0]
    if m > m_target:
        # the hull of the 8 foot corners cannot exceed 8 edges,
        # but if it does, you'd rather know now.
        raise ValueError(f"Too many hull halfspaces: {m} > {m_target}")

    Apad = np.zeros((m_target, 2), dtype=float)
    bpad = np.full((m_target,), np.inf, dtype=float)

    Apad[:m, :] = A
    bpad[:m] = b
    return Apad, bpad


class SupportPolygon:
    """
    Support polygon -> linear constraints, A (x, y) <= b.

    Pipeline per call: project the contact points on the ground plane,
    build the 2D convex hull, convert hull edges to shrunk half-planes.
    Holds only its configuration; every call starts from scratch.
    """

    def __init__(self, config: HullConfig | None = None):
        self.config = HullConfig() if config is None else config

    def project(self, points) -> np.ndarray:
        cfg = self.config
        return project_to_plane(points,
                                normal=cfg.plane_normal,
                                offset=cfg.plane_offset,
                                ransac_distance_threshold=cfg.ransac_distance_threshold)

    def hull(self, points) -> HullPolygon:
        return convex_hull_2d(self.project(points), collinear_tol=self.config.collinear_tol)

    def constraints(self, points):
        """
        Returns (A, b). Raises DegenerateInputError or MultiplePolygonsError;
        no partial system is ever returned.
        """
        hull = self.hull(points)
        A, b = halfspaces_from_hull(hull, self.config.boundary_margin)
        logger.debug("support polygon: %d edges", A.shape[0])
        return A, b

    def try_constraints(self, points):
        """
        Like constraints() but never raises on hull failures.
        Returns (A, b, ok); on failure A is (0, 2), b is (0,) and ok is False.
        """
        try:
            A, b = self.constraints(points)
        except MultiplePolygonsError as e:
            logger.warning("Support polygon rejected: %s", e)
        except DegenerateInputError as e:
            logger.warning("Support polygon rejected, degenerate contacts: %s", e)
        else:
            return A, b, True
        return np.zeros((0, 2), dtype=float), np.zeros(0, dtype=float), False


def support_constraints(points, config: HullConfig | None = None):
    """Convenience: SupportPolygon(config).constraints(points)."""
    return SupportPolygon(config).constraints(points)
