# src/support_hull/config.py
from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np


@dataclass(frozen=True)
class HullConfig:
    """
    Tunables of the support polygon pipeline.

    ransac_distance_threshold is accepted for parity with plane fitting but is
    currently inert: points are always projected onto the fixed plane
    plane_normal . p + plane_offset = 0.
    """
    ransac_distance_threshold: float = 0.001
    boundary_margin: float = 0.01          # same length units as the points [m]
    plane_normal: tuple = (0.0, 0.0, 1.0)
    plane_offset: float = 0.0
    collinear_tol: float = 1e-9            # hull area below this -> degenerate

    def __post_init__(self):
        if self.boundary_margin < 0.0:
            raise ValueError("boundary_margin must be non-negative")
        if self.ransac_distance_threshold < 0.0:
            raise ValueError("ransac_distance_threshold must be non-negative")
        if self.collinear_tol < 0.0:
            raise ValueError("collinear_tol must be non-negative")
        n = np.asarray(self.plane_normal, dtype=float).reshape(-1)
        if n.shape != (3,):
            raise ValueError("plane_normal must have 3 components")
        if np.linalg.norm(n) == 0.0:
            raise ValueError("plane_normal must be non-zero")
        object.__setattr__(self, "plane_normal", tuple(float(v) for v in n))

    def with_margin(self, boundary_margin: float) -> "HullConfig":
        return replace(self, boundary_margin=float(boundary_margin))
