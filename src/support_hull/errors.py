# src/support_hull/errors.py
from __future__ import annotations


class SupportHullError(Exception):
    """Base class for failures of a single support polygon computation."""


class DegenerateInputError(SupportHullError, ValueError):
    """
    Fewer than 3 distinct points, or all points collinear, after projection.
    No hull (and so no constraint system) can be built from them.
    """


class MultiplePolygonsError(SupportHullError):
    """The hull boundary did not come out as exactly one closed loop."""

    def __init__(self, n_loops: int):
        self.n_loops = int(n_loops)
        super().__init__(f"Expected exactly one hull polygon, found {self.n_loops}")
