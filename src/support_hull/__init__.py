"""
support_hull: support polygon of the coman feet as linear constraints A (x, y) <= b.
"""

__version__ = "0.1.0"

from support_hull.config import HullConfig
from support_hull.errors import SupportHullError, DegenerateInputError, MultiplePolygonsError
from support_hull.models.points import as_points3d, project_to_plane
from support_hull.models.hull import HullPolygon, convex_hull_2d
from support_hull.models.support_polygon import (
    SupportPolygon,
    halfspaces_from_hull,
    line_coefficients,
    margin_halfspaces,
    support_constraints,
)
from support_hull.models.contacts import (
    COMAN_FOOT_CONTACT_LINKS,
    FootRectangleRobot,
    support_polygon_points,
)

__all__ = [
    "HullConfig",
    "SupportHullError", "DegenerateInputError", "MultiplePolygonsError",
    "as_points3d", "project_to_plane",
    "HullPolygon", "convex_hull_2d",
    "SupportPolygon", "halfspaces_from_hull", "line_coefficients",
    "margin_halfspaces", "support_constraints",
    "COMAN_FOOT_CONTACT_LINKS", "FootRectangleRobot", "support_polygon_points",
    "__version__",
]
