# scripts/test_projection.py
from __future__ import annotations

import sys
from collections import namedtuple
from pathlib import Path

import numpy as np
import pytest

_SRC = Path(__file__).resolve().parents[1] / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from support_hull.models.points import as_points3d, project_to_plane, unique_points


def test_ground_projection_zeroes_z():
    pts = np.array([[0.1, -0.2, 0.7],
                    [-0.3, 0.4, -1.2],
                    [0.0, 0.0, 0.0]])
    proj = project_to_plane(pts)
    assert proj.shape == (3, 3)
    assert np.array_equal(proj[:, 0:2], pts[:, 0:2])
    assert np.all(proj[:, 2] == 0.0)


def test_projection_is_idempotent_on_planar_points():
    np.random.seed(1)
    pts = np.random.randn(10, 3)
    pts[:, 2] = 0.0
    assert np.array_equal(project_to_plane(pts), pts)

    once = project_to_plane(np.random.randn(10, 3))
    assert np.array_equal(project_to_plane(once), once)


def test_projection_does_not_mutate_input():
    pts = np.array([[1.0, 2.0, 3.0]])
    before = pts.copy()
    proj = project_to_plane(pts)
    proj[0, 0] = 99.0
    assert np.array_equal(pts, before)


def test_empty_input_gives_empty_output():
    assert project_to_plane([]).shape == (0, 3)
    assert project_to_plane(np.zeros((0, 3))).shape == (0, 3)


def test_tilted_offset_plane():
    # 2 z - 2 = 0  ->  z = 1
    proj = project_to_plane([[0.3, -0.4, 5.0]], normal=(0.0, 0.0, 2.0), offset=-2.0)
    assert np.allclose(proj, [[0.3, -0.4, 1.0]])


def test_threshold_is_inert():
    pts = np.random.RandomState(4).randn(6, 3)
    a = project_to_plane(pts, ransac_distance_threshold=0.001)
    b = project_to_plane(pts, ransac_distance_threshold=10.0)
    assert np.array_equal(a, b)


def test_conversion_accepts_lists_and_xyz_objects():
    V = namedtuple("V", "x y z")
    a = as_points3d([(1, 2, 3), [4, 5, 6]])
    b = as_points3d([V(1, 2, 3), V(4, 5, 6)])
    assert a.dtype == float
    assert np.array_equal(a, b)
    assert as_points3d(np.array([1.0, 2.0, 3.0])).shape == (1, 3)


def test_conversion_rejects_bad_shapes():
    with pytest.raises(ValueError):
        as_points3d([[1.0, 2.0]])
    with pytest.raises(ValueError):
        project_to_plane([[0.0, 0.0, 0.0]], normal=(0.0, 0.0, 0.0))


def test_unique_points_keeps_first_seen_order():
    pts = np.array([[1.0, 0.0, 0.0],
                    [0.0, 1.0, 0.0],
                    [1.0, 0.0, 0.0],
                    [0.0, 1.0, 0.0]])
    u = unique_points(pts)
    assert np.array_equal(u, pts[0:2])


def main():
    test_ground_projection_zeroes_z()
    test_projection_is_idempotent_on_planar_points()
    test_projection_does_not_mutate_input()
    test_empty_input_gives_empty_output()
    test_tilted_offset_plane()
    test_threshold_is_inert()
    test_conversion_accepts_lists_and_xyz_objects()
    test_conversion_rejects_bad_shapes()
    test_unique_points_keeps_first_seen_order()
    print("OK: planar projection verified.")


if __name__ == "__main__":
    main()
