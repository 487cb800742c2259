# scripts/test_contacts.py
from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

_SRC = Path(__file__).resolve().parents[1] / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from support_hull.config import HullConfig
from support_hull.models.contacts import (
    COMAN_FOOT_CONTACT_LINKS,
    FootRectangleRobot,
    contact_links,
    homogeneous,
    inverse_homogeneous,
    support_polygon_points,
)
from support_hull.models.support_polygon import SupportPolygon, margin_halfspaces

half = np.array([0.09, 0.045])
L = np.array([0.0, 0.1])
R = np.array([0.0,-0.1])


def _rot_z(th):
    c, s = np.cos(th), np.sin(th)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


class _TiltedLinkRobot:
    """Links with arbitrary orientation; only their origin matters."""

    def __init__(self, positions, com):
        self.positions = positions
        self.com = np.asarray(com, dtype=float)

    def link_pose(self, name):
        i = COMAN_FOOT_CONTACT_LINKS.index(name)
        return homogeneous(_rot_z(0.3 * i), self.positions[i])

    def com_position(self):
        return self.com


def test_eight_coman_contact_links():
    assert len(COMAN_FOOT_CONTACT_LINKS) == 8
    assert len(set(COMAN_FOOT_CONTACT_LINKS)) == 8
    assert all(n.startswith("l_foot") for n in COMAN_FOOT_CONTACT_LINKS[:4])
    assert all(n.startswith("r_foot") for n in COMAN_FOOT_CONTACT_LINKS[4:])


def test_points_are_expressed_relative_to_com():
    com = np.array([0.01, 0.02, 0.5])
    robot = FootRectangleRobot(L, R, half, com=com)
    pts = support_polygon_points(robot)
    assert len(pts) == 8
    for name, p in zip(COMAN_FOOT_CONTACT_LINKS, pts):
        expected = robot.link_pose(name)[0:3, 3] - com
        assert np.allclose(p, expected)
    assert np.allclose([p[2] for p in pts], -0.5)


def test_output_sequence_is_appended_to():
    robot = FootRectangleRobot(L, R, half, com=np.zeros(3))
    out = [np.array([9.0, 9.0, 9.0])]
    ret = support_polygon_points(robot, out)
    assert ret is out
    assert len(out) == 9


def test_link_orientation_does_not_move_contact_point():
    rng = np.random.RandomState(2)
    positions = rng.randn(8, 3)
    com = np.array([0.1, -0.2, 0.7])
    pts = support_polygon_points(_TiltedLinkRobot(positions, com))
    assert np.allclose(np.array(pts), positions - com)


def test_inverse_homogeneous():
    T = homogeneous(_rot_z(0.7), [0.1, 0.2, 0.3])
    assert np.allclose(T @ inverse_homogeneous(T), np.eye(4))


def test_contact_modes():
    assert contact_links("DS") == COMAN_FOOT_CONTACT_LINKS
    assert len(contact_links("SSL")) == 4
    assert all(n.startswith("r_foot") for n in contact_links("SSR"))
    with pytest.raises(ValueError):
        contact_links("FLY")


def test_unknown_link():
    robot = FootRectangleRobot(L, R, half, com=np.zeros(3))
    with pytest.raises(ValueError):
        robot.link_pose("head_link")


def test_double_and_single_support_polygons():
    poly = SupportPolygon()

    robot = FootRectangleRobot(L, R, half, com=np.array([0.0, 0.0, 0.5]))
    pts = support_polygon_points(robot)
    A, b = poly.constraints(pts)
    assert A.shape == (poly.hull(pts).n_edges, 2)
    # with the margin added back every corner is inside
    assert np.all(np.array(pts)[:, 0:2] @ A.T <= b[None, :] + 0.01 + 1e-12)
    assert margin_halfspaces(A, b, np.zeros(2)) > 0.0

    # single support on the left foot, CoM above it
    robot = FootRectangleRobot(L, R, half, com=np.array([L[0], L[1], 0.5]))
    pts = support_polygon_points(robot, links=contact_links("SSL"))

    # every foot edge has |c| = 0.18 * 0.045 = 0.0081 < 0.01: rhs forced to 0
    A, b = poly.constraints(pts)
    assert A.shape == (4, 2)
    assert np.all(b == 0.0)
    assert margin_halfspaces(A, b, np.zeros(2)) == 0.0

    A, b = SupportPolygon(HullConfig(boundary_margin=0.005)).constraints(pts)
    assert np.all(b > 0.0)
    assert margin_halfspaces(A, b, np.zeros(2)) > 0.0
    # the right foot, seen from the CoM, is outside
    assert margin_halfspaces(A, b, R - L) < 0.0


def main():
    test_eight_coman_contact_links()
    test_points_are_expressed_relative_to_com()
    test_output_sequence_is_appended_to()
    test_link_orientation_does_not_move_contact_point()
    test_inverse_homogeneous()
    test_contact_modes()
    test_unknown_link()
    test_double_and_single_support_polygons()
    print("OK: support point supplier verified.")


if __name__ == "__main__":
    main()
