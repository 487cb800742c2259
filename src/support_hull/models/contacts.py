# src/support_hull/models/contacts.py
from __future__ import annotations

from typing import Protocol

import numpy as np

from support_hull.models.support_polygon import rect_corners

# foot corner links of the coman model, left foot then right foot
L_FOOT_CONTACT_LINKS = (
    "l_foot_lower_left_link",
    "l_foot_lower_right_link",
    "l_foot_upper_left_link",
    "l_foot_upper_right_link",
)
R_FOOT_CONTACT_LINKS = (
    "r_foot_lower_left_link",
    "r_foot_lower_right_link",
    "r_foot_upper_left_link",
    "r_foot_upper_right_link",
)
COMAN_FOOT_CONTACT_LINKS = L_FOOT_CONTACT_LINKS + R_FOOT_CONTACT_LINKS


class RobotState(Protocol):
    def link_pose(self, name: str) -> np.ndarray:
        """(4, 4) homogeneous pose of a link in the root (waist) frame."""
        ...

    def com_position(self) -> np.ndarray:
        """(3,) centre of mass position in the root (waist) frame."""
        ...


def homogeneous(rotation: np.ndarray | None = None, translation=None) -> np.ndarray:
    T = np.eye(4)
    if rotation is not None:
        T[0:3, 0:3] = np.asarray(rotation, dtype=float).reshape(3, 3)
    if translation is not None:
        T[0:3, 3] = np.asarray(translation, dtype=float).reshape(3,)
    return T


def inverse_homogeneous(T: np.ndarray) -> np.ndarray:
    R = T[0:3, 0:3]
    p = T[0:3, 3]
    Ti = np.eye(4)
    Ti[0:3, 0:3] = R.T
    Ti[0:3, 3] = -R.T @ p
    return Ti


def contact_links(mode: str = "DS"):
    """
    Foot corners in contact for a support mode:
      "DS"  both feet, "SSL" left foot only, "SSR" right foot only
    """
    if mode == "DS":
        return COMAN_FOOT_CONTACT_LINKS
    if mode == "SSL":
        return L_FOOT_CONTACT_LINKS
    if mode == "SSR":
        return R_FOOT_CONTACT_LINKS
    raise ValueError(f"Unknown support mode: {mode!r}")


def support_polygon_points(robot: RobotState, points: list | None = None, links=COMAN_FOOT_CONTACT_LINKS):
    """
    Append the position of every contact link, expressed in a frame centred at
    the CoM (axes parallel to the root frame), to `points` and return it:
        CoM_T_point = inv(waist_T_CoM) @ waist_T_point
    """
    if points is None:
        points = []

    waist_T_CoM = homogeneous(translation=robot.com_position())
    CoM_T_waist = inverse_homogeneous(waist_T_CoM)
    for name in links:
        waist_T_point = np.asarray(robot.link_pose(name), dtype=float)
        CoM_T_point = CoM_T_waist @ waist_T_point
        points.append(CoM_T_point[0:3, 3].copy())
    return points


class FootRectangleRobot:
    """
    Kinematics-free RobotState: two axis-aligned rectangular feet on the
    ground plane and a CoM, all in the root frame. Each foot corner is one
    contact link with identity orientation.
    """

    def __init__(self,
                 center_L: np.ndarray,
                 center_R: np.ndarray,
                 half_sizes: np.ndarray,
                 com: np.ndarray,
                 ground_z: float = 0.0):
        self.center_L = np.asarray(center_L, dtype=float).reshape(2,)
        self.center_R = np.asarray(center_R, dtype=float).reshape(2,)
        self.half_sizes = np.asarray(half_sizes, dtype=float).reshape(2,)
        self.com = np.asarray(com, dtype=float).reshape(3,)
        self.ground_z = float(ground_z)

        # rect_corners order: lower-left, lower-right, upper-right, upper-left
        self._poses = {}
        for names, center in ((L_FOOT_CONTACT_LINKS, self.center_L),
                              (R_FOOT_CONTACT_LINKS, self.center_R)):
            ll, lr, ur, ul = rect_corners(center, self.half_sizes)
            for name, xy in zip(names, (ll, lr, ul, ur)):
                self._poses[name] = homogeneous(translation=[xy[0], xy[1], self.ground_z])

    def link_pose(self, name: str) -> np.ndarray:
        try:
            return self._poses[name].copy()
        except KeyError:
            raise ValueError(f"Unknown link: {name!r}") from None

    def com_position(self) -> np.ndarray:
        return self.com.copy()
