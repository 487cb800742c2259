import logging
import os
import sys
from pathlib import Path

import numpy as np

_SRC = Path(__file__).resolve().parents[1] / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from support_hull.config import HullConfig
from support_hull.control.qp_com import ComQpController
from support_hull.models.contacts import FootRectangleRobot, contact_links, support_polygon_points
from support_hull.models.support_polygon import SupportPolygon, margin_halfspaces
from support_hull.viz.plot_support import plot_support_polygon

def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # ---------- params ----------
    foot_half_sizes = np.array([0.09, 0.045])  # ~18cm x 9cm
    L = np.array([ 0.05, 0.10])
    R = np.array([-0.05,-0.10])
    com = np.array([0.0, 0.0, 0.5])

    cfg = HullConfig(boundary_margin=0.005)

    # QP weights
    W   = np.eye(2) * 1.0
    Wdr = np.eye(2) * 0.1

    robot = FootRectangleRobot(L, R, foot_half_sizes, com)
    poly = SupportPolygon(cfg)
    qp = ComQpController(W=W, Wdr=Wdr)

    os.makedirs("results/plots", exist_ok=True)

    r_des = np.array([0.2, 0.05])   # desired CoM shift, outside the feet
    for mode in ("DS", "SSL", "SSR"):
        # single support: the CoM sits above the stance foot
        if mode == "SSL":
            robot.com = np.array([L[0], L[1], com[2]])
        elif mode == "SSR":
            robot.com = np.array([R[0], R[1], com[2]])
        else:
            robot.com = com.copy()

        points = support_polygon_points(robot, links=contact_links(mode))
        A, b, ok = poly.try_constraints(points)
        if not ok:
            print(mode, ": no support polygon")
            continue

        r, qp_ok, status = qp.solve(r_des=r_des, r_prev=np.zeros(2), A=A, b=b)

        print(f"{mode}: {A.shape[0]} edges, margin at CoM {margin_halfspaces(A, b, np.zeros(2)):+.4f}, "
              f"qp {status}, r = {r}")

        hull = poly.hull(points)
        plot_support_polygon(points, A, b, f"results/plots/support_{mode}.png",
                             com=r, hull_verts=hull.vertices(), title=f"Support polygon ({mode})")

    print("Done.")

if __name__ == "__main__":
    main()
