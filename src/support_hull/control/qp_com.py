# src/support_hull/control/qp_com.py
from __future__ import annotations

import logging

import numpy as np
import scipy.sparse as sp
import osqp

from support_hull.models.support_polygon import pad_halfspaces

logger = logging.getLogger(__name__)


class ComQpController:
    """
    Keeps a horizontal CoM target inside the support polygon.

    Objective:
        min 1/2 (r - r_des).T @ W @ (r - r_des)
          + 1/2 (r - r_prev).T @ Wdr @ (r - r_prev)

    Constraints:
        A @ r <= b          (support polygon rows, padded to m_target)
        rmin <= r <= rmax
    """

    def __init__(self,
                 W: np.ndarray | None = None,
                 Wdr: np.ndarray | None = None,
                 rmin: np.ndarray | None = None,
                 rmax: np.ndarray | None = None,
                 m_target: int = 8,
                 verbose: bool = False):
        self.W = np.eye(2) * 1.0 if W is None else np.asarray(W, dtype=float)
        self.Wdr = np.eye(2) * 0.1 if Wdr is None else np.asarray(Wdr, dtype=float)
        self.rmin = np.array([-1.0, -1.0]) if rmin is None else np.asarray(rmin, dtype=float).reshape(2,)
        self.rmax = np.array([ 1.0,  1.0]) if rmax is None else np.asarray(rmax, dtype=float).reshape(2,)

        if self.W.shape != (2, 2) or self.Wdr.shape != (2, 2):
            raise ValueError("W and Wdr must be 2x2")

        # fixed sparsity (m_target polygon constraints + 2 bounds)
        self.m_target = int(m_target)
        self.m = self.m_target + 2
        self.n = 2

        # OSQP requires that matrix updates keep the same sparsity pattern.
        # Stored zeros keep nnz constant across updates.
        self._P_pattern = sp.csc_matrix(np.triu(np.ones((self.n, self.n), dtype=float)))
        self._A_pattern = sp.csc_matrix(np.ones((self.m, self.n), dtype=float))

        P0 = self._P_pattern.copy()
        P0.data[:] = np.array([1.0, 0.0, 1.0], dtype=float)

        A0 = self._A_pattern.copy()
        A0.data[:] = 0.0
        q0 = np.zeros(2)
        l0 = -np.inf * np.ones(self.m)
        u0 = np.inf * np.ones(self.m)

        self.prob = osqp.OSQP()
        self.prob.setup(P=P0, q=q0, A=A0, l=l0, u=u0, warm_start=True, verbose=verbose)

    def solve(self,
              r_des: np.ndarray,
              r_prev: np.ndarray,
              A: np.ndarray,
              b: np.ndarray):
        """
        Returns (r, ok, status). r is zeros when the QP fails.
        """
        r_des = np.asarray(r_des, dtype=float).reshape(2,)
        r_prev = np.asarray(r_prev, dtype=float).reshape(2,)

        # raises if the polygon has more than m_target edges
        Apad, bpad = pad_halfspaces(np.asarray(A, dtype=float).reshape(-1, 2),
                                    np.asarray(b, dtype=float).reshape(-1),
                                    m_target=self.m_target)

        P = self.W + self.Wdr
        P = 0.5 * (P + P.T)  # ensure symmetry
        q = - self.W @ r_des - self.Wdr @ r_prev

        Ac = np.vstack((Apad, np.eye(2)))
        l = np.hstack((-np.inf * np.ones(self.m_target), self.rmin))
        u = np.hstack((bpad, self.rmax))

        # P (upper triangular) CSC data order: [(0,0), (0,1), (1,1)]
        Px = np.array([P[0, 0], P[0, 1], P[1, 1]], dtype=float)
        # A CSC data order for ones(m, n) is column-major
        Ax = np.hstack((Ac[:, 0], Ac[:, 1])).astype(float, copy=False)

        self.prob.update(Px=Px, q=q, Ax=Ax, l=l, u=u)
        res = self.prob.solve()

        ok = (res.info.status_val in (1, 2))  # solved or solved inaccurate
        if not ok:
            logger.warning("CoM QP failed: %s", res.info.status)
            return np.zeros(2), False, res.info.status
        return np.array(res.x), True, res.info.status
