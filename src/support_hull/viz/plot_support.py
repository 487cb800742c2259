import os
import numpy as np
import matplotlib.pyplot as plt

from support_hull.models.points import as_points3d


def region_vertices(A: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Corners of the region A p <= b for rows stored in edge order:
    corner i is the intersection of rows i and i+1 (cyclic).
    Near-parallel neighbours are skipped.
    """
    m = A.shape[0]
    verts = []
    for i in range(m):
        k = (i + 1) % m
        M = np.vstack((A[i], A[k]))
        if abs(np.linalg.det(M)) < 1e-12:
            continue
        verts.append(np.linalg.solve(M, np.array([b[i], b[k]])))
    return np.array(verts, dtype=float).reshape(-1, 2)


def plot_support_polygon(points, A, b, outpath, com=None, hull_verts=None, title="Support polygon"):
    dirname = os.path.dirname(outpath)
    if dirname:
        os.makedirs(dirname, exist_ok=True)

    pts = as_points3d(points)

    fig, ax = plt.subplots(figsize=(6, 6))
    ax.set_aspect("equal", adjustable="box")
    ax.set_title(title)

    ax.plot(pts[:, 0], pts[:, 1], marker="o", linestyle="None", label="contacts")

    if hull_verts is not None and len(hull_verts) > 0:
        hv = np.vstack((hull_verts, hull_verts[:1]))
        ax.plot(hv[:, 0], hv[:, 1], linewidth=2, label="hull")

    rv = region_vertices(np.asarray(A, dtype=float), np.asarray(b, dtype=float))
    if rv.shape[0] > 0:
        rv = np.vstack((rv, rv[:1]))
        ax.plot(rv[:, 0], rv[:, 1], linestyle="--", label="A p <= b")

    if com is not None:
        ax.plot([com[0]], [com[1]], marker="x", markersize=9, linestyle="None", label="COM")

    ax.set_xlabel("x [m]")
    ax.set_ylabel("y [m]")
    ax.legend(loc="lower right")

    fig.tight_layout()
    fig.savefig(outpath, dpi=160)
    plt.close(fig)
