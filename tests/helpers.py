from __future__ import annotations

from collections import Counter

import numpy as np
import pyvista as pv

from octasphere.mesh import Mesh


def is_watertight(mesh: pv.DataSet) -> tuple[bool, int]:
    edges = mesh.extract_feature_edges(boundary_edges=True, feature_edges=False, non_manifold_edges=True, manifold_edges=False)
    open_edges = edges.n_cells
    return open_edges == 0, open_edges


def edge_use_counts(mesh: Mesh) -> Counter:
    counts: Counter = Counter()
    for tri in mesh.faces:
        for a, b in ((tri[0], tri[1]), (tri[1], tri[2]), (tri[2], tri[0])):
            counts[(int(min(a, b)), int(max(a, b)))] += 1
    return counts


def radial_distances(mesh: Mesh, center) -> np.ndarray:
    return np.linalg.norm(mesh.vertices - np.asarray(center, dtype=float), axis=1)
