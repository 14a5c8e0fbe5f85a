from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from octasphere.validation import ValidationError


@dataclass
class Mesh:
    """Triangle mesh: ``(N, 3)`` vertex positions and ``(M, 3)`` vertex indices.

    Arrays are copied on construction and frozen, so a mesh can be handed to
    analytics and writers without defensive copies.
    """

    vertices: np.ndarray
    faces: np.ndarray
    metadata: dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.vertices = np.asarray(self.vertices, dtype=float).reshape(-1, 3).copy()
        self.faces = np.asarray(self.faces, dtype=int).reshape(-1, 3).copy()
        if self.faces.size and (self.faces.min() < 0 or self.faces.max() >= self.n_vertices):
            raise ValidationError(f"Face indices must lie in [0, {self.n_vertices}).")
        self.vertices.setflags(write=False)
        self.faces.setflags(write=False)

    @property
    def n_vertices(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def n_faces(self) -> int:
        return int(self.faces.shape[0])

    @property
    def bounds(self) -> tuple[float, float, float, float, float, float]:
        if self.n_vertices == 0:
            return (0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
        mins = self.vertices.min(axis=0)
        maxs = self.vertices.max(axis=0)
        return (float(mins[0]), float(maxs[0]), float(mins[1]), float(maxs[1]), float(mins[2]), float(maxs[2]))


def mesh_to_pyvista(mesh: Mesh):
    import pyvista as pv

    if mesh.n_faces == 0:
        return pv.PolyData(np.array(mesh.vertices), deep=True)
    faces = np.hstack([np.array([3, *tri], dtype=np.int64) for tri in mesh.faces])
    poly = pv.PolyData(np.array(mesh.vertices), faces, deep=True)
    return poly
