from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from octasphere.mesh import Mesh


@dataclass(frozen=True)
class MeshStats:
    n_vertices: int
    n_faces: int
    surface_area: float
    sphere_area: float
    min_triangle_area: float
    max_triangle_area: float
    max_radial_deviation: float

    @property
    def area_error(self) -> float:
        """Relative shortfall of the mesh area against ``4 pi R^2``."""

        if self.sphere_area == 0.0:
            return 0.0
        return abs(self.sphere_area - self.surface_area) / self.sphere_area


def _corners(mesh: Mesh) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    verts = mesh.vertices
    faces = mesh.faces
    return verts[faces[:, 0]], verts[faces[:, 1]], verts[faces[:, 2]]


def triangle_areas(mesh: Mesh) -> np.ndarray:
    if mesh.n_faces == 0:
        return np.zeros(0, dtype=float)
    v0, v1, v2 = _corners(mesh)
    cross = np.cross(v1 - v0, v2 - v0)
    return np.linalg.norm(cross, axis=1) * 0.5


def triangle_centroids(mesh: Mesh) -> np.ndarray:
    if mesh.n_faces == 0:
        return np.zeros((0, 3), dtype=float)
    v0, v1, v2 = _corners(mesh)
    return (v0 + v1 + v2) / 3.0


def surface_area(mesh: Mesh) -> float:
    return float(triangle_areas(mesh).sum())


def summarize(mesh: Mesh, center: Sequence[float], radius: float) -> MeshStats:
    areas = triangle_areas(mesh)
    origin = np.asarray(center, dtype=float).reshape(3)
    if mesh.n_vertices:
        distances = np.linalg.norm(mesh.vertices - origin, axis=1)
        deviation = float(np.max(np.abs(distances - radius)))
    else:
        deviation = 0.0
    return MeshStats(
        n_vertices=mesh.n_vertices,
        n_faces=mesh.n_faces,
        surface_area=float(areas.sum()),
        sphere_area=4.0 * math.pi * radius * radius,
        min_triangle_area=float(areas.min()) if areas.size else 0.0,
        max_triangle_area=float(areas.max()) if areas.size else 0.0,
        max_radial_deviation=deviation,
    )
