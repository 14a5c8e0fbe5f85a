from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Sequence

import numpy as np

from octasphere import analytics
from octasphere.io.vtk import DEFAULT_TITLE, write_vtk
from octasphere.mesh import Mesh
from octasphere.subdivide import Triangle, subdivide_face
from octasphere.validation import validate_center, validate_epsilon, validate_radius, validate_resolution
from octasphere.vertex_key import DEFAULT_EPSILON, KeyPolicy, VertexMap, key_function

BASE_POINTS: tuple[tuple[float, float, float], ...] = (
    (0.0, 1.0, 0.0),
    (1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0),
    (0.0, 0.0, -1.0),
    (-1.0, 0.0, 0.0),
    (0.0, -1.0, 0.0),
)

OCTAHEDRON_FACES: tuple[Triangle, ...] = (
    (0, 1, 2),
    (0, 3, 1),
    (0, 4, 3),
    (0, 2, 4),
    (5, 1, 2),
    (5, 3, 1),
    (5, 4, 3),
    (5, 2, 4),
)


def normalize_points(points: np.ndarray, radius: float) -> np.ndarray:
    """Scale every row of ``points`` to length ``radius``."""

    arr = np.asarray(points, dtype=float).reshape(-1, 3)
    lengths = np.linalg.norm(arr, axis=1)
    return arr / lengths[:, np.newaxis] * radius


def build_sphere(
    center: Sequence[float] = (0.0, 0.0, 0.0),
    radius: float = 0.5,
    resolution: int = 3,
    policy: KeyPolicy = "exact",
    epsilon: float = DEFAULT_EPSILON,
) -> Mesh:
    """
    Octahedron-based sphere with ``8 * resolution**2`` triangles.

    Each octahedron face is swept into a flat grid, vertices on shared edges
    are merged through one ``VertexMap``, and every vertex is finally pushed
    back out to ``radius`` and shifted to ``center``.
    """

    resolution = validate_resolution(resolution)
    radius = validate_radius(radius)
    origin = validate_center(center)
    epsilon = validate_epsilon(epsilon)

    vertex_map = VertexMap(policy=policy, epsilon=epsilon)
    for point in normalize_points(np.asarray(BASE_POINTS), radius):
        vertex_map.add(point)

    triangles: list[Triangle] = []
    for face in OCTAHEDRON_FACES:
        triangles.extend(subdivide_face(face, resolution, vertex_map))

    vertices = normalize_points(vertex_map.as_array(), radius) + np.asarray(origin)
    return Mesh(
        vertices=vertices,
        faces=np.asarray(triangles, dtype=int),
        metadata={
            "center": origin,
            "radius": radius,
            "resolution": resolution,
            "policy": policy,
            "epsilon": epsilon,
        },
    )


@dataclass(frozen=True)
class Sphere:
    """Sphere parameters bundled with the mesh they produce, built on first access."""

    center: tuple[float, float, float] = (0.0, 0.0, 0.0)
    radius: float = 0.5
    resolution: int = 3
    policy: KeyPolicy = "exact"
    epsilon: float = DEFAULT_EPSILON

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", validate_center(self.center))
        object.__setattr__(self, "radius", validate_radius(self.radius))
        object.__setattr__(self, "resolution", validate_resolution(self.resolution))
        object.__setattr__(self, "epsilon", validate_epsilon(self.epsilon))
        key_function(self.policy, self.epsilon)

    @cached_property
    def mesh(self) -> Mesh:
        return build_sphere(
            center=self.center,
            radius=self.radius,
            resolution=self.resolution,
            policy=self.policy,
            epsilon=self.epsilon,
        )

    @property
    def vertices(self) -> np.ndarray:
        return self.mesh.vertices

    @property
    def triangles(self) -> np.ndarray:
        return self.mesh.faces

    @property
    def n_vertices(self) -> int:
        return self.mesh.n_vertices

    @property
    def n_faces(self) -> int:
        return self.mesh.n_faces

    total_vertices = n_vertices
    total_cells = n_faces

    def triangle_areas(self) -> np.ndarray:
        return analytics.triangle_areas(self.mesh)

    def triangle_centroids(self) -> np.ndarray:
        return analytics.triangle_centroids(self.mesh)

    def surface_area(self) -> float:
        return analytics.surface_area(self.mesh)

    def stats(self) -> analytics.MeshStats:
        return analytics.summarize(self.mesh, self.center, self.radius)

    def write_vtk(self, path: Path | str, title: str = DEFAULT_TITLE) -> bool:
        return write_vtk(self.mesh, path, title=title)
