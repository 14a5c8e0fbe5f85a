"""octasphere – octahedron-based sphere meshes for legacy VTK viewers."""

from __future__ import annotations

from .analytics import MeshStats, summarize, surface_area, triangle_areas, triangle_centroids
from .io.vtk import VTKFormatError, read_vtk, write_vtk
from .mesh import Mesh, mesh_to_pyvista
from .sphere import BASE_POINTS, OCTAHEDRON_FACES, Sphere, build_sphere, normalize_points
from .subdivide import interpolate, subdivide_face
from .validation import ValidationError
from .vertex_key import DEFAULT_EPSILON, VertexMap, exact_key, snapped_key

__all__ = [
    "__version__",
    "BASE_POINTS",
    "DEFAULT_EPSILON",
    "Mesh",
    "MeshStats",
    "OCTAHEDRON_FACES",
    "Sphere",
    "ValidationError",
    "VTKFormatError",
    "VertexMap",
    "build_sphere",
    "exact_key",
    "interpolate",
    "mesh_to_pyvista",
    "normalize_points",
    "read_vtk",
    "snapped_key",
    "subdivide_face",
    "summarize",
    "surface_area",
    "triangle_areas",
    "triangle_centroids",
    "write_vtk",
]

__version__ = "0.1.0"
