from __future__ import annotations

from typing import Sequence, Tuple

from octasphere.validation import ValidationError, validate_resolution
from octasphere.vertex_key import Point, VertexMap

Triangle = Tuple[int, int, int]


def interpolate(a: Point, b: Point, c: Point, row_frac: float, col_frac: float) -> Point:
    """Sweep from edge AB toward C: ``A + row_frac (B - A) + col_frac (C - B)``."""

    return (
        a[0] + row_frac * (b[0] - a[0]) + col_frac * (c[0] - b[0]),
        a[1] + row_frac * (b[1] - a[1]) + col_frac * (c[1] - b[1]),
        a[2] + row_frac * (b[2] - a[2]) + col_frac * (c[2] - b[2]),
    )


def subdivide_face(face: Sequence[int], resolution: int, vertex_map: VertexMap) -> list[Triangle]:
    """
    Split one triangular face into ``resolution**2`` triangles.

    ``face`` holds three indices into ``vertex_map``. New grid points are
    registered in the map; points already present (shared edges, base
    corners) reuse their index. Row ``r`` contributes ``2r + 1`` triangles:
    full cells split along v0-v2, the diagonal cell closes a single triangle
    and never touches its fourth corner.
    """

    resolution = validate_resolution(resolution)
    if len(face) != 3:
        raise ValidationError("Faces must reference exactly three vertices.")
    if any(not 0 <= index < len(vertex_map) for index in face):
        raise ValidationError(f"Face indices must lie in [0, {len(vertex_map)}), got {tuple(face)}.")
    a = vertex_map[face[0]]
    b = vertex_map[face[1]]
    c = vertex_map[face[2]]

    triangles: list[Triangle] = []
    for row in range(resolution):
        row_lo = row / resolution
        row_hi = (row + 1) / resolution
        for column in range(row + 1):
            col_lo = column / resolution
            col_hi = (column + 1) / resolution

            idx0 = vertex_map.get_or_add(interpolate(a, b, c, row_lo, col_lo))
            idx1 = vertex_map.get_or_add(interpolate(a, b, c, row_hi, col_lo))
            idx2 = vertex_map.get_or_add(interpolate(a, b, c, row_hi, col_hi))

            triangles.append((idx0, idx1, idx2))
            if column != row:
                idx3 = vertex_map.get_or_add(interpolate(a, b, c, row_lo, col_hi))
                triangles.append((idx0, idx2, idx3))
    return triangles
