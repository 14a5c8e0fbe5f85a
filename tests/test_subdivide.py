from __future__ import annotations

import numpy as np
import pytest

from octasphere.subdivide import interpolate, subdivide_face
from octasphere.validation import ValidationError
from octasphere.vertex_key import VertexMap


def _face_map() -> VertexMap:
    vmap = VertexMap()
    vmap.add((0.0, 0.0, 0.0))
    vmap.add((4.0, 0.0, 0.0))
    vmap.add((4.0, 4.0, 0.0))
    return vmap


def test_interpolate_corners():
    a, b, c = (0.0, 0.0, 0.0), (4.0, 0.0, 0.0), (4.0, 4.0, 0.0)
    assert interpolate(a, b, c, 0.0, 0.0) == a
    assert interpolate(a, b, c, 1.0, 0.0) == b
    assert interpolate(a, b, c, 1.0, 1.0) == c
    assert interpolate(a, b, c, 0.5, 0.5) == (2.0, 2.0, 0.0)


def test_resolution_one_keeps_face():
    vmap = _face_map()
    assert subdivide_face((0, 1, 2), 1, vmap) == [(0, 1, 2)]
    assert len(vmap) == 3


def test_resolution_two_layout():
    vmap = _face_map()
    triangles = subdivide_face((0, 1, 2), 2, vmap)

    assert triangles == [(0, 3, 4), (3, 1, 5), (3, 5, 4), (4, 5, 2)]
    assert vmap[3] == (2.0, 0.0, 0.0)
    assert vmap[4] == (2.0, 2.0, 0.0)
    assert vmap[5] == (4.0, 2.0, 0.0)


@pytest.mark.parametrize("resolution", [1, 2, 3, 4, 7])
def test_triangle_and_vertex_counts(resolution: int):
    vmap = _face_map()
    triangles = subdivide_face((0, 1, 2), resolution, vmap)

    assert len(triangles) == resolution**2
    assert len(vmap) == (resolution + 1) * (resolution + 2) // 2
    flat = np.asarray(triangles)
    assert flat.min() >= 0
    assert flat.max() < len(vmap)


def test_diagonal_cells_stay_inside_face():
    vmap = _face_map()
    subdivide_face((0, 1, 2), 4, vmap)
    points = vmap.as_array()
    # The face is 0 <= y <= x <= 4 in the z = 0 plane.
    assert np.all(points[:, 1] <= points[:, 0] + 1e-12)
    assert np.all(points[:, 0] <= 4.0)
    assert np.allclose(points[:, 2], 0.0)


def test_shared_map_reuses_edge_points():
    vmap = _face_map()
    vmap.add((0.0, 4.0, 0.0))
    subdivide_face((0, 1, 2), 4, vmap)
    before = len(vmap)
    # Second face shares edge 0-2 with the first.
    subdivide_face((0, 2, 3), 4, vmap)
    assert len(vmap) == before + 15 - 5 - 1


@pytest.mark.parametrize("resolution", [0, -3, 2.5, True])
def test_invalid_resolution(resolution):
    with pytest.raises(ValidationError):
        subdivide_face((0, 1, 2), resolution, _face_map())


@pytest.mark.parametrize("face", [(0, 1), (0, 1, 2, 0), (0, 1, 3), (-1, 1, 2)])
def test_invalid_face_rejected(face):
    with pytest.raises(ValidationError):
        subdivide_face(face, 2, _face_map())
