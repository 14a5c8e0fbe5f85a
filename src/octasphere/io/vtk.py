from __future__ import annotations

import warnings
from pathlib import Path
from typing import Iterator

import numpy as np

from octasphere.mesh import Mesh

VTK_TRIANGLE = 5
DEFAULT_TITLE = "Sphere Mesh"
_HEADER = "# vtk DataFile Version 2.0"


class VTKFormatError(ValueError):
    """Raised when a legacy VTK file cannot be parsed as a triangle grid."""


def _format_coord(value: float, precision: int) -> str:
    return f"{float(value):.{precision}g}"


def write_vtk(mesh: Mesh, path: Path | str, title: str = DEFAULT_TITLE, precision: int = 17) -> bool:
    """
    Write ``mesh`` as a legacy ASCII unstructured grid of triangles.

    Coordinates use ``precision`` significant digits; the default of 17 lets
    ``read_vtk`` reproduce float64 vertices exactly.

    Returns ``False`` (and warns) when the file cannot be opened or written;
    the in-memory mesh is untouched and a partially written file is left as is.
    """

    path = Path(path)
    vertices = mesh.vertices
    faces = mesh.faces
    n_faces = mesh.n_faces
    try:
        with path.open("w", encoding="utf-8") as handle:
            handle.write(f"{_HEADER}\n")
            handle.write(f"{title}\n")
            handle.write("ASCII\n")
            handle.write("DATASET UNSTRUCTURED_GRID\n")

            handle.write(f"POINTS {mesh.n_vertices} float\n")
            for vx, vy, vz in vertices:
                handle.write(
                    f"{_format_coord(vx, precision)} {_format_coord(vy, precision)} {_format_coord(vz, precision)}\n"
                )

            handle.write(f"CELLS {n_faces} {n_faces * 4}\n")
            for i0, i1, i2 in faces:
                handle.write(f"3 {i0} {i1} {i2}\n")

            handle.write(f"CELL_TYPES {n_faces}\n")
            handle.write(f"{VTK_TRIANGLE}\n" * n_faces)
    except OSError as exc:
        warnings.warn(f"Failed to write mesh to {path}: {exc}", RuntimeWarning)
        return False
    return True


def _expect(tokens: Iterator[str], keyword: str) -> None:
    token = next(tokens, None)
    if token != keyword:
        raise VTKFormatError(f"Expected '{keyword}' section, found {token!r}.")


def _next_int(tokens: Iterator[str], what: str) -> int:
    token = next(tokens, None)
    if token is None:
        raise VTKFormatError(f"Unexpected end of file while reading {what}.")
    try:
        return int(token)
    except ValueError as exc:
        raise VTKFormatError(f"Invalid {what}: {token!r}.") from exc


def _next_float(tokens: Iterator[str], what: str) -> float:
    token = next(tokens, None)
    if token is None:
        raise VTKFormatError(f"Unexpected end of file while reading {what}.")
    try:
        return float(token)
    except ValueError as exc:
        raise VTKFormatError(f"Invalid {what}: {token!r}.") from exc


def read_vtk(path: Path | str) -> Mesh:
    """Parse the POINTS and CELLS sections of a file produced by ``write_vtk``."""

    path = Path(path)
    lines = [line.strip() for line in path.read_text(encoding="utf-8").splitlines()]
    if len(lines) < 4 or not lines[0].startswith("# vtk DataFile"):
        raise VTKFormatError(f"{path} is not a legacy VTK file.")
    if lines[2].upper() != "ASCII":
        raise VTKFormatError("Only ASCII legacy files are supported.")
    if lines[3].upper() != "DATASET UNSTRUCTURED_GRID":
        raise VTKFormatError("Only UNSTRUCTURED_GRID datasets are supported.")

    tokens = iter(" ".join(lines[4:]).split())

    _expect(tokens, "POINTS")
    n_points = _next_int(tokens, "point count")
    next(tokens, None)  # data type
    points = [_next_float(tokens, "point coordinate") for _ in range(n_points * 3)]

    _expect(tokens, "CELLS")
    n_cells = _next_int(tokens, "cell count")
    _next_int(tokens, "cell list size")
    faces: list[list[int]] = []
    for _ in range(n_cells):
        count = _next_int(tokens, "cell size")
        if count != 3:
            raise VTKFormatError(f"Only triangle cells are supported, found a cell with {count} points.")
        face = [_next_int(tokens, "cell index") for _ in range(3)]
        if any(not 0 <= index < n_points for index in face):
            raise VTKFormatError(f"Cell {face} references a point outside [0, {n_points}).")
        faces.append(face)

    _expect(tokens, "CELL_TYPES")
    if _next_int(tokens, "cell type count") != n_cells:
        raise VTKFormatError("CELL_TYPES count does not match CELLS count.")
    for _ in range(n_cells):
        if _next_int(tokens, "cell type") != VTK_TRIANGLE:
            raise VTKFormatError("Only triangle cell types are supported.")

    return Mesh(
        vertices=np.asarray(points, dtype=float).reshape(-1, 3),
        faces=np.asarray(faces, dtype=int).reshape(-1, 3),
        metadata={"title": lines[1], "source": str(path)},
    )
