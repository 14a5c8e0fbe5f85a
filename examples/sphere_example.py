"""Octahedron sphere demo."""

from __future__ import annotations

from pathlib import Path

from octasphere import Sphere


def build() -> Sphere:
    return Sphere(center=(0.0, 0.0, 0.0), radius=0.5, resolution=3)


if __name__ == "__main__":
    OUTPUT = Path("dist")
    OUTPUT.mkdir(exist_ok=True)
    sphere = build()
    if sphere.write_vtk(OUTPUT / "sphere_example.vtk"):
        print("Saved sphere_example.vtk with", sphere.total_cells, "cells")
