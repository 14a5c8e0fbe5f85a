from __future__ import annotations

import pathlib
import warnings
from typing import Optional, Tuple

import numpy as np
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from octasphere._config import BuildSettings, get_build_settings
from octasphere.analytics import MeshStats, summarize, triangle_areas, triangle_centroids
from octasphere.io.vtk import DEFAULT_TITLE, read_vtk
from octasphere.mesh import Mesh, mesh_to_pyvista
from octasphere.sphere import Sphere
from octasphere.validation import ValidationError
from octasphere.vertex_key import POLICIES

console = Console()
app = typer.Typer(help="Generate octahedron-based sphere meshes and write them as legacy VTK grids.")

CenterOption = Tuple[float, float, float]


def _resolve_sphere(
    settings: BuildSettings,
    center: Optional[CenterOption],
    radius: Optional[float],
    resolution: Optional[int],
    policy: Optional[str],
    epsilon: Optional[float],
) -> Sphere:
    if center is None or any(value is None for value in center):
        center = settings.center
    if policy is not None and policy.lower() not in POLICIES:
        raise typer.BadParameter(f"Unknown policy '{policy}'. Choose one of: {', '.join(POLICIES)}.")
    try:
        return Sphere(
            center=center,
            radius=settings.radius if radius is None else radius,
            resolution=settings.resolution if resolution is None else resolution,
            policy=settings.policy if policy is None else policy.lower(),
            epsilon=settings.epsilon if epsilon is None else epsilon,
        )
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _next_available_path(path: pathlib.Path) -> pathlib.Path:
    """Return a non-conflicting path by appending ' (n)' before the suffix."""

    if not path.exists():
        return path

    parent = path.parent
    stem = path.stem
    suffix = path.suffix
    n = 1
    while True:
        candidate = parent / f"{stem} ({n}){suffix}"
        if not candidate.exists():
            return candidate
        n += 1


def _print_summary(sphere: Sphere) -> None:
    cx, cy, cz = sphere.center
    console.print("Generated sphere mesh.")
    console.print(f"Total vertices: [bold]{sphere.total_vertices}[/bold]")
    console.print(f"Total cells: [bold]{sphere.total_cells}[/bold]")
    console.print(f"Origin: ({cx:g}, {cy:g}, {cz:g})")
    console.print(f"Radius: {sphere.radius:g}")
    console.print(f"Resolution: {sphere.resolution}")
    console.print(f"Vertex policy: {sphere.policy}")


def _print_stats(stats: MeshStats, title: str = "Mesh statistics") -> None:
    body = "\n".join(
        [
            f"Surface area: {stats.surface_area:.6g} (sphere {stats.sphere_area:.6g}, error {stats.area_error:.3%})",
            f"Triangle area: min {stats.min_triangle_area:.6g}, max {stats.max_triangle_area:.6g}",
            f"Max radial deviation: {stats.max_radial_deviation:.3g}",
        ]
    )
    console.print(Panel(body, title=title, border_style="cyan"))


def _print_triangles(mesh: Mesh) -> None:
    table = Table(title="Triangles")
    table.add_column("#", justify="right")
    table.add_column("Area", justify="right")
    table.add_column("Centroid")
    for idx, (area, centroid) in enumerate(zip(triangle_areas(mesh), triangle_centroids(mesh))):
        cx, cy, cz = centroid
        table.add_row(str(idx), f"{area:.6g}", f"({cx:.6g}, {cy:.6g}, {cz:.6g})")
    console.print(table)


@app.command()
def generate(
    center: CenterOption = typer.Option(
        (None, None, None), "--center", help="Sphere center as three numbers: X Y Z."
    ),
    radius: Optional[float] = typer.Option(None, "--radius", "-r", help="Sphere radius."),
    resolution: Optional[int] = typer.Option(
        None, "--resolution", "-n", help="Grid subdivisions per octahedron edge (>= 1)."
    ),
    policy: Optional[str] = typer.Option(
        None, "--policy", help="Vertex merge policy: 'exact' (value-equal) or 'snap' (epsilon grid)."
    ),
    epsilon: Optional[float] = typer.Option(None, "--epsilon", help="Grid spacing for the 'snap' policy."),
    output: Optional[pathlib.Path] = typer.Option(None, "--output", "-o", help="Path to the VTK file to write."),
    title: str = typer.Option(DEFAULT_TITLE, "--title", help="Title line written into the VTK header."),
    overwrite: bool = typer.Option(False, "--overwrite", help="Allow replacing an existing output file."),
    stats: bool = typer.Option(True, "--stats/--no-stats", help="Print area and radius diagnostics."),
    per_triangle: bool = typer.Option(False, "--per-triangle", help="Print the area and centroid of every triangle."),
) -> None:
    """
    Build a sphere mesh and save it as a legacy ASCII unstructured grid.
    """

    settings = get_build_settings()
    sphere = _resolve_sphere(settings, center, radius, resolution, policy, epsilon)
    mesh = sphere.mesh

    console.rule("octasphere")
    _print_summary(sphere)
    if per_triangle:
        _print_triangles(mesh)
    if stats:
        _print_stats(sphere.stats())

    target = output if output is not None else settings.output
    final_output = target
    if target.exists() and not overwrite:
        final_output = _next_available_path(target)
        console.print(f"[yellow]Output {target} exists; writing to {final_output} instead.[/yellow]")

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", RuntimeWarning)
        written = sphere.write_vtk(final_output, title=title)
    if not written:
        for warning in caught:
            console.print(f"[red]{warning.message}[/red]")
        console.print(f"[red]Mesh was not written to {final_output}.[/red]")
        raise typer.Exit(code=1)

    console.print(f"Mesh written to [green]{final_output}[/green]")


@app.command()
def info(
    path: pathlib.Path = typer.Argument(..., help="Legacy VTK file written by `octasphere generate`."),
) -> None:
    """
    Read a sphere mesh back and report its counts and geometry.
    """

    if not path.exists():
        raise typer.BadParameter(f"Mesh path {path} does not exist.")
    try:
        mesh = read_vtk(path)
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(f"Could not read {path}: {exc}") from exc

    console.rule(str(path))
    console.print(f"Title: {mesh.metadata.get('title', '')}")
    console.print(f"Total vertices: [bold]{mesh.n_vertices}[/bold]")
    console.print(f"Total cells: [bold]{mesh.n_faces}[/bold]")
    if mesh.n_vertices == 0:
        return

    center = mesh.vertices.mean(axis=0)
    radius = float(np.linalg.norm(mesh.vertices - center, axis=1).mean())
    cx, cy, cz = center
    console.print(f"Estimated center: ({cx:.6g}, {cy:.6g}, {cz:.6g}), radius {radius:.6g}")
    _print_stats(summarize(mesh, center, radius))


@app.command()
def preview(
    center: CenterOption = typer.Option((None, None, None), "--center", help="Sphere center as X Y Z."),
    radius: Optional[float] = typer.Option(None, "--radius", "-r", help="Sphere radius."),
    resolution: Optional[int] = typer.Option(None, "--resolution", "-n", help="Grid subdivisions per edge."),
    policy: Optional[str] = typer.Option(None, "--policy", help="Vertex merge policy."),
    screenshot: Optional[pathlib.Path] = typer.Option(
        None, "--screenshot", help="Save a screenshot instead of opening a window."
    ),
    show_edges: bool = typer.Option(True, "--show-edges/--hide-edges", help="Toggle triangle edge rendering."),
) -> None:
    """
    Open an interactive PyVista window showing the generated sphere.
    """

    settings = get_build_settings()
    sphere = _resolve_sphere(settings, center, radius, resolution, policy, None)
    _print_summary(sphere)

    try:
        import pyvista as pv

        plotter = pv.Plotter(window_size=(1024, 768), off_screen=screenshot is not None)
        plotter.add_mesh(mesh_to_pyvista(sphere.mesh), color="lightsteelblue", show_edges=show_edges)
        plotter.add_axes()
        if screenshot is not None:
            screenshot.parent.mkdir(parents=True, exist_ok=True)
            plotter.show(title="octasphere", auto_close=True, screenshot=str(screenshot))
            console.print(f"Screenshot saved to [green]{screenshot}[/green]")
        else:
            plotter.show(title="octasphere")
        plotter.close()
    except Exception as exc:  # pragma: no cover - depends on the rendering backend
        raise typer.BadParameter(f"Preview failed: {exc}") from exc
