from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from octasphere.cli import app
from octasphere.io.vtk import read_vtk

runner = CliRunner()


def test_generate_writes_mesh(tmp_path: Path):
    output = tmp_path / "sphere.vtk"
    result = runner.invoke(
        app,
        ["generate", "--center", "1", "2", "3", "--radius", "2", "--resolution", "3", "-o", str(output)],
    )

    assert result.exit_code == 0, result.output
    assert "Total cells: 72" in result.output
    assert "Mesh written to" in result.output
    mesh = read_vtk(output)
    assert mesh.n_faces == 72


def test_generate_uses_config_defaults(tmp_path: Path, config_dir: Path):
    output = tmp_path / "from_config.vtk"
    config_dir.mkdir(parents=True)
    (config_dir / "octasphere.cfg").write_text(json.dumps({"resolution": 1, "output": str(output)}))

    result = runner.invoke(app, ["generate", "--no-stats"])

    assert result.exit_code == 0, result.output
    mesh = read_vtk(output)
    assert mesh.n_faces == 8
    assert mesh.n_vertices == 6


def test_generate_per_triangle_table(tmp_path: Path):
    result = runner.invoke(
        app, ["generate", "--resolution", "1", "--per-triangle", "-o", str(tmp_path / "oct.vtk")]
    )
    assert result.exit_code == 0, result.output
    assert "Triangles" in result.output
    assert "Centroid" in result.output


def test_generate_does_not_overwrite(tmp_path: Path):
    output = tmp_path / "sphere.vtk"
    output.write_text("keep me")

    result = runner.invoke(app, ["generate", "--resolution", "2", "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert output.read_text() == "keep me"
    assert read_vtk(tmp_path / "sphere (1).vtk").n_faces == 32

    result = runner.invoke(app, ["generate", "--resolution", "2", "-o", str(output), "--overwrite"])
    assert result.exit_code == 0, result.output
    assert read_vtk(output).n_faces == 32


def test_generate_rejects_bad_resolution(tmp_path: Path):
    output = tmp_path / "sphere.vtk"
    result = runner.invoke(app, ["generate", "--resolution", "0", "-o", str(output)])
    assert result.exit_code != 0
    assert not output.exists()


def test_generate_rejects_unknown_policy(tmp_path: Path):
    result = runner.invoke(app, ["generate", "--policy", "fuzzy", "-o", str(tmp_path / "s.vtk")])
    assert result.exit_code != 0


def test_generate_reports_write_failure(tmp_path: Path):
    output = tmp_path / "missing" / "sphere.vtk"
    result = runner.invoke(app, ["generate", "--resolution", "2", "-o", str(output)])

    assert result.exit_code == 1
    assert "not written" in result.output
    assert not output.exists()


def test_info_reads_back(tmp_path: Path):
    output = tmp_path / "sphere.vtk"
    runner.invoke(app, ["generate", "--resolution", "3", "--policy", "snap", "-o", str(output)])

    result = runner.invoke(app, ["info", str(output)])
    assert result.exit_code == 0, result.output
    assert "Total vertices: 38" in result.output
    assert "Total cells: 72" in result.output


def test_info_rejects_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["info", str(tmp_path / "nope.vtk")])
    assert result.exit_code != 0
