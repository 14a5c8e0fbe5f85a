from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from octasphere.vertex_key import DEFAULT_EPSILON, POLICIES

CONFIG_DIR_ENV = "OCTASPHERE_CONFIG_DIR"
CONFIG_FILENAME = "octasphere.cfg"
DEFAULT_CONFIG: Dict[str, Any] = {
    "_comment": "Defaults for `octasphere generate`. policy is 'exact' or 'snap'; epsilon only applies to 'snap'.",
    "center": [0.0, 0.0, 0.0],
    "radius": 0.5,
    "resolution": 3,
    "policy": "exact",
    "epsilon": DEFAULT_EPSILON,
    "output": "sphere.vtk",
}


@dataclass(frozen=True)
class BuildSettings:
    """Resolved sphere defaults from octasphere.cfg."""

    center: tuple[float, float, float]
    radius: float
    resolution: int
    policy: str
    epsilon: float
    output: Path


def config_dir() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    return Path.home() / ".octasphere"


def config_file() -> Path:
    return config_dir() / CONFIG_FILENAME


def ensure_user_config() -> None:
    """Ensure octasphere.cfg exists with sane defaults."""

    directory = config_dir()
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    path = directory / CONFIG_FILENAME
    if path.exists():
        return

    try:
        path.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config() -> Dict[str, Any]:
    ensure_user_config()
    try:
        loaded = json.loads(config_file().read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(loaded, dict):
        return DEFAULT_CONFIG.copy()
    return loaded


def _positive_float(value: Any, fallback: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number) or number <= 0.0:
        return fallback
    return number


def _center(value: Any) -> tuple[float, float, float]:
    try:
        x, y, z = (float(v) for v in value)
    except (TypeError, ValueError):
        x, y, z = DEFAULT_CONFIG["center"]
    if not all(math.isfinite(v) for v in (x, y, z)):
        x, y, z = DEFAULT_CONFIG["center"]
    return (float(x), float(y), float(z))


def _resolution(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 1:
        return value
    return int(DEFAULT_CONFIG["resolution"])


def get_build_settings() -> BuildSettings:
    """Return the configured sphere defaults, falling back per key on bad values."""

    raw = _load_user_config()
    policy = str(raw.get("policy", DEFAULT_CONFIG["policy"])).strip().lower()
    if policy not in POLICIES:
        policy = DEFAULT_CONFIG["policy"]
    output = raw.get("output", DEFAULT_CONFIG["output"])
    if not isinstance(output, str) or not output.strip():
        output = DEFAULT_CONFIG["output"]

    return BuildSettings(
        center=_center(raw.get("center", DEFAULT_CONFIG["center"])),
        radius=_positive_float(raw.get("radius"), DEFAULT_CONFIG["radius"]),
        resolution=_resolution(raw.get("resolution")),
        policy=policy,
        epsilon=_positive_float(raw.get("epsilon"), DEFAULT_CONFIG["epsilon"]),
        output=Path(output),
    )
