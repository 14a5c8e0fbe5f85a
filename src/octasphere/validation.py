from __future__ import annotations

import math
from typing import Sequence

import numpy as np


class ValidationError(ValueError):
    """Raised when validation constraints are violated."""


def validate_resolution(resolution: int) -> int:
    if isinstance(resolution, bool) or not isinstance(resolution, (int, np.integer)):
        raise ValidationError(f"Resolution must be an integer, got {resolution!r}.")
    if resolution <= 0:
        raise ValidationError(f"Resolution must be >= 1, got {resolution}.")
    return int(resolution)


def validate_radius(radius: float) -> float:
    try:
        value = float(radius)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Radius must be a number, got {radius!r}.") from exc
    if not math.isfinite(value) or value <= 0.0:
        raise ValidationError(f"Radius must be a positive finite number, got {radius!r}.")
    return value


def validate_center(center: Sequence[float]) -> tuple[float, float, float]:
    try:
        arr = np.asarray(center, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Center must be three numbers, got {center!r}.") from exc
    if arr.shape != (3,):
        raise ValidationError("Center must have exactly three coordinates.")
    if np.any(~np.isfinite(arr)):
        raise ValidationError("Center contains invalid values.")
    return (float(arr[0]), float(arr[1]), float(arr[2]))


def validate_epsilon(epsilon: float) -> float:
    try:
        value = float(epsilon)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Epsilon must be a number, got {epsilon!r}.") from exc
    if not math.isfinite(value) or value <= 0.0:
        raise ValidationError(f"Epsilon must be a positive finite number, got {epsilon!r}.")
    return value
