"""Vertex identity for the dedup map.

Two policies decide when two points are the same mesh vertex:

``exact``
    Coordinates compare value-equal. The key is the point tuple itself, so
    dict hashing agrees with equality (``-0.0`` and ``0.0`` collapse).
``snap``
    Coordinates are quantized to a grid of spacing ``epsilon`` and the
    integer cell is the key. Points closer than the grid spacing collapse
    unless they straddle a cell boundary.
"""

from __future__ import annotations

from typing import Callable, Hashable, Literal, Sequence, Tuple

import numpy as np

from octasphere.validation import ValidationError, validate_epsilon

Point = Tuple[float, float, float]
KeyPolicy = Literal["exact", "snap"]
KeyFunction = Callable[[Point], Hashable]

DEFAULT_EPSILON = 1e-6
POLICIES: tuple[str, ...] = ("exact", "snap")


def exact_key(point: Point) -> Point:
    return (point[0], point[1], point[2])


def snapped_key(point: Point, epsilon: float = DEFAULT_EPSILON) -> tuple[int, int, int]:
    return (
        int(round(point[0] / epsilon)),
        int(round(point[1] / epsilon)),
        int(round(point[2] / epsilon)),
    )


def key_function(policy: KeyPolicy = "exact", epsilon: float = DEFAULT_EPSILON) -> KeyFunction:
    if policy == "exact":
        return exact_key
    if policy == "snap":
        eps = validate_epsilon(epsilon)
        return lambda point: snapped_key(point, eps)
    raise ValidationError(f"Unsupported vertex policy '{policy}'. Expected one of: {', '.join(POLICIES)}.")


class VertexMap:
    """Point list plus a key -> index lookup, owned by a single build."""

    def __init__(self, policy: KeyPolicy = "exact", epsilon: float = DEFAULT_EPSILON) -> None:
        self.policy = policy
        self._key = key_function(policy, epsilon)
        self._points: list[Point] = []
        self._index: dict[Hashable, int] = {}

    @property
    def points(self) -> list[Point]:
        return self._points

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index: int) -> Point:
        return self._points[index]

    def __contains__(self, point: Sequence[float]) -> bool:
        return self._key(_as_point(point)) in self._index

    def add(self, point: Sequence[float]) -> int:
        """Append ``point`` and register it, even if an equal key exists."""

        pt = _as_point(point)
        index = len(self._points)
        self._points.append(pt)
        self._index[self._key(pt)] = index
        return index

    def get_or_add(self, point: Sequence[float]) -> int:
        pt = _as_point(point)
        key = self._key(pt)
        index = self._index.get(key)
        if index is not None:
            return index
        index = len(self._points)
        self._points.append(pt)
        self._index[key] = index
        return index

    def as_array(self) -> np.ndarray:
        if not self._points:
            return np.zeros((0, 3), dtype=float)
        return np.asarray(self._points, dtype=float)


def _as_point(point: Sequence[float]) -> Point:
    return (float(point[0]), float(point[1]), float(point[2]))
