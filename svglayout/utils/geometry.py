"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from shapely import affinity
from shapely.geometry import MultiPoint

from svglayout.errors import GeometryError

# Below this a direction vector is treated as zero-length.
_ZERO_LENGTH_EPS = 1e-12


@dataclass(frozen=True)
class Point:
    """2D coordinate pair in pixels."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> Point:
        return Point(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)

    def offset(self, dx: float = 0.0, dy: float = 0.0) -> Point:
        return Point(self.x + dx, self.y + dy)

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_close(self, other: Point, tol: float = 1e-9) -> bool:
        return abs(self.x - other.x) <= tol and abs(self.y - other.y) <= tol

    def as_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y], dtype=np.float64)


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box: (min_x, min_y, max_x, max_y)."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_size(cls, x: float, y: float, width: float, height: float) -> Bounds:
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def top_left(self) -> Point:
        return Point(self.min_x, self.min_y)

    @property
    def bottom_right(self) -> Point:
        return Point(self.max_x, self.max_y)

    @property
    def center(self) -> Point:
        return Point((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def translate(self, offset: Point) -> Bounds:
        return Bounds(
            self.min_x + offset.x,
            self.min_y + offset.y,
            self.max_x + offset.x,
            self.max_y + offset.y,
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)


def union_bounds(items: Iterable[Bounds]) -> Bounds | None:
    """Smallest box containing every input box, or None for no input."""
    items = list(items)
    if not items:
        return None
    arr = np.array([b.as_tuple() for b in items], dtype=np.float64)
    return Bounds(
        float(np.min(arr[:, 0])),
        float(np.min(arr[:, 1])),
        float(np.max(arr[:, 2])),
        float(np.max(arr[:, 3])),
    )


def vector_length(vector: Point) -> float:
    return float(np.linalg.norm(vector.as_array()))


def normalize(vector: Point) -> Point:
    """Unit vector in the direction of ``vector``.

    Raises GeometryError for a zero-length vector instead of producing NaN.
    """
    length = vector_length(vector)
    if length < _ZERO_LENGTH_EPS:
        raise GeometryError(f"Cannot normalize zero-length vector ({vector.x}, {vector.y})")
    return Point(vector.x / length, vector.y / length)


def angle_of(vector: Point) -> float:
    """Direction of a vector in degrees (SVG y-down convention)."""
    return math.degrees(math.atan2(vector.y, vector.x))


def compose(matrices: Sequence[NDArray[np.float64]]) -> NDArray[np.float64]:
    """Compose 3x3 affine matrices as SVG does: the first listed applies outermost."""
    result = np.identity(3)
    for m in matrices:
        result = result @ m
    return result


def transformed_bounds(bounds: Bounds, matrix: NDArray[np.float64]) -> Bounds:
    """Axis-aligned bounds of a rectangle after an affine transform."""
    # MultiPoint keeps zero-width and zero-height boxes (lines) well defined.
    rect = MultiPoint([
        (bounds.min_x, bounds.min_y),
        (bounds.max_x, bounds.min_y),
        (bounds.max_x, bounds.max_y),
        (bounds.min_x, bounds.max_y),
    ])
    a, b, xoff = matrix[0]
    d, e, yoff = matrix[1]
    moved = affinity.affine_transform(rect, [a, b, d, e, xoff, yoff])
    min_x, min_y, max_x, max_y = moved.bounds
    return Bounds(float(min_x), float(min_y), float(max_x), float(max_y))


def apply_matrix(point: Point, matrix: NDArray[np.float64]) -> Point:
    vec = matrix @ np.array([point.x, point.y, 1.0])
    return Point(float(vec[0]), float(vec[1]))
