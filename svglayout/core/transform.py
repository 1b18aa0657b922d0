"""Reversible transform operations attached to an element.

Transforms are stored in insertion order and emitted as one SVG ``transform``
attribute. Pivots are resolved when the markup or a bounding box is produced,
never when the transform is recorded.
"""

from __future__ import annotations

import enum
import math
import weakref
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from svglayout.render.serializer import format_number
from svglayout.utils.geometry import Point

if TYPE_CHECKING:
    from svglayout.core.capabilities import Boundable


class TransformKind(enum.Enum):
    ROTATION = "rotate"
    SCALE = "scale"
    SKEW = "skew"


@dataclass(frozen=True)
class Pivot:
    """Where a transform pivots.

    Exactly one of ``point`` (absolute, unaffected by moving the owner) or
    ``source`` (weak handle to an element whose center is read lazily) is set.
    """

    point: Point | None = None
    source: weakref.ref[Boundable] | None = None

    @classmethod
    def at_point(cls, point: Point) -> Pivot:
        return cls(point=point)

    @classmethod
    def center_of(cls, element: Boundable) -> Pivot:
        return cls(source=weakref.ref(element))


@dataclass(frozen=True)
class Transform:
    kind: TransformKind
    params: tuple[float, ...]
    pivot: Pivot | None = None

    @classmethod
    def rotation(cls, deg: float, pivot: Pivot | None = None) -> Transform:
        return cls(TransformKind.ROTATION, (float(deg),), pivot)

    @classmethod
    def scaling(cls, sx: float, sy: float, pivot: Pivot | None = None) -> Transform:
        return cls(TransformKind.SCALE, (float(sx), float(sy)), pivot)

    @classmethod
    def skewing(cls, ax: float, ay: float, pivot: Pivot | None = None) -> Transform:
        return cls(TransformKind.SKEW, (float(ax), float(ay)), pivot)

    @property
    def angle(self) -> float:
        return self.params[0] if self.kind is TransformKind.ROTATION else 0.0

    def to_svg(self, pivot: Point) -> str:
        px, py = format_number(pivot.x), format_number(pivot.y)
        if self.kind is TransformKind.ROTATION:
            return f"rotate({format_number(self.params[0])} {px} {py})"

        if self.kind is TransformKind.SCALE:
            sx, sy = self.params
            inner = f"scale({format_number(sx)} {format_number(sy)})"
        else:
            ax, ay = self.params
            parts = []
            if ax:
                parts.append(f"skewX({format_number(ax)})")
            if ay:
                parts.append(f"skewY({format_number(ay)})")
            inner = " ".join(parts) or "skewX(0)"
        neg_px, neg_py = format_number(-pivot.x), format_number(-pivot.y)
        return f"translate({px} {py}) {inner} translate({neg_px} {neg_py})"

    def matrix(self, pivot: Point) -> NDArray[np.float64]:
        """3x3 affine matrix of this transform about ``pivot``."""
        if self.kind is TransformKind.ROTATION:
            rad = math.radians(self.params[0])
            c, s = math.cos(rad), math.sin(rad)
            core = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        elif self.kind is TransformKind.SCALE:
            sx, sy = self.params
            core = np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])
        else:
            ax, ay = self.params
            skew_x = np.array([[1.0, math.tan(math.radians(ax)), 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])
            skew_y = np.array([[1.0, 0.0, 0.0], [math.tan(math.radians(ay)), 1.0, 0.0], [0.0, 0.0, 1.0]])
            # Matches the emitted "skewX(ax) skewY(ay)" order.
            core = skew_x @ skew_y
        to_pivot = np.array([[1.0, 0.0, pivot.x], [0.0, 1.0, pivot.y], [0.0, 0.0, 1.0]])
        from_pivot = np.array([[1.0, 0.0, -pivot.x], [0.0, 1.0, -pivot.y], [0.0, 0.0, 1.0]])
        return to_pivot @ core @ from_pivot
