"""Circle: anchored at its center, border box is the circumscribed square."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from svglayout.core.bounded import Bounded, alignment_factors
from svglayout.models.config import BoxModel
from svglayout.utils.geometry import Point
from svglayout.utils.units import Length, parse_unit


class Circle(Bounded):
    def __init__(
        self,
        radius: Length,
        box_model: BoxModel | Mapping[str, Any] | None = None,
        *,
        name: str | None = None,
        z_index: float | None = None,
        style: Mapping[str, Any] | None = None,
    ) -> None:
        r = parse_unit(radius)
        if r < 0:
            raise ValueError(f"Circle radius must be non-negative, got {radius!r}")
        super().__init__(2 * r, 2 * r, box_model, name=name, z_index=z_index, style=style)
        self._radius = r

    @property
    def radius(self) -> float:
        return self._radius

    def border_origin_offset(self) -> Point:
        return Point(-self._radius, -self._radius)

    @property
    def center(self) -> Point:
        return self.get_absolute_position()

    def get_alignment_point(self, horizontal: str = "center", vertical: str = "center") -> Point:
        # Measured from the stored center rather than a rectangular border box.
        fx, fy = alignment_factors(horizontal, vertical)
        c = self.center
        return Point(c.x + (2 * fx - 1) * self._radius, c.y + (2 * fy - 1) * self._radius)

    def render_primitive(self) -> str:
        c = self.center
        return self._render_tag("circle", {"cx": c.x, "cy": c.y, "r": self._radius})
