"""Arbitrary SVG path data, given in the element's local coordinates.

The path's bounding box (from svgpathtools) becomes the border box, so a path
drawn from (10, 10) to (50, 30) is 40 x 20 with its top-left 10px right and
below the anchor.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from svgpathtools import parse_path

from svglayout.core.bounded import Bounded
from svglayout.errors import GeometryError
from svglayout.models.config import BoxModel
from svglayout.utils.geometry import Point


class Path(Bounded):
    def __init__(
        self,
        d: str,
        box_model: BoxModel | Mapping[str, Any] | None = None,
        *,
        name: str | None = None,
        z_index: float | None = None,
        style: Mapping[str, Any] | None = None,
    ) -> None:
        path = parse_path(d)
        if len(path) == 0:
            raise GeometryError(f"Path data has no segments: {d!r}")
        xmin, xmax, ymin, ymax = path.bbox()
        super().__init__(xmax - xmin, ymax - ymin, box_model, name=name, z_index=z_index, style=style)
        self._d = d
        self._path = path
        self._origin = Point(float(xmin), float(ymin))

    @property
    def d(self) -> str:
        return self._d

    def border_origin_offset(self) -> Point:
        return self._origin

    def render_primitive(self) -> str:
        pos = self.get_absolute_position()
        moved = self._path.translated(complex(pos.x, pos.y))
        return self._render_tag("path", {"d": moved.d()})
