"""Line segment. The anchor is the element position; endpoints are offsets from it.

Either endpoint may instead be bound to another element, in which case it is
read from that element on every access and follows it when it moves.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from svglayout.core.capabilities import Angled
from svglayout.core.element import Element, PointLike, as_point
from svglayout.utils.geometry import ORIGIN, Bounds, Point, angle_of, normalize, vector_length

_DEFAULT_STYLE = {"stroke": "black"}


class Line(Element, Angled):
    def __init__(
        self,
        start: PointLike = ORIGIN,
        end: PointLike = ORIGIN,
        *,
        name: str | None = None,
        z_index: float | None = None,
        style: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(name=name, z_index=z_index, style={**_DEFAULT_STYLE, **(style or {})})
        self._start_offset = as_point(start)
        self._end_offset = as_point(end)

    @classmethod
    def between(cls, source: Element, target: Element, accessor: str = "center", **kwargs: Any) -> Line:
        """A line whose endpoints track ``accessor`` of two other elements."""
        line = cls(**kwargs)
        line.bind("start", source, accessor)
        line.bind("end", target, accessor)
        # Geometry comes entirely from the sources; keep it out of flow layouts.
        line._absolutely_positioned = True
        return line

    @property
    def follows_bindings(self) -> bool:
        return bool(self._bindings)

    @property
    def start(self) -> Point:
        bound = self.bound_point("start")
        return bound if bound is not None else self.get_absolute_position() + self._start_offset

    @property
    def end(self) -> Point:
        bound = self.bound_point("end")
        return bound if bound is not None else self.get_absolute_position() + self._end_offset

    @property
    def vector(self) -> Point:
        if not self._bindings:
            return self._end_offset - self._start_offset
        return self.end - self.start

    @property
    def length(self) -> float:
        return vector_length(self.vector)

    @property
    def angle(self) -> float:
        return angle_of(self.vector)

    @property
    def direction(self) -> Point:
        """Unit vector from start to end. GeometryError for a zero-length line."""
        return normalize(self.vector)

    @property
    def normal(self) -> Point:
        """Unit vector perpendicular to ``direction``, rotated 90 degrees counter-clockwise on screen."""
        d = self.direction
        return Point(d.y, -d.x)

    @property
    def center(self) -> Point:
        s, e = self.start, self.end
        return Point((s.x + e.x) / 2, (s.y + e.y) / 2)

    def local_extent(self) -> Bounds:
        if self._bindings:
            anchor = self.get_absolute_position()
            s, e = self.start - anchor, self.end - anchor
        else:
            s, e = self._start_offset, self._end_offset
        return Bounds(min(s.x, e.x), min(s.y, e.y), max(s.x, e.x), max(s.y, e.y))

    def render_primitive(self) -> str:
        s, e = self.start, self.end
        return self._render_tag("line", {"x1": s.x, "y1": s.y, "x2": e.x, "y2": e.y})
