"""Box model: margin ⊇ border ⊇ padding ⊇ content.

Width and height are border-box dimensions. Every box shares the element's
absolute anchor and differs from the border box by fixed spacing offsets.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any

from svglayout.core.capabilities import MarginAware
from svglayout.core.element import Element
from svglayout.models.config import BoxModel, ParsedBoxModel, ParsedSpacing, parse_box_model
from svglayout.utils.geometry import ORIGIN, Bounds, Point
from svglayout.utils.units import Length, parse_unit

_H_FACTORS = {"left": 0.0, "center": 0.5, "right": 1.0}
_V_FACTORS = {"top": 0.0, "center": 0.5, "bottom": 1.0}


class BoxKind(str, enum.Enum):
    MARGIN = "margin"
    BORDER = "border"
    PADDING = "padding"
    CONTENT = "content"


def alignment_factors(horizontal: str, vertical: str) -> tuple[float, float]:
    try:
        return _H_FACTORS[horizontal], _V_FACTORS[vertical]
    except KeyError as e:
        raise ValueError(f"Unknown alignment ({horizontal!r}, {vertical!r})") from e


class BoxAccessor:
    """Nine named absolute points plus size for one box of a Bounded element."""

    def __init__(self, owner: Bounded, kind: BoxKind) -> None:
        self._owner = owner
        self.kind = kind

    def __repr__(self) -> str:
        return f"<BoxAccessor {self.kind.value} of {self._owner!r}>"

    @property
    def width(self) -> float:
        return self._owner.box_size(self.kind)[0]

    @property
    def height(self) -> float:
        return self._owner.box_size(self.kind)[1]

    @property
    def bounds(self) -> Bounds:
        origin = self._owner.position_for_box(self.kind)
        w, h = self._owner.box_size(self.kind)
        return Bounds.from_size(origin.x, origin.y, w, h)

    def point(self, horizontal: str = "center", vertical: str = "center") -> Point:
        fx, fy = alignment_factors(horizontal, vertical)
        origin = self._owner.position_for_box(self.kind)
        w, h = self._owner.box_size(self.kind)
        return Point(origin.x + w * fx, origin.y + h * fy)

    @property
    def top_left(self) -> Point:
        return self.point("left", "top")

    @property
    def top_center(self) -> Point:
        return self.point("center", "top")

    @property
    def top_right(self) -> Point:
        return self.point("right", "top")

    @property
    def center_left(self) -> Point:
        return self.point("left", "center")

    @property
    def center(self) -> Point:
        return self.point("center", "center")

    @property
    def center_right(self) -> Point:
        return self.point("right", "center")

    @property
    def bottom_left(self) -> Point:
        return self.point("left", "bottom")

    @property
    def bottom_center(self) -> Point:
        return self.point("center", "bottom")

    @property
    def bottom_right(self) -> Point:
        return self.point("right", "bottom")


class Bounded(Element, MarginAware):
    """Element with a CSS-like box model."""

    def __init__(
        self,
        width: Length = 0,
        height: Length = 0,
        box_model: BoxModel | Mapping[str, Any] | None = None,
        *,
        name: str | None = None,
        z_index: float | None = None,
        style: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(name=name, z_index=z_index, style=style)
        self._border_box_width = parse_unit(width)
        self._border_box_height = parse_unit(height)
        self._box_model = parse_box_model(box_model)
        self._boxes = {kind: BoxAccessor(self, kind) for kind in BoxKind}

    # ------------------------------------------------------------------
    # Size and spacing
    # ------------------------------------------------------------------

    @property
    def width(self) -> float:
        return self._border_box_width

    @property
    def height(self) -> float:
        return self._border_box_height

    def resize(self, width: Length | None = None, height: Length | None = None) -> None:
        if width is not None:
            self._border_box_width = parse_unit(width)
        if height is not None:
            self._border_box_height = parse_unit(height)
        self._changed()

    @property
    def box_model(self) -> ParsedBoxModel:
        return self._box_model

    @property
    def margin(self) -> ParsedSpacing:
        return self._box_model.margin

    @property
    def border(self) -> ParsedSpacing:
        return self._box_model.border

    @property
    def padding(self) -> ParsedSpacing:
        return self._box_model.padding

    @property
    def content_width(self) -> float:
        return self.width - self.padding.horizontal - self.border.horizontal

    @property
    def content_height(self) -> float:
        return self.height - self.padding.vertical - self.border.vertical

    def box_size(self, kind: BoxKind) -> tuple[float, float]:
        w, h = self.width, self.height
        bm = self._box_model
        if kind is BoxKind.MARGIN:
            return w + bm.margin.horizontal, h + bm.margin.vertical
        if kind is BoxKind.BORDER:
            return w, h
        if kind is BoxKind.PADDING:
            return w - bm.border.horizontal, h - bm.border.vertical
        return (
            w - bm.border.horizontal - bm.padding.horizontal,
            h - bm.border.vertical - bm.padding.vertical,
        )

    def box_offset(self, kind: BoxKind) -> Point:
        """Top-left of ``kind`` relative to the border-box top-left."""
        bm = self._box_model
        if kind is BoxKind.MARGIN:
            return Point(-bm.margin.left, -bm.margin.top)
        if kind is BoxKind.BORDER:
            return ORIGIN
        if kind is BoxKind.PADDING:
            return Point(bm.border.left, bm.border.top)
        return Point(bm.border.left + bm.padding.left, bm.border.top + bm.padding.top)

    def border_origin_offset(self) -> Point:
        """Border-box top-left relative to the anchor point. Top-left anchored by default."""
        return ORIGIN

    def position_for_box(self, kind: BoxKind = BoxKind.CONTENT) -> Point:
        return self.get_absolute_position() + self.border_origin_offset() + self.box_offset(kind)

    def local_to_absolute(self, x: float, y: float, kind: BoxKind = BoxKind.CONTENT) -> Point:
        return self.position_for_box(kind).offset(x, y)

    def local_extent(self) -> Bounds:
        origin = self.border_origin_offset()
        return Bounds.from_size(origin.x, origin.y, self.width, self.height)

    # ------------------------------------------------------------------
    # Boxes
    # ------------------------------------------------------------------

    @property
    def margin_box(self) -> BoxAccessor:
        return self._boxes[BoxKind.MARGIN]

    @property
    def border_box(self) -> BoxAccessor:
        return self._boxes[BoxKind.BORDER]

    @property
    def padding_box(self) -> BoxAccessor:
        return self._boxes[BoxKind.PADDING]

    @property
    def content_box(self) -> BoxAccessor:
        return self._boxes[BoxKind.CONTENT]

    def get_alignment_point(self, horizontal: str = "center", vertical: str = "center") -> Point:
        return self.border_box.point(horizontal, vertical)

    @property
    def center(self) -> Point:
        return self.border_box.center

    @property
    def top_left(self) -> Point:
        return self.border_box.top_left

    @property
    def top_center(self) -> Point:
        return self.border_box.top_center

    @property
    def top_right(self) -> Point:
        return self.border_box.top_right

    @property
    def center_left(self) -> Point:
        return self.border_box.center_left

    @property
    def center_right(self) -> Point:
        return self.border_box.center_right

    @property
    def bottom_left(self) -> Point:
        return self.border_box.bottom_left

    @property
    def bottom_center(self) -> Point:
        return self.border_box.bottom_center

    @property
    def bottom_right(self) -> Point:
        return self.border_box.bottom_right
