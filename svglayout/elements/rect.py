"""Rectangle: a Bounded anchored at its border-box top-left."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from svglayout.core.bounded import Bounded, BoxKind
from svglayout.models.config import BoxModel
from svglayout.utils.units import Length, parse_unit


class Rect(Bounded):
    def __init__(
        self,
        width: Length,
        height: Length,
        box_model: BoxModel | Mapping[str, Any] | None = None,
        *,
        corner_radius: Length = 0,
        name: str | None = None,
        z_index: float | None = None,
        style: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(width, height, box_model, name=name, z_index=z_index, style=style)
        self.corner_radius = parse_unit(corner_radius)

    def render_primitive(self) -> str:
        origin = self.position_for_box(BoxKind.BORDER)
        return self._render_tag(
            "rect",
            {
                "x": origin.x,
                "y": origin.y,
                "width": self.width,
                "height": self.height,
                "rx": self.corner_radius or None,
            },
        )
