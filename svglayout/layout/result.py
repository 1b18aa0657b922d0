"""ArrangementResult: what one arrangement pass decided for a container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from svglayout.core.element import Element
    from svglayout.utils.geometry import Point


@dataclass
class ArrangementResult:
    # (child, new relative position) for every child the pass moves
    placements: list[tuple[Element, Point]] = field(default_factory=list)
    # Natural content size; applied only to auto-sized axes
    content_width: float = 0.0
    content_height: float = 0.0
