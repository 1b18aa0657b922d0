"""Helpers shared by the arrangement strategies. Read-only over the tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from svglayout.utils.geometry import Bounds, Point

if TYPE_CHECKING:
    from svglayout.core.element import Element
    from svglayout.layout.container import Container

# Normalisation shifts smaller than this are treated as zero.
SHIFT_EPS = 1e-9


def flow_children(container: Container) -> list[Element]:
    """Children that take part in automatic placement, in insertion order."""
    return [c for c in container.children if not c.is_absolutely_positioned]


def positioned_extent(container: Container) -> tuple[float, float]:
    """How far absolutely positioned children reach past the content origin."""
    origin = container.content_origin
    width = height = 0.0
    for child in container.children:
        if not child.is_absolutely_positioned:
            continue
        b = child.local_bounds()
        width = max(width, b.max_x - origin.x)
        height = max(height, b.max_y - origin.y)
    return width, height


def anchor_for(target: Point, extent: Bounds) -> Point:
    """Relative position that puts the extent's top-left corner on ``target``."""
    return Point(target.x - extent.min_x, target.y - extent.min_y)


def snap(value: float) -> float:
    return 0.0 if abs(value) < SHIFT_EPS else value
