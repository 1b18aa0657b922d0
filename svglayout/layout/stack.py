"""Horizontal and vertical stacks.

Flow children are placed in insertion order along the main axis, ``spacing``
apart, and aligned on the cross axis. Absolutely positioned children are
skipped but still widen an auto-sized stack when they reach past it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from svglayout.core.bounded import alignment_factors
from svglayout.layout.flow import anchor_for, flow_children, positioned_extent
from svglayout.layout.registry import arrangement
from svglayout.layout.result import ArrangementResult
from svglayout.models.config import Direction

if TYPE_CHECKING:
    from svglayout.layout.container import Container


def _arrange_stack(container: Container, horizontal: bool) -> ArrangementResult:
    origin = container.content_origin
    flow = flow_children(container)
    extents = [child.placement_extent() for child in flow]

    mains = [e.width if horizontal else e.height for e in extents]
    crosses = [e.height if horizontal else e.width for e in extents]
    natural_main = sum(mains) + container.spacing * max(len(flow) - 1, 0)
    natural_cross = max(crosses, default=0.0)

    natural_w, natural_h = (natural_main, natural_cross) if horizontal else (natural_cross, natural_main)
    free_w, free_h = positioned_extent(container)
    natural_w, natural_h = max(natural_w, free_w), max(natural_h, free_h)

    avail_w = natural_w if container.is_auto_width else container.content_width
    avail_h = natural_h if container.is_auto_height else container.content_height
    avail_main, avail_cross = (avail_w, avail_h) if horizontal else (avail_h, avail_w)

    fx, fy = alignment_factors(container.horizontal_alignment, container.vertical_alignment)
    main_factor, cross_factor = (fx, fy) if horizontal else (fy, fx)

    free = max(avail_main - natural_main, 0.0)
    step = container.spacing
    cursor = 0.0
    if container.spread and len(flow) > 1:
        step += free / (len(flow) - 1)
    else:
        cursor = free * main_factor

    placements = []
    for child, extent, main, cross in zip(flow, extents, mains, crosses):
        cross_offset = (avail_cross - cross) * cross_factor
        if horizontal:
            target = origin.offset(cursor, cross_offset)
        else:
            target = origin.offset(cross_offset, cursor)
        placements.append((child, anchor_for(target, extent)))
        cursor += main + step

    return ArrangementResult(placements, natural_w, natural_h)


@arrangement(direction=Direction.HORIZONTAL, description="Stack left to right")
def arrange_horizontal(container: Container) -> ArrangementResult:
    return _arrange_stack(container, horizontal=True)


@arrangement(direction=Direction.VERTICAL, description="Stack top to bottom")
def arrange_vertical(container: Container) -> ArrangementResult:
    return _arrange_stack(container, horizontal=False)
