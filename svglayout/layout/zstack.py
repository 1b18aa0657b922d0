"""Overlay arrangement: every flow child is aligned to the same point.

Layers are aligned inside the content box by ``horizontal_alignment`` and
``vertical_alignment``. A non-zero ``layer_offset`` fans the layers out like
a card deck: layer ``i`` moves ``i * layer_offset`` away from its aligned
edge (towards the inside for right/bottom alignment). Auto axes fit the
largest layer plus the fan-out.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from svglayout.core.bounded import alignment_factors
from svglayout.layout.flow import anchor_for, flow_children, positioned_extent
from svglayout.layout.registry import arrangement
from svglayout.layout.result import ArrangementResult
from svglayout.models.config import Direction

if TYPE_CHECKING:
    from svglayout.layout.container import Container

logger = logging.getLogger(__name__)


def _layer_offset(avail: float, size: float, factor: float, fan: float) -> float:
    if factor == 1.0:
        return avail - size - fan
    return (avail - size) * factor + fan


def _natural(sizes: list[float], factor: float, step: float) -> float:
    # Centered layers fan out to one side, so both sides need the room.
    reach = 2.0 if factor == 0.5 else 1.0
    return max((size + i * step * reach for i, size in enumerate(sizes)), default=0.0)


@arrangement(direction=Direction.ZSTACK, description="Overlay children on one aligned point")
def arrange_zstack(container: Container) -> ArrangementResult:
    origin = container.content_origin
    flow = flow_children(container)
    extents = [child.placement_extent() for child in flow]
    step = container.layer_offset

    fx, fy = alignment_factors(container.horizontal_alignment, container.vertical_alignment)
    natural_w = _natural([e.width for e in extents], fx, step)
    natural_h = _natural([e.height for e in extents], fy, step)
    free_w, free_h = positioned_extent(container)
    natural_w, natural_h = max(natural_w, free_w), max(natural_h, free_h)

    avail_w = natural_w if container.is_auto_width else container.content_width
    avail_h = natural_h if container.is_auto_height else container.content_height

    placements = []
    for index, (child, extent) in enumerate(zip(flow, extents)):
        fan = index * step
        target = origin.offset(
            _layer_offset(avail_w, extent.width, fx, fan),
            _layer_offset(avail_h, extent.height, fy, fan),
        )
        placements.append((child, anchor_for(target, extent)))

    logger.debug("Overlaid %d layers in %r (%.3f x %.3f)", len(flow), container, avail_w, avail_h)
    return ArrangementResult(placements, natural_w, natural_h)
