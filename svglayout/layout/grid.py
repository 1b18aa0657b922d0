"""Grid arrangement: ``columns`` cells per row, every cell sized to the largest child."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from svglayout.core.bounded import alignment_factors
from svglayout.layout.flow import anchor_for, flow_children, positioned_extent
from svglayout.layout.registry import arrangement
from svglayout.layout.result import ArrangementResult
from svglayout.models.config import Direction

if TYPE_CHECKING:
    from svglayout.layout.container import Container


@arrangement(direction=Direction.GRID, description="Row-major grid of uniform cells")
def arrange_grid(container: Container) -> ArrangementResult:
    origin = container.content_origin
    flow = flow_children(container)
    extents = [child.placement_extent() for child in flow]

    columns = container.columns
    used_columns = min(columns, len(flow))
    rows = math.ceil(len(flow) / columns) if flow else 0
    cell_w = max((e.width for e in extents), default=0.0)
    cell_h = max((e.height for e in extents), default=0.0)
    gap = container.spacing

    natural_w = used_columns * cell_w + gap * max(used_columns - 1, 0)
    natural_h = rows * cell_h + gap * max(rows - 1, 0)
    free_w, free_h = positioned_extent(container)
    natural_w, natural_h = max(natural_w, free_w), max(natural_h, free_h)

    fx, fy = alignment_factors(container.horizontal_alignment, container.vertical_alignment)

    placements = []
    for index, (child, extent) in enumerate(zip(flow, extents)):
        row, col = divmod(index, columns)
        cell_x = col * (cell_w + gap)
        cell_y = row * (cell_h + gap)
        target = origin.offset(
            cell_x + (cell_w - extent.width) * fx,
            cell_y + (cell_h - extent.height) * fy,
        )
        placements.append((child, anchor_for(target, extent)))

    return ArrangementResult(placements, natural_w, natural_h)
