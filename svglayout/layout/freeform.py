"""Freeform arrangement: children position themselves (CSS absolute-like).

On auto-sized axes the children are shifted so the union of their bounds
starts at the content-box origin, and the container takes the union's extent
as its content size. The container itself never moves; only its children do.
A pinned container (the artboard) keeps its children where the caller put
them and only shifts content reaching into negative space back into view.
Fixed axes are left alone. Children whose geometry follows bindings (lines
between other elements) are neither moved nor counted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from svglayout.layout.flow import snap
from svglayout.layout.registry import arrangement
from svglayout.layout.result import ArrangementResult
from svglayout.models.config import Direction
from svglayout.utils.geometry import union_bounds

if TYPE_CHECKING:
    from svglayout.layout.container import Container

logger = logging.getLogger(__name__)


def _axis(auto: bool, pinned: bool, origin: float, lo: float, hi: float) -> tuple[float, float]:
    """(shift applied to children, natural content size) along one axis."""
    if not auto:
        return 0.0, hi - lo
    if pinned:
        shift = snap(max(origin - lo, 0.0))
        return shift, hi + shift - origin
    return snap(origin - lo), hi - lo


@arrangement(
    direction=Direction.FREEFORM,
    description="Children keep their own positions; auto axes fit and normalise the union",
)
def arrange_freeform(container: Container) -> ArrangementResult:
    # Bound geometry follows its sources wherever the container is.
    children = [c for c in container.children if not c.follows_bindings]
    bounds = union_bounds(child.local_bounds() for child in children)
    if bounds is None:
        return ArrangementResult()

    origin = container.content_origin
    pinned = container.is_pinned
    shift_x, width = _axis(container.is_auto_width, pinned, origin.x, bounds.min_x, bounds.max_x)
    shift_y, height = _axis(container.is_auto_height, pinned, origin.y, bounds.min_y, bounds.max_y)

    result = ArrangementResult(content_width=width, content_height=height)
    if shift_x or shift_y:
        logger.debug("Normalising %r by (%.3f, %.3f)", container, shift_x, shift_y)
        result.placements = [(c, c.relative_position.offset(shift_x, shift_y)) for c in children]
    return result
