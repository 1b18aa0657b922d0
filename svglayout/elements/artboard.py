"""Artboard: the root canvas.

Pinned at the world origin, freeform, and the only element that emits the
``<svg>`` wrapper. Nothing above it triggers arrangement, so ``render()``
finalises the whole tree itself before serialising.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar

from svglayout.errors import LayoutError
from svglayout.layout.container import Container
from svglayout.models.config import ArtboardConfig, ContainerConfig, Direction
from svglayout.render.serializer import serialize_svg, style_attributes
from svglayout.render.zorder import sort_by_z_order
from svglayout.utils.geometry import ORIGIN, Point

logger = logging.getLogger(__name__)


class Artboard(Container):
    can_be_child: ClassVar[bool] = False

    def __init__(self, config: ArtboardConfig | Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        if config is None:
            board = ArtboardConfig(**kwargs)
        elif isinstance(config, ArtboardConfig):
            board = ArtboardConfig.model_validate({**config.model_dump(), **kwargs}) if kwargs else config
        else:
            board = ArtboardConfig.model_validate({**config, **kwargs})

        style = dict(board.style)
        if board.background_color:
            style["fill"] = board.background_color

        super().__init__(
            ContainerConfig(
                width=board.width,
                height=board.height,
                direction=Direction.FREEFORM,
                box_model=board.box_model,
                name=board.name,
            )
        )
        # Rendered as the canvas background, not as a container rect.
        self.background = style
        self.title = board.title

    @property
    def is_pinned(self) -> bool:
        return True

    def get_absolute_position(self) -> Point:
        return ORIGIN

    def position(self, *args: Any, **kwargs: Any) -> None:
        raise LayoutError("An artboard is pinned at the origin and cannot be positioned")

    def translate(self, *args: Any, **kwargs: Any) -> None:
        raise LayoutError("An artboard is pinned at the origin and cannot be translated")

    def ensure_finalized(self) -> None:
        """Arrange every container in the tree, parents before children."""
        self.ensure_arranged()
        for element in self.descendants():
            if isinstance(element, Container):
                element.ensure_arranged()

    def render_primitive(self) -> str:
        return ""

    def render(self) -> str:
        self.ensure_finalized()
        elements = sort_by_z_order(self.descendants())
        fragments = [el.render_primitive() for el in elements]
        svg = serialize_svg(
            fragments,
            self.width,
            self.height,
            background=style_attributes(self.background) or None,
            title=self.title,
        )
        logger.debug("Rendered %r: %d elements, %.3f x %.3f", self, len(elements), self.width, self.height)
        return svg
