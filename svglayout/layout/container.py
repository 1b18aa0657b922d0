"""Container: owns children and resolves their layout on demand.

A container's auto size depends on its children's arranged geometry, while the
children's absolute positions depend on the container. Both are resolved by a
single arrangement pass that runs the first time anything asks for geometry
after a mutation:

1. ``get_absolute_position()`` of any child (or ``width``/``height`` of an
   auto-sized container) calls ``ensure_arranged()``.
2. The registered strategy for ``direction`` computes placements and the
   natural content size from the current tree without mutating it. The
   container itself never moves during arrangement.
3. The container applies the result, derives auto sizes and marks itself
   arranged. Any later change to a child calls ``invalidate()``, which clears
   the flag up the ancestor chain.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from svglayout.core.bounded import Bounded, BoxKind
from svglayout.core.element import Element
from svglayout.errors import LayoutError
from svglayout.layout.registry import get_registry
from svglayout.models.config import ContainerConfig, Direction
from svglayout.render.zorder import sort_by_z_order
from svglayout.utils.geometry import ORIGIN, Point
from svglayout.utils.units import Length, parse_unit

logger = logging.getLogger(__name__)


class Container(Bounded):
    """Bounded element that owns and arranges children."""

    def __init__(self, config: ContainerConfig | Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        config = _coerce_config(config, kwargs)
        self.is_auto_width = config.width == "auto"
        self.is_auto_height = config.height == "auto"
        super().__init__(
            0 if self.is_auto_width else config.width,
            0 if self.is_auto_height else config.height,
            config.box_model,
            name=config.name,
            z_index=config.z_index,
            style=config.style,
        )
        self._config = config
        self._children: list[Element] = []
        self._arranged = False
        self._arranging = False
        # Auto axes start at their chrome (padding + border) until arranged.
        if self.is_auto_width:
            self._border_box_width = self.padding.horizontal + self.border.horizontal
        if self.is_auto_height:
            self._border_box_height = self.padding.vertical + self.border.vertical

    @property
    def config(self) -> ContainerConfig:
        return self._config

    @property
    def direction(self) -> Direction:
        return self._config.direction

    @property
    def spacing(self) -> float:
        return self._config.spacing

    @property
    def columns(self) -> int:
        return self._config.columns

    @property
    def spread(self) -> bool:
        return self._config.spread

    @property
    def layer_offset(self) -> float:
        return self._config.layer_offset

    @property
    def horizontal_alignment(self) -> str:
        return self._config.horizontal_alignment

    @property
    def vertical_alignment(self) -> str:
        return self._config.vertical_alignment

    # ------------------------------------------------------------------
    # Size
    # ------------------------------------------------------------------

    @property
    def width(self) -> float:
        if self.is_auto_width:
            self.ensure_arranged()
        return self._border_box_width

    @property
    def height(self) -> float:
        if self.is_auto_height:
            self.ensure_arranged()
        return self._border_box_height

    def resize(self, width: Length | None = None, height: Length | None = None) -> None:
        """Fix one or both axes. ``"auto"`` switches an axis back to auto sizing."""
        if width is not None:
            self.is_auto_width = width == "auto"
            if not self.is_auto_width:
                self._border_box_width = parse_unit(width)
        if height is not None:
            self.is_auto_height = height == "auto"
            if not self.is_auto_height:
                self._border_box_height = parse_unit(height)
        self.invalidate()
        self._changed()

    @property
    def is_pinned(self) -> bool:
        """Pinned containers keep positively placed children where they are."""
        return False

    @property
    def content_origin(self) -> Point:
        """Content-box top-left in this container's child coordinate space."""
        return self.box_offset(BoxKind.CONTENT)

    # ------------------------------------------------------------------
    # Positioning
    # ------------------------------------------------------------------

    def position(self, *args: Any, **kwargs: Any) -> None:
        # Size and children settle first so reference points read afterwards agree.
        self.ensure_arranged()
        super().position(*args, **kwargs)

    def translate(self, *args: Any, **kwargs: Any) -> None:
        self.ensure_arranged()
        super().translate(*args, **kwargs)

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------

    @property
    def children(self) -> tuple[Element, ...]:
        return tuple(self._children)

    def descendants(self) -> Iterator[Element]:
        """Every element below this one, depth-first in insertion order."""
        for child in self._children:
            yield child
            if isinstance(child, Container):
                yield from child.descendants()

    def add_element(self, element: Element) -> Element:
        """Attach ``element`` as the last child and return it.

        An absolutely positioned element keeps its world placement: its
        coordinates are converted into this container's space once, here.
        """
        if element is self or any(a is element for a in self.ancestors()):
            raise LayoutError(f"Cannot add {element!r} to its own subtree")
        if not element.can_be_child:
            raise LayoutError(f"{type(element).__name__} cannot be added to a container")
        if element.parent is self:
            return element

        old_parent = element.parent
        if old_parent is not None:
            world = element.get_absolute_position() if element.is_absolutely_positioned else ORIGIN
            old_parent._children.remove(element)
            element._detach()
            old_parent.invalidate()
            element._set_relative_position(world)

        if element.is_absolutely_positioned:
            element._set_relative_position(element.relative_position - self.get_absolute_position())
        elif self.direction is Direction.FREEFORM:
            element._set_relative_position(element.relative_position + self.content_origin)

        self._children.append(element)
        element._attach(self)
        self.invalidate()
        logger.debug("Added %r to %r", element, self)
        return element

    def remove_element(self, element: Element) -> None:
        """Detach a child. It keeps its current world position."""
        if element.parent is not self:
            raise LayoutError(f"{element!r} is not a child of {self!r}")
        world = element.get_absolute_position()
        self._children.remove(element)
        element._detach()
        element._set_relative_position(world)
        self.invalidate()

    # ------------------------------------------------------------------
    # Arrangement
    # ------------------------------------------------------------------

    @property
    def is_arranged(self) -> bool:
        return self._arranged

    def invalidate(self) -> None:
        """Drop the current arrangement here and in every ancestor."""
        if self._arranging:
            return
        node: Container | None = self
        while node is not None and not node._arranging:
            node._arranged = False
            node = node.parent

    def ensure_arranged(self) -> None:
        if self._arranged or self._arranging:
            return
        self._arranging = True
        try:
            strategy = get_registry().get(self.direction)
            result = strategy.fn(self)
            for child, position in result.placements:
                child._set_relative_position(position)
            if self.is_auto_width:
                self._border_box_width = result.content_width + self.padding.horizontal + self.border.horizontal
            if self.is_auto_height:
                self._border_box_height = result.content_height + self.padding.vertical + self.border.vertical
        finally:
            self._arranging = False
        self._arranged = True
        logger.debug(
            "Arranged %r (%s): %d children, %.3f x %.3f",
            self,
            self.direction.value,
            len(self._children),
            self._border_box_width,
            self._border_box_height,
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_primitive(self) -> str:
        """Background rect at the border box, or nothing when unstyled."""
        if not self.style:
            return ""
        origin = self.position_for_box(BoxKind.BORDER)
        return self._render_tag(
            "rect",
            {"x": origin.x, "y": origin.y, "width": self.width, "height": self.height},
        )

    def render(self) -> str:
        self.ensure_arranged()
        elements = sort_by_z_order([self, *self.descendants()])
        return "\n".join(filter(None, (el.render_primitive() for el in elements)))


def _coerce_config(config: ContainerConfig | Mapping[str, Any] | None, overrides: dict[str, Any]) -> ContainerConfig:
    if config is None:
        return ContainerConfig(**overrides)
    if not isinstance(config, ContainerConfig):
        return ContainerConfig.model_validate({**config, **overrides})
    if overrides:
        return ContainerConfig.model_validate({**config.model_dump(), **overrides})
    return config
