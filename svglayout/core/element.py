"""Element: base class for everything that can be placed on an artboard.

Position model:
- ``_position`` is relative to the parent's border-box origin (or to the world
  when the element has no parent).
- ``get_absolute_position()`` walks up the parent chain; the parent is arranged
  first so flow layouts have placed the element before it is read.
- Public point accessors (``center``, ``top_left``, ...) are always absolute.

Calling ``position()`` or ``translate()`` takes an element out of its parent's
automatic flow (CSS ``position: absolute``). Moving a container still moves
every descendant because child positions are stored relative to it.
"""

from __future__ import annotations

import abc
import itertools
import logging
import weakref
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Union

from svglayout.core.bindings import Binding, ObserverList, invalidate_dependents
from svglayout.core.capabilities import Angled, Boundable, MarginAware
from svglayout.core.transform import Pivot, Transform
from svglayout.render.serializer import serialize_tag, style_attributes
from svglayout.utils.geometry import (
    ORIGIN,
    Bounds,
    Point,
    apply_matrix,
    compose,
    normalize,
    transformed_bounds,
)
from svglayout.utils.units import Length, parse_unit

if TYPE_CHECKING:
    from svglayout.layout.container import Container

logger = logging.getLogger(__name__)

# Anything position()/translate() accept as a point.
PointLike = Union[Point, Boundable, tuple[Length, Length], Mapping[str, Length]]


def as_point(value: PointLike) -> Point:
    """Coerce a point-like value to an absolute Point, parsing unit strings."""
    if isinstance(value, Point):
        return value
    if isinstance(value, Boundable):
        return value.center
    if isinstance(value, Mapping):
        return Point(parse_unit(value.get("x")), parse_unit(value.get("y")))
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return Point(parse_unit(value[0]), parse_unit(value[1]))
    raise TypeError(f"Expected a point, got {value!r}")


class Element(Boundable, abc.ABC):
    """Abstract positionable element."""

    # False for roots, which never get a parent.
    can_be_child: ClassVar[bool] = True

    _creation_counter: ClassVar[Iterator[int]] = itertools.count()

    def __init__(
        self,
        *,
        name: str | None = None,
        z_index: float | None = None,
        style: Mapping[str, Any] | None = None,
    ) -> None:
        self.name = name
        self.style: dict[str, Any] = dict(style or {})
        self._position: Point = ORIGIN
        self._transforms: list[Transform] = []
        self._parent_ref: weakref.ref[Container] | None = None
        self._z_index = z_index
        self._creation_index = next(Element._creation_counter)
        self._absolutely_positioned = False
        self._observers = ObserverList()
        self._bindings: dict[str, Binding] = {}

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<{type(self).__name__}{label} #{self._creation_index}>"

    # ------------------------------------------------------------------
    # Tree
    # ------------------------------------------------------------------

    @property
    def parent(self) -> Container | None:
        return self._parent_ref() if self._parent_ref is not None else None

    def _attach(self, parent: Container) -> None:
        self._parent_ref = weakref.ref(parent)

    def _detach(self) -> None:
        self._parent_ref = None

    def ancestors(self) -> Iterator[Container]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    @property
    def depth(self) -> int:
        return sum(1 for _ in self.ancestors())

    @property
    def root(self) -> Element:
        node: Element = self
        for ancestor in self.ancestors():
            node = ancestor
        return node

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    @property
    def z_index(self) -> float | None:
        return self._z_index

    @z_index.setter
    def z_index(self, value: float | None) -> None:
        self._z_index = value

    @property
    def creation_index(self) -> int:
        return self._creation_index

    # ------------------------------------------------------------------
    # Position
    # ------------------------------------------------------------------

    @property
    def relative_position(self) -> Point:
        return self._position

    def _set_relative_position(self, value: Point) -> None:
        """Layout-internal move. Does not take the element out of flow."""
        self._position = value

    @property
    def is_absolutely_positioned(self) -> bool:
        return self._absolutely_positioned

    @property
    def follows_bindings(self) -> bool:
        """True when this element's geometry is read from bound sources."""
        return False

    def get_absolute_position(self) -> Point:
        parent = self.parent
        if parent is None:
            return self._position
        parent.ensure_arranged()
        return parent.get_absolute_position() + self._position

    @abc.abstractmethod
    def local_extent(self) -> Bounds:
        """Untransformed extent relative to this element's anchor point."""

    @property
    def center(self) -> Point:
        return self.get_absolute_position() + self.local_extent().center

    def get_alignment_point(self, horizontal: str = "center", vertical: str = "center") -> Point:
        """Point used when a layout aligns this element. Defaults to the center."""
        return self.center

    def position(
        self,
        relative_from: PointLike,
        relative_to: PointLike,
        x: Length = 0,
        y: Length = 0,
        respect_margin: bool = False,
    ) -> None:
        """Move so that ``relative_from`` lands on ``relative_to`` plus (x, y).

        Example::

            label.position(
                relative_from=label.center,
                relative_to=box.top_center,
                y="-1rem",
            )
        """
        start = as_point(relative_from)
        target = as_point(relative_to)
        dx = target.x - start.x + parse_unit(x)
        dy = target.y - start.y + parse_unit(y)

        if respect_margin and isinstance(self, MarginAware):
            margin = self.margin
            if dx > 0:
                dx += margin.left
            elif dx < 0:
                dx -= margin.right
            if dy > 0:
                dy += margin.top
            elif dy < 0:
                dy -= margin.bottom

        self._position = self._position.offset(dx, dy)
        self._absolutely_positioned = True
        self._changed()

    def translate(self, along: PointLike, distance: Length) -> None:
        """Move ``distance`` along the direction of ``along``.

        Raises GeometryError for a zero-length direction.
        """
        direction = normalize(as_point(along))
        step = direction * parse_unit(distance)
        self._position = self._position + step
        self._absolutely_positioned = True
        self._changed()

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    @property
    def transforms(self) -> tuple[Transform, ...]:
        return tuple(self._transforms)

    @property
    def rotation(self) -> float:
        """Sum of all rotation angles in degrees."""
        return sum(t.angle for t in self._transforms)

    def rotate(self, relative_to: PointLike | Angled | None = None, deg: float | None = None) -> None:
        """Append a rotation.

        The angle is ``deg`` or, failing that, the ``angle`` of an Angled
        ``relative_to``. The pivot is a literal absolute point (it stays put
        when this element moves), the center of a Boundable ``relative_to``,
        or this element's own center at render time.
        """
        angle = deg
        if angle is None and isinstance(relative_to, Angled):
            angle = relative_to.angle
        if angle is None:
            logger.warning("rotate() on %r has no angle (no deg and no angled reference), ignoring", self)
            return

        self._transforms.append(Transform.rotation(angle, self._pivot_for(relative_to)))
        self._changed()

    def scale(self, sx: float, sy: float | None = None, pivot: PointLike | None = None) -> None:
        self._transforms.append(Transform.scaling(sx, sx if sy is None else sy, self._pivot_for(pivot)))
        self._changed()

    def skew(self, ax: float = 0.0, ay: float = 0.0, pivot: PointLike | None = None) -> None:
        self._transforms.append(Transform.skewing(ax, ay, self._pivot_for(pivot)))
        self._changed()

    def _pivot_for(self, reference: Any) -> Pivot | None:
        if reference is None or reference is self:
            return None
        if isinstance(reference, Boundable):
            return Pivot.center_of(reference)
        if isinstance(reference, Angled):
            return None
        return Pivot.at_point(as_point(reference))

    def resolve_pivot(self, transform: Transform) -> Point:
        """Absolute pivot of ``transform`` for the current layout."""
        pivot = transform.pivot
        if pivot is None:
            return self.center
        if pivot.point is not None:
            return pivot.point
        source = pivot.source() if pivot.source is not None else None
        return source.center if source is not None else self.center

    def _local_pivot(self, transform: Transform) -> Point:
        """Pivot in the parent's coordinate space (no parent arrangement needed)."""
        pivot = transform.pivot
        if pivot is None:
            return self._position + self.local_extent().center
        parent = self.parent
        parent_origin = parent.get_absolute_position() if parent else ORIGIN
        if pivot.point is not None:
            return pivot.point - parent_origin
        source = pivot.source() if pivot.source is not None else None
        if source is None:
            return self._position + self.local_extent().center
        return source.center - parent_origin

    def transform_attribute(self) -> str:
        return " ".join(t.to_svg(self.resolve_pivot(t)) for t in self._transforms)

    def render_transform(self) -> str:
        """Transform emitted on this element's primitive.

        Transforms of enclosing containers come first, outermost ancestor
        leading, so a rotated container carries its whole subtree with it.
        Geometry queries (``bounding_box``, alignment points) stay in the
        untransformed layout space of each container.
        """
        chain = [a for a in reversed(list(self.ancestors())) if a.can_be_child]
        chain.append(self)
        return " ".join(el.transform_attribute() for el in chain if el.transforms)

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------

    def local_bounds(self) -> Bounds:
        """Transformed extent in the parent's coordinate space."""
        extent = self.local_extent().translate(self._position)
        if not self._transforms:
            return extent
        matrix = compose([t.matrix(self._local_pivot(t)) for t in self._transforms])
        return transformed_bounds(extent, matrix)

    def placement_extent(self) -> Bounds:
        """Transformed extent relative to this element's own anchor."""
        return self.local_bounds().translate(-self._position)

    def bounding_box(self) -> Bounds:
        """Absolute axis-aligned bounds including transforms."""
        extent = self.local_extent().translate(self.get_absolute_position())
        if not self._transforms:
            return extent
        matrix = compose([t.matrix(self.resolve_pivot(t)) for t in self._transforms])
        return transformed_bounds(extent, matrix)

    def to_world(self, point: Point) -> Point:
        """Apply this element's transforms to an absolute, untransformed point."""
        if not self._transforms:
            return point
        matrix = compose([t.matrix(self.resolve_pivot(t)) for t in self._transforms])
        return apply_matrix(point, matrix)

    # ------------------------------------------------------------------
    # Bindings
    # ------------------------------------------------------------------

    @property
    def observers(self) -> ObserverList:
        return self._observers

    @property
    def dependents(self) -> list[Element]:
        return [o.handle() for o in self._observers if o.handle() is not None]

    def bind(self, name: str, source: Element, accessor: str | Callable[[Element], Point] = "center") -> None:
        """Read the derived point ``name`` from ``source`` from now on."""
        if source is self:
            raise ValueError("An element cannot bind to itself")
        if isinstance(accessor, str):
            attr = accessor

            def getter(el: Element) -> Point:
                return getattr(el, attr)
        else:
            getter = accessor
        if name in self._bindings:
            self.unbind(name)
        self._bindings[name] = Binding(name, weakref.ref(source), getter)
        source.observers.add(self, name)
        self._invalidate_binding(name)

    def unbind(self, name: str) -> None:
        binding = self._bindings.pop(name, None)
        if binding is None:
            return
        source = binding.source()
        if source is not None:
            source.observers.remove(self, name)
        self._invalidate_parent()

    def is_bound(self, name: str) -> bool:
        return name in self._bindings

    def bound_point(self, name: str) -> Point | None:
        binding = self._bindings.get(name)
        return binding.resolve() if binding is not None else None

    def is_stale(self, name: str) -> bool:
        binding = self._bindings.get(name)
        return binding is not None and binding.stale

    def _invalidate_binding(self, tag: str) -> None:
        binding = self._bindings.get(tag)
        if binding is not None:
            binding.stale = True
        self._invalidate_parent()
        self.on_binding_changed(tag)

    def on_binding_changed(self, tag: str) -> None:
        """Hook for subclasses; called synchronously when a bound source moves."""

    # ------------------------------------------------------------------
    # Change propagation
    # ------------------------------------------------------------------

    def _invalidate_parent(self) -> None:
        parent = self.parent
        if parent is not None:
            parent.invalidate()

    def _changed(self) -> None:
        self._invalidate_parent()
        invalidate_dependents(self)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def render_primitive(self) -> str:
        """Markup for this element alone (no children)."""

    def render(self) -> str:
        return self.render_primitive()

    def _render_tag(self, tag: str, attrs: Mapping[str, Any]) -> str:
        merged: dict[str, Any] = dict(attrs)
        merged.update(style_attributes(self.style))
        transform = self.render_transform()
        if transform:
            merged["transform"] = transform
        return serialize_tag(tag, merged, comment=self.name)
