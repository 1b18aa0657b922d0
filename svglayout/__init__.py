"""Declarative 2D layout and coordinate resolution that emits SVG."""

from svglayout.core.bounded import Bounded, BoxAccessor, BoxKind
from svglayout.core.capabilities import Angled, Boundable, MarginAware
from svglayout.core.element import Element
from svglayout.elements.artboard import Artboard
from svglayout.elements.circle import Circle
from svglayout.elements.line import Line
from svglayout.elements.path import Path
from svglayout.elements.rect import Rect
from svglayout.errors import GeometryError, LayoutError, UnitParseError
from svglayout.layout.container import Container
from svglayout.models.config import ArtboardConfig, BoxModel, ContainerConfig, Direction
from svglayout.utils.geometry import Bounds, Point
from svglayout.utils.units import parse_unit

__all__ = [
    "Angled",
    "Artboard",
    "ArtboardConfig",
    "Boundable",
    "Bounded",
    "Bounds",
    "BoxAccessor",
    "BoxKind",
    "BoxModel",
    "Circle",
    "Container",
    "ContainerConfig",
    "Direction",
    "Element",
    "GeometryError",
    "LayoutError",
    "Line",
    "MarginAware",
    "Path",
    "Point",
    "Rect",
    "UnitParseError",
    "parse_unit",
]
