"""Exception taxonomy for the layout engine."""

from __future__ import annotations


class LayoutError(Exception):
    """Base error for tree construction and layout resolution."""


class UnitParseError(LayoutError, ValueError):
    """A length could not be parsed into pixels."""


class GeometryError(LayoutError, ValueError):
    """Degenerate geometric input (e.g. a zero-length direction vector)."""
