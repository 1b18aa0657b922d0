"""Arrangement registry: each direction's strategy is a standalone function registered via decorator.

Usage:
    @arrangement(direction=Direction.VERTICAL, description="Stack top to bottom")
    def arrange_vertical(container: Container) -> ArrangementResult:
        ...

Strategies must be pure over the current tree: they read children and the
container's fixed configuration and return placements, never mutate.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from svglayout.errors import LayoutError
from svglayout.models.config import Direction

if TYPE_CHECKING:
    from svglayout.layout.container import Container
    from svglayout.layout.result import ArrangementResult

logger = logging.getLogger(__name__)

ArrangeFn = Callable[["Container"], "ArrangementResult"]

_STRATEGY_MODULES = ("freeform", "stack", "grid", "zstack")


@dataclass
class ArrangementSpec:
    direction: Direction
    fn: ArrangeFn
    description: str = ""


class ArrangementRegistry:
    """Registry of arrangement strategies keyed by direction."""

    def __init__(self) -> None:
        self._strategies: dict[Direction, ArrangementSpec] = {}

    def register(self, spec: ArrangementSpec) -> None:
        if spec.direction in self._strategies:
            raise ValueError(f"Duplicate arrangement for direction: {spec.direction.value}")
        self._strategies[spec.direction] = spec
        logger.debug("Registered arrangement %s", spec.direction.value)

    def get(self, direction: Direction) -> ArrangementSpec:
        try:
            return self._strategies[direction]
        except KeyError:
            raise LayoutError(f"No arrangement registered for direction {direction.value!r}") from None

    def directions(self) -> list[Direction]:
        return sorted(self._strategies, key=lambda d: d.value)

    @property
    def count(self) -> int:
        return len(self._strategies)


# Module-level singleton
_registry = ArrangementRegistry()
_loaded = False


def get_registry() -> ArrangementRegistry:
    """Return the registry, importing the built-in strategy modules on first use."""
    global _loaded
    if not _loaded:
        _loaded = True
        for module_name in _STRATEGY_MODULES:
            importlib.import_module(f"svglayout.layout.{module_name}")
    return _registry


def arrangement(*, direction: Direction, description: str = ""):
    """Decorator to register an arrangement strategy."""

    def decorator(fn: ArrangeFn) -> ArrangeFn:
        _registry.register(ArrangementSpec(direction=direction, fn=fn, description=description))
        return fn

    return decorator
