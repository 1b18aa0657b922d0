"""Reactive bindings between elements.

A dependent element registers that one of its derived points is read from a
source element. The source keeps a list of ``(weak handle, tag)`` observers.
Mutating the source calls ``invalidate_dependents``, which walks observers
depth-first and marks each tag stale; the dependent recomputes the value on
its next read.
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, NamedTuple

from svglayout.errors import LayoutError

if TYPE_CHECKING:
    from svglayout.core.element import Element
    from svglayout.utils.geometry import Point

logger = logging.getLogger(__name__)

Accessor = Callable[["Element"], "Point"]


@dataclass
class Binding:
    name: str
    source: weakref.ref[Element]
    accessor: Accessor
    stale: bool = True

    def resolve(self) -> Point:
        src = self.source()
        if src is None:
            raise LayoutError(f"Binding {self.name!r} lost its source element")
        value = self.accessor(src)
        self.stale = False
        return value


class Observer(NamedTuple):
    handle: weakref.ref[Element]
    tag: str


class ObserverList:
    """Dependents of one source element. Dead handles are dropped on iteration."""

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def add(self, dependent: Element, tag: str) -> None:
        if any(o.handle() is dependent and o.tag == tag for o in self._observers):
            return
        self._observers.append(Observer(weakref.ref(dependent), tag))

    def remove(self, dependent: Element, tag: str) -> None:
        self._observers = [
            o for o in self._observers if not (o.handle() is dependent and o.tag == tag)
        ]

    def __iter__(self) -> Iterator[Observer]:
        self._observers = [o for o in self._observers if o.handle() is not None]
        return iter(list(self._observers))

    def __len__(self) -> int:
        return sum(1 for o in self._observers if o.handle() is not None)


def invalidate_dependents(source: Element) -> int:
    """Mark every transitive dependent of ``source`` stale, depth-first.

    Returns the number of (dependent, tag) pairs visited. Each pair is visited
    at most once per dispatch, so binding cycles terminate.
    """
    visited: set[tuple[int, str]] = set()

    def visit(element: Element) -> None:
        for observer in element.observers:
            dependent = observer.handle()
            if dependent is None:
                continue
            key = (id(dependent), observer.tag)
            if key in visited:
                continue
            visited.add(key)
            dependent._invalidate_binding(observer.tag)
            visit(dependent)

    visit(source)
    if visited:
        logger.debug("Invalidated %d binding(s) from %r", len(visited), source)
    return len(visited)
