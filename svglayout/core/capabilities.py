"""Capabilities an element can declare, checked with isinstance()."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from svglayout.models.config import ParsedSpacing
    from svglayout.utils.geometry import Point


class Boundable(abc.ABC):
    """Has a resolvable absolute center (usable as a pivot or anchor target)."""

    @property
    @abc.abstractmethod
    def center(self) -> Point: ...


class Angled(abc.ABC):
    """Has an orientation in degrees (usable as a rotation source)."""

    @property
    @abc.abstractmethod
    def angle(self) -> float: ...


class MarginAware(abc.ABC):
    """Carries margins that ``position(respect_margin=True)`` biases by."""

    @property
    @abc.abstractmethod
    def margin(self) -> ParsedSpacing: ...
