"""Paint order of the flattened element tree.

Key: (effective z-index, nesting depth, creation index). The effective
z-index is the element's own ``z_index`` (0 when unset, inherited from the
enclosing container otherwise), never lower than its container's. Roots do
not count as containers here. A container therefore paints before all of its
descendants; deeper elements paint after their ancestors inside the same
bucket, and creation order breaks the remaining ties.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from svglayout.core.element import Element

ZOrderKey = tuple[float, int, int]


def effective_z_index(element: Element) -> float:
    parent = element.parent
    if parent is None or not parent.can_be_child:
        return float(element.z_index) if element.z_index is not None else 0.0
    inherited = effective_z_index(parent)
    if element.z_index is None:
        return inherited
    return max(float(element.z_index), inherited)


def z_order_key(element: Element) -> ZOrderKey:
    return (effective_z_index(element), element.depth, element.creation_index)


def sort_by_z_order(elements: Iterable[Element]) -> list[Element]:
    return sorted(elements, key=z_order_key)
