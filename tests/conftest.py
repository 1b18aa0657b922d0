"""Shared test fixtures."""

from __future__ import annotations

import pytest

from svglayout import Artboard, Container, Rect
from svglayout.utils.geometry import Point


def place(element, x: float, y: float) -> None:
    """Move an element's top-left corner onto an absolute point."""
    element.position(relative_from=element.top_left, relative_to=Point(x, y))


@pytest.fixture
def artboard() -> Artboard:
    return Artboard(width=400, height=300)


@pytest.fixture
def auto_artboard() -> Artboard:
    return Artboard()


@pytest.fixture
def padded_box() -> Rect:
    return Rect(100, 60, {"margin": 5, "border": 2, "padding": "4px 8px"})


@pytest.fixture
def vertical_stack() -> Container:
    return Container(direction="vertical", spacing=20)


@pytest.fixture
def horizontal_stack() -> Container:
    return Container(direction="horizontal", spacing=10)
