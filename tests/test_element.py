"""Tests for element positioning, transforms and tree queries."""

import logging

import pytest

from svglayout import Container, GeometryError, Line, Rect
from svglayout.core.transform import TransformKind
from svglayout.utils.geometry import Point
from tests.conftest import place


def test_new_element_sits_at_origin():
    r = Rect(10, 10)
    assert r.get_absolute_position() == Point(0, 0)
    assert not r.is_absolutely_positioned
    assert r.parent is None
    assert r.depth == 0


def test_position_moves_reference_point_onto_target():
    r = Rect(40, 20)
    r.position(relative_from=r.center, relative_to=Point(100, 100))
    assert r.center.is_close(Point(100, 100))
    assert r.top_left.is_close(Point(80, 90))
    assert r.is_absolutely_positioned


def test_position_offsets_accept_units():
    r = Rect(10, 10)
    r.position(relative_from=r.top_left, relative_to=Point(0, 0), x="1rem", y="-2px")
    assert r.top_left == Point(16, -2)


def test_position_accepts_tuples_and_elements():
    anchor = Rect(20, 20)
    place(anchor, 50, 50)
    r = Rect(10, 10)
    r.position(relative_from=r.center, relative_to=anchor)
    assert r.center.is_close(Point(60, 60))
    r.position(relative_from=(0, 0), relative_to=("10px", 0))
    assert r.center.is_close(Point(70, 60))


def test_position_accumulates():
    r = Rect(10, 10)
    r.position(relative_from=Point(0, 0), relative_to=Point(5, 0))
    r.position(relative_from=Point(0, 0), relative_to=Point(5, 5))
    assert r.top_left == Point(10, 5)


def test_center_round_trip_inside_container():
    box = Container(width=300, height=200, box_model={"padding": 12})
    place(box, 30, 40)
    r = box.add_element(Rect(25, 15))
    target = Point(123.25, -7.5)
    r.position(relative_from=r.center, relative_to=target)
    assert r.center.is_close(target)


def test_respect_margin_biases_outward():
    r = Rect(10, 10, {"margin": {"left": 3, "right": 4, "top": 5, "bottom": 6}})
    r.position(relative_from=Point(0, 0), relative_to=Point(10, 10), respect_margin=True)
    assert r.top_left == Point(13, 15)
    r.position(relative_from=Point(0, 0), relative_to=Point(-10, -10), respect_margin=True)
    assert r.top_left == Point(-1, -1)


def test_respect_margin_is_ignored_for_elements_without_margin():
    line = Line(end=(10, 0))
    line.position(relative_from=Point(0, 0), relative_to=Point(5, 5), respect_margin=True)
    assert line.start == Point(5, 5)


def test_translate_along_vector():
    r = Rect(10, 10)
    r.translate(along=Point(3, 4), distance=10)
    assert r.top_left.is_close(Point(6, 8))
    assert r.is_absolutely_positioned


def test_translate_zero_vector_raises():
    r = Rect(10, 10)
    with pytest.raises(GeometryError):
        r.translate(along=Point(0, 0), distance=5)
    assert r.top_left == Point(0, 0)


def test_rotate_with_explicit_angle_accumulates():
    r = Rect(10, 10)
    r.rotate(deg=30)
    r.rotate(deg=15)
    assert [t.kind for t in r.transforms] == [TransformKind.ROTATION, TransformKind.ROTATION]
    assert r.rotation == 45


def test_rotate_takes_angle_from_angled_reference():
    line = Line(end=(0, 10))
    r = Rect(10, 10)
    r.rotate(relative_to=line)
    assert r.rotation == pytest.approx(90)
    # Line is also Boundable, so it pivots about the line's midpoint.
    assert r.transform_attribute() == "rotate(90 0 5)"


def test_rotate_without_angle_warns_and_does_nothing(caplog):
    r = Rect(10, 10)
    with caplog.at_level(logging.WARNING, logger="svglayout.core.element"):
        r.rotate()
    assert r.transforms == ()
    assert "no angle" in caplog.text


def test_rotate_default_pivot_is_own_center():
    r = Rect(40, 20)
    place(r, 100, 50)
    r.rotate(deg=90)
    assert r.transform_attribute() == "rotate(90 120 60)"


def test_rotate_about_literal_point_stays_fixed():
    r = Rect(10, 10)
    r.rotate(relative_to=Point(5, 0), deg=45)
    place(r, 100, 100)
    assert r.transform_attribute() == "rotate(45 5 0)"


def test_literal_pivot_is_absolute_inside_a_moved_container():
    box = Container(width=50, height=50)
    place(box, 20, 30)
    r = box.add_element(Rect(10, 10))
    r.rotate(relative_to=Point(0, 0), deg=90)
    bb = r.bounding_box()
    # (20..30, 30..40) rotated 90 degrees about the world origin.
    assert bb.min_x == pytest.approx(-40)
    assert bb.max_x == pytest.approx(-30)
    assert bb.min_y == pytest.approx(20)
    assert bb.max_y == pytest.approx(30)
    assert r.local_bounds().translate(box.get_absolute_position()).min_x == pytest.approx(-40)


def test_container_transforms_prefix_descendant_transforms():
    box = Container(width=100, height=100)
    inner = box.add_element(Rect(10, 10))
    inner.rotate(deg=45)
    box.rotate(deg=90)
    assert box.render_transform() == "rotate(90 50 50)"
    assert inner.render_transform() == "rotate(90 50 50) rotate(45 5 5)"
    assert 'transform="rotate(90 50 50) rotate(45 5 5)"' in inner.render_primitive()


def test_unrotated_child_of_rotated_container_is_carried():
    box = Container(width=40, height=20)
    child = box.add_element(Rect(10, 10))
    box.rotate(deg=180)
    assert child.transforms == ()
    assert 'transform="rotate(180 20 10)"' in child.render_primitive()


def test_rotate_about_other_element_center_is_lazy():
    hub = Rect(20, 20)
    r = Rect(10, 10)
    r.rotate(relative_to=hub, deg=180)
    place(hub, 50, 50)
    assert r.transform_attribute() == "rotate(180 60 60)"


def test_scale_and_skew_emit_pivoted_transforms():
    r = Rect(10, 10)
    r.scale(2)
    r.skew(ax=10)
    assert r.transform_attribute() == (
        "translate(5 5) scale(2 2) translate(-5 -5) translate(5 5) skewX(10) translate(-5 -5)"
    )


def test_bounding_box_includes_rotation():
    r = Rect(40, 20)
    r.rotate(deg=90)
    bb = r.bounding_box()
    assert bb.width == pytest.approx(20)
    assert bb.height == pytest.approx(40)
    assert bb.center.is_close(Point(20, 10))


def test_to_world_applies_transforms():
    r = Rect(20, 20)
    r.rotate(deg=90)
    assert r.to_world(Point(20, 10)).is_close(Point(10, 20))


def test_name_is_emitted_as_comment():
    r = Rect(10, 10, name="header")
    assert r.render().startswith("<!-- header -->\n<rect ")


def test_tree_queries():
    outer = Container()
    inner = outer.add_element(Container())
    leaf = inner.add_element(Rect(5, 5))
    assert leaf.parent is inner
    assert leaf.depth == 2
    assert leaf.root is outer
    assert list(leaf.ancestors()) == [inner, outer]


def test_creation_index_is_monotonic():
    a, b = Rect(1, 1), Rect(1, 1)
    assert a.creation_index < b.creation_index


def test_center_round_trip_of_auto_sized_container():
    box = Container(box_model={"padding": 4})
    r = box.add_element(Rect(20, 10))
    r.position(relative_from=r.top_left, relative_to=Point(50, 50))
    target = Point(-17.5, 33)
    box.position(relative_from=box.center, relative_to=target)
    assert box.center.is_close(target)
    assert r.top_left.is_close(box.content_box.top_left)
