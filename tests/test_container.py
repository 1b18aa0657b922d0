"""Tests for container arrangement, auto sizing and tree mutation."""

import pytest

from svglayout import Artboard, Container, LayoutError, Line, Rect
from svglayout.utils.geometry import Point
from tests.conftest import place


# ---------------------------------------------------------------------------
# Freeform
# ---------------------------------------------------------------------------


def test_freeform_auto_size_normalises_union():
    box = Container(box_model={"padding": 10})
    a = Rect(50, 50)
    b = Rect(50, 50)
    place(a, 10, 10)
    place(b, -5, 20)
    box.add_element(a)
    box.add_element(b)
    box.ensure_arranged()

    content = box.content_origin
    xs = [c.relative_position.x - content.x for c in (a, b)]
    ys = [c.relative_position.y - content.y for c in (a, b)]
    assert min(xs) == pytest.approx(0)
    assert min(ys) == pytest.approx(0)
    assert box.width == pytest.approx(65 + 20)
    assert box.height == pytest.approx(60 + 20)


def test_freeform_normalises_children_not_the_container():
    box = Container(box_model={"padding": 10})
    a = Rect(50, 50)
    place(a, 100, 80)
    box.add_element(a)
    assert box.border_box.top_left == Point(0, 0)
    assert a.top_left.is_close(box.content_box.top_left)
    assert box.width == pytest.approx(70)


def test_positioned_container_keeps_its_place_when_children_change():
    box = Container(box_model={"padding": 10})
    place(box, 100, 100)
    r = box.add_element(Rect(20, 20))
    r.position(relative_from=r.top_left, relative_to=box.content_box.top_left + Point(30, 30))
    assert box.top_left == Point(100, 100)
    assert r.top_left.is_close(Point(110, 110))
    later = Rect(5, 5)
    place(later, -40, 300)
    box.add_element(later)
    assert box.top_left == Point(100, 100)
    assert box.get_absolute_position() == Point(100, 100)


def test_freeform_scenario_container_stays_at_origin():
    box = Container(box_model={"padding": 10})
    a = Rect(50, 50)
    b = Rect(50, 50)
    place(a, 10, 10)
    place(b, -5, 20)
    box.add_element(a)
    box.add_element(b)
    assert box.get_absolute_position() == Point(0, 0)
    assert a.top_left.is_close(Point(25, 10))
    assert b.top_left.is_close(Point(10, 20))


def test_unpositioned_children_start_at_content_origin():
    box = Container(box_model={"border": 2, "padding": 8})
    r = box.add_element(Rect(20, 20))
    assert r.top_left == Point(10, 10)
    assert box.width == 40


def test_fixed_axes_are_not_normalised():
    box = Container(width=200, height=100)
    r = Rect(10, 10)
    place(r, 50, 60)
    box.add_element(r)
    assert box.width == 200
    assert box.height == 100
    assert r.top_left == Point(50, 60)


def test_empty_auto_container_is_its_chrome():
    box = Container(box_model={"padding": 5, "border": 1})
    assert box.width == 12
    assert box.height == 12


# ---------------------------------------------------------------------------
# Stacks
# ---------------------------------------------------------------------------


def test_vertical_spacing(vertical_stack):
    first = vertical_stack.add_element(Rect(40, 30))
    second = vertical_stack.add_element(Rect(40, 50))
    top = vertical_stack.content_box.top_left.y
    assert first.top_left.y - top == 0
    assert second.top_left.y - top == first.height + 20
    assert vertical_stack.height == 30 + 20 + 50
    assert vertical_stack.width == 40


def test_horizontal_stack_cross_alignment():
    row = Container(direction="horizontal", spacing=5, vertical_alignment="center")
    tall = row.add_element(Rect(10, 40))
    short = row.add_element(Rect(10, 20))
    assert tall.top_left == Point(0, 0)
    assert short.top_left == Point(15, 10)
    assert row.width == 25
    assert row.height == 40


def test_stack_main_alignment_in_fixed_container():
    row = Container(width=100, direction="horizontal", horizontal_alignment="right")
    r = row.add_element(Rect(30, 10))
    assert r.top_left == Point(70, 0)


def test_stack_spread_distributes_free_space():
    row = Container(width=100, direction="horizontal", spread=True)
    items = [row.add_element(Rect(20, 10)) for _ in range(3)]
    assert [i.top_left.x for i in items] == [0, 40, 80]


def test_stack_respects_box_model():
    col = Container(direction="vertical", spacing=4, box_model={"padding": 6, "border": 1})
    r = col.add_element(Rect(10, 10, {"margin": 3}))
    assert r.top_left == Point(7, 7)
    assert col.width == 10 + 14


def test_absolutely_positioned_children_leave_the_flow(horizontal_stack):
    a = horizontal_stack.add_element(Rect(20, 20))
    floating = horizontal_stack.add_element(Rect(20, 20))
    c = horizontal_stack.add_element(Rect(20, 20))
    floating.position(relative_from=floating.top_left, relative_to=Point(0, 100))
    assert floating.top_left == Point(0, 100)
    assert c.top_left == Point(30, 0)
    assert a.top_left == Point(0, 0)
    # Still counts toward the auto size.
    assert horizontal_stack.height == 120


def test_rotated_child_uses_transformed_extent(horizontal_stack):
    horizontal_stack.add_element(Rect(100, 10))
    r = horizontal_stack.add_element(Rect(40, 20))
    r.rotate(deg=90)
    assert r.bounding_box().min_x == pytest.approx(110)
    assert r.bounding_box().min_y == pytest.approx(0)
    assert r.transform_attribute() == "rotate(90 120 20)"


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------


def test_grid_places_row_major():
    grid = Container(direction="grid", columns=2, spacing=10)
    cells = [grid.add_element(Rect(30, 20)) for _ in range(3)]
    assert [c.top_left for c in cells] == [Point(0, 0), Point(40, 0), Point(0, 30)]
    assert grid.width == 70
    assert grid.height == 50


def test_grid_aligns_within_uniform_cells():
    grid = Container(direction="grid", columns=2, horizontal_alignment="center", vertical_alignment="bottom")
    big = grid.add_element(Rect(40, 40))
    small = grid.add_element(Rect(20, 10))
    assert big.top_left == Point(0, 0)
    assert small.top_left == Point(50, 30)


def test_grid_rejects_zero_columns():
    with pytest.raises(ValueError):
        Container(direction="grid", columns=0)


# ---------------------------------------------------------------------------
# Z-stack
# ---------------------------------------------------------------------------


def test_zstack_overlays_children_on_one_point():
    layers = Container(direction="zstack", horizontal_alignment="center", vertical_alignment="center")
    big = layers.add_element(Rect(40, 30))
    small = layers.add_element(Rect(10, 10))
    assert big.top_left == Point(0, 0)
    assert small.top_left == Point(15, 10)
    assert layers.width == 40
    assert layers.height == 30


def test_zstack_layer_offset_fans_out_a_deck():
    deck = Container(direction="zstack", layer_offset=5, box_model={"padding": 2})
    cards = [deck.add_element(Rect(20, 20)) for _ in range(3)]
    assert [c.top_left for c in cards] == [Point(2, 2), Point(7, 7), Point(12, 12)]
    assert deck.width == 20 + 10 + 4


def test_zstack_right_bottom_fans_inwards():
    deck = Container(
        width=100,
        height=50,
        direction="zstack",
        horizontal_alignment="right",
        vertical_alignment="bottom",
        layer_offset="4px",
    )
    first = deck.add_element(Rect(30, 10))
    second = deck.add_element(Rect(30, 10))
    assert first.top_left == Point(70, 40)
    assert second.top_left == Point(66, 36)


def test_zstack_centered_deck_fits_the_fan():
    deck = Container(direction="zstack", horizontal_alignment="center", layer_offset=3)
    first = deck.add_element(Rect(10, 10))
    second = deck.add_element(Rect(10, 10))
    assert deck.width == 16
    assert first.top_left.x == 3
    assert second.top_left.x == 6
    assert second.top_right.x <= deck.width


def test_zstack_skips_positioned_children():
    layers = Container(direction="zstack")
    anchored = layers.add_element(Rect(10, 10))
    badge = layers.add_element(Rect(4, 4))
    badge.position(relative_from=badge.top_left, relative_to=Point(30, 0))
    assert anchored.top_left == Point(0, 0)
    assert badge.top_left == Point(30, 0)
    assert layers.width == 34


def test_zstack_rejects_negative_layer_offset():
    with pytest.raises(ValueError):
        Container(direction="zstack", layer_offset=-1)


# ---------------------------------------------------------------------------
# Arrangement lifecycle
# ---------------------------------------------------------------------------


def test_absolute_is_parent_plus_relative(vertical_stack):
    place(vertical_stack, 30, 40)
    child = vertical_stack.add_element(Rect(10, 10))
    vertical_stack.add_element(Rect(10, 10))
    assert child.get_absolute_position() == vertical_stack.get_absolute_position() + child.relative_position


def test_arrangement_is_idempotent():
    box = Container(box_model={"padding": 3})
    for x, y in [(5, 5), (-20, 40), (60, -8)]:
        r = Rect(15, 15)
        place(r, x, y)
        box.add_element(r)
    place(box, 7, 9)
    box.ensure_arranged()
    first = [c.relative_position for c in box.children], box.width, box.height, box.get_absolute_position()
    box.invalidate()
    box.ensure_arranged()
    second = [c.relative_position for c in box.children], box.width, box.height, box.get_absolute_position()
    assert box.get_absolute_position() == Point(7, 9)
    assert first == second


def test_mutation_invalidates_ancestors():
    outer = Container()
    inner = outer.add_element(Container(direction="vertical"))
    leaf = inner.add_element(Rect(10, 10))
    outer.ensure_arranged()
    assert outer.is_arranged and inner.is_arranged
    leaf.position(relative_from=Point(0, 0), relative_to=Point(5, 0))
    assert not inner.is_arranged
    assert not outer.is_arranged


def test_moving_container_moves_descendants(vertical_stack):
    r = vertical_stack.add_element(Rect(10, 10))
    place(vertical_stack, 100, 0)
    assert r.top_left == Point(100, 0)


def test_child_added_to_positioned_parent_keeps_world_position():
    box = Container(width=100, height=100)
    place(box, 200, 200)
    r = Rect(10, 10)
    place(r, 250, 260)
    box.add_element(r)
    assert r.top_left == Point(250, 260)
    assert r.relative_position == Point(50, 60)
    # Converted once: moving the parent afterwards carries the child.
    place(box, 0, 0)
    assert r.top_left == Point(50, 60)


def test_reparenting_preserves_absolute_intent():
    first = Container(width=50, height=50)
    second = Container(width=50, height=50)
    place(second, 300, 0)
    r = Rect(5, 5)
    first.add_element(r)
    place(r, 20, 20)
    second.add_element(r)
    assert r.parent is second
    assert r not in first.children
    assert r.top_left == Point(20, 20)


def test_remove_element_keeps_world_position():
    box = Container(width=100, height=100)
    place(box, 10, 10)
    r = box.add_element(Rect(5, 5))
    box.remove_element(r)
    assert r.parent is None
    assert r.top_left == Point(10, 10)
    with pytest.raises(LayoutError):
        box.remove_element(r)


def test_add_element_rejects_cycles_and_roots():
    outer = Container()
    inner = outer.add_element(Container())
    with pytest.raises(LayoutError):
        inner.add_element(outer)
    with pytest.raises(LayoutError):
        outer.add_element(outer)
    with pytest.raises(LayoutError):
        outer.add_element(Artboard())


def test_adding_twice_is_a_no_op():
    box = Container()
    r = box.add_element(Rect(5, 5))
    box.add_element(r)
    assert box.children == (r,)


def test_descendants_depth_first():
    outer = Container()
    a = outer.add_element(Rect(1, 1))
    inner = outer.add_element(Container())
    b = inner.add_element(Rect(1, 1))
    c = outer.add_element(Rect(1, 1))
    assert list(outer.descendants()) == [a, inner, b, c]


def test_resize_switches_axis_mode():
    box = Container()
    box.add_element(Rect(30, 30))
    box.resize(width=100)
    assert not box.is_auto_width
    assert box.width == 100
    box.resize(width="auto")
    assert box.width == 30


def test_bound_line_follows_stack_layout(vertical_stack):
    a = vertical_stack.add_element(Rect(20, 20))
    b = vertical_stack.add_element(Rect(20, 20))
    link = vertical_stack.add_element(Line.between(a, b))
    assert link.start == Point(10, 10)
    assert link.end == Point(10, 50)
    assert vertical_stack.height == 60


def test_container_background_is_drawn_at_border_box():
    box = Container(width=40, height=30, style={"fill": "#eee"})
    place(box, 5, 5)
    assert box.render_primitive() == '<rect x="5" y="5" width="40" height="30" fill="#eee" />'
    assert Container(width=10, height=10).render_primitive() == ""


def test_bound_line_is_left_out_of_freeform_normalisation():
    source, target = Rect(2, 2), Rect(2, 2)
    place(source, -50, -50)
    place(target, -20, -50)
    box = Container()
    r = Rect(10, 10)
    place(r, 5, 5)
    box.add_element(r)
    link = box.add_element(Line.between(source, target))
    box.ensure_arranged()
    first = r.relative_position, link.relative_position, box.width, box.height
    box.invalidate()
    box.ensure_arranged()
    assert (r.relative_position, link.relative_position, box.width, box.height) == first
    assert r.top_left == Point(0, 0)
    assert box.width == 10
    assert link.start == source.center
