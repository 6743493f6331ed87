"""
Test Reflection Tracer
======================

Sight-line tracing through mirror and solid rooms.

Usage:
    source .venv/bin/activate && python -m pytest test_tracer.py
"""

import pytest

from lookglass_engine import (
    Direction,
    ExhaustedBudget,
    HitItem,
    Item,
    ItemKind,
    Length,
    Point,
    Polygon,
    Room,
    TraceSettings,
    trace,
)
from lookglass_engine.tracing import ReflectionTracer

EAST = Direction(1.0, 0.0)
CENTER = Point(5, 5)


def square_room(mirrors=(True, True, True, True), extra_items=(), player=Point(1, 1)) -> Room:
    """10 m x 10 m room; edge 1 is the east wall."""
    return Room(
        boundary=Polygon(
            (Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)),
            mirrors,
        ),
        items=(
            Item(player, Length(0.2), ItemKind.PLAYER),
            Item(Point(9, 9), Length(0.2), ItemKind.TARGET),
        ) + tuple(extra_items),
    )


def test_budget_runs_out_before_any_wall():
    """Center aiming east with 3 m: stops at (8, 5), no bounces."""
    print("\n" + "=" * 60)
    print("TEST: Exhausted budget")
    print("=" * 60)

    ray = trace(square_room(), CENTER, EAST, Length(3.0))

    assert isinstance(ray.terminal, ExhaustedBudget)
    assert ray.bounces == ()
    assert ray.end_position == Point(8, 5)
    assert ray.end_item is None
    assert ray.length == Length(3.0)
    print(f"✓ Terminal {ray.end_position}, length {ray.length}")


def test_single_bounce_off_east_mirror():
    """Center aiming east with 12 m: bounce at (10, 5), stop at (3, 5)."""
    ray = trace(square_room(), CENTER, EAST, Length(12.0))

    assert len(ray.bounces) == 1
    bounce = ray.bounces[0]
    assert bounce.point == Point(10, 5)
    assert bounce.edge_index == 1
    assert bounce.mirror == square_room().boundary.edge(1).segment

    assert isinstance(ray.terminal, ExhaustedBudget)
    assert ray.end_position.x == pytest.approx(3.0)
    assert ray.end_position.y == pytest.approx(5.0)
    assert ray.length.meters == pytest.approx(12.0)
    assert ray.path == (CENTER, Point(10, 5), ray.end_position)
    print("✓ One bounce, terminal (3, 5)")


def test_solid_walls_stop_the_ray():
    """Solid-only room: stops at min(budget, distance to wall), zero bounces."""
    room = square_room(mirrors=(False, False, False, False))

    ray = trace(room, CENTER, EAST, Length(12.0))
    assert ray.bounces == ()
    assert isinstance(ray.terminal, ExhaustedBudget)
    assert ray.end_position == Point(10, 5)
    assert ray.length == Length(5.0)

    short = trace(room, CENTER, EAST, Length(2.5))
    assert short.end_position == Point(7.5, 5)
    print("✓ Solid walls end the sight-line")


def test_item_on_path_is_hit():
    """A small item before any wall terminates the ray on its surface."""
    decoy = Item(Point(7, 5), Length(0.1), ItemKind.DECOY)
    ray = trace(square_room(extra_items=(decoy,)), CENTER, EAST, Length(12.0))

    assert isinstance(ray.terminal, HitItem)
    assert ray.end_item == decoy
    assert ray.bounces == ()
    assert ray.end_position.x == pytest.approx(6.9)
    assert ray.end_position.y == pytest.approx(5.0)
    print("✓ HitItem on the decoy")


def test_item_wins_tie_against_wall():
    """Item surface at the same distance as a solid wall: the item wins."""
    touching = Item(Point(10.1, 5), Length(0.1), ItemKind.DECOY)
    room = square_room(mirrors=(True, False, True, True), extra_items=(touching,))

    ray = trace(room, CENTER, EAST, Length(12.0))

    assert isinstance(ray.terminal, HitItem)
    assert ray.end_item == touching
    assert ray.end_position.x == pytest.approx(10.0)
    print("✓ Tie resolved in favor of the item")


def test_player_sees_itself_after_bounce():
    """The player is invisible on the way out but seen on the way back."""
    room = square_room(player=CENTER)
    ray = trace(room, CENTER, EAST, Length(12.0))

    assert len(ray.bounces) == 1
    assert isinstance(ray.terminal, HitItem)
    assert ray.end_item.kind is ItemKind.PLAYER
    assert ray.end_position.x == pytest.approx(5.2)
    assert ray.end_position.y == pytest.approx(5.0)
    print("✓ Self-portrait after one bounce")


def test_length_never_exceeds_budget():
    room = square_room()
    for degrees in (13.0, 33.0, 71.0, 122.0, 200.0, 301.0):
        budget = Length(40.0)
        ray = trace(room, CENTER, Direction.from_degrees(degrees), budget)
        assert ray.length.meters <= budget.meters + 1e-6
        if isinstance(ray.terminal, ExhaustedBudget):
            assert ray.length.meters == pytest.approx(budget.meters, abs=1e-6)
    print("✓ length <= budget for a fan of aims")


def test_loop_guard_stops_at_last_position():
    """With a bounce cap of 3 the ray stops where the third bounce happened."""
    settings = TraceSettings(max_bounces=3)
    ray = trace(square_room(), CENTER, EAST, Length(100.0), settings)

    assert len(ray.bounces) == 3
    assert isinstance(ray.terminal, ExhaustedBudget)
    assert ray.end_position.x == pytest.approx(10.0)
    assert ray.end_position.y == pytest.approx(5.0)
    print("✓ Loop guard returns ExhaustedBudget at the last bounce")


def corner_room(mirrors) -> Room:
    """Square with no item on either diagonal."""
    return Room(
        boundary=Polygon(
            (Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)),
            mirrors,
        ),
        items=(
            Item(Point(1, 5), Length(0.2), ItemKind.PLAYER),
            Item(Point(3, 8), Length(0.2), ItemKind.TARGET),
        ),
    )


def inside_or_on_boundary(room: Room, point: Point) -> bool:
    if room.boundary.contains_point(point):
        return True
    return any(
        edge.segment.distance_to_point(point).meters <= 1e-9
        for edge in room.boundary.edges
    )


def test_mirror_corner_reflects_across_both_edges():
    """Aiming into a corner between two mirrors sends the ray straight back."""
    room = corner_room((True, True, True, True))
    ray = trace(room, CENTER, Direction.from_degrees(45.0), Length(12.0))

    assert len(ray.bounces) == 2
    assert sorted(b.edge_index for b in ray.bounces) == [1, 2]
    for bounce in ray.bounces:
        assert bounce.point.x == pytest.approx(10.0)
        assert bounce.point.y == pytest.approx(10.0)

    assert isinstance(ray.terminal, ExhaustedBudget)
    back = 12.0 - 50 ** 0.5
    assert ray.end_position.x == pytest.approx(10.0 - back / 2 ** 0.5, abs=1e-6)
    assert ray.end_position.y == pytest.approx(10.0 - back / 2 ** 0.5, abs=1e-6)
    assert inside_or_on_boundary(room, ray.end_position)
    assert ray.length.meters == pytest.approx(12.0)
    print(f"✓ Corner bounce returns to {ray.end_position}")


def test_solid_corner_stops_the_ray():
    """A corner shared by a mirror and a solid wall ends the sight-line there."""
    for mirrors in ((True, True, False, True), (True, False, True, True)):
        room = corner_room(mirrors)
        ray = trace(room, CENTER, Direction.from_degrees(45.0), Length(12.0))

        assert ray.bounces == ()
        assert isinstance(ray.terminal, ExhaustedBudget)
        assert ray.end_position.x == pytest.approx(10.0)
        assert ray.end_position.y == pytest.approx(10.0)
        assert inside_or_on_boundary(room, ray.end_position)
    print("✓ Mirror/solid corner stops at the vertex")


def test_corner_hits_stay_in_the_room():
    """Long budgets through mirror corners never leave the boundary."""
    room = corner_room((True, True, True, True))
    for degrees in (45.0, 135.0, 225.0, 315.0):
        ray = trace(room, CENTER, Direction.from_degrees(degrees), Length(60.0))
        assert len(ray.bounces) >= 2
        for point in ray.path:
            assert inside_or_on_boundary(room, point)
    print("✓ All corner paths stay inside the room")


def test_zero_length_edge_is_never_hit():
    room = Room(
        boundary=Polygon(
            (Point(0, 0), Point(10, 0), Point(10, 0), Point(10, 10), Point(0, 10)),
            (False, True, False, False, False),
        ),
        items=(
            Item(Point(1, 1), Length(0.2), ItemKind.PLAYER),
            Item(Point(9, 9), Length(0.2), ItemKind.TARGET),
        ),
    )
    ray = trace(room, CENTER, Direction.from_vector(5, -5), Length(20.0))

    assert ray.bounces == ()
    assert isinstance(ray.terminal, ExhaustedBudget)
    assert ray.end_position.x == pytest.approx(10.0)
    assert ray.end_position.y == pytest.approx(0.0, abs=1e-9)
    print("✓ Degenerate edge skipped, no exception")


def test_trace_is_deterministic():
    room = square_room()
    direction = Direction.from_degrees(37.0)
    a = trace(room, CENTER, direction, Length(50.0))
    b = ReflectionTracer(room).trace(CENTER, direction, Length(50.0))
    assert a == b
    print("✓ Same inputs, same ray")


def test_trace_settings_validation():
    with pytest.raises(ValueError):
        TraceSettings(epsilon=0.0)
    with pytest.raises(ValueError):
        TraceSettings(max_bounces=-1)


def test_sight_ray_serialization():
    ray = trace(square_room(), CENTER, EAST, Length(12.0))
    data = ray.to_dict()

    assert data['terminal']['kind'] == "exhausted_budget"
    assert data['bounces'][0]['edge_index'] == 1
    assert data['budget'] == 12.0
    assert data['trail'] == []
    print("✓ SightRay.to_dict")


def main():
    """Run all tests."""
    print("\n🔭 lookglass_engine.tracing - Tracer Tests")
    print("=" * 60)

    test_budget_runs_out_before_any_wall()
    test_single_bounce_off_east_mirror()
    test_solid_walls_stop_the_ray()
    test_item_on_path_is_hit()
    test_item_wins_tie_against_wall()
    test_player_sees_itself_after_bounce()
    test_length_never_exceeds_budget()
    test_loop_guard_stops_at_last_position()
    test_mirror_corner_reflects_across_both_edges()
    test_solid_corner_stops_the_ray()
    test_corner_hits_stay_in_the_room()
    test_zero_length_edge_is_never_hit()
    test_trace_is_deterministic()
    test_trace_settings_validation()
    test_sight_ray_serialization()

    print("\n" + "=" * 60)
    print("✅ ALL TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    main()
