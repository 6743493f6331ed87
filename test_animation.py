"""
Test Interpolator and Playback
==============================

Blending rays and rooms, easing, and one-step-at-a-time playback.

Usage:
    source .venv/bin/activate && python -m pytest test_animation.py
"""

import pytest

from lookglass_engine import (
    AnimationPlayback,
    Direction,
    ExhaustedBudget,
    InterpolationShapeError,
    Item,
    ItemKind,
    Length,
    Point,
    Polygon,
    Room,
    interpolate_ray,
    interpolate_room,
    smoothstep,
    trace,
    unfold,
)

EAST = Direction(1.0, 0.0)
CENTER = Point(5, 5)


def mirror_room(extra_items=()) -> Room:
    return Room(
        boundary=Polygon(
            (Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)),
            (True, True, True, True),
        ),
        items=(
            Item(Point(1, 1), Length(0.2), ItemKind.PLAYER),
            Item(Point(9, 9), Length(0.2), ItemKind.TARGET),
        ) + tuple(extra_items),
    )


def one_bounce_unfolding():
    room = mirror_room()
    return unfold(room, trace(room, CENTER, EAST, Length(12.0)))


def two_bounce_unfolding():
    room = mirror_room()
    return unfold(room, trace(room, CENTER, EAST, Length(20.0)))


def test_interpolate_ray_endpoints():
    print("\n" + "=" * 60)
    print("TEST: Ray interpolation")
    print("=" * 60)

    a, b = one_bounce_unfolding().series

    assert interpolate_ray(a, b, 0.0) == a
    assert interpolate_ray(a, b, 1.0) == b
    assert interpolate_ray(a, b, -0.5) == a
    assert interpolate_ray(a, b, 7.0) == b
    print("✓ t=0 gives a, t=1 gives b, t is clamped")


def test_interpolate_ray_midway():
    a, b = one_bounce_unfolding().series
    mid = interpolate_ray(a, b, 0.5)

    # Structure comes from a
    assert mid.trail == ()
    assert len(mid.bounces) == 1
    assert mid.bounces[0].edge_index == 1
    assert mid.bounces[0].mirror == a.bounces[0].mirror
    assert isinstance(mid.terminal, ExhaustedBudget)

    assert mid.start == CENTER
    assert mid.bounces[0].point == Point(10, 5)
    assert mid.end_position.x == pytest.approx(10.0)
    assert mid.end_position.y == pytest.approx(5.0)
    assert mid.budget.meters == pytest.approx(9.5)
    assert mid.direction == EAST
    print("✓ Terminal swings from (3, 5) to (17, 5) through (10, 5)")


def test_interpolate_ray_lerps_shared_mirrors():
    a, b, c = two_bounce_unfolding().series
    mid = interpolate_ray(a, b, 0.5)

    # a's second bounce and b's first bounce sit at the same path index
    assert len(mid.bounces) == 2
    assert mid.bounces[1].mirror == a.bounces[1].mirror.lerp(b.bounces[0].mirror, 0.5)
    print("✓ Mirrors at matching path indices are blended")


def test_interpolate_ray_shape_mismatch():
    room = mirror_room()
    curled = trace(room, CENTER, EAST, Length(12.0))
    straight = trace(room, CENTER, EAST, Length(3.0))

    with pytest.raises(InterpolationShapeError):
        interpolate_ray(curled, straight, 0.5)
    with pytest.raises(ValueError):
        interpolate_ray(straight, curled, 0.5)
    print("✓ Different path point counts rejected")


def test_interpolate_room():
    a, b = one_bounce_unfolding().hallway

    assert interpolate_room(a, b, 0.0) == a
    assert interpolate_room(a, b, 1.0) == b

    mid = interpolate_room(a, b, 0.5)
    for vertex in mid.boundary.vertices:
        assert vertex.x == pytest.approx(10.0)
    assert mid.boundary.mirrors == a.boundary.mirrors
    assert mid.player_item.position.x == pytest.approx(10.0)
    print("✓ Half-way through the swing the room lies on the mirror")

    decoy = Item(Point(5, 2), Length(0.2), ItemKind.DECOY)
    with pytest.raises(InterpolationShapeError):
        interpolate_room(a, mirror_room(extra_items=(decoy,)), 0.5)
    print("✓ Different item counts rejected")


def test_smoothstep():
    assert smoothstep(0.0) == 0.0
    assert smoothstep(1.0) == 1.0
    assert smoothstep(0.5) == 0.5
    assert smoothstep(-2.0) == 0.0
    assert smoothstep(3.0) == 1.0
    assert smoothstep(0.25) < 0.25
    print("✓ Easing keeps its endpoints")


def test_playback_never_skips_a_step():
    unfolding = two_bounce_unfolding()
    playback = AnimationPlayback(unfolding, step_seconds=0.8)

    assert unfolding.depth == 2
    assert not playback.finished

    playback = playback.advance(10.0)
    assert playback.depth == 1
    assert playback.progress == 0.0

    playback = playback.advance(0.4)
    assert playback.depth == 1
    assert playback.progress == pytest.approx(0.5)

    playback = playback.advance(0.4)
    assert playback.depth == 2
    assert playback.finished
    assert playback.advance(5.0) == playback
    print("✓ One step per advance, in order")


def test_playback_frames():
    unfolding = two_bounce_unfolding()
    playback = AnimationPlayback(unfolding, step_seconds=1.0)

    first = playback.frame()
    assert first.depth == 0
    assert first.rooms == unfolding.hallway[:1]
    assert first.swinging == unfolding.hallway[0]
    assert first.ray == unfolding.series[0]
    assert len(first.all_rooms) == 2

    mid = playback.advance(0.5).frame()
    assert mid.progress == pytest.approx(0.5)
    assert mid.swinging == interpolate_room(unfolding.hallway[0], unfolding.hallway[1], 0.5)

    done = playback.advance(1.0).advance(1.0).frame()
    assert done.swinging is None
    assert done.ray == unfolding.series[-1]
    assert done.rooms == unfolding.hallway
    print("✓ Frames show settled rooms, the swinging room and the ray")


def test_playback_validation():
    unfolding = one_bounce_unfolding()
    with pytest.raises(ValueError):
        AnimationPlayback(unfolding, step_seconds=0.0)
    with pytest.raises(ValueError):
        AnimationPlayback(unfolding, depth=5)
    with pytest.raises(ValueError):
        AnimationPlayback(unfolding).advance(-1.0)


def main():
    """Run all tests."""
    print("\n🔭 lookglass_engine.animation - Interpolation & Playback Tests")
    print("=" * 60)

    test_interpolate_ray_endpoints()
    test_interpolate_ray_midway()
    test_interpolate_ray_lerps_shared_mirrors()
    test_interpolate_ray_shape_mismatch()
    test_interpolate_room()
    test_smoothstep()
    test_playback_never_skips_a_step()
    test_playback_frames()
    test_playback_validation()

    print("\n" + "=" * 60)
    print("✅ ALL TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    main()
