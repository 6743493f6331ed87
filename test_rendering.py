"""
Test Rendering
==============

Viewport mapping, frame rendering and the unfolding pipeline frames.

Usage:
    source .venv/bin/activate && python -m pytest test_rendering.py
"""

import numpy as np
import pytest

from lookglass_engine import (
    AnimationPlayback,
    Direction,
    Item,
    ItemKind,
    Length,
    Point,
    Polygon,
    Room,
    trace,
    unfold,
)
from lookglass_engine.pipeline import PipelineBuilder
from lookglass_engine.rendering import SceneVisualizer, Viewport


def mirror_room() -> Room:
    return Room(
        boundary=Polygon(
            (Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)),
            (True, True, True, True),
        ),
        items=(
            Item(Point(1, 1), Length(0.2), ItemKind.PLAYER),
            Item(Point(9, 9), Length(0.2), ItemKind.TARGET),
        ),
    )


def one_bounce_unfolding():
    room = mirror_room()
    return unfold(room, trace(room, Point(5, 5), Direction(1.0, 0.0), Length(12.0)))


def test_viewport_fit():
    print("\n" + "=" * 60)
    print("TEST: Viewport")
    print("=" * 60)

    viewport = Viewport.fit([mirror_room()], (120, 120), margin=10)

    assert viewport.pixels_per_meter == pytest.approx(10.0)
    assert viewport.to_pixel(Point(0, 0)) == (10, 110)
    assert viewport.to_pixel(Point(10, 10)) == (110, 10)
    assert viewport.length_to_pixels(Length(0.2)) == 2

    pixels = viewport.to_pixels(np.array([[0.0, 0.0], [10.0, 10.0]]))
    assert pixels.dtype == np.int32
    assert pixels.tolist() == [[10, 110], [110, 10]]
    print("✓ Meters map to pixels with y flipped")

    with pytest.raises(ValueError):
        Viewport.fit([], (120, 120))


def test_viewport_fits_whole_hallway():
    unfolding = one_bounce_unfolding()
    viewport = Viewport.fit(unfolding.hallway, (220, 120), margin=10)

    assert viewport.pixels_per_meter == pytest.approx(10.0)
    assert viewport.to_pixel(Point(20, 0)) == (210, 110)
    print("✓ Viewport covers the reflected rooms")


def test_render_frame():
    unfolding = one_bounce_unfolding()
    visualizer = SceneVisualizer()
    viewport = Viewport.fit(unfolding.hallway, (320, 200))

    frame = visualizer.render_frame(
        AnimationPlayback(unfolding).frame(), viewport, (320, 200), caption="demo"
    )

    assert frame.shape == (200, 320, 3)
    assert frame.dtype == np.uint8
    assert not np.all(frame == frame[0, 0])
    print("✓ Frame rendered with rooms, ray and caption")


def test_pipeline_frames(tmp_path):
    pipeline = (
        PipelineBuilder()
        .with_unfolding(one_bounce_unfolding())
        .with_output_folder(str(tmp_path))
        .with_resolution(160, 90)
        .with_fps(4)
        .with_step_seconds(1.0)
        .with_hold_seconds(0.0)
        .build()
    )

    frames = list(pipeline.frames())
    # start frame, three mid-swing frames, settled frame
    assert len(frames) == 5
    assert all(frame.shape == (90, 160, 3) for frame in frames)
    print(f"✓ {len(frames)} frames for one uncurl step")

    held = (
        PipelineBuilder()
        .with_unfolding(one_bounce_unfolding())
        .with_output_folder(str(tmp_path))
        .with_resolution(160, 90)
        .with_fps(4)
        .with_step_seconds(1.0)
        .with_hold_seconds(0.5)
        .build()
    )
    assert len(list(held.frames())) == 7


def test_builder_validation(tmp_path):
    with pytest.raises(ValueError):
        PipelineBuilder().build()

    with pytest.raises(ValueError):
        (
            PipelineBuilder()
            .with_unfolding(one_bounce_unfolding())
            .with_output_folder(str(tmp_path))
            .with_fps(0)
            .build()
        )
    print("✓ Builder fails fast")


def main():
    """Run all tests."""
    import tempfile
    from pathlib import Path

    print("\n🔭 lookglass_engine.rendering - Rendering Tests")
    print("=" * 60)

    test_viewport_fit()
    test_viewport_fits_whole_hallway()
    test_render_frame()
    with tempfile.TemporaryDirectory() as tmp:
        test_pipeline_frames(Path(tmp))
        test_builder_validation(Path(tmp))

    print("\n" + "=" * 60)
    print("✅ ALL TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    main()
