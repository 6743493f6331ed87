"""
Unfold Animation Demo
=====================

Demonstrates lookglass_engine usage end to end.

Example: Trace the corner_pocket level, unfold it and render the animation.

Architecture:
- levels: LevelLoader (YAML -> validated Room)
- tracing: trace + unfold (sight-line, hallway, uncurled series)
- rendering: SceneVisualizer (drawing)
- pipeline: Orchestration
"""

from pathlib import Path

import supervision as sv

from lookglass_engine import unfold
from lookglass_engine.pipeline import PipelineBuilder
from lookglass_engine.rendering import SceneVisualizer
from lookglass_levels import LevelLoader

LEVEL_PATH = Path("./levels/02_corner_pocket.yaml")


def main():
    """Render the unfolding of the corner_pocket level."""

    # 1. Load and validate the level
    level = LevelLoader().load_file(LEVEL_PATH)

    # 2. Trace the level's default aim
    ray = level.trace()

    # 3. Unfold: hallway of reflected rooms + uncurled series
    unfolding = unfold(level.room, ray)

    # 4. Create visualizer with custom colors
    visualizer = SceneVisualizer(
        mirror_color=sv.Color(r=0, g=255, b=255),
        ray_color=sv.Color(r=255, g=255, b=0),
        thickness=3,
        opacity=0.25,
    )

    # 5. Build pipeline using Builder pattern
    pipeline = (
        PipelineBuilder()
        .with_unfolding(unfolding)
        .with_name(level.level_id)
        .with_caption(level.title)
        .with_visualizer(visualizer)
        .with_step_seconds(level.config.engine.step_seconds)
        .with_fps(30)
        .build()
    )

    # 6. Render
    print("🎬 Rendering unfolding...")
    print(f"  Level: {level.title}")
    print(f"  Bounces: {len(ray.bounces)}")
    print(f"  Ends: {type(ray.terminal).__name__} at {ray.end_position}")
    print()

    output_path = pipeline.process()

    print()
    print("✓ Unfolding completed!")
    print(f"  Output: {output_path}")


if __name__ == "__main__":
    main()
