"""
lookglass CLI - Main entry point.

Provides command-line interface for tracing, unfolding and rendering levels.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from lookglass_engine.geometry.units import Direction, Length
from lookglass_engine.pipeline import PipelineBuilder
from lookglass_engine.tracing.hallway import unfold
from lookglass_levels.loader import LevelLoader, LoadedLevel
from lookglass_levels.registry import LevelRegistry


def load_level(level_path: str) -> LoadedLevel:
    """
    Load and validate a level file.

    Raises:
        FileNotFoundError: If the level file doesn't exist
        InvalidLevelError: If the level is invalid
    """
    return LevelLoader().load_file(Path(level_path))


def trace_level(level: LoadedLevel, degrees: Optional[float], budget: Optional[float]):
    direction = Direction.from_degrees(degrees) if degrees is not None else None
    length = Length(budget) if budget is not None else None
    return level.trace(direction, length)


def unfold_payload(level: LoadedLevel, degrees: Optional[float], budget: Optional[float]) -> Dict[str, Any]:
    ray = trace_level(level, degrees, budget)
    unfolding = unfold(level.room, ray)
    return {
        'level_id': level.level_id,
        'depth': unfolding.depth,
        'hallway': [room.to_dict() for room in unfolding.hallway],
        'series': [sub_ray.to_dict() for sub_ray in unfolding.series],
    }


def print_json(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2))


def add_aim_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--degrees",
        type=float,
        default=None,
        help="Aim angle, counter-clockwise from +x (default: level aim)"
    )
    parser.add_argument(
        "--budget",
        type=float,
        default=None,
        help="Sight budget in meters (default: level budget)"
    )


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="lookglass",
        description="lookglass CLI - Trace and unfold sight-lines in mirrored rooms",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Trace the level's default aim
  lookglass trace levels/01_first_reflection.yaml

  # Trace a different aim and budget
  lookglass trace levels/01_first_reflection.yaml --degrees 45 --budget 20

  # Hallway + uncurled series as JSON
  lookglass unfold levels/02_corner_pocket.yaml

  # Render the unfolding animation
  lookglass render levels/02_corner_pocket.yaml --output ./runs/demo --fps 30

  # List levels in a directory
  lookglass levels levels/
"""
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # trace command
    trace_cmd = subparsers.add_parser('trace', help='Print the traced sight-line as JSON')
    trace_cmd.add_argument('level', help='Path to level YAML')
    add_aim_arguments(trace_cmd)

    # unfold command
    unfold_cmd = subparsers.add_parser('unfold', help='Print hallway and uncurled series as JSON')
    unfold_cmd.add_argument('level', help='Path to level YAML')
    add_aim_arguments(unfold_cmd)

    # render command
    render_cmd = subparsers.add_parser('render', help='Render the unfolding animation to mp4')
    render_cmd.add_argument('level', help='Path to level YAML')
    add_aim_arguments(render_cmd)
    render_cmd.add_argument('--output', default=None, help='Output folder (default: ./runs/unfolding/<timestamp>)')
    render_cmd.add_argument('--fps', type=int, default=30, help='Output video FPS (default: 30)')
    render_cmd.add_argument('--width', type=int, default=1280, help='Frame width (default: 1280)')
    render_cmd.add_argument('--height', type=int, default=720, help='Frame height (default: 720)')

    # levels command
    levels_cmd = subparsers.add_parser('levels', help='List levels found in a directory')
    levels_cmd.add_argument('directory', help='Directory with level YAML files')

    # Parse arguments
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Execute command
    try:
        if args.command == 'trace':
            level = load_level(args.level)
            ray = trace_level(level, args.degrees, args.budget)
            payload = {'level_id': level.level_id, 'ray': ray.to_dict()}
            print_json(payload)

        elif args.command == 'unfold':
            level = load_level(args.level)
            print_json(unfold_payload(level, args.degrees, args.budget))

        elif args.command == 'render':
            level = load_level(args.level)
            ray = trace_level(level, args.degrees, args.budget)
            builder = (
                PipelineBuilder()
                .with_unfolding(unfold(level.room, ray))
                .with_name(level.level_id)
                .with_caption(level.title)
                .with_fps(args.fps)
                .with_resolution(args.width, args.height)
                .with_step_seconds(level.config.engine.step_seconds)
            )
            if args.output:
                builder = builder.with_output_folder(args.output)
            builder.build().process()

        elif args.command == 'levels':
            registry = LevelRegistry()
            registry.load_directory(Path(args.directory))
            for level_id in registry.list_levels():
                level = registry.get(level_id)
                print(f"{level_id}\t{level.title}")

    except Exception as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
