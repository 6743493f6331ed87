"""
Level Loader - turns level configuration into validated rooms.

This module provides the LevelLoader class which builds a Room from a
LevelConfig, checks the layout (simple boundary, items inside it and clear
of mirrors), and caches loaded levels by id.

Thread Safety:
- NOT thread-safe (no internal locks)
- LevelRegistry provides synchronization for shared use
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from lookglass_engine.geometry.shapes import Point, Polygon
from lookglass_engine.geometry.units import Direction, Length
from lookglass_engine.logging import LogEvent, create_logger
from lookglass_engine.room.model import Item, ItemKind, Room
from lookglass_engine.session.state import SessionState
from lookglass_engine.tracing.sight_ray import SightRay
from lookglass_engine.tracing.tracer import TraceSettings, trace
from lookglass_levels.config import LevelConfig

logger = create_logger("levels")


class InvalidLevelError(ValueError):
    """Raised when a level configuration does not describe a playable room"""
    pass


@dataclass(frozen=True)
class LoadedLevel:
    """
    Validated level ready to play.

    Attributes:
        config: Source configuration
        room: Room built from the configuration
    """

    config: LevelConfig
    room: Room

    @property
    def level_id(self) -> str:
        return self.config.level_id

    @property
    def title(self) -> str:
        return self.config.title or self.config.level_id

    @property
    def aim(self) -> Direction:
        return Direction.from_degrees(self.config.aim_degrees)

    @property
    def budget(self) -> Length:
        return Length(self.config.sight_budget)

    @property
    def settings(self) -> TraceSettings:
        return self.config.engine.to_trace_settings()

    @property
    def start(self) -> Point:
        """Sight-lines start at the player."""
        return self.room.player_item.position

    def trace(
        self,
        direction: Optional[Direction] = None,
        budget: Optional[Length] = None,
    ) -> SightRay:
        """Trace from the player, defaulting to the level's aim and budget."""
        return trace(
            self.room,
            self.start,
            self.aim if direction is None else direction,
            self.budget if budget is None else budget,
            self.settings,
        )

    def session(self) -> SessionState:
        return SessionState.start(
            self.room,
            self.aim,
            self.budget,
            settings=self.settings,
            step_seconds=self.config.engine.step_seconds,
        )


class LevelLoader:
    """
    Level loader with in-memory caching.

    Levels are identified by level_id. Loading the same id twice returns
    the cached LoadedLevel.

    Usage:
        loader = LevelLoader()

        level = loader.load_file(Path("levels/01_first_reflection.yaml"))
        ray = level.trace()

        loader.clear_cache()
    """

    def __init__(self):
        self._cache: Dict[str, LoadedLevel] = {}

    def load(self, config: LevelConfig) -> LoadedLevel:
        """
        Build and validate a level.

        Args:
            config: Level configuration

        Returns:
            LoadedLevel (cached by level_id)

        Raises:
            InvalidLevelError: If the layout is not playable
        """
        cached = self._cache.get(config.level_id)
        if cached is not None and cached.config == config:
            return cached

        try:
            room = self.build_room(config)
        except InvalidLevelError as e:
            logger.warning(
                event=LogEvent.LEVEL_INVALID,
                message=str(e),
                metadata={'level_id': config.level_id},
                exc_info=e
            )
            raise

        level = LoadedLevel(config=config, room=room)
        self._cache[config.level_id] = level

        logger.info(
            event=LogEvent.LEVEL_LOADED,
            message="Loaded level",
            metadata={
                'level_id': config.level_id,
                'walls': len(config.walls),
                'mirrors': sum(1 for w in config.walls if w.mirror),
                'items': len(config.items),
            }
        )
        return level

    def load_file(self, yaml_path: Path) -> LoadedLevel:
        """
        Load a level from YAML.

        Raises:
            FileNotFoundError: If the file does not exist
            InvalidLevelError: If the file is not a valid level
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Level file not found: {yaml_path}")

        try:
            config = LevelConfig.from_yaml(yaml_path)
        except (ValueError, TypeError, KeyError, yaml.YAMLError) as e:
            raise InvalidLevelError(f"Invalid level file {yaml_path}: {e}") from e

        return self.load(config)

    def build_room(self, config: LevelConfig) -> Room:
        """
        Build the Room and check its layout.

        Raises:
            InvalidLevelError: If the boundary is not simple, an item lies
                outside it, or an item disk crosses an edge
        """
        try:
            boundary = Polygon(
                vertices=tuple(Point(w.x, w.y) for w in config.walls),
                mirrors=tuple(w.mirror for w in config.walls),
            )
            items = tuple(
                Item(Point(i.x, i.y), Length(i.radius), ItemKind(i.kind))
                for i in config.items
            )
            room = Room(boundary=boundary, items=items)
        except ValueError as e:
            raise InvalidLevelError(f"Level '{config.level_id}': {e}") from e

        problems = self.validate_room(room)
        if problems:
            raise InvalidLevelError(
                f"Level '{config.level_id}' is not playable: {'; '.join(problems)}"
            )
        return room

    @staticmethod
    def validate_room(room: Room) -> List[str]:
        """
        List layout problems (empty when the room is playable).
        """
        problems: List[str] = []

        if not room.boundary.is_simple():
            problems.append("boundary polygon is not simple")

        for index, item in enumerate(room.items):
            if not room.boundary.contains_point(item.position):
                problems.append(
                    f"item {index} ({item.kind.value}) is outside the boundary"
                )
                continue
            for edge_index, edge in enumerate(room.boundary.edges):
                if edge.segment.distance_to_point(item.position) <= item.radius:
                    wall = "mirror" if edge.is_mirror else "wall"
                    problems.append(
                        f"item {index} ({item.kind.value}) overlaps {wall} edge {edge_index}"
                    )

        return problems

    def get(self, level_id: str) -> Optional[LoadedLevel]:
        return self._cache.get(level_id)

    def clear_cache(self) -> None:
        """Drop every cached level."""
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)
