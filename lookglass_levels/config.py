"""
Configuration schema for lookglass levels.

This module defines the level file structure: room walls with mirror tags,
items, the initial aim and sight budget, and engine tolerances.
"""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from lookglass_engine.tracing.tracer import TraceSettings

VALID_ITEM_KINDS = {"player", "target", "decoy"}


@dataclass(frozen=True)
class WallConfig:
    """Boundary vertex; the edge runs from this vertex to the next one."""

    x: float
    y: float
    mirror: bool = False

    def __post_init__(self):
        """Validate wall vertex."""
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError(f"Wall vertex must be finite, got ({self.x}, {self.y})")
        if not isinstance(self.mirror, bool):
            raise ValueError(
                f"Wall mirror flag must be true or false, got {self.mirror!r}"
            )


@dataclass(frozen=True)
class ItemConfig:
    """Item placement."""

    kind: str
    x: float
    y: float
    radius: float = 0.2

    def __post_init__(self):
        """Validate item configuration."""
        if self.kind not in VALID_ITEM_KINDS:
            raise ValueError(
                f"Invalid item kind: {self.kind}. "
                f"Must be one of {sorted(VALID_ITEM_KINDS)}"
            )
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError(f"Item position must be finite, got ({self.x}, {self.y})")
        if not self.radius > 0:
            raise ValueError(f"Item radius must be > 0, got {self.radius}")


@dataclass(frozen=True)
class EngineConfig:
    """Tracer tolerances and animation timing."""

    epsilon: float = 1e-6
    max_bounces: int = 64
    step_seconds: float = 0.8

    def __post_init__(self):
        """Validate engine configuration."""
        if not 0.0 < self.epsilon < 1.0:
            raise ValueError(f"epsilon must be in (0, 1), got {self.epsilon}")

        if not 1 <= self.max_bounces <= 10000:
            raise ValueError(
                f"max_bounces must be in [1, 10000], got {self.max_bounces}"
            )

        if not self.step_seconds > 0:
            raise ValueError(f"step_seconds must be > 0, got {self.step_seconds}")

    def to_trace_settings(self) -> TraceSettings:
        return TraceSettings(epsilon=self.epsilon, max_bounces=self.max_bounces)


@dataclass(frozen=True)
class LevelConfig:
    """
    Level definition.

    Loaded from YAML and validated at construction.
    Immutable after construction (frozen dataclass).
    """

    level_id: str
    walls: List[WallConfig]
    items: List[ItemConfig]
    title: str = ""
    sight_budget: float = 12.0
    aim_degrees: float = 0.0
    engine: EngineConfig = field(default_factory=EngineConfig)

    def __post_init__(self):
        """Validate level configuration."""
        if not self.level_id:
            raise ValueError("level_id cannot be empty")

        if len(self.walls) < 3:
            raise ValueError(
                f"Level '{self.level_id}' must have at least 3 walls, "
                f"got {len(self.walls)}"
            )

        if not self.sight_budget > 0:
            raise ValueError(
                f"sight_budget must be > 0, got {self.sight_budget}"
            )

        if not math.isfinite(self.aim_degrees):
            raise ValueError(f"aim_degrees must be finite, got {self.aim_degrees}")

        for kind in ("player", "target"):
            count = sum(1 for item in self.items if item.kind == kind)
            if count != 1:
                raise ValueError(
                    f"Level '{self.level_id}' must have exactly one {kind}, got {count}"
                )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LevelConfig":
        """
        Build configuration from parsed YAML data.

        Raises:
            ValueError: If required keys are missing or values are invalid
        """
        if not isinstance(data, dict):
            raise ValueError(f"Level data must be a mapping, got {type(data).__name__}")

        missing = [key for key in ("level_id", "walls", "items") if key not in data]
        if missing:
            raise ValueError(f"Level is missing required keys: {', '.join(missing)}")

        walls = [
            WallConfig(
                x=float(w["x"]),
                y=float(w["y"]),
                mirror=w.get("mirror", False),
            )
            for w in data["walls"]
        ]

        items = [
            ItemConfig(
                kind=str(i["kind"]),
                x=float(i["x"]),
                y=float(i["y"]),
                radius=float(i.get("radius", 0.2)),
            )
            for i in data["items"]
        ]

        engine_data = data.get("engine") or {}
        engine = EngineConfig(**engine_data)

        return cls(
            level_id=str(data["level_id"]),
            title=str(data.get("title", "")),
            sight_budget=float(data.get("sight_budget", 12.0)),
            aim_degrees=float(data.get("aim_degrees", 0.0)),
            walls=walls,
            items=items,
            engine=engine,
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "LevelConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            level_id: "first_reflection"
            title: "First Reflection"
            sight_budget: 12.0
            aim_degrees: 0.0

            walls:
              - {x: 0, y: 0, mirror: false}
              - {x: 10, y: 0, mirror: true}
              - {x: 10, y: 10, mirror: false}
              - {x: 0, y: 10, mirror: false}

            items:
              - {kind: player, x: 5, y: 5, radius: 0.2}
              - {kind: target, x: 2, y: 5, radius: 0.2}

            engine:
              epsilon: 1.0e-6
              max_bounces: 64
              step_seconds: 0.8
        """
        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data)
