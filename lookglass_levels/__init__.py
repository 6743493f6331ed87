"""
lookglass levels - level definitions for the lookglass engine.

Bounded Context: Level configuration, validation and selection.

Responsibilities:
- YAML level schema (frozen dataclasses, validated at construction)
- Building validated rooms from configuration
- Thread-safe registry of playable levels
"""

from lookglass_levels.config import EngineConfig, ItemConfig, LevelConfig, WallConfig
from lookglass_levels.loader import InvalidLevelError, LevelLoader, LoadedLevel
from lookglass_levels.registry import LevelNotAvailableError, LevelRegistry

__all__ = [
    "EngineConfig",
    "ItemConfig",
    "LevelConfig",
    "WallConfig",
    "InvalidLevelError",
    "LevelLoader",
    "LoadedLevel",
    "LevelNotAvailableError",
    "LevelRegistry",
]
