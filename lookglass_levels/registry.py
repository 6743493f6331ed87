"""
LevelRegistry - Explicit level registration pattern

Bounded Context: Level selection
Responsibilities:
  - Register loaded levels by id
  - Validate level existence before lookup
  - Provide introspection (list_levels, next_level)

Threading: Thread-safe (uses lock for every access)
Pattern: Registry with explicit registration
"""

import threading
from pathlib import Path
from typing import Dict, List, Optional

from lookglass_engine.logging import LogEvent, create_logger
from lookglass_levels.loader import LevelLoader, LoadedLevel

logger = create_logger("levels")


class LevelNotAvailableError(Exception):
    """Raised when looking up a level id that was never registered"""
    pass


class LevelRegistry:
    """
    Registry of playable levels, in registration order.

    Key Features:
      - Fail-fast: Unknown ids rejected with the list of known ids
      - Ordered: next_level() walks levels in registration order
      - Thread Safety: one lock guards the ordered dict

    Example:
        registry = LevelRegistry()
        registry.load_directory(Path("levels"))

        try:
            level = registry.get("first_reflection")
        except LevelNotAvailableError as e:
            print(f"Level not available: {e}")
    """

    def __init__(self, loader: Optional[LevelLoader] = None):
        self._loader = loader or LevelLoader()
        self._levels: Dict[str, LoadedLevel] = {}
        self._lock = threading.Lock()

    def register(self, level: LoadedLevel) -> None:
        """
        Register a loaded level.

        Raises:
            ValueError: If the id is already registered
        """
        with self._lock:
            if level.level_id in self._levels:
                raise ValueError(f"Level '{level.level_id}' already registered")
            self._levels[level.level_id] = level

        logger.info(
            event=LogEvent.LEVEL_REGISTERED,
            message="Registered level",
            metadata={'level_id': level.level_id}
        )

    def load_directory(self, directory: Path, pattern: str = "*.yaml") -> List[str]:
        """
        Load and register every level file in `directory` (sorted by name).

        Returns:
            Registered level ids, in order

        Raises:
            FileNotFoundError: If the directory does not exist
            InvalidLevelError: If any level file is invalid
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise FileNotFoundError(f"Levels directory not found: {directory}")

        registered = []
        for path in sorted(directory.glob(pattern)):
            level = self._loader.load_file(path)
            self.register(level)
            registered.append(level.level_id)
        return registered

    def get(self, level_id: str) -> LoadedLevel:
        """
        Look up a level.

        Raises:
            LevelNotAvailableError: If the id is not registered
        """
        with self._lock:
            level = self._levels.get(level_id)
            available = list(self._levels)

        if level is None:
            raise LevelNotAvailableError(
                f"Level '{level_id}' not available. "
                f"Available levels: {', '.join(available)}"
            )
        return level

    def remove(self, level_id: str) -> None:
        with self._lock:
            if level_id not in self._levels:
                raise LevelNotAvailableError(f"Level '{level_id}' not available")
            del self._levels[level_id]

    def list_levels(self) -> List[str]:
        """Registered ids in registration order (snapshot)."""
        with self._lock:
            return list(self._levels)

    def next_level(self, level_id: str) -> Optional[LoadedLevel]:
        """
        Level following `level_id`, or None after the last one.

        Raises:
            LevelNotAvailableError: If `level_id` is not registered
        """
        with self._lock:
            ids = list(self._levels)
            if level_id not in self._levels:
                raise LevelNotAvailableError(
                    f"Level '{level_id}' not available. "
                    f"Available levels: {', '.join(ids)}"
                )
            position = ids.index(level_id)
            if position + 1 >= len(ids):
                return None
            return self._levels[ids[position + 1]]

    def __len__(self) -> int:
        with self._lock:
            return len(self._levels)

    def __contains__(self, level_id: str) -> bool:
        with self._lock:
            return level_id in self._levels
