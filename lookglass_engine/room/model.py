"""
Room Model Module
=================

Static scene description: tagged wall polygon plus items.

Design:
- Immutable values (frozen dataclass)
- Whole-room transforms return new rooms, never mutate
- Item order and vertex order are stable across transforms, so
  two rooms derived from the same level can be blended pairwise
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

import numpy as np

from lookglass_engine.geometry.caster import RayCaster
from lookglass_engine.geometry.shapes import (
    Edge,
    InterpolationShapeError,
    Point,
    Polygon,
    Segment,
    reflect_points,
)
from lookglass_engine.geometry.units import Length, closeness_tolerance


class ItemKind(str, Enum):
    """What an item is to the player."""
    PLAYER = "player"
    TARGET = "target"
    DECOY = "decoy"


@dataclass(frozen=True)
class Item:
    """
    Disk-shaped object standing in the room.

    Attributes:
        position: Disk center
        radius: Disk radius (> 0)
        kind: Player, target or decoy

    Invariants:
        - radius > 0
    """

    position: Point
    radius: Length
    kind: ItemKind

    def __post_init__(self):
        """Validate invariants."""
        if not isinstance(self.radius, Length):
            raise TypeError(f"radius must be a Length, got {type(self.radius)}")
        if self.radius.meters <= 0.0:
            raise ValueError(f"Item radius must be > 0, got {self.radius}")
        object.__setattr__(self, 'kind', ItemKind(self.kind))

    @property
    def tolerance(self) -> Length:
        """Closeness tolerance derived from this item's size."""
        return closeness_tolerance(self.radius)

    def reflected_across(self, line: Segment) -> "Item":
        return Item(self.position.reflected_across(line), self.radius, self.kind)

    def lerp(self, other: "Item", t: float) -> "Item":
        """Blend position and radius; the kind comes from self for t < 1."""
        return Item(
            position=self.position.lerp(other.position, t),
            radius=self.radius.lerp(other.radius, t),
            kind=self.kind if t < 1.0 else other.kind,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'x': self.position.x,
            'y': self.position.y,
            'radius': self.radius.meters,
        }


@dataclass(frozen=True)
class Room:
    """
    Immutable room: boundary polygon plus items.

    Attributes:
        boundary: Wall polygon with mirror/solid tags
        items: Items in a stable order

    Invariants:
        - exactly one PLAYER item
        - exactly one TARGET item
    """

    boundary: Polygon
    items: Tuple[Item, ...]

    def __post_init__(self):
        """Validate invariants."""
        items = tuple(self.items)
        for kind in (ItemKind.PLAYER, ItemKind.TARGET):
            count = sum(1 for item in items if item.kind is kind)
            if count != 1:
                raise ValueError(
                    f"Room must contain exactly one {kind.value} item, got {count}"
                )
        object.__setattr__(self, 'items', items)

    # ---------------------------------------------------------------- queries

    @property
    def all_items(self) -> Tuple[Item, ...]:
        return self.items

    @property
    def player_item(self) -> Item:
        return next(item for item in self.items if item.kind is ItemKind.PLAYER)

    @property
    def target_item(self) -> Item:
        return next(item for item in self.items if item.kind is ItemKind.TARGET)

    @property
    def wall_edges(self) -> Tuple[Edge, ...]:
        return self.boundary.edges

    @property
    def mirror_edges(self) -> Tuple[Edge, ...]:
        return tuple(edge for edge in self.boundary.edges if edge.is_mirror)

    def item_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Item centers (Mx2) and radii (M) as float arrays."""
        return RayCaster.item_arrays(self.items)

    # ------------------------------------------------------------- transforms

    def reflect_across(self, edge: Edge | Segment) -> "Room":
        """
        Mirror the whole room across the supporting line of `edge`.

        Every boundary vertex and every item position is reflected. Edge
        indices and tags are preserved; only the winding flips.
        """
        line = edge.segment if isinstance(edge, Edge) else edge
        boundary = self.boundary.reflected_across(line)
        centers, _ = self.item_arrays()
        reflected = reflect_points(centers, line)
        items = tuple(
            Item(Point.from_array(row), item.radius, item.kind)
            for row, item in zip(reflected, self.items)
        )
        return Room(boundary=boundary, items=items)

    def interpolate_from(self, other: "Room", t: float) -> "Room":
        """
        Blend from `other` (t=0) to this room (t=1).

        Raises:
            InterpolationShapeError: If vertex or item counts differ
        """
        if len(other.items) != len(self.items):
            raise InterpolationShapeError(
                f"Cannot interpolate rooms with {len(other.items)} and {len(self.items)} items"
            )
        boundary = other.boundary.lerp(self.boundary, t)
        items = tuple(a.lerp(b, t) for a, b in zip(other.items, self.items))
        return Room(boundary=boundary, items=items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'walls': [
                {'x': vertex.x, 'y': vertex.y, 'mirror': mirror}
                for vertex, mirror in zip(self.boundary.vertices, self.boundary.mirrors)
            ],
            'items': [item.to_dict() for item in self.items],
        }
