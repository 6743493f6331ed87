"""
Room Layer
==========

Bounded Context: Static scene description.

Responsibilities:
- Tagged wall polygon plus items (player, target, decoys)
- Whole-room reflection across an edge
- Whole-room interpolation between two matching rooms
- NO tracing, NO validation of level layout (see lookglass_levels)
"""

from lookglass_engine.room.model import Item, ItemKind, Room

__all__ = [
    "Item",
    "ItemKind",
    "Room",
]
