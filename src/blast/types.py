"""
Shared types for the blast engine.

The Step is the only description of "what changed" that the engine hands to
a presentation layer: which tile ids were removed, which tiles fell and from
where, and which tiles were spawned to refill the board.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Tuple

GridPos = Tuple[int, int]


class BoosterType(Enum):
    """Special actions available to the player."""
    NONE = 0
    BOMB = 1      # clears a square area around the tapped cell
    TELEPORT = 2  # swaps two tiles


@dataclass(frozen=True)
class MovedTile:
    """A tile that changed cell during a step."""
    id: int
    from_pos: GridPos
    to_pos: GridPos

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "from": list(self.from_pos),
            "to": list(self.to_pos),
        }


@dataclass(frozen=True)
class SpawnedTile:
    """A freshly created tile and the cell it lands in."""
    id: int
    to_pos: GridPos

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "to": list(self.to_pos)}


@dataclass
class Step:
    """
    One animatable state transition.

    Attributes:
        removed: Ids of tiles deleted from the board
        moved: Tiles that fell (or were swapped) with their from/to cells
        spawned: New tiles and their destination cells
    """
    removed: List[int] = field(default_factory=list)
    moved: List[MovedTile] = field(default_factory=list)
    spawned: List[SpawnedTile] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "removed": list(self.removed),
            "moved": [m.to_dict() for m in self.moved],
            "spawned": [s.to_dict() for s in self.spawned],
        }


@dataclass(frozen=True)
class RemovedTileInfo:
    """Snapshot of a removed tile, taken before the board collapses."""
    id: int
    row: int
    col: int
    color: int

    def to_dict(self) -> Dict[str, int]:
        return {"id": self.id, "row": self.row, "col": self.col, "color": self.color}
