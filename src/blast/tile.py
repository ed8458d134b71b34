"""
Tile model for the blast board.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass
class Tile:
    """
    A single colored tile on the board.

    The id never changes and is never reused by the board that created it.
    Color and position are updated in place by board operations.
    """

    id: int
    color: int
    row: int
    col: int

    @property
    def pos(self) -> Tuple[int, int]:
        """Current (row, col) of the tile."""
        return (self.row, self.col)

    def __setattr__(self, name, value):
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("Tile id is immutable")
        super().__setattr__(name, value)
