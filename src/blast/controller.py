"""
Input controller for presentation layers.

Turns single cell clicks and booster selections into session calls. The
Teleport booster needs two cells, so the controller remembers the first
one until the second click arrives. None of this is game state: the session
only ever sees fully specified actions.
"""
from typing import Optional

from .session import GameSession, Outcome
from .types import BoosterType, GridPos


class InputController:
    """Assembles player clicks into session actions."""

    def __init__(self, session: GameSession):
        self.session = session
        self.selected = BoosterType.NONE
        self.pending: Optional[GridPos] = None

    def select(self, booster: BoosterType) -> None:
        """Choose the booster applied by the next click."""
        self.selected = booster
        self.pending = None

    def click(self, row: int, col: int) -> Optional[Outcome]:
        """
        Handle a click on a board cell.

        Returns:
            The session Outcome, or None when the click only updated the
            teleport selection or the game is already over
        """
        if self.session.is_game_over():
            return None

        if self.selected == BoosterType.TELEPORT:
            if self.pending is None:
                self.pending = (row, col)
                return None
            if self.pending == (row, col):
                # Second click on the same cell cancels the selection
                self.pending = None
                return None

            first = self.pending
            self.pending = None
            outcome = self.session.teleport(first[0], first[1], row, col)
        else:
            outcome = self.session.play_at(row, col, self.selected)

        if outcome.ok and self.selected != BoosterType.NONE:
            self.selected = BoosterType.NONE
        return outcome
