"""
Blast Board Renderer.

Provides text visualization of the board, the HUD and the Steps produced by
the engine. Color names here are a display table only.
"""
from typing import Optional

from .board import Board
from .session import GameSession, Outcome
from .types import BoosterType, GridPos, Step

COLOR_NAMES = ["red", "green", "blue", "yellow", "purple"]


def color_symbol(color: int) -> str:
    """Single character used to draw a color."""
    if 0 <= color < len(COLOR_NAMES):
        return COLOR_NAMES[color][0].upper()
    return str(color)


def color_name(color: int) -> str:
    if 0 <= color < len(COLOR_NAMES):
        return COLOR_NAMES[color]
    return f"color{color}"


class Renderer:
    """
    ASCII renderer for the blast game.

    Can be extended for graphical rendering if needed.
    """

    EMPTY = "·"
    MARK = "*"

    def render_board(
        self,
        board: Board,
        show_coords: bool = True,
        mark: Optional[GridPos] = None,
    ) -> str:
        """
        Render the board as ASCII art.

        Args:
            board: The board to render
            show_coords: Whether to show row/column numbers
            mark: Optional cell to highlight (e.g. a pending teleport tile)

        Returns:
            String representation of the board
        """
        lines = []
        width = max(board.cols * 2 - 1, 1)

        if show_coords:
            lines.append("   " + " ".join(str(c % 10) for c in range(board.cols)))
            lines.append("   " + "-" * width)

        for row in range(board.rows):
            cells = []
            for col in range(board.cols):
                tile = board.get_tile(row, col)
                if mark == (row, col):
                    cells.append(self.MARK)
                elif tile is None:
                    cells.append(self.EMPTY)
                else:
                    cells.append(color_symbol(tile.color))
            prefix = f"{row:2d}|" if show_coords else ""
            lines.append(prefix + " ".join(cells))

        if show_coords:
            lines.append("   " + "-" * width)

        return "\n".join(lines)

    def render_hud(self, session: GameSession, selected: BoosterType = BoosterType.NONE) -> str:
        """Score, moves, charges and the active booster on one line."""
        return (
            f"Score: {session.score:,}/{session.cfg.target_score:,}  |  "
            f"Moves: {session.moves_left}  |  "
            f"Bomb: {session.get_bomb_charges()}  Teleport: {session.get_teleport_charges()}  |  "
            f"Reshuffles: {session.reshuffles_left}  |  "
            f"Booster: {selected.name.lower()}"
        )

    def render_step(self, step: Step) -> str:
        """Summarize a Step for the console."""
        return (
            f"removed {len(step.removed)}, moved {len(step.moved)}, "
            f"spawned {len(step.spawned)}"
        )

    def render_outcome(self, outcome: Outcome) -> str:
        """Describe an Outcome in one or two lines."""
        if not outcome.ok:
            if outcome.ended:
                return f"Rejected: {outcome.reason}"
            return "Nothing happened."

        parts = []
        if outcome.removed_count:
            parts.append(f"Blasted {outcome.removed_count} tiles, +{outcome.score_delta} points")
        elif outcome.step is not None:
            parts.append(f"Swapped tiles ({self.render_step(outcome.step)})")
        if outcome.removed_by_color:
            counts = ", ".join(
                f"{color_name(color)} x{n}"
                for color, n in sorted(outcome.removed_by_color.items())
            )
            parts.append(f"[{counts}]")
        if outcome.reshuffled:
            parts.append(f"Board reshuffled ({outcome.reshuffles_left} left)")
        if outcome.ended:
            parts.append(("YOU WIN: " if outcome.win else "YOU LOSE: ") + outcome.reason)
        return " ".join(parts)

    def render_game_state(
        self,
        session: GameSession,
        selected: BoosterType = BoosterType.NONE,
        mark: Optional[GridPos] = None,
    ) -> str:
        """Render HUD and board together."""
        lines = []
        lines.append("=" * 60)
        lines.append(self.render_hud(session, selected))
        lines.append("=" * 60)
        lines.append("")
        lines.append(self.render_board(session.board, mark=mark))
        lines.append("=" * 60)
        return "\n".join(lines)


def clear_screen():
    """Clear the terminal screen."""
    import os
    os.system('cls' if os.name == 'nt' else 'clear')
