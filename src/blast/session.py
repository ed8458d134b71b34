"""
Blast Game Session.

This module implements the rules engine on top of the Board:
- Group taps, Bomb and Teleport boosters
- Quadratic scoring
- Move and target limits
- Deadlock detection with a bounded automatic reshuffle
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional
from enum import Enum
import numpy as np

from .board import Board
from .config import GameConfig
from .tile import Tile
from .types import BoosterType, GridPos, RemovedTileInfo, Step

REASON_TARGET_REACHED = "Target reached"
REASON_NO_MOVES_LEFT = "No moves left"
REASON_NO_MOVES = "No moves"


class GameStatus(Enum):
    """Game status enumeration."""
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass
class Outcome:
    """Result of a session action."""
    ok: bool
    step: Optional[Step] = None
    removed_count: int = 0
    score_delta: int = 0
    score: int = 0
    moves_left: int = 0
    ended: bool = False
    win: bool = False
    reason: str = ""
    reshuffled: bool = False
    reshuffles_left: int = 0
    removed_tiles: Optional[List[RemovedTileInfo]] = None
    removed_by_color: Optional[Dict[int, int]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "ok": self.ok,
            "step": self.step.to_dict() if self.step is not None else None,
            "removed_count": self.removed_count,
            "score_delta": self.score_delta,
            "score": self.score,
            "moves_left": self.moves_left,
            "ended": self.ended,
            "win": self.win,
            "reason": self.reason,
            "reshuffled": self.reshuffled,
            "reshuffles_left": self.reshuffles_left,
            "removed_tiles": (
                [t.to_dict() for t in self.removed_tiles]
                if self.removed_tiles is not None else None
            ),
            "removed_by_color": (
                {str(k): v for k, v in self.removed_by_color.items()}
                if self.removed_by_color is not None else None
            ),
        }


class _EndCheck(NamedTuple):
    ended: bool
    win: bool
    reason: str
    reshuffled: bool


_CONTINUE = _EndCheck(False, False, "", False)


class GameSession:
    """
    Blast game session.

    Owns the board, score, move counter, booster charges and the reshuffle
    budget. Every action returns an Outcome; rejected actions return
    ``Outcome(ok=False)`` and leave the session untouched.
    """

    SCORE_PER_TILE_SQUARED = 10

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Initialize a new session.

        Args:
            config: Game configuration (defaults to GameConfig())
            rng: Random generator; built from config.seed when omitted
        """
        self.cfg = config or GameConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.cfg.seed)
        self.board = Board(self.cfg.rows, self.cfg.cols, self.cfg.colors_count, self.rng)

        self.score = 0
        self.moves_left = self.cfg.moves
        self.reshuffles_left = self.cfg.max_reshuffles
        self.status = GameStatus.PLAYING
        self.reason = ""

        self._bomb_charges = self.cfg.bomb_booster_charges
        self._teleport_charges = self.cfg.teleport_booster_charges
        self._bomb_radius = self.cfg.bomb_radius

        # Statistics
        self.tiles_removed = 0
        self.largest_group = 0
        self.bombs_used = 0
        self.teleports_used = 0
        self.reshuffles_used = 0

    def reset(self) -> None:
        """
        Start a new round on the same session.

        Booster charges are left as they are; a full restart builds a new
        session instead.
        """
        self.board.reset()
        self.score = 0
        self.moves_left = self.cfg.moves
        self.reshuffles_left = self.cfg.max_reshuffles
        self.status = GameStatus.PLAYING
        self.reason = ""
        self.tiles_removed = 0
        self.largest_group = 0
        self.reshuffles_used = 0

    def get_bomb_charges(self) -> int:
        return self._bomb_charges

    def get_teleport_charges(self) -> int:
        return self._teleport_charges

    def has_any_move(self) -> bool:
        return self.board.has_any_move(self.cfg.min_group_size)

    def is_game_over(self) -> bool:
        """Check if an end condition has fired."""
        return self.status != GameStatus.PLAYING

    def opening_check(self) -> Outcome:
        """
        Check a freshly dealt board before the first action.

        A board without any qualifying group ends the game immediately.
        """
        if self.status == GameStatus.PLAYING and not self.has_any_move():
            self._finish(_EndCheck(True, False, REASON_NO_MOVES, False))
        return Outcome(
            ok=True,
            score=self.score,
            moves_left=self.moves_left,
            ended=self.is_game_over(),
            win=self.status == GameStatus.WON,
            reason=self.reason,
            reshuffles_left=self.reshuffles_left,
        )

    def play_at(self, row: int, col: int, booster: BoosterType = BoosterType.NONE) -> Outcome:
        """
        Tap a cell, optionally with a booster.

        Args:
            row: Row of the tapped cell
            col: Column of the tapped cell
            booster: BoosterType.NONE for a group blast or BoosterType.BOMB

        Returns:
            Outcome of the action
        """
        if self.moves_left <= 0:
            return self._exhausted()

        if booster == BoosterType.BOMB:
            return self._booster_bomb(row, col)
        if booster != BoosterType.NONE:
            # Teleport needs two cells, see teleport()
            return Outcome(ok=False)

        result = self.board.blast_at(row, col, self.cfg.min_group_size)
        if result is None:
            return Outcome(ok=False)

        group, step = result
        return self._apply_step(len(group), step, group)

    def bomb_positions(self, row: int, col: int) -> List[GridPos]:
        """All cells within the bomb radius of (row, col), bounds ignored."""
        radius = self._bomb_radius
        return [
            (r, c)
            for r in range(row - radius, row + radius + 1)
            for c in range(col - radius, col + radius + 1)
        ]

    def _booster_bomb(self, row: int, col: int) -> Outcome:
        if self._bomb_charges <= 0:
            return Outcome(ok=False)

        result = self.board.blast_positions(self.bomb_positions(row, col))
        if result is None:
            return Outcome(ok=False)

        tiles, step = result
        self._bomb_charges -= 1
        self.bombs_used += 1
        return self._apply_step(len(tiles), step, tiles)

    def teleport(self, a_row: int, a_col: int, b_row: int, b_col: int) -> Outcome:
        """
        Swap two tiles using a Teleport charge.

        Costs one move and one charge; nothing is removed or scored.
        """
        if self.moves_left <= 0:
            return self._exhausted()

        if self._teleport_charges <= 0:
            return Outcome(ok=False)

        step = self.board.swap_tiles((a_row, a_col), (b_row, b_col))
        if step is None:
            return Outcome(ok=False)

        self._teleport_charges -= 1
        self.teleports_used += 1
        return self._apply_step(0, step)

    def calculate_score(self, removed_count: int) -> int:
        """Score for removing removed_count tiles in one action."""
        return self.SCORE_PER_TILE_SQUARED * removed_count * removed_count

    def _exhausted(self) -> Outcome:
        return Outcome(
            ok=False,
            score=self.score,
            moves_left=self.moves_left,
            ended=True,
            win=False,
            reason=REASON_NO_MOVES_LEFT,
            reshuffles_left=self.reshuffles_left,
        )

    def _apply_step(
        self, removed_count: int, step: Step, removed: Optional[List[Tile]] = None
    ) -> Outcome:
        removed_tiles = None
        removed_by_color = None
        if removed is not None:
            removed_tiles, removed_by_color = self._build_removed_info(removed)

        self.moves_left -= 1
        score_delta = self.calculate_score(removed_count)
        self.score += score_delta

        self.tiles_removed += removed_count
        self.largest_group = max(self.largest_group, removed_count)

        end = self._check_end_and_maybe_reshuffle()
        if end.ended:
            self._finish(end)

        return Outcome(
            ok=True,
            step=step,
            removed_count=removed_count,
            score_delta=score_delta,
            score=self.score,
            moves_left=self.moves_left,
            ended=end.ended,
            win=end.win,
            reason=end.reason,
            reshuffled=end.reshuffled,
            reshuffles_left=self.reshuffles_left,
            removed_tiles=removed_tiles,
            removed_by_color=removed_by_color,
        )

    def _check_end_and_maybe_reshuffle(self) -> _EndCheck:
        # Target first: reaching it on the last move is a win
        if self.score >= self.cfg.target_score:
            return _EndCheck(True, True, REASON_TARGET_REACHED, False)

        if self.moves_left <= 0:
            return _EndCheck(True, False, REASON_NO_MOVES_LEFT, False)

        if not self.has_any_move():
            if self._reshuffle_until_has_move():
                return _EndCheck(False, False, "", True)
            return _EndCheck(True, False, REASON_NO_MOVES, False)

        return _CONTINUE

    def _reshuffle_until_has_move(self) -> bool:
        """Shuffle colors until a move appears or the budget runs out."""
        while self.reshuffles_left > 0:
            self.reshuffles_left -= 1
            self.reshuffles_used += 1
            self.board.shuffle_colors()
            if self.has_any_move():
                return True

        return self.has_any_move()

    def _finish(self, end: _EndCheck) -> None:
        self.status = GameStatus.WON if end.win else GameStatus.LOST
        self.reason = end.reason

    @staticmethod
    def _build_removed_info(tiles: List[Tile]):
        info = []
        by_color: Dict[int, int] = {}
        for tile in tiles:
            info.append(RemovedTileInfo(tile.id, tile.row, tile.col, tile.color))
            by_color[tile.color] = by_color.get(tile.color, 0) + 1
        return info, by_color

    def get_statistics(self) -> Dict[str, Any]:
        """Get game statistics."""
        return {
            'score': self.score,
            'target_score': self.cfg.target_score,
            'moves_made': self.cfg.moves - self.moves_left,
            'moves_left': self.moves_left,
            'tiles_removed': self.tiles_removed,
            'largest_group': self.largest_group,
            'bombs_used': self.bombs_used,
            'teleports_used': self.teleports_used,
            'reshuffles_used': self.reshuffles_used,
            'status': self.status.value,
            'reason': self.reason,
        }

    def __str__(self) -> str:
        """String representation of the session state."""
        lines = [str(self.board)]
        lines.append(
            f"\nScore: {self.score}/{self.cfg.target_score} | Moves left: {self.moves_left} | "
            f"Bombs: {self._bomb_charges} | Teleports: {self._teleport_charges} | "
            f"Status: {self.status.value}"
        )
        return "\n".join(lines)


def new_session(
    config: Optional[GameConfig] = None, rng: Optional[np.random.Generator] = None
) -> GameSession:
    """Create a session for the given configuration."""
    return GameSession(config, rng)


def play_random_game(
    config: Optional[GameConfig] = None,
    seed: Optional[int] = None,
    verbose: bool = False,
) -> Dict[str, Any]:
    """
    Play a complete game by tapping random qualifying groups.

    Args:
        config: Game configuration
        seed: Random seed for both the board and the move choice
        verbose: Whether to print game progress

    Returns:
        Dictionary with game statistics
    """
    rng = np.random.default_rng(seed)
    session = GameSession(config, rng=rng)
    session.opening_check()

    if verbose:
        print("Starting random game...")
        print(session)

    while not session.is_game_over():
        candidates = [
            g for g in session.board.groups() if len(g) >= session.cfg.min_group_size
        ]
        if not candidates:
            break
        group = candidates[rng.integers(len(candidates))]
        outcome = session.play_at(group[0].row, group[0].col)

        if verbose and outcome.ok:
            print(f"Blasted {outcome.removed_count} tiles, +{outcome.score_delta} points"
                  + (" (reshuffled)" if outcome.reshuffled else ""))

    stats = session.get_statistics()

    if verbose:
        print("\n" + "=" * 40)
        print("GAME OVER!")
        print(session)
        print(f"\nFinal Statistics: {stats}")

    return stats
