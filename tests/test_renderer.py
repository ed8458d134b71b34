"""
Tests for the ASCII renderer.
"""
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from blast.config import GameConfig
from blast.renderer import Renderer, color_name, color_symbol
from blast.session import GameSession, Outcome
from blast.types import BoosterType, Step


def make_session(colors, colors_count=3):
    colors = np.asarray(colors)
    config = GameConfig(rows=colors.shape[0], cols=colors.shape[1], colors_count=colors_count)
    session = GameSession(config, rng=np.random.default_rng(0))
    session.board.set_state(colors)
    return session


class TestRenderer:
    """Test text rendering."""

    def test_color_symbols(self):
        assert color_symbol(0) == "R"
        assert color_symbol(4) == "P"
        assert color_symbol(7) == "7"
        assert color_name(2) == "blue"
        assert color_name(9) == "color9"

    def test_render_board(self):
        """Rows are drawn with color letters."""
        session = make_session([[0, 1, 2], [2, 1, 0]])
        text = Renderer().render_board(session.board)
        lines = text.splitlines()
        assert " 0|R G B" in lines
        assert " 1|B G R" in lines

    def test_render_board_mark(self):
        session = make_session([[0, 1], [1, 0]])
        text = Renderer().render_board(session.board, show_coords=False, mark=(1, 1))
        assert text.splitlines() == ["R G", "G *"]

    def test_render_hud(self):
        session = make_session([[0, 1], [1, 0]])
        hud = Renderer().render_hud(session, BoosterType.BOMB)
        assert "Score: 0/20,000" in hud
        assert "Moves: 30" in hud
        assert "Booster: bomb" in hud

    def test_render_outcome(self):
        renderer = Renderer()
        assert renderer.render_outcome(Outcome(ok=False)) == "Nothing happened."
        assert "No moves left" in renderer.render_outcome(
            Outcome(ok=False, ended=True, reason="No moves left"))

        outcome = Outcome(ok=True, step=Step(removed=[1, 2, 3]), removed_count=3,
                          score_delta=90, removed_by_color={0: 2, 1: 1},
                          ended=True, win=True, reason="Target reached")
        text = renderer.render_outcome(outcome)
        assert "Blasted 3 tiles, +90 points" in text
        assert "red x2" in text
        assert "YOU WIN: Target reached" in text

    def test_render_game_state(self):
        session = make_session([[0, 1], [1, 0]])
        text = Renderer().render_game_state(session)
        assert "Score:" in text
        assert " 0|R G" in text
