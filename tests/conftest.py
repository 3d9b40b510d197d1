import pytest

from hexgame.Board import Board
from hexgame.Colour import Colour
from hexgame.Move import Move


def build_board(size, red=(), blue=(), to_move=Colour.RED, last=None):
    """Board with the given (x, y) stones, side to move and last move."""
    board = Board(size)
    for x, y in red:
        board.set_tile_colour(x, y, Colour.RED)
    for x, y in blue:
        board.set_tile_colour(x, y, Colour.BLUE)
    board.current_colour = to_move
    board.last_move = Move(*last) if last is not None else None
    return board


@pytest.fixture
def make_board():
    return build_board


@pytest.fixture
def one_empty_board():
    """
    3x3, only (1,1) empty, nobody connected yet, RED to move:

        R R B
         B . R
          B R B
    """
    return build_board(
        3,
        red=[(0, 0), (0, 1), (1, 2), (2, 1)],
        blue=[(0, 2), (1, 0), (2, 0), (2, 2)],
        to_move=Colour.RED,
    )
