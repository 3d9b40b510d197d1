import threading
from math import inf

import pytest

from agents.PathMinimax.ConnectionHeuristic import ConnectionHeuristic
from agents.PathMinimax.PathMinimaxAgent import WIN_SCORE, PathMinimaxAgent, SearchContext
from hexgame.Board import Board
from hexgame.Colour import Colour
from hexgame.Move import Move
from hexgame.PlayerMove import SearchType


class CountingHeuristic(ConnectionHeuristic):
    def __init__(self):
        super().__init__()
        self.calls = 0

    def score(self, board, colour, source):
        self.calls += 1
        return super().score(board, colour, source)


def _root_values(agent: PathMinimaxAgent, board: Board, depth: int) -> dict[Move, float]:
    values = {}
    for move in board.get_legal_moves():
        ctx = SearchContext(root=board.current_colour)
        values[move] = agent._minimax(board.place_stone(move), depth - 1, -inf, inf, ctx)
    return values


def test_depth_one_on_empty_3x3_evaluates_every_cell_once() -> None:
    agent = PathMinimaxAgent(Colour.RED, depth=1)
    result = agent.choose_move(Board(3), 1)

    assert result.nodes == 9
    assert result.depth == 1
    assert result.search_type == SearchType.MINIMAX
    # every single stone scores the same, so the first cell is kept
    assert result.move == Move(0, 0)


@pytest.mark.parametrize("depth", [1, 2, 3])
def test_single_empty_cell_is_always_chosen(one_empty_board, depth) -> None:
    agent = PathMinimaxAgent(Colour.RED, depth=depth)
    result = agent.move(one_empty_board)
    assert result.move == Move(1, 1)


def test_immediate_win_is_preferred(make_board) -> None:
    board = make_board(3, red=[(0, 1), (2, 1)], blue=[(1, 0), (2, 0)])
    agent = PathMinimaxAgent(Colour.RED, depth=1)
    result = agent.move(board)
    assert result.move == Move(1, 1)
    assert result.value == WIN_SCORE


def test_finished_game_returns_win_sentinel_without_evaluating(make_board) -> None:
    board = make_board(3, red=[(0, 1), (1, 1), (2, 1)], blue=[(0, 0), (1, 0)], to_move=Colour.BLUE)
    assert board.is_game_over()
    assert board.get_winner() == Colour.RED

    heuristic = CountingHeuristic()
    agent = PathMinimaxAgent(Colour.RED, depth=2, heuristic=heuristic)

    ctx = SearchContext(root=Colour.RED)
    assert agent._minimax(board, 2, -inf, inf, ctx) == WIN_SCORE
    ctx = SearchContext(root=Colour.BLUE)
    assert agent._minimax(board, 0, -inf, inf, ctx) == -WIN_SCORE

    assert heuristic.calls == 0
    assert ctx.nodes == 0


def test_finished_or_full_board_gives_absent_move(make_board) -> None:
    board = make_board(3, red=[(0, 1), (1, 1), (2, 1)], blue=[(0, 0), (1, 0)], to_move=Colour.BLUE)
    result = PathMinimaxAgent(Colour.BLUE, depth=2).move(board)
    assert result.move is None
    assert result.is_absent()


def test_win_sentinel_outranks_any_heuristic_score() -> None:
    size = 15
    assert WIN_SCORE > 350 * size * size


@pytest.mark.parametrize("depth", [2, 3])
def test_alpha_beta_matches_plain_minimax(make_board, depth) -> None:
    board = make_board(
        4,
        red=[(1, 1), (2, 2), (0, 3)],
        blue=[(1, 2), (2, 1), (3, 0)],
        to_move=Colour.RED,
    )
    pruned = PathMinimaxAgent(Colour.RED, depth=depth)
    full = PathMinimaxAgent(Colour.RED, depth=depth, alpha_beta=False)

    assert _root_values(pruned, board, depth) == _root_values(full, board, depth)

    pruned_result = pruned.move(board)
    full_result = full.move(board)
    assert pruned_result.move == full_result.move
    assert pruned_result.nodes <= full_result.nodes


def test_alpha_beta_matches_plain_minimax_for_blue(make_board) -> None:
    board = make_board(3, red=[(1, 1)], blue=[(0, 2)], to_move=Colour.RED)
    board = board.place_stone(Move(2, 0))
    assert board.current_colour == Colour.BLUE

    pruned = PathMinimaxAgent(Colour.BLUE, depth=3)
    full = PathMinimaxAgent(Colour.BLUE, depth=3, alpha_beta=False)
    assert _root_values(pruned, board, 3) == _root_values(full, board, 3)


def test_node_count_is_per_call() -> None:
    agent = PathMinimaxAgent(Colour.RED, depth=1)
    first = agent.choose_move(Board(3), 1)
    second = agent.choose_move(Board(3), 1)
    assert first.nodes == second.nodes == 9


def test_cancelled_search_stops_immediately() -> None:
    event = threading.Event()
    event.set()
    agent = PathMinimaxAgent(Colour.RED, depth=3)

    ctx = SearchContext(root=Colour.RED, cancel_event=event)
    assert agent._minimax(Board(3).place_stone(Move(0, 0)), 2, -inf, inf, ctx) == 0
    assert ctx.nodes == 0

    result = agent.choose_move(Board(3), 3, cancel_event=event)
    assert result.move is None
    assert result.nodes == 0


def test_invalid_depth_is_rejected() -> None:
    with pytest.raises(ValueError):
        PathMinimaxAgent(Colour.RED, depth=0)
    with pytest.raises(ValueError):
        PathMinimaxAgent(Colour.RED, depth=2).choose_move(Board(3), 0)


def test_make_move_records_last_result() -> None:
    agent = PathMinimaxAgent(Colour.RED, depth=1)
    move = agent.make_move(1, Board(3), None)
    assert move == Move(0, 0)
    assert agent.last_result.nodes == 9
