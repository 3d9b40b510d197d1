import pytest

from agents.PathMinimax.ConnectionHeuristic import ConnectionHeuristic
from agents.PathMinimax.PathMinimaxAgent import WIN_SCORE, PathMinimaxAgent
from agents.PathMinimax.PathMinimaxIDAgent import PathMinimaxIDAgent
from hexgame.Board import Board
from hexgame.Colour import Colour
from hexgame.Move import Move
from hexgame.PlayerMove import SearchType


class CancellingHeuristic(ConnectionHeuristic):
    """Cancels `agent` on the n-th evaluation."""

    def __init__(self, trigger: int):
        super().__init__()
        self.trigger = trigger
        self.calls = 0
        self.agent = None

    def score(self, board, colour, source):
        self.calls += 1
        if self.calls == self.trigger:
            self.agent.cancel()
        return super().score(board, colour, source)


def test_cancel_before_start_still_completes_depth_one() -> None:
    agent = PathMinimaxIDAgent(Colour.RED)
    agent.cancel()

    board = Board(5)
    result = agent.move(board)

    assert result.move in board.get_legal_moves()
    assert result.depth == 1
    assert result.nodes == 25
    assert result.search_type == SearchType.MINIMAX_IDS


def test_cancel_mid_depth_keeps_last_completed_depth() -> None:
    # depth 1 on an empty 3x3 board takes 9 evaluations; cancel inside depth 2
    heuristic = CancellingHeuristic(trigger=20)
    agent = PathMinimaxIDAgent(Colour.RED, heuristic=heuristic)
    heuristic.agent = agent

    result = agent.move(Board(3))

    assert result.depth == 1
    assert result.nodes == 9
    assert result.move == Move(0, 0)


def test_depth_cap_matches_fixed_depth_search() -> None:
    board = Board(3)
    result = PathMinimaxIDAgent(Colour.RED, max_depth=2).move(board)
    expected = PathMinimaxAgent(Colour.RED, depth=2).move(board)

    assert result.depth == 2
    assert result.move == expected.move
    assert result.nodes == expected.nodes


def test_forced_win_stops_deepening() -> None:
    # On 2x2, RED at (0,1) wins by force: it threatens both (1,0) and (1,1).
    result = PathMinimaxIDAgent(Colour.RED).move(Board(2))
    assert result.move == Move(0, 1)
    assert result.depth == 3
    assert result.value == WIN_SCORE
    assert result.search_type == SearchType.MINIMAX_IDS


def test_single_empty_cell_stops_after_depth_one(one_empty_board) -> None:
    result = PathMinimaxIDAgent(Colour.RED).move(one_empty_board)
    assert result.move == Move(1, 1)
    assert result.depth == 1


def test_begin_turn_clears_previous_cancellation() -> None:
    agent = PathMinimaxIDAgent(Colour.RED, max_depth=2)
    agent.cancel()
    agent.begin_turn()
    assert agent.move(Board(3)).depth == 2


def test_own_time_limit_returns_a_legal_move() -> None:
    agent = PathMinimaxIDAgent(Colour.RED, time_limit_seconds=0.05)
    board = Board(7)
    move = agent.make_move(1, board, None)

    assert move in board.get_legal_moves()
    assert agent.last_result.depth >= 1


def test_finished_game_gives_absent_move(make_board) -> None:
    board = make_board(3, blue=[(1, 0), (1, 1), (1, 2)], red=[(0, 0), (2, 2)])
    result = PathMinimaxIDAgent(Colour.RED).move(board)
    assert result.move is None


def test_invalid_configuration_is_rejected() -> None:
    with pytest.raises(ValueError):
        PathMinimaxIDAgent(Colour.RED, max_depth=0)
    with pytest.raises(ValueError):
        PathMinimaxIDAgent(Colour.RED, time_limit_seconds=0)


class RecordingIDAgent(PathMinimaxIDAgent):
    """Remembers the cancel flag handed to each fixed-depth search."""

    def __init__(self, colour, **kwargs):
        super().__init__(colour, **kwargs)
        self.searches = []

    def choose_move(self, board, depth, cancel_event=None):
        self.searches.append((depth, cancel_event))
        return super().choose_move(board, depth, cancel_event=cancel_event)


def test_each_iteration_is_a_fixed_depth_search() -> None:
    agent = RecordingIDAgent(Colour.RED, max_depth=3)
    agent.move(Board(3))

    assert [depth for depth, _ in agent.searches] == [1, 2, 3]
    assert agent.searches[0][1] is None
    assert all(event is agent._cancel_event for _, event in agent.searches[1:])
