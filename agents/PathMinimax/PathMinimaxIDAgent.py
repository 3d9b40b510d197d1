import threading
from dataclasses import replace

from agents.PathMinimax.ConnectionHeuristic import ConnectionHeuristic
from agents.PathMinimax.PathMinimaxAgent import WIN_SCORE, PathMinimaxAgent
from hexgame.Board import Board
from hexgame.Colour import Colour
from hexgame.Game import logger
from hexgame.Move import Move
from hexgame.PlayerMove import PlayerMove, SearchType


class PathMinimaxIDAgent(PathMinimaxAgent):
    """
    Iterative deepening on top of PathMinimaxAgent.

    Searches depth 1, 2, 3, ... until `cancel()` is called, keeping the move
    of the last depth that finished before the cancellation. Depth 1 always
    runs to completion, so a legal move is returned whenever one exists.

    `cancel()` is safe to call from another thread (typically the Game's
    turn timer); the search polls the flag on every recursive call.
    """

    def __init__(
        self,
        colour: Colour,
        max_depth: int | None = None,
        time_limit_seconds: float | None = None,
        heuristic: ConnectionHeuristic | None = None,
    ):
        """
        Parameters
        ----------
        colour : Colour
            The colour assigned to this agent.
        max_depth : int | None
            Optional cap on the deepening; None searches until cancelled or
            until the whole tree has been resolved.
        time_limit_seconds : float | None
            If given, the agent arms its own timer on every `make_move`.
            Leave as None when the caller (e.g. the Game) cancels it.
        heuristic : ConnectionHeuristic | None
            Leaf evaluator; the default cost model when None.
        """
        super().__init__(colour, depth=1, heuristic=heuristic)
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        if time_limit_seconds is not None and time_limit_seconds <= 0:
            raise ValueError(f"time_limit_seconds must be positive, got {time_limit_seconds}")

        self._max_depth = max_depth
        self._time_limit = time_limit_seconds
        self._cancel_event = threading.Event()

    def begin_turn(self) -> None:
        self._cancel_event.clear()

    def cancel(self) -> None:
        self._cancel_event.set()

    def make_move(self, turn: int, board: Board, opp_move: Move | None) -> Move | None:
        if self._time_limit is None:
            return super().make_move(turn, board, opp_move)

        self.begin_turn()
        timer = threading.Timer(self._time_limit, self.cancel)
        timer.daemon = True
        timer.start()
        try:
            return super().make_move(turn, board, opp_move)
        finally:
            timer.cancel()

    def move(self, board: Board) -> PlayerMove:
        """
        Deepen until cancelled, the depth cap is hit, the tree is exhausted
        or a forced result is found.
        """
        empty = board.count_empty()
        if board.is_game_over() or empty == 0:
            return PlayerMove(None, 0, 0, SearchType.MINIMAX_IDS)

        limit = empty if self._max_depth is None else min(self._max_depth, empty)
        best: PlayerMove | None = None
        total_nodes = 0
        depth = 1

        while depth <= limit:
            if depth > 1 and self._cancel_event.is_set():
                break

            result = self.choose_move(
                board, depth, cancel_event=self._cancel_event if depth > 1 else None
            )
            total_nodes += result.nodes

            # A cancelled iteration may have skipped subtrees: drop it.
            if depth > 1 and self._cancel_event.is_set():
                logger.debug(f"[PathMinimaxIDAgent] depth={depth} abandoned after {result.nodes} nodes")
                break

            best = replace(result, search_type=SearchType.MINIMAX_IDS)
            logger.debug(
                f"[PathMinimaxIDAgent] depth={depth}, best_value={result.value}, "
                f"best_move={result.move}, nodes={result.nodes}"
            )

            if abs(result.value) >= WIN_SCORE:
                break  # forced result, deeper search cannot change it
            depth += 1

        logger.debug(f"[PathMinimaxIDAgent] reached depth {best.depth}, total nodes {total_nodes}")
        return best
