import threading
import time
from dataclasses import dataclass
from math import inf
from typing import Tuple

from agents.PathMinimax.ConnectionHeuristic import ConnectionHeuristic
from hexgame.AgentBase import AgentBase
from hexgame.Board import Board
from hexgame.Colour import Colour
from hexgame.Game import logger
from hexgame.Move import Move
from hexgame.PlayerMove import PlayerMove, SearchType

# Value of a finished game. Strictly above any heuristic or unreachable score.
WIN_SCORE = 10**9

DEFAULT_DEPTH = 3


@dataclass
class SearchContext:
    """
    State threaded through one search: whose point of view values are
    measured from, how many leaves were evaluated, and the optional
    cancellation flag set from another thread.
    """

    root: Colour
    cancel_event: threading.Event | None = None
    nodes: int = 0

    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()


class PathMinimaxAgent(AgentBase):
    """
    Fixed-depth minimax with alpha–beta pruning.

    Key ideas
    ---------
    - Every empty cell is a candidate, in the board's row-major order
      (no move ordering, no beam).
    - Each simulated move works on a fresh board from `Board.place_stone`,
      so sibling branches never see each other's stones.
    - Leaves are scored by the ConnectionHeuristic for the player who made
      the last move, from its last stone.
    - Finished games score ±WIN_SCORE and never reach the heuristic.
    """

    def __init__(
        self,
        colour: Colour,
        depth: int = DEFAULT_DEPTH,
        alpha_beta: bool = True,
        heuristic: ConnectionHeuristic | None = None,
    ):
        """
        Parameters
        ----------
        colour : Colour
            The colour assigned to this agent.
        depth : int
            Search depth in plies; must be at least 1.
        alpha_beta : bool
            If False, run plain minimax over the same tree.
        heuristic : ConnectionHeuristic | None
            Leaf evaluator; the default cost model when None.
        """
        super().__init__(colour)
        if depth < 1:
            raise ValueError(f"depth must be at least 1, got {depth}")

        self._depth = depth
        self._alpha_beta = alpha_beta
        self._heuristic = heuristic if heuristic is not None else ConnectionHeuristic()

    def make_move(self, turn: int, board: Board, opp_move: Move | None) -> Move | None:
        start = time.perf_counter()
        result = self.move(board)
        self.last_result = result

        if result.move is None:
            logger.warning(f"[{type(self).__name__}] No legal moves on turn {turn}.")
        else:
            logger.debug(
                f"[{type(self).__name__}] turn={turn}, move={result.move}, depth={result.depth}, "
                f"nodes={result.nodes}, time={time.perf_counter() - start:.3f}s"
            )
        return result.move

    def move(self, board: Board) -> PlayerMove:
        return self.choose_move(board, self._depth)

    def choose_move(
        self,
        board: Board,
        depth: int,
        cancel_event: threading.Event | None = None,
    ) -> PlayerMove:
        """
        Search `board` to `depth` plies for the side to move.

        Returns a PlayerMove with no coordinate when the board is full or
        the game is already over. Once `cancel_event` is set the search
        unwinds and the result only covers what was searched before it.
        """
        if depth < 1:
            raise ValueError(f"depth must be at least 1, got {depth}")

        ctx = SearchContext(root=board.current_colour, cancel_event=cancel_event)
        value, best_move = self._search_root(board, depth, ctx)
        return PlayerMove(best_move, ctx.nodes, depth, SearchType.MINIMAX, value)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def _search_root(self, board: Board, depth: int, ctx: SearchContext) -> Tuple[float, Move | None]:
        """
        Try every empty cell and keep the first one with the highest value.

        Each root move is searched with a full window, so the value kept for
        it is exact rather than a bound.
        """
        if board.is_game_over():
            return -inf, None

        best_val = -inf
        best_move: Move | None = None

        for move in board.get_legal_moves():
            if ctx.cancelled():
                break

            child = board.place_stone(move)
            val = self._minimax(child, depth - 1, -inf, inf, ctx)

            if val > best_val:
                best_val = val
                best_move = move

        return best_val, best_move

    def _minimax(self, board: Board, depth: int, alpha: float, beta: float, ctx: SearchContext) -> float:
        """
        Value of `board` for `ctx.root`, searching `depth` more plies.

        Returns 0 straight away once the search has been cancelled; the
        caller throws the whole iteration away in that case.
        """
        if ctx.cancelled():
            return 0

        winner = board.get_winner()
        if winner is not None:
            return WIN_SCORE if winner == ctx.root else -WIN_SCORE

        legal_moves = board.get_legal_moves() if depth > 0 else []
        if not legal_moves:
            ctx.nodes += 1
            return self.evaluate(board, ctx.root)

        # MAX node: root player to move
        if board.current_colour == ctx.root:
            value = -inf
            for move in legal_moves:
                child = board.place_stone(move)
                value = max(value, self._minimax(child, depth - 1, alpha, beta, ctx))
                if self._alpha_beta:
                    alpha = max(alpha, value)
                    if alpha >= beta:
                        break  # alpha–beta cut-off
            return value
        # MIN node: opponent to move
        else:
            value = inf
            for move in legal_moves:
                child = board.place_stone(move)
                value = min(value, self._minimax(child, depth - 1, alpha, beta, ctx))
                if self._alpha_beta:
                    beta = min(beta, value)
                    if alpha >= beta:
                        break  # alpha–beta cut-off
            return value

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    def evaluate(self, board: Board, perspective: Colour) -> int:
        """
        Static value of `board` for `perspective`.

        The heuristic is run for the player who made the last move (the
        side not to move), from that last stone, and negated when that
        player is not `perspective`.
        """
        mover = board.current_colour.opposite()
        score = self._heuristic.score(board, mover, board.last_move)
        return score if mover == perspective else -score
