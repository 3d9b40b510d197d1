import logging
import sys
import threading
import time
from typing import TextIO

from hexgame.Board import Board
from hexgame.Colour import Colour
from hexgame.Move import Move
from hexgame.Player import Player

logger = logging.getLogger("hexgame")

DEFAULT_TURN_TIME = 5.0


class Game:
    """
    Runs one match between two players.

    Each turn the side to move gets a private copy of the board and
    `turn_time_seconds` to answer. The Game does not wait for the agent:
    a timer thread calls `agent.cancel()` when the budget elapses and the
    agent is expected to return promptly with the best move it has.

    An absent or illegal move forfeits the game.
    """

    def __init__(
        self,
        player1: Player,
        player2: Player,
        board_size: int = 11,
        turn_time_seconds: float = DEFAULT_TURN_TIME,
        silent: bool = False,
        logDest: TextIO = sys.stderr,
        verbose: bool = False,
    ):
        if turn_time_seconds <= 0:
            raise ValueError(f"turn_time_seconds must be positive, got {turn_time_seconds}")

        c1 = player1.agent.colour
        c2 = player2.agent.colour
        if c1 == c2:
            raise ValueError(f"Both players were given colour {c1.name}")

        self.players = {c1: player1, c2: player2}
        self.board = Board(board_size)
        self.turn_time = turn_time_seconds
        self.silent = silent
        self.logDest = logDest
        self.verbose = verbose

        # One dict per move played: diagnostics for batch experiments.
        self.move_records: list[dict] = []

    def run(self) -> dict:
        """
        Play the game to the end.

        Returns
        -------
        dict
            winner : str          name of the winning player
            winner_colour : str   "RED" or "BLUE"
            turns : int           number of moves played
            forfeit : bool        True if the game ended on an illegal move
            total_time : float    wall-clock seconds
        """
        start = time.perf_counter()
        turn = 1
        opp_move: Move | None = None
        winner_colour: Colour | None = None
        forfeit = False

        while not self.board.is_game_over():
            colour = self.board.current_colour
            player = self.players[colour]

            move, elapsed = self._play_turn(player, turn, opp_move)
            player.turn_times.append(elapsed)

            if not self._is_legal(move):
                logger.warning(
                    f"[Game] {player.name} ({colour.name}) played illegal move {move} "
                    f"on turn {turn}; forfeit"
                )
                self._log(f"{turn},{player.name},{colour.name},ILLEGAL {move}")
                winner_colour = colour.opposite()
                forfeit = True
                break

            self.board = self.board.place_stone(move)
            self._record(turn, player, colour, move, elapsed)
            self._log(f"{turn},{player.name},{colour.name},{move.x},{move.y},{elapsed:.3f}")
            if self.verbose:
                self._log(str(self.board))

            opp_move = move
            turn += 1

        if winner_colour is None:
            winner_colour = self.board.get_winner()

        winner = self.players[winner_colour]
        total = time.perf_counter() - start
        self._log(f"winner,{winner.name},{winner_colour.name}")
        if not self.silent:
            print(f"{winner.name} ({winner_colour.name}) wins after {turn - 1} moves")

        return {
            "winner": winner.name,
            "winner_colour": winner_colour.name,
            "turns": turn - 1,
            "forfeit": forfeit,
            "total_time": total,
        }

    def _play_turn(self, player: Player, turn: int, opp_move: Move | None) -> tuple[Move | None, float]:
        agent = player.agent
        agent.begin_turn()

        timer = threading.Timer(self.turn_time, agent.cancel)
        timer.daemon = True
        timer.start()
        t0 = time.perf_counter()
        try:
            move = agent.make_move(turn, self.board.copy(), opp_move)
        finally:
            timer.cancel()
        return move, time.perf_counter() - t0

    def _is_legal(self, move: Move | None) -> bool:
        if move is None:
            return False
        if not self.board.in_bounds(move.x, move.y):
            return False
        return self.board.get_owner(move.x, move.y) is None

    def _record(self, turn: int, player: Player, colour: Colour, move: Move, elapsed: float) -> None:
        result = player.agent.last_result
        self.move_records.append({
            "turn": turn,
            "player": player.name,
            "colour": colour.name,
            "x": move.x,
            "y": move.y,
            "depth": result.depth if result is not None else 0,
            "nodes": result.nodes if result is not None else 0,
            "seconds": elapsed,
        })

    def _log(self, line: str) -> None:
        if self.logDest is not None:
            print(line, file=self.logDest)
