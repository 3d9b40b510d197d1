from abc import ABC, abstractmethod

from hexgame.Board import Board
from hexgame.Colour import Colour
from hexgame.Move import Move
from hexgame.PlayerMove import PlayerMove


class AgentBase(ABC):
    """
    Base class for every agent plugged into the Game.

    The Game calls `begin_turn()` before it arms the turn timer, then
    `make_move()`; `cancel()` may arrive from the timer thread at any point
    while `make_move()` is running.
    """

    def __init__(self, colour: Colour):
        self.colour = colour
        self.last_result: PlayerMove | None = None

    def opp_colour(self) -> Colour:
        return self.colour.opposite()

    def begin_turn(self) -> None:
        pass

    def cancel(self) -> None:
        pass

    @abstractmethod
    def make_move(self, turn: int, board: Board, opp_move: Move | None) -> Move | None:
        """
        Return the move to play on `board`.

        `board` is a private copy; agents may keep or discard it.
        """
