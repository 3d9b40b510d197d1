from dataclasses import dataclass
from enum import Enum

from hexgame.Move import Move


class SearchType(Enum):
    MINIMAX = "MINIMAX"
    MINIMAX_IDS = "MINIMAX_IDS"


@dataclass(frozen=True)
class PlayerMove:
    """
    Result of one search: the chosen coordinate plus diagnostics.

    `move` is None when there was nothing to play (full or finished board).
    `nodes` is the number of leaf evaluations spent and `depth` the search
    depth that produced the move. `value` is the root value of that move
    for the side that searched.
    """

    move: Move | None
    nodes: int
    depth: int
    search_type: SearchType
    value: float = 0

    def is_absent(self) -> bool:
        return self.move is None
