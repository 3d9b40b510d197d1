from enum import Enum


class Colour(Enum):
    """Stone colours. RED connects top to bottom, BLUE left to right."""

    RED = 0
    BLUE = 1

    def opposite(self) -> "Colour":
        if self == Colour.RED:
            return Colour.BLUE
        return Colour.RED

    def get_char(self) -> str:
        return "R" if self == Colour.RED else "B"
