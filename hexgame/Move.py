from dataclasses import dataclass


@dataclass(frozen=True)
class Move:
    """A board coordinate: x is the row, y is the column."""

    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x},{self.y})"
