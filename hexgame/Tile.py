from hexgame.Colour import Colour


class Tile:
    """A single cell of the board."""

    # Hex adjacency, as (i, j) offsets:
    #   (i-1, j)  (i-1, j+1)
    #   (i, j-1)  (i, j+1)
    #   (i+1, j-1)  (i+1, j)
    NEIGHBOUR_COUNT = 6
    I_DISPLACEMENTS = [-1, -1, 0, 1, 1, 0]
    J_DISPLACEMENTS = [0, 1, 1, 0, -1, -1]

    def __init__(self, x: int, y: int, colour: Colour | None = None):
        self.x = x
        self.y = y
        self.colour = colour

    def __repr__(self) -> str:
        return f"Tile({self.x}, {self.y}, {self.colour})"
