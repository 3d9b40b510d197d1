from collections import deque

from hexgame.Colour import Colour
from hexgame.Move import Move
from hexgame.Tile import Tile


class Board:
    """
    Hex board state: the grid of tiles, the side to move, the last stone
    played and the winner (if any).

    Coordinates are (x, y) = (row, column). RED owns the top (x = 0) and
    bottom (x = size - 1) edges, BLUE owns the left (y = 0) and right
    (y = size - 1) edges.

    `place_stone` never mutates the receiver: it returns a new Board, so a
    board shared between several search frames is never changed under them.
    `set_tile_colour` mutates in place and is meant for setting up positions.
    """

    def __init__(self, board_size: int = 11, current_colour: Colour = Colour.RED):
        if board_size < 1:
            raise ValueError(f"board_size must be positive, got {board_size}")

        self._size = board_size
        self._tiles = [[Tile(i, j) for j in range(board_size)] for i in range(board_size)]
        self.current_colour = current_colour
        self.last_move: Move | None = None
        self._winner: Colour | None = None

    @property
    def size(self) -> int:
        return self._size

    @property
    def tiles(self) -> list[list[Tile]]:
        return self._tiles

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._size and 0 <= y < self._size

    def get_owner(self, x: int, y: int) -> Colour | None:
        self._check_bounds(x, y)
        return self._tiles[x][y].colour

    def neighbours(self, x: int, y: int) -> list[Move]:
        """The up-to-six hex neighbours of (x, y), clipped to the board."""
        result = []
        for k in range(Tile.NEIGHBOUR_COUNT):
            nx = x + Tile.I_DISPLACEMENTS[k]
            ny = y + Tile.J_DISPLACEMENTS[k]
            if 0 <= nx < self._size and 0 <= ny < self._size:
                result.append(Move(nx, ny))
        return result

    def get_legal_moves(self) -> list[Move]:
        """All empty cells, in row-major order."""
        moves = []
        for x in range(self._size):
            row = self._tiles[x]
            for y in range(self._size):
                if row[y].colour is None:
                    moves.append(Move(x, y))
        return moves

    def count_empty(self) -> int:
        return sum(1 for row in self._tiles for tile in row if tile.colour is None)

    def has_ended(self, colour: Colour) -> bool:
        """True if `colour` has connected its two edges."""
        return self._winner == colour

    def is_game_over(self) -> bool:
        return self._winner is not None

    def get_winner(self) -> Colour | None:
        return self._winner

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------
    def source_edge(self, colour: Colour) -> list[Move]:
        if colour == Colour.RED:
            return [Move(0, y) for y in range(self._size)]
        return [Move(x, 0) for x in range(self._size)]

    def goal_edge(self, colour: Colour) -> list[Move]:
        last = self._size - 1
        if colour == Colour.RED:
            return [Move(last, y) for y in range(self._size)]
        return [Move(x, last) for x in range(self._size)]

    def is_goal(self, x: int, y: int, colour: Colour) -> bool:
        last = self._size - 1
        return x == last if colour == Colour.RED else y == last

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------
    def set_tile_colour(self, x: int, y: int, colour: Colour | None) -> None:
        """Overwrite one tile in place and refresh the winner."""
        self._check_bounds(x, y)
        self._tiles[x][y].colour = colour
        self._winner = None
        for c in (Colour.RED, Colour.BLUE):
            if self._connects(c):
                self._winner = c
                break

    def place_stone(self, move: Move) -> "Board":
        """
        Return a new board with a stone of the side to move on `move`,
        the turn passed to the other side.
        """
        self._check_bounds(move.x, move.y)
        if self._winner is not None:
            raise ValueError(f"Cannot play {move}: the game is already over")
        if self._tiles[move.x][move.y].colour is not None:
            raise ValueError(f"Cannot play {move}: tile is occupied")

        mover = self.current_colour
        child = self.copy()
        child._tiles[move.x][move.y].colour = mover
        child.last_move = move
        child.current_colour = mover.opposite()
        if child._connects(mover):
            child._winner = mover
        return child

    def copy(self) -> "Board":
        new_board = Board.__new__(Board)
        new_board._size = self._size
        new_board._tiles = [
            [Tile(tile.x, tile.y, tile.colour) for tile in row] for row in self._tiles
        ]
        new_board.current_colour = self.current_colour
        new_board.last_move = self.last_move
        new_board._winner = self._winner
        return new_board

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise ValueError(f"({x},{y}) is outside a {self._size}x{self._size} board")

    def _connects(self, colour: Colour) -> bool:
        """BFS over `colour` stones from its source edge to its goal edge."""
        size = self._size
        tiles = self._tiles
        visited = [[False] * size for _ in range(size)]
        queue = deque()

        for cell in self.source_edge(colour):
            if tiles[cell.x][cell.y].colour == colour:
                visited[cell.x][cell.y] = True
                queue.append((cell.x, cell.y))

        while queue:
            x, y = queue.popleft()
            if self.is_goal(x, y, colour):
                return True
            for k in range(Tile.NEIGHBOUR_COUNT):
                nx = x + Tile.I_DISPLACEMENTS[k]
                ny = y + Tile.J_DISPLACEMENTS[k]
                if 0 <= nx < size and 0 <= ny < size and not visited[nx][ny]:
                    if tiles[nx][ny].colour == colour:
                        visited[nx][ny] = True
                        queue.append((nx, ny))
        return False

    def __str__(self) -> str:
        lines = []
        for x in range(self._size):
            cells = []
            for y in range(self._size):
                colour = self._tiles[x][y].colour
                cells.append(colour.get_char() if colour is not None else "0")
            lines.append(" " * x + " ".join(cells))
        return "\n".join(lines)
