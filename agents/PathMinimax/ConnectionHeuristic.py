import heapq
from dataclasses import dataclass
from math import inf

from hexgame.Board import Board
from hexgame.Colour import Colour
from hexgame.Move import Move
from hexgame.Tile import Tile

# Cost of stepping onto a cell while looking for a connection.
OWN_COST = 1
EMPTY_COST = 5
ENEMY_NEIGHBOUR_PENALTY = 5

# Score contributed by each cell of the reconstructed path.
OWN_STONE_SCORE = 350
ENEMY_STONE_SCORE = -400

# Returned (negated) when a player has no way to reach its edges.
# Path scores are bounded by OWN_STONE_SCORE * size**2, far below this.
UNREACHABLE_SCORE = 10**6

CostMap = list[list[float]]


@dataclass(frozen=True)
class ShortestPath:
    """
    Cheapest connection found for one player.

    cells : source-edge cell first, goal-edge cell last; consecutive cells
            are neighbours, each cell appears once.
    cost  : cost of the two walks from the source-edge end and the goal-edge
            end back to the cell where they meet.
    """

    cells: list[Move]
    cost: float


class ConnectionHeuristic:
    """
    Estimates how close a player is to connecting its two edges.

    A Dijkstra run from the last stone played gives the cost of reaching
    every cell. The cheapest goal-edge cell and the cheapest source-edge
    cell are then traced back through predecessor pointers and joined where
    the two walks meet, giving one path from edge to edge. The score
    rewards own stones on that path and punishes enemy stones.

    Step costs
    ----------
    - Own stone: `own_cost`.
    - Empty cell: `empty_cost`.
    - Enemy stone: never entered.
    - Plus `enemy_penalty` for each enemy stone adjacent to the cell entered,
      so paths hugging the opponent's wall look more expensive.

    All costs must be non-negative for Dijkstra to be exact.
    """

    def __init__(
        self,
        own_cost: int = OWN_COST,
        empty_cost: int = EMPTY_COST,
        enemy_penalty: int = ENEMY_NEIGHBOUR_PENALTY,
    ):
        for name, value in (("own_cost", own_cost), ("empty_cost", empty_cost),
                            ("enemy_penalty", enemy_penalty)):
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

        self._own_cost = own_cost
        self._empty_cost = empty_cost
        self._enemy_penalty = enemy_penalty

    # ------------------------------------------------------------------
    # Shortest paths
    # ------------------------------------------------------------------
    def distances(
        self, board: Board, colour: Colour, source: Move | None
    ) -> tuple[CostMap, list[list[Move | None]]]:
        """
        Run Dijkstra for `colour` from `source`.

        If `source` is None (nothing played yet), every non-enemy cell of the
        player's source edge starts at distance 0.

        Returns
        -------
        (CostMap, predecessors)
            dist[x][y] is the cheapest cost from the source to (x, y), `inf`
            for enemy stones and cells walled off by them. prev[x][y] is the
            cell (x, y) was reached from, None for the starting cells.
        """
        size = board.size
        tiles = board.tiles
        enemy = colour.opposite()

        dist: CostMap = [[inf] * size for _ in range(size)]
        prev: list[list[Move | None]] = [[None] * size for _ in range(size)]
        penalty = self._penalty_map(board, enemy)

        if source is not None:
            starts = [source]
        else:
            starts = [c for c in board.source_edge(colour) if tiles[c.x][c.y].colour != enemy]

        pq: list[tuple[float, int, int]] = []
        for cell in starts:
            dist[cell.x][cell.y] = 0
            heapq.heappush(pq, (0, cell.x, cell.y))

        # Board.neighbours inlined: this loop runs once per settled cell.
        di = Tile.I_DISPLACEMENTS
        dj = Tile.J_DISPLACEMENTS

        while pq:
            cur_dist, x, y = heapq.heappop(pq)
            if cur_dist > dist[x][y]:
                continue  # outdated entry

            for k in range(Tile.NEIGHBOUR_COUNT):
                nx = x + di[k]
                ny = y + dj[k]
                if not (0 <= nx < size and 0 <= ny < size):
                    continue

                cell_colour = tiles[nx][ny].colour
                if cell_colour == enemy:
                    continue

                step = self._own_cost if cell_colour == colour else self._empty_cost
                nd = cur_dist + step + penalty[nx][ny]
                if nd < dist[nx][ny]:
                    dist[nx][ny] = nd
                    prev[nx][ny] = Move(x, y)
                    heapq.heappush(pq, (nd, nx, ny))

        return dist, prev

    def shortest_path(self, board: Board, colour: Colour, source: Move | None) -> ShortestPath | None:
        """
        Cheapest edge-to-edge path for `colour`, traced from a run at `source`.

        Returns None when either edge cannot be reached at all.
        """
        dist, prev = self.distances(board, colour, source)

        goal = self._lowest(board.goal_edge(colour), dist)
        start = self._lowest(board.source_edge(colour), dist)
        if goal is None or start is None:
            return None

        to_start = self._walk_back(start, prev)
        to_goal = self._walk_back(goal, prev)

        # Both walks follow the same predecessor tree, so once they meet they
        # coincide down to the source. Join them at the first shared cell.
        on_goal_walk = {cell: j for j, cell in enumerate(to_goal)}
        for i, cell in enumerate(to_start):
            if cell in on_goal_walk:
                j = on_goal_walk[cell]
                cells = to_start[:i + 1] + list(reversed(to_goal[:j]))
                cost = dist[goal.x][goal.y] + dist[start.x][start.y] - 2 * dist[cell.x][cell.y]
                return ShortestPath(cells=cells, cost=cost)

        # Multi-source run from different roots: the goal walk already begins
        # on the start edge.
        return ShortestPath(cells=list(reversed(to_goal)), cost=dist[goal.x][goal.y])

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    def score(self, board: Board, colour: Colour, source: Move | None) -> int:
        """
        Evaluate `board` for `colour`; higher is better for `colour`.

        Parameters
        ----------
        board : Board
            Position to evaluate.
        colour : Colour
            Player the score is computed for.
        source : Move | None
            Last stone played by `colour`; None for a multi-source run from
            the player's own edge.

        Returns
        -------
        int
            Sum over the cheapest path of OWN_STONE_SCORE per own stone and
            ENEMY_STONE_SCORE per enemy stone, or -UNREACHABLE_SCORE when no
            path exists.
        """
        path = self.shortest_path(board, colour, source)
        if path is None:
            return -UNREACHABLE_SCORE

        tiles = board.tiles
        score = 0
        for cell in path.cells:
            owner = tiles[cell.x][cell.y].colour
            if owner == colour:
                score += OWN_STONE_SCORE
            elif owner is not None:
                score += ENEMY_STONE_SCORE
        return score

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _penalty_map(self, board: Board, enemy: Colour) -> list[list[int]]:
        size = board.size
        tiles = board.tiles
        penalty = [[0] * size for _ in range(size)]
        if self._enemy_penalty == 0:
            return penalty

        for x in range(size):
            for y in range(size):
                count = sum(1 for n in board.neighbours(x, y) if tiles[n.x][n.y].colour == enemy)
                penalty[x][y] = self._enemy_penalty * count
        return penalty

    @staticmethod
    def _lowest(cells: list[Move], dist: CostMap) -> Move | None:
        """First cell of `cells` with the smallest finite distance."""
        best = None
        best_dist = inf
        for cell in cells:
            d = dist[cell.x][cell.y]
            if d < best_dist:
                best_dist = d
                best = cell
        return best

    @staticmethod
    def _walk_back(cell: Move, prev: list[list[Move | None]]) -> list[Move]:
        walk = [cell]
        step = prev[cell.x][cell.y]
        while step is not None:
            walk.append(step)
            step = prev[step.x][step.y]
        return walk
