"""
Blast Board Module.

This module implements the tile grid with:
- Same-color group discovery (4-directional flood fill)
- Group and area blasting
- Column collapse and refill, reported as an animatable Step
- Tile swapping
- Move availability checks and color reshuffling
"""
from typing import Iterable, Iterator, List, Optional, Tuple
import numpy as np

from .tile import Tile
from .types import GridPos, MovedTile, SpawnedTile, Step

NEIGHBORS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Board:
    """
    Represents the rows x cols grid of colored tiles.

    Every cell holds a Tile after any public call returns. Cells are only
    empty while a blast is collapsing and refilling the columns.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        colors_count: int,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Initialize a randomly colored board.

        Args:
            rows: Number of rows
            cols: Number of columns
            colors_count: Size of the color palette
            rng: Random generator used for colors and shuffles
        """
        self.rows = rows
        self.cols = cols
        self.colors_count = colors_count
        self.rng = rng if rng is not None else np.random.default_rng()
        self._next_id = 1
        self._grid: List[List[Optional[Tile]]] = []
        self.reset()

    def reset(self) -> None:
        """Replace every cell with a fresh random tile."""
        self._grid = [
            [self._create_tile(r, c) for c in range(self.cols)]
            for r in range(self.rows)
        ]

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if coordinates are within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get_tile(self, row: int, col: int) -> Optional[Tile]:
        """Get the tile at a cell, or None when out of bounds."""
        if not self.in_bounds(row, col):
            return None
        return self._grid[row][col]

    def tiles(self) -> Iterator[Tile]:
        """Iterate over all tiles in row-major order."""
        for row in self._grid:
            for tile in row:
                if tile is not None:
                    yield tile

    @property
    def next_id(self) -> int:
        """Id the next created tile will receive."""
        return self._next_id

    def find_group(self, row: int, col: int) -> List[Tile]:
        """
        Find the maximal 4-connected group of same-colored tiles.

        Args:
            row: Row of the starting cell
            col: Column of the starting cell

        Returns:
            Tiles of the group (empty if the cell is empty or out of bounds)
        """
        start = self.get_tile(row, col)
        if start is None:
            return []

        color = start.color
        visited = {(row, col)}
        stack = [(row, col)]
        group = []

        while stack:
            r, c = stack.pop()
            tile = self._grid[r][c]
            group.append(tile)
            for dr, dc in NEIGHBORS:
                nr, nc = r + dr, c + dc
                if not self.in_bounds(nr, nc) or (nr, nc) in visited:
                    continue
                neighbor = self._grid[nr][nc]
                if neighbor is None or neighbor.color != color:
                    continue
                visited.add((nr, nc))
                stack.append((nr, nc))

        return group

    def groups(self) -> List[List[Tile]]:
        """Partition the board into its maximal same-color groups."""
        seen = set()
        result = []
        for tile in self.tiles():
            if tile.id in seen:
                continue
            group = self.find_group(tile.row, tile.col)
            seen.update(t.id for t in group)
            result.append(group)
        return result

    def blast_at(
        self, row: int, col: int, min_group_size: int
    ) -> Optional[Tuple[List[Tile], Step]]:
        """
        Remove the group at a cell if it is large enough.

        Returns:
            (group, step) on success, None if the group is too small
        """
        group = self.find_group(row, col)
        if not group or len(group) < min_group_size:
            return None
        step = self._blast_tiles(group)
        return group, step

    def blast_positions(
        self, positions: Iterable[GridPos]
    ) -> Optional[Tuple[List[Tile], Step]]:
        """
        Remove every tile found at the given coordinates.

        Duplicate, out-of-bounds and empty coordinates are skipped.

        Returns:
            (tiles, step) on success, None if no tile was found
        """
        seen = set()
        tiles = []
        for row, col in positions:
            if (row, col) in seen:
                continue
            seen.add((row, col))
            tile = self.get_tile(row, col)
            if tile is not None:
                tiles.append(tile)

        if not tiles:
            return None
        step = self._blast_tiles(tiles)
        return tiles, step

    def swap_tiles(self, a: GridPos, b: GridPos) -> Optional[Step]:
        """
        Exchange the tiles at two cells.

        Returns:
            Step with two moved entries, or None if either cell is invalid
        """
        if not self.in_bounds(*a) or not self.in_bounds(*b):
            return None

        t1 = self._grid[a[0]][a[1]]
        t2 = self._grid[b[0]][b[1]]
        if t1 is None or t2 is None:
            return None

        self._grid[a[0]][a[1]] = t2
        self._grid[b[0]][b[1]] = t1
        t1.row, t1.col = b
        t2.row, t2.col = a

        return Step(moved=[
            MovedTile(t1.id, tuple(a), tuple(b)),
            MovedTile(t2.id, tuple(b), tuple(a)),
        ])

    def has_any_move(self, min_group_size: int) -> bool:
        """Check whether at least one group of the minimum size exists."""
        if min_group_size <= 1:
            return True

        grid = self._grid
        if min_group_size == 2:
            # Any equal neighbor pair is already a qualifying group
            for r in range(self.rows):
                for c in range(self.cols):
                    tile = grid[r][c]
                    if tile is None:
                        continue
                    if c + 1 < self.cols and grid[r][c + 1] is not None \
                            and grid[r][c + 1].color == tile.color:
                        return True
                    if r + 1 < self.rows and grid[r + 1][c] is not None \
                            and grid[r + 1][c].color == tile.color:
                        return True
            return False

        visited = [[False] * self.cols for _ in range(self.rows)]
        for r in range(self.rows):
            for c in range(self.cols):
                if visited[r][c] or grid[r][c] is None:
                    continue
                group = self.find_group(r, c)
                for tile in group:
                    visited[tile.row][tile.col] = True
                if len(group) >= min_group_size:
                    return True
        return False

    def shuffle_colors(self) -> None:
        """
        Permute tile colors uniformly at random (Fisher-Yates).

        Tile ids and positions stay where they are; only colors move.
        """
        tiles = list(self.tiles())
        colors = [tile.color for tile in tiles]
        if not colors:
            return

        for i in range(len(colors) - 1, 0, -1):
            j = int(self.rng.integers(0, i + 1))
            colors[i], colors[j] = colors[j], colors[i]

        for tile, color in zip(tiles, colors):
            tile.color = color

    def get_state(self) -> np.ndarray:
        """Get the board colors as a numpy array."""
        state = np.full((self.rows, self.cols), -1, dtype=np.int8)
        for tile in self.tiles():
            state[tile.row, tile.col] = tile.color
        return state

    def set_state(self, colors) -> None:
        """
        Rebuild the grid from a matrix of colors.

        Every cell gets a new tile with the next sequential id.
        """
        state = np.asarray(colors, dtype=np.int64)
        if state.ndim != 2:
            raise ValueError(f"Expected a 2D color matrix, got shape {state.shape}")
        if state.size and (state.min() < 0 or state.max() >= self.colors_count):
            raise ValueError(f"Colors must be in [0, {self.colors_count})")

        self.rows, self.cols = state.shape
        self._grid = [
            [Tile(self._take_id(), int(state[r, c]), r, c) for c in range(self.cols)]
            for r in range(self.rows)
        ]

    def _blast_tiles(self, tiles: List[Tile]) -> Step:
        """Remove tiles, let columns fall and refill the gaps from above."""
        step = Step(removed=[t.id for t in tiles])
        for tile in tiles:
            self._grid[tile.row][tile.col] = None

        for c in range(self.cols):
            write_row = self.rows - 1
            for read_row in range(self.rows - 1, -1, -1):
                tile = self._grid[read_row][c]
                if tile is None:
                    continue
                if read_row != write_row:
                    step.moved.append(MovedTile(tile.id, (read_row, c), (write_row, c)))
                    self._grid[write_row][c] = tile
                    self._grid[read_row][c] = None
                    tile.row = write_row
                write_row -= 1

            for r in range(write_row, -1, -1):
                tile = self._create_tile(r, c)
                self._grid[r][c] = tile
                step.spawned.append(SpawnedTile(tile.id, (r, c)))

        return step

    def _take_id(self) -> int:
        tile_id = self._next_id
        self._next_id += 1
        return tile_id

    def _create_tile(self, row: int, col: int) -> Tile:
        color = int(self.rng.integers(0, self.colors_count))
        return Tile(self._take_id(), color, row, col)

    def __str__(self) -> str:
        """Create a string visualization of the board colors."""
        lines = ["  " + " ".join(str(i) for i in range(self.cols))]
        lines.append("  " + "-" * (self.cols * 2 - 1))
        for r in range(self.rows):
            cells = " ".join(
                "." if t is None else str(t.color) for t in self._grid[r]
            )
            lines.append(f"{r}|{cells}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, cols={self.cols}, colors={self.colors_count})"
