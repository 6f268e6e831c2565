"""
Adjacency calculation for the Minesweeper board engine.
"""
from typing import Iterator, List, Tuple

from .cell import Cell

# Moore neighborhood offsets, visited in this fixed order everywhere.
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (delta_row, delta_col)
    for delta_row in (-1, 0, 1)
    for delta_col in (-1, 0, 1)
    if (delta_row, delta_col) != (0, 0)
)


def neighbors(
    row: int, col: int, rows: int, cols: int
) -> Iterator[Tuple[int, int]]:
    """Yield the in-bounds Moore neighbors of (row, col)."""
    for delta_row, delta_col in NEIGHBOR_OFFSETS:
        new_row = row + delta_row
        new_col = col + delta_col
        if 0 <= new_row < rows and 0 <= new_col < cols:
            yield new_row, new_col


def count_adjacent_mines(grid: List[List[Cell]], row: int, col: int) -> int:
    """Count mines among the neighbors of a cell."""
    rows, cols = len(grid), len(grid[0])
    return sum(
        1 for r, c in neighbors(row, col, rows, cols) if grid[r][c].is_mine
    )


def compute_adjacency(grid: List[List[Cell]]) -> None:
    """
    Store the adjacent mine count on every non-mine cell.

    Mines keep a count of 0, which is never read.
    """
    for row, cells in enumerate(grid):
        for col, cell in enumerate(cells):
            if not cell.is_mine:
                cell.adjacent_mines = count_adjacent_mines(grid, row, col)
