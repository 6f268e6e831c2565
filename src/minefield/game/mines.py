"""
Mine distribution for the Minesweeper board engine.

Mines are drawn once per board by rejection sampling and never move
afterwards.
"""
import logging
from typing import Optional, Set, Tuple

import numpy as np

logger = logging.getLogger(__name__)


def clamp_mine_count(rows: int, cols: int, requested: int) -> int:
    """Limit a mine request so at least one safe cell remains."""
    return max(0, min(requested, rows * cols - 1))


def place_mines(
    rows: int,
    cols: int,
    requested: int,
    rng: Optional[np.random.Generator] = None,
) -> Set[Tuple[int, int]]:
    """
    Choose distinct mine coordinates uniformly at random.

    Draws a random (row, col) pair and discards it if already chosen,
    until the clamped count is reached.

    Args:
        rows: Number of rows in the grid.
        cols: Number of columns in the grid.
        requested: Mines asked for; clamped to rows * cols - 1.
        rng: Random source (default: fresh unseeded generator).

    Returns:
        Set of (row, col) mine positions.
    """
    rng = rng if rng is not None else np.random.default_rng()
    count = clamp_mine_count(rows, cols, requested)
    if count < requested:
        logger.debug(
            "Clamped mine request %d to %d on %dx%d grid",
            requested, count, rows, cols,
        )

    mines: Set[Tuple[int, int]] = set()
    while len(mines) < count:
        position = (int(rng.integers(rows)), int(rng.integers(cols)))
        mines.add(position)
    return mines
