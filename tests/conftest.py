"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield.game import Board, BoardConfig, Cell


# ============================================================================
# Mine Layouts
# ============================================================================

# 10x10 layout with 20 mines; the top-left and bottom-right quadrants hold
# large zero regions.
TEN_BY_TEN_MINES = frozenset([
    (0, 6), (0, 9), (1, 7), (2, 8), (3, 0), (3, 1), (3, 2), (3, 6),
    (4, 5), (5, 9), (6, 0), (6, 3), (7, 1), (7, 4), (8, 2), (8, 7),
    (9, 0), (9, 4), (9, 5), (2, 4),
])


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random source."""
    return np.random.default_rng(1234)


@pytest.fixture
def default_board(rng: np.random.Generator) -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board(rng=rng)


@pytest.fixture
def ten_by_ten_mines():
    """Mine positions of the 10x10 layout."""
    return TEN_BY_TEN_MINES


@pytest.fixture
def ten_by_ten_board() -> Board:
    """10x10 board with the fixed 20-mine layout."""
    return Board.from_mines(10, 10, TEN_BY_TEN_MINES)


@pytest.fixture
def corner_mine_board() -> Board:
    """
    3x3 board with one mine in the bottom-right corner.

        . . .
        . 1 1
        . 1 *
    """
    return Board.from_mines(3, 3, [(2, 2)])


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board.from_mines(5, 5, [])


@pytest.fixture
def chord_board() -> Board:
    """
    3x4 board for chord and auto-flag tests.

        * . * .
        . 2 . .
        . . . *

    (1, 1) is a "2" whose neighbors hold mines at (0, 0) and (0, 2).
    """
    return Board.from_mines(3, 4, [(0, 0), (0, 2), (2, 3)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(adjacent_mines=3)
    cell.reveal()
    return cell


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)


@pytest.fixture
def small_config() -> BoardConfig:
    """Small configuration for environment tests."""
    return BoardConfig(4, 4, 2)
