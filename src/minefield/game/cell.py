"""
Cell module for the Minesweeper board engine.

Represents individual cells on the game board with their state
(hidden/revealed/flagged) and content (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# Observation codes shared by the board, the environment and the agents.
OBS_PRESSED = -3
OBS_FLAGGED = -2
OBS_HIDDEN = -1
OBS_MINE = 9
OBS_EXPLODED = 10


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
            Unused while is_mine is True.
        state: Current state (hidden, revealed, or flagged).
        exploded: True only for the mine whose reveal lost the game.
        pressed: Display hint set while a chord is held over a neighbor.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN
    exploded: bool = False
    pressed: bool = False

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        self.pressed = False
        return True

    def explode(self) -> bool:
        """Reveal this cell as the mine that ended the game."""
        if not self.reveal():
            return False
        self.exploded = True
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
            self.pressed = False
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_numbered(self) -> bool:
        """Revealed safe cell showing a non-zero label."""
        return self.is_revealed and not self.is_mine and self.adjacent_mines > 0

    def to_observation(self) -> int:
        """
        Convert cell to an observation value.

        Returns:
            -3: Hidden cell pressed by an active chord
            -2: Flagged cell
            -1: Hidden cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
            10: Exploded mine
        """
        if self.state == CellState.HIDDEN:
            return OBS_PRESSED if self.pressed else OBS_HIDDEN
        if self.state == CellState.FLAGGED:
            return OBS_FLAGGED
        if self.is_mine:
            return OBS_EXPLODED if self.exploded else OBS_MINE
        return self.adjacent_mines
