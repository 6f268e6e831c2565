"""
Board module for the Minesweeper board engine.

Implements the game board with mine placement, cascading reveal,
flagging, chording and game state tracking.
"""
import logging
from dataclasses import InitVar, dataclass, field
from enum import Enum, auto
from typing import FrozenSet, Iterable, List, Optional, Tuple

import numpy as np

from .adjacency import compute_adjacency, neighbors
from .cell import Cell, CellState
from .chord import ChordGesture
from .events import BoardEvent, BoardListener, EventKind
from .mines import clamp_mine_count, place_mines

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Mines requested. Requests that would leave no safe
            cell are clamped, see mine_count.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def mine_count(self) -> int:
        """Mines actually placed: at most total_cells - 1."""
        return clamp_mine_count(self.height, self.width, self.num_mines)


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)


# ============================================================================
# Board Class
# ============================================================================

@dataclass(eq=False)
class Board:
    """
    Minesweeper game board.

    Mines and adjacency labels are fixed when the board is built; only
    cell states change afterwards. Start a new game with a new Board.

    Every command is a no-op returning False when it does not apply
    (out of range, wrong cell state, game over). Nothing here raises
    once the board exists.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: InitVar[Optional[np.random.Generator]] = None
    mines: InitVar[Optional[Iterable[Tuple[int, int]]]] = None
    seed: InitVar[Optional[int]] = None
    _grid: List[List[Cell]] = field(default_factory=list, init=False, repr=False)
    _mines: FrozenSet[Tuple[int, int]] = field(
        default=frozenset(), init=False, repr=False
    )
    _game_state: GameState = field(default=GameState.PLAYING, init=False)
    _exploded: Optional[Tuple[int, int]] = field(default=None, init=False)
    _safe_revealed: int = field(default=0, init=False)
    _listeners: List[BoardListener] = field(
        default_factory=list, init=False, repr=False
    )
    _chord: ChordGesture = field(init=False, repr=False)

    def __post_init__(
        self,
        rng: Optional[np.random.Generator],
        mines: Optional[Iterable[Tuple[int, int]]],
        seed: Optional[int],
    ) -> None:
        """Build the grid, place mines and label every safe cell."""
        self._init_grid()
        if rng is None and seed is not None:
            rng = np.random.default_rng(seed)
        if mines is None:
            self._mines = frozenset(
                place_mines(
                    self.config.height,
                    self.config.width,
                    self.config.num_mines,
                    rng,
                )
            )
        else:
            self._mines = self._validate_layout(mines)
        for row, col in self._mines:
            self._grid[row][col].is_mine = True
        compute_adjacency(self._grid)
        self._chord = ChordGesture(self)
        logger.debug(
            "Created %dx%d board with %d mines",
            self.config.height, self.config.width, len(self._mines),
        )

    @classmethod
    def from_mines(
        cls, height: int, width: int, mines: Iterable[Tuple[int, int]]
    ) -> "Board":
        """
        Build a board with a fixed mine layout.

        Args:
            height: Number of rows.
            width: Number of columns.
            mines: (row, col) positions of every mine.

        Raises:
            ValueError: If a position is off the board or no safe cell
                would remain.
        """
        layout = frozenset(mines)
        config = BoardConfig(width=width, height=height, num_mines=len(layout))
        return cls(config, mines=layout)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    def _validate_layout(
        self, mines: Iterable[Tuple[int, int]]
    ) -> FrozenSet[Tuple[int, int]]:
        """Check an explicit mine layout against the configuration."""
        layout = frozenset((int(row), int(col)) for row, col in mines)
        for row, col in layout:
            if not self._is_valid_position(row, col):
                raise ValueError(f"Mine position off the board: {(row, col)}")
        if len(layout) > self.config.total_cells - 1:
            raise ValueError("Mine layout leaves no safe cell")
        if len(layout) != self.config.mine_count:
            raise ValueError(
                f"Mine layout has {len(layout)} mines, "
                f"config expects {self.config.mine_count}"
            )
        return layout

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors.
        """
        return list(neighbors(row, col, self.config.height, self.config.width))

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    def count_adjacent_flags(self, row: int, col: int) -> int:
        """Count flagged cells adjacent to position."""
        return sum(
            1 for r, c in self.neighbors(row, col) if self._grid[r][c].is_flagged
        )

    def _hidden_neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        return [(r, c) for r, c in self.neighbors(row, col) if self._grid[r][c].is_hidden]

    # ========================================================================
    # Notifications
    # ========================================================================

    def add_listener(self, listener: BoardListener) -> None:
        """Subscribe to state-change events."""
        self._listeners.append(listener)

    def remove_listener(self, listener: BoardListener) -> None:
        """Unsubscribe a listener; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify(self, kind: EventKind, row: int, col: int) -> None:
        """Deliver an event to every listener, in subscription order."""
        event = BoardEvent(kind, row, col)
        for listener in list(self._listeners):
            listener(event)

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def _can_act(self, row: int, col: int) -> bool:
        return self._game_state == GameState.PLAYING and self._is_valid_position(
            row, col
        )

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal a hidden cell.

        A mine loses the game and uncovers every other hidden mine.
        A cell with no adjacent mines reveals its neighbors, spreading
        through the whole zero region and its numbered border.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            True if reveal was successful, False otherwise.
        """
        if not self._can_act(row, col):
            return False
        return self.reveal_cells([(row, col)])

    def reveal_cells(self, positions: Iterable[Tuple[int, int]]) -> bool:
        """
        Reveal several hidden cells as one move.

        Every hidden safe target is revealed (with cascades) even when
        another target is a mine. The first mine in the given order then
        explodes and the game is lost.

        Returns:
            True if any cell was revealed.
        """
        if not self.is_playing:
            return False
        targets = [
            (row, col) for row, col in positions
            if self._is_valid_position(row, col) and self._grid[row][col].is_hidden
        ]
        if not targets:
            return False

        mines = [(row, col) for row, col in targets if self._grid[row][col].is_mine]
        for row, col in targets:
            if (row, col) not in mines:
                self._flood_reveal(row, col)

        if mines:
            self._explode(*mines[0])
        else:
            self._check_win_condition(*targets[-1])
        return True

    def _flood_reveal(self, row: int, col: int) -> None:
        """Reveal from (row, col) using an explicit stack."""
        stack = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            cell = self._grid[current_row][current_col]
            if not cell.reveal():
                continue
            self._safe_revealed += 1
            self.notify(EventKind.REVEALED, current_row, current_col)
            if cell.adjacent_mines == 0:
                stack.extend(self._hidden_neighbors(current_row, current_col))

    def _explode(self, row: int, col: int) -> None:
        """Lose the game: explode this mine and show all other hidden mines."""
        self._grid[row][col].explode()
        self._exploded = (row, col)
        self.notify(EventKind.MINE_EXPLODED, row, col)

        for mine_row, mine_col in sorted(self._mines):
            if self._grid[mine_row][mine_col].reveal():
                self.notify(EventKind.MINE_REVEALED, mine_row, mine_col)

        self._game_state = GameState.LOST
        logger.info("Game lost: mine at (%d, %d)", row, col)
        self.notify(EventKind.GAME_LOST, row, col)

    def _check_win_condition(self, row: int, col: int) -> None:
        """Mark the game won once every safe cell is revealed."""
        if self.is_solved():
            self._game_state = GameState.WON
            logger.info("Game won after revealing (%d, %d)", row, col)
            self.notify(EventKind.GAME_WON, row, col)

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if not self._can_act(row, col):
            return False
        cell = self._grid[row][col]
        if not cell.toggle_flag():
            return False
        kind = EventKind.FLAGGED if cell.is_flagged else EventKind.UNFLAGGED
        self.notify(kind, row, col)
        return True

    def auto_flag_neighbors(self, row: int, col: int) -> bool:
        """
        Flag every hidden neighbor when their number equals the label.

        Only applies to revealed numbered cells. Already flagged neighbors
        are not hidden, so they do not count toward the match.

        Returns:
            True if any neighbor was flagged.
        """
        if not self._can_act(row, col):
            return False
        cell = self._grid[row][col]
        if not cell.is_numbered:
            return False

        hidden = self._hidden_neighbors(row, col)
        if len(hidden) != cell.adjacent_mines:
            return False
        for neighbor_row, neighbor_col in hidden:
            self.toggle_flag(neighbor_row, neighbor_col)
        return True

    def chord_press(self, row: int, col: int) -> bool:
        """Begin a chord on a revealed numbered cell."""
        return self._chord.press(row, col)

    def chord_release(self, row: int, col: int) -> bool:
        """Finish the chord anchored at (row, col)."""
        return self._chord.release(row, col)

    def chord_cancel(self) -> bool:
        """Abandon the active chord without revealing anything."""
        return self._chord.cancel()

    def chord(self, row: int, col: int) -> bool:
        """
        Press and release a chord in one call.

        Returns:
            True if any neighbor was revealed.
        """
        if not self.chord_press(row, col):
            return False
        return self.chord_release(row, col)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def mine_positions(self) -> FrozenSet[Tuple[int, int]]:
        return self._mines

    @property
    def mine_count(self) -> int:
        return len(self._mines)

    @property
    def safe_cell_count(self) -> int:
        return self.config.total_cells - len(self._mines)

    @property
    def revealed_count(self) -> int:
        """Safe cells revealed so far."""
        return self._safe_revealed

    @property
    def flag_count(self) -> int:
        return sum(cell.is_flagged for cells in self._grid for cell in cells)

    @property
    def mines_remaining(self) -> int:
        """Mines minus flags; negative when over-flagged."""
        return self.mine_count - self.flag_count

    @property
    def exploded_cell(self) -> Optional[Tuple[int, int]]:
        """Position of the mine that lost the game, if any."""
        return self._exploded

    @property
    def chord_anchor(self) -> Optional[Tuple[int, int]]:
        return self._chord.anchor

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def cell_state(self, row: int, col: int) -> Optional[CellState]:
        cell = self.get_cell(row, col)
        return cell.state if cell is not None else None

    def adjacent_mine_count(self, row: int, col: int) -> int:
        cell = self.get_cell(row, col)
        if cell is None or cell.is_mine:
            return 0
        return cell.adjacent_mines

    def is_mine(self, row: int, col: int) -> bool:
        cell = self.get_cell(row, col)
        return cell is not None and cell.is_mine

    def is_pressed_for_display(self, row: int, col: int) -> bool:
        cell = self.get_cell(row, col)
        return cell is not None and cell.pressed

    def is_solved(self) -> bool:
        """True when every safe cell is revealed and no mine is."""
        for cells in self._grid:
            for cell in cells:
                if cell.is_mine and cell.is_revealed:
                    return False
                if not cell.is_mine and not cell.is_revealed:
                    return False
        return True

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array of Cell.to_observation codes.
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for row in range(self.config.height):
            for col in range(self.config.width):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of (row, col) positions of hidden cells.
        """
        if not self.is_playing:
            return []
        return [
            (row, col)
            for row in range(self.config.height)
            for col in range(self.config.width)
            if self._grid[row][col].is_hidden
        ]


def new_board(
    rows: int,
    cols: int,
    mine_count: int,
    rng: Optional[np.random.Generator] = None,
) -> Board:
    """Create a freshly mined board for a new game."""
    return Board(BoardConfig(width=cols, height=rows, num_mines=mine_count), rng=rng)
