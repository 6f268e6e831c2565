"""
Chord gesture for the Minesweeper board engine.

A chord is pressed over a revealed numbered cell, which marks its hidden
neighbors as pressed, and then either released (revealing the unflagged
neighbors when enough flags surround the cell) or cancelled.
"""
from typing import TYPE_CHECKING, Optional, Set, Tuple

from .events import EventKind

if TYPE_CHECKING:
    from .board import Board


class ChordGesture:
    """
    Press/release/cancel state machine: Idle -> Pressed(anchor) -> Idle.

    Only one chord may be active at a time. The anchor recorded on press
    must match the coordinates given on release; any other release is
    treated as a cancel.
    """

    def __init__(self, board: "Board") -> None:
        self._board = board
        self._anchor: Optional[Tuple[int, int]] = None
        self._pressed: Set[Tuple[int, int]] = set()

    @property
    def anchor(self) -> Optional[Tuple[int, int]]:
        """Cell the active chord was pressed on, or None when idle."""
        return self._anchor

    def press(self, row: int, col: int) -> bool:
        """
        Start a chord on a revealed numbered cell.

        Returns:
            True if the chord became active, False otherwise.
        """
        board = self._board
        if not board.is_playing:
            return False
        cell = board.get_cell(row, col)
        if cell is None or not cell.is_numbered:
            return False

        self.cancel()
        self._anchor = (row, col)
        for neighbor_row, neighbor_col in board.neighbors(row, col):
            neighbor = board.get_cell(neighbor_row, neighbor_col)
            if neighbor.is_hidden:
                neighbor.pressed = True
                self._pressed.add((neighbor_row, neighbor_col))
                board.notify(EventKind.PRESSED, neighbor_row, neighbor_col)
        return True

    def release(self, row: int, col: int) -> bool:
        """
        Finish the chord anchored at (row, col).

        Reveals every hidden neighbor when the flagged neighbors number at
        least the cell's label. The chord ends either way.

        Returns:
            True if any neighbor was revealed.
        """
        board = self._board
        cell = board.get_cell(row, col)
        if (
            self._anchor != (row, col)
            or cell is None
            or not cell.is_numbered
            or not board.is_playing
        ):
            self.cancel()
            return False

        revealed_any = False
        if board.count_adjacent_flags(row, col) >= cell.adjacent_mines:
            revealed_any = board.reveal_cells(board.neighbors(row, col))

        self.cancel()
        return revealed_any

    def cancel(self) -> bool:
        """
        Clear pressed markers and return to idle. Never reveals anything.

        Returns:
            True if a chord was active.
        """
        was_active = self._anchor is not None
        for pressed_row, pressed_col in sorted(self._pressed):
            cell = self._board.get_cell(pressed_row, pressed_col)
            if cell.pressed:
                cell.pressed = False
                self._board.notify(EventKind.UNPRESSED, pressed_row, pressed_col)
        self._pressed.clear()
        self._anchor = None
        return was_active
