"""
Unit tests for Board class.

Tests board construction, reveal and cascade, flagging, win/lose
conditions, queries, notifications and observation generation.
"""
from collections import deque

import pytest
import numpy as np
from minefield.game import (
    Board,
    BoardConfig,
    BoardEvent,
    CellState,
    EventKind,
    GameState,
    new_board,
)


def reference_flood(board: Board, start):
    """Breadth-first closure of a zero region plus its numbered border."""
    height, width = board.config.height, board.config.width
    seen = {start}
    queue = deque([start])
    while queue:
        row, col = queue.popleft()
        if board.adjacent_mine_count(row, col) != 0:
            continue
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                r, c = row + dr, col + dc
                if (r, c) not in seen and 0 <= r < height and 0 <= c < width:
                    seen.add((r, c))
                    queue.append((r, c))
    return seen


def revealed_cells(board: Board):
    """All coordinates currently in the revealed state."""
    return {
        (row, col)
        for row in range(board.config.height)
        for col in range(board.config.width)
        if board.cell_state(row, col) == CellState.REVEALED
    }


# ============================================================================
# Board Configuration Tests
# ============================================================================

class TestBoardConfig:
    """Test board configuration validation."""

    def test_valid_config_creation(self, valid_config: BoardConfig) -> None:
        """Valid configuration should be created successfully."""
        assert valid_config.width == 9
        assert valid_config.height == 9
        assert valid_config.num_mines == 10

    def test_zero_width_raises_error(self) -> None:
        """Width of 0 should raise ValueError."""
        with pytest.raises(ValueError, match="dimensions must be positive"):
            BoardConfig(0, 9, 10)

    def test_zero_height_raises_error(self) -> None:
        """Height of 0 should raise ValueError."""
        with pytest.raises(ValueError, match="dimensions must be positive"):
            BoardConfig(9, 0, 10)

    def test_negative_mines_raises_error(self) -> None:
        """Negative mine count should raise ValueError."""
        with pytest.raises(ValueError, match="cannot be negative"):
            BoardConfig(9, 9, -1)

    def test_too_many_mines_is_clamped(self) -> None:
        """Too many mines are clamped rather than rejected."""
        config = BoardConfig(3, 3, 10)
        assert config.mine_count == 8


# ============================================================================
# Board Construction Tests
# ============================================================================

class TestBoardConstruction:
    """Test board creation and initial state."""

    def test_new_board_is_playing(self, default_board: Board) -> None:
        """New board should be in playing state."""
        assert default_board.game_state == GameState.PLAYING
        assert default_board.is_playing is True

    def test_new_board_all_cells_hidden(self, default_board: Board) -> None:
        """All cells should be hidden on new board."""
        for row in range(9):
            for col in range(9):
                assert default_board.cell_state(row, col) == CellState.HIDDEN

    def test_mines_placed_at_construction(self, default_board: Board) -> None:
        """Mines exist before any reveal."""
        mine_count = sum(
            default_board.is_mine(row, col)
            for row in range(9)
            for col in range(9)
        )
        assert mine_count == 10
        assert default_board.mine_count == 10

    def test_mine_set_matches_cells(self, default_board: Board) -> None:
        """The mine set and the per-cell flags agree."""
        from_cells = {
            (row, col)
            for row in range(9)
            for col in range(9)
            if default_board.get_cell(row, col).is_mine
        }
        assert from_cells == default_board.mine_positions

    def test_overfull_request_leaves_safe_cell(self) -> None:
        """A board always keeps at least one safe cell."""
        board = new_board(2, 2, 50, np.random.default_rng(0))
        assert board.mine_count == 3
        assert board.safe_cell_count == 1

    def test_seeded_boards_match(self) -> None:
        """The same seed produces the same layout."""
        first = new_board(9, 9, 10, np.random.default_rng(5))
        second = new_board(9, 9, 10, np.random.default_rng(5))
        assert first.mine_positions == second.mine_positions

    def test_seed_keyword(self) -> None:
        """An integer seed gives a reproducible layout."""
        first = Board(BoardConfig(4, 4, 3), seed=7)
        second = Board(BoardConfig(4, 4, 3), seed=7)
        assert first.mine_count == 3
        assert first.mine_positions == second.mine_positions

    def test_rng_wins_over_seed(self) -> None:
        """An explicit generator takes precedence over seed."""
        board = Board(BoardConfig(4, 4, 3), rng=np.random.default_rng(1), seed=99)
        expected = Board(BoardConfig(4, 4, 3), rng=np.random.default_rng(1))
        assert board.mine_positions == expected.mine_positions

    def test_from_mines_builds_layout(self) -> None:
        """Explicit layouts set config and mines."""
        board = Board.from_mines(3, 4, [(0, 0), (2, 3)])
        assert board.config == BoardConfig(width=4, height=3, num_mines=2)
        assert board.mine_positions == {(0, 0), (2, 3)}

    def test_from_mines_off_board_raises(self) -> None:
        """Explicit layouts must fit the board."""
        with pytest.raises(ValueError, match="off the board"):
            Board.from_mines(3, 3, [(3, 0)])

    def test_from_mines_without_safe_cell_raises(self) -> None:
        """Explicit layouts must leave a safe cell."""
        with pytest.raises(ValueError, match="no safe cell"):
            Board.from_mines(1, 2, [(0, 0), (0, 1)])


# ============================================================================
# Reveal Tests
# ============================================================================

class TestReveal:
    """Test cell revealing behavior."""

    def test_reveal_numbered_cell(self, corner_mine_board: Board) -> None:
        """Revealing a numbered cell reveals only that cell."""
        assert corner_mine_board.reveal(1, 1) is True
        assert revealed_cells(corner_mine_board) == {(1, 1)}
        assert corner_mine_board.adjacent_mine_count(1, 1) == 1

    def test_reveal_same_cell_twice_is_noop(
        self, ten_by_ten_board: Board
    ) -> None:
        """Revealing twice has the same effect as revealing once."""
        ten_by_ten_board.reveal(0, 0)
        after_first = ten_by_ten_board.get_observation()
        assert ten_by_ten_board.reveal(0, 0) is False
        assert np.array_equal(ten_by_ten_board.get_observation(), after_first)

    @pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (3, 0), (0, 3)])
    def test_reveal_invalid_position_is_noop(
        self, corner_mine_board: Board, row: int, col: int
    ) -> None:
        """Out-of-range reveals change nothing."""
        assert corner_mine_board.reveal(row, col) is False
        assert revealed_cells(corner_mine_board) == set()

    def test_reveal_cells_skips_unrevealable(
        self, corner_mine_board: Board
    ) -> None:
        """Off-board, flagged and revealed targets are skipped."""
        corner_mine_board.reveal(1, 1)
        corner_mine_board.toggle_flag(1, 2)
        assert corner_mine_board.reveal_cells([(1, 1), (1, 2), (5, 5)]) is False
        assert corner_mine_board.reveal_cells([(2, 1), (1, 2)]) is True
        assert revealed_cells(corner_mine_board) == {(1, 1), (2, 1)}

    def test_reveal_flagged_cell_is_noop(self, corner_mine_board: Board) -> None:
        """Cannot reveal a flagged cell."""
        corner_mine_board.toggle_flag(0, 0)
        assert corner_mine_board.reveal(0, 0) is False
        assert corner_mine_board.cell_state(0, 0) == CellState.FLAGGED


# ============================================================================
# Cascade Reveal Tests
# ============================================================================

class TestCascadeReveal:
    """Test empty cell cascade behavior."""

    def test_empty_board_reveals_everything(self, empty_board: Board) -> None:
        """With no mines, one reveal uncovers the whole board and wins."""
        empty_board.reveal(2, 2)
        assert len(revealed_cells(empty_board)) == 25
        assert empty_board.is_won is True

    @pytest.mark.parametrize("start", [(0, 0), (0, 3), (9, 9)])
    def test_cascade_matches_reference(
        self, ten_by_ten_board: Board, ten_by_ten_mines, start
    ) -> None:
        """A zero cell reveals exactly its region plus numbered border."""
        assert ten_by_ten_board.adjacent_mine_count(*start) == 0
        expected = reference_flood(ten_by_ten_board, start)

        ten_by_ten_board.reveal(*start)

        assert revealed_cells(ten_by_ten_board) == expected
        assert len(expected) > 1
        assert not expected & ten_by_ten_mines

    def test_cascade_stops_at_numbered_cells(
        self, ten_by_ten_board: Board
    ) -> None:
        """Cells beyond the numbered border stay hidden."""
        ten_by_ten_board.reveal(0, 0)
        assert ten_by_ten_board.cell_state(5, 5) == CellState.HIDDEN
        assert ten_by_ten_board.cell_state(4, 0) == CellState.HIDDEN

    def test_cascade_skips_flagged_cells(self, empty_board: Board) -> None:
        """Flagged cells are never revealed by a cascade."""
        empty_board.toggle_flag(4, 4)
        empty_board.reveal(0, 0)
        assert empty_board.cell_state(4, 4) == CellState.FLAGGED
        assert len(revealed_cells(empty_board)) == 24
        assert empty_board.is_playing is True

    def test_large_cascade_does_not_recurse(self) -> None:
        """A huge zero region is revealed without hitting recursion limits."""
        board = Board.from_mines(200, 200, [(199, 199)])
        board.reveal(0, 0)
        assert board.revealed_count == 200 * 200 - 1
        assert board.is_won is True


# ============================================================================
# Flag Tests
# ============================================================================

class TestFlag:
    """Test flagging behavior."""

    def test_flag_hidden_cell(self, corner_mine_board: Board) -> None:
        """Flagging a hidden cell should succeed."""
        assert corner_mine_board.toggle_flag(0, 0) is True
        assert corner_mine_board.cell_state(0, 0) == CellState.FLAGGED
        assert corner_mine_board.flag_count == 1

    def test_unflag_returns_to_hidden(self, corner_mine_board: Board) -> None:
        """Unflagging should return cell to hidden."""
        corner_mine_board.toggle_flag(0, 0)
        corner_mine_board.toggle_flag(0, 0)
        assert corner_mine_board.cell_state(0, 0) == CellState.HIDDEN

    def test_flag_revealed_cell_fails(self, corner_mine_board: Board) -> None:
        """Cannot flag a revealed cell."""
        corner_mine_board.reveal(1, 1)
        assert corner_mine_board.toggle_flag(1, 1) is False
        assert corner_mine_board.cell_state(1, 1) == CellState.REVEALED

    def test_flag_out_of_range_is_noop(self, corner_mine_board: Board) -> None:
        """Out-of-range flags change nothing."""
        assert corner_mine_board.toggle_flag(5, 5) is False

    def test_mines_remaining_counts_flags(self, corner_mine_board: Board) -> None:
        """Mines remaining drops with each flag and may go negative."""
        corner_mine_board.toggle_flag(0, 0)
        corner_mine_board.toggle_flag(0, 1)
        assert corner_mine_board.mines_remaining == -1


# ============================================================================
# Win/Lose Condition Tests
# ============================================================================

class TestGameEndConditions:
    """Test win and lose conditions."""

    def test_reveal_mine_loses_game(
        self, ten_by_ten_board: Board, ten_by_ten_mines
    ) -> None:
        """Revealing a mine explodes it and shows every other mine."""
        board = ten_by_ten_board
        board.toggle_flag(0, 9)
        board.reveal(3, 0)

        assert board.is_lost is True
        assert board.exploded_cell == (3, 0)
        assert board.get_cell(3, 0).exploded is True
        for row, col in ten_by_ten_mines - {(3, 0), (0, 9)}:
            cell = board.get_cell(row, col)
            assert cell.is_revealed is True
            assert cell.exploded is False
        assert board.cell_state(0, 9) == CellState.FLAGGED

    def test_loss_leaves_safe_cells_hidden(
        self, ten_by_ten_board: Board, ten_by_ten_mines
    ) -> None:
        """The game-over reveal touches mines only."""
        ten_by_ten_board.reveal(3, 0)
        assert revealed_cells(ten_by_ten_board) == ten_by_ten_mines
        assert ten_by_ten_board.revealed_count == 0

    def test_reveal_all_safe_cells_wins(self, corner_mine_board: Board) -> None:
        """Revealing all non-mine cells should win."""
        corner_mine_board.reveal(0, 0)
        assert corner_mine_board.is_solved() is True
        assert corner_mine_board.is_won is True

    def test_not_solved_while_safe_cells_hidden(
        self, ten_by_ten_board: Board
    ) -> None:
        """A partly revealed board is not solved."""
        ten_by_ten_board.reveal(0, 0)
        assert ten_by_ten_board.is_solved() is False
        assert ten_by_ten_board.is_playing is True

    def test_lost_board_is_not_solved(self) -> None:
        """Revealing a mine rules out a solved board."""
        board = Board.from_mines(1, 3, [(0, 2)])
        board.reveal(0, 2)
        assert board.is_solved() is False

    def test_commands_ignored_after_game_over(
        self, ten_by_ten_board: Board
    ) -> None:
        """Nothing changes once the game is lost."""
        ten_by_ten_board.reveal(3, 0)
        before = ten_by_ten_board.get_observation()

        assert ten_by_ten_board.reveal(0, 0) is False
        assert ten_by_ten_board.toggle_flag(0, 0) is False
        assert np.array_equal(ten_by_ten_board.get_observation(), before)
        assert ten_by_ten_board.get_valid_actions() == []


# ============================================================================
# Query Tests
# ============================================================================

class TestQueries:
    """Test the read-only query surface."""

    def test_out_of_range_queries(self, corner_mine_board: Board) -> None:
        """Queries off the board return neutral values."""
        assert corner_mine_board.get_cell(3, 3) is None
        assert corner_mine_board.cell_state(-1, 0) is None
        assert corner_mine_board.adjacent_mine_count(0, 9) == 0
        assert corner_mine_board.is_mine(9, 9) is False
        assert corner_mine_board.is_pressed_for_display(9, 9) is False

    def test_mine_has_no_label(self, corner_mine_board: Board) -> None:
        """A mine reports no adjacent count."""
        assert corner_mine_board.is_mine(2, 2) is True
        assert corner_mine_board.adjacent_mine_count(2, 2) == 0

    def test_valid_actions_are_hidden_cells(
        self, corner_mine_board: Board
    ) -> None:
        """Valid actions list every hidden cell."""
        corner_mine_board.reveal(1, 1)
        actions = corner_mine_board.get_valid_actions()
        assert len(actions) == 8
        assert (1, 1) not in actions


# ============================================================================
# Notification Tests
# ============================================================================

class TestNotifications:
    """Test state-change events."""

    def test_reveal_events_in_order(self, corner_mine_board: Board) -> None:
        """A cascade emits one event per revealed cell, then the win."""
        events = []
        corner_mine_board.add_listener(events.append)
        corner_mine_board.reveal(0, 0)

        kinds = [event.kind for event in events]
        assert kinds.count(EventKind.REVEALED) == 8
        assert kinds[-1] == EventKind.GAME_WON
        assert events[0] == BoardEvent(EventKind.REVEALED, 0, 0)

    def test_loss_events(self, corner_mine_board: Board) -> None:
        """Exploding emits the explosion before the game loss."""
        events = []
        corner_mine_board.add_listener(events.append)
        corner_mine_board.reveal(2, 2)
        assert events == [
            BoardEvent(EventKind.MINE_EXPLODED, 2, 2),
            BoardEvent(EventKind.GAME_LOST, 2, 2),
        ]

    def test_flag_events(self, corner_mine_board: Board) -> None:
        """Flag toggles emit FLAGGED then UNFLAGGED."""
        events = []
        corner_mine_board.add_listener(events.append)
        corner_mine_board.toggle_flag(0, 1)
        corner_mine_board.toggle_flag(0, 1)
        assert [e.kind for e in events] == [EventKind.FLAGGED, EventKind.UNFLAGGED]

    def test_removed_listener_not_called(self, corner_mine_board: Board) -> None:
        """Removed listeners receive nothing."""
        events = []
        corner_mine_board.add_listener(events.append)
        corner_mine_board.remove_listener(events.append)
        corner_mine_board.toggle_flag(0, 1)
        assert events == []


# ============================================================================
# Observation Tests
# ============================================================================

class TestObservation:
    """Test observation array."""

    def test_observation_shape_matches_board(self) -> None:
        """Observation has shape (height, width)."""
        board = Board(BoardConfig(width=7, height=4, num_mines=3))
        assert board.get_observation().shape == (4, 7)

    def test_new_board_observation_all_hidden(
        self, default_board: Board
    ) -> None:
        """New board observation should be all -1."""
        assert np.all(default_board.get_observation() == -1)

    def test_observation_dtype_is_int8(self, default_board: Board) -> None:
        """Observation should be int8."""
        assert default_board.get_observation().dtype == np.int8

    def test_lost_board_observation(self, corner_mine_board: Board) -> None:
        """An exploded mine shows 10."""
        corner_mine_board.reveal(2, 2)
        assert corner_mine_board.get_observation()[2, 2] == 10
