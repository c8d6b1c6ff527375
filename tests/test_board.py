"""Tests for board functionality."""

import pytest

from piece_control.board import Board
from piece_control.clock import ManualClock
from piece_control.piece import Piece
from piece_control.shapes import get_shape


def make_board(seed=0):
    return Board(seed=seed, clock=ManualClock())


def test_board_initialization():
    """Test board starts empty with no active piece."""
    board = make_board()
    assert all(cell == 0 for cell in board.cells), "Board should start empty"
    assert board.active_piece is None
    assert board.pieces_spawned == 0


def test_valid_position():
    """Test validity against boundaries and blocks."""
    board = make_board()
    cells = get_shape("T").cells

    assert board.is_valid_position(cells, (4, 0)), "Resting on the floor is valid"
    assert not board.is_valid_position(cells, (4, -1)), "Below the floor is invalid"
    assert not board.is_valid_position(cells, (0, 5)), "Left of the wall is invalid"
    assert not board.is_valid_position(cells, (9, 5)), "Right of the wall is invalid"
    assert not board.is_valid_position(cells, (4, 19)), "Above the top is invalid"

    board.set(5, 5, 1)
    assert not board.is_valid_position(cells, (4, 5)), "Occupied cell is invalid"
    assert board.is_valid_position(cells, (4, 6))


def test_set_and_clear_piece():
    """Test writing and erasing a piece footprint."""
    board = make_board()
    piece = Piece(board, (4, 10), get_shape("S"), clock=board.clock)

    board.set_piece(piece)
    board.set_piece(piece)
    for x, y in piece.get_cells():
        assert board.get(x, y) == Board.PIECE_VALUES["S"]
    assert sum(1 for cell in board.cells if cell) == 4, "Setting twice is idempotent"

    board.clear_piece(piece)
    assert all(cell == 0 for cell in board.cells)


def test_line_clearing():
    """Test clearing a complete line shifts rows above down."""
    board = make_board()

    for x in range(board.WIDTH):
        board.set(x, 0, 1)
    board.set(2, 1, 3)

    lines_cleared = board.clear_lines()

    assert lines_cleared == 1, "Should clear one line"
    assert board.get(2, 0) == 3, "Block above should fall into the cleared row"
    assert board.get(2, 1) == 0
    assert board.lines_total == 1


def test_multiple_line_clearing():
    """Test clearing multiple lines, including non-adjacent ones."""
    board = make_board()

    for y in (0, 1, 3):
        for x in range(board.WIDTH):
            board.set(x, y, 1)
    board.set(0, 2, 1)

    assert board.clear_lines() == 3, "Should clear three lines"
    assert board.get(0, 0) == 1, "Partial row should settle at the bottom"
    assert sum(1 for cell in board.cells if cell) == 1


def test_column_heights():
    """Test calculating column heights from the floor."""
    board = make_board()

    board.set(5, 0, 1)
    board.set(5, 1, 1)
    board.set(5, 4, 1)  # Gap at 2-3

    heights = board.get_column_heights()
    assert heights[5] == 5
    assert heights[0] == 0


def test_spawn_piece():
    """Test spawning commits the new piece at the spawn position."""
    board = make_board(seed=3)

    piece = board.spawn_piece()

    assert board.active_piece is piece
    assert piece.position == Board.SPAWN_POSITION
    assert piece.rotation_index == 0
    assert board.pieces_spawned == 1
    for x, y in piece.get_cells():
        assert board.get(x, y) == Board.PIECE_VALUES[piece.type]


def test_blocked_spawn_tops_out():
    """Test a blocked spawn wipes the grid and keeps playing."""
    board = make_board()
    for y in range(16, 20):
        for x in range(board.WIDTH - 1):
            board.set(x, y, 1)

    piece = board.spawn_piece()

    assert board.top_outs == 1
    assert board.active_piece is piece
    assert sum(1 for cell in board.cells if cell) == 4, "Only the new piece remains"


def test_restart_game():
    """Test restart relinquishes the active piece and replays the bag."""
    board = make_board(seed=11)
    first = board.spawn_piece()
    board.clear_piece(first)
    second = board.spawn_piece()
    board.set(0, 0, 1)

    board.restart_game()

    assert not second.active, "Active piece should be relinquished"
    assert board.active_piece is not second
    assert board.active_piece.type == first.type, "Same seed should replay the same bag"
    assert board.pieces_spawned == 1
    assert board.get(0, 0) == 0


def test_hard_drop_locks_into_grid():
    """Test a hard drop fills the floor and spawns the next piece."""
    board = make_board()
    piece = board.spawn_piece()
    board.clear_piece(piece)

    piece.hard_drop()

    assert not piece.active
    assert board.active_piece is not piece
    assert board.pieces_spawned == 2
    assert any(board.get(x, 0) for x in range(board.WIDTH)), "Piece should rest on the floor"


def test_lock_clears_completed_line():
    """Test locking an I piece into a gap clears the row."""
    board = make_board()
    for x in range(board.WIDTH):
        if x not in (3, 4, 5, 6):
            board.set(x, 0, 1)
    piece = Piece(board, (4, 18), get_shape("I"), clock=board.clock)
    board.active_piece = piece

    piece.hard_drop()

    assert piece.position == (4, -1)
    assert board.lines_total == 1
    assert all(board.get(x, 0) == 0 for x in range(board.WIDTH)), "Bottom row should be cleared"


def test_load_cells():
    """Test loading a grid from a flat list."""
    board = make_board()
    cells = [0] * (board.WIDTH * board.HEIGHT)
    cells[0] = 7

    board.load_cells(cells)
    assert board.get(0, 0) == 7

    with pytest.raises(ValueError, match="Expected 200 cells"):
        board.load_cells([0] * 10)


def test_from_list():
    """Test building a board from a flat list."""
    cells = [0] * (Board.WIDTH * Board.HEIGHT)
    cells[Board.WIDTH + 3] = 5

    board = Board.from_list(cells, seed=3, clock=ManualClock())
    assert board.get(3, 1) == 5
    assert board.seed == 3
    assert board.active_piece is None

    cells[0] = 1
    assert board.get(0, 0) == 0, "Board should not share the caller's list"

    with pytest.raises(ValueError, match="Expected 200 cells"):
        Board.from_list([0] * 199)


def test_copy_is_independent():
    """Test a copy keeps the grid but shares no state."""
    board = make_board()
    board.spawn_piece()
    board.set(0, 0, 2)

    clone = board.copy()

    assert clone.to_list() == board.to_list()
    assert clone.pieces_spawned == 1
    assert clone.active_piece is None

    clone.set(1, 0, 4)
    assert board.get(1, 0) == 0, "Original should be unaffected"
