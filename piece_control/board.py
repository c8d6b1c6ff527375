"""Board collaborator: grid occupancy, line clearing and piece spawning.

The controller only relies on ``BoardProtocol``. ``Board`` is the reference
10x20 implementation with y=0 at the bottom.
"""

import logging
import time
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from piece_control.config import ControllerConfig
from piece_control.piece import Piece
from piece_control.rng import SevenBagRNG
from piece_control.shapes import Cell, get_shape

logger = logging.getLogger(__name__)


class BoardProtocol(Protocol):
    """What a piece needs from its board."""

    def is_valid_position(self, cells: Sequence[Cell], position: Tuple[int, int]) -> bool:
        ...

    def set_piece(self, piece: Piece) -> None:
        ...

    def clear_piece(self, piece: Piece) -> None:
        ...

    def clear_lines(self) -> int:
        ...

    def spawn_piece(self) -> Piece:
        ...

    def restart_game(self) -> None:
        ...


class Board:
    """10x20 board that spawns its own pieces."""

    WIDTH = 10
    HEIGHT = 20
    SPAWN_POSITION = (4, 18)

    # Cell values written for each piece type (0 = empty)
    PIECE_VALUES = {"I": 1, "O": 2, "T": 3, "S": 4, "Z": 5, "J": 6, "L": 7}

    def __init__(
        self,
        seed: int = 0,
        config: Optional[ControllerConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize an empty board. No piece is spawned until spawn_piece().

        Args:
            seed: Seed for the piece bag
            config: Timing configuration handed to spawned pieces
            clock: Time source handed to spawned pieces
        """
        # cells[y * WIDTH + x] represents the cell at (x, y)
        self.cells: List[int] = [0] * (self.WIDTH * self.HEIGHT)
        self.seed = seed
        self.rng = SevenBagRNG(seed)
        self.config = config or ControllerConfig()
        self.clock = clock

        self.active_piece: Optional[Piece] = None
        self.lines_total = 0
        self.pieces_spawned = 0
        self.top_outs = 0

    def get(self, x: int, y: int) -> int:
        """Get cell value at (x, y).

        Args:
            x: Column (0-9)
            y: Row (0-19, with 0 at the bottom)

        Returns:
            Cell value (0 = empty, >0 = filled); out of bounds reads as filled
        """
        if not self.in_bounds(x, y):
            return 1
        return self.cells[y * self.WIDTH + x]

    def set(self, x: int, y: int, value: int) -> None:
        """Set cell value at (x, y). Out of bounds writes are ignored."""
        if self.in_bounds(x, y):
            self.cells[y * self.WIDTH + x] = value

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.WIDTH and 0 <= y < self.HEIGHT

    def is_valid_position(self, cells: Sequence[Cell], position: Tuple[int, int]) -> bool:
        """Check whether cells placed at position fit on the board.

        Args:
            cells: Offsets relative to position
            position: Candidate origin

        Returns:
            True if every cell is in bounds and empty
        """
        px, py = position
        for dx, dy in cells:
            x, y = px + dx, py + dy
            if not self.in_bounds(x, y) or self.get(x, y) != 0:
                return False
        return True

    def set_piece(self, piece: Piece) -> None:
        """Write the piece's cells into the grid."""
        value = self.PIECE_VALUES.get(piece.type, 1)
        for x, y in piece.get_cells():
            self.set(x, y, value)

    def clear_piece(self, piece: Piece) -> None:
        """Erase the piece's cells from the grid."""
        for x, y in piece.get_cells():
            self.set(x, y, 0)

    def clear_lines(self) -> int:
        """Clear all complete lines and return count.

        Returns:
            Number of lines cleared
        """
        lines_cleared = 0
        y = 0  # Start from bottom

        while y < self.HEIGHT:
            if self.is_line_full(y):
                self.remove_line(y)
                lines_cleared += 1
                # Don't advance y; the row above moved into it
            else:
                y += 1

        if lines_cleared:
            self.lines_total += lines_cleared
            logger.info(f"[Board] Cleared {lines_cleared} lines (total {self.lines_total})")

        return lines_cleared

    def is_line_full(self, y: int) -> bool:
        return all(self.get(x, y) != 0 for x in range(self.WIDTH))

    def remove_line(self, line_y: int) -> None:
        """Remove a line and shift everything above it down.

        Args:
            line_y: Row to remove
        """
        for y in range(line_y, self.HEIGHT - 1):
            for x in range(self.WIDTH):
                self.cells[y * self.WIDTH + x] = self.cells[(y + 1) * self.WIDTH + x]

        # Clear the top line
        top = (self.HEIGHT - 1) * self.WIDTH
        for x in range(self.WIDTH):
            self.cells[top + x] = 0

    def spawn_piece(self) -> Piece:
        """Create the next active piece at the spawn position.

        A blocked spawn tops out: the grid is wiped and play continues with
        the new piece.

        Returns:
            The new active piece
        """
        piece_type = self.rng.next()
        piece = Piece(self, self.SPAWN_POSITION, get_shape(piece_type), self.config, self.clock)
        self.active_piece = piece
        self.pieces_spawned += 1

        if not self.is_valid_position(piece.cells, piece.position):
            self._top_out()

        self.set_piece(piece)
        logger.info(f"[Board] Spawned {piece_type} (piece {self.pieces_spawned})")
        return piece

    def _top_out(self) -> None:
        self.top_outs += 1
        logger.info(
            f"[Board] Top out after {self.pieces_spawned} pieces, {self.lines_total} lines"
        )
        self.cells = [0] * (self.WIDTH * self.HEIGHT)
        self.lines_total = 0

    def restart_game(self) -> None:
        """Drop the active piece, wipe the grid and start over with the same seed."""
        if self.active_piece is not None:
            self.active_piece.relinquish()

        self.cells = [0] * (self.WIDTH * self.HEIGHT)
        self.lines_total = 0
        self.pieces_spawned = 0
        self.top_outs = 0
        self.rng.reset(self.seed)

        logger.info(f"[Board] Restarted with seed {self.seed}")
        self.spawn_piece()

    def get_column_height(self, x: int) -> int:
        """Height of a column (0 = empty, HEIGHT = full)."""
        for y in range(self.HEIGHT - 1, -1, -1):
            if self.get(x, y) != 0:
                return y + 1
        return 0

    def get_column_heights(self) -> List[int]:
        return [self.get_column_height(x) for x in range(self.WIDTH)]

    def copy(self) -> "Board":
        """Copy the grid and counters into a new board.

        The copy has no active piece; a committed piece's cells are kept as
        plain occupancy.

        Returns:
            New board with the same seed, config and clock
        """
        new_board = Board(self.seed, self.config, self.clock)
        new_board.cells = self.cells.copy()
        new_board.lines_total = self.lines_total
        new_board.pieces_spawned = self.pieces_spawned
        new_board.top_outs = self.top_outs
        return new_board

    def to_list(self) -> List[int]:
        """Export board as flat list (for serialization)."""
        return self.cells.copy()

    @classmethod
    def from_list(
        cls,
        cells: List[int],
        seed: int = 0,
        config: Optional[ControllerConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "Board":
        """Create board from flat list.

        Args:
            cells: List of WIDTH * HEIGHT cell values
            seed: Seed for the piece bag

        Returns:
            New board with no active piece

        Raises:
            ValueError: If the list has the wrong length
        """
        board = cls(seed, config, clock)
        board.load_cells(cells)
        return board

    def load_cells(self, cells: List[int]) -> None:
        """Replace the grid contents from a flat list.

        Args:
            cells: List of WIDTH * HEIGHT cell values

        Raises:
            ValueError: If the list has the wrong length
        """
        if len(cells) != self.WIDTH * self.HEIGHT:
            raise ValueError(f"Expected {self.WIDTH * self.HEIGHT} cells, got {len(cells)}")
        self.cells = cells.copy()
