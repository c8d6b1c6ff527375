"""Active piece controller.

A ``Piece`` owns the falling piece's position, orientation and timers and
resolves every movement, rotation and lock against its board. One instance
lives from spawn until it locks (or the game restarts); after that it is
inactive and ignores further updates.
"""

import logging
import time
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

from piece_control.config import ControllerConfig
from piece_control.inputs import Action, InputBuffer
from piece_control.rotation import rotate_cells, wall_kick_index, wrap
from piece_control.shapes import Cell, ShapeDefinition

if TYPE_CHECKING:
    from piece_control.board import BoardProtocol

logger = logging.getLogger(__name__)

# Translations (y grows upward)
LEFT: Cell = (-1, 0)
RIGHT: Cell = (1, 0)
DOWN: Cell = (0, -1)


class Piece:
    """The active piece and its tick logic."""

    def __init__(
        self,
        board: "BoardProtocol",
        position: Tuple[int, int],
        shape: ShapeDefinition,
        config: Optional[ControllerConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Spawn a piece at rotation 0.

        Args:
            board: Board collaborator used for validity checks and commits
            position: Grid position of the piece origin
            shape: Shared shape definition
            config: Timing configuration (defaults if None)
            clock: Monotonic time source in seconds
        """
        self.board = board
        self.shape = shape
        self.config = config or ControllerConfig()
        self.clock = clock

        self.position = position
        self.rotation_index = 0
        self.cells: List[Cell] = list(shape.cells)

        now = clock()
        self.step_time = now + self.config.step_delay
        self.move_time = now + self.config.move_delay
        self.lock_time = 0.0

        self.active = True

    @property
    def type(self) -> str:
        """Piece type letter (I, O, T, S, Z, J or L)."""
        return self.shape.type

    def get_cells(self) -> List[Cell]:
        """Get absolute board coordinates of all 4 cells."""
        x, y = self.position
        return [(x + dx, y + dy) for dx, dy in self.cells]

    def update(self, delta: float, inputs: InputBuffer) -> None:
        """Advance the piece by one frame.

        Args:
            delta: Seconds elapsed since the previous frame
            inputs: Buffer drained once during this frame
        """
        if not self.active:
            return

        self.board.clear_piece(self)

        self.lock_time += delta

        self._handle_inputs(inputs)

        if self.active and inputs.soft_drop_held:
            now = self.clock()
            if now > self.move_time:
                self.move(DOWN)
                self.move_time = now + self.config.move_delay

        if self.active and self.clock() > self.step_time:
            self.step()

        # A lock or restart above already committed the replacement piece
        if self.active:
            self.board.set_piece(self)

    def _handle_inputs(self, inputs: InputBuffer) -> None:
        """Dispatch this frame's one-shot actions in priority order."""
        actions = inputs.drain()

        for i, action in enumerate(actions):
            if not self.active:
                logger.debug(f"[Piece] Discarding {[a.value for a in actions[i:]]} after piece ended")
                break

            if action == Action.RESTART:
                logger.info("[Piece] Restart requested")
                self.board.restart_game()
            elif action == Action.LEFT:
                self.move(LEFT)
            elif action == Action.RIGHT:
                self.move(RIGHT)
            elif action == Action.ROTATE_LEFT:
                self.rotate(-1)
            elif action == Action.ROTATE_RIGHT:
                self.rotate(1)
            elif action == Action.HARD_DROP:
                self.hard_drop()

    def step(self) -> None:
        """Apply one gravity step and lock if the lock delay has run out."""
        self.step_time = self.clock() + self.config.step_delay

        # Timer as of the start of the step; a successful move below resets it
        expired = self.lock_time >= self.config.lock_delay

        self.move(DOWN)

        if not self.config.early_step_lock:
            expired = self.lock_time >= self.config.lock_delay

        if expired:
            self.lock()

    def hard_drop(self) -> int:
        """Drop straight down and lock immediately.

        Returns:
            Number of rows dropped
        """
        rows = 0
        while self.move(DOWN):
            rows += 1

        logger.debug(f"[Piece] Hard drop {self.type}: {rows} rows")
        self.lock()
        return rows

    def lock(self) -> None:
        """Commit the piece to the board and hand over to the next piece."""
        self.board.set_piece(self)
        self.active = False

        lines = self.board.clear_lines()
        logger.info(
            f"[Piece] Locked {self.type} at {self.position} rot={self.rotation_index}, "
            f"lines cleared={lines}"
        )

        self.board.spawn_piece()

    def relinquish(self) -> None:
        """End this piece's lifetime without locking it."""
        self.active = False

    def move(self, translation: Tuple[int, int]) -> bool:
        """Try to translate the piece.

        Args:
            translation: (dx, dy) offset

        Returns:
            True if the move succeeded; on failure nothing changes
        """
        new_position = (self.position[0] + translation[0], self.position[1] + translation[1])

        valid = self.board.is_valid_position(self.cells, new_position)

        if valid:
            self.position = new_position
            self.move_time = self.clock() + self.config.move_delay
            self.lock_time = 0.0

        return valid

    def rotate(self, direction: int) -> bool:
        """Rotate by 90 degrees, trying wall kicks in table order.

        Args:
            direction: 1 for clockwise, -1 for counter-clockwise

        Returns:
            True if the rotation was accepted; otherwise the piece is
            exactly as it was before the call
        """
        original_rotation = self.rotation_index

        self.rotation_index = wrap(self.rotation_index + direction, 0, 4)
        rotate_cells(self.cells, direction, self.shape)

        if self._test_wall_kicks(self.rotation_index, direction):
            logger.debug(f"[Piece] Rotated {self.type} to {self.rotation_index} at {self.position}")
            return True

        # Undo with the inverse transform
        self.rotation_index = original_rotation
        rotate_cells(self.cells, -direction, self.shape)
        logger.debug(f"[Piece] Rotation of {self.type} blocked at {self.position}")
        return False

    def _test_wall_kicks(self, rotation_index: int, direction: int) -> bool:
        kicks = self.shape.wall_kicks
        row = kicks[wall_kick_index(rotation_index, direction, len(kicks))]

        for translation in row:
            if self.move(translation):
                return True

        return False

    def __repr__(self) -> str:
        return (
            f"Piece({self.type}, position={self.position}, "
            f"rot={self.rotation_index}, active={self.active})"
        )
