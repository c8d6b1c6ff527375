"""Game wrapper: owns the board, the input buffer and the clock.

``TetrisGame.tick()`` is the single per-frame entry point. It measures the
frame duration on the game's clock and hands it, together with the input
buffer, to whichever piece is currently active.
"""

import time
from typing import Any, Callable, Dict, Optional

from piece_control.board import Board
from piece_control.config import ControllerConfig
from piece_control.inputs import InputBuffer
from piece_control.piece import Piece


class TetrisGame:
    """A board plus the frame loop that drives its active piece."""

    SCHEMA_VERSION = "s1.0.0"

    def __init__(
        self,
        seed: int = 0,
        config: Optional[ControllerConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the game. The first piece spawns on start() or the first tick.

        Args:
            seed: Seed for the piece bag
            config: Controller timing configuration
            clock: Monotonic time source in seconds
        """
        self.config = config or ControllerConfig()
        self.clock = clock
        self.inputs = InputBuffer()
        self.board = Board(seed, self.config, clock)

        self.tick_count = 0
        self.last_time: Optional[float] = None

    @property
    def piece(self) -> Optional[Piece]:
        """The active piece, or None before the game starts."""
        return self.board.active_piece

    def start(self) -> Piece:
        """Spawn the first piece and start measuring frame time.

        Does nothing but return the current piece if the game is running.
        """
        if self.board.active_piece is not None:
            return self.board.active_piece

        self.last_time = self.clock()
        return self.board.spawn_piece()

    def tick(self) -> None:
        """Advance the game by one frame."""
        if self.board.active_piece is None:
            self.start()

        now = self.clock()
        delta = now - self.last_time
        self.last_time = now

        self.board.active_piece.update(delta, self.inputs)
        self.tick_count += 1

    def snapshot(self) -> Dict[str, Any]:
        """Describe the current state as a plain dictionary."""
        piece = self.board.active_piece
        return {
            "schema_version": self.SCHEMA_VERSION,
            "tick": self.tick_count,
            "board": {
                "w": self.board.WIDTH,
                "h": self.board.HEIGHT,
                "cells": self.board.to_list(),
                "column_heights": self.board.get_column_heights(),
            },
            "current": None if piece is None else {
                "type": piece.type,
                "x": piece.position[0],
                "y": piece.position[1],
                "rot": piece.rotation_index,
                "cells": [list(cell) for cell in piece.cells],
                "lock_time": piece.lock_time,
            },
            "inputs": {
                "pending": [action.value for action in self.inputs.pending()],
                "soft_drop_held": self.inputs.soft_drop_held,
            },
            "episode": {
                "seed": self.board.seed,
                "lines_total": self.board.lines_total,
                "pieces_spawned": self.board.pieces_spawned,
                "top_outs": self.board.top_outs,
            },
            "config": self.config.to_dict(),
        }
