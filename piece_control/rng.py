"""7-bag piece generator used by the board to pick the next piece.

Every piece type is dealt once per shuffled bag, so droughts are bounded.
"""

import random
from typing import List, Optional, Sequence

from piece_control.shapes import SHAPES


class SevenBagRNG:
    """Deterministic bag-based piece generator."""

    def __init__(self, seed: int, pieces: Optional[Sequence[str]] = None):
        """Initialize with a seed.

        Args:
            seed: Random seed for reproducibility
            pieces: Piece types in one bag (all defined shapes if None)

        Raises:
            ValueError: If pieces is empty or names an unknown shape
        """
        self.pieces: List[str] = list(pieces) if pieces is not None else sorted(SHAPES)
        if not self.pieces:
            raise ValueError("A bag needs at least one piece type")
        unknown = [p for p in self.pieces if p not in SHAPES]
        if unknown:
            raise ValueError(f"Invalid piece types: {unknown}")

        self.reset(seed)

    def _refill_bag(self) -> None:
        self.bag = self.pieces.copy()
        self.rng.shuffle(self.bag)

    def next(self) -> str:
        """Deal the next piece type, refilling the bag when empty."""
        if not self.bag:
            self._refill_bag()
        return self.bag.pop()

    def reset(self, seed: int) -> None:
        """Restart the sequence from a seed.

        Args:
            seed: New random seed
        """
        self.seed = seed
        self.rng = random.Random(seed)
        self.bag: List[str] = []
        self._refill_bag()
