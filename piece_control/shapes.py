"""Tetromino shape definitions, rotation coefficients and wall kick tables.

Each shape is defined by its four cells at rotation 0. The other three
orientations are not stored: they are produced on demand by applying the
rotation matrix to the cells (see ``piece_control.rotation``).

Coordinates are relative to the piece's origin with y growing upward.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

# Type aliases for cell offsets and kick tables
Cell = Tuple[int, int]
KickTable = Tuple[Tuple[Cell, ...], ...]


class ShapeClass(Enum):
    """Rotation family of a shape."""
    REGULAR = "regular"                    # Pivot on a cell, nearest rounding
    CENTER_SYMMETRIC = "center_symmetric"  # Pivot on a cell corner, ceiling rounding


# 90 degree rotation coefficients (a, b, c, d):
#   x' = x*a + y*b
#   y' = x*c + y*d
# i.e. (cos, sin, -sin, cos) of 90 degrees, kept exact.
ROTATION_MATRIX: Tuple[float, float, float, float] = (0.0, 1.0, -1.0, 0.0)

# SRS wall kick data, one row per rotation transition.
# Row order: 0->R, R->0, R->2, 2->R, 2->L, L->2, L->0, 0->L
# Rows are addressed through rotation.wall_kick_index(), not by label.
# Reference: https://tetris.wiki/Super_Rotation_System

# Wall kick data for I piece
WALL_KICKS_I: KickTable = (
    ((0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)),
    ((0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)),
    ((0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)),
    ((0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)),
    ((0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)),
    ((0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)),
    ((0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)),
    ((0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)),
)

# Wall kick data for J, L, O, S, T, Z pieces
WALL_KICKS_JLOSTZ: KickTable = (
    ((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    ((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    ((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    ((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    ((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
    ((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    ((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
    ((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
)

# Number of kick rows every table must have: two directions into each of
# the four rotation states.
KICK_ROWS = 8
CELL_COUNT = 4


@dataclass(frozen=True)
class ShapeDefinition:
    """Immutable per-shape data shared by every piece of that type."""
    type: str
    cells: Tuple[Cell, ...]
    shape_class: ShapeClass
    wall_kicks: KickTable
    rotation_matrix: Tuple[float, float, float, float] = ROTATION_MATRIX


def validate_shape(shape: ShapeDefinition) -> None:
    """Check a shape definition once, when it is loaded.

    Args:
        shape: Definition to check

    Raises:
        ValueError: If the definition cannot be used by the controller
    """
    if len(shape.cells) != CELL_COUNT:
        raise ValueError(
            f"Shape {shape.type} must have {CELL_COUNT} cells, got {len(shape.cells)}"
        )
    if not isinstance(shape.shape_class, ShapeClass):
        raise ValueError(f"Shape {shape.type} has unknown class: {shape.shape_class!r}")
    if len(shape.wall_kicks) != KICK_ROWS:
        raise ValueError(
            f"Shape {shape.type} needs {KICK_ROWS} wall kick rows, got {len(shape.wall_kicks)}"
        )
    row_lengths = {len(row) for row in shape.wall_kicks}
    if len(row_lengths) != 1 or 0 in row_lengths:
        raise ValueError(f"Shape {shape.type} has ragged or empty wall kick rows")
    if len(shape.rotation_matrix) != 4:
        raise ValueError(f"Shape {shape.type} needs 4 rotation coefficients")


SHAPES: Dict[str, ShapeDefinition] = {
    "I": ShapeDefinition(
        "I", ((-1, 1), (0, 1), (1, 1), (2, 1)), ShapeClass.CENTER_SYMMETRIC, WALL_KICKS_I
    ),
    "J": ShapeDefinition(
        "J", ((-1, 1), (-1, 0), (0, 0), (1, 0)), ShapeClass.REGULAR, WALL_KICKS_JLOSTZ
    ),
    "L": ShapeDefinition(
        "L", ((1, 1), (-1, 0), (0, 0), (1, 0)), ShapeClass.REGULAR, WALL_KICKS_JLOSTZ
    ),
    "O": ShapeDefinition(
        "O", ((0, 1), (1, 1), (0, 0), (1, 0)), ShapeClass.CENTER_SYMMETRIC, WALL_KICKS_JLOSTZ
    ),
    "S": ShapeDefinition(
        "S", ((0, 1), (1, 1), (-1, 0), (0, 0)), ShapeClass.REGULAR, WALL_KICKS_JLOSTZ
    ),
    "T": ShapeDefinition(
        "T", ((0, 1), (-1, 0), (0, 0), (1, 0)), ShapeClass.REGULAR, WALL_KICKS_JLOSTZ
    ),
    "Z": ShapeDefinition(
        "Z", ((-1, 1), (0, 1), (0, 0), (1, 0)), ShapeClass.REGULAR, WALL_KICKS_JLOSTZ
    ),
}

for _shape in SHAPES.values():
    validate_shape(_shape)


def get_shape(piece_type: str) -> ShapeDefinition:
    """Look up the definition for a piece type.

    Args:
        piece_type: One of "I", "O", "T", "S", "Z", "J", "L"

    Returns:
        Shared shape definition

    Raises:
        ValueError: If the type is unknown
    """
    if piece_type not in SHAPES:
        raise ValueError(f"Invalid piece type: {piece_type}")
    return SHAPES[piece_type]
