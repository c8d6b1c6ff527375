"""Rotation transform and wall kick addressing.

The same function rotates cells in both directions. Rotating by ``-d`` after
``d`` gives back the original cells exactly; a rejected rotation is undone
that way, without keeping a copy.
"""

import math
from typing import Callable, Dict, List, Tuple

from piece_control.shapes import Cell, ShapeClass, ShapeDefinition

# Shape class -> (pivot shift, rounding function)
TRANSFORM_RULES: Dict[ShapeClass, Tuple[float, Callable[[float], int]]] = {
    ShapeClass.REGULAR: (0.0, round),
    ShapeClass.CENTER_SYMMETRIC: (0.5, math.ceil),
}


def wrap(value: int, lo: int, hi: int) -> int:
    """Fold an integer into the half-open range [lo, hi)."""
    return lo + (value - lo) % (hi - lo)


def rotate_cell(cell: Cell, direction: int, shape: ShapeDefinition) -> Cell:
    """Rotate one cell offset by 90 degrees.

    Args:
        cell: (x, y) offset relative to the piece origin
        direction: 1 for clockwise, -1 for counter-clockwise
        shape: Definition supplying the coefficients and shape class

    Returns:
        Rotated (x, y) offset
    """
    shift, rounding = TRANSFORM_RULES[shape.shape_class]
    a, b, c, d = shape.rotation_matrix
    x = cell[0] - shift
    y = cell[1] - shift
    return (
        int(rounding(x * a * direction + y * b * direction)),
        int(rounding(x * c * direction + y * d * direction)),
    )


def rotate_cells(cells: List[Cell], direction: int, shape: ShapeDefinition) -> None:
    """Rotate every cell in place."""
    for i, cell in enumerate(cells):
        cells[i] = rotate_cell(cell, direction, shape)


def wall_kick_index(rotation_index: int, direction: int, row_count: int) -> int:
    """Select the kick row for a rotation.

    Args:
        rotation_index: Rotation state the piece is rotating into
        direction: 1 for clockwise, -1 for counter-clockwise
        row_count: Number of rows in the shape's kick table

    Returns:
        Row index in [0, row_count)
    """
    index = rotation_index * 2
    if direction < 0:
        index -= 1
    return wrap(index, 0, row_count)
