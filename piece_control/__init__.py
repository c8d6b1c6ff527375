"""Falling piece controller for a block-stacking puzzle game."""

from piece_control.board import Board, BoardProtocol
from piece_control.config import ControllerConfig
from piece_control.game import TetrisGame
from piece_control.inputs import Action, InputBuffer
from piece_control.piece import Piece
from piece_control.shapes import SHAPES, ShapeClass, ShapeDefinition, get_shape

__all__ = [
    "Action",
    "Board",
    "BoardProtocol",
    "ControllerConfig",
    "InputBuffer",
    "Piece",
    "SHAPES",
    "ShapeClass",
    "ShapeDefinition",
    "TetrisGame",
    "get_shape",
]
