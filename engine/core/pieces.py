"""Piece kinds, nibble masks and the move tuple shared by the core modules."""

from enum import IntEnum
from typing import NamedTuple

PIECE_MASK = 0b0111
WHITE_MASK = 0b1000
ALL_MASK = 0b1111


class PieceKind(IntEnum):
    NONE = 0
    PAWN = 1
    ROOK = 2
    KNIGHT = 3
    BISHOP = 4
    QUEEN = 5
    KING = 6


class Move(NamedTuple):
    src_col: int
    src_row: int
    dst_col: int
    dst_row: int


# Returned by the search when no move improved the bound
NULL_MOVE = Move(0, 0, 0, 0)
