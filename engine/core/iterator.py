"""Lazy enumeration of every move available to one colour."""

from typing import Iterator

from engine.core.movegen import moves_from
from engine.core.pieces import Move, PieceKind


def iter_moves(board, white: bool) -> Iterator[Move]:
    """
    Yield moves for `white` one at a time.

    Squares are scanned row 0 to 7 and column 0 to 7 within a row. All
    destinations of one piece are yielded before the next piece, the last
    generated destination first. The search explores moves in exactly this
    order, so it decides which of several equally scored moves is kept.

    The generator reads the board as it goes; do not modify the board while
    iterating.
    """
    for row in range(8):
        for col in range(8):
            if board.get(col, row) == PieceKind.NONE or board.is_white(col, row) != white:
                continue
            for dst_col, dst_row in reversed(moves_from(board, col, row)):
                yield Move(col, row, dst_col, dst_row)
