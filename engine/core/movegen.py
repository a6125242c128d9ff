"""
Destination squares for a single piece.

Only piece movement rules are applied: a move that leaves the own king
attacked is still generated, and there is no castling or en passant.
Coordinates that step off the board become OFF_BOARD, which ends a ray
or drops a single-step candidate.
"""

from engine.core.pieces import PieceKind

OFF_BOARD = -1

KNIGHT_STEPS = ((2, 1), (1, 2), (-1, 2), (-2, 1), (-2, -1), (-1, -2), (1, -2), (2, -1))
KING_STEPS = ((1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0), (-1, -1), (0, -1), (1, -1))
ROOK_RAYS = ((1, 0), (-1, 0), (0, 1), (0, -1))
BISHOP_RAYS = ((1, 1), (-1, 1), (1, -1), (-1, -1))
QUEEN_RAYS = ROOK_RAYS + BISHOP_RAYS


def inc(pos: int) -> int:
    if pos < 0 or pos >= 7:
        return OFF_BOARD
    return pos + 1


def dec(pos: int) -> int:
    if pos < 1:
        return OFF_BOARD
    return pos - 1


def step(pos: int, delta: int) -> int:
    """Move a coordinate by delta one square at a time, OFF_BOARD once it leaves."""
    while delta > 0 and pos != OFF_BOARD:
        pos = inc(pos)
        delta -= 1
    while delta < 0 and pos != OFF_BOARD:
        pos = dec(pos)
        delta += 1
    return pos


def _check_move(board, out: list, col: int, row: int, white: bool) -> bool:
    """Add (col, row) unless blocked by a friend; True when a ray must stop."""
    if col == OFF_BOARD or row == OFF_BOARD:
        return True
    kind = board.get(col, row)
    if kind != PieceKind.NONE and board.is_white(col, row) == white:
        return True
    out.append((col, row))
    return kind != PieceKind.NONE


def _check_pawn_move(board, out: list, col: int, row: int, diagonal: bool, white: bool) -> bool:
    """
    Pawns push onto empty squares and capture diagonally onto enemies only.
    Returns True when the square could not be used.
    """
    if col == OFF_BOARD or row == OFF_BOARD:
        return True
    kind = board.get(col, row)
    if diagonal:
        if kind == PieceKind.NONE or board.is_white(col, row) == white:
            return True
    elif kind != PieceKind.NONE:
        return True
    out.append((col, row))
    return False


def _pawn_moves(board, out, col, row, white):
    forward = 1 if white else -1
    start_row = 1 if white else 6
    ahead = step(row, forward)
    blocked = _check_pawn_move(board, out, col, ahead, False, white)
    if not blocked and row == start_row:
        _check_pawn_move(board, out, col, step(ahead, forward), False, white)
    _check_pawn_move(board, out, inc(col), ahead, True, white)
    _check_pawn_move(board, out, dec(col), ahead, True, white)


def _step_moves(board, out, col, row, white, steps):
    for dc, dr in steps:
        _check_move(board, out, step(col, dc), step(row, dr), white)


def _ray_moves(board, out, col, row, white, rays):
    for dc, dr in rays:
        c, r = step(col, dc), step(row, dr)
        while not _check_move(board, out, c, r, white):
            c, r = step(c, dc), step(r, dr)


def moves_from(board, col: int, row: int) -> list:
    """Destinations as (col, row) pairs for the piece on (col, row); [] for an empty square."""
    kind = board.get(col, row)
    white = board.is_white(col, row)
    out = []
    if kind == PieceKind.PAWN:
        _pawn_moves(board, out, col, row, white)
    elif kind == PieceKind.KNIGHT:
        _step_moves(board, out, col, row, white, KNIGHT_STEPS)
    elif kind == PieceKind.KING:
        _step_moves(board, out, col, row, white, KING_STEPS)
    elif kind == PieceKind.ROOK:
        _ray_moves(board, out, col, row, white, ROOK_RAYS)
    elif kind == PieceKind.BISHOP:
        _ray_moves(board, out, col, row, white, BISHOP_RAYS)
    elif kind == PieceKind.QUEEN:
        _ray_moves(board, out, col, row, white, QUEEN_RAYS)
    return out
