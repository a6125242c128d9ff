"""Packed 8x8 board: one int per row, one nibble per square."""

import chess

from engine.config import PIECE_VALUES
from engine.core.iterator import iter_moves
from engine.core.movegen import moves_from
from engine.core.pieces import ALL_MASK, PIECE_MASK, WHITE_MASK, Move, PieceKind

BACK_RANK = ("ROOK", "KNIGHT", "BISHOP", "QUEEN", "KING", "BISHOP", "KNIGHT", "ROOK")

# python-chess letters, used only for placement text
_KIND_BY_SYMBOL = {
    "P": PieceKind.PAWN, "R": PieceKind.ROOK, "N": PieceKind.KNIGHT,
    "B": PieceKind.BISHOP, "Q": PieceKind.QUEEN, "K": PieceKind.KING,
}
_SYMBOL_BY_KIND = {kind: symbol for symbol, kind in _KIND_BY_SYMBOL.items()}


class InvalidMoveError(ValueError):
    """Raised by apply_move for out-of-range squares, empty sources and self-captures."""

    def __init__(self, move: Move, reason: str):
        super().__init__(f"{reason}: {tuple(move)}")
        self.move = move
        self.reason = reason


def value_table(piece_values: dict) -> tuple:
    """Values indexed by PieceKind, from a mapping keyed by kind name."""
    return tuple(0 if kind == PieceKind.NONE else piece_values[kind.name] for kind in PieceKind)


_DEFAULT_VALUES = value_table(PIECE_VALUES)


def in_range(*coords: int) -> bool:
    return all(0 <= c < 8 for c in coords)


class BoardState:
    def __init__(self, empty: bool = False):
        """Start from the standard opening, or from an empty board."""
        self.rows = [0] * 8
        if not empty:
            self.reset_board()

    def copy(self) -> "BoardState":
        clone = BoardState(empty=True)
        clone.rows = list(self.rows)
        return clone

    def __eq__(self, other):
        if not isinstance(other, BoardState):
            return NotImplemented
        return self.rows == other.rows

    __hash__ = None

    def __repr__(self):
        return f"BoardState({self.board_fen()!r})"

    # ── Accessors ────────────────────────────────────────────────────────

    def get(self, col: int, row: int) -> PieceKind:
        return PieceKind((self.rows[row] >> (4 * col)) & PIECE_MASK)

    def is_white(self, col: int, row: int) -> bool:
        return bool((self.rows[row] >> (4 * col)) & WHITE_MASK)

    def set(self, col: int, row: int, kind: PieceKind, white: bool):
        """Overwrite a square. Empty squares always store colour bit 0."""
        nibble = int(kind)
        if kind != PieceKind.NONE and white:
            nibble |= WHITE_MASK
        shift = 4 * col
        self.rows[row] = (self.rows[row] & ~(ALL_MASK << shift)) | (nibble << shift)

    def clear(self):
        self.rows = [0] * 8

    def reset_board(self):
        """Set up the standard opening position."""
        self.clear()
        for col, name in enumerate(BACK_RANK):
            self.set(col, 0, PieceKind[name], True)
            self.set(col, 1, PieceKind.PAWN, True)
            self.set(col, 6, PieceKind.PAWN, False)
            self.set(col, 7, PieceKind[name], False)

    def pieces(self, white: bool) -> list:
        """(col, row, kind) for every piece of one colour, in scan order."""
        found = []
        for row in range(8):
            for col in range(8):
                kind = self.get(col, row)
                if kind != PieceKind.NONE and self.is_white(col, row) == white:
                    found.append((col, row, kind))
        return found

    # ── Moves ────────────────────────────────────────────────────────────

    def moves_from(self, col: int, row: int) -> list:
        return moves_from(self, col, row)

    def iter_moves(self, white: bool):
        return iter_moves(self, white)

    def is_valid_move(self, src_col: int, src_row: int, dst_col: int, dst_row: int) -> bool:
        if not in_range(src_col, src_row, dst_col, dst_row):
            return False
        return (dst_col, dst_row) in moves_from(self, src_col, src_row)

    def apply_move(self, src_col: int, src_row: int, dst_col: int, dst_row: int) -> bool:
        """
        Move a piece without checking piece rules. Returns True when the move
        captured a king; the loser's remaining pieces are removed first.
        """
        move = Move(src_col, src_row, dst_col, dst_row)
        if not in_range(*move):
            raise InvalidMoveError(move, "out of range")
        kind = self.get(src_col, src_row)
        if kind == PieceKind.NONE:
            raise InvalidMoveError(move, "there is no piece in the source location")
        white = self.is_white(src_col, src_row)
        target = self.get(dst_col, dst_row)
        if target != PieceKind.NONE and self.is_white(dst_col, dst_row) == white:
            raise InvalidMoveError(move, "it is illegal to take your own piece")

        if kind == PieceKind.PAWN and dst_row in (0, 7):
            kind = PieceKind.QUEEN
        self.set(dst_col, dst_row, kind, white)
        self.set(src_col, src_row, PieceKind.NONE, False)

        if target == PieceKind.KING:
            # Wipe the loser so look-ahead never plays past the end of the game
            for col, row, _ in self.pieces(not white):
                self.set(col, row, PieceKind.NONE, False)
            return True
        return False

    # ── Evaluation ───────────────────────────────────────────────────────

    def evaluate(self, rng=None, piece_values=None) -> int:
        """
        Material balance, positive favours white. When rng is given, one
        draw of rng.randint(-1, 1) is added to split equal positions.

        piece_values is either a mapping keyed by kind name or a table
        already built with value_table().
        """
        if piece_values is None:
            values = _DEFAULT_VALUES
        elif isinstance(piece_values, tuple):
            values = piece_values
        else:
            values = value_table(piece_values)
        score = 0
        for packed in self.rows:
            for col in range(8):
                nibble = (packed >> (4 * col)) & ALL_MASK
                value = values[nibble & PIECE_MASK]
                score += value if nibble & WHITE_MASK else -value
        if rng is not None:
            score += rng.randint(-1, 1)
        return score

    # ── Placement text ───────────────────────────────────────────────────

    def board_fen(self) -> str:
        """Piece-placement field of a FEN string (rank 8 first)."""
        base = chess.BaseBoard.empty()
        for row in range(8):
            for col in range(8):
                kind = self.get(col, row)
                if kind == PieceKind.NONE:
                    continue
                symbol = _SYMBOL_BY_KIND[kind]
                if not self.is_white(col, row):
                    symbol = symbol.lower()
                base.set_piece_at(chess.square(col, row), chess.Piece.from_symbol(symbol))
        return base.board_fen()

    @classmethod
    def from_fen(cls, fen: str) -> "BoardState":
        """
        Build a board from a FEN or bare placement string. Only the placement
        field is read; malformed text raises ValueError.
        """
        placement = fen.strip().split(" ")[0]
        base = chess.BaseBoard(placement)
        board = cls(empty=True)
        for square, piece in base.piece_map().items():
            board.set(chess.square_file(square), chess.square_rank(square),
                      _KIND_BY_SYMBOL[piece.symbol().upper()], piece.color == chess.WHITE)
        return board
