import random
from typing import Optional, Tuple

from engine.config import CONFIG
from engine.core.board import BoardState
from engine.core.pieces import NULL_MOVE, PieceKind
from engine.core.search import SearchEngine
from engine.core.utils import MoveParseError, format_move, parse_move


class Engine:
    """Live game: the board, whose turn it is, the move history and a search engine."""

    def __init__(self, depth: Optional[int] = None, seed: Optional[int] = None):
        self.board = BoardState()
        rng = random.Random(CONFIG.search.seed if seed is None else seed)
        self.search = SearchEngine(rng=rng, depth=depth)
        self.history = []
        self.turn_white = True
        self.winner: Optional[bool] = None  # True = white, False = black

    @property
    def game_over(self) -> bool:
        return self.winner is not None

    def reset(self):
        self.board.reset_board()
        self.history.clear()
        self.turn_white = True
        self.winner = None

    def load_fen(self, fen: str, white_to_move: bool = True):
        """Replace the position; raises ValueError for malformed placement text."""
        self.board = BoardState.from_fen(fen)
        self.history.clear()
        self.turn_white = white_to_move
        self.winner = None

    def make_move(self, move_str: str) -> bool:
        """Play a coordinate move (e.g. 'B2B4') for the side to move. Returns True if legal."""
        if self.game_over:
            return False
        try:
            move = parse_move(move_str)
        except MoveParseError:
            return False
        if self.board.get(move.src_col, move.src_row) != PieceKind.NONE and \
                self.board.is_white(move.src_col, move.src_row) != self.turn_white:
            return False
        if not self.board.is_valid_move(*move):
            return False
        self._play(move)
        return True

    def get_best_move(self, depth: Optional[int] = None) -> Tuple[Optional[str], int]:
        """
        Search the current position; the move is None when the side to move has none.
        Raises ValueError for a depth below 1.
        """
        result = self.search.search_best_move(self.board, self.turn_white, depth)
        if result.move == NULL_MOVE:
            return None, result.score
        return format_move(result.move), result.score

    def play_engine_move(self, depth: Optional[int] = None) -> Optional[str]:
        """Search and play for the side to move. Returns the move played, or None."""
        if self.game_over:
            return None
        move = self.search.search_best_move(self.board, self.turn_white, depth).move
        if move == NULL_MOVE or not self.board.is_valid_move(*move):
            return None
        self._play(move)
        return format_move(move)

    def legal_moves(self) -> list:
        return [format_move(m) for m in self.board.iter_moves(self.turn_white)]

    def _play(self, move):
        if self.board.apply_move(*move):
            self.winner = self.turn_white
        self.history.append(format_move(move))
        self.turn_white = not self.turn_white
