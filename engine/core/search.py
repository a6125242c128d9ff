import random
import time
from itertools import chain
from typing import NamedTuple, Optional

from engine.config import CONFIG
from engine.core.board import BoardState, value_table
from engine.core.pieces import NULL_MOVE, Move
from engine.core.utils import print_info

# Material totals stay in the low thousands, so these never collide with an evaluation
INF = 10_000_000
WIN_SCORE = 1_000_000


class SearchResult(NamedTuple):
    score: int
    move: Move

    def as_tuple(self) -> tuple:
        """(score, src_col, src_row, dst_col, dst_row)"""
        return (self.score, *self.move)


class SearchEngine:
    """
    Depth-limited minimax with alpha-beta pruning over BoardState.

    Every explored move is played on a private copy of the board. A move
    that captures a king ends its branch: the next frame scores it with
    WIN_SCORE for the capturing side instead of searching further.
    """

    def __init__(self, rng: Optional[random.Random] = None, depth: Optional[int] = None,
                 piece_values: Optional[dict] = None, jitter: Optional[bool] = None):
        self.rng = rng if rng is not None else random.Random(CONFIG.search.seed)
        self.max_depth = depth if depth is not None else CONFIG.search.depth
        self.piece_values = value_table(piece_values or CONFIG.eval.piece_values)
        self.jitter = CONFIG.eval.jitter if jitter is None else jitter
        self.nodes = 0

    def search_best_move(self, board: BoardState, white: bool, depth: Optional[int] = None) -> SearchResult:
        """
        Full-window search from the root for the side given by `white`.
        Raises ValueError for a depth below 1, which could never pick a move.
        """
        depth = self.max_depth if depth is None else depth
        if depth < 1:
            raise ValueError(f"search depth must be at least 1, got {depth}")
        self.nodes = 0
        start_time = time.time()
        result = self.search(depth, board, white, -INF, INF)
        if CONFIG.search.show_info:
            elapsed = (time.time() - start_time) * 1000
            print_info(depth, result.score, self.nodes, elapsed, result.move, WIN_SCORE)
        return result

    def search(self, depth: int, board: BoardState, maximizing: bool,
               alpha: int = -INF, beta: int = INF) -> SearchResult:
        """
        Returns the final bound for the side to move together with the first
        move that improved it, or NULL_MOVE when no move did.
        """
        return self._alphabeta(depth, board, maximizing, alpha, beta, False)

    def _evaluate(self, board: BoardState) -> int:
        return board.evaluate(self.rng if self.jitter else None, self.piece_values)

    def _alphabeta(self, depth: int, board: BoardState, maximizing: bool,
                   alpha: int, beta: int, king_captured: bool) -> SearchResult:
        self.nodes += 1

        # The previous mover took the king
        if king_captured:
            return SearchResult(-WIN_SCORE if maximizing else WIN_SCORE, NULL_MOVE)

        moves = board.iter_moves(maximizing)
        first = next(moves, None)
        if depth <= 0 or first is None:
            return SearchResult(self._evaluate(board), NULL_MOVE)

        best_move = NULL_MOVE
        for move in chain((first,), moves):
            child = board.copy()
            ended = False
            if child.is_valid_move(*move):
                ended = child.apply_move(*move)
            score = self._alphabeta(depth - 1, child, not maximizing, alpha, beta, ended).score

            if maximizing:
                if score > alpha:
                    alpha = score
                    best_move = move
            elif score < beta:
                beta = score
                best_move = move
            if alpha >= beta:
                break

        return SearchResult(alpha if maximizing else beta, best_move)
