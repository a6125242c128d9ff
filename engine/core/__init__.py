"""Core engine components: packed board, move generation, move iteration and search."""

from .pieces import Move, PieceKind, NULL_MOVE
from .board import BoardState, InvalidMoveError
from .search import SearchEngine, SearchResult
