"""
Text game loop: human vs human, human vs engine, engine vs engine.

    python -m interface.cli                 # both sides typed at the console
    python -m interface.cli 3 0             # engine (depth 3) plays white
    python -m interface.cli 0 3             # engine plays black
    python -m interface.cli 2 3             # engine vs engine
    python -m interface.cli --white-file moves.txt

Humans type moves like B2B4 (source square then destination); q quits.
"""

import argparse
import sys
from typing import Callable, Iterable, Optional

from engine.config import CONFIG
from engine.core.utils import render_board
from engine.main import Engine


def console_reader() -> Callable[[], Optional[str]]:
    def read() -> Optional[str]:
        sys.stdout.flush()
        try:
            return input().strip()
        except EOFError:
            return None
    return read


def token_reader(tokens: Iterable[str]) -> Callable[[], Optional[str]]:
    """Reader over pre-split tokens, e.g. the contents of a move file."""
    it = iter(tokens)
    return lambda: next(it, None)


def file_reader(path: str) -> Callable[[], Optional[str]]:
    with open(path, "r", encoding="utf-8") as f:
        return token_reader(f.read().split())


class HumanPlayer:
    def __init__(self, read: Callable[[], Optional[str]], retry: Optional[Callable[[], Optional[str]]] = None):
        """`read` supplies moves; `retry` supplies corrections after an invalid one (defaults to `read`)."""
        self.read = read
        self.retry = retry or read

    def play(self, engine: Engine, out) -> bool:
        """Returns False when the player quits or runs out of input."""
        print("Example move:B3C3", file=out)
        print("Your Move: ", end="", file=out)
        token = self.read()
        while True:
            if token is None or token == "q":
                return False
            if engine.make_move(token):
                return True
            print("Invalid move, Please Try again: ", end="", file=out)
            token = self.retry()


class EnginePlayer:
    def __init__(self, depth: int):
        self.depth = depth

    def play(self, engine: Engine, out) -> bool:
        move = engine.play_engine_move(self.depth)
        if move is None:
            print("No moves left", file=out)
            return False
        print(f"Engine plays: {move}", file=out)
        return True


def play_game(engine: Engine, white, black, out=None, mirror=None,
              max_plies: Optional[int] = None) -> Optional[bool]:
    """
    Alternate turns until a king is taken. Returns True for a white win,
    False for a black win and None when the game stopped without a winner.
    """
    if out is None:
        out = sys.stdout
    print(render_board(engine.board), file=out)
    print(file=out)
    plies = 0
    while not engine.game_over:
        if max_plies is not None and plies >= max_plies:
            break
        if mirror is not None:
            print(render_board(engine.board), file=mirror)
        player = white if engine.turn_white else black
        if not player.play(engine, out):
            break
        plies += 1
        print(render_board(engine.board), file=out)
        print(file=out)

    if engine.winner is None:
        return None
    print("White has won" if engine.winner else "Black has won", file=out)
    return engine.winner


def _player(depth: int, path: Optional[str], fallback):
    if depth > 0:
        return EnginePlayer(depth)
    if path:
        return HumanPlayer(file_reader(path), retry=fallback)
    return HumanPlayer(fallback)


def main(argv=None):
    parser = argparse.ArgumentParser(description=f"{CONFIG.ui.engine_name} text chess")
    parser.add_argument("white_depth", nargs="?", type=int, default=0,
                        help="search depth for white, 0 for a human player")
    parser.add_argument("black_depth", nargs="?", type=int, default=0,
                        help="search depth for black, 0 for a human player")
    parser.add_argument("--white-file", help="read white's moves from this file")
    parser.add_argument("--black-file", help="read black's moves from this file")
    parser.add_argument("--max-plies", type=int, default=None)
    args = parser.parse_args(argv)

    if args.white_depth < 0 or args.black_depth < 0:
        parser.error("depths must be 0 (human) or positive")

    console = console_reader()
    white = _player(args.white_depth, args.white_file, console)
    black = _player(args.black_depth, args.black_file, console)

    mirror = open(CONFIG.ui.output_path, "w", encoding="utf-8") if CONFIG.ui.output_path else None
    try:
        play_game(Engine(), white, black, mirror=mirror, max_plies=args.max_plies)
    finally:
        if mirror is not None:
            mirror.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
