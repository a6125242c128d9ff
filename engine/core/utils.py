from engine.core.pieces import Move, PieceKind

FILES = "ABCDEFGH"
PIECE_LETTERS = {
    PieceKind.PAWN: "p",
    PieceKind.ROOK: "r",
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.QUEEN: "q",
    PieceKind.KING: "K",
}


class MoveParseError(ValueError):
    pass


def parse_move(text: str) -> Move:
    """Parse the 4-character coordinate form, e.g. 'B3C3' (case-insensitive)."""
    token = text.strip().upper()
    if len(token) != 4:
        raise MoveParseError(f"expected 4 characters like B3C3, got {text!r}")
    coords = []
    for file_ch, rank_ch in (token[0:2], token[2:4]):
        if file_ch not in FILES or rank_ch not in "12345678":
            raise MoveParseError(f"bad square {file_ch}{rank_ch} in {text!r}")
        coords.extend((FILES.index(file_ch), int(rank_ch) - 1))
    return Move(*coords)


def format_move(move: Move) -> str:
    return f"{FILES[move.src_col]}{move.src_row + 1}{FILES[move.dst_col]}{move.dst_row + 1}"


def render_board(board) -> str:
    """ASCII grid with white at the bottom; pieces read as colour prefix plus letter (wp, bK)."""
    separator = " +" + "--+" * 8
    header = "  " + "  ".join(FILES)
    lines = [header, separator]
    for row in range(7, -1, -1):
        cells = []
        for col in range(8):
            kind = board.get(col, row)
            if kind == PieceKind.NONE:
                cells.append("  ")
            else:
                cells.append(("w" if board.is_white(col, row) else "b") + PIECE_LETTERS[kind])
        lines.append(f"{row + 1}|" + "|".join(cells) + f"|{row + 1}")
        lines.append(separator)
    lines.append(header)
    return "\n".join(lines)


def print_info(depth, score, nodes, elapsed, move, WIN_SCORE):
    nps = int(nodes * 1000 / elapsed) if elapsed > 0 else 0

    if abs(score) >= WIN_SCORE:
        score_str = "win" if score > 0 else "loss"
    else:
        score_str = f"cp {score}"

    print(f"info depth {depth} score {score_str} nodes {nodes} nps {nps} time {int(elapsed)} pv {format_move(move)}")
