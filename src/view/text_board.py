"""Plain-text rendering of a snapshot. Reads the model only; any other front end can replace it."""

from typing import Optional

from src.checkers.pieces import PieceState
from src.checkers.snapshot import GameSnapshot
from src.checkers.square import BOARD_DIMENSIONS, FILE_LETTERS, Square
from src.core.shared_types import Color

PIECE_SYMBOLS: dict[tuple[Color, bool], str] = {
    (Color.RED, False): "r",
    (Color.RED, True): "R",
    (Color.BLACK, False): "b",
    (Color.BLACK, True): "B",
}
DARK_SQUARE = "."
LIGHT_SQUARE = " "
DRAG_MARKER = "*"


def piece_symbol(piece: PieceState) -> Optional[str]:
    if not piece.is_occupied or piece.color is None:
        return None
    return PIECE_SYMBOLS[(piece.color, piece.is_king)]


def render_board(snapshot: GameSnapshot, dragging_from: Optional[Square] = None) -> str:
    """Rank 8 at the top, A-file on the left. The piece being dragged is marked with a '*'."""
    lines = ["  " + " ".join(FILE_LETTERS)]
    for rank in range(BOARD_DIMENSIONS[1], 0, -1):
        cells: list[str] = []
        for file in range(1, BOARD_DIMENSIONS[0] + 1):
            square = Square(file, rank)
            symbol = piece_symbol(snapshot.board.square_at(square))
            if symbol is None:
                symbol = DARK_SQUARE if square.is_dark() else LIGHT_SQUARE
            elif square == dragging_from:
                symbol = DRAG_MARKER
            cells.append(symbol)
        lines.append(f"{rank} " + " ".join(cells))
    return "\n".join(lines)


def status_lines(snapshot: GameSnapshot) -> list[str]:
    """The messages shown under the board"""
    lines = [f"Current Turn: {snapshot.turn}"]
    if snapshot.status is not None:
        lines.append(f"Game Status: {snapshot.status}")
    if snapshot.last_move.captured_at is not None:
        lines.append(f"Captured a piece at: {snapshot.last_move.captured_at.to_position()}")
    if snapshot.last_move.is_promotion:
        lines.append("A piece has been promoted to King!")
    if snapshot.winner is not None:
        lines.append(f"Winner: {snapshot.winner}")
    return lines
