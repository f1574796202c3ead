"""The board as the server last reported it. A fixed 8x8 grid; position strings only show up at the serialization boundary."""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Self

from src.checkers.pieces import EMPTY_SQUARE, PieceState
from src.checkers.square import ALL_SQUARES, BOARD_DIMENSIONS, Square, as_square
from src.core.exceptions import InvalidPositionError
from src.core.shared_types import Color

# A cell is None when the server left that square out of its mapping
Grid = tuple[tuple[Optional[PieceState], ...], ...]


def _empty_grid() -> Grid:
    return tuple((None,) * BOARD_DIMENSIONS[0] for _ in range(BOARD_DIMENSIONS[1]))


@dataclass(frozen=True)
class Board:
    # indexed as cells[rank - 1][file - 1]
    cells: Grid = field(default_factory=_empty_grid)

    def __post_init__(self) -> None:
        if len(self.cells) != BOARD_DIMENSIONS[1] or any(
            len(row) != BOARD_DIMENSIONS[0] for row in self.cells
        ):
            raise ValueError(
                f"Board grid must be {BOARD_DIMENSIONS[1]} ranks of {BOARD_DIMENSIONS[0]} files."
            )

    @classmethod
    def from_squares(cls, squares: dict[Square, PieceState]) -> Self:
        """Place the reported squares on the grid. Squares not in the mapping stay unreported."""
        rows = [[None] * BOARD_DIMENSIONS[0] for _ in range(BOARD_DIMENSIONS[1])]
        for square, piece in squares.items():
            if not square.is_within_bounds():
                raise InvalidPositionError(f"Square off the board: {square!r}")
            rows[square.rank - 1][square.file - 1] = piece
        return cls(tuple(tuple(row) for row in rows))

    @classmethod
    def from_positions(cls, positions: dict[str, PieceState]) -> Self:
        return cls.from_squares(
            {Square.from_position(position): piece for position, piece in positions.items()}
        )

    def to_positions(self) -> dict[str, PieceState]:
        """Reverse of from_positions: only the squares the server actually reported."""
        return {square.to_position(): piece for square, piece in self.reported()}

    def reported(self) -> Iterator[tuple[Square, PieceState]]:
        for square in ALL_SQUARES:
            piece = self.cells[square.rank - 1][square.file - 1]
            if piece is not None:
                yield square, piece

    def square_at(self, position: Square | str) -> PieceState:
        """Missing squares are simply empty; the server is allowed to leave them out."""
        square = as_square(position)
        piece = self.cells[square.rank - 1][square.file - 1]
        return piece if piece is not None else EMPTY_SQUARE

    def occupied_squares(self) -> list[Square]:
        return [square for square, piece in self.reported() if piece.is_occupied]

    def pieces(self, color: Color) -> list[Square]:
        """Squares holding a piece of the given color"""
        return [square for square, piece in self.reported() if piece.belongs_to(color)]
