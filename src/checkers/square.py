"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_uppercase

from src.core.exceptions import InvalidPositionError

# Checkers board is always 8x8 (files, ranks)
BOARD_DIMENSIONS = (8, 8)

FILE_LETTERS = ascii_uppercase[: BOARD_DIMENSIONS[0]]
RANK_DIGITS = "".join(str(rank) for rank in range(1, BOARD_DIMENSIONS[1] + 1))


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_position(cls, position: str) -> Square:
        """Wire notation: 'A1' - 'H8' get converted to (1,1) - (8,8)"""
        if (
            not isinstance(position, str)
            or len(position) != 2
            or position[0] not in FILE_LETTERS
            or position[1] not in RANK_DIGITS
        ):
            raise InvalidPositionError(f"Not a board position: {position!r}")

        return cls(FILE_LETTERS.index(position[0]) + 1, int(position[1]))

    def to_position(self) -> str:
        if not self.is_within_bounds():
            raise InvalidPositionError(f"Square off the board: {self!r}")
        return f"{FILE_LETTERS[self.file - 1]}{self.rank}"

    def is_within_bounds(self) -> bool:
        return (1 <= self.file <= BOARD_DIMENSIONS[0]) and (
            1 <= self.rank <= BOARD_DIMENSIONS[1]
        )

    def is_dark(self) -> bool:
        """Pieces only ever stand on the dark squares (A1 is dark)."""
        return (self.file + self.rank) % 2 == 0


def as_square(position: Square | str) -> Square:
    """Accept either representation at the edges of the client."""
    if isinstance(position, Square):
        if not position.is_within_bounds():
            raise InvalidPositionError(f"Square off the board: {position!r}")
        return position
    return Square.from_position(position)


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(file, rank)
    for rank in range(1, BOARD_DIMENSIONS[1] + 1)
    for file in range(1, BOARD_DIMENSIONS[0] + 1)
)
