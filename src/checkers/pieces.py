"""State of a single square as reported by the server"""

from dataclasses import dataclass
from typing import Optional

from src.core.shared_types import Color


@dataclass(frozen=True)
class PieceState:
    is_occupied: bool
    is_king: bool = False
    # NOTE: color and is_king only mean something for an occupied square. The server leaves the old values behind on vacated squares.
    color: Optional[Color] = None

    def belongs_to(self, color: Color) -> bool:
        return self.is_occupied and self.color == color


EMPTY_SQUARE = PieceState(is_occupied=False)
