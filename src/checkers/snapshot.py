"""
One game state, exactly as the server reported it.

The client treats a snapshot as an immutable value: every response from the server replaces the previous one wholesale.
Only the small amount of gating the client needs before it bothers the server lives here; all rules live server-side.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from src.checkers.board import Board
from src.checkers.effects import EffectKind, LastMoveEffect
from src.checkers.pieces import PieceState
from src.checkers.square import Square, as_square
from src.core.shared_types import Color


@dataclass(frozen=True)
class WireShape:
    """
    How the server spelled a payload, kept only so it can be written back out exactly as received.
    ----
    present: optional top-level keys that were in the payload (None for a snapshot built locally)
    empty: the spelling ("" or null) of the present keys that carried no value
    squares: raw form of squares that can't be rebuilt from a PieceState (vacated squares with missing keys or odd colors)
    """

    present: Optional[frozenset[str]] = None
    empty: Mapping[str, Optional[str]] = field(default_factory=dict)
    squares: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)


@dataclass(frozen=True)
class GameSnapshot:
    board: Board
    turn: Color
    status: Optional[str] = None
    winner: Optional[Color] = None
    last_move: LastMoveEffect = field(default_factory=LastMoveEffect.none)
    message: Optional[str] = None
    # serialization detail, not game state: two snapshots of the same game compare equal however they were spelled
    wire_shape: WireShape = field(default_factory=WireShape, compare=False, repr=False)

    @property
    def is_concluded(self) -> bool:
        return self.winner is not None

    @property
    def reports_last_move(self) -> bool:
        """Move responses carry the capture/promotion flags, plain fetches don't."""
        if self.wire_shape.present is None:
            return self.last_move.kind != EffectKind.NONE
        return bool({"captured", "promoted"} & self.wire_shape.present)


@dataclass(frozen=True)
class MoveCommand:
    """A drag/drop gesture translated into a request. Lives for the duration of one request."""

    source: Square
    destination: Square

    @classmethod
    def between(cls, source: Square | str, destination: Square | str) -> "MoveCommand":
        return cls(as_square(source), as_square(destination))


def square_at(snapshot: GameSnapshot, position: Square | str) -> PieceState:
    """State of any of the 64 squares; squares the server left out read as unoccupied."""
    return snapshot.board.square_at(position)


def is_movable_by(snapshot: GameSnapshot, position: Square | str, color: Color) -> bool:
    """
    The only rule the client checks itself: the square holds one of your pieces and it is your turn.
    ----
    Paths, captures and everything else are for the server to decide.
    """
    piece = square_at(snapshot, position)
    return piece.belongs_to(color) and color == snapshot.turn
