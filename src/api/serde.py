"""Conversion between server JSON and the snapshot model. Validation failures never leave this module as pydantic errors."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from src.api.models import GameStatePayload, MoveRequest, WinnerReportPayload
from src.checkers.board import Board
from src.checkers.effects import EffectKind, LastMoveEffect
from src.checkers.pieces import PieceState
from src.checkers.snapshot import GameSnapshot, MoveCommand, WireShape
from src.checkers.square import Square
from src.core.exceptions import MalformedSnapshotError
from src.core.shared_types import Color

LOGGER = logging.getLogger(__name__)


# Optional top-level keys, in the order they are written out
OPTIONAL_FIELDS = ("status", "winner", "captured", "captured_pos", "promoted", "message")


@dataclass(frozen=True)
class WinnerReport:
    status: str
    winner: Optional[Color]


def parse_snapshot(raw: Any) -> GameSnapshot:
    """Validate a decoded JSON payload and build the snapshot it describes."""
    if not isinstance(raw, dict):
        raise MalformedSnapshotError(
            f"Game state must be a JSON object, got {type(raw).__name__}."
        )
    try:
        payload = GameStatePayload.model_validate(raw)
        effect = LastMoveEffect.from_flags(
            captured=bool(payload.captured),
            captured_at=(
                Square.from_position(payload.captured_pos)
                if payload.captured_pos
                else None
            ),
            promoted=bool(payload.promoted),
        )
    except (ValidationError, ValueError) as exc:
        LOGGER.warning("Rejected malformed game state: %s", exc)
        raise MalformedSnapshotError(f"Invalid game state: {exc}") from exc

    pieces = {
        position: PieceState(
            is_occupied=piece.isOccupied,
            is_king=piece.isKing,
            color=_color_or_none(piece.color),
        )
        for position, piece in payload.board.items()
    }
    present = frozenset(key for key in OPTIONAL_FIELDS if key in raw)
    shape = WireShape(
        present=present,
        empty={key: raw[key] for key in present if raw[key] is None or raw[key] == ""},
        squares={
            position: dict(raw["board"][position])
            for position, piece in pieces.items()
            if _square_to_payload(piece) != raw["board"][position]
        },
    )
    return GameSnapshot(
        board=Board.from_positions(pieces),
        turn=payload.turn,
        status=payload.status,
        winner=payload.winner,
        last_move=effect,
        message=payload.message,
        wire_shape=shape,
    )


def snapshot_to_payload(snapshot: GameSnapshot) -> dict[str, Any]:
    """
    Reverse of parse_snapshot: JSON-ready dict in the server's shape.
    ----
    A parsed snapshot is written back with exactly the keys (and blank spellings) it arrived with.
    One built locally gets status and winner, plus the move flags only when the last move did something.
    """
    shape = snapshot.wire_shape
    payload: dict[str, Any] = {
        "board": {
            position: dict(shape.squares.get(position) or _square_to_payload(piece))
            for position, piece in snapshot.board.to_positions().items()
        },
        "turn": snapshot.turn.value,
    }

    effect = snapshot.last_move
    values: dict[str, Any] = {
        "status": snapshot.status,
        "winner": snapshot.winner.value if snapshot.winner is not None else None,
        "captured": effect.is_capture,
        "captured_pos": (
            effect.captured_at.to_position() if effect.captured_at is not None else None
        ),
        "promoted": effect.is_promotion,
        "message": snapshot.message,
    }
    if shape.present is None:
        keys = {"status", "winner"}
        if effect.kind != EffectKind.NONE:
            keys |= {"captured", "promoted"}
        if effect.captured_at is not None:
            keys.add("captured_pos")
        if snapshot.message is not None:
            keys.add("message")
    else:
        keys = set(shape.present)

    for key in OPTIONAL_FIELDS:
        if key in keys:
            value = values[key]
            payload[key] = value if value else shape.empty.get(key, value)
    return payload


def move_to_payload(command: MoveCommand) -> dict[str, str]:
    request = MoveRequest(
        source=command.source.to_position(),
        destination=command.destination.to_position(),
    )
    return request.model_dump()


def parse_winner_report(raw: Any) -> WinnerReport:
    if not isinstance(raw, dict):
        raise MalformedSnapshotError(
            f"Winner report must be a JSON object, got {type(raw).__name__}."
        )
    try:
        payload = WinnerReportPayload.model_validate(raw)
    except ValidationError as exc:
        raise MalformedSnapshotError(f"Invalid winner report: {exc}") from exc
    return WinnerReport(status=payload.status, winner=payload.winner)


def _color_or_none(value: str) -> Optional[Color]:
    # vacated squares may carry a blank or stale color
    return Color(value) if value in Color.__members__.values() else None


def _square_to_payload(piece: PieceState) -> dict[str, Any]:
    return {
        "isOccupied": piece.is_occupied,
        "isKing": piece.is_king,
        "color": piece.color.value if piece.color is not None else "",
    }
