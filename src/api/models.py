"""Request and response payloads exchanged with the game server"""

from typing import Any, Optional

from pydantic import BaseModel, StrictBool, StrictStr, field_validator, model_validator

from src.checkers.square import Square
from src.core.exceptions import InvalidPositionError
from src.core.shared_types import Color

Position = str


def _validate_position(value: str) -> str:
    try:
        Square.from_position(value)
    except InvalidPositionError as exc:
        raise ValueError(str(exc)) from exc
    return value


def _blank_to_none(value: Any) -> Any:
    # The reference server writes "" where it means "nothing"
    return None if value == "" else value


# --- REQUEST MODELS ---
class MoveRequest(BaseModel):
    source: Position
    destination: Position

    @field_validator("source", "destination")
    @classmethod
    def validate_position(cls, value: str) -> str:
        return _validate_position(value)


class NewGameRequest(BaseModel):
    """Starting a new game takes no parameters; the body is an empty JSON object."""


# --- RESPONSE MODELS ---
class PieceStatePayload(BaseModel):
    isOccupied: StrictBool
    # only meaningful on an occupied square; a vacated one may leave them out
    isKing: StrictBool = False
    color: StrictStr = ""

    @model_validator(mode="after")
    def occupied_square_is_complete(self) -> "PieceStatePayload":
        # Vacated squares keep whatever color was left behind, so only check occupied ones
        if not self.isOccupied:
            return self
        if "isKing" not in self.model_fields_set:
            raise ValueError("Occupied square must say whether it holds a king.")
        if self.color not in Color.__members__.values():
            raise ValueError(
                f"Occupied square must be {' or '.join(Color)}, got {self.color!r}."
            )
        return self


class GameStatePayload(BaseModel):
    board: dict[Position, PieceStatePayload]
    turn: Color
    status: Optional[StrictStr] = None
    winner: Optional[Color] = None
    captured: Optional[StrictBool] = None
    captured_pos: Optional[Position] = None
    promoted: Optional[StrictBool] = None
    message: Optional[StrictStr] = None

    @field_validator("board")
    @classmethod
    def validate_board_keys(
        cls, value: dict[Position, PieceStatePayload]
    ) -> dict[Position, PieceStatePayload]:
        for position in value:
            _validate_position(position)
        return value

    @field_validator("winner", "captured_pos", mode="before")
    @classmethod
    def blank_means_absent(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("captured_pos")
    @classmethod
    def validate_captured_pos(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _validate_position(value)

    @model_validator(mode="after")
    def captured_pos_only_with_capture(self) -> "GameStatePayload":
        if self.captured_pos is not None and not self.captured:
            raise ValueError(
                f"captured_pos {self.captured_pos!r} reported without a capture."
            )
        return self

    @property
    def reports_last_move(self) -> bool:
        return self.captured is not None or self.promoted is not None


class WinnerReportPayload(BaseModel):
    status: StrictStr
    winner: Optional[Color] = None

    @field_validator("winner", mode="before")
    @classmethod
    def blank_means_absent(cls, value: Any) -> Any:
        return _blank_to_none(value)
