"""
What the most recently applied move did, beyond moving a piece.

The server reports this with loose flags (captured / captured_pos / promoted) riding along the snapshot.
Folding them into one value makes it explicit that this describes the last transition, not the board's steady state.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.checkers.square import Square


class EffectKind(Enum):
    NONE = auto()
    CAPTURED = auto()
    PROMOTED = auto()
    CAPTURED_AND_PROMOTED = auto()


@dataclass(frozen=True)
class LastMoveEffect:
    kind: EffectKind = EffectKind.NONE
    captured_at: Optional[Square] = None

    def __post_init__(self) -> None:
        if self.is_capture != (self.captured_at is not None):
            raise ValueError(
                f"{self.kind.name} requires captured_at to be {'set' if self.is_capture else 'empty'}."
            )

    # -- constructors for each variant --
    @classmethod
    def none(cls) -> Self:
        return cls()

    @classmethod
    def captured(cls, square: Square) -> Self:
        return cls(EffectKind.CAPTURED, square)

    @classmethod
    def promoted(cls) -> Self:
        return cls(EffectKind.PROMOTED)

    @classmethod
    def captured_and_promoted(cls, square: Square) -> Self:
        return cls(EffectKind.CAPTURED_AND_PROMOTED, square)

    @classmethod
    def from_flags(
        cls, captured: bool, captured_at: Optional[Square], promoted: bool
    ) -> Self:
        """Build from the server's flags. A capture without a square to point at is not a valid report."""
        if captured and captured_at is None:
            raise ValueError("Capture reported without a captured square.")
        if captured and promoted:
            return cls.captured_and_promoted(captured_at)
        if captured:
            return cls.captured(captured_at)
        if promoted:
            return cls.promoted()
        return cls.none()

    @property
    def is_capture(self) -> bool:
        return self.kind in (EffectKind.CAPTURED, EffectKind.CAPTURED_AND_PROMOTED)

    @property
    def is_promotion(self) -> bool:
        return self.kind in (EffectKind.PROMOTED, EffectKind.CAPTURED_AND_PROMOTED)
