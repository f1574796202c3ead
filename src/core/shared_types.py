"""
Type definitions used across layers
"""

from enum import Enum, StrEnum, auto


class Color(StrEnum):
    RED = "red"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.RED else Color.RED


class ClientPhase(Enum):
    """Where the synchronization client is in its request/response cycle."""

    IDLE = auto()  # no snapshot yet
    READY = auto()
    DRAGGING = auto()
    SUBMITTING = auto()
