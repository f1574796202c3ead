"""Exceptions raised by the client. Everything below the SyncClient converts library errors into one of these."""

from typing import Optional


class CheckersClientError(Exception):
    """Top-level exception for this package."""


class InvalidPositionError(CheckersClientError):
    """A position outside the 64 squares A1-H8 was referenced."""


class MalformedSnapshotError(CheckersClientError):
    """A payload received from the server does not have the shape of a game state."""


class ServerConnectionError(CheckersClientError):
    """No response from the server (unreachable, connection dropped or timed out)."""


class ServerRejectedError(CheckersClientError):
    """The server answered with a non-2xx status code."""

    def __init__(self, status_code: int, detail: Optional[str] = None) -> None:
        self.status_code = status_code
        self.detail = detail
        message = f"Server responded with HTTP {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MoveRejectedError(ServerRejectedError):
    """The server refused a move (wrong turn, illegal path, game over, ...). The client does not try to infer why."""
