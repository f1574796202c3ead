"""Gateway to the game server (the protocol lets the client be tested without a network)."""

import logging
from types import TracebackType
from typing import Any, Optional, Protocol, Self

import httpx

from src.api.models import NewGameRequest
from src.api.serde import (
    WinnerReport,
    move_to_payload,
    parse_snapshot,
    parse_winner_report,
)
from src.checkers.snapshot import GameSnapshot, MoveCommand
from src.core.config import ClientSettings
from src.core.exceptions import (
    MalformedSnapshotError,
    MoveRejectedError,
    ServerConnectionError,
    ServerRejectedError,
)

LOGGER = logging.getLogger(__name__)


class GameServer(Protocol):
    """Everything the client needs from the server. Each call returns a complete, validated snapshot or raises."""

    async def fetch_game(self) -> GameSnapshot:
        """Current state of the game."""
        ...

    async def submit_move(self, command: MoveCommand) -> GameSnapshot:
        """State after the move was applied. Raises MoveRejectedError if the server refuses it."""
        ...

    async def new_game(self) -> GameSnapshot:
        """State of a freshly started game."""
        ...

    async def check_winner(self) -> WinnerReport:
        """Status and winner as the server currently sees them."""
        ...


class HTTPGameServer:
    """GameServer over HTTP/JSON using httpx"""

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or ClientSettings()
        self._http = httpx.AsyncClient(
            base_url=self.settings.base_url,
            timeout=self.settings.timeout_s,
            transport=transport,
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # -- GameServer --
    async def fetch_game(self) -> GameSnapshot:
        return parse_snapshot(await self._request("GET", "/game"))

    async def submit_move(self, command: MoveCommand) -> GameSnapshot:
        body = move_to_payload(command)
        try:
            data = await self._request("POST", "/game/move", json=body)
        except ServerRejectedError as exc:
            raise MoveRejectedError(exc.status_code, exc.detail) from exc
        return parse_snapshot(data)

    async def new_game(self) -> GameSnapshot:
        body = NewGameRequest().model_dump()
        return parse_snapshot(await self._request("POST", "/game/new", json=body))

    async def check_winner(self) -> WinnerReport:
        return parse_winner_report(await self._request("GET", "/game/check-winner"))

    # -- Internal helpers --
    async def _request(
        self, method: str, path: str, json: Optional[dict[str, Any]] = None
    ) -> Any:
        """Send one request and decode the JSON body, translating every httpx failure into our own exceptions."""
        try:
            response = await self._http.request(method, path, json=json)
        except httpx.TimeoutException as exc:
            LOGGER.warning("%s %s timed out after %ss", method, path, self.settings.timeout_s)
            raise ServerConnectionError(
                f"{method} {path}: no response within {self.settings.timeout_s}s"
            ) from exc
        except httpx.TransportError as exc:
            LOGGER.warning("%s %s failed: %s", method, path, exc)
            raise ServerConnectionError(f"{method} {path}: {exc}") from exc
        except httpx.DecodingError as exc:
            LOGGER.warning("%s %s sent a body that could not be decoded: %s", method, path, exc)
            raise MalformedSnapshotError(f"{method} {path}: {exc}") from exc
        except httpx.HTTPError as exc:
            LOGGER.warning("%s %s failed: %s", method, path, exc)
            raise ServerConnectionError(f"{method} {path}: {exc}") from exc

        if not response.is_success:
            detail = response.text.strip() or response.reason_phrase
            LOGGER.info("%s %s rejected with %s: %s", method, path, response.status_code, detail)
            raise ServerRejectedError(response.status_code, detail)

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedSnapshotError(f"{method} {path}: response is not JSON") from exc
        LOGGER.debug("%s %s -> %s", method, path, response.status_code)
        return data
