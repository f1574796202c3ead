"""
Keeps the client's view of the game in step with the server.

The client never changes the board itself. Every visible change comes from a snapshot the server sent back,
and only one mutating request (a move or a new game) may be in flight at a time.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Optional

from src.api.serde import WinnerReport
from src.checkers.snapshot import GameSnapshot, MoveCommand, is_movable_by
from src.checkers.square import Square, as_square
from src.core.exceptions import CheckersClientError
from src.core.shared_types import ClientPhase
from src.services.game_server import GameServer

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Request:
    """Ticket for one request: only the newest one, resolving in the phase it was issued from, gets applied."""

    token: int
    phase: ClientPhase
    name: str


class SyncClient:
    """Owns the current snapshot and the drag in progress. The presentation layer only reads them."""

    def __init__(self, server: GameServer) -> None:
        self.server = server
        self._phase = ClientPhase.IDLE
        self._snapshot: Optional[GameSnapshot] = None
        self._dragging_from: Optional[Square] = None
        self._last_error: Optional[CheckersClientError] = None
        self._sequence = 0

    # -- Read-only view for the presentation layer --
    @property
    def phase(self) -> ClientPhase:
        return self._phase

    @property
    def snapshot(self) -> Optional[GameSnapshot]:
        return self._snapshot

    @property
    def dragging_from(self) -> Optional[Square]:
        return self._dragging_from

    @property
    def last_error(self) -> Optional[CheckersClientError]:
        """Failure of the most recent request, cleared by the next successful one."""
        return self._last_error

    @property
    def is_busy(self) -> bool:
        return self._phase == ClientPhase.SUBMITTING

    # -- Operations --
    async def initialize(self) -> Optional[GameSnapshot]:
        """
        Fetch the game on startup.
        ----
        If the server can't be reached we stay IDLE and raise; there is no made-up default board to fall back on.
        Returns None if a newer request overtook this one.
        """
        if self._phase != ClientPhase.IDLE:
            LOGGER.debug("Already initialized (phase %s)", self._phase.name)
            return self._snapshot
        request = self._issue("initialize")
        return await self._resolve(request, self.server.fetch_game())

    async def refresh(self) -> Optional[GameSnapshot]:
        """Re-fetch the current game. Only while READY, so it can't trample a drag or a pending request."""
        if self._phase != ClientPhase.READY:
            LOGGER.debug("Ignoring refresh in phase %s", self._phase.name)
            return None
        request = self._issue("refresh")
        return await self._resolve(request, self.server.fetch_game())

    def begin_drag(self, position: Square | str) -> bool:
        """Pick up a piece. No server call; returns False if the gesture was ignored."""
        square = as_square(position)
        if self._phase != ClientPhase.READY or self._snapshot is None:
            LOGGER.debug("Ignoring drag from %s in phase %s", square.to_position(), self._phase.name)
            return False
        if not is_movable_by(self._snapshot, square, self._snapshot.turn):
            LOGGER.debug("Ignoring drag from %s: not a %s piece", square.to_position(), self._snapshot.turn)
            return False
        self._dragging_from = square
        self._phase = ClientPhase.DRAGGING
        return True

    def cancel_drag(self) -> bool:
        """Piece dropped somewhere that isn't a square."""
        if self._phase != ClientPhase.DRAGGING:
            return False
        self._dragging_from = None
        self._phase = ClientPhase.READY
        return True

    async def complete_drag(self, destination: Square | str) -> Optional[GameSnapshot]:
        """
        Drop the piece and let the server decide.
        ----
        On success the server's snapshot replaces ours. On failure our snapshot stays exactly as it was,
        the drag is dropped and the error (MoveRejectedError for a refused move) is raised.
        Returns None without contacting the server when no drag is in progress.
        """
        if self._phase != ClientPhase.DRAGGING or self._dragging_from is None:
            LOGGER.debug("Ignoring drop in phase %s", self._phase.name)
            return None
        command = MoveCommand(self._dragging_from, as_square(destination))
        request = self._issue("move", next_phase=ClientPhase.SUBMITTING)
        LOGGER.info(
            "Submitting move %s -> %s",
            command.source.to_position(),
            command.destination.to_position(),
        )
        return await self._resolve(request, self.server.submit_move(command))

    async def start_new_game(self) -> Optional[GameSnapshot]:
        """Ask for a fresh game. Allowed from any phase except while another request is being submitted."""
        if self._phase == ClientPhase.SUBMITTING:
            LOGGER.debug("Ignoring new game: a request is already in flight")
            return None
        request = self._issue("new game", next_phase=ClientPhase.SUBMITTING)
        return await self._resolve(request, self.server.new_game())

    async def check_winner(self) -> WinnerReport:
        """Ask the server who (if anyone) has won. Purely informational: the held snapshot is left alone."""
        return await self.server.check_winner()

    # -- Internal helpers --
    def _issue(self, name: str, next_phase: Optional[ClientPhase] = None) -> _Request:
        """Hand out the next sequence token. Anything issued earlier is now stale."""
        self._sequence += 1
        if next_phase is not None:
            self._phase = next_phase
        return _Request(token=self._sequence, phase=self._phase, name=name)

    def _is_current(self, request: _Request) -> bool:
        return request.token == self._sequence and request.phase == self._phase

    async def _resolve(
        self, request: _Request, pending: Awaitable[GameSnapshot]
    ) -> Optional[GameSnapshot]:
        try:
            snapshot = await pending
        except CheckersClientError as exc:
            if not self._is_current(request):
                LOGGER.warning("Discarding failure of superseded %s request: %s", request.name, exc)
                return None
            self._fail(exc)
            LOGGER.info("%s request failed: %s", request.name.capitalize(), exc)
            raise
        except BaseException:
            # cancellation or an unexpected error still ends the request
            if self._is_current(request):
                self._restore()
            raise

        if not self._is_current(request):
            LOGGER.warning("Discarding late response to superseded %s request", request.name)
            return None
        self._apply(snapshot)
        return snapshot

    def _apply(self, snapshot: GameSnapshot) -> None:
        """Replace the snapshot wholesale. Nothing is merged."""
        self._snapshot = snapshot
        self._dragging_from = None
        self._last_error = None
        self._phase = ClientPhase.READY

    def _fail(self, error: CheckersClientError) -> None:
        self._last_error = error
        self._restore()

    def _restore(self) -> None:
        """Snapshot untouched; back to READY, or IDLE if we never had one."""
        self._dragging_from = None
        self._phase = ClientPhase.READY if self._snapshot is not None else ClientPhase.IDLE
