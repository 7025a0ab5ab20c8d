"""Single serialization point for the match.

MatchService owns the one MatchState value. Every action runs to completion
under one asyncio.Lock, and the stored state is only swapped on success, so
captures, occupancy checks and commits are observed as one step.

The on_commit callback also runs under the lock, so state snapshots handed to
it are delivered in commit order.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from app.schemas.game_engine import MatchState

from .engine import GameAction, ProcessResult, process_action

logger = logging.getLogger(__name__)

CommitCallback = Callable[[ProcessResult], Awaitable[None]]


class MatchService:
    """Owns the authoritative match state and serializes actions against it."""

    def __init__(self, allow_reinitialize: bool = False, state: MatchState | None = None):
        self._state = state or MatchState()
        self._allow_reinitialize = allow_reinitialize
        self._lock = asyncio.Lock()
        logger.info("MatchService initialized (allow_reinitialize=%s)", allow_reinitialize)

    @property
    def state(self) -> MatchState:
        return self._state

    async def submit(
        self, action: GameAction, on_commit: CommitCallback | None = None
    ) -> ProcessResult:
        """Process an action and, if it succeeds, make its state authoritative.

        Args:
            action: The action to apply.
            on_commit: Awaited with the result after a successful commit,
                before the lock is released.

        Returns:
            The ProcessResult from the engine. On failure the stored state is
            left untouched.
        """
        async with self._lock:
            result = process_action(self._state, action, self._allow_reinitialize)
            if result.success and result.state is not None:
                self._state = result.state
                logger.debug(
                    "Match state updated: phase=%s, current_player=%s, event_seq=%d",
                    self._state.phase.value,
                    self._state.current_player,
                    self._state.event_seq,
                )
                if on_commit is not None:
                    await on_commit(result)
            return result
