"""Live, debounced search over a read-only coin list."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, Sequence

from app.core.config import settings
from app.core.debounce import Debouncer
from app.core.logging import get_logger
from app.core.matching import MatchPolicy
from app.schemas.coins import MergedRecord, SearchResult, SearchState
from app.services.search_service import search

log = get_logger("search_session")

StateListener = Callable[[SearchState], Awaitable[None]]


class SearchSession:
    """Tracks one user's typing and re-runs the search once they pause.

    Each ``update()`` replaces any evaluation still waiting out the debounce
    delay; an evaluation already publishing is allowed to finish. Clearing
    the query skips the delay: the pending evaluation is dropped and the
    empty state is in place before ``update()`` returns. Listener calls are
    serialized, so a listener never sees two states at once.
    """

    def __init__(
        self,
        records: Sequence[MergedRecord],
        listener: Optional[StateListener] = None,
        delay: Optional[float] = None,
        min_length: Optional[int] = None,
        policy: Optional[MatchPolicy] = None,
    ):
        self.records = tuple(records)
        self.listener = listener
        self.min_length = min_length
        self.policy = policy
        self.debouncer = Debouncer(settings.search_debounce_seconds if delay is None else delay)
        self.query = ""
        self.state = SearchState()
        self._listener_lock = asyncio.Lock()

    async def update(self, query: str) -> None:
        self.query = query or ""

        if not self.query:
            self.debouncer.cancel()
            await self._publish(SearchState(query="", result=SearchResult.empty()))
            return

        pending_query = self.query
        self.debouncer.schedule(lambda: self._evaluate(pending_query))

    async def _evaluate(self, query: str) -> None:
        result = search(self.records, query, min_length=self.min_length, policy=self.policy)
        log.debug(f"Search query={query!r} visible={len(result.visible)}")
        await self._publish(SearchState(query=query, result=result))

    async def _publish(self, state: SearchState) -> None:
        self.state = state
        if self.listener is None:
            return
        async with self._listener_lock:
            await self.listener(state)

    async def aclose(self) -> None:
        await self.debouncer.aclose()
