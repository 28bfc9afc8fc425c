"""Coin catalog service: fetch, reconcile and hold the merged coin list.

At startup the service fetches the CoinMarketCap and CoinGecko listings in
parallel, reconciles them once and keeps the merged list for every search
that follows. The list is replaced wholesale on refresh and never mutated.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence, Tuple

from app.core.config import settings
from app.core.exceptions import CatalogError
from app.core.logging import get_logger
from app.core.matching import MatchPolicy, default_policy
from app.ingestion.runner import IngestionRunner
from app.schemas.coins import MergedRecord, SearchResult
from app.services.reconcile_service import reconcile
from app.services.search_service import search
from app.services.search_session import SearchSession, StateListener

log = get_logger("catalog_service")


class CoinCatalogService:
    """Holds the merged CoinMarketCap/CoinGecko list and answers searches.

    Usage:
        service = await CoinCatalogService.create()
        result = service.search("bitcoin")
        session = service.open_session(listener)
    """

    def __init__(self, runner: Optional[IngestionRunner] = None, policy: Optional[MatchPolicy] = None):
        self.runner = runner or IngestionRunner()
        self.policy = policy or default_policy()
        self._records: Tuple[MergedRecord, ...] = ()
        self.built_at: Optional[datetime] = None
        self._refresh_task: Optional[asyncio.Task] = None

    @classmethod
    async def create(
        cls,
        runner: Optional[IngestionRunner] = None,
        policy: Optional[MatchPolicy] = None,
    ) -> "CoinCatalogService":
        """Build the catalog. Raises ``DataUnavailableError`` if either listing fails."""
        service = cls(runner=runner, policy=policy)
        await service.refresh()
        return service

    @classmethod
    def from_records(cls, records: Sequence[MergedRecord], policy: Optional[MatchPolicy] = None) -> "CoinCatalogService":
        service = cls(policy=policy)
        service._records = tuple(records)
        service.built_at = datetime.now(timezone.utc)
        return service

    @property
    def records(self) -> Tuple[MergedRecord, ...]:
        return self._records

    @property
    def ready(self) -> bool:
        return self.built_at is not None

    async def refresh(self) -> int:
        listings = await self.runner.run()
        merged = reconcile(listings.coinmarketcap, listings.coingecko, policy=self.policy)
        self._records = tuple(merged)
        self.built_at = datetime.now(timezone.utc)
        return len(self._records)

    def stats(self) -> Dict[str, Any]:
        matched = sum(1 for record in self._records if record.coingecko_id is not None)
        return {
            "total": len(self._records),
            "matched": matched,
            "unmatched": len(self._records) - matched,
            "policy": self.policy.value,
            "built_at": self.built_at,
        }

    def search(self, query: str) -> SearchResult:
        return search(self._records, query, policy=self.policy)

    def open_session(self, listener: Optional[StateListener] = None, delay: Optional[float] = None) -> SearchSession:
        return SearchSession(self._records, listener=listener, delay=delay, policy=self.policy)

    # =========================================================================
    # BACKGROUND REFRESH
    # =========================================================================
    def start_refresher(self, interval: Optional[float] = None) -> None:
        interval = settings.CATALOG_REFRESH_SECONDS if interval is None else interval
        if interval <= 0:
            log.info("Catalog refresh is disabled")
            return
        if self._refresh_task is not None:
            log.warning("Catalog refresher already running")
            return
        self._refresh_task = asyncio.create_task(self._refresh_loop(interval))
        log.info(f"Started catalog refresher (interval: {interval}s)")

    def stop_refresher(self) -> None:
        if self._refresh_task:
            self._refresh_task.cancel()
            self._refresh_task = None
            log.info("Stopped catalog refresher")

    async def _refresh_loop(self, interval: float) -> None:
        while True:
            try:
                await asyncio.sleep(interval)
                count = await self.refresh()
                log.info(f"Catalog refreshed: {count} coins")
            except asyncio.CancelledError:
                log.info("Catalog refresh loop cancelled")
                break
            except CatalogError as exc:
                # Keep serving the last complete catalog
                log.error(f"Catalog refresh failed, keeping previous data: {exc}")


# Global instance holder for the service
_catalog_service: Optional[CoinCatalogService] = None


async def init_catalog_service(runner: Optional[IngestionRunner] = None) -> CoinCatalogService:
    """Build the global catalog and start the background refresher."""
    global _catalog_service
    _catalog_service = await CoinCatalogService.create(runner=runner)
    _catalog_service.start_refresher()
    return _catalog_service


def get_catalog_service() -> Optional[CoinCatalogService]:
    return _catalog_service


def shutdown_catalog_service() -> None:
    global _catalog_service
    if _catalog_service:
        _catalog_service.stop_refresher()
        _catalog_service = None
