"""Orchestration logic for fetching both coin listings."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Dict, List, Optional

from app.core.exceptions import DataUnavailableError, SourceUnavailableError
from app.core.logging import get_logger
from app.schemas.coins import CoinRecord
from .base import BaseSource
from .coingecko_source import CoinGeckoSource
from .coinmarketcap_source import CoinMarketCapSource

log = get_logger("ingestion.runner")


@dataclass(frozen=True)
class CoinListings:
    coinmarketcap: List[CoinRecord]
    coingecko: List[CoinRecord]


class IngestionRunner:
    """Fetches the CoinMarketCap and CoinGecko listings concurrently.

    Both fetches must succeed; any failure raises ``DataUnavailableError`` and
    nothing is returned.
    """

    def __init__(
        self,
        coinmarketcap: Optional[BaseSource] = None,
        coingecko: Optional[BaseSource] = None,
    ):
        self.coinmarketcap = coinmarketcap or CoinMarketCapSource()
        self.coingecko = coingecko or CoinGeckoSource()

    async def run(self) -> CoinListings:
        sources = [self.coinmarketcap, self.coingecko]
        results = await asyncio.gather(*(source.fetch() for source in sources), return_exceptions=True)

        failures: Dict[str, str] = {}
        for source, result in zip(sources, results):
            if isinstance(result, SourceUnavailableError):
                failures[source.name] = result.reason
            elif isinstance(result, BaseException):
                failures[source.name] = f"{type(result).__name__}: {result}"
            else:
                log.info(f"Source={source.name} fetched={len(result)}")

        if failures:
            for name, reason in failures.items():
                log.error(f"Source={name} failed: {reason}")
            raise DataUnavailableError(failures)

        cmc_records, cg_records = results
        return CoinListings(coinmarketcap=cmc_records, coingecko=cg_records)
