"""Catalog service tests"""

import asyncio

import httpx
import pytest

from app.catalog_entrypoint import format_hits
from app.core.exceptions import DataUnavailableError
from app.core.matching import MatchPolicy
from app.ingestion.coingecko_source import CoinGeckoSource
from app.ingestion.coinmarketcap_source import CoinMarketCapSource
from app.ingestion.runner import IngestionRunner
from app.schemas.coins import MergedRecord
from app.services.catalog_service import CoinCatalogService


class FailingRunner:
    """Runner whose upstream listings are always unavailable."""

    def __init__(self):
        self.calls = 0

    async def run(self):
        self.calls += 1
        raise DataUnavailableError({"coingecko": "HTTP 503"})


def make_runner(cmc_payload, cg_payload, cg_status=200):
    return IngestionRunner(
        coinmarketcap=CoinMarketCapSource(transport=httpx.MockTransport(lambda r: httpx.Response(200, json=cmc_payload))),
        coingecko=CoinGeckoSource(transport=httpx.MockTransport(lambda r: httpx.Response(cg_status, json=cg_payload))),
    )


CMC = {
    "data": [
        {"id": 1, "name": "Bitcoin", "symbol": "BTC"},
        {"id": 1027, "name": "Ethereum", "symbol": "ETH"},
        {"id": 52, "name": "XRP", "symbol": "XRP"},
    ]
}
CG = [
    {"id": "ethereum", "symbol": "eth", "name": "Ethereum"},
    {"id": "bitcoin", "symbol": "btc", "name": "Bitcoin"},
]


class TestCatalogService:
    """Test building, searching and refreshing the merged catalog"""

    @pytest.mark.asyncio
    async def test_create_builds_merged_catalog(self):
        service = await CoinCatalogService.create(runner=make_runner(CMC, CG), policy=MatchPolicy.SYMBOL_NAME)

        assert service.ready
        assert [(r.coinmarketcap_id, r.coingecko_id) for r in service.records] == [
            ("1", "bitcoin"),
            ("1027", "ethereum"),
            ("52", None),
        ]
        stats = service.stats()
        assert (stats["total"], stats["matched"], stats["unmatched"]) == (3, 2, 1)
        assert stats["policy"] == "symbol_name"

    @pytest.mark.asyncio
    async def test_create_fails_without_partial_catalog(self):
        with pytest.raises(DataUnavailableError):
            await CoinCatalogService.create(runner=make_runner(CMC, {}, cg_status=503))

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_previous_catalog(self):
        service = await CoinCatalogService.create(runner=make_runner(CMC, CG))
        before = service.records

        service.runner = make_runner(CMC, {}, cg_status=503)
        with pytest.raises(DataUnavailableError):
            await service.refresh()
        assert service.records == before

    def test_search_uses_catalog_records(self):
        service = CoinCatalogService.from_records(
            [MergedRecord(name="Bitcoin", symbol="BTC", coinmarketcap_id="1", coingecko_id="bitcoin")]
        )
        result = service.search("btc")
        assert [r.coinmarketcap_id for r in result.visible] == ["1"]
        assert result.exact_flags == {"1": True}

    def test_refresher_disabled_by_default(self):
        service = CoinCatalogService.from_records([])
        service.start_refresher(interval=0)
        assert service._refresh_task is None

    @pytest.mark.asyncio
    async def test_failed_periodic_refresh_keeps_catalog_and_retries(self):
        runner = FailingRunner()
        service = CoinCatalogService.from_records(
            [MergedRecord(name="Bitcoin", symbol="BTC", coinmarketcap_id="1", coingecko_id="bitcoin")]
        )
        before = service.records
        service.runner = runner

        service.start_refresher(interval=0.01)
        try:
            await asyncio.sleep(0.1)
        finally:
            service.stop_refresher()

        assert runner.calls >= 2
        assert service.records == before
        assert service.ready

    @pytest.mark.asyncio
    async def test_periodic_refresh_replaces_catalog(self):
        service = CoinCatalogService.from_records([])
        service.runner = make_runner(CMC, CG)

        service.start_refresher(interval=0.01)
        try:
            await asyncio.sleep(0.1)
        finally:
            service.stop_refresher()

        assert [r.coinmarketcap_id for r in service.records] == ["1", "1027", "52"]


class TestFormatHits:
    """Test CLI output"""

    @pytest.fixture
    def service(self):
        return CoinCatalogService.from_records(
            [
                MergedRecord(name="Bitcoin", symbol="BTC", coinmarketcap_id="1", coingecko_id="bitcoin"),
                MergedRecord(name="Bitcoin Gold", symbol="BTG", coinmarketcap_id="2083", coingecko_id=None),
            ]
        )

    def test_hits(self, service):
        lines = format_hits(service, "bitcoin")
        assert len(lines) == 2
        assert lines[0].startswith("Bitcoin (BTC) | CoinGecko ID: bitcoin | CoinMarketCap ID: 1")
        assert "CoinGecko ID: - " in lines[1]

    def test_too_short(self, service):
        assert format_hits(service, "bt") == ["Please enter at least 3 characters to search."]

    def test_no_results(self, service):
        assert format_hits(service, "doge") == ["No results found for doge."]
