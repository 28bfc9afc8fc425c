"""Search filter tests"""

import pytest

from app.core.matching import MatchPolicy
from app.schemas.coins import MergedRecord
from app.services.search_service import SearchStatus, describe, search


def merged(cmc_id, name, symbol, cg_id=None):
    return MergedRecord(name=name, symbol=symbol, coinmarketcap_id=cmc_id, coingecko_id=cg_id)


class TestSearch:
    """Test visibility, exact flags and ordering"""

    @pytest.fixture
    def records(self):
        return [
            merged("1", "Bitcoin", "BTC", "bitcoin"),
            merged("1027", "Ethereum", "ETH", "ethereum"),
            merged("1321", "Ethereum Classic", "ETC", "ethereum-classic"),
            merged("1831", "Bitcoin Cash", "BCH", "bitcoin-cash"),
            merged("3408", "USD Coin", "USDC", "usd-coin"),
        ]

    def test_empty_query_returns_nothing(self, records):
        result = search(records, "")
        assert result.visible == []
        assert result.exact_flags == {}

    @pytest.mark.parametrize("query", ["b", "bi", "et"])
    def test_short_query_returns_nothing(self, records, query):
        assert search(records, query).visible == []

    def test_min_length_is_configurable(self, records):
        assert [r.symbol for r in search(records, "et", min_length=2).visible] == ["ETH", "ETC"]

    def test_punctuation_only_query_is_not_a_wildcard(self, records):
        assert search(records, "---").visible == []

    def test_name_substring_is_case_insensitive(self, records):
        result = search(records, "BITCOIN")
        assert [r.coinmarketcap_id for r in result.visible] == ["1", "1831"]

    def test_symbol_substring(self, records):
        result = search(records, "usdc")
        assert [r.symbol for r in result.visible] == ["USDC"]

    def test_punctuation_in_query_is_ignored(self, records):
        result = search(records, "usd-coin")
        assert [r.symbol for r in result.visible] == ["USDC"]

    def test_order_follows_catalog(self, records):
        result = search(records, "coin")
        assert [r.coinmarketcap_id for r in result.visible] == ["1", "1831", "3408"]

    def test_eth_flags_both_exact_under_symbol_name_policy(self, records):
        result = search(records, "eth", policy=MatchPolicy.SYMBOL_NAME)
        assert [r.symbol for r in result.visible] == ["ETH", "ETC"]
        assert result.exact_flags == {"1027": True, "1321": True}

    def test_eth_flags_only_eth_exact_under_symbol_policy(self, records):
        result = search(records, "eth", policy=MatchPolicy.SYMBOL)
        assert [r.symbol for r in result.visible] == ["ETH", "ETC"]
        assert result.exact_flags == {"1027": True, "1321": False}
        assert result.is_exact(result.visible[0])
        assert not result.is_exact(result.visible[1])

    def test_clearing_after_a_query(self, records):
        assert search(records, "bit").visible
        assert search(records, "").visible == []

    def test_records_are_not_mutated(self, records):
        before = list(records)
        search(records, "bitcoin")
        assert records == before


class TestDescribe:
    """Test advisory status"""

    def test_statuses(self):
        records = [merged("1", "Bitcoin", "BTC")]
        assert describe("", search(records, "")) is SearchStatus.EMPTY
        assert describe("bt", search(records, "bt")) is SearchStatus.TOO_SHORT
        assert describe("doge", search(records, "doge")) is SearchStatus.NO_RESULTS
        assert describe("btc", search(records, "btc")) is SearchStatus.OK
