"""CoinMarketCap ID map source."""

from __future__ import annotations

from typing import Any, Dict, Iterable

from app.core.config import settings
from app.core.logging import get_logger
from .base import BaseSource

log = get_logger("ingestion.coinmarketcap")


class CoinMarketCapSource(BaseSource):
    """Fetches the CoinMarketCap cryptocurrency map (numeric id, name, symbol)."""

    name = "coinmarketcap"
    url = settings.CMC_MAP_URL

    def headers(self) -> Dict[str, str]:
        headers = super().headers()
        if settings.CMC_API_KEY:
            headers["X-CMC_PRO_API_KEY"] = settings.CMC_API_KEY
        else:
            log.warning("CMC_API_KEY is not set; CoinMarketCap will likely reject the request")
        return headers

    def extract_items(self, payload: Any) -> Iterable[Dict[str, Any]]:
        data = payload["data"]
        if not isinstance(data, list):
            raise TypeError(f"expected 'data' to be a list, got {type(data).__name__}")
        return data
