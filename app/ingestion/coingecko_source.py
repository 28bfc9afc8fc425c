"""CoinGecko coin list source."""

from __future__ import annotations

from typing import Any, Dict, Iterable

from app.core.config import settings
from .base import BaseSource


class CoinGeckoSource(BaseSource):
    """Fetches the full CoinGecko coin list (slug id, name, symbol)."""

    name = "coingecko"
    url = settings.COINGECKO_LIST_URL

    def headers(self) -> Dict[str, str]:
        headers = super().headers()
        if settings.COINGECKO_API_KEY:
            headers["x-cg-demo-api-key"] = settings.COINGECKO_API_KEY
        return headers

    def params(self) -> Dict[str, Any]:
        return {"include_platform": "false"}

    def extract_items(self, payload: Any) -> Iterable[Dict[str, Any]]:
        if not isinstance(payload, list):
            raise TypeError(f"expected a list, got {type(payload).__name__}")
        return payload
