from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class CoinOut(BaseModel):
    """Merged coin with both upstream IDs."""

    name: str
    symbol: str
    coinmarketcap_id: str
    coingecko_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class CoinHitOut(CoinOut):
    exact_match: bool = False


class CatalogResponse(BaseModel):
    total: int
    matched: int
    built_at: Optional[datetime] = None
    data: list[CoinOut]


class SearchResponse(BaseModel):
    request_id: str
    api_latency_ms: int
    query: str
    status: Literal["empty", "too_short", "no_results", "ok"]
    count: int
    data: list[CoinHitOut]


class LiveSearchMessage(BaseModel):
    type: Literal["search_result"] = "search_result"
    query: str
    status: Literal["empty", "too_short", "no_results", "ok"]
    count: int
    data: list[CoinHitOut]


class HealthResponse(BaseModel):
    catalog: Literal["ready", "unavailable"]
    total: int = 0
    matched: int = 0
    policy: Optional[str] = None
    built_at: Optional[datetime] = None
