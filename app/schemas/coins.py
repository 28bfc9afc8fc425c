"""Coin listing and search schemas"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CoinRecord(BaseModel):
    """One entry of an upstream coin listing (CoinMarketCap or CoinGecko)."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    symbol: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        if value is None:
            raise ValueError("id is required")
        return str(value)

    @field_validator("name", "symbol", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        # Missing text never fails a listing; the record just won't match
        if value is None:
            return ""
        return str(value)


class MergedRecord(BaseModel):
    """A CoinMarketCap coin annotated with its CoinGecko counterpart, if any."""

    model_config = ConfigDict(frozen=True)

    name: str
    symbol: str
    coinmarketcap_id: str
    coingecko_id: Optional[str] = None

    @property
    def record_key(self) -> str:
        return self.coinmarketcap_id


class SearchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: str = ""
    visible: List[MergedRecord] = Field(default_factory=list)
    exact_flags: Dict[str, bool] = Field(default_factory=dict)

    @classmethod
    def empty(cls, query: str = "") -> "SearchResult":
        return cls(query=query)

    def is_exact(self, record: MergedRecord) -> bool:
        return self.exact_flags.get(record.record_key, False)


class SearchState(BaseModel):
    """Snapshot of a live search session after its latest evaluation."""

    model_config = ConfigDict(frozen=True)

    query: str = ""
    result: SearchResult = Field(default_factory=SearchResult)
