"""Abstract source interface for coin listings."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

import httpx
from pydantic import ValidationError

from app.core.config import settings
from app.core.exceptions import SourceUnavailableError
from app.core.logging import get_logger
from app.schemas.coins import CoinRecord

log = get_logger("ingestion.base")


class BaseSource(ABC):
    """Fetches one upstream coin listing as ``CoinRecord`` objects.

    Transport failures, non-2xx responses and unexpected payload shapes are
    all reported as ``SourceUnavailableError``.
    """

    name: str
    url: str

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if url:
            self.url = url
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self.transport = transport

    def headers(self) -> Dict[str, str]:
        return {"accept": "application/json"}

    def params(self) -> Dict[str, Any]:
        return {}

    @abstractmethod
    def extract_items(self, payload: Any) -> Iterable[Dict[str, Any]]:
        """Pull the list of raw coin dicts out of the decoded response body."""

    async def fetch(self) -> List[CoinRecord]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(self.url, params=self.params(), headers=self.headers())
                resp.raise_for_status()
                payload = resp.json()
        except httpx.HTTPStatusError as exc:
            raise SourceUnavailableError(self.name, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise SourceUnavailableError(self.name, f"{type(exc).__name__}: {exc}") from exc
        except ValueError as exc:
            raise SourceUnavailableError(self.name, "response is not valid JSON") from exc

        try:
            items = list(self.extract_items(payload))
        except (KeyError, TypeError) as exc:
            raise SourceUnavailableError(self.name, f"unexpected payload shape: {exc}") from exc

        records = self.to_records(items)
        log.info(f"Fetched {len(records)} records from {self.name}")
        return records

    def to_records(self, items: List[Dict[str, Any]]) -> List[CoinRecord]:
        records: List[CoinRecord] = []
        skipped = 0
        for item in items:
            if not isinstance(item, dict):
                skipped += 1
                continue
            try:
                records.append(
                    CoinRecord(
                        id=item.get("id"),
                        name=item.get("name"),
                        symbol=item.get("symbol"),
                    )
                )
            except ValidationError:
                skipped += 1
        if skipped:
            log.warning(f"Source={self.name} skipped {skipped} entries without a usable id")
        return records
