"""Coin routes - Merged catalog, one-shot search and live debounced search."""

import time
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status

from app.api.deps import get_catalog, get_optional_catalog
from app.core.logging import get_logger
from app.schemas.api import CatalogResponse, CoinHitOut, CoinOut, LiveSearchMessage, SearchResponse
from app.schemas.coins import SearchResult, SearchState
from app.services.catalog_service import CoinCatalogService
from app.services.search_service import describe

router = APIRouter(prefix="/coins", tags=["coins"])
log = get_logger("coin_routes")


def _hits(result: SearchResult) -> list[CoinHitOut]:
    return [
        CoinHitOut(
            name=record.name,
            symbol=record.symbol,
            coinmarketcap_id=record.coinmarketcap_id,
            coingecko_id=record.coingecko_id,
            exact_match=result.is_exact(record),
        )
        for record in result.visible
    ]


@router.get("", response_model=CatalogResponse)
def list_coins(catalog: CoinCatalogService = Depends(get_catalog)):
    """Return the whole merged catalog in CoinMarketCap order."""
    stats = catalog.stats()
    return CatalogResponse(
        total=stats["total"],
        matched=stats["matched"],
        built_at=stats["built_at"],
        data=[CoinOut.model_validate(record) for record in catalog.records],
    )


@router.get("/search", response_model=SearchResponse)
def search_coins(
    q: str = Query("", description="Coin name or symbol (ex. ETH or bitcoin); at least 3 characters"),
    catalog: CoinCatalogService = Depends(get_catalog),
):
    """
    Search the merged catalog by name or symbol.

    Matching is a case-insensitive substring test ignoring punctuation.
    Each hit carries an `exact_match` flag. Results keep catalog order.
    """
    start = time.perf_counter()
    request_id = str(uuid.uuid4())

    result = catalog.search(q)
    hits = _hits(result)

    latency_ms = int((time.perf_counter() - start) * 1000)
    return SearchResponse(
        request_id=request_id,
        api_latency_ms=latency_ms,
        query=q,
        status=describe(q, result).value,
        count=len(hits),
        data=hits,
    )


@router.websocket("/search/live")
async def live_search(
    websocket: WebSocket,
    catalog: Optional[CoinCatalogService] = Depends(get_optional_catalog),
):
    """
    Live search: send the raw input value as a text frame on every keystroke.

    Results are pushed once typing pauses for the debounce window. Sending
    an empty frame clears the results immediately.
    """
    await websocket.accept()
    if catalog is None or not catalog.ready:
        await websocket.close(code=status.WS_1013_TRY_AGAIN_LATER, reason="Coin data unavailable")
        return

    async def push(state: SearchState) -> None:
        hits = _hits(state.result)
        message = LiveSearchMessage(
            query=state.query,
            status=describe(state.query, state.result).value,
            count=len(hits),
            data=hits,
        )
        await websocket.send_text(message.model_dump_json())

    session = catalog.open_session(push)
    try:
        while True:
            query = await websocket.receive_text()
            await session.update(query)
    except WebSocketDisconnect:
        log.debug("Live search client disconnected")
    finally:
        await session.aclose()
