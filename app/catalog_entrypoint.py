"""Catalog entrypoint - Standalone script for building and querying the catalog.

Usage:
    python -m app.catalog_entrypoint                # Build catalog, log match summary
    python -m app.catalog_entrypoint bitcoin        # Build catalog, print hits for "bitcoin"
"""

import asyncio
import sys
from typing import Optional

from app.core.config import settings
from app.core.exceptions import DataUnavailableError
from app.core.logging import get_logger
from app.services.catalog_service import CoinCatalogService
from app.services.search_service import SearchStatus, describe

logger = get_logger("catalog_entrypoint")


def format_hits(service: CoinCatalogService, query: str) -> list[str]:
    result = service.search(query)
    status = describe(query, result)
    if status is SearchStatus.TOO_SHORT:
        return [f"Please enter at least {settings.SEARCH_MIN_QUERY_LENGTH} characters to search."]
    if status is SearchStatus.NO_RESULTS:
        return [f"No results found for {query}."]

    lines = []
    for record in result.visible:
        marker = "✓ Match" if result.is_exact(record) else ""
        lines.append(
            f"{record.name} ({record.symbol}) | "
            f"CoinGecko ID: {record.coingecko_id or '-'} | "
            f"CoinMarketCap ID: {record.coinmarketcap_id} {marker}".rstrip()
        )
    return lines


async def run(query: Optional[str] = None) -> CoinCatalogService:
    service = await CoinCatalogService.create()
    stats = service.stats()
    logger.info(
        f"Catalog built: total={stats['total']} matched={stats['matched']} "
        f"unmatched={stats['unmatched']} policy={stats['policy']}"
    )
    if query is not None:
        for line in format_hits(service, query):
            print(line)
    return service


def main():
    """Main entry point for the catalog CLI."""
    query = " ".join(sys.argv[1:]) if len(sys.argv) > 1 else None
    try:
        asyncio.run(run(query))
    except DataUnavailableError as exc:
        logger.error(str(exc))
        sys.exit(1)


if __name__ == "__main__":
    main()
