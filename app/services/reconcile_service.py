"""Cross-reference the CoinMarketCap listing against the CoinGecko listing.

CoinMarketCap drives the merge: every CoinMarketCap coin yields exactly one
``MergedRecord``, in input order. Its ``coingecko_id`` is the id of the
*first* CoinGecko coin, in CoinGecko's own order, whose composite key matches
under ``is_match``. There is no scoring; first plausible match wins.
"""

from __future__ import annotations

import time
from typing import List, Optional, Sequence, Tuple

from app.core.logging import get_logger
from app.core.matching import MatchPolicy, contains_either, default_policy, normalize
from app.schemas.coins import CoinRecord, MergedRecord

log = get_logger("reconcile")


def _first_match(key: str, candidates: Sequence[Tuple[str, str]]) -> Optional[str]:
    for candidate_key, candidate_id in candidates:
        if contains_either(candidate_key, key):
            return candidate_id
    return None


def reconcile(
    coinmarketcap: Sequence[CoinRecord],
    coingecko: Sequence[CoinRecord],
    policy: Optional[MatchPolicy] = None,
) -> List[MergedRecord]:
    """Annotate each CoinMarketCap coin with its matching CoinGecko id (or None)."""
    policy = policy or default_policy()
    start = time.perf_counter()

    # Normalize CoinGecko keys once instead of once per CoinMarketCap coin
    candidates = [(normalize(policy.composite_key(cg.name, cg.symbol)), cg.id) for cg in coingecko]

    merged: List[MergedRecord] = []
    for cmc in coinmarketcap:
        key = normalize(policy.composite_key(cmc.name, cmc.symbol))
        merged.append(
            MergedRecord(
                name=cmc.name,
                symbol=cmc.symbol,
                coinmarketcap_id=cmc.id,
                coingecko_id=_first_match(key, candidates),
            )
        )

    matched = sum(1 for record in merged if record.coingecko_id is not None)
    elapsed = time.perf_counter() - start
    log.info(
        f"Reconciled {len(merged)} CoinMarketCap coins against {len(candidates)} CoinGecko coins "
        f"| policy={policy.value} matched={matched} unmatched={len(merged) - matched} elapsed={elapsed:.2f}s"
    )
    return merged
