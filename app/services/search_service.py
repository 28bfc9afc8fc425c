"""Substring search over the merged coin list."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Sequence

from app.core.config import settings
from app.core.matching import MatchPolicy, default_policy, is_match, normalize
from app.schemas.coins import MergedRecord, SearchResult


class SearchStatus(str, Enum):
    EMPTY = "empty"
    TOO_SHORT = "too_short"
    NO_RESULTS = "no_results"
    OK = "ok"


def search(
    records: Sequence[MergedRecord],
    query: str,
    min_length: Optional[int] = None,
    policy: Optional[MatchPolicy] = None,
) -> SearchResult:
    """Filter ``records`` by ``query`` and flag exact matches.

    A record is visible when the normalized query is a substring of its
    normalized name or symbol. Visible records are then flagged exact with
    the symmetric ``is_match`` check on the fields selected by ``policy``.
    Input order is preserved. Queries shorter than ``min_length`` (and
    queries with no alphanumeric characters) return an empty result.
    """
    query = query or ""
    min_length = settings.SEARCH_MIN_QUERY_LENGTH if min_length is None else min_length
    policy = policy or default_policy()

    if len(query) < min_length:
        return SearchResult.empty(query)

    needle = normalize(query)
    if not needle:
        return SearchResult.empty(query)

    visible: List[MergedRecord] = []
    exact_flags: Dict[str, bool] = {}
    for record in records:
        if needle in normalize(record.name) or needle in normalize(record.symbol):
            visible.append(record)
            exact_flags[record.record_key] = any(
                is_match(field, query) for field in policy.exact_fields(record.name, record.symbol)
            )

    return SearchResult(query=query, visible=visible, exact_flags=exact_flags)


def describe(query: str, result: SearchResult, min_length: Optional[int] = None) -> SearchStatus:
    """Advisory status for displaying ``result``."""
    min_length = settings.SEARCH_MIN_QUERY_LENGTH if min_length is None else min_length
    if not query:
        return SearchStatus.EMPTY
    if len(query) < min_length:
        return SearchStatus.TOO_SHORT
    if not result.visible:
        return SearchStatus.NO_RESULTS
    return SearchStatus.OK
