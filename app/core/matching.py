"""Normalization and containment matching shared by reconciliation and search.

Two strings refer to the same asset when, after normalization, either one
contains the other. Normalization lower-cases and strips everything that is
not a letter or digit, so "Bitcoin Cash" and "bitcoin-cash" compare equal.

An empty normalized string only matches another empty normalized string;
otherwise a record with a blank symbol would match every coin.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Tuple

from app.core.config import settings

_NON_ALNUM = re.compile(r"[^0-9a-z]")


def normalize(value: Optional[str]) -> str:
    """Lower-case ``value`` and drop every non-alphanumeric character."""
    if not value:
        return ""
    return _NON_ALNUM.sub("", str(value).lower())


def contains_either(left: str, right: str) -> bool:
    """Symmetric containment over already-normalized strings."""
    if not left or not right:
        return left == right
    return right in left or left in right


def is_match(a: Optional[str], b: Optional[str]) -> bool:
    return contains_either(normalize(a), normalize(b))


class MatchPolicy(str, Enum):
    """Which record fields take part in matching.

    ``SYMBOL_NAME`` reconciles on ``symbol + name`` and highlights a search hit
    when either its name or its symbol matches the query. ``SYMBOL`` uses the
    symbol alone for both.
    """

    SYMBOL_NAME = "symbol_name"
    SYMBOL = "symbol"

    def composite_key(self, name: Optional[str], symbol: Optional[str]) -> str:
        if self is MatchPolicy.SYMBOL:
            return symbol or ""
        return (symbol or "") + (name or "")

    def exact_fields(self, name: Optional[str], symbol: Optional[str]) -> Tuple[str, ...]:
        if self is MatchPolicy.SYMBOL:
            return (symbol or "",)
        return (name or "", symbol or "")


def default_policy() -> MatchPolicy:
    return MatchPolicy(settings.MATCH_POLICY)
