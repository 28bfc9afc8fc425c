"""Catalog error hierarchy"""

from __future__ import annotations

from typing import Dict


class CatalogError(Exception):
    """Base class for coin catalog failures."""


class SourceUnavailableError(CatalogError):
    """A single upstream coin listing could not be fetched or parsed."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class DataUnavailableError(CatalogError):
    """At least one upstream listing failed, so no merged catalog can be built."""

    def __init__(self, failures: Dict[str, str]):
        self.failures = dict(failures)
        detail = ", ".join(f"{name} ({reason})" for name, reason in sorted(self.failures.items()))
        super().__init__(f"Coin data unavailable: {detail}")
