"""Fuzzy search over a small spreadsheet-backed catalog with offline fallbacks."""

from __future__ import annotations

from typing import List, Optional

from pydantic import ValidationError

from .clients.sheets import SheetsClient
from .config import CatalogConfig
from .controller import CatalogController, Clipboard
from .exceptions import ConfigError
from .matching import CatalogRanker, QueryMatcher, RankedEntry
from .models import CatalogEntry, MatchedEntry, MatchResult, MatchType, RetrievalOutcome, StatusLevel
from .source import CatalogSource, default_strategies
from .storage import CatalogCache, JsonFileStore

_default_controller: Optional[CatalogController] = None


def build_controller(
    config: Optional[CatalogConfig] = None,
    *,
    offline: bool = False,
    clipboard: Optional[Clipboard] = None,
) -> CatalogController:
    """Wire the sheets client, cache, retrieval chain and ranker from ``config``."""

    if config is None:
        try:
            config = CatalogConfig()
        except ValidationError as exc:
            raise ConfigError(f"Invalid catalog configuration: {exc}") from exc
    cache = CatalogCache(JsonFileStore(config.cache_path))
    client = None
    if not offline:
        client = SheetsClient(
            config.spreadsheet_id,
            timeout=config.request_timeout_s,
            user_agent=config.user_agent,
        )
    strategies = default_strategies(
        client, cache, sheet_name=config.sheet_name, gid=config.default_gid
    )
    return CatalogController(
        CatalogSource(strategies, cache),
        ranker=CatalogRanker(QueryMatcher(config.fuzzy_threshold)),
        clipboard=clipboard,
        debounce_s=config.debounce_s,
    )


def get_default_controller() -> CatalogController:
    """Return the default controller, loading the catalog on first use."""

    global _default_controller
    if _default_controller is None:
        _default_controller = build_controller()
        _default_controller.load()
    return _default_controller


def search(query: str) -> List[RankedEntry]:
    """Rank the default catalog against ``query``."""

    return get_default_controller().search(query)


__all__ = [
    "CatalogConfig",
    "CatalogController",
    "CatalogEntry",
    "CatalogRanker",
    "CatalogSource",
    "MatchResult",
    "MatchType",
    "MatchedEntry",
    "QueryMatcher",
    "RetrievalOutcome",
    "StatusLevel",
    "build_controller",
    "get_default_controller",
    "search",
]
