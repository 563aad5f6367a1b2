"""Ordered fallback chain that produces the working catalog."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Iterator, List, Optional, Protocol, Sequence

from catalog_search.clients.sheets import SheetsClient
from catalog_search.exceptions import EmptyResultError, ParseError, StrategyError
from catalog_search.models import CatalogEntry, RetrievalOutcome, StatusLevel
from catalog_search.storage import CatalogCache

logger = logging.getLogger(__name__)

OutcomeObserver = Callable[[RetrievalOutcome], None]

BUILTIN_ENTRIES = (
    CatalogEntry(
        title="MENU SAMPLE 1",
        info=(
            "Ini adalah contoh menu karena database tidak dapat dijangkau. "
            "Silakan periksa koneksi internet Anda atau URL spreadsheet."
        ),
    ),
    CatalogEntry(
        title="MENU SAMPLE 2",
        info="Sistem saat ini berjalan dalam mode offline dengan fungsionalitas terbatas.",
    ),
    CatalogEntry(
        title="KESALAHAN KONEKSI",
        info=(
            "Tidak dapat terhubung ke database Google Sheets. Silakan verifikasi ID "
            "spreadsheet dan pastikan dapat diakses publik."
        ),
    ),
)


class RetrievalStrategy(Protocol):
    name: str

    def attempt(self) -> RetrievalOutcome:
        """Return a populated outcome or raise :class:`StrategyError`."""
        ...


@contextmanager
def _unexpected_shape_as_parse_error(label: str) -> Iterator[None]:
    try:
        yield
    except (AttributeError, IndexError, KeyError, TypeError) as exc:
        raise ParseError(f"{label} received an unexpected payload: {exc!r}") from exc


def _fresh_outcome(entries: Sequence[CatalogEntry], label: str) -> RetrievalOutcome:
    if not entries:
        raise EmptyResultError(f"{label} returned no entries")
    return RetrievalOutcome(
        entries=tuple(entries),
        source_label=label,
        is_fresh=True,
        status=StatusLevel.SUCCESS,
        retrieved_at=datetime.now(timezone.utc),
    )


class DefaultSheetStrategy:
    name = "default_sheet"

    def __init__(self, client: SheetsClient, gid: int = 0) -> None:
        self.client = client
        self.gid = gid

    def attempt(self) -> RetrievalOutcome:
        with _unexpected_shape_as_parse_error(self.name):
            entries = self.client.fetch_by_gid(self.gid)
        return _fresh_outcome(entries, self.name)


class NamedSheetStrategy:
    name = "named_sheet"

    def __init__(self, client: SheetsClient, sheet_name: str) -> None:
        self.client = client
        self.sheet_name = sheet_name

    def attempt(self) -> RetrievalOutcome:
        with _unexpected_shape_as_parse_error(self.name):
            entries = self.client.fetch_by_name(self.sheet_name)
        return _fresh_outcome(entries, self.name)


class DiscoveredSheetStrategy:
    """Look up the first worksheet in the public feed, then fetch it by name."""

    name = "discovered_sheet"

    def __init__(self, client: SheetsClient) -> None:
        self.client = client

    def attempt(self) -> RetrievalOutcome:
        with _unexpected_shape_as_parse_error(self.name):
            sheet_name = self.client.list_worksheets()[0]
            logger.info("Found sheet: %s", sheet_name)
            entries = self.client.fetch_by_name(sheet_name)
        return _fresh_outcome(entries, self.name)


class CachedCatalogStrategy:
    name = "cache"

    def __init__(self, cache: CatalogCache) -> None:
        self.cache = cache

    def attempt(self) -> RetrievalOutcome:
        try:
            cached = self.cache.load()
        except ValueError as exc:
            raise ParseError(f"Cached catalog is unreadable: {exc}") from exc
        if cached is None:
            raise EmptyResultError("No cached catalog available")
        entries, timestamp = cached
        if not entries:
            raise EmptyResultError("Cached catalog is empty")
        return RetrievalOutcome(
            entries=tuple(entries),
            source_label=self.name,
            is_fresh=False,
            status=StatusLevel.WARNING,
            retrieved_at=timestamp,
        )


class BuiltinCatalogStrategy:
    name = "builtin"

    def __init__(self, entries: Sequence[CatalogEntry] = BUILTIN_ENTRIES) -> None:
        self.entries = tuple(entries)

    def attempt(self) -> RetrievalOutcome:
        return RetrievalOutcome(
            entries=self.entries,
            source_label=self.name,
            is_fresh=False,
            status=StatusLevel.ERROR,
        )


def default_strategies(
    client: Optional[SheetsClient],
    cache: CatalogCache,
    *,
    sheet_name: str = "REPORTAN",
    gid: int = 0,
) -> List[RetrievalStrategy]:
    """Build the standard chain; remote strategies are skipped without a client."""

    strategies: List[RetrievalStrategy] = []
    if client is not None:
        strategies.extend(
            [
                DefaultSheetStrategy(client, gid=gid),
                NamedSheetStrategy(client, sheet_name),
                DiscoveredSheetStrategy(client),
            ]
        )
    strategies.append(CachedCatalogStrategy(cache))
    return strategies


class CatalogSource:
    """Run retrieval strategies in order and stop at the first success.

    Each strategy runs once per cycle. A :class:`StrategyError` only advances
    the chain; the built-in catalog closes every chain, so :meth:`retrieve`
    always returns a non-empty outcome. Fresh outcomes are written to the
    cache for later offline use.
    """

    def __init__(
        self,
        strategies: Sequence[RetrievalStrategy],
        cache: CatalogCache,
        *,
        fallback: Optional[BuiltinCatalogStrategy] = None,
        observers: Optional[Sequence[OutcomeObserver]] = None,
    ) -> None:
        self.strategies = list(strategies)
        self.cache = cache
        self.fallback = fallback or BuiltinCatalogStrategy()
        self.observers: List[OutcomeObserver] = list(observers or [])

    def add_observer(self, observer: OutcomeObserver) -> None:
        self.observers.append(observer)

    def retrieve(self) -> RetrievalOutcome:
        outcome: Optional[RetrievalOutcome] = None
        for position, strategy in enumerate(self.strategies, start=1):
            logger.info("Method %d: trying %s", position, strategy.name)
            try:
                outcome = strategy.attempt()
            except StrategyError as exc:
                logger.warning("Method %d (%s) failed: %s", position, strategy.name, exc)
                continue
            break

        if outcome is None:
            logger.warning("All retrieval methods failed; using built-in catalog")
            outcome = self.fallback.attempt()

        if outcome.is_fresh:
            self._persist(outcome)

        logger.info(
            "Loaded %d entries from %s (fresh=%s)",
            len(outcome.entries),
            outcome.source_label,
            outcome.is_fresh,
        )
        for observer in self.observers:
            observer(outcome)
        return outcome

    def _persist(self, outcome: RetrievalOutcome) -> None:
        try:
            self.cache.save(outcome.entries, outcome.retrieved_at)
        except OSError as exc:
            logger.warning("Could not cache catalog from %s: %s", outcome.source_label, exc)


__all__ = [
    "BUILTIN_ENTRIES",
    "BuiltinCatalogStrategy",
    "CachedCatalogStrategy",
    "CatalogSource",
    "DefaultSheetStrategy",
    "DiscoveredSheetStrategy",
    "NamedSheetStrategy",
    "RetrievalStrategy",
    "default_strategies",
]
