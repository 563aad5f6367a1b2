"""Owner of the working catalog, the current results and the detail view."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from catalog_search.debounce import Debouncer
from catalog_search.exceptions import ClipboardError
from catalog_search.matching.ranker import CatalogRanker, RankedEntry
from catalog_search.models import CatalogEntry, RetrievalOutcome
from catalog_search.source import CatalogSource

logger = logging.getLogger(__name__)

Clipboard = Callable[[str], None]

_COPY_PREVIEW_LENGTH = 50


@dataclass(frozen=True)
class DebugInfo:
    total_entries: int
    result_count: int
    current_detail: Optional[str]
    cache_available: bool


class CatalogController:
    """Tie the retrieval chain and the ranker to one explicit session state.

    The working catalog and the result list are only ever replaced as a
    whole: by :meth:`load` after a retrieval cycle, or by :meth:`search` after
    a ranking pass.
    """

    def __init__(
        self,
        source: CatalogSource,
        *,
        ranker: Optional[CatalogRanker] = None,
        clipboard: Optional[Clipboard] = None,
        debounce_s: float = 0.3,
    ) -> None:
        self.source = source
        self.ranker = ranker or CatalogRanker()
        self.clipboard = clipboard
        self.catalog: Sequence[CatalogEntry] = ()
        self.results: List[RankedEntry] = []
        self.query = ""
        self.outcome: Optional[RetrievalOutcome] = None
        self.current_detail: Optional[RankedEntry] = None
        self._debouncer = Debouncer(self.search, delay=debounce_s)

    def load(self) -> RetrievalOutcome:
        outcome = self.source.retrieve()
        self.outcome = outcome
        self.catalog = outcome.entries
        self.results = self.ranker.rank(self.catalog, self.query)
        return outcome

    def search(self, query: str) -> List[RankedEntry]:
        self.query = query
        self.results = self.ranker.rank(self.catalog, query)
        logger.info('Fuzzy filter applied: "%s" (%d results)', query.strip(), len(self.results))
        return self.results

    def search_debounced(self, query: str) -> None:
        """Schedule :meth:`search` once edits pause; needs a running event loop."""

        self._debouncer.trigger(query)

    def cancel_pending_search(self) -> None:
        self._debouncer.cancel()

    @property
    def search_pending(self) -> bool:
        return self._debouncer.pending

    def open_detail(self, index: int) -> RankedEntry:
        if not 0 <= index < len(self.results):
            raise IndexError(f"No result at position {index}")
        self.current_detail = self.results[index]
        logger.info("Opening entry: %s", self.current_detail.title)
        return self.current_detail

    def close_detail(self) -> None:
        self.current_detail = None

    def copy_detail(self) -> Optional[str]:
        """Copy the open entry's info text; returns ``None`` when nothing is open."""

        if self.current_detail is None:
            return None
        if self.clipboard is None:
            raise ClipboardError("No clipboard is configured")

        text = self.current_detail.info
        try:
            self.clipboard(text)
        except Exception as exc:
            logger.error("Failed to copy text: %s", exc)
            raise ClipboardError(f"Failed to copy text: {exc}") from exc

        preview = text[:_COPY_PREVIEW_LENGTH]
        if len(text) > _COPY_PREVIEW_LENGTH:
            preview = f"{preview}..."
        logger.info("Data copied to clipboard: %s", preview)
        return text

    def debug_info(self) -> DebugInfo:
        return DebugInfo(
            total_entries=len(self.catalog),
            result_count=len(self.results),
            current_detail=self.current_detail.title if self.current_detail else None,
            cache_available=self.source.cache.has_data(),
        )


__all__ = ["CatalogController", "Clipboard", "DebugInfo"]
