"""Rank catalog entries against a query across their title and info fields."""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

from catalog_search.matching.matcher import QueryMatcher
from catalog_search.models import CatalogEntry, MatchedEntry

RankedEntry = Union[CatalogEntry, MatchedEntry]


class CatalogRanker:
    """Filter and order a catalog by match relevance.

    A blank query returns the catalog untouched. Otherwise each entry keeps
    the better of its title and info matches (info wins a tie), non-matching
    entries are dropped and the rest are sorted by score, highest first.
    ``sorted`` is stable, so equally scored entries keep their catalog order.
    """

    def __init__(self, matcher: Optional[QueryMatcher] = None) -> None:
        self.matcher = matcher or QueryMatcher()

    def rank(self, catalog: Sequence[CatalogEntry], query: str) -> List[RankedEntry]:
        query = query.strip()
        if not query:
            return list(catalog)

        results: List[MatchedEntry] = []
        for entry in catalog:
            title_match = self.matcher.match(query, entry.title)
            info_match = self.matcher.match(query, entry.info)
            best = title_match if title_match.score > info_match.score else info_match
            if best.matched:
                results.append(MatchedEntry.from_entry(entry, best))

        return sorted(results, key=lambda item: item.match_score, reverse=True)


def rank(catalog: Sequence[CatalogEntry], query: str) -> List[RankedEntry]:
    """Rank ``catalog`` against ``query`` with the default matcher."""

    return CatalogRanker().rank(catalog, query)


__all__ = ["CatalogRanker", "RankedEntry", "rank"]
