"""Fuzzy matching and ranking of catalog entries."""

from .matcher import DEFAULT_FUZZY_THRESHOLD, QueryMatcher, match
from .ranker import CatalogRanker, RankedEntry, rank
from .similarity import edit_distance, similarity

__all__ = [
    "CatalogRanker",
    "DEFAULT_FUZZY_THRESHOLD",
    "QueryMatcher",
    "RankedEntry",
    "edit_distance",
    "match",
    "rank",
    "similarity",
]
