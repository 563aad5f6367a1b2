"""Typo-tolerant matching of a query against a single text field."""

from __future__ import annotations

from catalog_search.matching.similarity import round_half_up, similarity
from catalog_search.models import MatchResult, MatchType

DEFAULT_FUZZY_THRESHOLD = 60


class QueryMatcher:
    """Decide whether, and how well, a query matches a text field.

    A substring hit anywhere in the text is an exact match and wins outright.
    Otherwise every whitespace-separated word is checked for a prefix hit, a
    fuzzy hit (similarity at or above ``fuzzy_threshold``) and a substring
    hit, and the single best-scoring result across all words is kept. A later
    check only replaces the running best when it scores strictly higher.
    """

    def __init__(self, fuzzy_threshold: int = DEFAULT_FUZZY_THRESHOLD) -> None:
        self.fuzzy_threshold = fuzzy_threshold

    def match(self, query: str, text: str) -> MatchResult:
        query_lower = query.lower()
        text_lower = text.lower()
        if not query_lower:
            return MatchResult.none()

        if query_lower in text_lower:
            return MatchResult(matched=True, score=100, type=MatchType.EXACT)

        best = MatchResult.none()
        for word in text_lower.split():
            if word.startswith(query_lower):
                score = round_half_up((len(query_lower) / len(word)) * 100)
                if score > best.score:
                    best = MatchResult(matched=True, score=score, type=MatchType.PREFIX)

            word_similarity = similarity(query_lower, word)
            if word_similarity >= self.fuzzy_threshold and word_similarity > best.score:
                best = MatchResult(matched=True, score=word_similarity, type=MatchType.FUZZY)

            if query_lower in word:
                score = round_half_up((len(query_lower) / len(word)) * 90)
                if score > best.score:
                    best = MatchResult(matched=True, score=score, type=MatchType.CONTAINS)

        return best


_default_matcher = QueryMatcher()


def match(query: str, text: str) -> MatchResult:
    """Match ``query`` against ``text`` with the default fuzzy threshold."""

    return _default_matcher.match(query, text)


__all__ = ["DEFAULT_FUZZY_THRESHOLD", "QueryMatcher", "match"]
