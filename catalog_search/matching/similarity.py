"""Edit distance and similarity percentages between short strings."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round non-negative scores the way UI percentages are usually rounded (0.5 goes up)."""

    return int(math.floor(value + 0.5))


def edit_distance(first: str, second: str) -> int:
    """Return the case-insensitive Levenshtein distance between two strings."""

    a = first.lower()
    b = second.lower()
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(a) + 1))
    for i, char_b in enumerate(b, start=1):
        current = [i]
        for j, char_a in enumerate(a, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j - 1], current[j - 1], previous[j]) + 1)
        previous = current
    return previous[-1]


def similarity(first: str, second: str) -> int:
    """Return a 0-100 similarity score derived from the edit distance.

    The score is the share of the longer string left untouched by the edit
    script. Two empty strings are fully similar.
    """

    # Lowercasing can lengthen a string ("\u0130" becomes two code points).
    longest = max(len(first.lower()), len(second.lower()))
    if longest == 0:
        return 100
    distance = edit_distance(first, second)
    return round_half_up(((longest - distance) / longest) * 100)


__all__ = ["edit_distance", "round_half_up", "similarity"]
