from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class MatchType(str, Enum):
    """How a query matched a text field."""

    NONE = "NONE"
    EXACT = "EXACT"
    PREFIX = "PREFIX"
    FUZZY = "FUZZY"
    CONTAINS = "CONTAINS"


class StatusLevel(str, Enum):
    """Graded status reported to the user after a retrieval cycle."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class CatalogEntry:
    """A single catalog row: a title and its free-text info."""

    title: str
    info: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "info": self.info}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogEntry":
        title = str(data.get("title") or "").strip()
        if not title:
            raise ValueError("Catalog entry requires a non-empty title")
        return cls(title=title, info=str(data.get("info") or "").strip())


@dataclass(frozen=True)
class MatchResult:
    """Outcome of comparing a query against one text field."""

    matched: bool
    score: int
    type: MatchType

    @classmethod
    def none(cls) -> "MatchResult":
        return cls(matched=False, score=0, type=MatchType.NONE)


@dataclass(frozen=True)
class MatchedEntry:
    """A catalog entry annotated with the best match of one ranking pass."""

    title: str
    info: str
    match_score: int
    match_type: MatchType

    @classmethod
    def from_entry(cls, entry: CatalogEntry, result: MatchResult) -> "MatchedEntry":
        return cls(
            title=entry.title,
            info=entry.info,
            match_score=result.score,
            match_type=result.type,
        )

    @property
    def entry(self) -> CatalogEntry:
        return CatalogEntry(title=self.title, info=self.info)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "info": self.info,
            "matchScore": self.match_score,
            "matchType": self.match_type.value,
        }


@dataclass(frozen=True)
class RetrievalOutcome:
    """Result of one retrieval cycle, replacing the working catalog wholesale."""

    entries: Tuple[CatalogEntry, ...]
    source_label: str
    is_fresh: bool
    status: StatusLevel
    retrieved_at: Optional[datetime] = None

    def __len__(self) -> int:
        return len(self.entries)


__all__ = [
    "CatalogEntry",
    "MatchResult",
    "MatchType",
    "MatchedEntry",
    "RetrievalOutcome",
    "StatusLevel",
]
