"""Custom exception hierarchy for the catalog search package."""

from typing import Optional


class CatalogError(Exception):
    """Base exception for catalog search errors."""


class ConfigError(CatalogError):
    """Raised when configuration is invalid or incomplete."""


class StrategyError(CatalogError):
    """Raised by a retrieval strategy that could not produce a catalog."""


class NetworkError(StrategyError):
    """Raised when a request fails or returns a non-success status."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class ParseError(StrategyError):
    """Raised when a payload lacks the expected envelope or has malformed rows."""


class EmptyResultError(StrategyError):
    """Raised when parsing succeeded but produced no usable rows."""


class ClipboardError(CatalogError):
    """Raised when copying entry text to the clipboard fails."""
