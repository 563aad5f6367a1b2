"""HTTP clients for remote catalog sources."""

from .base import BaseHttpClient
from .sheets import SheetsClient, parse_query_response, parse_worksheet_feed

__all__ = ["BaseHttpClient", "SheetsClient", "parse_query_response", "parse_worksheet_feed"]
