"""Client for public Google Sheets exposed through the visualization query API."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from catalog_search.clients.base import BaseHttpClient
from catalog_search.exceptions import EmptyResultError, ParseError
from catalog_search.models import CatalogEntry

logger = logging.getLogger(__name__)

RESPONSE_MARKER = "google.visualization.Query.setResponse"
# "/*O_o*/\ngoogle.visualization.Query.setResponse(" precedes the JSON object
# and ");" follows it.
RESPONSE_PREFIX_LENGTH = 47
RESPONSE_SUFFIX_LENGTH = 2

FEED_BASE_URL = "https://spreadsheets.google.com/feeds/worksheets"


def _cell_text(cell: Any) -> str:
    if not isinstance(cell, dict):
        return ""
    value = cell.get("v")
    if not value:
        return ""
    if isinstance(value, bool):
        return "true"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def parse_query_response(body: str) -> List[CatalogEntry]:
    """Extract ``(title, info)`` entries from a visualization query response.

    Only the first two cells of each row are read. Rows without a title are
    dropped; a payload that yields no entries raises :class:`EmptyResultError`.
    """

    if RESPONSE_MARKER not in body:
        raise ParseError("Response is missing the visualization query envelope")

    try:
        payload = json.loads(body[RESPONSE_PREFIX_LENGTH:-RESPONSE_SUFFIX_LENGTH])
    except ValueError as exc:
        raise ParseError(f"Malformed query response JSON: {exc}") from exc

    table = payload.get("table") if isinstance(payload, dict) else None
    rows = table.get("rows") if isinstance(table, dict) else None
    if not isinstance(rows, list):
        raise ParseError("Query response has no table rows")

    entries: List[CatalogEntry] = []
    for index, row in enumerate(rows):
        cells = row.get("c") if isinstance(row, dict) else None
        if not isinstance(cells, list):
            raise ParseError(f"Row {index} has no cell list")
        title = _cell_text(cells[0]) if len(cells) > 0 else ""
        info = _cell_text(cells[1]) if len(cells) > 1 else ""
        if title:
            entries.append(CatalogEntry(title=title, info=info))

    if not entries:
        raise EmptyResultError("Query response contained no rows with a title")
    return entries


def parse_worksheet_feed(payload: Any) -> List[str]:
    """Return worksheet titles listed in a worksheets feed payload."""

    feed = payload.get("feed") if isinstance(payload, dict) else None
    items = feed.get("entry") if isinstance(feed, dict) else None
    if not items:
        raise EmptyResultError("Worksheet feed lists no sheets")

    if not isinstance(items, list):
        raise ParseError("Worksheet feed entries are not a list")

    titles: List[str] = []
    for index, item in enumerate(items):
        title_obj = item.get("title") if isinstance(item, dict) else None
        title = title_obj.get("$t") if isinstance(title_obj, dict) else None
        if not title:
            logger.debug("Skipping worksheet feed entry %d without a title", index)
            continue
        titles.append(str(title))

    if not titles:
        raise ParseError("Worksheet feed lists no titled sheets")
    return titles


class SheetsClient(BaseHttpClient):
    """Fetch catalog rows from one public spreadsheet."""

    BASE_URL = "https://docs.google.com/spreadsheets/d"

    def __init__(self, spreadsheet_id: str, *, feed_base_url: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.spreadsheet_id = spreadsheet_id
        self.feed_base_url = feed_base_url or FEED_BASE_URL

    def fetch_by_gid(self, gid: int = 0) -> List[CatalogEntry]:
        """Fetch the sheet view identified by its grid id."""

        return self._fetch_view({"tqx": "out:json", "gid": gid})

    def fetch_by_name(self, sheet_name: str) -> List[CatalogEntry]:
        """Fetch the sheet view with the given name."""

        return self._fetch_view({"tqx": "out:json", "sheet": sheet_name})

    def list_worksheets(self) -> List[str]:
        """Discover worksheet names from the public worksheets feed."""

        url = f"{self.feed_base_url}/{self.spreadsheet_id}/public/basic"
        response = self._request("GET", url, params={"alt": "json"})
        try:
            payload = response.json()
        except ValueError as exc:
            raise ParseError(f"Worksheet feed is not JSON: {exc}") from exc
        titles = parse_worksheet_feed(payload)
        logger.debug("Spreadsheet %s lists worksheets %s", self.spreadsheet_id, titles)
        return titles

    def _fetch_view(self, params: Dict[str, Any]) -> List[CatalogEntry]:
        response = self._request("GET", f"/{self.spreadsheet_id}/gviz/tq", params=params)
        return parse_query_response(response.text)


__all__ = [
    "SheetsClient",
    "parse_query_response",
    "parse_worksheet_feed",
]
