import json
import sys
from pathlib import Path

import pytest

# Ensure repository root is on the import path for local package imports during tests.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog_search.models import CatalogEntry  # noqa: E402
from catalog_search.storage import CatalogCache, MemoryStore  # noqa: E402

QUERY_PREFIX = "/*O_o*/\ngoogle.visualization.Query.setResponse("
QUERY_SUFFIX = ");"


def build_query_body(rows) -> str:
    """Wrap rows in a visualization query response; tuples become title/info cells."""

    rows = [_row(*item) if isinstance(item, tuple) else item for item in rows]
    payload = {
        "version": "0.6",
        "reqId": "0",
        "status": "ok",
        "table": {
            "cols": [
                {"id": "A", "label": "", "type": "string"},
                {"id": "B", "label": "", "type": "string"},
            ],
            "rows": rows,
        },
    }
    return f"{QUERY_PREFIX}{json.dumps(payload)}{QUERY_SUFFIX}"


def _row(title, info=None) -> dict:
    return {
        "c": [
            {"v": title} if title is not None else None,
            {"v": info} if info is not None else None,
        ]
    }


@pytest.fixture()
def query_body():
    return build_query_body


@pytest.fixture()
def sample_catalog() -> list[CatalogEntry]:
    return [
        CatalogEntry(title="Nasi Goreng", info="Nasi goreng kampung dengan telur"),
        CatalogEntry(title="Nasi Uduk", info="Nasi santan dengan ayam goreng"),
        CatalogEntry(title="Soto Ayam", info="Kuah kuning"),
    ]


@pytest.fixture()
def memory_cache() -> CatalogCache:
    return CatalogCache(MemoryStore())
