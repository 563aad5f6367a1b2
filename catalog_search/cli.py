"""Command-line interface for browsing and searching the catalog."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Callable

from catalog_search import build_controller
from catalog_search.controller import CatalogController
from catalog_search.exceptions import ConfigError
from catalog_search.models import MatchedEntry, RetrievalOutcome, StatusLevel

_STATUS_TEXT = {
    StatusLevel.SUCCESS: "ONLINE",
    StatusLevel.WARNING: "ONLINE (OFFLINE CACHE)",
    StatusLevel.ERROR: "OFFLINE",
}


def _print_status(outcome: RetrievalOutcome) -> None:
    stamp = outcome.retrieved_at.isoformat() if outcome.retrieved_at else "n/a"
    print(
        f"[{_STATUS_TEXT[outcome.status]}] {len(outcome.entries)} entries "
        f"from {outcome.source_label} (retrieved {stamp})"
    )


def _print_results(controller: CatalogController, as_json: bool) -> None:
    if as_json:
        print(json.dumps([item.to_dict() for item in controller.results], indent=2))
        return
    if not controller.results:
        print("No entries found.")
        return
    for index, item in enumerate(controller.results):
        label = item.match_type.value if isinstance(item, MatchedEntry) else "MATCH"
        score = f" {item.match_score:>3}" if isinstance(item, MatchedEntry) else ""
        print(f"#{index + 1:<3} [{label}{score}] {item.title}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse and fuzzy-search the catalog")
    parser.add_argument("--offline", action="store_true", help="Skip remote sources")
    parser.add_argument("--json", action="store_true", dest="as_json", help="Emit JSON output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log retrieval progress")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List every catalog entry")

    search = subparsers.add_parser("search", help="Rank entries against a query")
    search.add_argument("query", help="Text to match against titles and info")

    show = subparsers.add_parser("show", help="Show one entry of a listing or search")
    show.add_argument("index", type=int, help="1-based position in the listing")
    show.add_argument("--query", default="", help="Search to resolve the position against")

    return parser


def _run_list(controller: CatalogController, args: argparse.Namespace) -> int:
    controller.search("")
    _print_results(controller, args.as_json)
    return 0


def _run_search(controller: CatalogController, args: argparse.Namespace) -> int:
    controller.search(args.query)
    _print_results(controller, args.as_json)
    return 0


def _run_show(controller: CatalogController, args: argparse.Namespace) -> int:
    controller.search(args.query)
    try:
        entry = controller.open_detail(args.index - 1)
    except IndexError as exc:
        print(str(exc))
        return 1
    if args.as_json:
        print(json.dumps(entry.to_dict(), indent=2))
    else:
        print(entry.title)
        print()
        print(entry.info)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands: dict[str, Callable[[CatalogController, argparse.Namespace], int]] = {
        "list": _run_list,
        "search": _run_search,
        "show": _run_show,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.error("Unknown command")
        return 1

    try:
        controller = build_controller(offline=args.offline)
    except ConfigError as exc:
        print(str(exc))
        return 2
    outcome = controller.load()
    if not args.as_json:
        _print_status(outcome)
    return handler(controller, args)


if __name__ == "__main__":
    raise SystemExit(main())
