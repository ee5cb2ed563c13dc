"""Terminal client for a running catalog API."""
from __future__ import annotations

import argparse
import asyncio
import os
from pathlib import Path
from typing import Iterable, Sequence

from catalog_api.client import AuthRequired, CatalogRequestError, CatalogSession, StaticTokenProvider
from catalog_api.models import CatalogItem

GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"
STAR = "★"


def pretty_print_items(items: Sequence[CatalogItem], *, offset: int = 0) -> None:
    for idx, item in enumerate(items, start=offset + 1):
        marker = f"{GREEN}{STAR}{RESET} " if item.isTopTagged else "  "
        print(f"{marker}{idx:02d}. {item.vendor} | {item.title}")
        chips = ", ".join(f"{v.title} x{v.availableQty}" for v in item.variants)
        print(f"      {chips}")


def print_footer(session: CatalogSession) -> None:
    more = "type 'more' for the next page" if session.has_next else "end of results"
    print(f"Query: {session.query!r} | loaded: {len(session.items)} | {more}")


def print_error(exc: Exception) -> None:
    label = "Sign-in required" if isinstance(exc, AuthRequired) else "Error"
    print(f"{RED}{label}: {exc}{RESET}")


async def run_query(session: CatalogSession, query: str) -> None:
    items = await session.search(query)
    pretty_print_items(items)
    print_footer(session)


async def run_more(session: CatalogSession) -> None:
    offset = len(session.items)
    items = await session.load_more()
    pretty_print_items(items, offset=offset)
    print_footer(session)


def interactive_shell(session: CatalogSession) -> None:
    print("Interactive catalog search. Type 'more' for the next page, 'exit' to quit.")
    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if line.lower() in {"exit", "quit"}:
            return
        try:
            if line.lower() == "more":
                asyncio.run(run_more(session))
            else:
                asyncio.run(run_query(session, line))
        except (AuthRequired, CatalogRequestError) as exc:
            print_error(exc)


def batch_mode(session: CatalogSession, file_path: Path) -> None:
    with file_path.open("r", encoding="utf-8") as fh:
        for line in fh:
            query = line.strip()
            if not query:
                continue
            asyncio.run(run_query(session, query))


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="CLI client for the catalog API")
    parser.add_argument("query", nargs="?", help="Query string. If omitted, starts REPL mode.")
    parser.add_argument("--batch", type=Path, help="File with queries to execute line by line")
    parser.add_argument(
        "--base-url",
        default=os.getenv("CATALOG_API_URL", "http://localhost:8000"),
        help="Catalog API base URL (default: $CATALOG_API_URL or http://localhost:8000)",
    )
    parser.add_argument("--first", type=int, default=20, help="Page size")
    args = parser.parse_args(list(argv) if argv is not None else None)

    session = CatalogSession(
        base_url=args.base_url,
        credentials=StaticTokenProvider.from_env(),
        page_size=args.first,
    )
    try:
        if args.batch:
            batch_mode(session, args.batch)
            return 0
        if args.query is not None:
            asyncio.run(run_query(session, args.query))
            return 0
    except (AuthRequired, CatalogRequestError) as exc:
        print_error(exc)
        return 1
    interactive_shell(session)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
