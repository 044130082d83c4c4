#!/usr/bin/env python3
"""
Reading Recap CLI: year listing, recap statistics and the API server.

USAGE:
  python -m recap.cli years goodreads_library_export.csv
  python -m recap.cli stats goodreads_library_export.csv              # Most recent year
  python -m recap.cli stats export.xlsx --year 2023 --name "Sam"
  python -m recap.cli stats export.csv --year 2023 --output recap_2023.json

  python -m recap.cli serve                                           # Start API server
  python -m recap.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from recap.config import DEFAULT_READER_NAME
from recap.data.loader import RecapInputError
from recap.data.store import LibraryStore


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def cmd_years(args):
    """List read-years and book counts."""
    _banner("READING RECAP: AVAILABLE YEARS")
    store = LibraryStore().load(args.file)

    print(f"\nYEARS ({len(store.available_years())}):\n")
    for year, count in store.year_counts().items():
        print(f"  {year:<8}{count:>6,} book(s)")


def cmd_stats(args):
    """Compute the recap for one year and print or save it as JSON."""
    _banner("READING RECAP: STATISTICS")
    store = LibraryStore().load(args.file)

    year = args.year if args.year is not None else store.default_year()
    if year not in store.available_years():
        raise RecapInputError(
            f"No books read in {year}. Available years: "
            + ", ".join(str(y) for y in store.available_years())
        )

    report = store.statistics(year=year, name=args.name)
    payload = json.dumps(report.to_dict(), indent=2, ensure_ascii=False)

    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload + "\n", encoding="utf-8")
        print(f"\n  {year} recap for {report.name}: {report.total_books} book(s)")
        print(f"  Saved: {out}")
    else:
        print()
        print(payload)


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Reading Recap API on {args.host}:{args.port}...")
    uvicorn.run("recap.main:app", host=args.host, port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reading Recap: yearly statistics from a Goodreads-style export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # years subcommand
    years_parser = subparsers.add_parser("years", help="List years with read books")
    years_parser.add_argument("file", help="CSV or Excel export")
    years_parser.set_defaults(func=cmd_years)

    # stats subcommand
    stats_parser = subparsers.add_parser("stats", help="Compute a year's recap")
    stats_parser.add_argument("file", help="CSV or Excel export")
    stats_parser.add_argument("--year", type=int, help="Read-year (default: most recent)")
    stats_parser.add_argument("--name", default=DEFAULT_READER_NAME, help="Display name")
    stats_parser.add_argument("--output", help="Write JSON to this path instead of stdout")
    stats_parser.set_defaults(func=cmd_stats)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address (default 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except (RecapInputError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
