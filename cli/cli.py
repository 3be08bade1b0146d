#!/usr/bin/env python3
"""
radio-browser demo: list stations as a table.

  radiobrowser-demo --limit 20 --order votes --reverse
  radiobrowser-demo --by bytag jazz --limit 10
"""
from __future__ import annotations

import argparse
import logging
import sys
from itertools import islice
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

# Allow running as a plain script from a checkout
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

from connectors.radiobrowser import (  # noqa: E402
    ConnectionParams,
    FieldName,
    ListParameter,
    RadioBrowser,
    RadioBrowserError,
    SearchMode,
    View,
)

console = Console()

LIMIT_DEFAULT = 64


def _parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="radiobrowser-demo", description="List radio-browser stations.")
    p.add_argument("--api-url", default=None, help="API base url (default: RADIOBROWSER_API_URL or the public pool)")
    p.add_argument("--timeout", type=float, default=None, help="per-request timeout in seconds")
    p.add_argument("--limit", type=int, default=LIMIT_DEFAULT, help="stations to show")
    p.add_argument("--offset", type=int, default=0, help="skip this many stations first")
    p.add_argument("--order", choices=[f.value for f in FieldName], default=FieldName.NAME.value)
    p.add_argument("--reverse", action="store_true", help="descending order")
    p.add_argument("--by", nargs=2, metavar=("MODE", "TERM"), help="search mode (e.g. bytag) and term")
    p.add_argument("-v", "--verbose", action="store_true", help="log HTTP and paging events")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = _parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    creds = {"api_url": args.api_url, "timeout_s": args.timeout}
    try:
        client = RadioBrowser(ConnectionParams.from_env_and_creds(creds))
        list_param = ListParameter(order=FieldName(args.order), reverse=args.reverse)
        view = View(args.offset, args.limit)
        if args.by:
            mode, term = args.by
            stations = client.iter_stations_by(SearchMode(mode.lower()), term, list_param=list_param, view=view)
        else:
            stations = client.iter_stations(list_param=list_param, view=view)

        table = Table(title="radio-browser stations")
        table.add_column("Name", style="bold")
        table.add_column("Country")
        table.add_column("Codec")
        table.add_column("Bitrate", justify="right")
        table.add_column("Votes", justify="right")
        table.add_column("URL", overflow="fold")
        for s in islice(stations, args.limit):
            table.add_row(
                s.name or "",
                s.countrycode or "",
                s.codec or "",
                str(s.bitrate or ""),
                str(s.votes or 0),
                s.url or "",
            )
    except (RadioBrowserError, ValueError) as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1

    console.print(table)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(0)
