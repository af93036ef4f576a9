from __future__ import annotations

import json
import logging
import time
from typing import List, Optional

import click
import pandas as pd

from .aggregator import aggregate, summarize
from .config import get_settings
from .display import render_trip, trip_to_dict
from .series import (
    color_for_key,
    has_numeric_data,
    offer_price_series,
    ordered_segments,
    seat_series,
    series_by_category,
    split_mc,
)
from .sheets_fetcher import SheetsFetcher, SheetsFetcherError
from .tasks import build_scheduler

logger = logging.getLogger(__name__)


def load_rows(path: str, fmt: Optional[str] = None) -> List[List[str]]:
    """Read sheet rows from a JSON array of arrays or a header-less CSV export."""
    fmt = fmt or ("csv" if path.lower().endswith(".csv") else "json")
    if fmt == "csv":
        df = pd.read_csv(
            path,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
        )
        return df.fillna("").values.tolist()
    with open(path, "r", encoding="utf-8") as fh:
        rows = json.load(fh)
    if not isinstance(rows, list):
        raise ValueError("JSON input must be an array of rows")
    return rows


def _load_or_fail(path: str, fmt: Optional[str]) -> List[List[str]]:
    try:
        return load_rows(path, fmt)
    except (OSError, ValueError, pd.errors.ParserError) as exc:
        raise click.ClickException(f"Cannot read {path}: {exc}") from exc


def _echo_trips(trips) -> None:
    click.echo(
        json.dumps([trip_to_dict(t) for t in trips], indent=2, ensure_ascii=False)
    )


@click.group()
def cli() -> None:
    """Parse trip history rows from the tracking spreadsheet."""
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--format", "fmt", type=click.Choice(["json", "csv"]), help="Input format")
@click.option("--summary", is_flag=True, help="Print one line per trip instead of JSON")
@click.option("--cards", is_flag=True, help="Print a text card per trip instead of JSON")
def parse(path: str, fmt: Optional[str], summary: bool, cards: bool) -> None:
    """Aggregate rows from PATH and print the trips."""
    trips = aggregate(_load_or_fail(path, fmt))
    if summary:
        click.echo(summarize(trips).to_string(index=False))
    elif cards:
        click.echo("\n\n".join(render_trip(t) for t in trips))
    else:
        _echo_trips(trips)


def _echo_series(title: str, frame: pd.DataFrame) -> None:
    click.echo(f"-- {title}")
    groups = series_by_category(frame)
    if not groups:
        click.echo("(none)")
    for label, sub in groups.items():
        color = color_for_key(str(sub["category"].iloc[0]))
        click.echo(f"{label} [{color}]")
        click.echo(sub[["timestamp", "value"]].to_string(index=False))


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.argument("confirmation")
@click.option("--route", help="Only this route (e.g. ATL-FRA)")
@click.option("--format", "fmt", type=click.Choice(["json", "csv"]), help="Input format")
def series(path: str, confirmation: str, route: Optional[str], fmt: Optional[str]) -> None:
    """Print the offer price and seat series of one trip.

    Routes with no numeric offer or seat data are skipped.
    """
    trips = {t.confirmation: t for t in aggregate(_load_or_fail(path, fmt))}
    trip = trips.get(confirmation)
    if trip is None:
        raise click.ClickException(f"No trip with confirmation {confirmation}")

    for seg in [route] if route else ordered_segments(trip):
        offers = offer_price_series(trip, seg)
        seats = seat_series(trip, seg)
        if not has_numeric_data(offers) and not has_numeric_data(seats):
            logger.debug("No numeric data for %s, skipping", seg)
            continue
        click.echo(f"== {seg}")
        _echo_series("upgrade offers", offers)
        if has_numeric_data(seats):
            mc, other = split_mc(seats)
            _echo_series("seat availability (other classes)", other)
            _echo_series("seat availability (MC)", mc)


@cli.command()
@click.option("--range", "range_", help="A1 range, defaults to SHEET_RANGE")
def fetch(range_: Optional[str]) -> None:
    """Fetch rows from the spreadsheet and print the trips."""
    settings = get_settings()
    fetcher = SheetsFetcher.from_settings(settings)
    try:
        trips = fetcher.fetch_trips(range_ or settings.sheet_range)
    except SheetsFetcherError as exc:
        raise click.ClickException(str(exc)) from exc
    _echo_trips(trips)


@cli.command()
@click.option("--range", "range_", help="A1 range, defaults to SHEET_RANGE")
def watch(range_: Optional[str]) -> None:
    """Keep the row cache fresh by polling the spreadsheet."""
    settings = get_settings()
    range_ = range_ or settings.sheet_range
    fetcher = SheetsFetcher.from_settings(settings)
    try:
        fetcher.refresh(range_)
    except SheetsFetcherError as exc:
        raise click.ClickException(str(exc)) from exc

    sched = build_scheduler(fetcher, range_, settings.poll_interval_min)
    sched.start()
    logger.info("Polling %s every %d min", range_, settings.poll_interval_min)
    try:
        while True:
            time.sleep(60)
    except KeyboardInterrupt:
        sched.shutdown()


if __name__ == "__main__":
    cli()
