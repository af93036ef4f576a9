"""Time series extraction for the per-route history charts.

Turns a trip's raw offer events and seat snapshot lines into
``pandas.DataFrame`` objects with the columns ``category``, ``timestamp``,
``value`` and ``valid``, sorted by timestamp. Rows whose number could not be
parsed are kept with ``valid=False`` and a missing ``value`` so a chart can
draw them as a "No Data" series.
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

import pandas as pd

from .models import ParsedNumber, SeatReading, Trip
from .segment_parser import lenient_float
from .tokenizer import split_fields, split_once

logger = logging.getLogger(__name__)

SERIES_COLUMNS = ["category", "timestamp", "value", "valid"]
NO_DATA_SUFFIX = " (No Data)"

DEFAULT_COLOR = "rgba(201, 203, 207, 1)"
CATEGORY_COLORS: Mapping[str, str] = MappingProxyType({
    "Delta One® Suites": "rgba(75, 192, 192, 1)",
    "Delta Premium Select": "rgba(54, 162, 235, 1)",
    "D1S": "rgba(62, 15, 107, 1)",
    "D1": "rgba(156, 21, 177, 1)",
    "PS": "rgba(158, 27, 82, 1)",
    "FC": "rgba(190, 18, 96, 1)",
    "C+": "rgba(11, 111, 193, 1)",
    "MC": "rgba(62, 90, 184, 1)",
    "BE": "rgba(92, 117, 172, 1)",
})

_TRAILING_TIMESTAMP_RE = re.compile(r"\(([^)]+)\)$")


def color_for_key(key: str) -> str:
    return CATEGORY_COLORS.get(key, DEFAULT_COLOR)


def parse_price(text: str) -> ParsedNumber:
    """Parse ``"$1,234.50"`` style prices."""
    return lenient_float((text or "").replace("$", "").replace(",", ""))


def parse_timestamp(text: str) -> pd.Timestamp:
    """Parse *text* into a naive timestamp; ``NaT`` when unparsable.

    Timezone-aware values are converted to UTC first so every series can be
    sorted together.
    """
    ts = pd.to_datetime((text or "").strip() or None, errors="coerce")
    if ts is None or pd.isna(ts):
        return pd.NaT
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts


def parse_snapshot_line(line: str) -> List[SeatReading]:
    """Decode ``"D1: 18/34, PS: 0/21 (2025-01-01 10:00)"`` into readings.

    Lines without a trailing parenthesised timestamp give no readings.
    """
    line = (line or "").strip()
    match = _TRAILING_TIMESTAMP_RE.search(line)
    if not match:
        logger.debug("Seat line without timestamp skipped: %r", line)
        return []
    timestamp = match.group(1).strip()
    data = line[: match.start()].strip()

    readings = []
    for part in split_fields(data):
        category, values = split_once(part, ":")
        if not category or not values:
            continue
        numerator = lenient_float(values.split("/")[0])
        readings.append(
            SeatReading(
                category=category,
                numerator=numerator.value if numerator.valid else None,
                timestamp=timestamp,
                valid=numerator.valid,
            )
        )
    return readings


def _frame(records: List[dict]) -> pd.DataFrame:
    if not records:
        frame = pd.DataFrame(columns=SERIES_COLUMNS)
        frame["timestamp"] = pd.to_datetime(frame["timestamp"])
        frame["value"] = frame["value"].astype(float)
        frame["valid"] = frame["valid"].astype(bool)
        return frame
    frame = pd.DataFrame.from_records(records, columns=SERIES_COLUMNS)
    frame["timestamp"] = pd.to_datetime(frame["timestamp"])
    frame["value"] = frame["value"].astype(float)
    return frame.sort_values(
        "timestamp", kind="stable", na_position="last"
    ).reset_index(drop=True)


def offer_price_series(trip: Trip, route: str) -> pd.DataFrame:
    """Offer prices of *route*, one row per event, categorised by service."""
    records = []
    for event in trip.upgrade_offer_history:
        if event.route != route:
            continue
        price = parse_price(event.price)
        records.append(
            {
                "category": event.service,
                "timestamp": parse_timestamp(event.timestamp),
                "value": price.value if price.valid else None,
                "valid": price.valid,
            }
        )
    return _frame(records)


def seat_series(trip: Trip, route: str) -> pd.DataFrame:
    """Seat counts of *route*, one row per category per snapshot line."""
    records = []
    for line in trip.seat_availability_history.get(route, ()):
        for reading in parse_snapshot_line(line):
            records.append(
                {
                    "category": reading.category,
                    "timestamp": parse_timestamp(reading.timestamp),
                    "value": reading.numerator,
                    "valid": reading.valid,
                }
            )
    return _frame(records)


def series_by_category(frame: pd.DataFrame) -> Dict[str, pd.DataFrame]:
    """Split a series frame into one frame per chart line.

    Valid points are keyed by category; unparsable points go under
    ``"<category> (No Data)"`` after all valid categories.
    """
    result: Dict[str, pd.DataFrame] = {}
    if frame.empty:
        return result
    valid_mask = frame["valid"].astype(bool)
    for label_suffix, part in (("", frame[valid_mask]), (NO_DATA_SUFFIX, frame[~valid_mask])):
        for category, sub in part.groupby("category", sort=False):
            result[f"{category}{label_suffix}"] = sub.reset_index(drop=True)
    return result


def split_mc(frame: pd.DataFrame) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Return ``(mc, other)``: main cabin categories and everything else."""
    is_mc = frame["category"].astype(str).str.startswith("MC")
    return frame[is_mc].reset_index(drop=True), frame[~is_mc].reset_index(drop=True)


def has_numeric_data(frame: pd.DataFrame) -> bool:
    if frame.empty:
        return False
    return bool((frame["valid"].astype(bool) & frame["value"].notna()).any())


def ordered_segments(trip: Trip) -> List[str]:
    """Routes to chart, in display order.

    Uses the detailed segment order when the trip has segments, otherwise
    every route seen in the offer history and then the seat history.
    """
    if trip.flight_segments_detailed:
        routes = [seg.route for seg in trip.flight_segments_detailed]
    else:
        routes = [event.route for event in trip.upgrade_offer_history]
        routes.extend(trip.seat_availability_history)
    return [route for route in dict.fromkeys(routes) if route.strip()]


__all__ = [
    "SERIES_COLUMNS",
    "CATEGORY_COLORS",
    "color_for_key",
    "parse_price",
    "parse_timestamp",
    "parse_snapshot_line",
    "offer_price_series",
    "seat_series",
    "series_by_category",
    "split_mc",
    "has_numeric_data",
    "ordered_segments",
]
