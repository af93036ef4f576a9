from __future__ import annotations

import logging
from typing import List, Sequence

import pandas as pd

from .grouper import group_rows, select_header
from .models import CurrentOffer, SheetRow, Trip
from .offer_history import parse_offer_history
from .seat_availability import parse_seat_availability
from .segment_parser import parse_segments

logger = logging.getLogger(__name__)


def _current_offer(row: SheetRow) -> CurrentOffer:
    return CurrentOffer(
        route=row.offer_route,
        service=row.offer_service,
        price=row.offer_price,
        miles=row.offer_miles,
    )


def build_trip(confirmation: str, group: Sequence[SheetRow]) -> Trip:
    """Assemble one trip from its row group.

    Trip-level fields, seat history and segments come from the header row;
    current offers and offer history are collected from every row.
    """
    header = select_header(group)

    history = []
    for row in group:
        history.extend(parse_offer_history(row.offer_history))

    seat_history = {
        route: tuple(lines)
        for route, lines in parse_seat_availability(header.seat_history).items()
    }

    return Trip(
        confirmation=confirmation,
        destination=header.destination,
        date_range=(header.date_start, header.date_end),
        flight_leg_details=header.leg_summary,
        remaining_seats=header.remaining_seats,
        current_offers=tuple(_current_offer(row) for row in group),
        upgrade_offer_history=tuple(history),
        seat_availability_history=seat_history,
        flight_segments_detailed=tuple(parse_segments(header.segments)),
        owner=header.owner,
    )


def aggregate(rows: Sequence[Sequence[object]]) -> List[Trip]:
    """Build one :class:`Trip` per confirmation code found in *rows*.

    Parameters
    ----------
    rows:
        Spreadsheet rows as returned by the sheet API: a list of lists of
        strings or ``None``. The input is not modified.

    Trips are returned in first-seen confirmation order. Malformed cells
    degrade to empty values; only a non-sequence input raises
    ``TypeError``.
    """
    if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
        raise TypeError(f"rows must be a sequence, got {type(rows).__name__}")

    groups = group_rows(SheetRow.from_cells(cells) for cells in rows)
    trips = [build_trip(conf, group) for conf, group in groups.items()]
    logger.info("Aggregated %d rows into %d trips", len(rows), len(trips))
    return trips


def summarize(trips: Sequence[Trip]) -> pd.DataFrame:
    """Return one summary row per trip."""
    columns = [
        "confirmation",
        "destination",
        "date_start",
        "date_end",
        "offers",
        "offer_events",
        "seat_routes",
        "segments",
    ]
    if not trips:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(
        [
            {
                "confirmation": trip.confirmation,
                "destination": trip.destination,
                "date_start": trip.date_range[0],
                "date_end": trip.date_range[1],
                "offers": len(trip.current_offers),
                "offer_events": len(trip.upgrade_offer_history),
                "seat_routes": len(trip.seat_availability_history),
                "segments": len(trip.flight_segments_detailed),
            }
            for trip in trips
        ],
        columns=columns,
    )


__all__ = ["aggregate", "build_trip", "summarize"]
