"""Data models used throughout the project."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple


class Column(IntEnum):
    """Fixed positions of the spreadsheet columns."""

    CONFIRMATION = 0
    OWNER = 3
    DESTINATION = 4
    DATE_START = 5
    DATE_END = 6
    LEG_SUMMARY = 10
    OFFER_ROUTE = 12
    OFFER_SERVICE = 13
    OFFER_PRICE = 14
    OFFER_MILES = 15
    OFFER_HISTORY = 23
    REMAINING_SEATS = 25
    SEAT_HISTORY = 26
    SEGMENTS = 27


def _cell(cells: Sequence[object], column: Column) -> str:
    if column >= len(cells):
        return ""
    value = cells[column]
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass(slots=True, frozen=True)
class SheetRow:
    """One spreadsheet row with its columns mapped to names."""

    confirmation: str
    owner: str = ""
    destination: str = ""
    date_start: str = ""
    date_end: str = ""
    leg_summary: str = ""
    offer_route: str = ""
    offer_service: str = ""
    offer_price: str = ""
    offer_miles: str = ""
    offer_history: str = ""
    remaining_seats: str = ""
    seat_history: str = ""
    segments: str = ""

    @classmethod
    def from_cells(cls, cells: Sequence[object]) -> "SheetRow":
        """Build a row from raw cell values; short rows and ``None`` cells become ``""``."""
        if isinstance(cells, (str, bytes)) or not isinstance(cells, Sequence):
            raise TypeError(
                f"row must be a sequence of cells, got {type(cells).__name__}"
            )
        return cls(
            confirmation=_cell(cells, Column.CONFIRMATION),
            owner=_cell(cells, Column.OWNER),
            destination=_cell(cells, Column.DESTINATION),
            date_start=_cell(cells, Column.DATE_START),
            date_end=_cell(cells, Column.DATE_END),
            leg_summary=_cell(cells, Column.LEG_SUMMARY),
            offer_route=_cell(cells, Column.OFFER_ROUTE),
            offer_service=_cell(cells, Column.OFFER_SERVICE),
            offer_price=_cell(cells, Column.OFFER_PRICE),
            offer_miles=_cell(cells, Column.OFFER_MILES),
            offer_history=_cell(cells, Column.OFFER_HISTORY),
            remaining_seats=_cell(cells, Column.REMAINING_SEATS),
            seat_history=_cell(cells, Column.SEAT_HISTORY),
            segments=_cell(cells, Column.SEGMENTS),
        )


@dataclass(slots=True, frozen=True)
class ParsedNumber:
    """Result of a lenient numeric parse.

    ``valid`` is ``False`` when the text had no numeric prefix and ``value``
    was defaulted to zero.
    """

    value: float
    valid: bool = True

    @classmethod
    def invalid(cls) -> "ParsedNumber":
        return cls(0, False)


@dataclass(slots=True, frozen=True)
class CurrentOffer:
    route: str
    service: str
    price: str
    miles: str


@dataclass(slots=True, frozen=True)
class OfferEvent:
    route: str = ""
    service: str = ""
    price: str = ""
    amount: str = ""
    timestamp: str = ""


@dataclass(slots=True, frozen=True)
class Segment:
    flight_number: str
    route: str
    departure_time: str
    arrival_time: str
    duration: str
    distance_nm: int
    aircraft_code: str
    aircraft_name: str
    hours: ParsedNumber = field(default=ParsedNumber(0, False), compare=False)
    distance: ParsedNumber = field(default=ParsedNumber(0, False), compare=False)


@dataclass(slots=True, frozen=True)
class SeatReading:
    """One category value decoded from a seat snapshot line."""

    category: str
    numerator: Optional[float]
    timestamp: str
    valid: bool


@dataclass(slots=True, frozen=True)
class Trip:
    confirmation: str
    destination: str
    date_range: Tuple[str, str]
    flight_leg_details: str
    remaining_seats: str
    current_offers: Tuple[CurrentOffer, ...]
    upgrade_offer_history: Tuple[OfferEvent, ...]
    seat_availability_history: Mapping[str, Tuple[str, ...]]
    flight_segments_detailed: Tuple[Segment, ...]
    owner: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.seat_availability_history, MappingProxyType):
            object.__setattr__(
                self,
                "seat_availability_history",
                MappingProxyType(dict(self.seat_availability_history)),
            )

    @property
    def date_range_text(self) -> str:
        start, end = self.date_range
        return f"{start} - {end}"


__all__ = [
    "Column",
    "SheetRow",
    "ParsedNumber",
    "CurrentOffer",
    "OfferEvent",
    "Segment",
    "SeatReading",
    "Trip",
]
