"""Render-time helpers.

Parsing keeps every offer and every line; the stricter rules about what is
worth showing live here.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List

from .models import CurrentOffer, Segment, Trip
from .segment_parser import lenient_float, lenient_int
from .tokenizer import split_route_sections

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_DATE_SEP_RE = re.compile(r"[/-]")


def is_displayable_offer(offer: CurrentOffer) -> bool:
    """True when the offer has a route, a service and numeric price and miles."""
    route = offer.route.strip()
    service = offer.service.strip()
    if not route or not service or route == "-" or service == "-":
        return False
    return lenient_float(offer.price).valid and lenient_float(offer.miles).valid


def group_offers_by_route(offers: Iterable[CurrentOffer]) -> Dict[str, List[CurrentOffer]]:
    grouped: Dict[str, List[CurrentOffer]] = {}
    for offer in offers:
        if is_displayable_offer(offer):
            grouped.setdefault(offer.route, []).append(offer)
    return grouped


def format_date(text: str) -> str:
    """Format ``"MM/DD/YY"`` or ``"MM-DD-YYYY"`` as ``"March 5, 2025"``.

    Anything that does not look like such a date is returned unchanged.
    """
    parts = _DATE_SEP_RE.split(text)
    if len(parts) != 3:
        return text
    month, day, year = parts
    if len(year) == 2:
        year = "20" + year
    month_num = lenient_int(month)
    day_num = lenient_int(day)
    if not month_num.valid or not day_num.valid:
        return text
    if not 1 <= month_num.value <= 12:
        return text
    return f"{MONTH_NAMES[int(month_num.value) - 1]} {int(day_num.value)}, {year}"


def format_date_range(trip: Trip) -> str:
    start, end = trip.date_range
    if not start and not end:
        return ""
    return f"{format_date(start)} - {format_date(end)}"


def split_legs(text: str) -> List[str]:
    """Split a leg summary or remaining seats cell into per-route sections."""
    return split_route_sections(text)


def render_trip(trip: Trip) -> str:
    """Plain text trip card: header, segments, current offers, remaining seats."""
    lines = [trip.destination or trip.confirmation]
    date_range = format_date_range(trip)
    if date_range:
        lines.append(date_range)
    for seg in trip.flight_segments_detailed:
        lines.append(
            f"{seg.flight_number}: {seg.route} ({seg.departure_time}-{seg.arrival_time})"
        )
        lines.append(f"  {seg.aircraft_name} ({seg.aircraft_code})")
        lines.append(f"  {seg.duration}, {seg.distance_nm} nm")
    lines.extend(split_legs(trip.flight_leg_details))

    lines.append("")
    lines.append("Current Offer")
    grouped = group_offers_by_route(trip.current_offers)
    if not grouped:
        lines.append("No Offers Available")
    for route, offers in grouped.items():
        lines.append(route)
        for offer in offers:
            lines.append(f"  {offer.service} ${offer.price} {offer.miles} miles")

    lines.append("")
    lines.append("Remaining Seats")
    lines.extend(split_legs(trip.remaining_seats))
    return "\n".join(lines)


def _segment_dict(seg: Segment) -> Dict[str, Any]:
    return {
        "flightNumber": seg.flight_number,
        "route": seg.route,
        "departureTime": seg.departure_time,
        "arrivalTime": seg.arrival_time,
        "duration": seg.duration,
        "distanceNm": seg.distance_nm,
        "aircraftCode": seg.aircraft_code,
        "aircraftName": seg.aircraft_name,
    }


def trip_to_dict(trip: Trip) -> Dict[str, Any]:
    """JSON-ready form of *trip* with the keys the web front end reads."""
    return {
        "confirmation": trip.confirmation,
        "destination": trip.destination,
        "dateRange": trip.date_range_text,
        "flightLegDetails": trip.flight_leg_details,
        "remainingSeats": trip.remaining_seats,
        "currentOffers": [
            {
                "offerM": offer.route,
                "offerN": offer.service,
                "offerO": offer.price,
                "offerP": offer.miles,
            }
            for offer in trip.current_offers
        ],
        "upgradeOfferHistory": [
            {
                "route": event.route,
                "service": event.service,
                "price": event.price,
                "amount": event.amount,
                "timestamp": event.timestamp,
            }
            for event in trip.upgrade_offer_history
        ],
        "seatAvailabilityHistory": {
            route: list(lines)
            for route, lines in trip.seat_availability_history.items()
        },
        "flightSegmentsDetailed": [
            _segment_dict(seg) for seg in trip.flight_segments_detailed
        ],
    }


__all__ = [
    "is_displayable_offer",
    "group_offers_by_route",
    "format_date",
    "format_date_range",
    "split_legs",
    "render_trip",
    "trip_to_dict",
]
