from __future__ import annotations

import logging
import math
import re
from typing import List, Optional

from .aircraft import aircraft_name
from .models import ParsedNumber, Segment
from .tokenizer import split_lines, split_once

logger = logging.getLogger(__name__)

_FLOAT_PREFIX_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)
_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)", re.ASCII)


def lenient_float(text: Optional[str]) -> ParsedNumber:
    """Read the numeric prefix of *text*; ``ParsedNumber(0, False)`` when there is none."""
    match = _FLOAT_PREFIX_RE.match(text or "")
    if not match:
        return ParsedNumber.invalid()
    value = float(match.group(1))
    if not math.isfinite(value):
        return ParsedNumber.invalid()
    return ParsedNumber(value)


def lenient_int(text: Optional[str]) -> ParsedNumber:
    match = _INT_PREFIX_RE.match(text or "")
    if not match:
        return ParsedNumber.invalid()
    return ParsedNumber(int(match.group(1)))


def format_hours(decimal_hours: float) -> str:
    """Render decimal hours as ``"5h 16m"``.

    Minutes are rounded half-up and never carried into hours, so a value just
    under the next full hour renders as ``"Xh 60m"``.
    """
    hours = math.floor(decimal_hours)
    minutes = math.floor((decimal_hours - hours) * 60 + 0.5)
    return f"{hours}h {minutes}m"


def parse_segment_line(line: Optional[str]) -> Optional[Segment]:
    """Decode one segment description line.

    Expected shape::

        DL0014: ATL-FRA, 9:10a-11:26a, 5.27 hours, 2167 nm, 3M2, -25

    Returns ``None`` when the line has fewer than five comma separated parts
    or lacks a flight number or route. Unparsable hours and distance default
    to zero.
    """
    parts = [part.strip() for part in (line or "").split(",")]
    if len(parts) < 5:
        logger.debug("Segment line has %d parts, skipping: %r", len(parts), line)
        return None

    flight_number, route = split_once(parts[0], ":")
    if not flight_number or not route:
        logger.debug("Segment line lacks flight number or route: %r", line)
        return None

    departure_time, arrival_time = split_once(parts[1], "-")

    hours = lenient_float(parts[2].replace("hours", ""))
    distance = lenient_int(parts[3].replace("nm", ""))
    aircraft_code = parts[4]

    return Segment(
        flight_number=flight_number,
        route=route,
        departure_time=departure_time,
        arrival_time=arrival_time,
        duration=format_hours(hours.value),
        distance_nm=int(distance.value),
        aircraft_code=aircraft_code,
        aircraft_name=aircraft_name(aircraft_code),
        hours=hours,
        distance=distance,
    )


def parse_segments(raw: Optional[str]) -> List[Segment]:
    """Parse every non-blank line of a segments cell, dropping malformed lines."""
    segments = []
    for line in split_lines(raw):
        segment = parse_segment_line(line)
        if segment is not None:
            segments.append(segment)
    return segments


__all__ = [
    "lenient_float",
    "lenient_int",
    "format_hours",
    "parse_segment_line",
    "parse_segments",
]
