"""Aircraft designator lookup used for segment display names."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

UNKNOWN_AIRCRAFT = "Unknown Aircraft"

AIRCRAFT_DESIGNATORS: Mapping[str, str] = MappingProxyType({
    # Airbus
    "221": "Airbus A220-100",  "223": "Airbus A220-300",
    "319": "Airbus A319",      "320": "Airbus A320",      "321": "Airbus A321",
    "32N": "Airbus A320neo",   "32Q": "Airbus A321neo",
    "332": "Airbus A330-200",  "333": "Airbus A330-300",  "339": "Airbus A330-900",
    "359": "Airbus A350-900",  "351": "Airbus A350-1000", "388": "Airbus A380-800",
    # Boeing
    "712": "Boeing 717-200",
    "738": "Boeing 737-800",   "73H": "Boeing 737-800",   "739": "Boeing 737-900",
    "73J": "Boeing 737-900",   "7M8": "Boeing 737 MAX 8", "7M9": "Boeing 737 MAX 9",
    "752": "Boeing 757-200",   "753": "Boeing 757-300",
    "763": "Boeing 767-300",   "76W": "Boeing 767-300ER", "764": "Boeing 767-400",
    "744": "Boeing 747-400",   "748": "Boeing 747-8",
    "772": "Boeing 777-200",   "773": "Boeing 777-300",   "77W": "Boeing 777-300ER",
    "77L": "Boeing 777-200LR",
    "788": "Boeing 787-8",     "789": "Boeing 787-9",     "78X": "Boeing 787-10",
    # Regional
    "E70": "Embraer E170",     "E75": "Embraer E175",     "E90": "Embraer E190",
    "CR7": "CRJ-700",          "CR9": "CRJ-900",
    "AT4": "ATR 42",           "AT7": "ATR 72",
    "DH4": "De Havilland Q400",
})


def aircraft_name(code: str) -> str:
    return AIRCRAFT_DESIGNATORS.get((code or "").strip(), UNKNOWN_AIRCRAFT)


__all__ = ["AIRCRAFT_DESIGNATORS", "UNKNOWN_AIRCRAFT", "aircraft_name"]
