from __future__ import annotations

import logging
from typing import List, Optional

from .models import OfferEvent
from .tokenizer import paren_groups, split_lines

logger = logging.getLogger(__name__)

OFFER_FIELDS = ("route", "service", "price", "amount", "timestamp")


def parse_offer_line(line: str) -> OfferEvent:
    """Map the first five ``(...)`` groups of *line* onto an offer event.

    ``(ATL-FRA)(D1S)($1,234)(5000)(2025-01-01)`` gives route, service, price,
    amount and timestamp in that order. Missing groups are ``""``.
    """
    groups = paren_groups(line)
    if len(groups) < len(OFFER_FIELDS):
        logger.debug("Offer line has %d of 5 groups: %r", len(groups), line)
    padded = groups[: len(OFFER_FIELDS)] + [""] * (len(OFFER_FIELDS) - len(groups))
    return OfferEvent(**dict(zip(OFFER_FIELDS, padded)))


def parse_offer_history(raw: Optional[str]) -> List[OfferEvent]:
    """Return one event per non-blank line of *raw*, in source order."""
    return [parse_offer_line(line) for line in split_lines(raw)]


__all__ = ["OFFER_FIELDS", "parse_offer_line", "parse_offer_history"]
