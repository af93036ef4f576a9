from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .tokenizer import normalize_newlines, split_lines

logger = logging.getLogger(__name__)

FALLBACK_SECTION = "All Data"


def parse_seat_availability(raw: Optional[str]) -> Dict[str, List[str]]:
    """Group seat snapshot lines by route section.

    A line ending in ``:`` opens a section named by the text before the
    colon; the following lines are kept verbatim under it until the next
    header. Lines before the first header, or under a header with an empty
    route name, are dropped. Text without any header is returned whole under
    ``"All Data"``.
    """
    text = normalize_newlines(raw)
    if not text.strip():
        return {}

    sections: Dict[str, List[str]] = {}
    current: Optional[str] = None
    for line in split_lines(text):
        if line.endswith(":"):
            current = line[:-1].strip()
            sections[current] = []
        elif current:
            sections[current].append(line)
        else:
            logger.debug("Seat line outside a named route dropped: %r", line)

    if not sections:
        return {FALLBACK_SECTION: [text]}
    return sections


__all__ = ["FALLBACK_SECTION", "parse_seat_availability"]
