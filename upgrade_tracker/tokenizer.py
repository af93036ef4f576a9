"""Splitting helpers shared by the cell parsers.

Every helper accepts ``None`` or an empty string and returns no tokens for it.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

ROUTE_SECTION_RE = re.compile(r"(?=[A-Z]{3}-[A-Z]{3}:)")
PAREN_GROUP_RE = re.compile(r"\((.*?)\)")


def normalize_newlines(raw: Optional[str]) -> str:
    """Drop carriage returns so Windows line endings split like Unix ones."""
    return (raw or "").replace("\r", "")


def split_lines(raw: Optional[str]) -> List[str]:
    """Return the trimmed, non-empty lines of *raw*."""
    lines = (line.strip() for line in normalize_newlines(raw).split("\n"))
    return [line for line in lines if line]


def split_fields(raw: Optional[str], sep: str = ",") -> List[str]:
    """Split *raw* on *sep* and return the trimmed, non-empty tokens."""
    tokens = (tok.strip() for tok in (raw or "").split(sep))
    return [tok for tok in tokens if tok]


def split_once(text: str, sep: str) -> Tuple[str, str]:
    """Split on the first *sep*; the second half is ``""`` when *sep* is absent."""
    head, _, tail = text.partition(sep)
    return head.strip(), tail.strip()


def split_route_sections(raw: Optional[str]) -> List[str]:
    """Split free text into sections that each start with a ``ABC-DEF:`` pair.

    Commas and colons inside a section do not split it; text before the first
    city pair is kept as its own section.
    """
    sections = (part.strip() for part in ROUTE_SECTION_RE.split(raw or ""))
    return [part for part in sections if part]


def paren_groups(line: Optional[str]) -> List[str]:
    """Return every ``(...)`` group of *line*, trimmed, in order."""
    return [m.strip() for m in PAREN_GROUP_RE.findall(line or "")]


__all__ = [
    "normalize_newlines",
    "split_lines",
    "split_fields",
    "split_once",
    "split_route_sections",
    "paren_groups",
]
