from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .models import SheetRow


def group_rows(rows: Iterable[SheetRow]) -> Dict[str, List[SheetRow]]:
    """Group rows by confirmation code in first-seen order.

    Rows with an empty confirmation code are left out.
    """
    groups: Dict[str, List[SheetRow]] = {}
    for row in rows:
        if not row.confirmation:
            continue
        groups.setdefault(row.confirmation, []).append(row)
    return groups


def select_header(group: Sequence[SheetRow]) -> SheetRow:
    """Return the first row with a destination, or the group's first row."""
    for row in group:
        if row.destination.strip():
            return row
    return group[0]


__all__ = ["group_rows", "select_header"]
