from __future__ import annotations

import logging
import time
from typing import List, Optional
from urllib.parse import quote

import requests

from .aggregator import aggregate
from .config import Settings
from .models import Trip

logger = logging.getLogger(__name__)

Rows = List[List[Optional[str]]]


class SheetsFetcherError(RuntimeError):
    """Reading rows from the Google Sheets API failed."""


class SheetsFetcher:
    """
    Read-only client for the Google Sheets API v4 ``values`` endpoint.

    Results are cached in memory for ``cache_ttl_s`` seconds per range.
    """

    def __init__(
        self,
        sheet_id: str,
        api_key: str,
        *,
        retries: int = 3,
        retry_delay_s: float = 1.0,
        cache_ttl_s: float = 300,
        base_url: str = "https://sheets.googleapis.com/v4/spreadsheets",
    ) -> None:
        self.sheet_id = sheet_id
        self.api_key = api_key
        self.retries = max(1, retries)
        self.retry_delay_s = retry_delay_s
        self.cache_ttl_s = cache_ttl_s
        self.base_url = base_url.rstrip("/")
        self._cache: dict[str, tuple[float, Rows]] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> "SheetsFetcher":
        return cls(
            settings.sheet_id,
            settings.api_key,
            retries=settings.fetch_retries,
            retry_delay_s=settings.retry_delay_s,
            cache_ttl_s=settings.cache_ttl_s,
        )

    # ──────────────────────────────────────────────────────────

    def get_values(self, range_: str) -> Rows:
        """Fetch *range_* (A1 notation), retrying failed attempts."""
        if not self.sheet_id:
            raise SheetsFetcherError("No spreadsheet id configured")

        url = f"{self.base_url}/{self.sheet_id}/values/{quote(range_, safe='!:')}"
        last_error = ""
        for attempt in range(1, self.retries + 1):
            try:
                resp = requests.get(url, params={"key": self.api_key}, timeout=15)
            except requests.RequestException as exc:
                last_error = str(exc)
            else:
                if resp.status_code == 200:
                    data = resp.json()
                    if "error" in data:
                        raise SheetsFetcherError(f"API error: {data['error']}")
                    return data.get("values", [])
                last_error = f"HTTP {resp.status_code} – {resp.text[:120]}"

            if attempt < self.retries:
                logger.warning(
                    "Attempt %d/%d for %s failed: %s; retrying in %ss",
                    attempt, self.retries, range_, last_error, self.retry_delay_s,
                )
                time.sleep(self.retry_delay_s)

        logger.error("All %d attempts for %s failed: %s", self.retries, range_, last_error)
        raise SheetsFetcherError(last_error)

    def fetch_rows(self, range_: str) -> Rows:
        """Return rows for *range_*, served from cache while it is fresh."""
        cached = self._cache.get(range_)
        if cached and time.monotonic() - cached[0] < self.cache_ttl_s:
            return cached[1]
        return self.refresh(range_)

    def refresh(self, range_: str) -> Rows:
        """Fetch *range_* again and replace the cached copy."""
        rows = self.get_values(range_)
        self._cache[range_] = (time.monotonic(), rows)
        logger.info("Fetched %d rows from %s", len(rows), range_)
        return rows

    def fetch_trips(self, range_: str) -> list[Trip]:
        return aggregate(self.fetch_rows(range_))


__all__ = ["SheetsFetcher", "SheetsFetcherError"]
