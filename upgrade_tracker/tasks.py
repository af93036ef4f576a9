"""tasks.py – keeps the cached sheet rows fresh with APScheduler.

• every ``poll_interval_min`` minutes – ``SheetsFetcher.refresh``
"""

from __future__ import annotations

import logging

from apscheduler.schedulers.background import BackgroundScheduler

from .sheets_fetcher import SheetsFetcher, SheetsFetcherError

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = "refresh_rows"


def refresh_job(fetcher: SheetsFetcher, range_: str) -> None:
    """Re-fetch *range_*; failures are logged and the old cache is kept."""
    try:
        fetcher.refresh(range_)
    except SheetsFetcherError as exc:
        logger.error("Polling %s failed: %s", range_, exc)


def build_scheduler(
    fetcher: SheetsFetcher, range_: str, interval_min: int
) -> BackgroundScheduler:
    """Return an unstarted scheduler with the refresh job registered."""
    sched = BackgroundScheduler(timezone="UTC")
    sched.add_job(
        refresh_job,
        "interval",
        minutes=interval_min,
        args=(fetcher, range_),
        id=REFRESH_JOB_ID,
        max_instances=1,
        coalesce=True,
    )
    return sched


__all__ = ["REFRESH_JOB_ID", "build_scheduler", "refresh_job"]
