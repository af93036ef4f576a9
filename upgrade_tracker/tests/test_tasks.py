import logging
from datetime import timedelta
from unittest.mock import Mock

from upgrade_tracker.sheets_fetcher import SheetsFetcherError
from upgrade_tracker.tasks import REFRESH_JOB_ID, build_scheduler, refresh_job


def test_build_scheduler_registers_refresh_job():
    fetcher = Mock()
    sched = build_scheduler(fetcher, "Sheet1!A1:AB1000", 7)

    job = sched.get_job(REFRESH_JOB_ID)
    assert job is not None
    assert job.trigger.interval == timedelta(minutes=7)
    assert job.args == (fetcher, "Sheet1!A1:AB1000")
    assert not sched.running


def test_refresh_job_calls_fetcher():
    fetcher = Mock()
    refresh_job(fetcher, "R")
    fetcher.refresh.assert_called_once_with("R")


def test_refresh_job_logs_failures(caplog):
    fetcher = Mock()
    fetcher.refresh.side_effect = SheetsFetcherError("HTTP 500")
    caplog.set_level(logging.ERROR)

    refresh_job(fetcher, "R")

    assert any("HTTP 500" in record.getMessage() for record in caplog.records)
