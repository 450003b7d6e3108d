"""
APScheduler-driven periodic purge for a single cache.
Why: bound memory for entries nobody reads again, with an explicit stop so
repeatedly built caches do not leak scheduler threads.
"""

import inspect
import logging
import weakref
from datetime import datetime
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .logging import get_logger, log_event

_LOG = get_logger(__name__)

PURGE_JOB_ID = "purge"


class Purger:
    """Runs `purge` every `interval_seconds`, first run one interval after start.

    A bound method is held through a weak reference, so the scheduler never
    keeps its owner alive; once the owner is garbage-collected the purger
    stops itself on the next tick.
    """

    def __init__(self, purge: Callable[[], object], interval_seconds: float) -> None:
        self.interval_seconds = interval_seconds
        if inspect.ismethod(purge):
            self._purge_ref: Callable[[], Optional[Callable[[], object]]] = weakref.WeakMethod(purge)
        else:
            self._purge_ref = lambda: purge
        self.scheduler = BackgroundScheduler(daemon=True)

    @property
    def running(self) -> bool:
        return self.scheduler.running

    @property
    def next_run_time(self) -> Optional[datetime]:
        job = self.scheduler.get_job(PURGE_JOB_ID)
        return job.next_run_time if job else None

    def start(self) -> None:
        if self.scheduler.running:
            return
        self.scheduler.add_job(
            self._tick,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=PURGE_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self.scheduler.start()
        log_event(
            _LOG, logging.INFO, "Purger started", "purger_start",
            interval_seconds=self.interval_seconds,
        )

    def _tick(self) -> None:
        purge = self._purge_ref()
        if purge is None:
            # runs on an executor thread; waiting here would join ourselves
            self.scheduler.shutdown(wait=False)
            log_event(_LOG, logging.INFO, "Purger stopped, owner collected", "purger_orphaned")
            return
        purge()

    def stop(self) -> None:
        """Stop the schedule; waits for a purge already in progress."""
        if not self.scheduler.running:
            return
        self.scheduler.shutdown(wait=True)
        log_event(_LOG, logging.INFO, "Purger stopped", "purger_stop")
