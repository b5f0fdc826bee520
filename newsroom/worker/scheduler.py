"""
Background scheduling of the schedule sweep.

Two recurring jobs on an APScheduler ``BackgroundScheduler``:
- ``schedule_sweep``: promote due schedule entries every ``interval_seconds``
- ``retention_purge``: delete expired articles once a day at ``purge_hour``

The jobs are registered on ``start()`` and removed on ``stop()``, so the app
lifespan owns the scheduler and tests can drive ``ScheduleSweep`` directly.
"""
from typing import Optional
from zoneinfo import ZoneInfo

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from ..logging_config import sweep_logger
from .sweep import ScheduleSweep

SWEEP_JOB_ID = "schedule_sweep"
PURGE_JOB_ID = "retention_purge"


class SweepScheduler:
    """Start/stop wrapper around the recurring sweep and purge jobs."""

    def __init__(
        self,
        sweep: ScheduleSweep,
        interval_seconds: int = 60,
        purge_hour: int = 1,
        tz: ZoneInfo = ZoneInfo("Asia/Kolkata"),
    ):
        self.sweep = sweep
        self.interval_seconds = interval_seconds
        self.purge_hour = purge_hour
        self.tz = tz
        self._scheduler: Optional[BackgroundScheduler] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def _run_sweep(self) -> None:
        try:
            self.sweep.run_tick()
        except Exception as e:
            sweep_logger.error("Error running schedule sweep", error=e)

    def _run_purge(self) -> None:
        try:
            self.sweep.purge_expired()
        except Exception as e:
            sweep_logger.error("Error running retention purge", error=e)

    def start(self) -> None:
        if self.running:
            return
        scheduler = BackgroundScheduler(timezone=self.tz)
        scheduler.add_job(
            self._run_sweep,
            IntervalTrigger(seconds=self.interval_seconds, timezone=self.tz),
            id=SWEEP_JOB_ID,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        scheduler.add_job(
            self._run_purge,
            CronTrigger(hour=self.purge_hour, minute=0, timezone=self.tz),
            id=PURGE_JOB_ID,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        scheduler.start()
        self._scheduler = scheduler
        sweep_logger.info(
            "Sweep scheduler started",
            interval_seconds=self.interval_seconds,
            purge_hour=self.purge_hour,
            timezone=str(self.tz),
        )

    def stop(self) -> None:
        if not self.running:
            return
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        sweep_logger.info("Sweep scheduler stopped")

    def job_ids(self):
        if self._scheduler is None:
            return []
        return [job.id for job in self._scheduler.get_jobs()]
