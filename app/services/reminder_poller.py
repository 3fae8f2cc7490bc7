"""
Background reminder job.

An APScheduler ``AsyncIOScheduler`` runs ``ReminderPoller.tick`` every
``REMINDER_POLL_SECONDS`` in its thread pool, each tick with its own database
session. A tick covers the window since the previous one so a delayed tick
does not skip slots.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.core.config import settings
from app.db.base import SessionLocal
from app.helpers.clock import now_local
from app.repository.repo_consumption import ConsumptionRepository
from app.repository.repo_medication import MedicationRepository
from app.repository.repo_notification import NotificationRepository
from app.repository.repo_user import UserRepository
from app.services.push_notifier import PushNotifier
from app.services.srv_reminder import ReminderService

logger = logging.getLogger(__name__)

REMINDER_JOB_ID = 'dispatch_due_reminders'


class ReminderPoller:

    def __init__(self, interval_seconds: Optional[int] = None, clock=now_local):
        self.interval_seconds = interval_seconds or settings.REMINDER_POLL_SECONDS
        self.clock = clock
        self.scheduler: Optional[AsyncIOScheduler] = None
        self._last_run: Optional[datetime] = None

    def _window_start(self, as_of: datetime) -> datetime:
        if self._last_run is None or self._last_run >= as_of:
            return as_of - timedelta(minutes=max(1, self.interval_seconds // 60))
        return self._last_run

    def tick(self) -> int:
        as_of = self.clock().replace(second=0, microsecond=0)
        since = self._window_start(as_of)
        db = SessionLocal()
        try:
            service = ReminderService(
                medication_repo=MedicationRepository(db),
                consumption_repo=ConsumptionRepository(db),
                user_repo=UserRepository(db),
                notification_repo=NotificationRepository(db),
                notifier=PushNotifier(),
                clock=self.clock
            )
            events = service.due_between(since, as_of)
            service.dispatch(events)
        finally:
            db.close()
        self._last_run = as_of
        return len(events)

    def _run_tick(self) -> None:
        try:
            self.tick()
        except Exception as e:
            logger.error(f"Reminder tick failed: {str(e)}", exc_info=True)

    def start(self) -> None:
        if self.scheduler is not None and self.scheduler.running:
            return
        self.scheduler = AsyncIOScheduler(timezone=settings.TIMEZONE)
        self.scheduler.add_job(
            self._run_tick,
            IntervalTrigger(seconds=self.interval_seconds),
            id=REMINDER_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self.scheduler.start()
        logger.info(f"Reminder scheduler started, interval {self.interval_seconds}s")

    def stop(self) -> None:
        if self.scheduler is None:
            return
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        self.scheduler = None
        logger.info("Reminder scheduler stopped")
