"""
Scheduling of background contact notifications.

A scheduler decides where ContactNotificationJob runs once the request that
stored the submission has committed: on a local thread pool, or on a Celery
worker.
"""
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Optional

import structlog
from django.db import close_old_connections, transaction

from apps.intake.gateway import SubmissionId

from .jobs import ContactNotificationJob

logger = structlog.get_logger(__name__)


class NotificationScheduler(ABC):
    """Runs contact notification jobs after the current transaction commits."""

    def schedule_contact_dispatch(self, contact_id: SubmissionId) -> None:
        """
        Arrange for the contact emails to be sent.

        Nothing is submitted until the surrounding transaction commits; if it
        rolls back, no job runs.
        """
        transaction.on_commit(partial(self.submit, str(contact_id)))

    @abstractmethod
    def submit(self, contact_id: str) -> None:
        """Hand the job to the execution backend right now."""


class ThreadPoolScheduler(NotificationScheduler):
    """In-process scheduling on a bounded thread pool."""

    def __init__(self, job: ContactNotificationJob, max_workers: int = 4):
        self.job = job
        self.executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='notifications')

    def submit(self, contact_id: str) -> Future:
        logger.debug("Contact dispatch submitted to thread pool", contact_id=contact_id)
        return self.executor.submit(self._run, contact_id)

    def _run(self, contact_id: str) -> str:
        try:
            return self.job.run(contact_id)
        finally:
            # Worker threads hold their own DB connection
            close_old_connections()

    def shutdown(self, wait: bool = True) -> None:
        self.executor.shutdown(wait=wait)


class CeleryScheduler(NotificationScheduler):
    """
    Enqueues the ``send_contact_notifications`` task on the Celery broker.

    Publishing happens on a small dedicated thread pool so an unreachable
    broker never holds up the request. If the broker rejects the message the
    job goes to ``fallback`` instead, so a queue outage never strands a
    submission in ``pending``.
    """

    def __init__(self, fallback: Optional[NotificationScheduler] = None, max_workers: int = 2):
        self.fallback = fallback
        self.executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='notifications-publish')

    def submit(self, contact_id: str) -> Future:
        return self.executor.submit(self._enqueue, contact_id)

    def _enqueue(self, contact_id: str) -> None:
        from .tasks import send_contact_notifications

        try:
            # One publish attempt; the fallback handles broker outages
            result = send_contact_notifications.apply_async(args=[contact_id], retry=False)
        except Exception as e:
            logger.error("Failed to enqueue contact dispatch", contact_id=contact_id, error=str(e))
            if self.fallback is None:
                raise
            self.fallback.submit(contact_id)
            return

        logger.info("Contact dispatch enqueued", contact_id=contact_id, task_id=result.id)

    def shutdown(self, wait: bool = True) -> None:
        self.executor.shutdown(wait=wait)
