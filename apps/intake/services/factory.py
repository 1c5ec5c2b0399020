"""
Construction of the intake service graph.

Called once per process from ``IntakeConfig.ready``.
"""
from typing import Optional

from django.conf import settings

from apps.intake.gateway import SubmissionGateway
from apps.notifications.backends import build_email_backend
from apps.notifications.config import EmailSettings
from apps.notifications.dispatcher import NotificationDispatcher
from apps.notifications.jobs import ContactNotificationJob
from apps.notifications.schedulers import CeleryScheduler, NotificationScheduler, ThreadPoolScheduler

from .submission_service import SubmissionService


def build_notification_job(email_settings: Optional[EmailSettings] = None) -> ContactNotificationJob:
    email_settings = email_settings or EmailSettings.from_django_settings()
    dispatcher = NotificationDispatcher(build_email_backend(email_settings), email_settings)
    return ContactNotificationJob(dispatcher, SubmissionGateway())


def build_scheduler(job: ContactNotificationJob) -> NotificationScheduler:
    """Celery when the queue is enabled, with the thread pool as fallback; otherwise the thread pool."""
    thread_pool = ThreadPoolScheduler(job, max_workers=settings.NOTIFICATION_WORKERS)
    if settings.EMAIL_QUEUE_ENABLED:
        return CeleryScheduler(fallback=thread_pool)
    return thread_pool


def build_submission_service(job: ContactNotificationJob) -> SubmissionService:
    return SubmissionService(job.gateway, job.dispatcher, build_scheduler(job))
