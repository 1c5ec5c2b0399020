"""
Celery tasks for contact notifications.

The worker process builds its own service graph in ``IntakeConfig.ready``;
the task looks the job up from the app registry rather than importing it.
"""

import structlog
from celery import shared_task
from django.apps import apps as django_apps

from apps.common.exceptions import NotFoundError, NotificationFailure, StorageError

logger = structlog.get_logger(__name__)

RETRY_BACKOFF_SECONDS = 2


def retry_countdown(retries: int) -> int:
    """Exponential backoff: 2s, 4s, 8s, ..."""
    return RETRY_BACKOFF_SECONDS * (2 ** retries)


@shared_task(bind=True, max_retries=3)
def send_contact_notifications(self, contact_id: str):
    """
    Send the confirmation and admin emails for a stored contact submission.

    A partial failure is retried with exponential backoff. The email status is
    written once, when the final outcome is known.
    """
    job = django_apps.get_app_config('intake').notification_job
    retries = self.request.retries

    try:
        outcome = job.dispatch(contact_id)
    except NotFoundError:
        logger.warning("Contact submission not found", contact_id=contact_id)
        return {"status": "error", "contact_id": contact_id, "error": "Contact submission not found"}
    except StorageError as e:
        if e.transient and retries < self.max_retries:
            logger.warning("Database unavailable, retrying", contact_id=contact_id, retries=retries)
            raise self.retry(exc=e, countdown=retry_countdown(retries))
        logger.error("Could not load contact submission", contact_id=contact_id, error=str(e))
        email_status = job.record(contact_id, None)
        return {"status": "error", "contact_id": contact_id, "email_status": email_status, "error": str(e)}

    if not outcome.succeeded and retries < self.max_retries:
        logger.warning(
            "Contact notifications failed, retrying",
            contact_id=contact_id,
            retries=retries,
            errors=outcome.errors,
        )
        raise self.retry(
            exc=NotificationFailure(contact_id, outcome.errors),
            countdown=retry_countdown(retries),
        )

    email_status = job.record(contact_id, outcome)
    logger.info("Contact notifications finished", contact_id=contact_id, email_status=email_status)
    return {"status": "success", "contact_id": contact_id, "email_status": email_status}
