"""
Background job that delivers the contact emails and records the outcome.

The job only ever receives a submission id. It reloads the record itself so
nothing from the request outlives the response.
"""
from typing import Optional

import structlog

from apps.common.exceptions import NotFoundError, StorageError
from apps.intake.choices import EMAIL_STATUS_FAILED, EMAIL_STATUS_SENT
from apps.intake.gateway import SubmissionGateway, SubmissionId

from .dispatcher import DispatchOutcome, NotificationDispatcher

logger = structlog.get_logger(__name__)


class ContactNotificationJob:
    """Dispatch contact emails for one stored submission."""

    def __init__(self, dispatcher: NotificationDispatcher, gateway: SubmissionGateway):
        self.dispatcher = dispatcher
        self.gateway = gateway

    def dispatch(self, contact_id: SubmissionId) -> DispatchOutcome:
        """
        Load the submission and attempt both emails.

        Raises:
            NotFoundError: The submission no longer exists
            StorageError: The record could not be loaded
        """
        contact = self.gateway.get_contact(contact_id)
        return self.dispatcher.dispatch_contact(contact)

    def record(self, contact_id: SubmissionId, outcome: Optional[DispatchOutcome]) -> str:
        """
        Write ``sent`` or ``failed`` for the submission.

        A failed write is logged and swallowed: the submission itself is
        already stored and the client has its answer.
        """
        status = EMAIL_STATUS_SENT if outcome is not None and outcome.succeeded else EMAIL_STATUS_FAILED
        try:
            self.gateway.update_email_status(contact_id, status)
        except StorageError as e:
            logger.error(
                "Failed to record email status",
                contact_id=str(contact_id),
                status=status,
                error=str(e),
            )
        return status

    def run(self, contact_id: SubmissionId) -> str:
        """Dispatch then record. Returns the recorded status."""
        logger.info("Contact notification job started", contact_id=str(contact_id))
        try:
            outcome = self.dispatch(contact_id)
        except NotFoundError:
            logger.warning("Contact submission vanished before dispatch", contact_id=str(contact_id))
            return EMAIL_STATUS_FAILED
        except Exception as e:
            logger.exception("Contact notification job crashed", contact_id=str(contact_id), error=str(e))
            return self.record(contact_id, None)

        if not outcome.succeeded:
            logger.warning("Contact notifications incomplete", contact_id=str(contact_id), errors=outcome.errors)

        status = self.record(contact_id, outcome)
        logger.info("Contact notification job finished", contact_id=str(contact_id), email_status=status)
        return status
