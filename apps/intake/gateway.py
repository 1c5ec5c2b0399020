"""
Persistence gateway for form submissions.

Single responsibility: turn sanitized field dicts into stored records and
translate database failures into the application's error taxonomy, so
callers never handle Django ORM exceptions directly.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Union
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, DataError, IntegrityError, InterfaceError, OperationalError
from django.utils import timezone

from apps.common.exceptions import NotFoundError, SchemaViolation, StorageError, StorageUnavailable

from .choices import EMAIL_STATUS_FAILED, EMAIL_STATUS_PENDING, EMAIL_STATUS_SENT
from .models import ContactSubmission, QuoteSubmission

logger = structlog.get_logger(__name__)

SubmissionId = Union[str, UUID]


@contextmanager
def translate_storage_errors(operation: str) -> Iterator[None]:
    """
    Map Django database exceptions onto SchemaViolation / StorageUnavailable /
    StorageError.
    """
    try:
        yield
    except (IntegrityError, DataError) as exc:
        logger.warning("Store rejected record", operation=operation, error=str(exc))
        raise SchemaViolation([str(exc)]) from exc
    except (OperationalError, InterfaceError) as exc:
        logger.error("Database unavailable", operation=operation, error=str(exc))
        raise StorageUnavailable() from exc
    except DatabaseError as exc:
        logger.exception("Database error", operation=operation, error=str(exc))
        raise StorageError() from exc


class SubmissionGateway:
    """
    Stores contact and quote submissions.

    Every write is a single-row operation, so a failed create never leaves
    a partial record behind.
    """

    def create_contact(self, data: Dict[str, Any]) -> ContactSubmission:
        """
        Store a sanitized, validated contact submission.

        Args:
            data: Model field values (snake_case keys)

        Returns:
            The saved ContactSubmission with its generated id

        Raises:
            SchemaViolation: The record failed the model's own checks
            StorageUnavailable: The database could not be reached
            StorageError: Any other database failure
        """
        return self._create(ContactSubmission(**data), 'create_contact')

    def create_quote(self, data: Dict[str, Any]) -> QuoteSubmission:
        """Store a sanitized, validated quote submission."""
        return self._create(QuoteSubmission(**data), 'create_quote')

    def get_contact(self, contact_id: SubmissionId) -> ContactSubmission:
        with translate_storage_errors('get_contact'):
            try:
                return ContactSubmission.objects.get(pk=contact_id)
            except (ContactSubmission.DoesNotExist, DjangoValidationError):
                raise NotFoundError(
                    f'Contact submission not found: {contact_id}',
                    resource_type='ContactSubmission',
                )

    def get_quote(self, quote_id: SubmissionId) -> QuoteSubmission:
        with translate_storage_errors('get_quote'):
            try:
                return QuoteSubmission.objects.get(pk=quote_id)
            except (QuoteSubmission.DoesNotExist, DjangoValidationError):
                raise NotFoundError(
                    f'Quote submission not found: {quote_id}',
                    resource_type='QuoteSubmission',
                )

    def update_email_status(self, contact_id: SubmissionId, status: str) -> bool:
        """
        Record the outcome of background email dispatch.

        Only a row still in ``pending`` is changed, so the status moves
        pending -> sent|failed at most once.

        Returns:
            True if the row was updated
        """
        if status not in (EMAIL_STATUS_SENT, EMAIL_STATUS_FAILED):
            raise ValueError(f"Invalid email status: {status}")

        with translate_storage_errors('update_email_status'):
            updated = ContactSubmission.objects.filter(
                pk=contact_id,
                email_status=EMAIL_STATUS_PENDING,
            ).update(email_status=status, updated_at=timezone.now())

        if not updated:
            logger.warning(
                "Email status unchanged: submission missing or already resolved",
                contact_id=str(contact_id),
                status=status,
            )
        return bool(updated)

    def _create(self, instance, operation: str):
        with translate_storage_errors(operation):
            try:
                instance.full_clean()
            except DjangoValidationError as exc:
                logger.warning("Submission failed schema check", operation=operation, errors=exc.messages)
                raise SchemaViolation(exc.messages) from exc
            instance.save(force_insert=True)

        logger.info("Submission stored", operation=operation, submission_id=str(instance.id))
        return instance
