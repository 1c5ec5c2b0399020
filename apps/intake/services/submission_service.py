"""
Submission orchestration.

Sequences sanitize -> validate -> persist -> notify for both public forms.
Contact emails are sent in the background after the record commits; quote
emails are sent before the response is returned.
"""
import time
from dataclasses import dataclass
from typing import Any

import structlog

from apps.common.exceptions import ValidationError
from apps.intake.choices import DEFAULT_CONTACT_SERVICE, EMAIL_STATUS_PENDING, SUBJECT_SERVICE_MAP
from apps.intake.gateway import SubmissionGateway
from apps.intake.sanitizer import InputSanitizer
from apps.intake.validators import first_missing_field, is_valid_email, validate_required_fields, wire_name
from apps.notifications.dispatcher import NotificationDispatcher
from apps.notifications.schedulers import NotificationScheduler

logger = structlog.get_logger(__name__)

CONTACT_REQUIRED_FIELDS = ('first_name', 'last_name', 'email', 'message')
QUOTE_REQUIRED_FIELDS = ('first_name', 'last_name', 'email', 'company', 'requirements')


@dataclass(frozen=True)
class SubmissionReceipt:
    """What the client is told about a stored submission."""
    submission_id: Any
    response_time_ms: int

    @property
    def response_time(self) -> str:
        return f'{self.response_time_ms}ms'


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def _invalid_email() -> ValidationError:
    return ValidationError(
        'Invalid email format',
        'Please enter a valid email address',
        field='email',
    )


class SubmissionService:
    """
    Entry point for contact and quote submissions.

    Built once at startup with its collaborators; views only ever call
    ``submit_contact`` and ``submit_quote``.
    """

    def __init__(
        self,
        gateway: SubmissionGateway,
        dispatcher: NotificationDispatcher,
        scheduler: NotificationScheduler,
    ):
        self.gateway = gateway
        self.dispatcher = dispatcher
        self.scheduler = scheduler

    def submit_contact(self, raw_data: Any) -> SubmissionReceipt:
        """
        Store a contact submission and schedule its emails.

        Args:
            raw_data: Request body as received

        Returns:
            SubmissionReceipt with the new contact id

        Raises:
            ValidationError: Missing required fields or a malformed email
            SchemaViolation: The record failed the store's own checks
            StorageError: The record could not be stored
        """
        started = time.monotonic()
        data = InputSanitizer.sanitize_contact_data(raw_data)

        result = validate_required_fields(data, CONTACT_REQUIRED_FIELDS)
        if not result.is_valid:
            logger.info("Contact submission rejected", reason="missing_fields", missing=result.missing)
            raise ValidationError(
                'Missing required fields',
                errors=result.errors,
                extra_data={
                    'required': [wire_name(name) for name in CONTACT_REQUIRED_FIELDS],
                    'missing': result.missing,
                },
            )

        if not is_valid_email(data['email']):
            logger.info("Contact submission rejected", reason="invalid_email")
            raise _invalid_email()

        data['service'] = SUBJECT_SERVICE_MAP.get(data['subject'], DEFAULT_CONTACT_SERVICE)
        data['email_status'] = EMAIL_STATUS_PENDING

        contact = self.gateway.create_contact(data)
        self.scheduler.schedule_contact_dispatch(contact.id)

        receipt = SubmissionReceipt(contact.id, _elapsed_ms(started))
        logger.info(
            "Contact form processed",
            contact_id=str(contact.id),
            service=contact.service,
            response_time_ms=receipt.response_time_ms,
        )
        return receipt

    def submit_quote(self, raw_data: Any) -> SubmissionReceipt:
        """
        Store a quote request and send both emails before returning.

        Email failures are logged; the stored quote stands either way.
        """
        started = time.monotonic()
        data = InputSanitizer.sanitize_quote_data(raw_data)

        missing = first_missing_field(data, QUOTE_REQUIRED_FIELDS)
        if missing:
            logger.info("Quote submission rejected", reason="missing_fields", field=missing)
            raise ValidationError('Please fill in all required fields', field=missing)

        if not data['services']:
            logger.info("Quote submission rejected", reason="no_services")
            raise ValidationError('At least one service must be selected', field='services')

        if not is_valid_email(data['email']):
            logger.info("Quote submission rejected", reason="invalid_email")
            raise _invalid_email()

        quote = self.gateway.create_quote(data)

        try:
            outcome = self.dispatcher.dispatch_quote(quote)
        except Exception as e:
            logger.exception("Quote notification dispatch crashed", quote_id=str(quote.id), error=str(e))
        else:
            if not outcome.succeeded:
                logger.warning("Quote notifications incomplete", quote_id=str(quote.id), errors=outcome.errors)

        receipt = SubmissionReceipt(quote.id, _elapsed_ms(started))
        logger.info("Quote form processed", quote_id=str(quote.id), response_time_ms=receipt.response_time_ms)
        return receipt
