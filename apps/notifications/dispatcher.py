"""
Notification dispatcher.

Renders and sends the confirmation and admin emails for a submission
through whichever backend was selected at startup.
"""
from dataclasses import dataclass
from typing import Any, List, Optional

import structlog

from .backends import BaseEmailBackend, EmailEnvelope, SendResult
from .config import EmailSettings
from .display import SERVICE_NAMES, display_name, field_value, header_text
from .rendering import EmailRenderer

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DispatchOutcome:
    """Results of the confirmation and admin sends for one submission."""
    confirmation: SendResult
    admin: SendResult

    @property
    def succeeded(self) -> bool:
        return self.confirmation.success and self.admin.success

    @property
    def errors(self) -> List[str]:
        errors = []
        if not self.confirmation.success:
            errors.append(f'confirmation: {self.confirmation.error}')
        if not self.admin.success:
            errors.append(f'admin: {self.admin.error}')
        return errors


class NotificationDispatcher:
    """
    Sends transactional emails for contact and quote submissions.

    Every send returns a SendResult; nothing here raises for a delivery
    problem. The two emails of a submission are attempted independently, so
    a failed confirmation never prevents the admin notification.
    """

    def __init__(
        self,
        backend: BaseEmailBackend,
        email_settings: EmailSettings,
        renderer: Optional[EmailRenderer] = None,
    ):
        self.backend = backend
        self.email_settings = email_settings
        self.renderer = renderer or EmailRenderer(email_settings)

    @property
    def provider(self) -> str:
        return self.backend.provider

    def send_contact_confirmation(self, contact: Any) -> SendResult:
        """
        Thank the submitter for their message.

        Args:
            contact: ContactSubmission or mapping with the same field names

        Returns:
            SendResult of the delivery attempt
        """
        recipient = field_value(contact, 'email')
        if not recipient:
            return self._rejected('contact_confirmation', "Invalid contact data for confirmation email")

        subject_line = field_value(contact, 'subject') or display_name(SERVICE_NAMES, field_value(contact, 'service'))
        envelope = EmailEnvelope(
            to=recipient,
            subject=header_text(f'Thank you for contacting {self.email_settings.from_name}', subject_line),
            html=self.renderer.contact_confirmation(contact),
            reply_to=self.email_settings.admin_email or None,
        )
        return self._send('contact_confirmation', envelope, contact)

    def send_contact_admin_notification(self, contact: Any) -> SendResult:
        """Tell the admin a contact submission arrived."""
        if not self.email_settings.admin_email:
            return self._rejected('contact_admin', "Admin email not configured")

        subject_line = field_value(contact, 'subject') or display_name(SERVICE_NAMES, field_value(contact, 'service'))
        envelope = EmailEnvelope(
            to=self.email_settings.admin_email,
            subject=header_text('New Contact Form Submission', subject_line),
            html=self.renderer.contact_admin(contact),
            reply_to=field_value(contact, 'email') or None,
        )
        return self._send('contact_admin', envelope, contact)

    def send_quote_confirmation(self, quote: Any) -> SendResult:
        recipient = field_value(quote, 'email')
        if not recipient:
            return self._rejected('quote_confirmation', "Invalid quote data for confirmation email")

        envelope = EmailEnvelope(
            to=recipient,
            subject=header_text('Quote Request Received', self.email_settings.from_name),
            html=self.renderer.quote_confirmation(quote),
            reply_to=self.email_settings.admin_email or None,
        )
        return self._send('quote_confirmation', envelope, quote)

    def send_quote_admin_notification(self, quote: Any) -> SendResult:
        if not self.email_settings.admin_email:
            return self._rejected('quote_admin', "Admin email not configured")

        envelope = EmailEnvelope(
            to=self.email_settings.admin_email,
            subject=header_text('New Quote Request', field_value(quote, 'company')),
            html=self.renderer.quote_admin(quote),
            reply_to=field_value(quote, 'email') or None,
        )
        return self._send('quote_admin', envelope, quote)

    def dispatch_contact(self, contact: Any) -> DispatchOutcome:
        """Send both contact emails; the second is attempted whatever the first returns."""
        return DispatchOutcome(
            confirmation=self.send_contact_confirmation(contact),
            admin=self.send_contact_admin_notification(contact),
        )

    def dispatch_quote(self, quote: Any) -> DispatchOutcome:
        return DispatchOutcome(
            confirmation=self.send_quote_confirmation(quote),
            admin=self.send_quote_admin_notification(quote),
        )

    def _send(self, kind: str, envelope: EmailEnvelope, record: Any) -> SendResult:
        result = self.backend.send(envelope)
        submission_id = field_value(record, 'id', None)
        if result.success:
            logger.info(
                "Email sent",
                kind=kind,
                provider=result.provider,
                message_id=result.message_id,
                submission_id=str(submission_id) if submission_id else None,
            )
        else:
            logger.warning(
                "Email not sent",
                kind=kind,
                provider=result.provider,
                error=result.error,
                submission_id=str(submission_id) if submission_id else None,
            )
        return result

    def _rejected(self, kind: str, error: str) -> SendResult:
        logger.warning("Email skipped", kind=kind, error=error)
        return SendResult.failed(self.provider, error)
