"""
Transactional email backends.

Two interchangeable transports with the same contract: ``send(envelope)``
returns a SendResult and never raises. The backend is chosen once, from
configuration, by ``build_email_backend``.
"""

import smtplib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import formataddr, make_msgid
from typing import Optional

import requests
import structlog
from django.core.mail import EmailMultiAlternatives, get_connection
from django.utils.html import strip_tags

from .config import EmailSettings

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class EmailEnvelope:
    """A rendered message ready for transport."""
    to: str
    subject: str
    html: str
    reply_to: Optional[str] = None


@dataclass(frozen=True)
class SendResult:
    """Outcome of a single send attempt."""
    success: bool
    provider: str
    message_id: Optional[str] = None
    error: Optional[str] = None
    timestamp: str = ''

    @classmethod
    def ok(cls, provider: str, message_id: Optional[str]) -> 'SendResult':
        return cls(True, provider, message_id=message_id, timestamp=_now())

    @classmethod
    def failed(cls, provider: str, error: str) -> 'SendResult':
        return cls(False, provider, error=error, timestamp=_now())


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class BaseEmailBackend(ABC):
    """Common interface of the API and SMTP transports."""

    provider = ''

    def __init__(self, email_settings: EmailSettings):
        self.email_settings = email_settings

    @abstractmethod
    def send(self, envelope: EmailEnvelope) -> SendResult:
        """Deliver one message. Failures are returned, not raised."""


class SendGridBackend(BaseEmailBackend):
    """
    Sends through the SendGrid v3 Mail Send API.
    """

    provider = 'SendGrid'
    API_URL = "https://api.sendgrid.com/v3/mail/send"

    def __init__(self, email_settings: EmailSettings, session: Optional[requests.Session] = None):
        super().__init__(email_settings)
        self.session = session or requests.Session()

    def build_payload(self, envelope: EmailEnvelope) -> dict:
        """
        Build the Mail Send request body.

        Args:
            envelope: Rendered message

        Returns:
            Dict ready to be posted as JSON
        """
        payload = {
            'personalizations': [{'to': [{'email': envelope.to}]}],
            'from': {'email': self.email_settings.from_email, 'name': self.email_settings.from_name},
            'subject': envelope.subject,
            'content': [{'type': 'text/html', 'value': envelope.html}],
        }
        if envelope.reply_to:
            payload['reply_to'] = {'email': envelope.reply_to}
        return payload

    def send(self, envelope: EmailEnvelope) -> SendResult:
        headers = {
            'Authorization': f'Bearer {self.email_settings.sendgrid_api_key}',
            'Content-Type': 'application/json',
        }
        try:
            response = self.session.post(
                self.API_URL,
                json=self.build_payload(envelope),
                headers=headers,
                timeout=self.email_settings.timeout,
            )
        except requests.RequestException as e:
            logger.error("SendGrid request failed", to=envelope.to, error=str(e))
            return SendResult.failed(self.provider, f"SendGrid request failed: {e}")

        if 200 <= response.status_code < 300:
            return SendResult.ok(self.provider, response.headers.get('X-Message-Id'))

        error = f"SendGrid returned {response.status_code}: {self._describe_error(response)}"
        logger.error("SendGrid rejected message", to=envelope.to, status_code=response.status_code, error=error)
        return SendResult.failed(self.provider, error)

    @staticmethod
    def _describe_error(response: requests.Response) -> str:
        try:
            errors = response.json().get('errors') or []
        except ValueError:
            return response.text[:200]
        messages = [error.get('message', '') for error in errors if isinstance(error, dict)]
        return '; '.join(message for message in messages if message) or response.reason or 'Unknown error'


class SmtpBackend(BaseEmailBackend):
    """
    Sends through an SMTP relay using Django's mail machinery.

    ``connection_backend`` defaults to ``settings.EMAIL_BACKEND``, resolved
    at send time.
    """

    provider = 'SMTP'

    def __init__(self, email_settings: EmailSettings, connection_backend: Optional[str] = None):
        super().__init__(email_settings)
        self.connection_backend = connection_backend

    def _get_connection(self):
        return get_connection(
            self.connection_backend,
            host=self.email_settings.smtp_host,
            port=self.email_settings.smtp_port,
            username=self.email_settings.smtp_user or None,
            password=self.email_settings.smtp_password or None,
            use_tls=self.email_settings.smtp_use_tls,
            timeout=self.email_settings.timeout,
        )

    def send(self, envelope: EmailEnvelope) -> SendResult:
        sender = self.email_settings.from_email
        domain = sender.rsplit('@', 1)[-1] if '@' in sender else None
        message_id = make_msgid(domain=domain)

        message = EmailMultiAlternatives(
            subject=envelope.subject,
            body=strip_tags(envelope.html),
            from_email=formataddr((self.email_settings.from_name, sender)),
            to=[envelope.to],
            reply_to=[envelope.reply_to] if envelope.reply_to else None,
            headers={'Message-ID': message_id},
            connection=self._get_connection(),
        )
        message.attach_alternative(envelope.html, 'text/html')

        try:
            delivered = message.send()
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP delivery failed", to=envelope.to, error=str(e))
            return SendResult.failed(self.provider, f"SMTP delivery failed: {e}")

        if not delivered:
            return SendResult.failed(self.provider, "SMTP relay accepted no recipients")
        return SendResult.ok(self.provider, message_id)


def build_email_backend(email_settings: EmailSettings) -> BaseEmailBackend:
    """Pick the transport: SendGrid when an API key is configured, else SMTP."""
    if email_settings.sendgrid_api_key:
        return SendGridBackend(email_settings)
    return SmtpBackend(email_settings)
