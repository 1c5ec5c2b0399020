"""
Email configuration resolved once at process start.
"""
from dataclasses import dataclass

from django.conf import settings


@dataclass(frozen=True)
class EmailSettings:
    """Everything the notification backends and templates need to know."""
    from_email: str
    from_name: str
    admin_email: str
    admin_panel_url: str = ''
    sendgrid_api_key: str = ''
    smtp_host: str = ''
    smtp_port: int = 587
    smtp_user: str = ''
    smtp_password: str = ''
    smtp_use_tls: bool = True
    timeout: int = 10

    @property
    def provider(self) -> str:
        return 'SendGrid' if self.sendgrid_api_key else 'SMTP'

    @property
    def is_configured(self) -> bool:
        """A sender address plus a usable transport."""
        return bool(self.from_email) and bool(self.sendgrid_api_key or self.smtp_host)

    @classmethod
    def from_django_settings(cls) -> 'EmailSettings':
        return cls(
            from_email=settings.EMAIL_FROM,
            from_name=settings.EMAIL_FROM_NAME,
            # Admin alerts fall back to the sender mailbox
            admin_email=settings.ADMIN_EMAIL or settings.EMAIL_FROM,
            admin_panel_url=settings.ADMIN_PANEL_URL,
            sendgrid_api_key=settings.SENDGRID_API_KEY,
            smtp_host=settings.EMAIL_HOST,
            smtp_port=settings.EMAIL_PORT,
            smtp_user=settings.EMAIL_HOST_USER,
            smtp_password=settings.EMAIL_HOST_PASSWORD,
            smtp_use_tls=settings.EMAIL_USE_TLS,
            timeout=settings.EMAIL_TIMEOUT,
        )
