"""
Probes used by the health endpoint. Each returns a short status word and
never raises.
"""
import redis
import structlog
from django.conf import settings
from django.db import DatabaseError, connection

from apps.notifications.config import EmailSettings

logger = structlog.get_logger(__name__)


def database_status() -> str:
    try:
        connection.ensure_connection()
    except DatabaseError as e:
        logger.warning("Database health check failed", error=str(e))
        return 'disconnected'
    return 'connected'


def email_status(email_settings: EmailSettings) -> str:
    return 'ready' if email_settings.is_configured else 'misconfigured'


def queue_status() -> str:
    """``disabled`` unless the Celery queue is switched on, then a broker ping."""
    if not settings.EMAIL_QUEUE_ENABLED:
        return 'disabled'

    client = redis.Redis.from_url(
        settings.CELERY_BROKER_URL,
        socket_connect_timeout=1,
        socket_timeout=1,
    )
    try:
        client.ping()
    except redis.RedisError as e:
        logger.warning("Queue health check failed", error=str(e))
        return 'unreachable'
    finally:
        client.close()
    return 'connected'


def email_config_summary(email_settings: EmailSettings) -> dict:
    return {
        'provider': email_settings.provider,
        'fromConfigured': bool(email_settings.from_email),
        'adminConfigured': bool(email_settings.admin_email),
        'apiKeyConfigured': 'configured' if email_settings.sendgrid_api_key else 'missing',
    }
