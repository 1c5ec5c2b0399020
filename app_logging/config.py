"""
Logging configuration for the web process and Celery workers.

structlog handles the event dicts; stdlib logging owns the handlers. Every
record goes to the console and to a daily-rotated JSON lines file
(``logs/formintake.jsonl``).
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import structlog

LOG_FILE_NAME = 'formintake.jsonl'


class DailyJsonlFileHandler(TimedRotatingFileHandler):
    """
    TimedRotatingFileHandler whose rotated-file suffix can be set from a
    dictConfig entry.
    """
    def __init__(self, filename, when='midnight', interval=1, backupCount=0, encoding=None,
                 delay=False, utc=False, atTime=None, suffix=None):
        super().__init__(filename, when, interval, backupCount, encoding, delay, utc, atTime)
        if suffix is not None:
            self.suffix = suffix


def shared_processors():
    """Processors applied to both structlog events and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
    ]


def setup_logging(base_dir=None, console_level='INFO'):
    """
    Configure structlog and return Django LOGGING dict.

    Idempotent: structlog is configured on the first call only, but the
    LOGGING dict is returned every time so Django can build its handlers.

    Args:
        base_dir: Directory holding ``logs/`` (defaults to the working directory)
        console_level: Minimum level written to the console

    Returns:
        dict: Django LOGGING configuration dictionary
    """
    base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
    logs_dir = base_dir / "logs"
    logs_dir.mkdir(exist_ok=True)

    if not structlog.is_configured():
        structlog.configure(
            processors=shared_processors() + [
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    app_logger = {
        'handlers': ['console', 'file'],
        'level': logging.getLevelName(logging.DEBUG),
        'propagate': False,
    }

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'console': {
                '()': structlog.stdlib.ProcessorFormatter,
                'processor': structlog.dev.ConsoleRenderer(colors=True),
                'foreign_pre_chain': shared_processors(),
            },
            'json': {
                '()': structlog.stdlib.ProcessorFormatter,
                'processor': structlog.processors.JSONRenderer(),
                'foreign_pre_chain': shared_processors(),
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'console',
                'level': console_level,
            },
            'file': {
                '()': 'app_logging.config.DailyJsonlFileHandler',
                'filename': str(logs_dir / LOG_FILE_NAME),
                'when': 'midnight',
                'interval': 1,
                'backupCount': 30,
                'encoding': 'utf-8',
                'utc': True,
                'suffix': '%Y-%m-%d.jsonl',
                'formatter': 'json',
                'level': 'DEBUG',
            },
        },
        'root': {
            'handlers': ['console', 'file'],
            'level': 'INFO',
        },
        'loggers': {
            'django': {
                'handlers': ['console', 'file'],
                'level': 'INFO',
                'propagate': False,
            },
            'django.request': {
                'handlers': ['console', 'file'],
                'level': 'WARNING',
                'propagate': False,
            },
            'celery': {
                'handlers': ['console', 'file'],
                'level': 'INFO',
                'propagate': False,
            },
            'apps.intake': app_logger,
            'apps.notifications': app_logger,
            'apps.health': app_logger,
        },
    }
