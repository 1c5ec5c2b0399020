"""Human-readable labels for stored enumeration values."""
from collections.abc import Mapping
from html import unescape
from typing import Any, Dict

from apps.intake.choices import (
    BUDGET_CHOICES,
    CONTACT_SERVICE_CHOICES,
    INDUSTRY_CHOICES,
    QUOTE_SERVICE_CHOICES,
    TIMELINE_CHOICES,
)

NOT_SPECIFIED = 'Not specified'
NOT_PROVIDED = 'Not provided'

SERVICE_NAMES: Dict[str, str] = dict(CONTACT_SERVICE_CHOICES + QUOTE_SERVICE_CHOICES)
INDUSTRY_NAMES: Dict[str, str] = dict(INDUSTRY_CHOICES)
BUDGET_NAMES: Dict[str, str] = dict(BUDGET_CHOICES)
TIMELINE_NAMES: Dict[str, str] = dict(TIMELINE_CHOICES)


def display_name(names: Dict[str, str], value: Any) -> str:
    """Label for ``value``; unknown values pass through, empty ones read 'Not specified'."""
    if not value:
        return NOT_SPECIFIED
    return names.get(value, str(value))


def service_list(values: Any) -> str:
    if not isinstance(values, (list, tuple)) or not values:
        return NOT_SPECIFIED
    return ', '.join(display_name(SERVICE_NAMES, value) for value in values)


def field_value(record: Any, name: str, default: Any = '') -> Any:
    """Read a field from a model instance or a plain mapping."""
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def header_text(*parts: str) -> str:
    """
    Join parts into a single-line, unescaped string for an email header.

    Stored text is HTML-escaped; headers are plain text and must not carry
    line breaks.
    """
    joined = ' - '.join(str(part) for part in parts if part)
    return ' '.join(unescape(joined).split())
