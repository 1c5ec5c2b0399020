"""
Validation of sanitized submissions.

Pure predicates: nothing here mutates its input or raises. Field names in
messages use the request's camelCase spelling so clients can map them back
onto their form.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from django.core.exceptions import ValidationError as DjangoValidationError

from .choices import MAX_QUOTE_SERVICES, QUOTE_SERVICE_VALUES

# No whitespace or slashes; one '@'; at least one dot-separated domain segment
EMAIL_RE = re.compile(r'[^/\s@]+@[^/\s@]+\.[^/\s@]+')


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a required-field check."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)


def wire_name(field_name: str) -> str:
    """``first_name`` -> ``firstName``."""
    head, *rest = field_name.split('_')
    return head + ''.join(part.title() for part in rest)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def validate_required_fields(data: Dict[str, Any], required_fields: Iterable[str]) -> ValidationResult:
    """
    Check that every required field carries a value.

    Args:
        data: Sanitized submission data
        required_fields: Field names that must be present

    Returns:
        ValidationResult with one message per violated field
    """
    errors = []
    missing = []

    for name in required_fields:
        value = data.get(name)
        if _is_blank(value):
            errors.append(f'{wire_name(name)} is required')
            missing.append(wire_name(name))
        elif isinstance(value, (list, tuple)) and len(value) == 0:
            errors.append(f'{wire_name(name)} must contain at least one item')
            missing.append(wire_name(name))

    return ValidationResult(is_valid=not errors, errors=errors, missing=missing)


def first_missing_field(data: Dict[str, Any], required_fields: Iterable[str]) -> Optional[str]:
    """Return the wire name of the first violated required field, if any."""
    result = validate_required_fields(data, required_fields)
    return result.missing[0] if result.missing else None


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_RE.fullmatch(value) is not None


def validate_quote_services(value):
    """Model-level check for QuoteSubmission.services."""
    if not isinstance(value, list) or not value:
        raise DjangoValidationError('At least one service must be selected')
    if len(value) > MAX_QUOTE_SERVICES:
        raise DjangoValidationError(f'No more than {MAX_QUOTE_SERVICES} services may be selected')
    unknown = [service for service in value if service not in QUOTE_SERVICE_VALUES]
    if unknown:
        raise DjangoValidationError(
            '%(services)s is not a valid service',
            params={'services': ', '.join(str(service) for service in unknown)},
        )
