"""
Input sanitization for public form submissions.

Every operation accepts untyped input straight from the request body and
returns a bounded, HTML-neutral value. Nothing here raises: anything that is
not the expected type collapses to an empty string or list.
"""
import re
from collections.abc import Mapping
from typing import Any, Dict, List, Sequence

from django.utils.html import strip_tags

from .choices import (
    BUDGET_VALUES,
    DEFAULT_BUDGET,
    DEFAULT_TIMELINE,
    INDUSTRY_VALUES,
    MAX_QUOTE_SERVICES,
    TIMELINE_VALUES,
)

CONTROL_CHARS_RE = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')

# An ampersand that does not already start one of the entities we emit
BARE_AMPERSAND_RE = re.compile(r'&(?!(?:amp|lt|gt|quot|#x27|#x2F);)')

HTML_ESCAPES = str.maketrans({
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
    "'": '&#x27;',
    '/': '&#x2F;',
})

OUTLOOK_DOMAINS = {'hotmail.com', 'hotmail.co.uk', 'live.com', 'live.co.uk', 'outlook.com', 'msn.com', 'passport.com'}
YAHOO_DOMAINS = {'yahoo.com', 'yahoo.co.uk', 'yahoo.fr', 'ymail.com', 'rocketmail.com'}
ICLOUD_DOMAINS = {'icloud.com', 'me.com', 'mac.com'}
GMAIL_DOMAINS = {'gmail.com', 'googlemail.com'}

TRUTHY_STRINGS = {'true', '1', 'yes', 'on'}

MAX_PHONE_LENGTH = 20
MAX_SELECT_LENGTH = 50


class InputSanitizer:
    """Static helpers that clean raw form fields."""

    @staticmethod
    def escape_html(text: str) -> str:
        """
        Escape HTML-significant characters.

        Entities produced by an earlier pass are left alone, so escaping
        already-escaped text is a no-op.
        """
        return BARE_AMPERSAND_RE.sub('&amp;', text).translate(HTML_ESCAPES)

    @staticmethod
    def _truncate(text: str, max_length: int) -> str:
        if len(text) <= max_length:
            return text
        cut = text[:max_length]
        # After escaping, every '&' opens an entity; never keep half of one
        amp = cut.rfind('&')
        if amp != -1 and ';' not in cut[amp:]:
            cut = cut[:amp]
        return cut

    @classmethod
    def sanitize_text(cls, value: Any, max_length: int = 1000, allow_html: bool = False) -> str:
        """
        Sanitize free text.

        Args:
            value: Raw input
            max_length: Maximum length of the returned string
            allow_html: Keep markup untouched (only trim, control-strip and cap)

        Returns:
            Trimmed, tag-free, escaped text of at most ``max_length`` characters
        """
        if not isinstance(value, str):
            return ''

        sanitized = CONTROL_CHARS_RE.sub('', value.strip())

        if allow_html:
            return sanitized[:max_length].strip()

        sanitized = cls.escape_html(strip_tags(sanitized))
        return cls._truncate(sanitized, max_length).strip()

    @staticmethod
    def sanitize_email(value: Any) -> str:
        """
        Lower-case and canonicalize an email address.

        Googlemail addresses become gmail.com; Outlook, iCloud (``+tag``) and
        Yahoo (``-tag``) sub-addresses are removed. Gmail dots and tags are
        kept.
        """
        if not isinstance(value, str):
            return ''

        email = value.strip().lower()
        if '@' not in email:
            return email

        local, domain = email.rsplit('@', 1)
        if domain in GMAIL_DOMAINS:
            domain = 'gmail.com'
        elif domain in OUTLOOK_DOMAINS or domain in ICLOUD_DOMAINS:
            local = local.split('+', 1)[0]
        elif domain in YAHOO_DOMAINS:
            local = local.split('-', 1)[0]

        if not local:
            return ''
        return f'{local}@{domain}'

    @staticmethod
    def sanitize_phone(value: Any) -> str:
        """Keep digits and one leading '+'."""
        if not isinstance(value, str):
            return ''

        kept = re.sub(r'[^\d+]', '', value.strip())
        prefix = '+' if kept.startswith('+') else ''
        return (prefix + kept.replace('+', ''))[:MAX_PHONE_LENGTH]

    @staticmethod
    def sanitize_services(value: Any) -> List[str]:
        """
        Filter a list of selected services.

        Non-string and blank entries are dropped, order is preserved,
        duplicates are kept, and at most ten entries survive.
        """
        if not isinstance(value, (list, tuple)):
            return []

        services = [item.strip() for item in value if isinstance(item, str) and item.strip()]
        return services[:MAX_QUOTE_SERVICES]

    @classmethod
    def sanitize_select(cls, value: Any, allowed: Sequence[str]) -> str:
        """
        Allow-list a dropdown value.

        Returns:
            The sanitized value if it is one of ``allowed``, otherwise ``''``
        """
        if not isinstance(value, str):
            return ''

        sanitized = cls.sanitize_text(value, max_length=MAX_SELECT_LENGTH)
        return sanitized if sanitized in allowed else ''

    @staticmethod
    def sanitize_flag(value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in TRUTHY_STRINGS
        return bool(value)

    @classmethod
    def sanitize_contact_data(cls, data: Any) -> Dict[str, Any]:
        """Sanitize a raw contact form body into the contact field set."""
        if not isinstance(data, Mapping):
            data = {}

        return {
            'first_name': cls.sanitize_text(data.get('firstName'), max_length=50),
            'last_name': cls.sanitize_text(data.get('lastName'), max_length=50),
            'email': cls.sanitize_email(data.get('email')),
            'phone': cls.sanitize_phone(data.get('phone')),
            'company': cls.sanitize_text(data.get('company'), max_length=100),
            'subject': cls.sanitize_text(data.get('subject'), max_length=200),
            'message': cls.sanitize_text(data.get('message'), max_length=2000),
        }

    @classmethod
    def sanitize_quote_data(cls, data: Any) -> Dict[str, Any]:
        """Sanitize a raw quote form body into the quote field set."""
        if not isinstance(data, Mapping):
            data = {}

        return {
            'first_name': cls.sanitize_text(data.get('firstName'), max_length=50),
            'last_name': cls.sanitize_text(data.get('lastName'), max_length=50),
            'email': cls.sanitize_email(data.get('email')),
            'phone': cls.sanitize_phone(data.get('phone')),
            'company': cls.sanitize_text(data.get('company'), max_length=100),
            'industry': cls.sanitize_select(data.get('industry'), INDUSTRY_VALUES),
            'address': cls.sanitize_text(data.get('address'), max_length=200),
            'services': cls.sanitize_services(data.get('services')),
            'budget': cls.sanitize_select(data.get('budget'), BUDGET_VALUES) or DEFAULT_BUDGET,
            'timeline': cls.sanitize_select(data.get('timeline'), TIMELINE_VALUES) or DEFAULT_TIMELINE,
            'requirements': cls.sanitize_text(data.get('requirements'), max_length=2000),
            'newsletter': cls.sanitize_flag(data.get('newsletter')),
        }
