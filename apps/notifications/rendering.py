"""
HTML bodies for the transactional emails.

Free-text fields arrive already HTML-escaped by the intake sanitizer, so
they are marked safe here instead of being escaped a second time. Every
other value goes through the template engine's autoescaping.
"""
from typing import Any, Dict

from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.safestring import mark_safe

from .config import EmailSettings
from .display import (
    BUDGET_NAMES,
    INDUSTRY_NAMES,
    SERVICE_NAMES,
    TIMELINE_NAMES,
    display_name,
    field_value,
    header_text,
    service_list,
)

ESCAPED_TEXT_FIELDS = ('first_name', 'last_name', 'company', 'subject', 'message', 'address', 'requirements')


class EmailRenderer:
    """Renders the four notification templates for a submission."""

    def __init__(self, email_settings: EmailSettings):
        self.email_settings = email_settings

    def contact_confirmation(self, contact: Any) -> str:
        return self._render('notifications/contact_confirmation.html', self._contact_context(contact))

    def contact_admin(self, contact: Any) -> str:
        return self._render('notifications/contact_admin.html', self._contact_context(contact))

    def quote_confirmation(self, quote: Any) -> str:
        return self._render('notifications/quote_confirmation.html', self._quote_context(quote))

    def quote_admin(self, quote: Any) -> str:
        return self._render('notifications/quote_admin.html', self._quote_context(quote))

    def _render(self, template_name: str, context: Dict[str, Any]) -> str:
        context.update({
            'brand': self.email_settings.from_name,
            'admin_panel_url': self.email_settings.admin_panel_url or '#',
            'year': timezone.now().year,
        })
        return render_to_string(template_name, context)

    def _base_context(self, record: Any) -> Dict[str, Any]:
        context = {
            name: mark_safe(field_value(record, name) or '')
            for name in ESCAPED_TEXT_FIELDS
        }
        context.update({
            'email': field_value(record, 'email'),
            'phone': field_value(record, 'phone'),
            'submitted_at': field_value(record, 'created_at', None) or timezone.now(),
        })
        return context

    def _contact_context(self, contact: Any) -> Dict[str, Any]:
        context = self._base_context(contact)
        context['service'] = display_name(SERVICE_NAMES, field_value(contact, 'service'))
        context['reply_subject'] = 'Re: ' + header_text(field_value(contact, 'subject') or 'Your Inquiry')
        return context

    def _quote_context(self, quote: Any) -> Dict[str, Any]:
        context = self._base_context(quote)
        context.update({
            'industry': display_name(INDUSTRY_NAMES, field_value(quote, 'industry')),
            'services': service_list(field_value(quote, 'services', [])),
            'budget': display_name(BUDGET_NAMES, field_value(quote, 'budget')),
            'timeline': display_name(TIMELINE_NAMES, field_value(quote, 'timeline')),
            'newsletter': bool(field_value(quote, 'newsletter', False)),
        })
        return context
