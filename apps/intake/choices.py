"""Fixed enumerations shared by the sanitizer, models and email templates."""

EMAIL_STATUS_PENDING = 'pending'
EMAIL_STATUS_SENT = 'sent'
EMAIL_STATUS_FAILED = 'failed'

EMAIL_STATUS_CHOICES = [
    (EMAIL_STATUS_PENDING, 'Pending'),
    (EMAIL_STATUS_SENT, 'Sent'),
    (EMAIL_STATUS_FAILED, 'Failed'),
]

CONTACT_SERVICE_CHOICES = [
    ('general-inquiry', 'General Inquiry'),
    ('quote-request', 'Quote Request'),
    ('technical-support', 'Technical Support'),
    ('partnership', 'Partnership'),
]

DEFAULT_CONTACT_SERVICE = 'general-inquiry'

# Contact form "subject" dropdown value -> stored service category
SUBJECT_SERVICE_MAP = {
    'general': 'general-inquiry',
    'quote': 'quote-request',
    'support': 'technical-support',
    'partnership': 'partnership',
}

INDUSTRY_CHOICES = [
    ('mining', 'Mining'),
    ('manufacturing', 'Manufacturing'),
    ('agriculture', 'Agriculture'),
    ('water-treatment', 'Water Treatment'),
    ('food-beverage', 'Food & Beverage'),
    ('pharmaceuticals', 'Pharmaceuticals'),
    ('textiles', 'Textiles'),
    ('other', 'Other'),
]

QUOTE_SERVICE_CHOICES = [
    ('industrial-chemicals', 'Industrial Chemicals'),
    ('lab-supplies', 'Laboratory Supplies'),
    ('water-treatment', 'Water Treatment'),
    ('mining-chemicals', 'Mining Chemicals'),
    ('food-beverage', 'Food & Beverage'),
    ('consulting', 'Consulting'),
]

BUDGET_CHOICES = [
    ('under-1000', 'Under $1,000'),
    ('1000-5000', '$1,000 - $5,000'),
    ('5000-10000', '$5,000 - $10,000'),
    ('10000-25000', '$10,000 - $25,000'),
    ('over-25000', 'Over $25,000'),
    ('discuss', 'To be discussed'),
]

TIMELINE_CHOICES = [
    ('urgent', 'Urgent (1-2 weeks)'),
    ('normal', 'Normal (1 month)'),
    ('flexible', 'Flexible (2+ months)'),
    ('discuss', 'To be discussed'),
]

DEFAULT_BUDGET = 'discuss'
DEFAULT_TIMELINE = 'discuss'

MAX_QUOTE_SERVICES = 10


def choice_values(choices):
    return [value for value, _label in choices]


INDUSTRY_VALUES = choice_values(INDUSTRY_CHOICES)
QUOTE_SERVICE_VALUES = choice_values(QUOTE_SERVICE_CHOICES)
BUDGET_VALUES = choice_values(BUDGET_CHOICES)
TIMELINE_VALUES = choice_values(TIMELINE_CHOICES)
