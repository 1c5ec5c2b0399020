from django.core.validators import MaxLengthValidator
from django.db.models import (
    Model, UUIDField, CharField, TextField, DateTimeField, EmailField, BooleanField, JSONField, Index,
)
import uuid

from .choices import (
    BUDGET_CHOICES,
    CONTACT_SERVICE_CHOICES,
    DEFAULT_BUDGET,
    DEFAULT_CONTACT_SERVICE,
    DEFAULT_TIMELINE,
    EMAIL_STATUS_CHOICES,
    EMAIL_STATUS_PENDING,
    INDUSTRY_CHOICES,
    TIMELINE_CHOICES,
)
from .validators import validate_quote_services


class BaseModel(Model):
    id = UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = DateTimeField(auto_now_add=True)
    updated_at = DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]


class ContactSubmission(BaseModel):
    """A message sent through the public contact form"""
    first_name = CharField(max_length=50)
    last_name = CharField(max_length=50)
    email = EmailField(max_length=254)
    phone = CharField(max_length=20, blank=True)
    company = CharField(max_length=100, blank=True)
    subject = CharField(max_length=200, blank=True)
    message = TextField(validators=[MaxLengthValidator(2000)])
    service = CharField(max_length=30, choices=CONTACT_SERVICE_CHOICES, default=DEFAULT_CONTACT_SERVICE)
    email_status = CharField(max_length=10, choices=EMAIL_STATUS_CHOICES, default=EMAIL_STATUS_PENDING)

    def __str__(self):
        return f"{self.first_name} {self.last_name} - {self.subject or self.service} ({self.email_status})"

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            Index(fields=["-created_at"], name="contact_created_idx"),
            Index(fields=["email"], name="contact_email_idx"),
        ]


class QuoteSubmission(BaseModel):
    """A quote request sent through the public quote form"""
    first_name = CharField(max_length=50)
    last_name = CharField(max_length=50)
    email = EmailField(max_length=254)
    phone = CharField(max_length=20, blank=True)
    company = CharField(max_length=100)
    industry = CharField(max_length=30, choices=INDUSTRY_CHOICES, blank=True)
    address = CharField(max_length=200, blank=True)
    services = JSONField(default=list, validators=[validate_quote_services])
    budget = CharField(max_length=20, choices=BUDGET_CHOICES, default=DEFAULT_BUDGET)
    timeline = CharField(max_length=20, choices=TIMELINE_CHOICES, default=DEFAULT_TIMELINE)
    requirements = TextField(validators=[MaxLengthValidator(2000)])
    newsletter = BooleanField(default=False)

    def __str__(self):
        return f"{self.company} - {self.first_name} {self.last_name}"

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            Index(fields=["-created_at"], name="quote_created_idx"),
            Index(fields=["email"], name="quote_email_idx"),
        ]
