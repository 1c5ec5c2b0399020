"""
Tests for SubmissionGateway persistence and error translation.
"""

import uuid
from unittest import mock

import pytest
from django.db import DatabaseError, OperationalError

from apps.common.exceptions import NotFoundError, SchemaViolation, StorageError, StorageUnavailable
from apps.intake.models import ContactSubmission, QuoteSubmission


pytestmark = pytest.mark.django_db


def test_create_contact_round_trips_values(gateway, stored_contact):
    loaded = gateway.get_contact(stored_contact.id)
    assert loaded.first_name == 'Tendai'
    assert loaded.message == 'Our flotation reagent order has not arrived.'
    assert loaded.service == 'technical-support'
    assert loaded.email_status == 'pending'
    assert loaded.created_at is not None
    assert loaded.updated_at is not None


def test_create_quote_round_trips_values(gateway, stored_quote):
    loaded = gateway.get_quote(stored_quote.id)
    assert loaded.services == ['lab-supplies', 'consulting']
    assert loaded.budget == '5000-10000'
    assert loaded.newsletter is True


def test_create_quote_rejects_unknown_service(gateway):
    with pytest.raises(SchemaViolation) as excinfo:
        gateway.create_quote({
            'first_name': 'Rudo',
            'last_name': 'Chikwanha',
            'email': 'rudo@example.com',
            'company': 'Chikwanha Foods',
            'services': ['gold-plating'],
            'requirements': 'Anything',
        })
    assert excinfo.value.status_code == 400
    assert excinfo.value.details
    assert QuoteSubmission.objects.count() == 0


def test_create_contact_rejects_overlong_message(gateway):
    with pytest.raises(SchemaViolation):
        gateway.create_contact({
            'first_name': 'Ann',
            'last_name': 'Lee',
            'email': 'ann@example.com',
            'message': 'x' * 2001,
        })
    assert ContactSubmission.objects.count() == 0


def test_create_contact_translates_operational_error(gateway):
    with mock.patch.object(ContactSubmission, 'save', side_effect=OperationalError('database is locked')):
        with pytest.raises(StorageUnavailable) as excinfo:
            gateway.create_contact({
                'first_name': 'Ann',
                'last_name': 'Lee',
                'email': 'ann@example.com',
                'message': 'Hello',
            })
    assert excinfo.value.status_code == 503
    assert ContactSubmission.objects.count() == 0


def test_create_quote_translates_other_database_errors(gateway):
    with mock.patch.object(QuoteSubmission, 'save', side_effect=DatabaseError('disk full')):
        with pytest.raises(StorageError) as excinfo:
            gateway.create_quote({
                'first_name': 'Rudo',
                'last_name': 'Chikwanha',
                'email': 'rudo@example.com',
                'company': 'Chikwanha Foods',
                'services': ['consulting'],
                'requirements': 'Anything',
            })
    assert excinfo.value.status_code == 500
    assert not isinstance(excinfo.value, StorageUnavailable)


def test_get_contact_unknown_id_raises_not_found(gateway):
    with pytest.raises(NotFoundError):
        gateway.get_contact(uuid.uuid4())
    with pytest.raises(NotFoundError):
        gateway.get_contact('not-a-uuid')


def test_update_email_status_moves_from_pending_once(gateway, stored_contact):
    assert gateway.update_email_status(stored_contact.id, 'sent') is True
    assert gateway.update_email_status(stored_contact.id, 'failed') is False

    stored_contact.refresh_from_db()
    assert stored_contact.email_status == 'sent'


def test_update_email_status_rejects_pending(gateway, stored_contact):
    with pytest.raises(ValueError):
        gateway.update_email_status(stored_contact.id, 'pending')


def test_update_email_status_unknown_id_returns_false(gateway):
    assert gateway.update_email_status(uuid.uuid4(), 'sent') is False
