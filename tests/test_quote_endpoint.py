"""
API tests for POST /api/quote.
"""

from unittest import mock

import pytest

from apps.common.exceptions import StorageUnavailable
from apps.intake.gateway import SubmissionGateway
from apps.intake.models import QuoteSubmission


pytestmark = pytest.mark.django_db


def test_valid_quote_is_created_and_emails_sent(api_client, quote_payload, email_backend):
    response = api_client.post('/api/quote', quote_payload, format='json')

    assert response.status_code == 201
    body = response.json()
    assert body['success'] is True
    assert body['quoteId']
    assert body['responseTime'].endswith('ms')

    quote = QuoteSubmission.objects.get(pk=body['quoteId'])
    assert quote.services == ['lab-supplies', 'consulting']
    assert quote.industry == 'food-beverage'
    assert quote.newsletter is True
    assert [envelope.to for envelope in email_backend.sent] == ['rudo@example.com', 'admin@cernol.test']


def test_quote_defaults_budget_and_timeline(api_client, quote_payload):
    del quote_payload['budget']
    quote_payload['timeline'] = 'yesterday'

    response = api_client.post('/api/quote', quote_payload, format='json')

    assert response.status_code == 201
    quote = QuoteSubmission.objects.get()
    assert quote.budget == 'discuss'
    assert quote.timeline == 'discuss'


def test_empty_services_are_rejected(api_client, quote_payload, email_backend):
    quote_payload['services'] = []

    response = api_client.post('/api/quote', quote_payload, format='json')

    assert response.status_code == 400
    assert response.json()['error'] == 'At least one service must be selected'
    assert QuoteSubmission.objects.count() == 0
    assert email_backend.sent == []


def test_missing_field_reports_first_missing(api_client, quote_payload):
    del quote_payload['company']
    del quote_payload['requirements']

    response = api_client.post('/api/quote', quote_payload, format='json')

    assert response.status_code == 400
    body = response.json()
    assert body['error'] == 'Please fill in all required fields'
    assert body['field'] == 'company'


def test_invalid_email_is_rejected(api_client, quote_payload):
    quote_payload['email'] = 'rudo@example'
    response = api_client.post('/api/quote', quote_payload, format='json')
    assert response.status_code == 400
    assert response.json()['field'] == 'email'
    assert QuoteSubmission.objects.count() == 0


def test_unknown_service_fails_schema_check(api_client, quote_payload):
    quote_payload['services'] = ['consulting', 'gold-plating']

    response = api_client.post('/api/quote', quote_payload, format='json')

    assert response.status_code == 400
    body = response.json()
    assert body['error'] == 'Validation error'
    assert body['message'] == 'Please check your input data'
    assert body['details']
    assert QuoteSubmission.objects.count() == 0


def test_email_failure_does_not_fail_request(api_client, quote_payload, email_backend):
    email_backend.fail_for.update({'rudo@example.com', 'admin@cernol.test'})

    response = api_client.post('/api/quote', quote_payload, format='json')

    assert response.status_code == 201
    assert QuoteSubmission.objects.count() == 1
    assert len(email_backend.sent) == 2


def test_storage_outage_returns_503(api_client, quote_payload, email_backend):
    with mock.patch.object(SubmissionGateway, 'create_quote', side_effect=StorageUnavailable()):
        response = api_client.post('/api/quote', quote_payload, format='json')

    assert response.status_code == 503
    assert response.json()['error'] == 'Database temporarily unavailable'
    assert email_backend.sent == []
