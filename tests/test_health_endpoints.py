"""
API tests for /api/health, /api/test-email and the JSON 404 fallback.
"""

import json
from unittest import mock

import pytest
import redis

import formintake


pytestmark = pytest.mark.django_db


def test_health_reports_services(api_client, settings):
    settings.APP_ENV = 'development'
    settings.EMAIL_QUEUE_ENABLED = False

    response = api_client.get('/api/health')

    assert response.status_code == 200
    body = response.json()
    assert body['status'] == 'ok'
    assert body['services'] == {
        'database': 'connected',
        'email': 'ready',
        'queue': 'disabled',
        'environment': 'development',
        'version': formintake.__version__,
    }
    assert body['config']['email'] == {
        'provider': 'SMTP',
        'fromConfigured': True,
        'adminConfigured': True,
        'apiKeyConfigured': 'missing',
    }
    assert body['timestamp']


def test_health_sets_security_headers(api_client):
    response = api_client.get('/api/health')
    assert response['X-Frame-Options'] == 'DENY'
    assert response['X-Content-Type-Options'] == 'nosniff'
    assert response['X-Request-ID']


def test_health_reports_unreachable_queue(api_client, settings):
    settings.EMAIL_QUEUE_ENABLED = True
    client = mock.Mock()
    client.ping.side_effect = redis.ConnectionError('refused')

    with mock.patch('apps.health.checks.redis.Redis.from_url', return_value=client):
        response = api_client.get('/api/health')

    assert response.json()['services']['queue'] == 'unreachable'


def test_health_reports_disconnected_database(api_client):
    from django.db import OperationalError

    with mock.patch('apps.health.checks.connection.ensure_connection', side_effect=OperationalError('down')):
        response = api_client.get('/api/health')

    assert response.status_code == 200
    assert response.json()['services']['database'] == 'disconnected'


def test_test_email_sends_to_admin(api_client, settings, email_backend):
    settings.IS_DEVELOPMENT = True

    response = api_client.get('/api/test-email')

    assert response.status_code == 200
    body = response.json()
    assert body['success'] is True
    assert body['message'] == 'Test email sent successfully'
    assert body['messageId'] == 'fake-1'
    assert email_backend.sent[0].to == 'admin@cernol.test'
    assert email_backend.sent[0].subject.endswith('Email Service Test')


def test_test_email_failure(api_client, settings, email_backend):
    settings.IS_DEVELOPMENT = True
    email_backend.fail_for.add('admin@cernol.test')

    response = api_client.get('/api/test-email')

    assert response.status_code == 500
    assert response.json() == {'success': False, 'error': 'Failed to send test email', 'details': 'rejected'}


def test_test_email_hidden_in_production(api_client, settings, email_backend):
    settings.IS_DEVELOPMENT = False

    response = api_client.get('/api/test-email')

    assert response.status_code == 404
    assert response.json()['error'] == 'Test endpoint not available in production'
    assert email_backend.sent == []


@pytest.mark.parametrize("method,path", [
    ('get', '/api/unknown'),
    ('post', '/api/contacts'),
    ('delete', '/nowhere/at/all'),
])
def test_unknown_endpoint_returns_json_404(api_client, settings, method, path):
    settings.IS_DEVELOPMENT = True

    response = getattr(api_client, method)(path)

    assert response.status_code == 404
    body = response.json()
    assert body['error'] == 'Endpoint not found'
    assert body['message'] == f'The requested endpoint {method.upper()} {path} does not exist'
    assert 'POST /api/contact - Submit contact form' in body['availableEndpoints']
    assert 'GET /api/test-email - Test email service' in body['availableEndpoints']


def test_available_endpoints_omit_test_email_in_production(api_client, settings):
    settings.IS_DEVELOPMENT = False
    response = api_client.get('/api/unknown')
    assert 'GET /api/test-email - Test email service' not in response.json()['availableEndpoints']


def test_server_error_handler_returns_json_500(rf):
    from apps.health.views import server_error

    response = server_error(rf.get('/api/anything'))

    assert response.status_code == 500
    body = json.loads(response.content)
    assert body['error'] == 'Internal server error'
    assert body['error_code'] == 'ServerError'
