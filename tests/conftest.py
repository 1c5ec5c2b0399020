"""
Shared fixtures: an in-memory email backend, an inline scheduler, and a
SubmissionService wired from them and installed on the intake app config.
"""

import pytest
from django.apps import apps as django_apps
from rest_framework.test import APIClient

from apps.intake.gateway import SubmissionGateway
from apps.intake.services import SubmissionService
from apps.notifications.backends import BaseEmailBackend, SendResult
from apps.notifications.config import EmailSettings
from apps.notifications.dispatcher import NotificationDispatcher
from apps.notifications.jobs import ContactNotificationJob
from apps.notifications.schedulers import NotificationScheduler


class FakeEmailBackend(BaseEmailBackend):
    """Records envelopes; fails for any recipient listed in ``fail_for``."""

    provider = 'Fake'

    def __init__(self, email_settings, fail_for=()):
        super().__init__(email_settings)
        self.sent = []
        self.fail_for = set(fail_for)

    def send(self, envelope):
        self.sent.append(envelope)
        if envelope.to in self.fail_for:
            return SendResult.failed(self.provider, 'rejected')
        return SendResult.ok(self.provider, f'fake-{len(self.sent)}')


class InlineScheduler(NotificationScheduler):
    """Runs the job on the calling thread once the transaction commits."""

    def __init__(self, job):
        self.job = job
        self.submitted = []

    def submit(self, contact_id):
        self.submitted.append(contact_id)
        self.job.run(contact_id)


@pytest.fixture
def email_settings():
    return EmailSettings(
        from_email='noreply@cernol.test',
        from_name='Cernol Chemicals',
        admin_email='admin@cernol.test',
        admin_panel_url='https://admin.cernol.test/contacts',
        smtp_host='smtp.cernol.test',
    )


@pytest.fixture
def email_backend(email_settings):
    return FakeEmailBackend(email_settings)


@pytest.fixture
def dispatcher(email_backend, email_settings):
    return NotificationDispatcher(email_backend, email_settings)


@pytest.fixture
def gateway():
    return SubmissionGateway()


@pytest.fixture
def notification_job(dispatcher, gateway):
    return ContactNotificationJob(dispatcher, gateway)


@pytest.fixture
def scheduler(notification_job):
    return InlineScheduler(notification_job)


@pytest.fixture
def submission_service(monkeypatch, gateway, dispatcher, scheduler, notification_job):
    """Replace the process-wide service graph for the duration of a test."""
    service = SubmissionService(gateway, dispatcher, scheduler)
    config = django_apps.get_app_config('intake')
    monkeypatch.setattr(config, 'submission_service', service)
    monkeypatch.setattr(config, 'notification_job', notification_job)
    return service


@pytest.fixture
def api_client(submission_service):
    return APIClient()


@pytest.fixture
def contact_payload():
    return {
        'firstName': 'Tendai',
        'lastName': 'Moyo',
        'email': 'tendai.moyo@example.com',
        'phone': '+263 77 123 4567',
        'company': 'Moyo Mining',
        'subject': 'support',
        'message': 'Our flotation reagent order has not arrived.',
    }


@pytest.fixture
def quote_payload():
    return {
        'firstName': 'Rudo',
        'lastName': 'Chikwanha',
        'email': 'rudo@example.com',
        'phone': '+263 71 555 0000',
        'company': 'Chikwanha Foods',
        'industry': 'food-beverage',
        'address': '12 Samora Machel Ave, Harare',
        'services': ['lab-supplies', 'consulting'],
        'budget': '5000-10000',
        'timeline': 'normal',
        'requirements': 'Monthly supply of lab reagents for QA.',
        'newsletter': True,
    }


@pytest.fixture
def stored_contact(gateway):
    return gateway.create_contact({
        'first_name': 'Tendai',
        'last_name': 'Moyo',
        'email': 'tendai.moyo@example.com',
        'phone': '+263771234567',
        'company': 'Moyo Mining',
        'subject': 'Reagent delivery',
        'message': 'Our flotation reagent order has not arrived.',
        'service': 'technical-support',
    })


@pytest.fixture
def stored_quote(gateway):
    return gateway.create_quote({
        'first_name': 'Rudo',
        'last_name': 'Chikwanha',
        'email': 'rudo@example.com',
        'company': 'Chikwanha Foods',
        'industry': 'food-beverage',
        'services': ['lab-supplies', 'consulting'],
        'budget': '5000-10000',
        'timeline': 'normal',
        'requirements': 'Monthly supply of lab reagents for QA.',
        'newsletter': True,
    })
