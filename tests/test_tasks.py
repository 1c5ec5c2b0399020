"""
Tests for the send_contact_notifications Celery task, run eagerly.
"""

import uuid
from unittest import mock

import pytest
from celery.exceptions import Retry

from apps.common.exceptions import NotificationFailure, StorageUnavailable
from apps.notifications.tasks import retry_countdown, send_contact_notifications


pytestmark = pytest.mark.django_db


def test_retry_countdown_is_exponential():
    assert [retry_countdown(n) for n in range(3)] == [2, 4, 8]


def test_task_records_sent(submission_service, email_backend, stored_contact):
    result = send_contact_notifications.apply(args=[str(stored_contact.id)])

    assert result.get() == {
        'status': 'success',
        'contact_id': str(stored_contact.id),
        'email_status': 'sent',
    }
    stored_contact.refresh_from_db()
    assert stored_contact.email_status == 'sent'
    assert len(email_backend.sent) == 2


def test_task_retries_partial_failure(submission_service, email_backend, stored_contact):
    email_backend.fail_for.add('admin@cernol.test')

    with mock.patch.object(send_contact_notifications, 'retry', side_effect=Retry()) as retry:
        send_contact_notifications.apply(args=[str(stored_contact.id)])

    retry.assert_called_once()
    _, kwargs = retry.call_args
    assert kwargs['countdown'] == 2
    assert isinstance(kwargs['exc'], NotificationFailure)
    stored_contact.refresh_from_db()
    assert stored_contact.email_status == 'pending'


def test_task_records_failed_after_last_retry(submission_service, email_backend, stored_contact):
    email_backend.fail_for.add('admin@cernol.test')

    result = send_contact_notifications.apply(args=[str(stored_contact.id)], retries=3)

    assert result.get()['email_status'] == 'failed'
    stored_contact.refresh_from_db()
    assert stored_contact.email_status == 'failed'


def test_task_missing_submission(submission_service):
    result = send_contact_notifications.apply(args=[str(uuid.uuid4())])
    assert result.get()['status'] == 'error'


def test_task_retries_when_database_is_unavailable(submission_service, notification_job, stored_contact):
    with mock.patch.object(notification_job, 'dispatch', side_effect=StorageUnavailable()), \
            mock.patch.object(send_contact_notifications, 'retry', side_effect=Retry()) as retry:
        send_contact_notifications.apply(args=[str(stored_contact.id)], retries=1)

    _, kwargs = retry.call_args
    assert kwargs['countdown'] == 4
    assert isinstance(kwargs['exc'], StorageUnavailable)
