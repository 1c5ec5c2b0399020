"""
Tests for the contact notification job and its schedulers.
"""

import threading
import uuid
from unittest import mock

import pytest

from apps.common.exceptions import StorageUnavailable
from apps.notifications.jobs import ContactNotificationJob
from apps.notifications.dispatcher import NotificationDispatcher
from apps.notifications.schedulers import CeleryScheduler, NotificationScheduler, ThreadPoolScheduler

from conftest import FakeEmailBackend


class RecordingScheduler(NotificationScheduler):
    def __init__(self):
        self.submitted = []

    def submit(self, contact_id):
        self.submitted.append(contact_id)


@pytest.mark.django_db
def test_job_marks_sent_when_both_emails_succeed(notification_job, email_backend, stored_contact):
    assert notification_job.run(stored_contact.id) == 'sent'

    stored_contact.refresh_from_db()
    assert stored_contact.email_status == 'sent'
    assert len(email_backend.sent) == 2


@pytest.mark.django_db
def test_job_marks_failed_when_admin_email_fails(email_settings, gateway, stored_contact):
    backend = FakeEmailBackend(email_settings, fail_for={'admin@cernol.test'})
    job = ContactNotificationJob(NotificationDispatcher(backend, email_settings), gateway)

    assert job.run(stored_contact.id) == 'failed'

    stored_contact.refresh_from_db()
    assert stored_contact.email_status == 'failed'


@pytest.mark.django_db
def test_job_for_missing_submission_does_not_raise(notification_job, email_backend):
    assert notification_job.run(uuid.uuid4()) == 'failed'
    assert email_backend.sent == []


@pytest.mark.django_db
def test_job_marks_failed_when_dispatch_crashes(notification_job, stored_contact):
    with mock.patch.object(notification_job.dispatcher, 'dispatch_contact', side_effect=RuntimeError('template')):
        assert notification_job.run(stored_contact.id) == 'failed'

    stored_contact.refresh_from_db()
    assert stored_contact.email_status == 'failed'


@pytest.mark.django_db
def test_job_logs_status_write_failures(notification_job, stored_contact):
    with mock.patch.object(notification_job.gateway, 'update_email_status', side_effect=StorageUnavailable()):
        assert notification_job.run(stored_contact.id) == 'sent'

    stored_contact.refresh_from_db()
    assert stored_contact.email_status == 'pending'


@pytest.mark.django_db
def test_schedule_waits_for_commit(django_capture_on_commit_callbacks):
    scheduler = RecordingScheduler()
    contact_id = uuid.uuid4()

    with django_capture_on_commit_callbacks(execute=False) as callbacks:
        scheduler.schedule_contact_dispatch(contact_id)

    assert scheduler.submitted == []
    assert len(callbacks) == 1

    callbacks[0]()
    assert scheduler.submitted == [str(contact_id)]


def test_thread_pool_scheduler_runs_job_off_thread():
    job = mock.Mock()
    job.run.return_value = 'sent'
    scheduler = ThreadPoolScheduler(job, max_workers=1)
    try:
        future = scheduler.submit('abc')
        assert future.result(timeout=5) == 'sent'
    finally:
        scheduler.shutdown()
    job.run.assert_called_once_with('abc')


def test_celery_scheduler_enqueues_task():
    scheduler = CeleryScheduler()
    try:
        with mock.patch('apps.notifications.tasks.send_contact_notifications.apply_async') as apply_async:
            apply_async.return_value = mock.Mock(id='task-1')
            scheduler.submit('abc').result(timeout=5)
    finally:
        scheduler.shutdown()
    apply_async.assert_called_once_with(args=['abc'], retry=False)


def test_celery_scheduler_falls_back_when_broker_is_down():
    fallback = RecordingScheduler()
    scheduler = CeleryScheduler(fallback=fallback)
    try:
        with mock.patch(
            'apps.notifications.tasks.send_contact_notifications.apply_async',
            side_effect=ConnectionRefusedError('redis down'),
        ):
            scheduler.submit('abc').result(timeout=5)
    finally:
        scheduler.shutdown()
    assert fallback.submitted == ['abc']


def test_celery_scheduler_does_not_block_on_a_slow_broker():
    fallback = RecordingScheduler()
    broker_released = threading.Event()

    def stalled_publish(*args, **kwargs):
        broker_released.wait(timeout=5)
        raise ConnectionRefusedError('redis down')

    scheduler = CeleryScheduler(fallback=fallback)
    try:
        with mock.patch(
            'apps.notifications.tasks.send_contact_notifications.apply_async',
            side_effect=stalled_publish,
        ):
            future = scheduler.submit('abc')
            assert not future.done()
            assert fallback.submitted == []

            broker_released.set()
            future.result(timeout=5)
    finally:
        scheduler.shutdown()
    assert fallback.submitted == ['abc']


def test_celery_scheduler_without_fallback_raises():
    scheduler = CeleryScheduler()
    try:
        with mock.patch(
            'apps.notifications.tasks.send_contact_notifications.apply_async',
            side_effect=ConnectionError('redis down'),
        ):
            with pytest.raises(ConnectionError):
                scheduler.submit('abc').result(timeout=5)
    finally:
        scheduler.shutdown()
