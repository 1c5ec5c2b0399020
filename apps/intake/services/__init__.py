from django.apps import apps

from .submission_service import SubmissionReceipt, SubmissionService


def get_submission_service() -> SubmissionService:
    """The process-wide SubmissionService built by ``IntakeConfig.ready``."""
    return apps.get_app_config('intake').submission_service


__all__ = ['SubmissionReceipt', 'SubmissionService', 'get_submission_service']
