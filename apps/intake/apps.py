from django.apps import AppConfig


class IntakeConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.intake"
    label = "intake"
    verbose_name = "Form submissions"

    def ready(self):
        from .services.factory import build_notification_job, build_submission_service

        self.notification_job = build_notification_job()
        self.submission_service = build_submission_service(self.notification_job)
