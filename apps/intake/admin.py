from django.contrib import admin

from .models import ContactSubmission, QuoteSubmission


class ReadOnlySubmissionAdmin(admin.ModelAdmin):
    """Submissions are written by the public forms only."""
    date_hierarchy = "created_at"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(ContactSubmission)
class ContactSubmissionAdmin(ReadOnlySubmissionAdmin):
    list_display = ("first_name", "last_name", "email", "service", "email_status", "created_at")
    list_filter = ("service", "email_status")
    search_fields = ("first_name", "last_name", "email", "company", "subject")


@admin.register(QuoteSubmission)
class QuoteSubmissionAdmin(ReadOnlySubmissionAdmin):
    list_display = ("company", "first_name", "last_name", "email", "budget", "timeline", "created_at")
    list_filter = ("industry", "budget", "timeline", "newsletter")
    search_fields = ("company", "first_name", "last_name", "email")
