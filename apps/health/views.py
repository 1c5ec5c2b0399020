"""
Health API Views Module
Service status, the development-only test email, and JSON error fallbacks.
"""

import structlog
from django.conf import settings
from django.http import JsonResponse
from django.utils import timezone
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from rest_framework import status

import formintake
from apps.common.exceptions import NotFoundError, ServerError
from apps.common.responses import error_response, success_response
from apps.intake.services import get_submission_service

from .checks import database_status, email_config_summary, email_status, queue_status

logger = structlog.get_logger(__name__)

TEST_EMAIL_CONTACT = {
    'first_name': 'Test',
    'last_name': 'User',
    'subject': 'Email Service Test',
    'message': 'This is a test email to verify the email service is working correctly.',
    'service': 'general-inquiry',
}


def available_endpoints():
    endpoints = [
        'POST /api/contact - Submit contact form',
        'POST /api/quote - Submit quote request',
        'GET /api/health - Check server status',
    ]
    if settings.IS_DEVELOPMENT:
        endpoints.append('GET /api/test-email - Test email service')
    return endpoints


class HealthView(APIView):
    """
    Report database, email and queue status.

    GET /api/health
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        email_settings = get_submission_service().dispatcher.email_settings
        return Response({
            'status': 'ok',
            'services': {
                'database': database_status(),
                'email': email_status(email_settings),
                'queue': queue_status(),
                'environment': settings.APP_ENV,
                'version': formintake.__version__,
            },
            'config': {
                'email': email_config_summary(email_settings),
            },
            'timestamp': timezone.now().isoformat(),
        })


class TestEmailView(APIView):
    """
    Send a sample contact confirmation to the admin address.
    Development only.

    GET /api/test-email
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        if not settings.IS_DEVELOPMENT:
            return error_response('Test endpoint not available in production', status_code=status.HTTP_404_NOT_FOUND)

        dispatcher = get_submission_service().dispatcher
        recipient = dispatcher.email_settings.admin_email or 'test@example.com'
        result = dispatcher.send_contact_confirmation(dict(TEST_EMAIL_CONTACT, email=recipient))

        if not result.success:
            logger.error("Test email failed", provider=result.provider, error=result.error)
            return error_response(
                'Failed to send test email',
                details=result.error,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return success_response('Test email sent successfully', messageId=result.message_id)


class EndpointNotFoundView(APIView):
    """JSON 404 for any path and method without a route."""
    authentication_classes = []
    permission_classes = [AllowAny]

    def http_method_not_allowed(self, request, *args, **kwargs):
        raise NotFoundError(
            'Endpoint not found',
            f'The requested endpoint {request.method} {request.get_full_path()} does not exist',
            extra_data={'availableEndpoints': available_endpoints()},
        )

    options = http_method_not_allowed


endpoint_not_found = EndpointNotFoundView.as_view()


def server_error(request, *args, **kwargs):
    """handler500: errors raised outside DRF views."""
    error = ServerError()
    return JsonResponse(error.to_dict(), status=error.status_code)
