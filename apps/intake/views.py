"""
Intake API Views Module
Public endpoints for the contact and quote forms.
"""

from rest_framework.views import APIView
from rest_framework.permissions import AllowAny
from rest_framework import status

from apps.common.responses import success_response

from .services import get_submission_service

CONTACT_RECEIVED_MESSAGE = (
    'Thank you for contacting us! We have received your message and will get back to you soon.'
)
QUOTE_RECEIVED_MESSAGE = "Quote request submitted successfully! We'll get back to you within 24 hours."


class ContactSubmitView(APIView):
    """
    Accept a contact form submission. Emails are sent after the response.

    POST /api/contact
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        receipt = get_submission_service().submit_contact(request.data)
        return success_response(
            CONTACT_RECEIVED_MESSAGE,
            status_code=status.HTTP_202_ACCEPTED,
            contactId=str(receipt.submission_id),
            responseTime=receipt.response_time,
        )


class QuoteSubmitView(APIView):
    """
    Accept a quote request. Both emails are sent before responding.

    POST /api/quote
    """
    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request):
        receipt = get_submission_service().submit_quote(request.data)
        return success_response(
            QUOTE_RECEIVED_MESSAGE,
            status_code=status.HTTP_201_CREATED,
            quoteId=str(receipt.submission_id),
            responseTime=receipt.response_time,
        )
