"""
Django middleware for binding request context to structlog.
"""

import structlog
from uuid import uuid4


class StructlogRequestContextMiddleware:
    """
    Bind request_id, method and path to every log entry emitted while a
    request is handled. The id is echoed back in the ``X-Request-ID`` header.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.headers.get('X-Request-ID') or uuid4().hex

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.path,
        )

        try:
            response = self.get_response(request)
            response['X-Request-ID'] = request_id
            return response
        finally:
            structlog.contextvars.clear_contextvars()
