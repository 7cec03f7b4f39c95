"""
Django middleware for binding request context to structlog.

Every log entry emitted while a request is handled carries request_id,
user_id and the request path, so a cascade delete or a reparent can be
traced back to the call that triggered it.
"""

import structlog
from uuid import uuid4


class StructlogRequestContextMiddleware:
    """
    Bind request context (request_id, user_id, method, path) to structlog.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.headers.get('X-Request-ID') or uuid4().hex
        user = getattr(request, 'user', None)

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            user_id=user.id if user is not None and user.is_authenticated else None,
            method=request.method,
            path=request.path,
        )

        try:
            response = self.get_response(request)
            response['X-Request-ID'] = request_id
            return response
        finally:
            # Clear context after request completes
            structlog.contextvars.clear_contextvars()
