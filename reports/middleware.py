import logging
import time

from django.conf import settings

logger = logging.getLogger(__name__)


class TimingMiddleware:
    """
    Measure request elapsed time and log slow requests.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        start = time.monotonic()
        request._elapsed_start = start
        response = self.get_response(request)
        request._elapsed_ms = int((time.monotonic() - start) * 1000)
        if request._elapsed_ms >= getattr(settings, 'SLOW_REQUEST_MS', 1000):
            logger.warning(f"Slow request {request.method} {request.path}: {request._elapsed_ms}ms")
        return response
