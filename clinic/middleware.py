import logging
import time

logger = logging.getLogger(__name__)


class RequestLogMiddleware:
    """Log method, path, status and duration of every request."""
    SKIP_PREFIXES = ('/static/', '/metrics')

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path or ''
        if path.startswith(self.SKIP_PREFIXES):
            return self.get_response(request)
        start = time.monotonic()
        response = self.get_response(request)
        duration = time.monotonic() - start
        logger.info("%s %s -> %s in %.3fs", request.method, path, response.status_code, duration)
        return response
