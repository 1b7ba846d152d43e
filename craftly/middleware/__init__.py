"""HTTP middleware: timeout, request size limit, request ID, access log, security headers.

Applied in main app; order matters (last added = outermost).
"""

from craftly.middleware.request_id import RequestIDMiddleware
from craftly.middleware.request_logging import RequestLoggingMiddleware
from craftly.middleware.request_size_limit import RequestSizeLimitMiddleware
from craftly.middleware.security_headers import SecurityHeadersMiddleware
from craftly.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestLoggingMiddleware",
    "RequestSizeLimitMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
]
