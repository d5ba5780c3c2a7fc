"""HTTP middleware: timeout, request size limit, request ID, security headers.

Raw ASGI callables (no BaseHTTPMiddleware). Applied in app.main; order
matters (last wrapped = outermost).
"""

from app.middleware.request_id import RequestIDMiddleware
from app.middleware.request_size_limit import RequestSizeLimitMiddleware
from app.middleware.security_headers import SecurityHeadersMiddleware
from app.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
]
