"""HTTP middleware: request ID propagation.

Applied in main app. Import and use from villagetech.main.
"""

from villagetech.middleware.request_id import RequestIDMiddleware, get_request_id

__all__ = [
    "RequestIDMiddleware",
    "get_request_id",
]
