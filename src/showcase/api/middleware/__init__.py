"""HTTP middleware and exception handlers."""

from showcase.api.middleware.errors import register_error_handlers
from showcase.api.middleware.request_id import RequestIDMiddleware
from showcase.api.middleware.store_status import StoreStatusMiddleware
from showcase.api.middleware.timing import TimingMiddleware

__all__ = [
    "RequestIDMiddleware",
    "StoreStatusMiddleware",
    "TimingMiddleware",
    "register_error_handlers",
]
