"""Request execution and response capture."""

from .executor import HttpResult, RequestExecutor, build_headers, serialize_body
from .errors import classify_error

__all__ = [
    "HttpResult",
    "RequestExecutor",
    "build_headers",
    "serialize_body",
    "classify_error",
]
