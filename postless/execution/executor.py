"""
Request execution.

Each call to :meth:`RequestExecutor.execute` builds its own ``httpx.Client``,
sends exactly one request and closes the client again. Nothing is retried and
no connection is kept between calls. The configured timeout bounds the whole
exchange: httpx applies it per phase, and the body is streamed so that the
total elapsed time can be checked as it arrives.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

import httpx

from postless.config import settings
from postless.constants import JSON_CONTENT_TYPE, TRUNCATION_SUFFIX
from postless.execution.errors import DEADLINE_EXCEEDED, classify_error
from postless.logger import get_logger
from postless.models import Config, RequestDefinition, Secret
from postless.utils.helpers import truncate_string

logger = get_logger(__name__)


@dataclass
class HttpResult:
    """Everything captured from one execution."""
    status_code: Optional[int] = None
    reason: str = ""
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: bytes = b""
    json_body: Any = None
    is_json: bool = False
    duration: float = 0.0
    size: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def display_text(self, limit: Optional[int] = None) -> str:
        """Body text for display, cut to ``limit`` characters."""
        limit = limit or settings.body_preview_limit
        return truncate_string(self.text, limit, TRUNCATION_SUFFIX)

    def error_message(self) -> str:
        return classify_error(self.error) if self.error else ""


def build_headers(request: RequestDefinition, config: Config, secret: Secret) -> httpx.Headers:
    """
    Resolve the headers for ``request``.

    Layers, lowest precedence first: ``Content-Type: application/json`` when
    the request has a body, the config's global headers, the bearer token
    unless the request skips auth, and the request's own headers. Keys are
    case-insensitive and a later layer replaces an earlier value.
    """
    headers = httpx.Headers()
    if request.has_body:
        headers["Content-Type"] = JSON_CONTENT_TYPE

    for key, value in (config.global_headers or {}).items():
        headers[key] = value

    token = secret.token
    if not request.skip_auth and token:
        headers["Authorization"] = f"Bearer {token}"

    for key, value in (request.headers or {}).items():
        headers[key] = value

    return headers


def serialize_body(body: Any) -> bytes:
    return json.dumps(body, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def read_within_deadline(response: httpx.Response, start: float, timeout: float) -> Optional[bytes]:
    """
    Read the streamed body of ``response``.

    Returns:
        Optional[bytes]: The body, or None once more than ``timeout`` seconds
        have passed since ``start``
    """
    if time.perf_counter() - start > timeout:
        return None
    chunks: List[bytes] = []
    for chunk in response.iter_bytes():
        chunks.append(chunk)
        if time.perf_counter() - start > timeout:
            return None
    return b"".join(chunks)


def describe_failure(error: Exception) -> str:
    """Failure description used for display classification."""
    message = str(error)
    return message if message else type(error).__name__


class RequestExecutor:
    """Sends saved requests using the workspace config and secret."""

    def __init__(
        self,
        config: Config,
        secret: Secret,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize the executor.

        Args:
            config: Workspace config (base URL, timeout, global headers)
            secret: Workspace secret (bearer token)
            transport: Optional transport handed to each client, used by tests
        """
        self.config = config
        self.secret = secret
        self.transport = transport

    def execute(self, request: RequestDefinition) -> HttpResult:
        """
        Send ``request`` once and capture the outcome.

        Transport failures are returned as ``HttpResult.error``; only the
        duration is populated in that case.
        """
        result = HttpResult()
        url = self.config.interpolate(request.url)
        headers = build_headers(request, self.config, self.secret)
        content = serialize_body(request.body) if request.has_body else None
        timeout = self.config.resolve_timeout()

        logger.info(f"Executing {request.method} {url}", extra={"timeout": timeout})
        start = time.perf_counter()
        try:
            with httpx.Client(timeout=timeout, transport=self.transport) as client:
                with client.stream(request.method, url, headers=headers, content=content) as response:
                    body = read_within_deadline(response, start, timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            result.duration = time.perf_counter() - start
            result.error = describe_failure(e)
            logger.warning(f"Request {request.method} {url} failed: {result.error}")
            return result
        result.duration = time.perf_counter() - start

        if body is None:
            result.error = DEADLINE_EXCEEDED
            logger.warning(f"Request {request.method} {url} exceeded {timeout}s")
            return result

        result.status_code = response.status_code
        result.reason = response.reason_phrase
        result.headers = list(response.headers.multi_items())
        result.body = body
        result.size = len(body)

        try:
            result.json_body = json.loads(body)
            result.is_json = True
        except ValueError:
            result.is_json = False

        logger.info(
            f"Received {result.status_code} from {url}",
            extra={"duration": round(result.duration, 3), "size": result.size}
        )
        return result
