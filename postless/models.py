"""
Data models for workspace files and the in-memory collection tree.

The file-backed models (:class:`Config`, :class:`Secret`,
:class:`RequestDefinition`) are frozen Pydantic models whose aliases follow the
on-disk JSON keys. Changes are made by producing a new instance with
``model_copy(update=...)`` and persisting it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from postless.constants import BASE_URL_TOKEN, DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, JSON_CONTENT_TYPE


class Config(BaseModel):
    """Contents of ``config.json``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    base_url: str = Field(..., alias="baseUrl", description="Value substituted for {{baseUrl}}")
    timeout: Optional[int] = Field(None, description="Request timeout in seconds")
    global_headers: Optional[Dict[str, str]] = Field(
        None, alias="globalHeaders", description="Headers sent with every request"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Reject an empty base URL."""
        if not v:
            raise ValueError("baseUrl is required")
        return v

    def resolve_timeout(self) -> int:
        """Return the configured timeout, or the default when unset or not positive."""
        if self.timeout is None or self.timeout <= 0:
            return DEFAULT_TIMEOUT_SECONDS
        return self.timeout

    def interpolate(self, text: str) -> str:
        """
        Substitute the base URL for every ``{{baseUrl}}`` token in ``text``.

        The replacement is a single pass: a base URL that itself contains the
        token is not expanded again. Other ``{{...}}`` tokens are left alone.
        """
        return text.replace(BASE_URL_TOKEN, self.base_url)

    def to_file_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"baseUrl": self.base_url}
        if self.timeout:
            data["timeout"] = self.timeout
        if self.global_headers:
            data["globalHeaders"] = dict(self.global_headers)
        return data

    @classmethod
    def default(cls) -> "Config":
        return cls(
            base_url=DEFAULT_BASE_URL,
            timeout=DEFAULT_TIMEOUT_SECONDS,
            global_headers={"Content-Type": JSON_CONTENT_TYPE},
        )


class Secret(BaseModel):
    """Contents of ``secret.json``."""

    model_config = ConfigDict(frozen=True)

    jwt: str = Field(default="", description="Bearer token")

    @property
    def token(self) -> str:
        """The bearer token without surrounding whitespace."""
        return self.jwt.strip()

    def to_file_dict(self) -> Dict[str, Any]:
        return {"jwt": self.jwt}


class RequestDefinition(BaseModel):
    """One saved request, stored as a single JSON file."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(default="", description="Display name")
    method: str = Field(default="", description="HTTP method")
    url: str = Field(default="", description="Target URL, may contain {{baseUrl}}")
    skip_auth: bool = Field(default=False, alias="skipAuth", description="Do not send the bearer token")
    headers: Optional[Dict[str, str]] = Field(None, description="Request specific headers")
    body: Optional[Any] = Field(None, description="JSON body")

    @property
    def has_body(self) -> bool:
        return self.body is not None

    def to_file_dict(self) -> Dict[str, Any]:
        """Serializable form with the on-disk key names; absent headers and body are omitted."""
        data: Dict[str, Any] = {
            "name": self.name,
            "method": self.method,
            "url": self.url,
            "skipAuth": self.skip_auth,
        }
        if self.headers:
            data["headers"] = dict(self.headers)
        if self.body is not None:
            data["body"] = self.body
        return data


@dataclass
class RequestItem:
    """A loaded request together with the file it came from."""
    name: str
    file_name: str
    file_path: str
    request: RequestDefinition


@dataclass
class Collection:
    """A named group of requests, one per subdirectory of the requests root."""
    name: str
    path: str
    requests: List[RequestItem] = field(default_factory=list)


@dataclass(frozen=True)
class SettingsItem:
    """One row of the settings page."""
    key: str
    label: str
    value: str
