"""Data structures for Swagger to JMeter translation.

This module defines dataclasses used for endpoint extraction, base URL
resolution and load plan serialization.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

DEFAULT_TITLE = "Generated Test Plan"
DEFAULT_THREADS = 10
DEFAULT_RAMP_TIME = 1
DEFAULT_DURATION = 60


@dataclass
class EndpointDescriptor:
    """One HTTP operation found in a Swagger/OpenAPI document.

    Attributes:
        path: The endpoint path as written (e.g., "/users/{id}")
        method: HTTP method in uppercase (e.g., "GET", "POST")
        summary: Operation summary, falls back to operationId (may be None)
        description: Longer description (may be None)
        tags: Operation tags, first tag is used for grouping
        parameters: Raw parameter list from the operation (pass-through)
        request_body: Raw requestBody object, OpenAPI 3.x only
        raw_operation: The operation object the descriptor was built from
    """

    path: str
    method: str
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    parameters: list[Any] = field(default_factory=list)
    request_body: Optional[Any] = None
    raw_operation: Optional[dict[str, Any]] = field(default=None, repr=False)

    @property
    def display_name(self) -> str:
        """Name used for the HTTP sampler, e.g. "GET /users"."""
        return f"{self.method} {self.path}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the endpoint (raw operation excluded).
        """
        return {
            "path": self.path,
            "method": self.method,
            "summary": self.summary,
            "description": self.description,
            "tags": self.tags,
            "parameters": self.parameters,
            "request_body": self.request_body,
        }


@dataclass
class HeaderEntry:
    """A common HTTP header added to every sampler.

    Entries with a blank key are kept here and dropped at serialization time.
    """

    key: str = ""
    value: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"key": self.key, "value": self.value}


def default_headers() -> list[HeaderEntry]:
    """Headers every new plan starts with."""
    return [
        HeaderEntry("Authorization", "Bearer ${TOKEN}"),
        HeaderEntry("Content-Type", "application/json"),
    ]


@dataclass
class LoadPlanConfig:
    """User settings for a generated load test plan.

    Attributes:
        title: Test plan name, also used for the suggested file name
        base_url: Base URL override, empty to resolve it from the document
        threads: Number of virtual users
        ramp_time: Ramp-up period in seconds
        duration: Scheduler duration in seconds
        common_headers: Headers injected into every sampler, in order
    """

    title: str = DEFAULT_TITLE
    base_url: str = ""
    threads: int = DEFAULT_THREADS
    ramp_time: int = DEFAULT_RAMP_TIME
    duration: int = DEFAULT_DURATION
    common_headers: list[HeaderEntry] = field(default_factory=default_headers)

    def __post_init__(self) -> None:
        """Coerce numbers and header mappings to their declared types."""
        self.threads = int(self.threads)
        self.ramp_time = int(self.ramp_time)
        self.duration = int(self.duration)
        self.common_headers = [
            h if isinstance(h, HeaderEntry) else HeaderEntry(h.get("key", ""), h.get("value", ""))
            for h in self.common_headers
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "base_url": self.base_url,
            "threads": self.threads,
            "ramp_time": self.ramp_time,
            "duration": self.duration,
            "common_headers": [h.to_dict() for h in self.common_headers],
        }


@dataclass
class ResolvedBaseUrl:
    """Protocol, host and port split out of a base URL.

    Attributes:
        protocol: URL scheme without the trailing colon (e.g., "https")
        host: Host name (e.g., "api.example.com")
        port: Explicit port, or the scheme default ("443" / "80")
    """

    protocol: str
    host: str
    port: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"protocol": self.protocol, "host": self.host, "port": self.port}


@dataclass
class SpecInfo:
    """Display metadata of a Swagger/OpenAPI document.

    Attributes:
        title: info.title, else the swagger version field, else "OpenAPI"
        version: info.version, else "-"
        dialect: "openapi" for 3.x documents, "swagger" otherwise
    """

    title: str
    version: str
    dialect: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"title": self.title, "version": self.version, "dialect": self.dialect}
