"""Request interceptors attached to the Elasticsearch HTTP client.

An interceptor is any callable taking an ``httpx.Request``. They are
installed as httpx request event hooks, which run on every request just
before it is sent, after redirects are resolved.
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

import httpx

from zipkin_elasticsearch.components import Components

Interceptor = Callable[[httpx.Request], None]

# Qualifier for interceptors other parts of the server register for this client
ELASTICSEARCH_HTTP_QUALIFIER = "zipkin_elasticsearch_http"

http_logger = logging.getLogger("zipkin_elasticsearch.http")


@dataclass(frozen=True)
class BasicAuthInterceptor:
    """Adds a basic ``Authorization`` header to every outgoing request."""

    username: str
    password: str = field(repr=False)

    @property
    def header(self) -> str:
        token = base64.b64encode(f"{self.username}:{self.password}".encode("utf-8")).decode("ascii")
        return f"Basic {token}"

    def __call__(self, request: httpx.Request) -> None:
        request.headers["Authorization"] = self.header


class HttpLoggingLevel(str, Enum):
    NONE = "NONE"
    BASIC = "BASIC"
    HEADERS = "HEADERS"
    BODY = "BODY"


@dataclass(frozen=True, repr=False)
class HttpLoggingInterceptor:
    """Logs outgoing requests. Authorization headers are never logged."""

    level: HttpLoggingLevel
    logger: logging.Logger = field(default=http_logger, compare=False)

    def __call__(self, request: httpx.Request) -> None:
        if self.level is HttpLoggingLevel.NONE:
            return
        self.logger.info(f"--> {request.method} {request.url}")
        if self.level in (HttpLoggingLevel.HEADERS, HttpLoggingLevel.BODY):
            for name, value in request.headers.items():
                if name.lower() == "authorization":
                    value = "<redacted>"
                self.logger.info(f"{name}: {value}")
        if self.level is HttpLoggingLevel.BODY:
            try:
                body = request.content.decode("utf-8", errors="replace")
            except httpx.RequestNotRead:
                body = "<streaming body>"
            self.logger.info(body)

    def __repr__(self) -> str:
        return f"HttpLoggingInterceptor(level={self.level.value})"


def basic_auth_interceptor(username: str | None, password: str | None) -> BasicAuthInterceptor | None:
    """Basic auth interceptor when both credentials are set, otherwise None."""
    if not username or not password:
        return None
    return BasicAuthInterceptor(username, password)


def http_logging_interceptor(level: HttpLoggingLevel) -> HttpLoggingInterceptor | None:
    """Logging interceptor for the given level, or None when logging is off."""
    if level is HttpLoggingLevel.NONE:
        return None
    return HttpLoggingInterceptor(level)


def qualified_interceptors(components: Components) -> list[Interceptor]:
    """Interceptors registered for this client, in registration order, duplicates kept."""
    return components.get_all(qualifier=ELASTICSEARCH_HTTP_QUALIFIER)


def aggregate_interceptors(
    basic_auth: BasicAuthInterceptor | None,
    registered: Iterable[Interceptor],
    logging_interceptor: HttpLoggingInterceptor | None = None,
) -> list[Interceptor]:
    """Final interceptor chain: auth first so later interceptors see the header."""
    chain: list[Interceptor] = []
    if basic_auth is not None:
        chain.append(basic_auth)
    chain.extend(registered)
    if logging_interceptor is not None:
        chain.append(logging_interceptor)
    return chain
