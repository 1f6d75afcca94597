"""Elasticsearch HTTP client assembly.

Builds one httpx client from a resolved StorageConfig and shares it between
all callers. Span reads and writes live elsewhere; this layer only owns the
connection settings and a cluster health check.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from zipkin_elasticsearch.resolver import StorageConfig

logger = logging.getLogger(__name__)

HEALTHY_STATUSES = ("green", "yellow")


# =============================================================================
# Types
# =============================================================================


@dataclass
class CheckResult:
    """Outcome of a cluster health check."""

    ok: bool
    status: str | None = None
    error: str | None = None


# =============================================================================
# Client Management
# =============================================================================


def build_http_client(
    config: StorageConfig, transport: httpx.BaseTransport | None = None
) -> httpx.Client:
    """Create the HTTP client with timeouts, concurrency cap and interceptors applied."""
    return httpx.Client(
        transport=transport,
        timeout=httpx.Timeout(config.timeout_millis / 1000),
        limits=httpx.Limits(max_connections=config.max_requests),
        event_hooks={"request": list(config.network_interceptors)},
    )


class ElasticsearchStorage:
    """Storage handle owning the shared Elasticsearch HTTP client."""

    def __init__(self, config: StorageConfig, transport: httpx.BaseTransport | None = None) -> None:
        self.config = config
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def http_client(self) -> httpx.Client:
        """Get or create the HTTP client singleton."""
        if self._client is None:
            self._client = build_http_client(self.config, self._transport)
        return self._client

    def index_template(self, type_: str) -> dict[str, Any]:
        """Template body applied to the daily indexes of a type."""
        return {
            "index_patterns": [self.config.index_name_formatter.index_pattern(type_)],
            "settings": {
                "index.number_of_shards": self.config.index_shards,
                "index.number_of_replicas": self.config.index_replicas,
            },
        }

    def check(self) -> CheckResult:
        """Query cluster health on the first host."""
        url = f"{self.config.hosts[0]}/_cluster/health"
        try:
            response = self.http_client.get(url)
            response.raise_for_status()
            body = response.json()
            status = body.get("status") if isinstance(body, dict) else None
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Elasticsearch health check against {url} failed: {e}")
            return CheckResult(ok=False, error=str(e))

        if status in HEALTHY_STATUSES:
            return CheckResult(ok=True, status=status)
        return CheckResult(ok=False, status=status, error=f"cluster status is {status}")

    def close(self) -> None:
        """Close the client connection."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> ElasticsearchStorage:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
