"""Host list parsing for the Elasticsearch HTTP client.

Each entry may be ``host``, ``host:port`` or ``scheme://host:port`` and is
turned into a canonical base URL such as ``http://host1:9200``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from urllib.parse import urlsplit

from zipkin_elasticsearch.config import HOSTS_KEY
from zipkin_elasticsearch.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_HOSTS = ("http://localhost:9200",)
HTTP_PORT = 9200
# Native transport port of older clusters, not served over HTTP
TRANSPORT_PORT = 9300
SUPPORTED_SCHEMES = ("http", "https")


class _InvalidHost(ValueError):
    pass


def split_hosts(raw: str | Iterable[str]) -> list[str]:
    """Split a comma separated host list, dropping blank entries."""
    candidates = raw.split(",") if isinstance(raw, str) else [str(item) for item in raw]
    return [candidate.strip() for candidate in candidates if candidate.strip()]


def _canonicalize(entry: str) -> str:
    url = entry if "://" in entry else f"http://{entry}"
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise _InvalidHost(f"{entry!r} is not a valid host ({e})") from None

    scheme = parts.scheme.lower()
    if scheme not in SUPPORTED_SCHEMES:
        raise _InvalidHost(f"{entry!r} uses unsupported scheme {parts.scheme!r}")
    if parts.username is not None or parts.query or parts.fragment:
        raise _InvalidHost(f"{entry!r} must not contain credentials, a query or a fragment")

    host = parts.hostname
    if not host or any(ch.isspace() for ch in host):
        raise _InvalidHost(f"{entry!r} has no valid host name")

    try:
        port = parts.port
    except ValueError:
        raise _InvalidHost(f"{entry!r} has an invalid port") from None
    if port == 0:
        raise _InvalidHost(f"{entry!r} has an invalid port")

    if port is None:
        port = HTTP_PORT
    elif port == TRANSPORT_PORT:
        logger.warning(f"Rewriting port {TRANSPORT_PORT} to {HTTP_PORT} for {entry}")
        port = HTTP_PORT

    if ":" in host:
        host = f"[{host}]"
    path = parts.path.rstrip("/")
    return f"{scheme}://{host}:{port}{path}"


def parse_host(entry: str) -> str:
    """Canonicalize a single host entry.

    Raises ConfigError when the entry cannot be read as ``host[:port]``.
    """
    try:
        return _canonicalize(entry.strip())
    except _InvalidHost as e:
        raise ConfigError.for_field(HOSTS_KEY, str(e)) from None


def parse_hosts(raw: str | Iterable[str]) -> list[str]:
    """Resolve raw host specifications into base URLs, keeping input order.

    Duplicates are kept. Every malformed entry is reported in one ConfigError.
    """
    entries = split_hosts(raw)
    if not entries:
        raise ConfigError.for_field(HOSTS_KEY, "at least one host is required")

    hosts: list[str] = []
    problems: list[str] = []
    for entry in entries:
        try:
            hosts.append(_canonicalize(entry))
        except _InvalidHost as e:
            problems.append(str(e))

    if problems:
        raise ConfigError.for_field(HOSTS_KEY, "; ".join(problems))
    return hosts
