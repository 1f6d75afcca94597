"""Configuration management using pydantic-settings.

Configuration arrives as a flat mapping of dotted property keys
(``zipkin.storage.elasticsearch.hosts``). Environment variables and the
``.env`` file are read by pydantic-settings and translated into that
mapping; ``--key=value`` command line flags are applied last.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

# Property keys
STORAGE_TYPE_KEY = "zipkin.storage.type"
HOSTS_KEY = "zipkin.storage.elasticsearch.hosts"
PIPELINE_KEY = "zipkin.storage.elasticsearch.pipeline"
MAX_REQUESTS_KEY = "zipkin.storage.elasticsearch.max-requests"
TIMEOUT_KEY = "zipkin.storage.elasticsearch.timeout"
USERNAME_KEY = "zipkin.storage.elasticsearch.username"
PASSWORD_KEY = "zipkin.storage.elasticsearch.password"
INDEX_KEY = "zipkin.storage.elasticsearch.index"
DATE_SEPARATOR_KEY = "zipkin.storage.elasticsearch.date-separator"
INDEX_SHARDS_KEY = "zipkin.storage.elasticsearch.index-shards"
INDEX_REPLICAS_KEY = "zipkin.storage.elasticsearch.index-replicas"
HTTP_LOGGING_KEY = "zipkin.storage.elasticsearch.http-logging"
NAMES_LOOKBACK_KEY = "zipkin.storage.elasticsearch.names-lookback"
STRICT_TRACE_ID_KEY = "zipkin.storage.strict-trace-id"
SEARCH_ENABLED_KEY = "zipkin.storage.search-enabled"
QUERY_LOOKBACK_KEY = "zipkin.query.lookback"

ELASTICSEARCH_STORAGE_TYPE = "elasticsearch"

RawConfig = dict[str, Any]


class EnvironmentSettings(BaseSettings):
    """Raw settings loaded from environment variables.

    Pydantic Settings automatically loads from .env file and environment variables.
    Environment variables take precedence over .env file values. Values stay
    strings here; typing and validation happen during resolution.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unrelated variables in .env
    )

    storage_type: str | None = None

    # Elasticsearch connection
    es_hosts: str | None = None
    es_pipeline: str | None = None
    es_max_requests: str | None = None
    es_timeout: str | None = None
    es_username: str | None = None
    es_password: str | None = None

    # Index naming
    es_index: str | None = None
    es_date_separator: str | None = None
    es_index_shards: str | None = None
    es_index_replicas: str | None = None

    es_http_logging: str | None = None
    es_names_lookback: str | None = None

    # Shared storage and query settings
    strict_trace_id: str | None = None
    search_enabled: str | None = None
    query_lookback: str | None = None

    def to_raw_config(self) -> RawConfig:
        """Property mapping of every variable that was set, including empty ones."""
        return {
            ENVIRONMENT_KEYS[name]: value
            for name, value in self.model_dump().items()
            if value is not None
        }


ENVIRONMENT_KEYS: dict[str, str] = {
    "storage_type": STORAGE_TYPE_KEY,
    "es_hosts": HOSTS_KEY,
    "es_pipeline": PIPELINE_KEY,
    "es_max_requests": MAX_REQUESTS_KEY,
    "es_timeout": TIMEOUT_KEY,
    "es_username": USERNAME_KEY,
    "es_password": PASSWORD_KEY,
    "es_index": INDEX_KEY,
    "es_date_separator": DATE_SEPARATOR_KEY,
    "es_index_shards": INDEX_SHARDS_KEY,
    "es_index_replicas": INDEX_REPLICAS_KEY,
    "es_http_logging": HTTP_LOGGING_KEY,
    "es_names_lookback": NAMES_LOOKBACK_KEY,
    "strict_trace_id": STRICT_TRACE_ID_KEY,
    "search_enabled": SEARCH_ENABLED_KEY,
    "query_lookback": QUERY_LOOKBACK_KEY,
}


def parse_flags(argv: Sequence[str]) -> RawConfig:
    """Read ``--key=value`` flags. Other arguments are left to the caller."""
    flags: RawConfig = {}
    for arg in argv:
        if arg.startswith("--") and "=" in arg:
            key, _, value = arg[2:].partition("=")
            flags[key] = value
    return flags


def load_raw_config(argv: Sequence[str] = ()) -> RawConfig:
    """Merge the environment, .env and command line flags, later sources winning."""
    raw = EnvironmentSettings().to_raw_config()
    raw.update(parse_flags(argv))
    return raw
