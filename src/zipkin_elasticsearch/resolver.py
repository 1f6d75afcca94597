"""Resolves raw configuration into a validated Elasticsearch StorageConfig."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from zipkin_elasticsearch.components import Components
from zipkin_elasticsearch.data.elasticsearch import ElasticsearchStorage
from zipkin_elasticsearch.index_names import IndexNameFormatter
from zipkin_elasticsearch.interceptors import (
    BasicAuthInterceptor,
    HttpLoggingInterceptor,
    HttpLoggingLevel,
    Interceptor,
    aggregate_interceptors,
    basic_auth_interceptor,
    http_logging_interceptor,
    qualified_interceptors,
)
from zipkin_elasticsearch.properties import ElasticsearchProperties, StorageTypeProperties

logger = logging.getLogger(__name__)

DEFAULT_NAMES_LOOKBACK_MILLIS = 86_400_000  # 1 day


# =============================================================================
# Types
# =============================================================================


@dataclass(frozen=True)
class StorageConfig:
    """Validated configuration of the Elasticsearch storage client."""

    hosts: tuple[str, ...]
    pipeline: str | None
    max_requests: int
    timeout_millis: int
    strict_trace_id: bool
    search_enabled: bool
    names_lookback_millis: int
    index_name_formatter: IndexNameFormatter
    index_shards: int = 5
    index_replicas: int = 1
    http_logging: HttpLoggingLevel = HttpLoggingLevel.NONE
    basic_auth: BasicAuthInterceptor | None = None
    interceptors: tuple[Interceptor, ...] = ()
    logging_interceptor: HttpLoggingInterceptor | None = field(default=None, repr=False)

    @property
    def network_interceptors(self) -> tuple[Interceptor, ...]:
        return tuple(
            aggregate_interceptors(self.basic_auth, self.interceptors, self.logging_interceptor)
        )


# =============================================================================
# Resolution
# =============================================================================


def is_activated(raw: Mapping[str, Any]) -> bool:
    """True when the storage type selects Elasticsearch, ignoring case."""
    return StorageTypeProperties.from_raw(raw).is_elasticsearch


def resolve_storage_config(
    raw: Mapping[str, Any],
    interceptors: Iterable[Interceptor] = (),
) -> StorageConfig | None:
    """Build the StorageConfig, or None when storage type is not elasticsearch.

    Raises ConfigError listing every invalid property. Nothing is built
    unless all of them are valid.
    """
    storage_type = StorageTypeProperties.from_raw(raw)
    if not storage_type.is_elasticsearch:
        logger.debug(f"Storage type {storage_type.storage_type!r} is not elasticsearch, skipping")
        return None

    props = ElasticsearchProperties.from_raw(raw)

    if props.names_lookback is not None:
        names_lookback = props.names_lookback
    elif props.query_lookback is not None:
        names_lookback = props.query_lookback
    else:
        names_lookback = DEFAULT_NAMES_LOOKBACK_MILLIS

    config = StorageConfig(
        hosts=props.hosts,
        pipeline=props.pipeline,
        max_requests=props.max_requests,
        timeout_millis=props.timeout,
        strict_trace_id=props.strict_trace_id,
        search_enabled=props.search_enabled,
        names_lookback_millis=names_lookback,
        index_name_formatter=IndexNameFormatter(props.index, props.date_separator),
        index_shards=props.index_shards,
        index_replicas=props.index_replicas,
        http_logging=props.http_logging,
        basic_auth=basic_auth_interceptor(props.username, props.password),
        interceptors=tuple(interceptors),
        logging_interceptor=http_logging_interceptor(props.http_logging),
    )
    logger.info(f"Resolved Elasticsearch storage for {', '.join(config.hosts)}")
    return config


def register_storage(components: Components, raw: Mapping[str, Any]) -> ElasticsearchStorage | None:
    """Resolve and register the storage components.

    Interceptors already registered under the Elasticsearch HTTP qualifier
    are attached to the client. Registers nothing when not activated.
    """
    config = resolve_storage_config(raw, qualified_interceptors(components))
    if config is None:
        return None

    components.register(config)
    if config.basic_auth is not None:
        components.register(config.basic_auth)
    storage = ElasticsearchStorage(config)
    components.register(storage.http_client)
    components.register(storage)
    return storage
