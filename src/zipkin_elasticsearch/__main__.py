"""Entry point for running zipkin-elasticsearch as a module.

Resolves the storage configuration from the environment and flags:
  python -m zipkin_elasticsearch --zipkin.storage.type=elasticsearch   # print resolved config
  python -m zipkin_elasticsearch --check                               # also query cluster health
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from zipkin_elasticsearch.config import load_raw_config
from zipkin_elasticsearch.data.elasticsearch import ElasticsearchStorage
from zipkin_elasticsearch.errors import ConfigError
from zipkin_elasticsearch.resolver import StorageConfig, resolve_storage_config

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def describe(config: StorageConfig) -> dict[str, Any]:
    """JSON friendly summary of a StorageConfig. Passwords are masked."""
    formatter = config.index_name_formatter
    return {
        "hosts": list(config.hosts),
        "pipeline": config.pipeline,
        "maxRequests": config.max_requests,
        "timeoutMillis": config.timeout_millis,
        "strictTraceId": config.strict_trace_id,
        "searchEnabled": config.search_enabled,
        "namesLookbackMillis": config.names_lookback_millis,
        "index": formatter.prefix,
        "dateSeparator": formatter.date_separator,
        "indexShards": config.index_shards,
        "indexReplicas": config.index_replicas,
        "httpLogging": config.http_logging.value,
        "username": config.basic_auth.username if config.basic_auth else None,
        "password": "******" if config.basic_auth else None,
        "interceptors": [repr(i) for i in config.network_interceptors],
    }


def main(argv: Sequence[str] | None = None) -> int:
    """Resolve configuration and report it. Returns the process exit code."""
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        config = resolve_storage_config(load_raw_config(args))
    except ConfigError as e:
        logger.error(str(e))
        return 1

    if config is None:
        logger.info("Storage type is not elasticsearch; no Elasticsearch client configured")
        return 0

    print(json.dumps(describe(config), indent=2))

    if "--check" in args:
        with ElasticsearchStorage(config) as storage:
            result = storage.check()
        if not result.ok:
            logger.error(f"Elasticsearch is not healthy: {result.error}")
            return 2
        logger.info(f"Elasticsearch cluster status: {result.status}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
