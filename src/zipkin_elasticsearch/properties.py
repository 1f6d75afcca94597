"""Typed views of the raw property mapping, validated with pydantic.

Every validation problem is collected by pydantic and surfaced as one
ConfigError keyed by property name.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    PositiveInt,
    ValidationError,
    field_validator,
)
from pydantic_core import PydanticCustomError

from zipkin_elasticsearch.config import (
    DATE_SEPARATOR_KEY,
    ELASTICSEARCH_STORAGE_TYPE,
    HOSTS_KEY,
    HTTP_LOGGING_KEY,
    INDEX_KEY,
    INDEX_REPLICAS_KEY,
    INDEX_SHARDS_KEY,
    MAX_REQUESTS_KEY,
    NAMES_LOOKBACK_KEY,
    PASSWORD_KEY,
    PIPELINE_KEY,
    QUERY_LOOKBACK_KEY,
    SEARCH_ENABLED_KEY,
    STORAGE_TYPE_KEY,
    STRICT_TRACE_ID_KEY,
    TIMEOUT_KEY,
    USERNAME_KEY,
)
from zipkin_elasticsearch.errors import ConfigError
from zipkin_elasticsearch.hosts import DEFAULT_HOSTS, parse_hosts
from zipkin_elasticsearch.index_names import check_date_separator, check_prefix
from zipkin_elasticsearch.interceptors import HttpLoggingLevel

P = TypeVar("P", bound="_Properties")


def _delegate(check: Callable[[Any], Any], value: Any) -> Any:
    """Run a component check, reporting its ConfigError as a pydantic error."""
    try:
        return check(value)
    except ConfigError as e:
        raise PydanticCustomError(
            "invalid_config", "{reason}", {"reason": "; ".join(e.problems.values())}
        ) from None


def _problems(model: type[BaseModel], error: ValidationError) -> dict[str, str]:
    problems: dict[str, str] = {}
    for detail in error.errors():
        loc = str(detail["loc"][0]) if detail["loc"] else ""
        field = model.model_fields.get(loc)
        if field is not None and isinstance(field.validation_alias, str):
            loc = field.validation_alias
        problems.setdefault(loc, detail["msg"])
    return problems


class _Properties(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    @classmethod
    def from_raw(cls: type[P], raw: Mapping[str, Any]) -> P:
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as e:
            raise ConfigError(_problems(cls, e)) from None


class StorageTypeProperties(_Properties):
    storage_type: str = Field("mem", validation_alias=STORAGE_TYPE_KEY)

    @property
    def is_elasticsearch(self) -> bool:
        return self.storage_type.strip().lower() == ELASTICSEARCH_STORAGE_TYPE


class ElasticsearchProperties(_Properties):
    """Settings consumed when the storage type is elasticsearch."""

    hosts: tuple[str, ...] = Field(DEFAULT_HOSTS, validation_alias=HOSTS_KEY)
    pipeline: str | None = Field(None, validation_alias=PIPELINE_KEY)
    max_requests: PositiveInt = Field(64, validation_alias=MAX_REQUESTS_KEY)
    timeout: PositiveInt = Field(10_000, validation_alias=TIMEOUT_KEY)
    username: str | None = Field(None, validation_alias=USERNAME_KEY)
    password: str | None = Field(None, validation_alias=PASSWORD_KEY, repr=False)

    index: str = Field("zipkin", validation_alias=INDEX_KEY)
    date_separator: str = Field("-", validation_alias=DATE_SEPARATOR_KEY)
    index_shards: PositiveInt = Field(5, validation_alias=INDEX_SHARDS_KEY)
    index_replicas: NonNegativeInt = Field(1, validation_alias=INDEX_REPLICAS_KEY)

    http_logging: HttpLoggingLevel = Field(HttpLoggingLevel.NONE, validation_alias=HTTP_LOGGING_KEY)
    names_lookback: PositiveInt | None = Field(None, validation_alias=NAMES_LOOKBACK_KEY)

    strict_trace_id: bool = Field(True, validation_alias=STRICT_TRACE_ID_KEY)
    search_enabled: bool = Field(True, validation_alias=SEARCH_ENABLED_KEY)
    query_lookback: PositiveInt | None = Field(None, validation_alias=QUERY_LOOKBACK_KEY)

    @field_validator("hosts", mode="before")
    @classmethod
    def _parse_hosts(cls, value: Any) -> Any:
        if value is None:
            return DEFAULT_HOSTS
        if not isinstance(value, (str, list, tuple)):
            value = str(value)
        return tuple(_delegate(parse_hosts, value))

    @field_validator(
        "max_requests",
        "timeout",
        "index_shards",
        "index_replicas",
        "names_lookback",
        "query_lookback",
        mode="before",
    )
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        # pydantic's lax mode reads True as 1
        if isinstance(value, bool):
            raise PydanticCustomError("invalid_config", "{reason}", {"reason": "expected an integer, got a boolean"})
        return value

    @field_validator("pipeline", "username", "password", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("index")
    @classmethod
    def _check_index(cls, value: str) -> str:
        return _delegate(check_prefix, value)

    @field_validator("date_separator")
    @classmethod
    def _check_date_separator(cls, value: str) -> str:
        return _delegate(check_date_separator, value)

    @field_validator("http_logging", mode="before")
    @classmethod
    def _upper_logging_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value
