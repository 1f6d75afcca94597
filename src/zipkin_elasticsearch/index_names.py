"""Daily index naming, e.g. ``zipkin:span-2018-03-29``."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from zipkin_elasticsearch.config import DATE_SEPARATOR_KEY, INDEX_KEY
from zipkin_elasticsearch.errors import ConfigError

DAY_MILLIS = 86_400_000
_EPOCH = date(1970, 1, 1)


def check_prefix(prefix: str) -> str:
    """Reject an empty index prefix."""
    if not prefix:
        raise ConfigError.for_field(INDEX_KEY, "index prefix must not be empty")
    return prefix


def check_date_separator(date_separator: str) -> str:
    """Allow only an empty or single character separator."""
    if len(date_separator) > 1:
        raise ConfigError.for_field(
            DATE_SEPARATOR_KEY,
            f"must be empty or a single character, got {date_separator!r}",
        )
    return date_separator


@dataclass(frozen=True)
class IndexNameFormatter:
    """Builds ``<prefix>:<type>-<date>`` index names from UTC timestamps.

    The separator between year, month and day is a single character or empty.
    Longer separators are rejected here, when the formatter is built, so a bad
    setting fails startup instead of the first write.
    """

    prefix: str = "zipkin"
    date_separator: str = "-"

    def __post_init__(self) -> None:
        check_prefix(self.prefix)
        check_date_separator(self.date_separator)

    def format_type(self, type_: str) -> str:
        """Index name without the date suffix, e.g. ``zipkin:span``."""
        return f"{self.prefix}:{type_}"

    def index_pattern(self, type_: str) -> str:
        """Wildcard covering every daily index of a type."""
        return f"{self.format_type(type_)}-*"

    def format_date(self, epoch_millis: int) -> str:
        """UTC day of an epoch-millis timestamp, joined by the date separator."""
        try:
            day = _EPOCH + timedelta(days=epoch_millis // DAY_MILLIS)
        except OverflowError:
            raise ValueError(f"timestamp {epoch_millis} is outside the supported date range") from None
        sep = self.date_separator
        return f"{day.year:04d}{sep}{day.month:02d}{sep}{day.day:02d}"

    def format_type_and_timestamp(self, type_: str, epoch_millis: int) -> str:
        return f"{self.format_type(type_)}-{self.format_date(epoch_millis)}"

    def format_type_and_range(self, type_: str, begin_millis: int, end_millis: int) -> list[str]:
        """Index names for every UTC day between begin and end, inclusive."""
        if begin_millis > end_millis:
            raise ValueError(f"begin ({begin_millis}) must not be after end ({end_millis})")
        first_day = begin_millis // DAY_MILLIS
        last_day = end_millis // DAY_MILLIS
        return [
            self.format_type_and_timestamp(type_, day * DAY_MILLIS)
            for day in range(first_day, last_day + 1)
        ]
