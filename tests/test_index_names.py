"""Tests for daily index naming."""

import pytest

from zipkin_elasticsearch.errors import ConfigError
from zipkin_elasticsearch.index_names import DAY_MILLIS, IndexNameFormatter

# 2018-03-29T23:59:59.999Z
END_OF_DAY = 1522367999999


def test_defaults_at_epoch():
    assert IndexNameFormatter().format_type_and_timestamp("span", 0) == "zipkin:span-1970-01-01"


def test_custom_prefix():
    formatter = IndexNameFormatter(prefix="zipkin_prod")

    assert formatter.format_type_and_timestamp("span", 0) == "zipkin_prod:span-1970-01-01"


@pytest.mark.parametrize(
    "separator,expected",
    [
        (".", "zipkin:span-1970.01.01"),
        ("", "zipkin:span-19700101"),
        ("/", "zipkin:span-1970/01/01"),
    ],
)
def test_date_separator(separator, expected):
    formatter = IndexNameFormatter(date_separator=separator)

    assert formatter.format_type_and_timestamp("span", 0) == expected


def test_multi_char_separator_fails_at_construction():
    with pytest.raises(ConfigError) as exc_info:
        IndexNameFormatter(date_separator="blagho")

    assert list(exc_info.value.problems) == ["zipkin.storage.elasticsearch.date-separator"]


def test_empty_prefix_fails():
    with pytest.raises(ConfigError) as exc_info:
        IndexNameFormatter(prefix="")

    assert list(exc_info.value.problems) == ["zipkin.storage.elasticsearch.index"]


def test_uses_utc_calendar_day():
    formatter = IndexNameFormatter()

    assert formatter.format_type_and_timestamp("span", END_OF_DAY) == "zipkin:span-2018-03-29"
    assert formatter.format_type_and_timestamp("span", END_OF_DAY + 1) == "zipkin:span-2018-03-30"


def test_before_epoch():
    assert IndexNameFormatter().format_type_and_timestamp("span", -1) == "zipkin:span-1969-12-31"


def test_timestamp_outside_date_range_is_a_value_error():
    with pytest.raises(ValueError, match="timestamp 1000000000000000 is outside"):
        IndexNameFormatter().format_type_and_timestamp("span", 10**15)


def test_format_type_and_pattern():
    formatter = IndexNameFormatter()

    assert formatter.format_type("dependency") == "zipkin:dependency"
    assert formatter.index_pattern("span") == "zipkin:span-*"


def test_format_type_and_range_is_inclusive():
    formatter = IndexNameFormatter(date_separator="")

    indexes = formatter.format_type_and_range("span", END_OF_DAY - DAY_MILLIS, END_OF_DAY + 1)

    assert indexes == ["zipkin:span-20180328", "zipkin:span-20180329", "zipkin:span-20180330"]


def test_format_type_and_range_same_day():
    formatter = IndexNameFormatter()

    assert formatter.format_type_and_range("span", 0, 1000) == ["zipkin:span-1970-01-01"]


def test_format_type_and_range_rejects_inverted_range():
    with pytest.raises(ValueError):
        IndexNameFormatter().format_type_and_range("span", 1000, 0)


def test_formatter_is_immutable():
    formatter = IndexNameFormatter()

    with pytest.raises(AttributeError):
        formatter.prefix = "other"
