"""Tests for the component registry."""

import pytest

from zipkin_elasticsearch.components import Components
from zipkin_elasticsearch.errors import NotFoundError


class Widget:
    pass


class Gadget(Widget):
    pass


def test_get_returns_first_match_by_type():
    components = Components()
    first = components.register(Gadget())
    components.register(Gadget())

    assert components.get(Widget) is first
    assert components.get(Gadget) is first


def test_get_missing_raises_not_found():
    components = Components()
    components.register(Widget())

    with pytest.raises(NotFoundError, match="Gadget"):
        components.get(Gadget)
    assert components.find(Gadget) is None


def test_qualifier_filters_lookups():
    components = Components()
    plain = components.register(Widget())
    tagged = components.register(Widget(), qualifier="tag")

    assert components.get(Widget, qualifier="tag") is tagged
    assert components.get_all(Widget) == [plain, tagged]
    with pytest.raises(NotFoundError, match="'other'"):
        components.get(Widget, qualifier="other")


def test_duplicates_are_kept():
    components = Components()
    widget = Widget()
    components.register(widget, qualifier="tag")
    components.register(widget, qualifier="tag")

    assert components.get_all(qualifier="tag") == [widget, widget]
    assert len(components) == 2
