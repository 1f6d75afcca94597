"""Minimal component registry populated during startup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from zipkin_elasticsearch.errors import NotFoundError

T = TypeVar("T")


@dataclass(frozen=True)
class _Registration:
    component: Any
    qualifier: str | None


class Components:
    """Ordered registry of components, optionally tagged with a qualifier.

    Lookups match by type; an absent component is reported by
    NotFoundError, never by a placeholder.
    """

    def __init__(self) -> None:
        self._registrations: list[_Registration] = []

    def register(self, component: T, qualifier: str | None = None) -> T:
        self._registrations.append(_Registration(component, qualifier))
        return component

    def get_all(self, kind: type = object, qualifier: str | None = None) -> list[Any]:
        return [
            r.component
            for r in self._registrations
            if isinstance(r.component, kind) and (qualifier is None or r.qualifier == qualifier)
        ]

    def find(self, kind: type[T], qualifier: str | None = None) -> T | None:
        matches = self.get_all(kind, qualifier)
        return matches[0] if matches else None

    def get(self, kind: type[T], qualifier: str | None = None) -> T:
        component = self.find(kind, qualifier)
        if component is None:
            where = f" qualified {qualifier!r}" if qualifier else ""
            raise NotFoundError(f"No {kind.__name__} component{where} is registered")
        return component

    def __len__(self) -> int:
        return len(self._registrations)
