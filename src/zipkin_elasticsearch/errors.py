"""Errors raised while resolving storage configuration."""

from __future__ import annotations

from collections.abc import Mapping


class ConfigError(ValueError):
    """Invalid or missing configuration. Fatal at startup.

    ``problems`` maps each failing property key to a message, so a single
    error can report everything wrong with the input at once.
    """

    def __init__(self, problems: Mapping[str, str]) -> None:
        self.problems: dict[str, str] = dict(problems)
        lines = [f"{key}: {message}" for key, message in self.problems.items()]
        super().__init__("Invalid storage configuration:\n  " + "\n  ".join(lines))

    @classmethod
    def for_field(cls, key: str, message: str) -> ConfigError:
        """Error with a single problem for one property key."""
        return cls({key: message})


class NotFoundError(LookupError):
    """No component of the requested kind was registered."""
