"""List filters, serialized as Docker's ``{"key": ["value", ...]}`` JSON."""

from dataclasses import dataclass, field
from typing import Mapping, Optional


@dataclass(frozen=True)
class Filters:
    """Immutable set of list filters."""

    entries: tuple[tuple[str, tuple[str, ...]], ...] = field(default=())

    def as_dict(self) -> dict[str, list[str]]:
        """Return the mapping sent in the ``filters`` query parameter."""
        return {key: list(values) for key, values in self.entries}

    def __bool__(self) -> bool:
        return bool(self.entries)

    @classmethod
    def builder(cls) -> "FiltersBuilder":
        return FiltersBuilder()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, list[str]]) -> "Filters":
        return cls(tuple((key, tuple(values)) for key, values in mapping.items()))


class FiltersBuilder:
    """Fluent builder for :class:`Filters`. Every setter adds a value."""

    def __init__(self) -> None:
        self._filters: dict[str, list[str]] = {}

    def add(self, key: str, value: str) -> "FiltersBuilder":
        values = self._filters.setdefault(key, [])
        if value not in values:
            values.append(value)
        return self

    def label(self, key: str, value: Optional[str] = None) -> "FiltersBuilder":
        """Match a label key, or an exact ``key=value`` pair."""
        return self.add("label", key if value is None else f"{key}={value}")

    def status(self, status: str) -> "FiltersBuilder":
        return self.add("status", status)

    def name(self, name: str) -> "FiltersBuilder":
        return self.add("name", name)

    def build(self) -> Filters:
        return Filters.from_mapping(self._filters)
