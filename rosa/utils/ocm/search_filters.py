from collections.abc import Iterable
from enum import Enum
from typing import (
    Any,
    Optional,
)


class InvalidFilterError(Exception):
    pass


class FilterMode(Enum):
    AND = "and"
    OR = "or"


def _quote(value: str) -> str:
    escaped = value.replace("'", "''")
    return f"'{escaped}'"


class Filter:
    """
    A search expression for the OCM API. Filters are immutable: every
    condition returns a new Filter. Conditions on the same key are merged
    into a single IN condition.

    Filters are combined with & and |. A filter of the other mode with more
    than one condition becomes a parenthesized group of the result.
    """

    def __init__(self, mode: FilterMode = FilterMode.AND) -> None:
        self.mode = mode
        self.values: dict[str, list[str]] = {}
        self.groups: list[Filter] = []

    def _copy(self) -> "Filter":
        copied = Filter(self.mode)
        copied.values = {key: list(values) for key, values in self.values.items()}
        copied.groups = list(self.groups)
        return copied

    def eq(self, key: str, value: str | None) -> "Filter":
        """
        Requires the key to equal the value. A None value adds no condition.
        """
        return self.is_in(key, [value] if value else None)

    def is_in(self, key: str, values: Iterable[Any] | None) -> "Filter":
        """
        Requires the key to equal one of the values. None or an empty
        iterable adds no condition.
        """
        if not values:
            return self
        copied = self._copy()
        merged = set(copied.values.get(key, [])) | {str(v) for v in values}
        copied.values[key] = sorted(merged)
        return copied

    def _parts(self, mode: FilterMode) -> tuple[dict[str, list[str]], list["Filter"]]:
        if self.mode == mode or len(self) <= 1:
            return self.values, self.groups
        return {}, [self]

    def _combine(self, other: Optional["Filter"], mode: FilterMode) -> "Filter":
        if not other:
            return self
        combined = Filter(mode)
        groups: list[Filter] = []
        for f in (self, other):
            values, f_groups = f._parts(mode)
            for key, key_values in values.items():
                combined = combined.is_in(key, key_values)
            groups.extend(f_groups)
        combined.groups = groups
        return combined

    def render(self) -> str:
        terms = [f"({group.render()})" for group in self.groups]
        for key in sorted(self.values):
            values = self.values[key]
            if len(values) == 1:
                terms.append(f"{key}={_quote(values[0])}")
            else:
                terms.append(f"{key} in ({','.join(_quote(v) for v in values)})")
        if not terms:
            raise InvalidFilterError("no conditions within filter object")
        return f" {self.mode.value} ".join(terms)

    def __and__(self, other: Optional["Filter"]) -> "Filter":
        return self._combine(other, FilterMode.AND)

    def __or__(self, other: Optional["Filter"]) -> "Filter":
        return self._combine(other, FilterMode.OR)

    def __len__(self) -> int:
        return len(self.values) + len(self.groups)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Filter):
            return False
        return self.render() == other.render()
