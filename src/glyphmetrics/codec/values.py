"""Frequency-ranked pool of the scalar values used by glyph records."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field


DEFAULT_PRECISION = 4


class UnknownValueError(KeyError):
    """Raised when a value was never added to the table."""


def round_value(value: float, precision: int = DEFAULT_PRECISION) -> float:
    return round(value, precision)


@dataclass(frozen=True, slots=True)
class ValueEntry:
    """A distinct rounded value and how many times it occurs."""

    value: float
    count: int


@dataclass(frozen=True, slots=True)
class ValueTable:
    """Distinct values ordered by descending frequency.

    Ties are broken by ascending value so that identical inputs always yield
    identical tables. The most frequent values receive the smallest indices.
    """

    entries: tuple[ValueEntry, ...]
    precision: int = DEFAULT_PRECISION
    _positions: dict[float, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        positions: dict[float, int] = {}
        for index, entry in enumerate(self.entries):
            if entry.value in positions:
                raise ValueError(f"Duplicate value in value table: {entry.value!r}")
            positions[entry.value] = index
        object.__setattr__(self, "_positions", positions)

    @classmethod
    def build(cls, values: Iterable[float], precision: int = DEFAULT_PRECISION) -> ValueTable:
        counts = Counter(round_value(value, precision) for value in values)
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return cls(
            entries=tuple(ValueEntry(value=value, count=count) for value, count in ranked),
            precision=precision,
        )

    @classmethod
    def from_values(cls, values: Sequence[float], precision: int = DEFAULT_PRECISION) -> ValueTable:
        """Rebuild a lookup-only table from a serialised ``v`` field."""
        return cls(
            entries=tuple(ValueEntry(value=value, count=0) for value in values),
            precision=precision,
        )

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def values(self) -> list[float]:
        return [entry.value for entry in self.entries]

    def index(self, value: float) -> int:
        key = round_value(value, self.precision)
        try:
            return self._positions[key]
        except KeyError:
            raise UnknownValueError(f"Value {value!r} is not in the value table") from None

    def value(self, index: int) -> float:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Value index must be an integer, got {index!r}")
        if not 0 <= index < len(self.entries):
            raise IndexError(f"Value index {index} out of range (table has {len(self.entries)})")
        return self.entries[index].value


__all__ = [
    "DEFAULT_PRECISION",
    "UnknownValueError",
    "ValueEntry",
    "ValueTable",
    "round_value",
]
