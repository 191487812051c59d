"""Deduplicated glyph records expressed as value-table indices."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from glyphmetrics.codec.values import ValueTable


TUPLET_SIZE = 5

Tuplet = tuple[int, int, int, int, int]


def to_tuplet(record: Sequence[float], value_table: ValueTable) -> Tuplet:
    """Map five scalars to their value-table indices."""
    if len(record) != TUPLET_SIZE:
        raise ValueError(f"Glyph records hold {TUPLET_SIZE} values, got {len(record)}")
    return tuple(value_table.index(value) for value in record)  # type: ignore[return-value]


@dataclass(frozen=True, slots=True)
class TupletTable:
    """Distinct tuplets ordered by descending usage.

    Ties are broken by ascending index tuple, mirroring the value table, so
    the most shared glyph shapes get the lowest indices.
    """

    tuplets: tuple[Tuplet, ...]
    counts: tuple[int, ...] = ()
    _positions: dict[Tuplet, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        positions: dict[Tuplet, int] = {}
        for index, tuplet in enumerate(self.tuplets):
            if len(tuplet) != TUPLET_SIZE:
                raise ValueError(f"Tuplet {tuplet!r} does not hold {TUPLET_SIZE} indices")
            if tuplet in positions:
                raise ValueError(f"Duplicate tuplet in tuplet table: {tuplet!r}")
            positions[tuplet] = index
        object.__setattr__(self, "_positions", positions)

    @classmethod
    def build(
        cls, records: Iterable[Sequence[float]], value_table: ValueTable
    ) -> TupletTable:
        usage = Counter(to_tuplet(record, value_table) for record in records)
        ranked = sorted(usage.items(), key=lambda item: (-item[1], item[0]))
        return cls(
            tuplets=tuple(tuplet for tuplet, _ in ranked),
            counts=tuple(count for _, count in ranked),
        )

    @classmethod
    def from_tuplets(cls, tuplets: Iterable[Sequence[int]]) -> TupletTable:
        """Rebuild a lookup-only table from a serialised ``t`` field."""
        return cls(tuplets=tuple(tuple(tuplet) for tuplet in tuplets))  # type: ignore[misc]

    def __len__(self) -> int:
        return len(self.tuplets)

    def index_of(self, tuplet: Sequence[int]) -> int:
        try:
            return self._positions[tuple(tuplet)]  # type: ignore[index]
        except KeyError:
            raise KeyError(f"Tuplet {tuple(tuplet)!r} is not in the tuplet table") from None

    def tuplet(self, index: int) -> Tuplet:
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Tuplet index must be an integer, got {index!r}")
        if not 0 <= index < len(self.tuplets):
            raise IndexError(
                f"Tuplet index {index} out of range (table has {len(self.tuplets)})"
            )
        return self.tuplets[index]

    def to_lists(self) -> list[list[int]]:
        return [list(tuplet) for tuplet in self.tuplets]


__all__ = ["TUPLET_SIZE", "Tuplet", "TupletTable", "to_tuplet"]
