"""Canonical character alphabet shared by the minifier and the expander."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


ASCII_PRINTABLE = range(32, 127)
# Subset of the CP-1252 0x80-0x9F block, stored as their Unicode code points.
CP1252_PRINTABLE = (
    8364,  # € euro sign
    8230,  # … horizontal ellipsis
    8240,  # ‰ per mille sign
    8249,  # ‹ single left-pointing angle quotation mark
    381,  # Ž
    8217,  # ’ right single quotation mark
    8226,  # • bullet
    8212,  # em dash
    8482,  # ™ trade mark sign
    353,  # š
    8250,  # › single right-pointing angle quotation mark
    339,  # œ
    382,  # ž
    376,  # Ÿ
)
LATIN1_SUPPLEMENT = range(161, 256)
SOFT_HYPHEN = 0x00AD
FULL_BLOCK = "█"
RANGE_SEPARATOR = "-"


def generate() -> tuple[str, ...]:
    """Return the canonical characters sorted by code point."""
    codes: set[int] = set(ASCII_PRINTABLE)
    codes.update(CP1252_PRINTABLE)
    codes.update(code for code in LATIN1_SUPPLEMENT if code != SOFT_HYPHEN)
    codes.add(ord(FULL_BLOCK))
    return tuple(chr(code) for code in sorted(codes))


@dataclass(frozen=True, slots=True)
class CharacterSet:
    """Ordered, duplicate-free alphabet with O(1) position lookups."""

    characters: tuple[str, ...]
    _positions: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        positions: dict[str, int] = {}
        for index, char in enumerate(self.characters):
            if len(char) != 1:
                raise ValueError(f"Character set entries must be single characters: {char!r}")
            if char in positions:
                raise ValueError(f"Duplicate character in character set: {char!r}")
            positions[char] = index
        object.__setattr__(self, "_positions", positions)

    @classmethod
    def from_characters(cls, characters: Iterable[str]) -> CharacterSet:
        """Build a set from arbitrary characters, sorted by code point."""
        return cls(tuple(sorted(set(characters), key=ord)))

    def __len__(self) -> int:
        return len(self.characters)

    def __iter__(self) -> Iterator[str]:
        return iter(self.characters)

    def __contains__(self, char: object) -> bool:
        return char in self._positions

    def index_of(self, char: str) -> int:
        """Return the canonical position of ``char``; raises ``KeyError`` if absent."""
        try:
            return self._positions[char]
        except KeyError:
            raise KeyError(f"Character {char!r} is not part of the character set") from None

    def at(self, index: int) -> str:
        if index < 0:
            raise IndexError(index)
        return self.characters[index]

    def characters_between(self, start: str, end: str) -> tuple[str, ...]:
        """Return every character from ``start`` to ``end`` inclusive."""
        return self.characters[self.index_of(start) : self.index_of(end) + 1]

    def as_string(self) -> str:
        return "".join(self.characters)


CHARACTER_SET = CharacterSet(generate())


__all__ = [
    "CHARACTER_SET",
    "FULL_BLOCK",
    "RANGE_SEPARATOR",
    "CharacterSet",
    "generate",
]
