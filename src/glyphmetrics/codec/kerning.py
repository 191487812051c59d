"""Range compression of sparse kerning tables.

Both axes of the table are collapsed independently:

* right axis: consecutive right characters (in canonical order) sharing an
  adjustment become ``{"s-u": -20}``;
* left axis: consecutive left characters whose compressed rows are identical
  become ``{"A-C": {...}}``.

Because the alphabet contains the hyphen, a key is only read as a range when
it holds exactly one separator, both sides are single characters, and both
sides belong to the character set. The compressor never places the hyphen at
either end of a range so that every key it writes parses back unambiguously.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
import logging
from typing import TypeVar

from glyphmetrics.charset import CHARACTER_SET, RANGE_SEPARATOR, CharacterSet
from glyphmetrics.core.exceptions import InvalidRangeKey, UnsupportedCharacterError
from glyphmetrics.models import KerningTable, prune_kerning_table


logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_range_key(key: str, order: CharacterSet = CHARACTER_SET) -> tuple[str, str] | None:
    """Return the ``(start, end)`` characters of a range key, or ``None`` for literals."""
    if key.count(RANGE_SEPARATOR) != 1:
        return None
    start, _, end = key.partition(RANGE_SEPARATOR)
    if len(start) != 1 or len(end) != 1:
        return None
    if start not in order or end not in order:
        return None
    if order.index_of(start) > order.index_of(end):
        raise InvalidRangeKey(
            f"Range key {key!r} runs backwards: {start!r} comes after {end!r} in the "
            "character set."
        )
    return start, end


def _expand_key(key: str, order: CharacterSet) -> tuple[str, ...]:
    bounds = parse_range_key(key, order)
    if bounds is None:
        return (key,)
    return order.characters_between(*bounds)


def _ordered_keys(keys: Iterable[str], order: CharacterSet) -> tuple[list[str], list[str]]:
    present = set(keys)
    canonical = [char for char in order if char in present]
    literals = sorted(key for key in present if key not in order)
    return canonical, literals


def _runs(
    chars: list[str], order: CharacterSet, signature: Callable[[str], T]
) -> list[list[str]]:
    """Group canonical characters into maximal runs of adjacent, equal signatures."""
    runs: list[list[str]] = []
    previous_index = -2
    previous_signature: object = None
    for char in chars:
        index = order.index_of(char)
        current = signature(char)
        if runs and index == previous_index + 1 and current == previous_signature:
            runs[-1].append(char)
        else:
            runs.append([char])
        previous_index = index
        previous_signature = current
    return runs


def _run_keys(run: list[str]) -> list[tuple[str, str]]:
    """Return ``(key, representative)`` pairs for one run, hyphen kept literal."""
    head: list[str] = []
    tail: list[str] = []
    chars = list(run)
    while chars and chars[0] == RANGE_SEPARATOR:
        head.append(chars.pop(0))
    while chars and chars[-1] == RANGE_SEPARATOR:
        tail.insert(0, chars.pop())

    if len(chars) >= 2:
        middle = [(f"{chars[0]}{RANGE_SEPARATOR}{chars[-1]}", chars[0])]
    else:
        middle = [(char, char) for char in chars]
    return [(char, char) for char in head] + middle + [(char, char) for char in tail]


def _check_literal(key: str, order: CharacterSet) -> None:
    try:
        ambiguous = parse_range_key(key, order) is not None
    except InvalidRangeKey:
        ambiguous = True
    if ambiguous:
        raise UnsupportedCharacterError(
            f"Kerning key {key!r} is not in the character set and would be read back "
            "as a character range."
        )


def _compress_row(row: Mapping[str, float], order: CharacterSet) -> dict[str, float]:
    canonical, literals = _ordered_keys(row, order)
    compressed: dict[str, float] = {}
    for run in _runs(canonical, order, lambda char: row[char]):
        for key, representative in _run_keys(run):
            compressed[key] = row[representative]
    for key in literals:
        _check_literal(key, order)
        compressed[key] = row[key]
    return compressed


def compress_kerning(
    table: Mapping[str, Mapping[str, float]], order: CharacterSet = CHARACTER_SET
) -> dict[str, dict[str, float]]:
    """Collapse a kerning table into range keys on both axes.

    Zero adjustments are dropped and rows left empty are omitted.
    """
    pruned = prune_kerning_table(table)
    rows = {left: _compress_row(row, order) for left, row in pruned.items()}
    canonical, literals = _ordered_keys(rows, order)

    compressed: dict[str, dict[str, float]] = {}
    for run in _runs(canonical, order, lambda char: tuple(rows[char].items())):
        for key, representative in _run_keys(run):
            compressed[key] = dict(rows[representative])
    for key in literals:
        _check_literal(key, order)
        compressed[key] = dict(rows[key])

    logger.debug(
        "Compressed kerning table from %d rows to %d keys.", len(pruned), len(compressed)
    )
    return compressed


def _expand_axis(entries: Mapping[str, T], order: CharacterSet) -> dict[str, T]:
    expanded: dict[str, T] = {}
    # Later entries override earlier ones.
    for key, value in entries.items():
        for char in _expand_key(key, order):
            expanded[char] = value
    return expanded


def _canonical_dict(entries: dict[str, T], order: CharacterSet) -> dict[str, T]:
    canonical, literals = _ordered_keys(entries, order)
    return {key: entries[key] for key in [*canonical, *literals]}


def decompress_kerning(
    compressed: Mapping[str, Mapping[str, float]], order: CharacterSet = CHARACTER_SET
) -> KerningTable:
    """Expand range keys back into a per-character kerning table."""
    left_expanded = _expand_axis(compressed, order)
    table: KerningTable = {}
    for left, row in left_expanded.items():
        table[left] = _canonical_dict(_expand_axis(row, order), order)
    return _canonical_dict(table, order)


__all__ = ["compress_kerning", "decompress_kerning", "parse_range_key"]
