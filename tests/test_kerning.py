from __future__ import annotations

import pytest

from glyphmetrics.charset import CHARACTER_SET
from glyphmetrics.codec.kerning import compress_kerning, decompress_kerning, parse_range_key
from glyphmetrics.core.exceptions import InvalidRangeKey, UnsupportedCharacterError


def test_empty_table_round_trips_to_empty_object() -> None:
    assert compress_kerning({}) == {}
    assert decompress_kerning({}) == {}


def test_identical_consecutive_rows_collapse_on_both_axes() -> None:
    table = {
        "A": {"s": -20, "t": -20, "u": -20},
        "B": {"s": -20, "t": -20, "u": -20},
        "C": {"s": -20, "t": -20, "u": -20},
        "D": {"v": -15, "w": -15},
        "E": {"v": -15, "w": -15},
        "F": {"v": -15, "w": -15},
        "G": {"a": -25, "b": -25, "c": -25, "d": -25, "e": -25},
    }
    compressed = compress_kerning(table)

    assert compressed == {
        "A-C": {"s-u": -20},
        "D-F": {"v-w": -15},
        "G": {"a-e": -25},
    }
    assert decompress_kerning(compressed) == table


def test_non_adjacent_rows_are_not_merged() -> None:
    table = {"A": {"x": 1}, "C": {"x": 1}}
    assert compress_kerning(table) == {"A": {"x": 1}, "C": {"x": 1}}


def test_right_axis_runs_stop_at_value_changes_and_gaps() -> None:
    table = {"A": {"a": 1, "b": 1, "c": 2, "e": 2}}
    assert compress_kerning(table) == {"A": {"a-b": 1, "c": 2, "e": 2}}


def test_zero_adjustments_are_pruned() -> None:
    assert compress_kerning({"A": {"B": 0}}) == {}
    assert compress_kerning({"A": {"B": 0, "C": 5}, "D": {}}) == {"A": {"C": 5}}


@pytest.mark.parametrize(
    ("start", "end"),
    [("A", "Z"), ("a", "c"), ("0", "9"), (" ", "█"), ("¡", "ÿ"), ("x", "y")],
)
def test_range_of_identical_rows_compresses_to_one_key(start: str, end: str) -> None:
    chars = CHARACTER_SET.characters_between(start, end)
    table = {char: {"A": -1} for char in chars}

    compressed = compress_kerning(table)

    assert compressed == {f"{start}-{end}": {"A": -1}}
    assert decompress_kerning(compressed) == table


def test_range_spanning_the_hyphen_keeps_a_single_separator() -> None:
    table = {",": {"A": 2}, "-": {"A": 2}, ".": {"A": 2}}
    compressed = compress_kerning(table)
    assert compressed == {",-.": {"A": 2}}
    assert decompress_kerning(compressed) == table


@pytest.mark.parametrize(
    ("chars", "expected_keys"),
    [
        (("-", ".", "/"), ["-", ".-/"]),
        (("+", ",", "-"), ["+-,", "-"]),
        ((",", "-"), [",", "-"]),
        (("-",), ["-"]),
    ],
)
def test_hyphen_is_never_a_range_endpoint(chars: tuple[str, ...], expected_keys: list[str]) -> None:
    table = {char: {"A": 3} for char in chars}
    compressed = compress_kerning(table)
    assert list(compressed) == expected_keys
    assert decompress_kerning(compressed) == table

    right_axis = {"A": {char: 3 for char in chars}}
    compressed_right = compress_kerning(right_axis)
    assert list(compressed_right["A"]) == expected_keys
    assert decompress_kerning(compressed_right) == right_axis


@pytest.mark.parametrize(
    "key",
    ["-", "--", "---", "A-", "-A", "ab", "AB-C", "A-BC", "a-Ā", "Ā-a", "A–C"],
)
def test_literal_keys_are_never_read_as_ranges(key: str) -> None:
    assert parse_range_key(key) is None
    assert decompress_kerning({key: {"A": 1}}) == {key: {"A": 1}}
    assert decompress_kerning({"A": {key: 1}}) == {"A": {key: 1}}


def test_hyphen_row_and_column_round_trip() -> None:
    table = {"-": {"-": -1, "T": -2}, "T": {"-": -3}}
    compressed = compress_kerning(table)
    assert decompress_kerning(compressed) == table


def test_every_alphabet_character_round_trips_as_a_literal() -> None:
    for char in CHARACTER_SET:
        table = {char: {char: 1}}
        compressed = compress_kerning(table)
        assert compressed == table
        assert decompress_kerning(compressed) == table


def test_every_adjacent_pair_round_trips() -> None:
    chars = CHARACTER_SET.characters
    for first, second in zip(chars, chars[1:]):
        table = {first: {first: 4, second: 4}, second: {first: 4, second: 4}}
        assert decompress_kerning(compress_kerning(table)) == table


def test_range_keys_resolve_by_canonical_order() -> None:
    assert parse_range_key("A-C") == ("A", "C")
    assert parse_range_key("A-A") == ("A", "A")
    assert decompress_kerning({"y-€": {"A": 1}}) == {
        char: {"A": 1} for char in CHARACTER_SET.characters_between("y", "€")
    }


def test_backwards_range_is_rejected() -> None:
    with pytest.raises(InvalidRangeKey, match="runs backwards"):
        decompress_kerning({"Z-A": {"x": 1}})
    with pytest.raises(InvalidRangeKey):
        decompress_kerning({"A": {"z-a": 1}})


def test_later_entries_override_earlier_ones() -> None:
    expanded = decompress_kerning({"A-C": {"x": 1}, "B": {"x": 2}})
    assert expanded == {"A": {"x": 1}, "B": {"x": 2}, "C": {"x": 1}}


def test_characters_outside_the_alphabet_stay_literal() -> None:
    table = {"Ā": {"A": 1, "ā": 2}, "A": {"Ā": 3}}
    compressed = compress_kerning(table)
    assert compressed == {"A": {"Ā": 3}, "Ā": {"A": 1, "ā": 2}}
    assert decompress_kerning(compressed) == table


def test_literal_keys_shaped_like_ranges_are_refused() -> None:
    with pytest.raises(UnsupportedCharacterError):
        compress_kerning({"A-C": {"x": 1}})
    with pytest.raises(UnsupportedCharacterError):
        compress_kerning({"A": {"Z-A": 1}})


def test_decompressed_rows_are_independent_copies() -> None:
    expanded = decompress_kerning({"A-B": {"x": 1}})
    expanded["A"]["x"] = 9
    assert expanded["B"]["x"] == 1


def test_compression_is_deterministic_regardless_of_insertion_order() -> None:
    table = {"C": {"b": 1, "a": 1}, "A": {"a": 1, "b": 1}, "B": {"b": 1, "a": 1}}
    reordered = dict(reversed(list(table.items())))
    assert list(compress_kerning(table).items()) == list(compress_kerning(reordered).items())
    assert compress_kerning(table) == {"A-C": {"a-b": 1}}
