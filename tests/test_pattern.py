import pytest

from engine.pattern import clear_slot, normalize_pattern, pad_pattern, pinned_letters, pinned_slots, set_slot


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("?o??y", "?o??y"),
        ("?O??Y", "?o??y"),
        ("h o-u!s e", "house"),
        ("housesss", "house"),
        ("12345", ""),
        ("", ""),
        ("?????", "?????"),
        ("ab", "ab"),
    ],
)
def test_normalize_pattern(raw, expected):
    assert normalize_pattern(raw) == expected


def test_normalize_is_idempotent():
    once = normalize_pattern("A?b*c d e f")
    assert normalize_pattern(once) == once
    assert once == "a?bcd"


def test_short_pattern_reads_as_wildcards():
    assert pad_pattern("ab") == "ab???"
    assert pad_pattern("") == "?????"
    assert pinned_slots("?o??y") == {1: "o", 4: "y"}
    assert pinned_letters("r?b?t") == frozenset("rbt")
    assert pinned_letters("???") == frozenset()


def test_set_slot_pads_and_keeps_last_letter():
    assert set_slot("", 2, "N") == "??n"
    assert set_slot("?o??y", 0, "m") == "mo??y"
    assert set_slot("?o??y", 0, "xm") == "mo??y"
    assert set_slot("?o??y", 0, "3") == "?o??y"


def test_clear_slot_returns_to_empty():
    p = set_slot("", 1, "o")
    p = set_slot(p, 4, "y")
    assert p == "?o??y"
    p = clear_slot(p, 4)
    assert p == "?o"
    assert clear_slot(p, 1) == ""


@pytest.mark.parametrize("pos", [-1, 5])
def test_slot_position_bounds(pos):
    with pytest.raises(IndexError):
        set_slot("", pos, "a")
    with pytest.raises(IndexError):
        clear_slot("", pos)


def test_non_latin_input_is_stripped():
    # the ff ligature and the Kelvin sign would casefold into a-z
    assert normalize_pattern("ﬀ???") == "???"
    assert normalize_pattern("Kite") == "ite"
    assert set_slot("", 0, "K") == ""
