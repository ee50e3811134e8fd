"""
pattern.py

Position pattern for the hidden word: up to five slots, each a letter or '?'.
"""

from __future__ import annotations

import re

from engine.vocab import WORD_LENGTH

WILDCARD = "?"

_STRIP_RE = re.compile(r"[^a-z?]")
_NON_ASCII_RE = re.compile(r"[^\x00-\x7f]")


def _ascii_lower(text: str) -> str:
    # non-ASCII goes before lower(): the Kelvin sign lowers to "k"
    return _NON_ASCII_RE.sub("", text).lower()


def normalize_pattern(raw: str) -> str:
    """
    Clean a raw pattern string.

    - lowercases, then drops every character outside [a-z?]
    - keeps at most 5 characters (extra input is discarded, not an error)
    - does NOT pad: a missing trailing slot reads as a wildcard

    Idempotent: normalize_pattern(normalize_pattern(s)) == normalize_pattern(s)
    """
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise TypeError("pattern must be a string")
    return _STRIP_RE.sub("", _ascii_lower(raw))[:WORD_LENGTH]


def pad_pattern(pattern: str) -> str:
    """Return the full 5-slot view, '?' for missing slots."""
    return normalize_pattern(pattern).ljust(WORD_LENGTH, WILDCARD)


def pinned_slots(pattern: str) -> dict[int, str]:
    """{position: letter} for every concrete slot."""
    return {i: ch for i, ch in enumerate(normalize_pattern(pattern)) if ch != WILDCARD}


def pinned_letters(pattern: str) -> frozenset[str]:
    return frozenset(pinned_slots(pattern).values())


def _check_position(position: int) -> int:
    if not isinstance(position, int) or isinstance(position, bool):
        raise TypeError("position must be an int")
    if position < 0 or position >= WORD_LENGTH:
        raise IndexError(f"position out of range: {position}")
    return position


def set_slot(pattern: str, position: int, letter: str) -> str:
    """
    Place `letter` at `position` (0-4), padding earlier slots with '?'.
    Only the last a-z character of `letter` counts; with none, nothing changes.
    """
    _check_position(position)
    typed = re.sub(r"[^a-z]", "", _ascii_lower(letter or ""))[-1:]
    if not typed:
        return normalize_pattern(pattern)
    slots = list(pad_pattern(pattern))
    slots[position] = typed
    return "".join(slots).rstrip(WILDCARD)


def clear_slot(pattern: str, position: int) -> str:
    """
    Revert the slot at `position` to a wildcard.
    Trailing wildcards are dropped, so clearing every slot gives "".
    """
    _check_position(position)
    slots = list(pad_pattern(pattern))
    slots[position] = WILDCARD
    return "".join(slots).rstrip(WILDCARD)
