"""
Feedback utilities.

Turns one Wordle guess and the colours the game showed for it into
evidence the finder understands: pinned slots, included letters, and
excluded letters.
"""

from __future__ import annotations

import re

from engine.vocab import WORD_LENGTH

GRAY, YELLOW, GREEN = 0, 1, 2

_FEEDBACK_CODES = {"g": GREEN, "y": YELLOW, "b": GRAY, "2": GREEN, "1": YELLOW, "0": GRAY}


def parse_feedback(s: str) -> list[int]:
    """
    Read the colours the game showed for a guess.

    "gyybb" (green/yellow/black), "21100", and "[2, 1, 1, 0, 0]" all give
    [2, 1, 1, 0, 0]. Anything that does not spell exactly five colours is a
    ValueError.
    """
    text = s.strip().lower()
    bracketed = text.startswith("[") and text.endswith("]")
    if bracketed:
        text = re.sub(r"[\[\],\s]", "", text)
    codes = [_FEEDBACK_CODES.get(ch) for ch in text]
    if None in codes or (bracketed and not text.isdigit()):
        raise ValueError(f"unrecognised colour in {s!r}; use g/y/b or 2/1/0")
    if len(codes) != WORD_LENGTH:
        raise ValueError(f"expected {WORD_LENGTH} colours, got {len(codes)} in {s!r}")
    return codes


def feedback_constraints(guess: str, feedback: list[int]) -> tuple[dict[int, str], set[str], set[str]]:
    """
    Translate a scored guess into (slots, included, excluded).

    - green  -> slot i is pinned to guess[i]
    - yellow -> the letter is present somewhere
    - gray   -> the letter is absent, unless the same letter was green or
                yellow elsewhere in this guess (a gray duplicate only caps
                the count, which the finder does not model)

    Validation
    ----------
    - guess: lowercase alphabetic, length 5 (else ValueError)
    - feedback: length 5, values in {0, 1, 2} (else ValueError)
    """
    if not isinstance(guess, str):
        raise TypeError("guess must be a string")
    guess = guess.strip().lower()
    if len(guess) != WORD_LENGTH or not guess.isascii() or not guess.isalpha():
        raise ValueError("guess must be a 5-letter alphabetic word")
    if not isinstance(feedback, (list, tuple)) or len(feedback) != WORD_LENGTH:
        raise ValueError("feedback must have length 5")
    if any(p not in (GRAY, YELLOW, GREEN) for p in feedback):
        raise ValueError("feedback elements must be in {0,1,2}")

    slots: dict[int, str] = {}
    included: set[str] = set()
    for i, (ch, p) in enumerate(zip(guess, feedback)):
        if p == GREEN:
            slots[i] = ch
            included.add(ch)
        elif p == YELLOW:
            included.add(ch)

    excluded = {ch for ch, p in zip(guess, feedback) if p == GRAY and ch not in included}
    return slots, included, excluded
