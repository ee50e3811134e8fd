"""
matcher.py

Filters the dictionary against a pattern and two letter sets.

Predicate for a candidate word w:
  - w[i] == pattern[i] for every concrete slot i ('?' and missing slots match anything)
  - no excluded letter occurs in w
  - every included letter occurs in w at least once
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

import numpy as np

from engine.constraints import LetterState, normalize_letters, resolve_constraints
from engine.pattern import WILDCARD, normalize_pattern, pad_pattern
from engine.vocab import WORD_LENGTH, WordVocab

DEFAULT_CAP = 100


@dataclass(frozen=True)
class MatchResult:
    words: tuple[str, ...] = ()
    total: int = 0

    @property
    def truncated(self) -> bool:
        return self.total > len(self.words)

    def __len__(self) -> int:
        return len(self.words)


def _letter_ids(letters: Iterable[str]) -> np.ndarray:
    return np.array(sorted(ord(c) - 97 for c in letters), dtype=np.int64)


def word_matches(word: str, pattern: str, excluded: Iterable[str] = (), included: Iterable[str] = ()) -> bool:
    """Scalar form of the predicate, for a single word."""
    if len(word) != WORD_LENGTH:
        return False
    for i, ch in enumerate(normalize_pattern(pattern)):
        if ch != WILDCARD and word[i] != ch:
            return False
    if any(c in word for c in normalize_letters(excluded)):
        return False
    return all(c in word for c in normalize_letters(included))


def match(
    pattern: str,
    excluded: str | Iterable[str],
    included: str | Iterable[str],
    vocab: WordVocab,
    cap: int = DEFAULT_CAP,
) -> MatchResult:
    """
    Run one query against `vocab`.

    Returns the first `cap` matching words in alphabetical order, and the
    true number of matches so callers can tell when the list was cut.

    An empty pattern with no letter constraints means nothing has been
    entered yet and returns an empty result. An empty pattern with
    constraints is read as '?????'.
    """
    if not isinstance(cap, int) or isinstance(cap, bool) or cap < 0:
        raise ValueError(f"cap must be a non-negative int, got {cap!r}")

    pattern = normalize_pattern(pattern)
    excluded = normalize_letters(excluded)
    included = normalize_letters(included)

    if not pattern and not excluded and not included:
        return MatchResult()

    codes = vocab.letter_codes
    presence = vocab.presence
    mask = np.ones(len(vocab), dtype=bool)

    for i, ch in enumerate(pad_pattern(pattern)):
        if ch != WILDCARD:
            mask &= codes[:, i] == ord(ch) - 97
    if excluded:
        mask &= ~presence[:, _letter_ids(excluded)].any(axis=1)
    if included:
        mask &= presence[:, _letter_ids(included)].all(axis=1)

    hits = sorted(vocab.to_words(np.flatnonzero(mask)), key=str.casefold)
    return MatchResult(words=tuple(hits[:cap]), total=len(hits))


def query(
    pattern: str,
    toggled: Mapping[str, LetterState | str] | None,
    vocab: WordVocab,
    cap: int = DEFAULT_CAP,
) -> MatchResult:
    """Normalize the pattern, resolve letter states against it, then match."""
    pattern = normalize_pattern(pattern)
    resolved = resolve_constraints(pattern, toggled)
    return match(pattern, resolved.excluded, resolved.included, vocab, cap=cap)
