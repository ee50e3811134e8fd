"""
constraints.py

Letter-state model and the resolver that reconciles it with the pattern.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

from engine.pattern import pinned_letters
from engine.vocab import ALPHABET

logger = logging.getLogger(__name__)


class LetterState(str, Enum):
    NEUTRAL = "neutral"
    EXCLUDED = "excluded"
    INCLUDED = "included"


# "normal" is what the keyboard legend calls the neutral state
_STATE_ALIASES = {"normal": LetterState.NEUTRAL}

_CYCLE = {
    LetterState.NEUTRAL: LetterState.EXCLUDED,
    LetterState.EXCLUDED: LetterState.INCLUDED,
    LetterState.INCLUDED: LetterState.NEUTRAL,
}


def as_state(value: LetterState | str) -> LetterState:
    """Coerce a LetterState or its string value; ValueError on anything else."""
    if isinstance(value, LetterState):
        return value
    if not isinstance(value, str):
        raise TypeError(f"letter state must be LetterState or str, got {type(value).__name__}")
    key = value.strip().lower()
    if key in _STATE_ALIASES:
        return _STATE_ALIASES[key]
    return LetterState(key)


def next_state(state: LetterState | str) -> LetterState:
    """Tap cycle: neutral -> excluded -> included -> neutral."""
    return _CYCLE[as_state(state)]


def normalize_letters(raw: str | Iterable[str] | None) -> frozenset[str]:
    """Lowercase and keep only a-z; accepts 'abc' as well as ['a', 'B', 'c']."""
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        chars = raw
    else:
        chars = "".join(str(x) for x in raw)
    return frozenset(ch.lower() for ch in chars if ch.isascii() and ch.lower() in ALPHABET)


@dataclass(frozen=True)
class ResolvedConstraints:
    """Effective letter sets after precedence with the pattern. Never overlap."""

    excluded: frozenset[str] = frozenset()
    included: frozenset[str] = frozenset()

    def is_empty(self) -> bool:
        return not self.excluded and not self.included


def resolve_constraints(
    pattern: str,
    toggled: Mapping[str, LetterState | str] | None = None,
) -> ResolvedConstraints:
    """
    Combine the pattern with independently toggled letter states.

    - excluded: letters toggled EXCLUDED that the pattern does not pin
    - included: letters toggled INCLUDED, plus every pinned letter

    Pinning always wins over a toggle. Keys outside a-z and unrecognised
    state values are ignored (read as NEUTRAL), so this never fails.
    """
    pinned = pinned_letters(pattern)
    excluded = set()
    included = set(pinned)

    for key, value in (toggled or {}).items():
        try:
            state = as_state(value)
        except (TypeError, ValueError):
            logger.debug("ignoring unknown state %r for %r", value, key)
            continue
        letter = str(key).strip()
        if len(letter) != 1 or not letter.isascii() or letter.lower() not in ALPHABET:
            continue
        letter = letter.lower()
        if state is LetterState.EXCLUDED and letter not in pinned:
            excluded.add(letter)
        elif state is LetterState.INCLUDED:
            included.add(letter)

    return ResolvedConstraints(excluded=frozenset(excluded), included=frozenset(included))
