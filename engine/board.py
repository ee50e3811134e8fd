"""
board.py

State a front-end keeps between queries: the pattern and the letters the
user toggled on the keyboard. Toggles and pattern are stored separately and
reconciled on every read, so pinning a letter never destroys its toggle and
unpinning brings it back.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from engine import pattern as patterns
from engine.constraints import (
    LetterState,
    ResolvedConstraints,
    as_state,
    next_state,
    normalize_letters,
    resolve_constraints,
)
from engine.feedback import feedback_constraints
from engine.matcher import DEFAULT_CAP, MatchResult, match
from engine.vocab import WordVocab

logger = logging.getLogger(__name__)


class LetterBoard:
    def __init__(self, pattern: str = "", toggled: Optional[Dict[str, LetterState]] = None) -> None:
        self._pattern = patterns.normalize_pattern(pattern)
        self._toggled: Dict[str, LetterState] = {}
        for letter, state in (toggled or {}).items():
            self.set_state(letter, state)

    # -------------------------
    # Pattern edits
    # -------------------------
    @property
    def pattern(self) -> str:
        return self._pattern

    def set_pattern(self, raw: str) -> str:
        self._pattern = patterns.normalize_pattern(raw)
        return self._pattern

    def set_slot(self, position: int, letter: str) -> str:
        self._pattern = patterns.set_slot(self._pattern, position, letter)
        return self._pattern

    def clear_slot(self, position: int) -> str:
        self._pattern = patterns.clear_slot(self._pattern, position)
        return self._pattern

    def is_pinned(self, letter: str) -> bool:
        return letter.lower() in patterns.pinned_letters(self._pattern)

    # -------------------------
    # Letter toggles
    # -------------------------
    @property
    def toggled(self) -> Dict[str, LetterState]:
        """Independent toggles only (no pattern precedence applied)."""
        return dict(self._toggled)

    def set_state(self, letter: str, state: LetterState | str) -> None:
        state = as_state(state)
        for ch in normalize_letters(letter):
            if state is LetterState.NEUTRAL:
                self._toggled.pop(ch, None)
            else:
                self._toggled[ch] = state

    def cycle(self, letter: str) -> LetterState:
        """
        Advance a letter one step through neutral -> excluded -> included.
        Pinned letters are locked: the tap is ignored.
        """
        letters = normalize_letters(letter)
        if len(letters) != 1:
            raise ValueError(f"cycle takes a single letter a-z, got {letter!r}")
        (ch,) = letters
        if self.is_pinned(ch):
            logger.debug("ignoring tap on pinned letter %r", ch)
            return LetterState.INCLUDED
        new = next_state(self._toggled.get(ch, LetterState.NEUTRAL))
        self.set_state(ch, new)
        return new

    def exclude(self, letters: str | Iterable[str]) -> None:
        for ch in normalize_letters(letters):
            self.set_state(ch, LetterState.EXCLUDED)

    def include(self, letters: str | Iterable[str]) -> None:
        for ch in normalize_letters(letters):
            self.set_state(ch, LetterState.INCLUDED)

    def state_of(self, letter: str) -> LetterState:
        """Effective state: pinned letters read INCLUDED regardless of toggles."""
        ch = letter.lower()
        if self.is_pinned(ch):
            return LetterState.INCLUDED
        return self._toggled.get(ch, LetterState.NEUTRAL)

    # -------------------------
    # Derived views
    # -------------------------
    def resolved(self) -> ResolvedConstraints:
        return resolve_constraints(self._pattern, self._toggled)

    @property
    def excluded_count(self) -> int:
        return len(self.resolved().excluded)

    @property
    def included_count(self) -> int:
        return len(self.resolved().included)

    def has_evidence(self) -> bool:
        return bool(self._pattern) or not self.resolved().is_empty()

    def apply_feedback(self, guess: str, feedback: list[int]) -> None:
        """Fold one scored guess into the board (see feedback_constraints)."""
        slots, included, excluded = feedback_constraints(guess, feedback)
        for pos, ch in slots.items():
            self.set_slot(pos, ch)
        self.include(included - set(slots.values()))
        for ch in excluded:
            # a yellow from an earlier guess outranks a later gray duplicate
            if self._toggled.get(ch) is not LetterState.INCLUDED:
                self.set_state(ch, LetterState.EXCLUDED)

    def clear(self) -> None:
        self._pattern = ""
        self._toggled.clear()

    def query(self, vocab: WordVocab, cap: int = DEFAULT_CAP) -> MatchResult:
        resolved = self.resolved()
        return match(self._pattern, resolved.excluded, resolved.included, vocab, cap=cap)
