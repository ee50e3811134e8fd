from __future__ import annotations

import logging
from typing import Iterator, List

import numpy as np
import pandas as pd

WORD_LENGTH = 5
ALPHABET = "abcdefghijklmnopqrstuvwxyz"

logger = logging.getLogger(__name__)


class DictionaryIntegrityError(ValueError):
    """Raised when the word list asset holds entries that are not five lowercase letters."""


def _is_word(w: str) -> bool:
    return len(w) == WORD_LENGTH and w.isascii() and w.isalpha() and w.islower()


class WordVocab:
    """
    Read-only store of five-letter words.

    The words are kept in alphabetical order and mirrored into two numpy views
    used by the matcher:
      - letter_codes: (N, 5) int array, 'a' == 0
      - presence:     (N, 26) bool array, True where the letter occurs in the word
    """

    def __init__(self, words: List[str]) -> None:
        if not isinstance(words, list):
            raise TypeError("`words` must be a list of strings")
        if not all(isinstance(w, str) for w in words):
            raise TypeError("all items in `words` must be str")

        bad = [w for w in words if not _is_word(w)]
        if bad:
            raise DictionaryIntegrityError(
                f"{len(bad)} malformed entries, first: {bad[0]!r} "
                f"(expected {WORD_LENGTH} lowercase letters a-z)"
            )
        # Dedup belongs to from_csv; a direct caller must hand over unique words
        if len(set(words)) != len(words):
            raise DictionaryIntegrityError("duplicate words detected; input to WordVocab must be deduplicated")

        self._words: tuple[str, ...] = tuple(sorted(words))
        self._index = {w: i for i, w in enumerate(self._words)}

        codes = np.array(
            [[ord(c) - 97 for c in w] for w in self._words], dtype=np.int64
        ).reshape(-1, WORD_LENGTH)
        presence = np.zeros((len(self._words), len(ALPHABET)), dtype=bool)
        presence[np.arange(len(self._words))[:, None], codes] = True
        codes.setflags(write=False)
        presence.setflags(write=False)
        self._codes = codes
        self._presence = presence

    # ---------- Construction helpers ----------

    @classmethod
    def from_csv(
        cls,
        path: str,
        column: str = "word",
        *,
        strict: bool = True,
    ) -> "WordVocab":
        """
        Load words from a CSV and build a WordVocab.

        Parameters
        ----------
        path : str
            Path to CSV file.
        column : str
            Column name containing words.
        strict : bool, default=True
            If True, a wrong-length or non-alphabetic entry aborts the load with
            DictionaryIntegrityError. If False, such rows are skipped.

        Entries are stripped and lowercased first. Duplicates are always
        tolerated: the first occurrence is kept.

        Raises
        ------
        FileNotFoundError, KeyError
        DictionaryIntegrityError: malformed rows, or a file pandas cannot parse
        (empty, not UTF-8, broken quoting)
        """
        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8")
        except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
            raise DictionaryIntegrityError(f"{path}: unreadable word list ({e})") from e
        if column not in df.columns:
            raise KeyError(f"column '{column}' not found in {path}")

        clean: List[str] = []
        seen = set()
        skipped = 0
        dupes = 0

        # header is line 1 of the file
        for line_no, val in enumerate(df[column].str.strip().str.lower(), start=2):
            if not _is_word(val):
                if strict:
                    raise DictionaryIntegrityError(
                        f"{path}:{line_no}: malformed entry {val!r} "
                        f"(expected {WORD_LENGTH} letters a-z)"
                    )
                skipped += 1
                logger.debug("skipping %s:%d %r", path, line_no, val)
                continue
            if val in seen:
                dupes += 1
                continue
            seen.add(val)
            clean.append(val)

        if skipped:
            logger.warning("skipped %d malformed entries in %s", skipped, path)
        if dupes:
            logger.debug("dropped %d duplicate entries in %s", dupes, path)
        if not clean:
            logger.warning("word list %s is empty; every query will return no words", path)

        return cls(clean)

    # ---------- Basic protocol ----------

    def __len__(self) -> int:
        """Number of words in the vocabulary."""
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._index

    def words(self) -> List[str]:
        """Return a copy of the word list, alphabetically ordered."""
        return list(self._words)

    def contains(self, word: str) -> bool:
        """Return True iff `word` exists in the vocabulary (case-sensitive)."""
        return word in self._index

    def index_of(self, word: str) -> int:
        """Return the index for `word`; raise KeyError if unknown."""
        try:
            return self._index[word]
        except KeyError:
            raise KeyError(f"unknown word: {word}") from None

    def word_at(self, idx: int) -> str:
        """Return the word at position `idx`; raise IndexError if out of bounds."""
        if idx < 0 or idx >= len(self._words):
            raise IndexError(f"index out of range: {idx}")
        return self._words[idx]

    def to_words(self, indices) -> List[str]:
        """Convert a sequence of indices (list or numpy array) to words."""
        return [self.word_at(int(i)) for i in indices]

    # ---------- Matcher views ----------

    @property
    def letter_codes(self) -> np.ndarray:
        return self._codes

    @property
    def presence(self) -> np.ndarray:
        return self._presence
