import logging
import os
from pathlib import Path

from engine.vocab import WordVocab

DEFAULT_WORD_LIST = Path(__file__).resolve().parent / "data" / "word_list.csv"
WORD_LIST_ENV = "WORDLE_WORD_LIST"

logger = logging.getLogger(__name__)


def resolve_word_list_path(csv_path: str | os.PathLike | None = None) -> Path:
    """Explicit path first, then $WORDLE_WORD_LIST, then the packaged list."""
    if csv_path:
        return Path(csv_path)
    env_path = os.environ.get(WORD_LIST_ENV)
    if env_path:
        return Path(env_path)
    return DEFAULT_WORD_LIST


def load_dictionary(csv_path: str | os.PathLike | None = None, *, strict: bool = True) -> WordVocab:
    """
    Load the five-letter dictionary once at startup.
    Malformed entries raise DictionaryIntegrityError (fatal for callers).
    """
    path = resolve_word_list_path(csv_path)
    vocab = WordVocab.from_csv(str(path), column="word", strict=strict)
    logger.info("loaded %d words from %s", len(vocab), path)
    return vocab
