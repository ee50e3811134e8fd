"""
solver/finder_cli.py

Terminal word finder.
- One-shot: pass --pattern / --exclude / --include and get the matching words.
- Interactive: edit the pattern and the letter keyboard step by step; the word
  list is recomputed after every change.

Pattern: letters for known positions, ? for unknown ones (e.g. ?o??y).
Excluded letters: gray letters from your attempts.
Included letters: yellow letters (in the word, position unknown).

Run:
  python -m solver.finder_cli --pattern '?o??y'
  python -m solver.finder_cli --exclude diuston --include a
  python -m solver.finder_cli            # interactive

Shortcuts:
  quit / q / exit  -> exit
"""
from __future__ import annotations

import argparse
import logging
import shlex
import sys
from typing import List, Optional

from engine.board import LetterBoard
from engine.constraints import LetterState
from engine.data_utils import DEFAULT_WORD_LIST, WORD_LIST_ENV, load_dictionary
from engine.feedback import parse_feedback
from engine.matcher import DEFAULT_CAP, MatchResult
from engine.vocab import ALPHABET, DictionaryIntegrityError, WordVocab

logger = logging.getLogger("solver.finder_cli")

QWERTY_ROWS = ["qwertyuiop", "asdfghjkl", "zxcvbnm"]

HELP = """\
Commands:
  pattern <p>              set the whole pattern, e.g. pattern ?o??y ('pattern' alone clears it)
  set <1-5> <letter>       pin a letter at a position
  clear <1-5>              unpin a position
  tap <letters>            cycle letters: neutral -> excluded -> included -> neutral
  exclude <letters>        mark letters as not in the word (gray)
  include <letters>        mark letters as in the word, position unknown (yellow)
  neutral <letters>        forget what you marked for these letters
  guess <word> <feedback>  apply a Wordle result, e.g. guess crane bygbb
  show                     print the current state and results
  reset                    clear everything
  help                     this text
  quit / q / exit          leave"""


def _position(arg: str) -> int:
    try:
        pos = int(arg)
    except ValueError as e:
        raise ValueError(f"position must be 1-5, got {arg!r}") from e
    if pos < 1 or pos > 5:
        raise ValueError(f"position must be 1-5, got {pos}")
    return pos - 1


def render_result(result: MatchResult, has_evidence: bool = True) -> str:
    lines = []
    if result.truncated:
        lines.append(f"Possible words ({len(result)} of {result.total})")
        lines.append(f"Showing first {len(result)} results. Refine your search for fewer matches.")
    else:
        lines.append(f"Possible words ({len(result)})")
    if not has_evidence:
        lines.append("Enter a word pattern to see possible matches")
    elif not result.words:
        lines.append("No words found matching your criteria")
    else:
        words = [w.upper() for w in result.words]
        for i in range(0, len(words), 10):
            lines.append("  " + " ".join(words[i : i + 10]))
    return "\n".join(lines)


def render_board(board: LetterBoard) -> str:
    marks = {LetterState.NEUTRAL: " ", LetterState.EXCLUDED: "-", LetterState.INCLUDED: "+"}
    slots = " ".join(ch.upper() for ch in board.pattern.ljust(5, "?"))
    lines = [f"Pattern: {slots}"]
    for indent, row in enumerate(QWERTY_ROWS):
        keys = []
        for ch in row:
            mark = "*" if board.is_pinned(ch) else marks[board.state_of(ch)]
            keys.append(f"{ch.upper()}{mark}")
        lines.append("  " + " " * indent + " ".join(keys))
    lines.append(f"Excluded ({board.excluded_count})  Included ({board.included_count})")
    return "\n".join(lines)


def apply_command(board: LetterBoard, line: str) -> Optional[str]:
    """
    Apply one interactive command to `board`.
    Returns 'quit', 'help', 'show', or None (board changed / nothing to do).
    Raises ValueError on malformed commands.
    """
    parts = shlex.split(line.strip())
    if not parts:
        return "show"
    cmd, args = parts[0].lower(), parts[1:]

    if cmd in {"q", "quit", "exit"}:
        return "quit"
    if cmd in {"help", "?"}:
        return "help"
    if cmd == "show":
        return "show"
    if cmd == "reset":
        board.clear()
        return None
    if cmd == "pattern":
        board.set_pattern("".join(args))
        return None
    if cmd == "set":
        if len(args) != 2:
            raise ValueError("usage: set <1-5> <letter>")
        if not any(ch.isascii() and ch.lower() in ALPHABET for ch in args[1]):
            raise ValueError(f"not a letter: {args[1]!r}")
        board.set_slot(_position(args[0]), args[1])
        return None
    if cmd == "clear":
        if len(args) != 1:
            raise ValueError("usage: clear <1-5>")
        board.clear_slot(_position(args[0]))
        return None
    if cmd in {"tap", "exclude", "include", "neutral"}:
        letters = "".join(ch for ch in "".join(args) if ch.isascii()).lower()
        if not letters:
            raise ValueError(f"usage: {cmd} <letters>")
        if cmd == "tap":
            for ch in letters:
                if ch in ALPHABET:
                    board.cycle(ch)
        elif cmd == "exclude":
            board.exclude(letters)
        elif cmd == "include":
            board.include(letters)
        else:
            board.set_state(letters, LetterState.NEUTRAL)
        return None
    if cmd == "guess":
        if len(args) < 2:
            raise ValueError("usage: guess <word> <feedback>")
        board.apply_feedback(args[0], parse_feedback(" ".join(args[1:])))
        return None
    raise ValueError(f"unknown command {cmd!r} (type 'help')")


def run_interactive(vocab: WordVocab, cap: int = DEFAULT_CAP) -> None:
    board = LetterBoard()
    print(f"\nWord finder: {len(vocab)} words loaded. Type 'help' for commands, 'quit' to exit.\n")

    while True:
        try:
            line = input("> ")
        except EOFError:
            print("bye!")
            return
        try:
            action = apply_command(board, line)
        except ValueError as e:
            print("Invalid command:", e)
            continue

        if action == "quit":
            print("bye!")
            return
        if action == "help":
            print(HELP)
            continue

        print(render_board(board))
        print(render_result(board.query(vocab, cap=cap), board.has_evidence()))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Find five-letter words matching a pattern and letter hints")
    ap.add_argument(
        "--csv",
        default=None,
        help=f"Path to the word list CSV (default: ${WORD_LIST_ENV} or {DEFAULT_WORD_LIST.name})",
    )
    ap.add_argument("--cap", type=int, default=DEFAULT_CAP, help="Maximum number of words to print")
    ap.add_argument("--pattern", default=None, help="Pattern such as ?o??y (one-shot mode)")
    ap.add_argument("--exclude", default="", help="Letters not in the word (one-shot mode)")
    ap.add_argument("--include", default="", help="Letters in the word, position unknown (one-shot mode)")
    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.cap < 0:
        print("--cap must be >= 0", file=sys.stderr)
        return 2

    try:
        vocab = load_dictionary(args.csv)
    except (FileNotFoundError, KeyError, DictionaryIntegrityError) as e:
        logger.error("cannot load word list: %s", e)
        print(f"Cannot load word list: {e}", file=sys.stderr)
        return 1

    if args.pattern is not None or args.exclude or args.include:
        board = LetterBoard(args.pattern or "")
        board.exclude(args.exclude)
        board.include(args.include)
        print(render_result(board.query(vocab, cap=args.cap), board.has_evidence()))
        return 0

    run_interactive(vocab, cap=args.cap)
    return 0


if __name__ == "__main__":
    sys.exit(main())
