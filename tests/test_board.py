import pytest

from engine.board import LetterBoard
from engine.constraints import LetterState
from engine.vocab import WordVocab


@pytest.fixture
def vocab():
    return WordVocab(["robot", "about", "money", "tower", "house", "mousy", "crane", "react"])


def test_unpinning_restores_prior_toggle():
    board = LetterBoard()
    board.cycle("l")
    assert board.state_of("l") is LetterState.EXCLUDED

    board.set_slot(0, "l")
    assert board.state_of("l") is LetterState.INCLUDED
    assert "l" in board.resolved().included
    assert "l" not in board.resolved().excluded

    board.clear_slot(0)
    assert board.state_of("l") is LetterState.EXCLUDED
    assert board.resolved().excluded == frozenset("l")


def test_unpinned_letter_without_toggle_goes_neutral():
    board = LetterBoard("?o??y")
    assert board.state_of("y") is LetterState.INCLUDED
    board.set_pattern("?o")
    assert board.state_of("y") is LetterState.NEUTRAL
    assert board.resolved().included == frozenset("o")


def test_letter_pinned_twice_stays_included_until_last_slot_cleared():
    board = LetterBoard("o?o")
    board.clear_slot(0)
    assert board.state_of("o") is LetterState.INCLUDED
    board.clear_slot(2)
    assert board.state_of("o") is LetterState.NEUTRAL


def test_cycle_ignores_pinned_letters():
    board = LetterBoard("r")
    assert board.cycle("r") is LetterState.INCLUDED
    assert board.toggled == {}
    assert board.cycle("e") is LetterState.EXCLUDED
    assert board.cycle("e") is LetterState.INCLUDED
    assert board.cycle("e") is LetterState.NEUTRAL
    assert board.toggled == {}


def test_cycle_needs_one_letter():
    with pytest.raises(ValueError):
        LetterBoard().cycle("ab")


def test_set_state_while_pinned_applies_after_unpin():
    board = LetterBoard("t")
    board.set_state("t", LetterState.EXCLUDED)
    assert board.state_of("t") is LetterState.INCLUDED
    board.clear_slot(0)
    assert board.state_of("t") is LetterState.EXCLUDED


def test_counts_and_evidence():
    board = LetterBoard()
    assert not board.has_evidence()
    board.exclude("xyz")
    board.include("a")
    assert board.has_evidence()
    assert board.excluded_count == 3
    assert board.included_count == 1
    board.set_pattern("x")
    assert board.excluded_count == 2
    assert board.included_count == 2
    board.clear()
    assert board.pattern == ""
    assert board.toggled == {}


def test_query_follows_board(vocab):
    board = LetterBoard()
    assert board.query(vocab).total == 0
    board.exclude("t")
    assert board.query(vocab).words == ("crane", "house", "money", "mousy")
    board.set_slot(4, "t")
    assert board.query(vocab).words == ("about", "react", "robot")


def test_apply_feedback(vocab):
    board = LetterBoard()
    # target "react" scored against "crane": c yellow, r yellow, a green, n gray, e yellow
    board.apply_feedback("crane", [1, 1, 2, 0, 1])
    assert board.pattern == "??a"
    assert board.state_of("n") is LetterState.EXCLUDED
    assert {ch for ch in "cre" if board.state_of(ch) is LetterState.INCLUDED} == set("cre")
    assert board.query(vocab).words == ("react",)


def test_gray_duplicate_does_not_exclude():
    board = LetterBoard()
    board.apply_feedback("geese", [0, 1, 0, 0, 0])
    assert board.state_of("e") is LetterState.INCLUDED
    assert board.state_of("g") is LetterState.EXCLUDED
    assert board.state_of("s") is LetterState.EXCLUDED
