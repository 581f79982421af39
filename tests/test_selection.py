"""Tests for the keyboard selection state."""

from app.client.selection import SelectionState
from app.schemas import Suggestion


def make_state(*terms):
    state = SelectionState()
    state.reset([Suggestion(term=t) for t in terms])
    return state


def test_move_down_clamps_at_last():
    state = make_state("javascript", "java")
    seen = [state.index]
    for _ in range(3):
        state.move_down()
        seen.append(state.index)
    assert seen == [-1, 0, 1, 1]


def test_move_down_with_no_suggestions():
    state = make_state()
    state.move_down()
    assert state.index == -1


def test_move_up_stops_at_none_selected():
    state = make_state("a", "b")
    state.move_down()
    state.move_up()
    assert state.index == -1
    state.move_up()
    assert state.index == -1


def test_cancel_keeps_suggestions():
    state = make_state("a", "b")
    state.move_down()
    state.cancel()
    assert state.index == -1
    assert len(state.suggestions) == 2


def test_choose_selected_term():
    state = make_state("javascript", "java")
    state.move_down()
    state.move_down()
    assert state.choose("ja") == "java"


def test_choose_free_text_preserves_case():
    state = make_state("golang")
    assert state.choose("  Go  ") == "Go"


def test_choose_nothing():
    state = make_state("a")
    assert state.choose("   ") is None
    assert state.choose("") is None


def test_select_ignores_out_of_range():
    state = make_state("a")
    state.select(4)
    assert state.index == -1
    state.select(0)
    assert state.selected.term == "a"
