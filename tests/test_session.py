import random

import pytest

from app.errors import EmptyCorpus, InvalidText
from app.session import TypingSession
from app.state import State
from core.keys import Command, KeyCommand
from services.corpus import TextCorpus

CONFIRM = KeyCommand(Command.CONFIRM)
CANCEL = KeyCommand(Command.CANCEL)
BACKSPACE = KeyCommand(Command.BACKSPACE)
WORD_DELETE = KeyCommand(Command.WORD_DELETE)


def char(c, modified=False):
    return KeyCommand(Command.CHARACTER, char=c, modified=modified)


class TestTransitions:
    def test_starts_in_main_menu(self, make_session):
        session = make_session("hello")
        assert session.state is State.MAIN_MENU
        assert session.active_passage is None
        assert session.input == ""

    def test_confirm_starts_typing_with_idle_clock(self, make_session, clock):
        session = make_session("hello")
        session.dispatch(CONFIRM)
        assert session.state is State.TYPING
        assert session.active_passage.content == "hello"
        clock.advance(10)
        assert session.elapsed() == 0.0

    def test_cancel_in_menu_requests_exit(self, make_session):
        session = make_session("hello")
        session.dispatch(CANCEL)
        assert session.should_exit

    def test_cancel_while_typing_returns_to_menu(self, typing_session):
        session = typing_session("hello")
        session.type_text("he")
        session.dispatch(CANCEL)
        assert session.state is State.MAIN_MENU
        assert session.input == ""
        assert not session.should_exit
        assert session.stats.ledger.total_keystrokes == 0

    def test_category_selection_filters_passages(self, categorized_corpus, clock):
        session = TypingSession(categorized_corpus, rng=random.Random(1), clock=clock)
        session.dispatch(KeyCommand(Command.CATEGORY_RIGHT))
        session.dispatch(KeyCommand(Command.CATEGORY_RIGHT))
        assert session.selected_category == "b"
        session.dispatch(CONFIRM)
        assert session.active_passage.category == "b"

    def test_category_keys_ignored_while_typing(self, categorized_corpus, clock):
        session = TypingSession(categorized_corpus, rng=random.Random(1), clock=clock)
        session.start()
        session.dispatch(KeyCommand(Command.CATEGORY_LEFT))
        assert session.selected_category is None
        assert session.state is State.TYPING

    def test_empty_corpus_stays_in_menu(self, clock):
        session = TypingSession(TextCorpus([]), rng=random.Random(0), clock=clock)
        with pytest.raises(EmptyCorpus):
            session.dispatch(CONFIRM)
        assert session.state is State.MAIN_MENU

    def test_end_screen_confirm_starts_fresh(self, typing_session):
        session = typing_session("hi")
        session.type_text("hx")
        session.backspace()
        session.type_text("i")
        assert session.state is State.END_SCREEN
        session.dispatch(CONFIRM)
        assert session.state is State.TYPING
        assert session.input == ""
        assert session.stats.ledger.total_keystrokes == 0
        assert session.stats.wpm_history == []

    def test_end_screen_cancel_returns_to_menu(self, typing_session):
        session = typing_session("hi")
        session.type_text("hi")
        session.dispatch(CANCEL)
        assert session.state is State.MAIN_MENU

    def test_dispatch_none_is_ignored(self, make_session):
        session = make_session("hello")
        session.dispatch(None)
        assert session.state is State.MAIN_MENU


class TestTyping:
    def test_first_character_starts_the_clock(self, typing_session, clock):
        session = typing_session("hello world")
        clock.advance(30)
        session.dispatch(char("h"))
        clock.advance(12)
        assert session.elapsed() == pytest.approx(12.0)

    def test_mistake_then_corrections(self, typing_session):
        session = typing_session("cat")
        session.type_text("cbt")
        assert session.diff.error_positions == [1]
        assert session.diff.correct_count == 2
        for expected in ("cb", "c", ""):
            assert session.backspace()
            assert session.input == expected
        assert not session.backspace()
        assert session.input == ""

    def test_backspace_stops_at_correct_word(self, typing_session):
        session = typing_session("foo bar baz")
        session.type_text("foo bar")
        for _ in range(3):
            session.dispatch(BACKSPACE)
        assert session.input == "foo "
        assert not session.can_backspace()
        session.dispatch(BACKSPACE)
        assert session.input == "foo "

    def test_word_delete(self, typing_session):
        session = typing_session("foo bar baz")
        session.type_text("fxo ba")
        session.dispatch(WORD_DELETE)
        assert session.input == "fxo "
        session.dispatch(WORD_DELETE)
        assert session.input == ""

    def test_word_delete_no_op_is_repeatable(self, typing_session):
        session = typing_session("foo bar baz")
        session.type_text("foo ")
        session.dispatch(WORD_DELETE)
        session.dispatch(WORD_DELETE)
        assert session.input == "foo "
        assert not session.can_word_delete()

    def test_ledger_never_heals(self, typing_session):
        session = typing_session("cat")
        session.type_text("cx")
        assert session.accuracy() == pytest.approx(50.0)
        session.backspace()
        assert session.stats.ledger.total_keystrokes == 2
        session.type_text("a")
        assert session.stats.ledger.total_keystrokes == 3
        assert session.stats.ledger.incorrect_keystrokes == 1
        assert session.accuracy() == pytest.approx(66.666, rel=1e-3)
        assert session.instant_accuracy() == 100.0

    def test_modified_character_is_not_inserted(self, typing_session):
        session = typing_session("abc")
        session.dispatch(char("a", modified=True))
        assert session.input == ""
        assert session.stats.ledger.total_keystrokes == 0

    def test_invalid_text_leaves_buffer_unchanged(self, typing_session):
        session = typing_session("cat")
        session.type_text("c")
        with pytest.raises(InvalidText):
            session.type_char("\ud800")
        with pytest.raises(InvalidText):
            session.type_text(b"a\xff")
        assert session.input == "c"
        assert session.stats.ledger.total_keystrokes == 1

    def test_bytes_are_decoded(self, typing_session):
        session = typing_session("café bar")
        session.type_text("café".encode("utf-8"))
        assert session.input == "café"
        assert session.diff.correct_count == 4

    def test_progress(self, typing_session):
        session = typing_session("hello world")
        assert session.progress == 0.0
        session.type_text("hello")
        assert session.progress == pytest.approx(5 / 11 * 100)

    def test_progress_is_not_clamped(self, typing_session):
        session = typing_session("ab")
        session.type_text("xyz")
        assert session.progress == pytest.approx(150.0)

    def test_wpm(self, typing_session, clock):
        session = typing_session("hello world")
        session.type_text("hello")
        clock.advance(60)
        assert session.wpm() == pytest.approx(1.0)


class TestCompletion:
    @pytest.mark.parametrize("text", ["cat", "hello world", "café", "日本語", "naïve façade déjà vu"])
    def test_full_passage_finishes_at_full_progress(self, typing_session, text):
        session = typing_session(text)
        session.type_text(text)
        assert session.is_finished
        assert session.state is State.END_SCREEN
        assert session.progress == pytest.approx(100.0)

    def test_exact_match_finishes_and_freezes_clock(self, typing_session, clock):
        session = typing_session("hi there")
        session.type_char("h")
        clock.advance(4)
        session.type_text("i there")
        assert session.state is State.END_SCREEN
        clock.advance(100)
        assert session.elapsed() == pytest.approx(4.0)

    def test_surrounding_whitespace_is_ignored(self, typing_session):
        session = typing_session("hi ")
        session.type_text("hi")
        assert session.is_finished
        assert session.state is State.END_SCREEN

    def test_edits_ignored_after_finish(self, typing_session):
        session = typing_session("hi")
        session.type_text("hi")
        session.dispatch(char("x"))
        session.dispatch(BACKSPACE)
        assert session.input == "hi"

    def test_text_after_finish_is_dropped(self, typing_session):
        session = typing_session("hi")
        session.type_text("hi there")
        assert session.input == "hi"


class TestTickAndSnapshot:
    def test_tick_samples_once_per_second(self, typing_session, clock):
        session = typing_session("hello world")
        session.type_text("hello")
        clock.advance(3.5)
        assert len(session.tick()) == 3
        clock.advance(0.2)
        assert len(session.tick()) == 3

    def test_finishing_between_ticks_samples_remaining_seconds(self, typing_session, clock):
        session = typing_session("hello")
        session.type_text("he")
        clock.advance(2.5)
        session.tick()
        clock.advance(0.6)
        session.type_text("llo")
        assert session.state is State.END_SCREEN
        assert len(session.stats.wpm_history) == int(session.elapsed()) == 3
        clock.advance(5)
        assert len(session.tick()) == 3

    def test_tick_is_idle_in_menu(self, make_session, clock):
        session = make_session("hello")
        clock.advance(5)
        assert session.tick() == []

    def test_snapshot(self, typing_session):
        session = typing_session("cat")
        session.type_text("cb")
        snap = session.snapshot()
        assert snap.state is State.TYPING
        assert snap.input == "cb"
        assert snap.passage == "cat"
        assert snap.char_states == ("correct", "incorrect", "pending")
        assert snap.mistakes == 1
        assert snap.streak == 0
        assert snap.best_streak == 1
