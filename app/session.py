# app/session.py
"""
Typing-session state machine.

One input command is processed to completion (transition, diff recompute,
stats update, completion check) before the next is accepted. The host loop
owns the single ``TypingSession`` and reads it through ``snapshot()``.
"""
from __future__ import annotations
import logging
import random
import time
from typing import Callable, List, Optional

from app.state import SessionSnapshot, SessionStats, State
from app.validation import validate_text
from app.calculation import instant_accuracy
from core.keys import Command, KeyCommand
from services.backspace import deletion_length
from services.corpus import Passage, TextCorpus
from services.typing_engine import TypingEngine

log = logging.getLogger(__name__)


class TypingSession:
    def __init__(
        self,
        corpus: TextCorpus,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.corpus = corpus
        self.rng = rng or random.Random()
        self.state = State.MAIN_MENU
        self.selected_category: Optional[str] = None
        self.passage_index: Optional[int] = None
        self.engine = TypingEngine("")
        self.stats = SessionStats(clock)
        self.should_exit = False

    # ---------------- Queries ----------------
    @property
    def active_passage(self) -> Optional[Passage]:
        if self.passage_index is None:
            return None
        return self.corpus[self.passage_index]

    @property
    def input(self) -> str:
        return self.engine.typed

    @property
    def diff(self):
        return self.engine.diff

    @property
    def is_finished(self) -> bool:
        passage = self.active_passage
        if passage is None:
            return False
        return self.engine.typed.strip() == passage.content.strip()

    @property
    def progress(self) -> float:
        """Typed code points as a percentage of the passage; may exceed 100."""
        if not self.engine.typed or not self.engine.target:
            return 0.0
        return len(self.engine.typed) / len(self.engine.target) * 100.0

    def wpm(self) -> float:
        return self.stats.wpm(self.engine.diff)

    def accuracy(self) -> float:
        return self.stats.accuracy()

    def instant_accuracy(self) -> float:
        return instant_accuracy(self.engine.diff.correct_count, len(self.engine.typed))

    def elapsed(self) -> float:
        return self.stats.elapsed()

    def can_backspace(self) -> bool:
        return self._deletion_target(word=False) is not None

    def can_word_delete(self) -> bool:
        return self._deletion_target(word=True) is not None

    def snapshot(self) -> SessionSnapshot:
        passage = self.active_passage
        diff = self.engine.diff
        return SessionSnapshot(
            state=self.state,
            input=self.engine.typed,
            passage=passage.content if passage else "",
            attribution=passage.attribution if passage else "",
            category=passage.category if passage else None,
            selected_category=self.selected_category,
            categories=tuple(self.corpus.categories),
            char_states=tuple(self.engine.char_states()),
            wpm=self.wpm(),
            accuracy=self.accuracy(),
            instant_accuracy=self.instant_accuracy(),
            elapsed=self.elapsed(),
            progress=self.progress,
            streak=diff.current_streak,
            best_streak=diff.best_streak,
            mistakes=self.stats.ledger.incorrect_keystrokes,
            correct_words=diff.correct_words,
            total_words=diff.total_words,
            wpm_history=tuple(self.stats.wpm_history),
        )

    # ---------------- Dispatch ----------------
    def dispatch(self, cmd: Optional[KeyCommand]):
        """Route one classified key event according to the current state."""
        if cmd is None:
            return
        if self.state is State.MAIN_MENU:
            self._on_menu(cmd)
        elif self.state is State.TYPING:
            self._on_typing(cmd)
        else:
            self._on_end_screen(cmd)

    def _on_menu(self, cmd: KeyCommand):
        if cmd.kind is Command.CONFIRM:
            self.start()
        elif cmd.kind is Command.CATEGORY_LEFT:
            self.cycle_category(-1)
        elif cmd.kind is Command.CATEGORY_RIGHT:
            self.cycle_category(1)
        elif cmd.kind is Command.CANCEL:
            log.info("Exit requested from main menu")
            self.should_exit = True

    def _on_typing(self, cmd: KeyCommand):
        if cmd.kind is Command.CHARACTER:
            if cmd.modified:
                return
            self.type_char(cmd.char)
        elif cmd.kind is Command.BACKSPACE:
            self.backspace()
        elif cmd.kind is Command.WORD_DELETE:
            self.backspace(word=True)
        elif cmd.kind is Command.CANCEL:
            self.to_menu()

    def _on_end_screen(self, cmd: KeyCommand):
        if cmd.kind is Command.CONFIRM:
            self.start()
        elif cmd.kind is Command.CANCEL:
            self.to_menu()

    # ---------------- Transitions ----------------
    def start(self):
        """Enter Typing with a fresh buffer and a newly drawn passage.
        The clock stays idle until the first character."""
        index = self.corpus.pick(self.selected_category, self.rng)
        self.passage_index = index
        self.engine.set_text(self.corpus[index].content)
        self.stats.reset()
        self.state = State.TYPING
        log.info("Typing started: passage #%d (category=%s)", index, self.selected_category or "random")

    def to_menu(self):
        self.state = State.MAIN_MENU
        self.passage_index = None
        self.engine.set_text("")
        self.stats.reset()
        log.info("Returned to main menu")

    def cycle_category(self, step: int):
        self.selected_category = self.corpus.cycle_category(self.selected_category, step)
        log.debug("Category -> %s", self.selected_category or "random")

    def _finish(self):
        self.stats.stopwatch.stop()
        # record the whole seconds since the last host tick
        self.stats.tick(self.engine.diff)
        self.state = State.END_SCREEN
        log.info(
            "Passage finished in %.1fs: %.1f WPM, %.1f%% accuracy",
            self.elapsed(), self.wpm(), self.accuracy(),
        )

    def _check_finished(self):
        if self.state is State.TYPING and self.is_finished:
            self._finish()

    # ---------------- Editing ----------------
    def type_char(self, ch):
        """Append one character at the end of the buffer.

        Raises InvalidText (buffer unchanged) for malformed text.
        """
        if self.state is not State.TYPING:
            return
        ch = validate_text(ch)
        if len(ch) != 1:
            self.type_text(ch)
            return
        pos = len(self.engine.typed)
        target = self.engine.target
        expected = target[pos] if pos < len(target) else None
        correct = self.stats.note_keystroke(ch, expected)
        self.engine.append(ch)
        log.debug("key %r at %d -> %s", ch, pos, "ok" if correct else "miss")
        self._check_finished()

    def type_text(self, text):
        """Feed ``text`` one keystroke at a time. Validation happens up front,
        so malformed text leaves the buffer untouched."""
        text = validate_text(text)
        for ch in text:
            if self.state is not State.TYPING:
                break
            self.type_char(ch)

    def backspace(self, word: bool = False) -> bool:
        """Apply a deletion request. Returns False when the policy refuses it."""
        if self.state is not State.TYPING:
            return False
        new_len = self._deletion_target(word)
        if new_len is None:
            return False
        self.engine.truncate(new_len)
        self._check_finished()
        return True

    def _deletion_target(self, word: bool) -> Optional[int]:
        if self.state is not State.TYPING:
            return None
        return deletion_length(self.engine.typed, self.engine.target, word=word)

    # ---------------- Host loop ----------------
    def tick(self) -> List[int]:
        """Called periodically by the host; samples the WPM history."""
        if self.state is State.TYPING:
            self.stats.tick(self.engine.diff)
        return self.stats.wpm_history
