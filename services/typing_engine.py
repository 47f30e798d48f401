# services/typing_engine.py
from dataclasses import dataclass, field
from typing import List

CORRECT = "correct"
INCORRECT = "incorrect"
PENDING = "pending"
EXTRA = "extra"


@dataclass
class DiffState:
    error_positions: List[int] = field(default_factory=list)
    current_streak: int = 0
    best_streak: int = 0
    correct_count: int = 0
    incorrect_count: int = 0
    extra_count: int = 0
    total_words: int = 0
    correct_words: int = 0


def compute_diff(typed: str, target: str, previous_best: int = 0) -> DiffState:
    """
    Compare ``typed`` against ``target`` position by position (code points).
    Input beyond the end of the target counts towards ``incorrect_count`` and
    ``extra_count`` but never towards ``error_positions``.
    ``previous_best`` carries the session best streak across recomputes.
    """
    state = DiffState()
    streak = 0
    best = 0
    for i, (ch, expected) in enumerate(zip(typed, target)):
        if ch == expected:
            state.correct_count += 1
            streak += 1
            best = max(best, streak)
        else:
            state.error_positions.append(i)
            state.incorrect_count += 1
            streak = 0

    overflow = len(typed) - len(target)
    if overflow > 0:
        state.extra_count = overflow
        state.incorrect_count += overflow

    state.current_streak = streak
    state.best_streak = max(previous_best, best)

    typed_words = typed.split()
    target_words = target.split()
    state.total_words = len(typed_words)
    state.correct_words = sum(1 for a, b in zip(typed_words, target_words) if a == b)
    return state


def char_states(typed: str, target: str) -> List[str]:
    """Per-index correctness for rendering: one entry per target code point,
    followed by one ``EXTRA`` entry per overtyped code point."""
    out = []
    for i, expected in enumerate(target):
        if i >= len(typed):
            out.append(PENDING)
        elif typed[i] == expected:
            out.append(CORRECT)
        else:
            out.append(INCORRECT)
    out.extend(EXTRA for _ in range(len(typed) - len(target)))
    return out


class TypingEngine:
    """Input buffer for one passage. The diff is rebuilt after every mutation;
    insertion and deletion only ever act at the end of the buffer."""

    def __init__(self, target_text: str = ""):
        self.set_text(target_text)

    def set_text(self, text: str):
        self.target = text or ""
        self.reset()

    def reset(self):
        self.typed = ""
        self.diff = DiffState()

    def append(self, ch: str):
        self.typed += ch
        self._recompute()

    def truncate(self, length: int):
        self.typed = self.typed[:max(0, length)]
        self._recompute()

    def char_states(self) -> List[str]:
        return char_states(self.typed, self.target)

    def _recompute(self):
        self.diff = compute_diff(self.typed, self.target, previous_best=self.diff.best_streak)
