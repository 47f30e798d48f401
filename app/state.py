from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple
import time

from app.calculation import compute_wpm, ledger_accuracy, sample_history
from core.chrono import Stopwatch
from services.typing_engine import DiffState


class State(Enum):
    MAIN_MENU = "main_menu"
    TYPING = "typing"
    END_SCREEN = "end_screen"


@dataclass
class KeystrokeLedger:
    """Forward keystrokes only. Deletions and later corrections never touch it."""
    total_keystrokes: int = 0
    incorrect_keystrokes: int = 0

    def record(self, correct: bool):
        self.total_keystrokes += 1
        if not correct:
            self.incorrect_keystrokes += 1

    def accuracy(self) -> float:
        return ledger_accuracy(self.total_keystrokes, self.incorrect_keystrokes)


class SessionStats:
    """WPM, accuracy and elapsed time for one pass over a passage."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.stopwatch = Stopwatch(clock)
        self.ledger = KeystrokeLedger()
        self.wpm_history: List[int] = []

    def reset(self):
        self.stopwatch.reset()
        self.ledger = KeystrokeLedger()
        self.wpm_history = []

    def note_keystroke(self, ch: str, expected: Optional[str]) -> bool:
        """Record ``ch`` against the passage character it lands on.
        ``expected`` is None when the keystroke lands past the end of the passage."""
        self.stopwatch.start()
        correct = expected is not None and ch == expected
        self.ledger.record(correct)
        return correct

    def elapsed(self) -> float:
        return self.stopwatch.seconds()

    def wpm(self, diff: DiffState) -> float:
        return compute_wpm(diff.correct_count, self.elapsed())

    def accuracy(self) -> float:
        return self.ledger.accuracy()

    def tick(self, diff: DiffState) -> List[int]:
        return sample_history(self.wpm_history, self.elapsed(), self.wpm(diff))


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view handed to the renderer."""
    state: State
    input: str = ""
    passage: str = ""
    attribution: str = ""
    category: Optional[str] = None
    selected_category: Optional[str] = None
    categories: Tuple[str, ...] = ()
    char_states: Tuple[str, ...] = ()
    wpm: float = 0.0
    accuracy: float = 100.0
    instant_accuracy: float = 100.0
    elapsed: float = 0.0
    progress: float = 0.0
    streak: int = 0
    best_streak: int = 0
    mistakes: int = 0
    correct_words: int = 0
    total_words: int = 0
    wpm_history: Tuple[int, ...] = field(default_factory=tuple)
