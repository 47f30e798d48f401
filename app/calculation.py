from typing import List


def compute_wpm(correct_chars: int, seconds: float) -> float:
    """WPM = (correct chars / 5) / minutes; 0 until any time has elapsed."""
    if seconds <= 0:
        return 0.0
    return (correct_chars / 5.0) / (seconds / 60.0)


def ledger_accuracy(total: int, incorrect: int) -> float:
    # an untouched session counts as perfectly accurate
    if total <= 0:
        return 100.0
    return 100.0 * (total - incorrect) / total


def instant_accuracy(correct_chars: int, typed_len: int) -> float:
    """Point-in-time accuracy of the current buffer. Heals after corrections."""
    if typed_len <= 0:
        return 100.0
    return 100.0 * correct_chars / typed_len


def sample_history(history: List[int], seconds: float, wpm: float) -> List[int]:
    """
    Extend ``history`` in place so it holds one sample per whole elapsed second.
    Seconds missed between ticks are filled with the current value; a second
    is never sampled twice.
    """
    whole = int(seconds)
    while len(history) < whole:
        history.append(int(round(wpm)))
    return history
