# services/backspace.py
"""
Deletion rules for the typing buffer.

The buffer has no free cursor: deletion always acts at the end of the input,
so word boundaries are found by scanning the whole input from the start.
Each rule returns the new input length, or ``None`` when the request must be
ignored (no mutation, no counters touched).
"""
from typing import Iterator, Optional


def word_start(typed: str) -> int:
    """Index where the current word begins: just past the last whitespace run, or 0.

    A trailing whitespace run means the current word is empty and starts at
    ``len(typed)``.
    """
    start = 0
    for i, ch in enumerate(typed):
        if ch.isspace():
            start = i + 1
    return start


def incorrect_positions(typed: str, target: str) -> Iterator[int]:
    """Indices of the input that currently mismatch the target. Input past the
    end of the target has nothing to match and is always incorrect."""
    for i, ch in enumerate(typed):
        if i >= len(target) or ch != target[i]:
            yield i


def has_errors_before(typed: str, target: str, position: int) -> bool:
    return any(i < position for i in incorrect_positions(typed[:position], target))


def plain_backspace(typed: str, target: str) -> Optional[int]:
    if not typed:
        return None
    new_len = len(typed) - 1
    boundary = word_start(typed)
    if new_len < boundary and not has_errors_before(typed, target, boundary):
        # never step back into a finished word unless something there is wrong
        return None
    return new_len


def word_delete(typed: str, target: str) -> Optional[int]:
    if not typed:
        return None
    boundary = word_start(typed)
    if boundary < len(typed):
        return boundary

    # current word is empty: jump back to the word holding the nearest earlier error
    nearest = None
    for i in incorrect_positions(typed[:boundary], target):
        nearest = i
    if nearest is None:
        return None
    return word_start(typed[:nearest])


def deletion_length(typed: str, target: str, word: bool = False) -> Optional[int]:
    """New buffer length for a backspace (``word=False``) or word-delete request."""
    if word:
        return word_delete(typed, target)
    return plain_backspace(typed, target)
