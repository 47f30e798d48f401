# services/corpus.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence
import random

from app.errors import EmptyCorpus


@dataclass(frozen=True)
class Passage:
    content: str
    attribution: str = ""
    category: str = ""


class TextCorpus:
    """
    Ordered, read-only collection of passages.
    Passages with an empty category are "uncategorized": they are left out of
    ``categories`` but can still be picked when no category filter is active.
    """

    def __init__(self, passages: Sequence[Passage]):
        self._passages: List[Passage] = list(passages)
        self.categories: List[str] = sorted({p.category for p in self._passages if p.category})

    def __len__(self) -> int:
        return len(self._passages)

    def __getitem__(self, index: int) -> Passage:
        return self._passages[index]

    def indices_for(self, category: Optional[str]) -> List[int]:
        if category is None:
            return list(range(len(self._passages)))
        return [i for i, p in enumerate(self._passages) if p.category == category]

    def pick(self, category: Optional[str], rng: random.Random) -> int:
        """Index of a passage chosen uniformly from the category pool.

        An unknown category falls back to the first passage.
        """
        if not self._passages:
            raise EmptyCorpus("no passages loaded")
        pool = self.indices_for(category)
        if not pool:
            return 0
        return pool[rng.randrange(len(pool))]

    def cycle_category(self, current: Optional[str], step: int) -> Optional[str]:
        """Step through ``None -> categories[0] -> ... -> categories[-1] -> None``.

        ``step`` is +1 (right) or -1 (left); ``None`` stands for "Random".
        """
        if not self.categories:
            return None
        ring: List[Optional[str]] = [None] + list(self.categories)
        try:
            pos = ring.index(current)
        except ValueError:
            pos = 0
        return ring[(pos + step) % len(ring)]
