# bigram_table.py
# first-order context table: for every word, how often each other word
# directly followed it in the corpus.

from __future__ import annotations
from collections import Counter, defaultdict
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional
import logging

logger = logging.getLogger(__name__)

Word = str


@dataclass(frozen=True)
class Successors:
    """Read-only view of what followed one predecessor word."""
    counts: Mapping[Word, int]
    total: int

    def count(self, word: Word) -> int:
        return self.counts.get(word, 0)


class BigramTable:
    """
    Adjacent-pair counts over an ordered corpus.

    Raw counts only; turning them into probabilities is the job of
    ContextualRanker. The table is built in one go from the whole corpus,
    calling build() again starts from scratch.
    """

    def __init__(self) -> None:
        # prev -> Counter(next)
        self._chain: Dict[Word, Counter] = defaultdict(Counter)
        # prev -> number of pairs it starts
        self._totals: Counter = Counter()

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------
    def build(self, corpus: Iterable[Word]) -> None:
        toks: List[Word] = list(corpus)
        chain: Dict[Word, Counter] = defaultdict(Counter)
        totals: Counter = Counter()

        for a, b in zip(toks, toks[1:]):
            chain[a][b] += 1
            totals[a] += 1

        self._chain = chain
        self._totals = totals
        logger.debug(
            "bigram table built: %d tokens, %d predecessors", len(toks), len(totals)
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def lookup(self, predecessor: Word) -> Optional[Successors]:
        """
        Successor counts for `predecessor`, or None when the word never
        started a pair (including when it only appeared last).
        """
        counter = self._chain.get(predecessor)
        if not counter:
            return None
        return Successors(MappingProxyType(counter), self._totals[predecessor])

    def count(self, predecessor: Word, successor: Word) -> int:
        counter = self._chain.get(predecessor)
        if not counter:
            return 0
        return counter.get(successor, 0)

    # ------------------------------------------------------------------
    # Introspection helpers
    # ------------------------------------------------------------------
    @property
    def pair_count(self) -> int:
        return sum(self._totals.values())

    def __len__(self) -> int:
        return len(self._totals)

    def __contains__(self, predecessor: object) -> bool:
        return predecessor in self._totals
