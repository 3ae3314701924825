# autocompleter.py
"""
CompletionIndex - application facade over the trie, the bigram table and the rankers.

Purpose:
 - Own one Trie and one BigramTable (no globals, several indexes can coexist)
 - Simple public API for CLI/TUI/benchmark/tests:
     insert(word), search(word), build_bigram_table(corpus),
     autocomplete(prefix, k, preceding_word), complete_words(prefix), stats()
 - Pick the ranking strategy per index, overridable per query
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .bigram_table import BigramTable
from .ranking import RankingStrategy, make_ranker
from .trie import Trie
from ..utils.logger_utils import Log

logger = logging.getLogger(__name__)

Suggestion = Tuple[str, float]


class CompletionIndex:
    """In-memory prefix completion index.
    Public API:
      - insert(word) / insert_many(words)
      - search(word) -> bool
      - build_bigram_table(corpus)
      - autocomplete(prefix, k=5, preceding_word=None, strategy=None) -> [(word, probability)]
      - complete_words(prefix) -> [word]
      - stats() -> Dict[str, Any]
    """

    def __init__(self, strategy: str = "contextual"):
        self.trie = Trie()
        self.bigrams = BigramTable()
        self._rankers: Dict[str, RankingStrategy] = {}
        self.strategy = strategy
        # fail fast on a bad default
        self._ranker(strategy)

    @classmethod
    def from_corpus(cls, corpus: Iterable[str], strategy: str = "contextual") -> "CompletionIndex":
        """Insert every corpus word, then build the bigram table from the same sequence."""
        words = list(corpus)
        index = cls(strategy=strategy)
        with Log.time_block("insert corpus", quiet=True) as t:
            index.insert_many(words)
        logger.debug("inserted %d words in %.6fs", len(words), t.elapsed)
        index.build_bigram_table(words)
        return index

    # mutation ---------------------------------------------------------
    def insert(self, word: str) -> None:
        self.trie.insert(word)

    def insert_many(self, words: Iterable[str]) -> None:
        for w in words:
            self.trie.insert(w)

    def build_bigram_table(self, corpus: Iterable[str]) -> None:
        with Log.time_block("build bigram table", quiet=True) as t:
            self.bigrams.build(corpus)
        logger.debug(
            "bigram table: %d predecessors in %.6fs", len(self.bigrams), t.elapsed
        )

    # queries ---------------------------------------------------------
    def search(self, word: str) -> bool:
        return self.trie.search(word)

    def frequency(self, word: str) -> int:
        return self.trie.frequency(word)

    def autocomplete(self,
                     prefix: str,
                     k: int = 5,
                     preceding_word: Optional[str] = None,
                     strategy: Optional[str] = None) -> List[Suggestion]:
        """
        Top-k (word, probability) completions of `prefix`.
        Unknown prefix or k <= 0 gives an empty list.
        `preceding_word` only matters for the contextual strategy.
        """
        ranker = self._ranker(strategy or self.strategy)
        if k <= 0:
            return []

        with Log.time_block("autocomplete", quiet=True) as t:
            node = self.trie.prefix_lookup(prefix)
            if node is None:
                out: List[Suggestion] = []
            else:
                completions = self.trie.collect_completions(node, prefix)
                out = ranker.rank(completions, k, preceding_word) if completions else []

        logger.debug(
            "autocomplete prefix=%r prev=%r strategy=%s -> %d results in %.6fs",
            prefix, preceding_word, ranker.name, len(out), t.elapsed,
        )
        return out

    def complete_words(self, prefix: str) -> List[str]:
        """Every stored word starting with `prefix`, unranked, in sorted order."""
        node = self.trie.prefix_lookup(prefix)
        if node is None:
            return []
        return sorted(w for w, _ in self.trie.collect_completions(node, prefix))

    # misc -------------------------------------------------------------
    def set_strategy(self, name: str) -> None:
        self._ranker(name)
        self.strategy = name

    def stats(self) -> Dict[str, Any]:
        return {
            "words": len(self.trie),
            "nodes": self.trie.node_count,
            "predecessors": len(self.bigrams),
            "pairs": self.bigrams.pair_count,
            "strategy": self.strategy,
        }

    def _ranker(self, name: str) -> RankingStrategy:
        ranker = self._rankers.get(name)
        if ranker is None:
            ranker = make_ranker(name, self.bigrams)
            self._rankers[name] = ranker
        return ranker
