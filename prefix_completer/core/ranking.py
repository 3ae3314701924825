# prefix_completer/core/ranking.py
"""
Ranking strategies - turn raw trie completions into ordered probabilities.

Two interchangeable policies:
 - FrequencyRanker: p(w) = freq(w) / sum of freqs over the completion set.
 - ContextualRanker: p(w) = count(prev -> w) / total(prev) using a BigramTable,
   falling back to FrequencyRanker when `prev` was never seen as a predecessor.

Design notes:
 - No smoothing. A completion that never followed `prev` scores exactly 0.
 - Deterministic ordering: probability descending, then word ascending.
 - Both accept the same input (list of (word, freq)) and return at most k
   (word, probability) pairs; k <= 0 or no completions gives [].
"""

from __future__ import annotations

from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from .bigram_table import BigramTable

# Types
Completion = Tuple[str, int]
Ranked = List[Tuple[str, float]]


class RankingStrategy(Protocol):
    name: str

    def rank(self,
             completions: Sequence[Completion],
             k: int,
             preceding_word: Optional[str] = None) -> Ranked:
        ...


def _top_k(scores: Dict[str, float], k: int) -> Ranked:
    ordered = sorted(scores.items(), key=lambda kv: (-kv[1], kv[0]))
    return ordered[:k]


class FrequencyRanker:
    """Rank completions by how often each word was inserted."""

    name = "frequency"

    def rank(self,
             completions: Sequence[Completion],
             k: int,
             preceding_word: Optional[str] = None) -> Ranked:
        if k <= 0 or not completions:
            return []
        total = sum(freq for _, freq in completions)
        if total <= 0:
            return []
        return _top_k({w: freq / total for w, freq in completions}, k)


class ContextualRanker:
    """
    Rank completions by how often they followed `preceding_word` in the corpus.
    Unknown or missing context degrades to frequency ranking, never an error.
    """

    name = "contextual"

    def __init__(self, table: BigramTable, fallback: Optional[FrequencyRanker] = None) -> None:
        self.table = table
        self.fallback = fallback or FrequencyRanker()

    def rank(self,
             completions: Sequence[Completion],
             k: int,
             preceding_word: Optional[str] = None) -> Ranked:
        if k <= 0 or not completions:
            return []

        successors = self.table.lookup(preceding_word) if preceding_word is not None else None
        if successors is None:
            return self.fallback.rank(completions, k)

        total = successors.total
        return _top_k({w: successors.count(w) / total for w, _ in completions}, k)


STRATEGIES = ("frequency", "contextual")


def make_ranker(name: str, table: BigramTable) -> RankingStrategy:
    """Build a strategy by name. Unknown names raise ValueError."""
    if name == "frequency":
        return FrequencyRanker()
    if name == "contextual":
        return ContextualRanker(table)
    raise ValueError(f"unknown ranking strategy {name!r}; expected one of {', '.join(STRATEGIES)}")
