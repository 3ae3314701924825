"""
prefix_completer - in-memory prefix completion index.

Words go into a trie, an ordered corpus feeds a bigram table, and queries
come back as ranked (word, probability) pairs, either by raw frequency or
by what usually follows the previous word.
"""

from .core import (
    BigramTable,
    CompletionIndex,
    ContextualRanker,
    FrequencyRanker,
    Trie,
    make_ranker,
)

__all__ = [
    "BigramTable",
    "CompletionIndex",
    "ContextualRanker",
    "FrequencyRanker",
    "Trie",
    "make_ranker",
]

__version__ = "0.1.0"
