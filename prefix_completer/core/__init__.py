"""
prefix_completer.core

The engine behind the completion index:
 - Trie: code point keyed prefix tree with per-word frequencies
 - BigramTable: adjacent-pair counts over an ordered corpus
 - FrequencyRanker / ContextualRanker: interchangeable ranking strategies
 - CompletionIndex: facade tying the three together
"""

from .trie import Trie, TrieNode
from .bigram_table import BigramTable, Successors
from .ranking import ContextualRanker, FrequencyRanker, RankingStrategy, make_ranker
from .autocompleter import CompletionIndex

__all__ = [
    "Trie",
    "TrieNode",
    "BigramTable",
    "Successors",
    "FrequencyRanker",
    "ContextualRanker",
    "RankingStrategy",
    "make_ranker",
    "CompletionIndex",
]
