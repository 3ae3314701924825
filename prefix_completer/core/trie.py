# trie.py
# Trie (prefix tree) for prefix-based autocompletion.
# Nodes live in a single arena list and point at their children by index,
# root is always index 0. Keeps per-word insertion counts for ranking.

from __future__ import annotations
from typing import Dict, Iterator, List, Optional, Tuple

Word = str
Freq = int
Candidate = Tuple[Word, Freq]

ROOT = 0


class TrieNode:
    """
    A single node in the Trie.
    children: code point -> index of the child node in the arena
    is_word: marks that the path from the root to here is a stored word
    freq: how many times that word was inserted
    """

    __slots__ = ("children", "is_word", "freq")

    def __init__(self) -> None:
        self.children: Dict[str, int] = {}
        self.is_word = False
        self.freq = 0


class Trie:
    """
    Trie storing words for fast prefix lookup. Used by CompletionIndex for:
     - exact membership checks
     - locating the subtree under a typed prefix
     - collecting (word, freq) completions for the rankers
    """

    def __init__(self) -> None:
        self._nodes: List[TrieNode] = [TrieNode()]
        self._words = 0

    # insertion -----------------------------------------------------
    def insert(self, word: str) -> None:
        """
        Insert a word. Characters are taken as-is, no normalization.
        The empty string marks the root itself as a word.
        Inserting an existing word only bumps its frequency.
        """
        nodes = self._nodes
        idx = ROOT
        for ch in word:
            nxt = nodes[idx].children.get(ch)
            if nxt is None:
                nxt = len(nodes)
                nodes.append(TrieNode())
                nodes[idx].children[ch] = nxt
            idx = nxt

        node = nodes[idx]
        if not node.is_word:
            node.is_word = True
            self._words += 1
        node.freq += 1

    # lookup ---------------------------------------------------------
    def prefix_lookup(self, prefix: str) -> Optional[int]:
        """
        Walk down `prefix` and return the index of the node reached,
        or None as soon as a character has no edge.
        """
        nodes = self._nodes
        idx = ROOT
        for ch in prefix:
            nxt = nodes[idx].children.get(ch)
            if nxt is None:
                return None
            idx = nxt
        return idx

    def search(self, word: str) -> bool:
        """True only for stored words, not for paths that are merely prefixes."""
        idx = self.prefix_lookup(word)
        return idx is not None and self._nodes[idx].is_word

    def frequency(self, word: str) -> int:
        idx = self.prefix_lookup(word)
        if idx is None:
            return 0
        return self._nodes[idx].freq

    # traversal ---------------------------------------------------------
    def collect_completions(self, node: int, prefix: str) -> List[Candidate]:
        """
        Depth-first walk of the subtree under `node`, returning every
        stored word as (prefix + path, freq). Uses an explicit stack so
        very long shared prefixes can't hit the recursion limit.
        Output order is not meaningful; rankers impose their own.
        """
        nodes = self._nodes
        out: List[Candidate] = []
        stack: List[Tuple[int, str]] = [(node, prefix)]
        while stack:
            idx, path = stack.pop()
            current = nodes[idx]
            if current.is_word:
                out.append((path, current.freq))
            for ch, child in current.children.items():
                stack.append((child, path + ch))
        return out

    def words(self) -> Iterator[Candidate]:
        """All stored (word, freq) pairs."""
        return iter(self.collect_completions(ROOT, ""))

    # introspection -----------------------------------------------------
    @property
    def node_count(self) -> int:
        return len(self._nodes)

    def __len__(self) -> int:
        return self._words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.search(word)
