# tests/test_bigram_table.py

import pytest
from prefix_completer.core.bigram_table import BigramTable

CORPUS = ["hello", "hell", "helicopter", "hero", "world", "how", "are", "you", "hello", "war", "hello"]


@pytest.fixture
def table():
    t = BigramTable()
    t.build(CORPUS)
    return t


def test_counts_adjacent_pairs(table):
    succ = table.lookup("hello")
    assert succ is not None
    assert dict(succ.counts) == {"hell": 1, "war": 1}
    assert succ.total == 2
    assert table.count("you", "hello") == 1
    assert table.count("hello", "hero") == 0


def test_last_word_only_is_not_a_predecessor():
    t = BigramTable()
    t.build(["a", "b", "c"])
    assert t.lookup("c") is None
    assert "c" not in t
    assert "a" in t
    assert len(t) == 2


def test_duplicate_pairs_accumulate():
    t = BigramTable()
    t.build(["a", "b", "a", "b", "a", "c"])
    succ = t.lookup("a")
    assert succ.count("b") == 2
    assert succ.count("c") == 1
    assert succ.total == 3
    assert t.pair_count == 5


def test_unknown_predecessor_is_absent(table):
    assert table.lookup("zebra") is None
    assert table.count("zebra", "hello") == 0


@pytest.mark.parametrize("corpus", [[], ["solo"]])
def test_short_corpus_gives_empty_table(corpus):
    t = BigramTable()
    t.build(corpus)
    assert len(t) == 0
    assert t.pair_count == 0


def test_rebuild_replaces_previous_counts(table):
    table.build(["x", "y"])
    assert table.lookup("hello") is None
    assert table.lookup("x").total == 1
    assert len(table) == 1


def test_lookup_view_is_read_only(table):
    succ = table.lookup("hello")
    with pytest.raises(TypeError):
        succ.counts["hero"] = 5
