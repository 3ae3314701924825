# prefix_completer/context/tokenizer.py
# whitespace tokenizer shared by the front ends and the benchmark

from typing import List, Optional, Tuple


def simple_tokenize(s: str) -> List[str]:
    """
    Return list of tokens (words). Pure punctuation tokens are dropped,
    case is left alone since the index matches code points exactly.
    """
    if not s:
        return []
    out = []
    for t in s.split():
        if any(ch.isalnum() for ch in t):
            out.append(t)
    return out


def split_query(line: str) -> Tuple[Optional[str], str]:
    """
    Split a typed line into (preceding_word, prefix).
    The last token is the prefix being completed and the one before it is
    the context word. A trailing space means the prefix is empty.
    """
    toks = line.split()
    if not toks:
        return None, ""
    if line[-1:].isspace():
        return toks[-1], ""
    prev = toks[-2] if len(toks) > 1 else None
    return prev, toks[-1]
