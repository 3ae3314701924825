from .tokenizer import simple_tokenize, split_query

__all__ = ["simple_tokenize", "split_query"]
