"""
Token counting strategies. Token counting is chosen at run time: either the
`o200k_base` tiktoken encoding or a counter that always returns zero.
"""

from __future__ import annotations

from typing import Protocol

import tiktoken

DEFAULT_ENCODING = "o200k_base"


class Tokenizer(Protocol):
    name: str

    def count_tokens(self, text: str) -> int: ...


class TiktokenCounter:
    """
    Counts tokens with a tiktoken encoding. Special-token markers such as
    `<|endoftext|>` are allowed and count as one token each.
    """

    def __init__(self, encoding: str = DEFAULT_ENCODING) -> None:
        self.name = encoding
        self._encoding = tiktoken.get_encoding(encoding)

    def count_tokens(self, text: str) -> int:
        return len(self._encoding.encode(text, allowed_special="all"))


class NullTokenCounter:
    """Used when token counting is disabled."""

    name = "none"

    def count_tokens(self, text: str) -> int:
        return 0


def make_tokenizer(count_tokens: bool, encoding: str = DEFAULT_ENCODING) -> Tokenizer:
    if count_tokens:
        return TiktokenCounter(encoding)
    return NullTokenCounter()
