"""Whitespace tokenization.

Tokens are produced by splitting on runs of whitespace. Matching is
case-sensitive and punctuation stays attached to its word, so ``"ribs."`` and
``"ribs"`` are different tokens. Leading and trailing whitespace never yields
empty tokens: the same rule applies to training and query documents, so the
vocabulary only ever contains non-empty strings coming from raw text.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Union

from .exceptions import InvalidArgumentError

Document = Union[str, Sequence[str]]


def tokenize(text: str) -> list[str]:
    """Split raw text into whitespace-separated tokens."""
    return text.split()


def as_tokens(document: Document) -> list[str]:
    """Return the token list for a raw or pre-tokenized document.

    Raw strings go through :func:`tokenize`. Sequences of strings are taken
    verbatim, in order.

    Raises:
        InvalidArgumentError: If the document is neither a string nor a
            sequence of strings.
    """
    if isinstance(document, str):
        return tokenize(document)
    if isinstance(document, (bytes, bytearray)) or not isinstance(document, Sequence):
        raise InvalidArgumentError(
            f"document must be a string or a sequence of strings, got {type(document).__name__}"
        )
    tokens = list(document)
    for token in tokens:
        if not isinstance(token, str):
            raise InvalidArgumentError(
                f"tokens must be strings, got {type(token).__name__}"
            )
    return tokens
