"""Tests for the free-text tokenizer."""

from __future__ import annotations

import pytest

from logsearch_query.tokenizer import tokenize


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("foo bar", ["foo", "bar"]),
        ('disk "out of memory" *fail*', ["disk", "out of memory", "*fail*"]),
        ("  a   b ", ["a", "b"]),
        ('"foo bar"', ["foo bar"]),
        ('pre"fix suf"fix', ["prefix suffix"]),
        ('"say ""hi"""', ['say "hi"']),
        ('"unterminated phrase', ["unterminated phrase"]),
        ('a "" b', ["a", "b"]),
    ],
)
def test_tokenize(text: str, expected: list[str]) -> None:
    assert tokenize(text) == expected


def test_tokenize_empty() -> None:
    assert tokenize("") == []
    assert tokenize(None) == []
    assert tokenize("    ") == []


def test_tokenize_returns_list() -> None:
    """The result is a plain list that can be iterated more than once."""
    tokens = tokenize("a b")
    assert isinstance(tokens, list)
    assert list(tokens) == list(tokens)
