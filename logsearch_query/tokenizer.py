"""
Tokenizer for free-text log message searches.

Splits on spaces while keeping double-quoted phrases together:

    >>> tokenize('disk "out of memory" *fail*')
    ['disk', 'out of memory', '*fail*']
"""

from __future__ import annotations

DELIMITER = " "
QUOTE = '"'


class _Tokenizer:
    """Single-pass tokenizer over one free-text expression."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def _read_quoted(self, token: list[str]) -> None:
        """Read a quoted section into `token`; a doubled quote is a literal quote."""
        assert self.text[self.pos] == QUOTE
        self.pos += 1  # Skip opening quote

        while self.pos < self.length:
            ch = self.text[self.pos]
            if ch == QUOTE:
                if self.text[self.pos + 1 : self.pos + 2] == QUOTE:
                    token.append(QUOTE)
                    self.pos += 2
                    continue
                self.pos += 1  # Skip closing quote
                return
            token.append(ch)
            self.pos += 1
        # Unterminated phrase: the rest of the text belongs to it

    def tokenize(self) -> list[str]:
        tokens: list[str] = []
        token: list[str] = []

        while self.pos < self.length:
            ch = self.text[self.pos]
            if ch == DELIMITER:
                if token:
                    tokens.append("".join(token))
                    token = []
                self.pos += 1
            elif ch == QUOTE:
                self._read_quoted(token)
            else:
                token.append(ch)
                self.pos += 1

        if token:
            tokens.append("".join(token))
        return tokens


def tokenize(text: str | None) -> list[str]:
    """
    Split a free-text expression into tokens.

    Args:
        text: Expression such as `error "connection refused" *timeout`

    Returns:
        Tokens in input order, quotes removed. Empty tokens are dropped;
        surrounding whitespace other than spaces is left for the caller to trim.
    """
    if not text:
        return []
    return _Tokenizer(text).tokenize()
