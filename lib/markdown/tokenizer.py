"""
Tokenizer for the Markdown to HTML converter

This module breaks Markdown input into a flat stream of classified tokens.
Every character is classified on its own first, then adjacent runs of the
same repeatable kind are coalesced into a single counted token.
"""

from enum import Enum
from typing import Iterator, List, NamedTuple, Optional


class TokenType(Enum):
    """Types of tokens recognized by the tokenizer."""
    WORD = "word"
    HEADING = "heading"
    WHITESPACE = "whitespace"
    ASTERISK = "asterisk"
    UNDERSCORE = "underscore"
    NUMBER = "number"
    DOT = "dot"
    HYPHEN = "hyphen"
    NEWLINE = "newline"
    LBRACKET = "lbracket"
    RBRACKET = "rbracket"
    LPAREN = "lparen"
    RPAREN = "rparen"


# Token types whose adjacent runs are merged into one token
COALESCIBLE_TYPES = frozenset({
    TokenType.WORD,
    TokenType.HEADING,
    TokenType.WHITESPACE,
    TokenType.ASTERISK,
    TokenType.UNDERSCORE,
    TokenType.NUMBER,
})

SINGLE_CHAR_TYPES = {
    '#': TokenType.HEADING,
    ' ': TokenType.WHITESPACE,
    '\t': TokenType.WHITESPACE,
    '*': TokenType.ASTERISK,
    '_': TokenType.UNDERSCORE,
    '.': TokenType.DOT,
    '-': TokenType.HYPHEN,
    '\n': TokenType.NEWLINE,
    '[': TokenType.LBRACKET,
    ']': TokenType.RBRACKET,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
}

DIGITS = frozenset('0123456789')


class Token(NamedTuple):
    """A token with type, source content, line and column position."""
    type: TokenType
    content: str
    line: int = 0
    column: int = 0

    @property
    def count(self) -> int:
        """Run length of the token (number of source characters)."""
        return len(self.content)

    @property
    def value(self) -> int:
        """Integer value of a NUMBER token."""
        if self.type != TokenType.NUMBER:
            raise ValueError(f"Token {self.type.value} has no numeric value")
        return int(self.content)


class Tokenizer:
    """
    Tokenizer that converts Markdown text into a stream of tokens.

    Tokenization is total: any input produces a token list, and the
    concatenated token contents reproduce the input (with line endings
    normalized to a single newline).
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the input text and return a list of tokens.

        Returns:
            List of coalesced Token objects.
        """
        self.tokens = []
        self.pos = 0
        self.line = 1
        self.column = 1

        for token in self._classify():
            self._add_token(token)

        return self.tokens

    def _classify(self) -> Iterator[Token]:
        """Classify every character of the input independently."""
        while self.pos < len(self.text):
            char = self._current_char()
            line, column = self.line, self.column

            # \r\n and bare \r both end a line
            if char == '\r':
                if self._peek_char() == '\n':
                    self._advance()
                char = '\n'

            if char in DIGITS:
                token_type = TokenType.NUMBER
            else:
                token_type = SINGLE_CHAR_TYPES.get(char, TokenType.WORD)

            yield Token(token_type, char, line, column)

            self._advance()
            if token_type == TokenType.NEWLINE:
                self.line += 1
                self.column = 1

    def _add_token(self, token: Token) -> None:
        """Append a token, merging it into the previous one when coalescible."""
        if self.tokens:
            last = self.tokens[-1]
            if last.type == token.type and token.type in COALESCIBLE_TYPES:
                self.tokens[-1] = last._replace(content=last.content + token.content)
                return
        self.tokens.append(token)

    def _current_char(self) -> str:
        """Get the current character or empty string if at end."""
        return self.text[self.pos] if self.pos < len(self.text) else ''

    def _peek_char(self) -> str:
        """Get the character after the current one or empty string."""
        next_pos = self.pos + 1
        return self.text[next_pos] if next_pos < len(self.text) else ''

    def _advance(self) -> None:
        """Advance position by one character."""
        self.pos += 1
        self.column += 1

    def __iter__(self) -> Iterator[Token]:
        """Make tokenizer iterable."""
        if not self.tokens:
            self.tokenize()
        return iter(self.tokens)


class TokenCursor:
    """
    Explicit cursor over an indexable token sequence.

    Parsers look ahead with peek() and find(), and only move the cursor once
    a construct is recognised, so a failed match leaves the tokens unconsumed.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.position = 0

    def peek(self, offset: int = 0) -> Optional[Token]:
        """Get the token at position + offset without consuming it."""
        index = self.position + offset
        if 0 <= index < len(self.tokens):
            return self.tokens[index]
        return None

    def peek_is(self, token_type: TokenType, offset: int = 0) -> bool:
        """Check whether the token at position + offset has the given type."""
        token = self.peek(offset)
        return token is not None and token.type == token_type

    def advance(self, count: int = 1) -> None:
        """Consume count tokens."""
        self.position = min(self.position + count, len(self.tokens))

    def is_at_end(self) -> bool:
        return self.position >= len(self.tokens)

    def find(self, token_type: TokenType, start: int = 0) -> int:
        """
        Find the next token of the given type.

        Args:
            token_type: Type to look for
            start: Offset from the current position where the search begins

        Returns:
            Offset from the current position, or -1 if not found.
        """
        for index in range(self.position + start, len(self.tokens)):
            if self.tokens[index].type == token_type:
                return index - self.position
        return -1

    def slice(self, start: int, end: int) -> List[Token]:
        """Get tokens between two offsets from the current position."""
        return self.tokens[self.position + start:self.position + end]


def tokenize(text: str) -> List[Token]:
    """Tokenize text into a list of coalesced tokens."""
    return Tokenizer(text).tokenize()
