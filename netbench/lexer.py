"""A small lexical analyser for C-like expressions."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass

DIGITS = frozenset("0123456789")
DELIMITERS = frozenset(" +-*/,;%><=()[]{}")
OPERATORS = frozenset("+-*/><=")
KEYWORDS = frozenset({
    "auto", "break", "case", "char", "const", "continue", "default", "do",
    "double", "else", "enum", "extern", "float", "for", "goto", "if",
    "int", "long", "register", "return", "short", "signed", "sizeof", "static",
    "struct", "switch", "typedef", "union", "unsigned", "void", "volatile", "while",
})

_END = "\0"


class TokenKind(enum.Enum):
    KEYWORD = "Keyword"
    INTEGER = "Integer"
    IDENTIFIER = "Identifier"
    UNIDENTIFIED = "Unidentified"
    OPERATOR = "Operator"


@dataclass(frozen=True)
class LexToken:
    kind: TokenKind
    value: str

    def __str__(self) -> str:
        return f"Token: {self.kind.value}, Value: {self.value}"


def is_delimiter(ch: str) -> bool:
    return ch in DELIMITERS


def is_operator(ch: str) -> bool:
    return ch in OPERATORS


def is_valid_identifier(text: str) -> bool:
    """True unless the text starts with a digit or a delimiter."""
    first = text[:1] or _END
    return first not in DIGITS and not is_delimiter(first)


def is_keyword(text: str) -> bool:
    return text in KEYWORDS


def is_integer(text: str) -> bool:
    return bool(text) and all(ch in DIGITS for ch in text)


def _classify(word: str, last: str) -> TokenKind | None:
    if is_keyword(word):
        return TokenKind.KEYWORD
    if is_integer(word):
        return TokenKind.INTEGER
    if is_delimiter(last):
        return None
    return TokenKind.IDENTIFIER if is_valid_identifier(word) else TokenKind.UNIDENTIFIED


def analyze(text: str) -> list[LexToken]:
    """Scan the text and return its tokens in order."""
    text = text.split(_END, 1)[0]
    length = len(text)

    def char_at(index: int) -> str:
        return text[index] if 0 <= index < length else _END

    tokens: list[LexToken] = []
    left = right = 0
    while right <= length and left <= right:
        if not is_delimiter(char_at(right)):
            right += 1
        current = char_at(right)
        if is_delimiter(current) and left == right:
            if is_operator(current):
                tokens.append(LexToken(TokenKind.OPERATOR, current))
            right += 1
            left = right
        elif left != right and (is_delimiter(current) or right == length):
            word = text[left:right]
            kind = _classify(word, char_at(right - 1))
            if kind is not None:
                tokens.append(LexToken(kind, word))
            left = right
    return tokens


def main(argv: list[str] | None = None) -> int:
    """Analyse two sample expressions and print their tokens."""
    samples = ["int a = b + c", "int x=ab+bc+30+switch+ 0y "]
    for index, sample in enumerate(samples):
        if index:
            print(" ")
        print(f'For Expression "{sample}":')
        for token in analyze(sample):
            print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())