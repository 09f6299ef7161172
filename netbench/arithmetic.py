"""Tokenizer, left-to-right evaluator and assembly emitter for arithmetic."""

from __future__ import annotations

import enum
import re
import sys
from dataclasses import dataclass
from typing import Callable, Iterable

MAX_INPUT = 255


class ExpressionError(ValueError):
    """Raised when a token sequence is not a valid expression."""


class TokenType(enum.Enum):
    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    MULTIPLICATION = "*"
    DIVISION = "/"
    END = "end"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: int = 0


_TOKEN_RE = re.compile(r"[0-9]+|[+\-*/]")


def tokenize(text: str) -> list[Token]:
    """Split text into numbers and operators; other characters are skipped."""
    tokens = [
        Token(TokenType.NUMBER, int(lexeme)) if lexeme[0].isdigit() else Token(TokenType(lexeme))
        for lexeme in _TOKEN_RE.findall(text)
    ]
    tokens.append(Token(TokenType.END))
    return tokens


def _divide(left: int, right: int) -> int:
    if right == 0:
        raise ExpressionError("division by zero")
    quotient = abs(left) // abs(right)
    return -quotient if (left < 0) != (right < 0) else quotient


_OPERATIONS: dict[TokenType, Callable[[int, int], int]] = {
    TokenType.PLUS: lambda a, b: a + b,
    TokenType.MINUS: lambda a, b: a - b,
    TokenType.MULTIPLICATION: lambda a, b: a * b,
    TokenType.DIVISION: _divide,
}

_MNEMONICS = {
    TokenType.PLUS: "ADD",
    TokenType.MINUS: "SUB",
    TokenType.MULTIPLICATION: "MUL",
    TokenType.DIVISION: "DIV",
}


def _operand(tokens: Iterable[Token]) -> Token:
    operand = next(iter(tokens), None)
    if operand is None or operand.type is not TokenType.NUMBER:
        raise ExpressionError("operator must be followed by a number")
    return operand


def parse(tokens: Iterable[Token]) -> int:
    """Evaluate the tokens strictly left to right, with truncating division."""
    stream = iter(tokens)
    first = next(stream, None)
    if first is None or first.type is not TokenType.NUMBER:
        raise ExpressionError("expression must start with a number")
    result = first.value
    for token in stream:
        if token.type is TokenType.END:
            break
        operation = _OPERATIONS.get(token.type)
        if operation is None:
            raise ExpressionError("expected an operator")
        result = operation(result, _operand(stream).value)
    return result


def generate_assembly(tokens: Iterable[Token]) -> list[str]:
    """Emit LOAD/ADD/SUB/MUL/DIV instructions for a token sequence."""
    stream = iter(tokens)
    first = next(stream, None)
    if first is None or first.type is TokenType.END:
        raise ExpressionError("empty expression")
    lines = [f"LOAD {first.value}"]
    for token in stream:
        if token.type is TokenType.END:
            break
        mnemonic = _MNEMONICS.get(token.type)
        if mnemonic is not None:
            lines.append(f"{mnemonic} {_operand(stream).value}")
    return lines


def main(argv: list[str] | None = None) -> int:
    """Read one expression, print its value and the generated assembly."""
    try:
        line = input("Enter an arithmetic expression (e.g., 3 + 4 - 2): ")
    except EOFError:
        line = ""
    tokens = tokenize(line[:MAX_INPUT])
    try:
        result = parse(tokens)
    except ExpressionError:
        print("Invalid Expression")
        return 0
    print(f"Parsed result: {result}")
    for instruction in generate_assembly(tokens):
        print(instruction)
    return 0


if __name__ == "__main__":
    sys.exit(main())