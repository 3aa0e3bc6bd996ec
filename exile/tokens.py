"""Exile tokenizer — lexes source lines into a flat token list."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

logger = logging.getLogger(__name__)


# Token type constants
TK_IDENT = "IDENT"
TK_INT = "INT"
TK_WHITESPACE = "WHITESPACE"
TK_LINEBREAK = "LINEBREAK"
TK_COLON = "COLON"
TK_ERROR = "ERROR"


class Token:
    """A token with type, literal, and position."""

    def __init__(self, type_: str, literal: str, line: int, col: int):
        self.type: str = type_
        self.literal: str = literal
        self.line: int = line
        self.col: int = col

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (
            self.type == other.type
            and self.literal == other.literal
            and self.line == other.line
            and self.col == other.col
        )

    def __repr__(self) -> str:
        return (
            "Token("
            + self.type
            + ", "
            + repr(self.literal)
            + ", "
            + str(self.line)
            + ", "
            + str(self.col)
            + ")"
        )


def _is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


def tokenize_line(line: str, line_no: int = 1) -> list[Token]:
    """Tokenize a single source line.

    Always ends with a TK_LINEBREAK marker, whether or not the line itself
    carried a newline. Unrecognized characters become TK_ERROR tokens; the
    parser decides how to report them.
    """
    tokens: list[Token] = []
    pos = 0
    length = len(line)

    while pos < length:
        c = line[pos]
        col = pos + 1

        # Identifier: letter, then letters or digits
        if c.isalpha():
            start = pos
            while pos < length and line[pos].isalnum():
                pos += 1
            tokens.append(Token(TK_IDENT, line[start:pos], line_no, col))
            continue

        # Integer literal
        if _is_digit(c):
            start = pos
            while pos < length and _is_digit(line[pos]):
                pos += 1
            tokens.append(Token(TK_INT, line[start:pos], line_no, col))
            continue

        if c == ":":
            tokens.append(Token(TK_COLON, c, line_no, col))
        elif c == "\n" or c == "\r":
            tokens.append(Token(TK_LINEBREAK, c, line_no, col))
        elif c.isspace():
            tokens.append(Token(TK_WHITESPACE, c, line_no, col))
        else:
            tokens.append(Token(TK_ERROR, c, line_no, col))
        pos += 1

    tokens.append(Token(TK_LINEBREAK, "\n", line_no, length + 1))
    return tokens


def tokenize(source: str, workers: int | None = None) -> list[Token]:
    """Tokenize exile source into a flat list, one line break per line.

    With workers > 1 the lines are lexed on a thread pool; the output is
    the same as the sequential path because map() keeps line order.
    """
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    numbered = range(1, len(lines) + 1)
    if workers is not None and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as ex:
            per_line = list(ex.map(tokenize_line, lines, numbered))
    else:
        per_line = [tokenize_line(line, n) for line, n in zip(lines, numbered)]
    tokens: list[Token] = []
    for line_tokens in per_line:
        tokens.extend(line_tokens)
    logger.debug("tokenized %d lines into %d tokens", len(lines), len(tokens))
    return tokens
