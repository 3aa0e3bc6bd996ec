"""Exile parser — one method per header line, one instruction per body line."""

from __future__ import annotations

import logging

from .ast import SIMPLE_INSTRUCTIONS, Instruction, Method, Pos, Push
from .tokens import (
    TK_COLON,
    TK_ERROR,
    TK_IDENT,
    TK_INT,
    TK_LINEBREAK,
    TK_WHITESPACE,
    Token,
)

logger = logging.getLogger(__name__)

_KIND_NAMES: dict[str, str] = {
    TK_IDENT: "identifier",
    TK_INT: "integer",
    TK_LINEBREAK: "line break",
    TK_COLON: "':'",
    TK_ERROR: "invalid character",
}


class ParseError(Exception):
    """Parse error with location info."""

    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


class Parser:
    """Parser for exile method definitions."""

    def __init__(self, tokens: list[Token]):
        self.tokens: list[Token] = [t for t in tokens if t.type != TK_WHITESPACE]
        self.pos: int = 0

    # ── Helpers ──────────────────────────────────────────────

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def current(self) -> Token | None:
        if self.at_end():
            return None
        return self.tokens[self.pos]

    def peek(self, offset: int) -> Token | None:
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return None
        return self.tokens[idx]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def _end_pos(self) -> tuple[int, int]:
        if not self.tokens:
            return 1, 1
        last = self.tokens[len(self.tokens) - 1]
        return last.line, last.col

    def fail(self, msg: str, tok: Token | None) -> ParseError:
        if tok is None:
            line, col = self._end_pos()
            return ParseError(msg + ", got end of input", line, col)
        if tok.type == TK_ERROR:
            return ParseError(
                "unexpected character " + repr(tok.literal), tok.line, tok.col
            )
        return ParseError(msg, tok.line, tok.col)

    def expect(self, kind: str, what: str) -> Token:
        tok = self.current()
        if tok is None or tok.type != kind:
            got = ""
            if tok is not None:
                got = ", got " + _KIND_NAMES[tok.type] + " " + repr(tok.literal)
            raise self.fail("expected " + what + got, tok)
        return self.advance()

    def skip_blank_lines(self) -> None:
        while not self.at_end() and self.tokens[self.pos].type == TK_LINEBREAK:
            self.pos += 1

    def at_method_header(self) -> bool:
        first = self.current()
        second = self.peek(1)
        third = self.peek(2)
        return (
            first is not None
            and second is not None
            and third is not None
            and first.type == TK_IDENT
            and second.type == TK_IDENT
            and third.type == TK_COLON
        )

    # ── Program ──────────────────────────────────────────────

    def parse_program(self) -> list[Method]:
        methods: list[Method] = []
        self.skip_blank_lines()
        while not self.at_end():
            methods.append(self.parse_method())
            self.skip_blank_lines()
        logger.debug("parsed %d methods", len(methods))
        return methods

    def parse_method(self) -> Method:
        ret_tok = self.expect(TK_IDENT, "return type")
        name_tok = self.expect(TK_IDENT, "method name")
        self.expect(TK_COLON, "':' after method name")
        self.expect(TK_LINEBREAK, "line break after method header")
        instructions: list[Instruction] = []
        self.skip_blank_lines()
        while not self.at_end() and not self.at_method_header():
            instructions.append(self.parse_instruction())
            self.expect(TK_LINEBREAK, "line break after instruction")
            self.skip_blank_lines()
        if not instructions:
            raise ParseError(
                "method '" + name_tok.literal + "' has no instructions",
                name_tok.line,
                name_tok.col,
            )
        return Method(
            Pos(ret_tok.line, ret_tok.col),
            ret_tok.literal,
            name_tok.literal,
            instructions,
        )

    # ── Instructions ─────────────────────────────────────────

    def parse_instruction(self) -> Instruction:
        tok = self.expect(TK_IDENT, "instruction")
        pos = Pos(tok.line, tok.col)
        if tok.literal == "push":
            value = self.expect(TK_INT, "integer for push")
            return Push(pos, value)
        cls = SIMPLE_INSTRUCTIONS.get(tok.literal)
        if cls is None:
            raise ParseError(
                "unknown instruction '" + tok.literal + "'", tok.line, tok.col
            )
        return cls(pos)
