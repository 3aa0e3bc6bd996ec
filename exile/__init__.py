"""Exile compiler — public API."""

from __future__ import annotations

from .ast import Method
from .gen import (
    EmptyMethodError as EmptyMethodError,
    GenError as GenError,
    StackUnderflowError as StackUnderflowError,
    TypeMismatchError as TypeMismatchError,
    UnsupportedTypeError as UnsupportedTypeError,
    generate as generate,
)
from .parse import ParseError as ParseError, Parser
from .tokens import tokenize


def parse(source: str, workers: int | None = None) -> list[Method]:
    """Parse exile source code into a list of methods."""
    tokens = tokenize(source, workers)
    return Parser(tokens).parse_program()


def compile_source(source: str, workers: int | None = None) -> str:
    """Parse and lower exile source to IR text."""
    return generate(parse(source, workers))
