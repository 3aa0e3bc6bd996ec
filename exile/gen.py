"""Code generator: exile methods -> SSA-style textual IR.

The source language is a stack machine with no registers, so the generator
replays each method against a simulated operand stack. Every stack entry
remembers the register that holds it and whether that register is a pointer
to an alloca'd slot (pushed literals) or a plain value (arithmetic results).
Loads are emitted only at the point a pointer entry is consumed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .ast import (
    Add,
    BinaryInstruction,
    Div,
    Instruction,
    Method,
    Pos,
    Push,
    Rem,
    Ret,
    Sub,
)
from .emit import Emitter
from .tokens import TK_INT

logger = logging.getLogger(__name__)

I32 = "i32"
F32 = "f32"
VOID = "void"

# Token type -> IR type of a pushed literal
LITERAL_TYPES: dict[str, str] = {TK_INT: I32}


# ============================================================
# Errors
# ============================================================


class GenError(Exception):
    """Base error for code generation. Aborts the whole run."""

    kind: str = "error"

    def __init__(self, msg: str, pos: Pos | None = None):
        if pos is None:
            super().__init__(msg)
        else:
            super().__init__(f"{msg} at line {pos.line} col {pos.col}")
        self.msg = msg
        self.pos = pos


class TypeMismatchError(GenError):
    """Operands, or the returned value, do not have the expected type."""

    kind = "type mismatch"


class StackUnderflowError(GenError):
    """Fewer operands on the stack than the instruction consumes."""

    kind = "stack underflow"


class UnsupportedTypeError(GenError):
    """Literal kind or operand type the generator has no lowering for."""

    kind = "unsupported type"


class EmptyMethodError(GenError):
    """Method body without any instruction."""

    kind = "empty method"


# ============================================================
# Per-method state
# ============================================================


@dataclass
class StackItem:
    """Operand stack entry. is_ptr means index names an alloca'd slot."""

    index: int
    typ: str
    is_ptr: bool


class MethodState:
    """Operand stack and register counter for a single method."""

    def __init__(self) -> None:
        self.stack: list[StackItem] = []
        self.last_index: int = 0

    def allocate(self) -> int:
        """Reserve the next register number. The first one is 1."""
        self.last_index += 1
        return self.last_index


def reg(index: int) -> str:
    return "%" + str(index)


def select_opcode(instr: BinaryInstruction, typ: str) -> str:
    """Pick the IR mnemonic for a binary instruction on operands of typ."""
    if typ == I32:
        prefix = "s" if isinstance(instr, (Div, Rem)) else ""
    elif typ == F32:
        prefix = "f"
    else:
        raise UnsupportedTypeError(
            f"no '{instr.OP}' opcode for type {typ}", instr.pos
        )
    return prefix + instr.OP


# ============================================================
# Generator
# ============================================================


class CodeGenerator:
    """Lower a list of methods into one IR text document."""

    def __init__(self) -> None:
        self.out = Emitter()
        self.state = MethodState()

    def generate(self, methods: list[Method]) -> str:
        self.out = Emitter()
        for method in methods:
            self.emit_method(method)
        return self.out.getvalue()

    def emit_method(self, method: Method) -> None:
        if not method.instructions:
            raise EmptyMethodError(
                f"method '{method.name}' has no instructions", method.pos
            )
        self.state = MethodState()
        self.out.write_line(f"define {method.return_type} @{method.name}() {{")
        self.out.indent()
        for instr in method.instructions:
            self.lower(instr, method)
        self.out.dedent()
        self.out.write_line("}")
        logger.debug(
            "lowered @%s: %d instructions, %d registers",
            method.name,
            len(method.instructions),
            self.state.last_index,
        )

    def lower(self, instr: Instruction, method: Method) -> None:
        if isinstance(instr, Push):
            self._lower_push(instr)
            return
        if isinstance(instr, BinaryInstruction):
            self._lower_binary(instr)
            return
        if isinstance(instr, Ret):
            self._lower_ret(instr, method)
            return
        raise GenError(f"unhandled instruction {type(instr).__name__}", instr.pos)

    # ── helpers ──────────────────────────────────────────────

    def _operand(self, item: StackItem, typ: str) -> int:
        """Register holding item's value, loading it first if it is a slot."""
        if not item.is_ptr:
            return item.index
        loaded = self.state.allocate()
        self.out.write_line(
            f"{reg(loaded)} = load {typ}, {typ}* {reg(item.index)}"
        )
        return loaded

    # ── instructions ─────────────────────────────────────────

    def _lower_push(self, instr: Push) -> None:
        typ = LITERAL_TYPES.get(instr.token.type)
        if typ is None:
            raise UnsupportedTypeError(
                f"cannot push {instr.token.type} literal {instr.token.literal!r}",
                instr.pos,
            )
        slot = self.state.allocate()
        self.out.write_line(f"{reg(slot)} = alloca {typ}")
        self.out.write_line(f"store {typ} {instr.token.literal}, {typ}* {reg(slot)}")
        self.state.stack.append(StackItem(slot, typ, True))

    def _lower_binary(self, instr: BinaryInstruction) -> None:
        stack = self.state.stack
        if len(stack) < 2:
            raise StackUnderflowError(
                f"'{instr.OP}' requires two operands on stack, found {len(stack)}",
                instr.pos,
            )
        typ = stack[-1].typ
        if stack[-2].typ != typ:
            raise TypeMismatchError(
                f"Types of operands must be same, got {stack[-2].typ} and {typ}",
                instr.pos,
            )
        opcode = select_opcode(instr, typ)
        first = self._operand(stack.pop(), typ)
        second = self._operand(stack.pop(), typ)
        result = self.state.allocate()
        nsw = " nsw" if isinstance(instr, (Add, Sub)) else ""
        self.out.write_line(
            f"{reg(result)} = {opcode}{nsw} {typ} {reg(second)}, {reg(first)}"
        )
        stack.append(StackItem(result, typ, False))

    def _lower_ret(self, instr: Ret, method: Method) -> None:
        if method.return_type == VOID:
            self.out.write_line("ret void")
            return
        stack = self.state.stack
        if not stack:
            raise StackUnderflowError(
                "Method requires at least one operand on stack", instr.pos
            )
        top = stack[-1]
        if top.typ != method.return_type:
            raise TypeMismatchError(
                f"method '{method.name}' returns {method.return_type}"
                f" but top of stack is {top.typ}",
                instr.pos,
            )
        value = self._operand(top, method.return_type)
        self.out.write_line(f"ret {method.return_type} {reg(value)}")


def generate(methods: list[Method]) -> str:
    """Generate IR text for methods. Raises GenError on the first failure."""
    return CodeGenerator().generate(methods)
