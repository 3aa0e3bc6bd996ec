"""Exile AST — parse-time node definitions."""

from __future__ import annotations

from dataclasses import dataclass

from .tokens import Token


# ============================================================
# POSITION
# ============================================================


@dataclass
class Pos:
    """Source position, 1-indexed."""

    line: int
    col: int


# ============================================================
# INSTRUCTIONS
# ============================================================


@dataclass
class Instruction:
    """Base for all stack-machine instructions."""

    pos: Pos


@dataclass
class Push(Instruction):
    """push <int> — the token's literal is the constant."""

    token: Token


@dataclass
class BinaryInstruction(Instruction):
    """Base for two-operand arithmetic. OP is the mnemonic root."""

    OP = ""


@dataclass
class Add(BinaryInstruction):
    OP = "add"


@dataclass
class Sub(BinaryInstruction):
    OP = "sub"


@dataclass
class Mul(BinaryInstruction):
    OP = "mul"


@dataclass
class Div(BinaryInstruction):
    OP = "div"


@dataclass
class Rem(BinaryInstruction):
    OP = "rem"


@dataclass
class Ret(Instruction):
    """ret — return the top of stack, or nothing for void methods."""


# Mnemonic -> instruction class, for operand-less instructions
SIMPLE_INSTRUCTIONS: dict[str, type[Instruction]] = {
    "add": Add,
    "sub": Sub,
    "mul": Mul,
    "div": Div,
    "rem": Rem,
    "ret": Ret,
}


# ============================================================
# METHODS
# ============================================================


@dataclass
class Method:
    """<return type> <name>: followed by one instruction per line."""

    pos: Pos
    return_type: str
    name: str
    instructions: list[Instruction]


def instruction_to_str(instr: Instruction) -> str:
    """Render an instruction back in source form."""
    if isinstance(instr, Push):
        return "push " + instr.token.literal
    if isinstance(instr, BinaryInstruction):
        return instr.OP
    if isinstance(instr, Ret):
        return "ret"
    raise TypeError("unhandled instruction type")


def method_to_str(method: Method) -> str:
    """Render a method back in source form, body indented two spaces."""
    lines = [method.return_type + " " + method.name + ":"]
    for instr in method.instructions:
        lines.append("  " + instruction_to_str(instr))
    return "\n".join(lines) + "\n"
