"""Indentation-aware text buffer used by the code generator."""

from __future__ import annotations


class Emitter:
    """Accumulates output text, indenting each physical line exactly once.

    The indent prefix is written lazily by the first write on a new line, so
    a line built from several write() calls still gets a single prefix.
    """

    def __init__(self, indent_str: str = "    ") -> None:
        self.indent_level: int = 0
        self.at_line_start: bool = True
        self._indent_str = indent_str
        self._parts: list[str] = []

    def _prefix(self) -> None:
        if self.at_line_start:
            self._parts.append(self._indent_str * self.indent_level)
            self.at_line_start = False

    def write(self, text: str) -> None:
        """Append text; a trailing newline or carriage return ends the line."""
        self._prefix()
        self._parts.append(text)
        self.at_line_start = text.endswith("\n") or text.endswith("\r")

    def write_line(self, text: str = "") -> None:
        """Append text followed by a newline."""
        self._prefix()
        self._parts.append(text)
        self._parts.append("\n")
        self.at_line_start = True

    def indent(self) -> None:
        self.indent_level += 1

    def dedent(self) -> None:
        self.indent_level -= 1

    def getvalue(self) -> str:
        """Return the accumulated output as a string."""
        return "".join(self._parts)
