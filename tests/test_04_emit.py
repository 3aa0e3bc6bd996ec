"""Text emitter tests."""

from exile.emit import Emitter


def test_write_line_indents_once():
    out = Emitter()
    out.indent()
    out.write_line("a")
    out.write_line("b")
    assert out.getvalue() == "    a\n    b\n"


def test_prefix_only_at_line_start():
    out = Emitter()
    out.indent()
    out.write("x = ")
    out.write("1")
    out.write("\n")
    out.write("y")
    assert out.getvalue() == "    x = 1\n    y"


def test_write_ending_in_carriage_return_starts_line():
    out = Emitter()
    out.indent()
    out.write("a\r")
    out.write("b")
    assert out.getvalue() == "    a\r    b"


def test_write_then_write_line_shares_prefix():
    out = Emitter()
    out.indent()
    out.indent()
    out.write("ret ")
    out.write_line("void")
    assert out.getvalue() == "        ret void\n"
    assert out.at_line_start


def test_dedent_applies_to_next_line():
    out = Emitter()
    out.write_line("define void @f() {")
    out.indent()
    out.write_line("ret void")
    out.dedent()
    out.write_line("}")
    assert out.getvalue() == "define void @f() {\n    ret void\n}\n"


def test_empty_write_line():
    out = Emitter()
    out.write_line()
    assert out.getvalue() == "\n"


def test_indent_changed_mid_line_waits_for_next_line():
    out = Emitter()
    out.write("a")
    out.indent()
    out.write_line("b")
    out.write_line("c")
    assert out.getvalue() == "ab\n    c\n"
