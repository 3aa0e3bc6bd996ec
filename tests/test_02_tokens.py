"""Tokenizer tests."""

from exile.tokens import (
    TK_COLON,
    TK_ERROR,
    TK_IDENT,
    TK_INT,
    TK_LINEBREAK,
    TK_WHITESPACE,
    Token,
    tokenize,
    tokenize_line,
)


def kinds(tokens: list[Token]) -> list[str]:
    return [t.type for t in tokens]


def test_method_header():
    tokens = tokenize_line("i32 main:")
    assert kinds(tokens) == [TK_IDENT, TK_WHITESPACE, TK_IDENT, TK_COLON, TK_LINEBREAK]
    assert tokens[0].literal == "i32"
    assert tokens[2].literal == "main"


def test_push_line_positions():
    tokens = tokenize_line("  push 42", 3)
    assert tokens == [
        Token(TK_WHITESPACE, " ", 3, 1),
        Token(TK_WHITESPACE, " ", 3, 2),
        Token(TK_IDENT, "push", 3, 3),
        Token(TK_WHITESPACE, " ", 3, 7),
        Token(TK_INT, "42", 3, 8),
        Token(TK_LINEBREAK, "\n", 3, 10),
    ]


def test_empty_line_is_just_a_linebreak():
    assert kinds(tokenize_line("")) == [TK_LINEBREAK]


def test_digits_inside_identifier():
    tokens = tokenize_line("f32x1")
    assert kinds(tokens) == [TK_IDENT, TK_LINEBREAK]


def test_number_then_letters_splits():
    tokens = tokenize_line("12ab")
    assert [(t.type, t.literal) for t in tokens[:2]] == [(TK_INT, "12"), (TK_IDENT, "ab")]


def test_unknown_character_is_error_token():
    tokens = tokenize_line("push -1")
    assert tokens[2] == Token(TK_ERROR, "-", 1, 6)
    assert tokens[3].type == TK_INT


def test_explicit_newline_and_carriage_return():
    tokens = tokenize_line("ret\r\n")
    assert kinds(tokens) == [TK_IDENT, TK_LINEBREAK, TK_LINEBREAK, TK_LINEBREAK]


def test_tab_is_whitespace():
    assert kinds(tokenize_line("\tret")) == [TK_WHITESPACE, TK_IDENT, TK_LINEBREAK]


def test_tokenize_numbers_lines():
    tokens = tokenize("i32 f:\n  ret\n")
    breaks = [t for t in tokens if t.type == TK_LINEBREAK]
    assert [t.line for t in breaks] == [1, 2]
    assert tokens[-2] == Token(TK_IDENT, "ret", 2, 3)


def test_tokenize_empty_source():
    assert tokenize("") == []


def test_parallel_matches_sequential():
    body = "  push 1\n  push 2\n  mul\n  ret\n"
    source = "".join(f"i32 m{n}:\n" + body for n in range(50))
    assert tokenize(source, workers=4) == tokenize(source)


def test_only_newline_splits_lines():
    tokens = tokenize("push\x0c3\x0b\u2028\n")
    assert kinds(tokens) == [
        TK_IDENT,
        TK_WHITESPACE,
        TK_INT,
        TK_WHITESPACE,
        TK_WHITESPACE,
        TK_LINEBREAK,
    ]


def test_crlf_line_endings():
    tokens = tokenize("void f:\r\n  ret\r\n")
    assert [t.literal for t in tokens if t.type != TK_WHITESPACE] == [
        "void",
        "f",
        ":",
        "\n",
        "ret",
        "\n",
    ]


def test_final_line_without_newline_counts():
    assert [t.line for t in tokenize("a\nb") if t.type == TK_LINEBREAK] == [1, 2]
