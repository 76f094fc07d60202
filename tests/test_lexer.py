import pytest
from hypothesis import given
from hypothesis import strategies as st

from robo.robo_lexer import WHITESPACE, CharacterStream, Lexer, Token, tokenize


def values(source: str) -> list[str]:
    return [tok.value for tok in tokenize(source) if tok.type != "EOF"]


def types(source: str) -> list[str]:
    return [tok.type for tok in tokenize(source) if tok.type != "EOF"]


def test_punctuation_tokens() -> None:
    assert types("( ) { } , ;") == [
        "LPAREN",
        "RPAREN",
        "LBRACE",
        "RBRACE",
        "COMMA",
        "SEMICOLON",
    ]


def test_punctuation_splits_adjacent_text() -> None:
    assert values("move;turnL;") == ["move", ";", "turnL", ";"]
    assert values("lt(fuelLeft,5)") == ["lt", "(", "fuelLeft", ",", "5", ")"]
    assert values("loop{move;}") == ["loop", "{", "move", ";", "}"]


@pytest.mark.parametrize(
    "word,expected",
    [
        ("move", "ACTION"),
        ("turnAround", "ACTION"),
        ("shieldOff", "ACTION"),
        ("wait", "ACTION"),
        ("loop", "KEYWORD"),
        ("else", "KEYWORD"),
        ("lt", "RELOP"),
        ("eq", "RELOP"),
        ("barrelFB", "SENSOR"),
        ("wallDist", "SENSOR"),
        ("0", "NUMBER"),
        ("42", "NUMBER"),
        ("-7", "NUMBER"),
        ("007", "WORD"),
        ("-0", "WORD"),
        ("5x", "WORD"),
        ("Move", "WORD"),
        ("@", "WORD"),
    ],
)  # type: ignore[misc]
def test_word_classification(word: str, expected: str) -> None:
    tok = Lexer(CharacterStream(word)).next_token()
    assert tok.type == expected
    assert tok.value == word


def test_keywords_are_case_sensitive() -> None:
    assert types("MOVE Loop IF") == ["WORD", "WORD", "WORD"]


def test_line_and_column_tracking() -> None:
    tokens = tokenize("move;\n  turnL ;")
    assert tokens[0] == Token("ACTION", "move", 1, 1)
    assert tokens[1] == Token("SEMICOLON", ";", 1, 5)
    assert tokens[2] == Token("ACTION", "turnL", 2, 3)
    assert tokens[3] == Token("SEMICOLON", ";", 2, 9)


def test_eof_token_is_last_and_repeats() -> None:
    lexer = Lexer(CharacterStream("  wait  "))
    assert lexer.next_token().value == "wait"
    assert lexer.next_token().type == "EOF"
    assert lexer.next_token().type == "EOF"


def test_empty_source() -> None:
    tokens = tokenize("")
    assert len(tokens) == 1
    assert tokens[0].type == "EOF"


def test_lexer_is_lazy() -> None:
    lexer = Lexer(CharacterStream("move; move;"))
    it = iter(lexer)
    assert next(it).value == "move"
    assert lexer.stream.position == 4


def test_token_is_immutable() -> None:
    tok = Token("ACTION", "move", 1, 1)
    with pytest.raises(AttributeError):
        tok.value = "wait"  # type: ignore[misc]


def test_token_hash_and_eq() -> None:
    assert Token("NUMBER", "1", 1, 1) == Token("NUMBER", "1", 1, 1)
    assert Token("NUMBER", "1", 1, 1) != Token("NUMBER", "1", 1, 2)
    assert len({Token("NUMBER", "1"), Token("NUMBER", "1")}) == 1
    assert repr(Token("NUMBER", "1")) == "Token(NUMBER, 1)"


def test_character_stream_past_end() -> None:
    stream = CharacterStream("x")
    assert stream.next() == "x"
    assert stream.peek() == ""
    with pytest.raises(EOFError):
        stream.next()


@given(st.text())  # type: ignore[misc]
def test_lexer_never_raises_and_keeps_all_text(source: str) -> None:
    tokens = tokenize(source)
    assert tokens[-1].type == "EOF"
    assert "".join(tok.value for tok in tokens[:-1]) == "".join(
        ch for ch in source if ch not in WHITESPACE
    )


@given(st.lists(st.sampled_from(["move", "{", "}", "(", ")", ",", ";", "12", "x"])))  # type: ignore[misc]
def test_punctuation_never_merges(parts: list[str]) -> None:
    source = "".join(parts)
    for tok in tokenize(source):
        if tok.type in ("LPAREN", "RPAREN", "LBRACE", "RBRACE", "COMMA", "SEMICOLON"):
            assert len(tok.value) == 1
        else:
            assert not any(ch in tok.value for ch in "{}(),;")
