"""
Lexical analyzer for the RoboLang robot-control language.

This module provides the components that turn raw program text into tokens:

Classes:
    CharacterStream: Cursor over the program text that tracks line and column.
    Token: One classified word or punctuation mark, with where it started.
    Lexer: Pulls tokens off a CharacterStream on demand, ending with EOF.

Features:
    - Skips whitespace (spaces, tabs, newlines)
    - Emits each of `{ } ( ) , ;` as its own token, never merged with neighbours
    - Groups every other run of characters into one word and classifies it as
        * ACTION, KEYWORD, RELOP or SENSOR (exact, case-sensitive keyword match)
        * NUMBER (text matching `-?[1-9][0-9]*|0`)
        * WORD (anything else, rejected later by the parser)

The lexer never raises: every character ends up in some token, and the parser
decides what is legal.

Example:
    >>> lexer = Lexer(CharacterStream("move;"))
    >>> lexer.next_token()
    Token(ACTION, move)
    >>> lexer.next_token()
    Token(SEMICOLON, ;)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
    - token_hashmap
"""

from typing import Any, Iterator

from robo.robo_constants import NUMBER_PATTERN, PUNCTUATION, token_hashmap

WHITESPACE = " \t\r\n\f\v"


class CharacterStream:
    """
    Character cursor over RoboLang program text.

    Attributes:
        source (str): The program text.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consume one character, moving to column 1 of the next line after "\\n".

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self) -> str:
        """Returns the next character without advancing, or "" at end of input."""
        if self.end_of_file():
            return ""
        return self.source[self.position]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token.

    Attributes:
        type (str): The token type (e.g. 'ACTION', 'NUMBER', 'LBRACE', 'EOF').
        value (str): The raw text of the token.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    __slots__ = ("type", "value", "line", "col")

    def __init__(self, type_: str, value: str, line: int = 0, col: int = 0):
        object.__setattr__(self, "type", type_)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable (cannot set {name!r})")

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))


class Lexer:
    """Lexical analyzer for RoboLang.

    Takes a CharacterStream and produces Token objects one at a time, on demand.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek() in WHITESPACE:
            self.advance()

    def is_delimiter(self, ch: str) -> bool:
        return ch == "" or ch in WHITESPACE or ch in PUNCTUATION

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token, or an EOF token once the source is exhausted.
        """
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token("EOF", "EOF", line, col)

        # 1. Punctuation always stands alone
        ch = self.peek()
        if ch in PUNCTUATION:
            self.advance()
            return Token(PUNCTUATION[ch], ch, line, col)

        # 2. Word: everything up to the next whitespace or punctuation
        word = ""
        while not self.is_delimiter(self.peek()):
            word += self.advance()

        if word in token_hashmap:
            return Token(token_hashmap[word], word, line, col)
        if NUMBER_PATTERN.fullmatch(word):
            return Token("NUMBER", word, line, col)
        return Token("WORD", word, line, col)

    def __iter__(self) -> Iterator[Token]:
        """Yields tokens lazily up to and including EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == "EOF":
                return


def tokenize(source: str) -> list[Token]:
    """Tokenizes `source` into a list of tokens terminated by an EOF token."""
    return list(Lexer(CharacterStream(source)))


__all__ = ["CharacterStream", "Lexer", "Token", "token_hashmap", "tokenize"]
