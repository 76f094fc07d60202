"""
RoboLang Parser

Parses RoboLang tokens into an abstract syntax tree (AST).

This module implements a single-pass recursive-descent parser with one method per
grammar production. It turns the flat list of lexer-generated `Token` objects into
a tree of immutable `ASTNode` instances rooted at a "program" node, which the
interpreter then executes against a robot.

Grammar
-------
    PROG   ::= STMT*
    STMT   ::= ACT ";" | LOOP | IF | WHILE
    ACT    ::= "move" | "turnL" | "turnR" | "turnAround" |
               "shieldOn" | "shieldOff" | "takeFuel" | "wait"
    LOOP   ::= "loop" BLOCK
    IF     ::= "if" "(" COND ")" BLOCK [ "else" BLOCK ]
    WHILE  ::= "while" "(" COND ")" BLOCK
    BLOCK  ::= "{" STMT+ "}"
    COND   ::= RELOP "(" SENS "," NUM ")"
    RELOP  ::= "lt" | "gt" | "eq"
    SENS   ::= "fuelLeft" | "oppLR" | "oppFB" | "numBarrels" |
               "barrelLR" [ "(" NUM ")" ] | "barrelFB" [ "(" NUM ")" ] |
               "wallDist"
    NUM    ::= "-?[1-9][0-9]*|0"

Parser Behavior
---------------
- Looks at most one token ahead (trailing `else`, closing `}`, optional sensor index).
- No backtracking and no error recovery: the first syntax error aborts the parse.
- Every failure carries the reason plus up to five following tokens of context.
- Block nesting is bounded by `max_depth`.

Entry Points
------------
- `parse()`: Parse a full program into a "program" ASTNode.
- `parse_source(source)`: Tokenize and parse program text in one call.

Raises
------
ParserFailure
    Raised when a required token is missing or a token is not allowed where it appears.
"""

from __future__ import annotations

import logging
import re
from typing import NoReturn

from robo.robo_ast import ASTNode
from robo.robo_constants import DEFAULT_MAX_DEPTH, INDEXED_SENSORS, NUMBER_PATTERN
from robo.robo_lexer import Token, tokenize

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

CONTEXT_TOKENS = 5

# Error messages
MISSING_SEMICOLON = "Missing semicolon"
MISSING_OPEN_BRACE = "Missing opening brace"
MISSING_CLOSE_BRACE = "Missing closing brace"
MISSING_OPEN_PAREN = "Missing opening parenthesis"
MISSING_CLOSE_PAREN = "Missing closing parenthesis"
MISSING_COMMA = "Missing comma"
EMPTY_BLOCK = "Block cannot be empty"
INVALID_RELOP = "Invalid relational operator"
INVALID_SENSOR = "Invalid sensor"
INVALID_NUMBER = "Invalid number"
UNEXPECTED_EOF = "Unexpected end of input"
TOO_DEEP = "Nesting too deep"


class ParserFailure(SyntaxError):
    """Raised when program text does not match the RoboLang grammar.

    Attributes:
        reason (str): What was expected or what went wrong (e.g. "Missing semicolon").
        context (list[str]): Up to five tokens following the failure point.
        line (int): Line of the token where parsing stopped.
        col (int): Column of the token where parsing stopped.

    Example:
        raise ParserFailure("Missing semicolon", ["turnL", ";"], 1, 6)
    """

    def __init__(
        self, reason: str, context: list[str] | None = None, line: int = 0, col: int = 0
    ):
        self.reason = reason
        self.context = context or []
        self.line = line
        self.col = col
        msg = f"{reason}\n   @ ..."
        for text in self.context:
            msg += f" {text}"
        super().__init__(msg + "...")


class Parser:
    """
    RoboLang Parser Class

    Transforms a list of tokens into a "program" ASTNode. Each grammar nonterminal
    has its own `parse_*` method which consumes exactly the tokens of its production
    and leaves the cursor on the first unconsumed token.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream to be parsed.
    position : int
        Current index into the token stream.
    depth : int
        Current block nesting depth.
    max_depth : int
        Deepest block nesting accepted before failing.

    Raises
    ------
    ParserFailure
        When an invalid construct or malformed syntax is encountered.
    """

    def __init__(self, tokens: list[Token], max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.depth: int = 0
        self.max_depth: int = max_depth

    # Cursor helpers

    def current(self) -> Token:
        return (
            self.tokens[self.position]
            if self.position < len(self.tokens)
            else Token("EOF", "EOF")
        )

    def advance(self) -> Token:
        tok = self.current()
        if tok.type != "EOF":
            self.position += 1
        return tok

    def fail(self, message: str) -> NoReturn:
        """Raise a ParserFailure with up to five tokens of trailing context."""
        tok = self.current()
        context: list[str] = []
        index = self.position
        while len(context) < CONTEXT_TOKENS and index < len(self.tokens):
            if self.tokens[index].type == "EOF":
                break
            context.append(self.tokens[index].value)
            index += 1
        raise ParserFailure(message, context, tok.line, tok.col)

    def check(self, pattern: str | re.Pattern[str]) -> bool:
        """Does the next token's text fully match `pattern`?"""
        tok = self.current()
        return tok.type != "EOF" and re.fullmatch(pattern, tok.value) is not None

    def check_for(self, *types: str) -> bool:
        """Consume the next token only if its type is one of `types`."""
        if self.current().type in types:
            self.advance()
            return True
        return False

    def require(self, pattern: str | re.Pattern[str], message: str) -> Token:
        """Consume and return the next token if its text matches, otherwise fail."""
        if self.check(pattern):
            return self.advance()
        self.fail(message)

    def match(self, *types: str, message: str) -> Token:
        """Consume and return the next token if its type is one of `types`, otherwise fail."""
        tok = self.current()
        if tok.type in types:
            return self.advance()
        self.fail(message)

    # Grammar productions

    def parse(self) -> ASTNode:
        """Parse a full program and return its "program" node."""
        program = self.parse_program()
        logger.debug("Parsed program with %d top-level statements", len(program.children))
        return program

    def parse_program(self) -> ASTNode:
        """PROG ::= STMT*"""
        first = self.current()
        statements: list[ASTNode] = []
        while self.current().type != "EOF":
            statements.append(self.parse_statement())
        return ASTNode("program", children=statements, line=first.line, col=first.col)

    def parse_statement(self) -> ASTNode:
        """STMT ::= ACT ";" | LOOP | IF | WHILE"""
        tok = self.current()

        if tok.type == "EOF":
            self.fail(UNEXPECTED_EOF)
        if tok.type == "ACTION":
            return self.parse_action()
        if tok.type == "KEYWORD" and tok.value == "loop":
            return self.parse_loop()
        if tok.type == "KEYWORD" and tok.value == "if":
            return self.parse_if()
        if tok.type == "KEYWORD" and tok.value == "while":
            return self.parse_while()

        self.fail(f"Unexpected token ({tok.value})")

    def parse_action(self) -> ASTNode:
        """ACT ";" """
        act_tok = self.match("ACTION", message=f"Unexpected token ({self.current().value})")
        self.match("SEMICOLON", message=MISSING_SEMICOLON)
        return ASTNode("action", act_tok.value, line=act_tok.line, col=act_tok.col)

    def parse_loop(self) -> ASTNode:
        """LOOP ::= "loop" BLOCK"""
        loop_tok = self.advance()
        body = self.parse_block()
        return ASTNode("loop", children=[body], line=loop_tok.line, col=loop_tok.col)

    def parse_if(self) -> ASTNode:
        """IF ::= "if" "(" COND ")" BLOCK [ "else" BLOCK ]"""
        if_tok = self.advance()
        cond = self.parse_parenthesized_condition()
        then_block = self.parse_block()

        else_block: list[ASTNode] = []
        if self.current().type == "KEYWORD" and self.current().value == "else":
            self.advance()
            else_block.append(self.parse_block())

        return ASTNode(
            "if",
            value=cond,
            children=[then_block],
            else_children=else_block,
            line=if_tok.line,
            col=if_tok.col,
        )

    def parse_while(self) -> ASTNode:
        """WHILE ::= "while" "(" COND ")" BLOCK"""
        while_tok = self.advance()
        cond = self.parse_parenthesized_condition()
        body = self.parse_block()
        return ASTNode(
            "while", value=cond, children=[body], line=while_tok.line, col=while_tok.col
        )

    def parse_parenthesized_condition(self) -> ASTNode:
        self.match("LPAREN", message=MISSING_OPEN_PAREN)
        cond = self.parse_condition()
        self.match("RPAREN", message=MISSING_CLOSE_PAREN)
        return cond

    def parse_block(self) -> ASTNode:
        """BLOCK ::= "{" STMT+ "}" """
        open_tok = self.match("LBRACE", message=MISSING_OPEN_BRACE)
        if self.current().type == "RBRACE":
            self.fail(EMPTY_BLOCK)

        if self.depth >= self.max_depth:
            self.fail(TOO_DEEP)
        self.depth += 1

        statements: list[ASTNode] = []
        while self.current().type != "RBRACE":
            if self.current().type == "EOF":
                self.fail(MISSING_CLOSE_BRACE)
            statements.append(self.parse_statement())
        self.advance()

        self.depth -= 1
        return ASTNode(
            "block", children=statements, line=open_tok.line, col=open_tok.col
        )

    def parse_condition(self) -> ASTNode:
        """COND ::= RELOP "(" SENS "," NUM ")" """
        op_tok = self.parse_relop()
        self.match("LPAREN", message=MISSING_OPEN_PAREN)
        sensor = self.parse_sensor()
        self.match("COMMA", message=MISSING_COMMA)
        number = self.parse_number()
        self.match("RPAREN", message=MISSING_CLOSE_PAREN)
        return ASTNode(
            "compare",
            value=op_tok.value,
            children=[sensor, number],
            line=op_tok.line,
            col=op_tok.col,
        )

    def parse_relop(self) -> Token:
        """RELOP ::= "lt" | "gt" | "eq" """
        return self.match("RELOP", message=INVALID_RELOP)

    def parse_sensor(self) -> ASTNode:
        """SENS ::= ... | "barrelLR" [ "(" NUM ")" ] | "barrelFB" [ "(" NUM ")" ] | ..."""
        sens_tok = self.match("SENSOR", message=INVALID_SENSOR)

        index: list[ASTNode] = []
        if sens_tok.value in INDEXED_SENSORS and self.check_for("LPAREN"):
            index.append(self.parse_number())
            self.match("RPAREN", message=MISSING_CLOSE_PAREN)

        return ASTNode(
            "sensor",
            value=sens_tok.value,
            children=index,
            line=sens_tok.line,
            col=sens_tok.col,
        )

    def parse_number(self) -> ASTNode:
        """NUM ::= "-?[1-9][0-9]*|0" """
        num_tok = self.require(NUMBER_PATTERN, INVALID_NUMBER)
        return ASTNode("number", int(num_tok.value), line=num_tok.line, col=num_tok.col)


def parse_source(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> ASTNode:
    """Tokenize and parse RoboLang source text into a "program" ASTNode."""
    return Parser(tokenize(source), max_depth=max_depth).parse()


__all__ = ["Parser", "ParserFailure", "parse_source"]
