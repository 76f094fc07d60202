"""
Shared vocabulary for the RoboLang toolchain.

Defines the keyword tables, token types, terminal patterns and default settings
used by the lexer, parser, interpreter and CLI.

Exports:
    ACTIONS, CONTROL_KEYWORDS, RELOPS, SENSORS, INDEXED_SENSORS
    PUNCTUATION, token_hashmap
    NUMBER_PATTERN
    NODE_KINDS
    DEFAULT_MAX_DEPTH, DEFAULT_FUEL, FUEL_PICKUP, NO_BARREL
"""

import re

# Terminals of the grammar
ACTIONS: tuple[str, ...] = (
    "move",
    "turnL",
    "turnR",
    "turnAround",
    "shieldOn",
    "shieldOff",
    "takeFuel",
    "wait",
)

CONTROL_KEYWORDS: tuple[str, ...] = ("loop", "if", "else", "while")

RELOPS: tuple[str, ...] = ("lt", "gt", "eq")

SENSORS: tuple[str, ...] = (
    "fuelLeft",
    "oppLR",
    "oppFB",
    "numBarrels",
    "barrelLR",
    "barrelFB",
    "wallDist",
)

# Sensors that accept an optional "(NUM)" barrel index
INDEXED_SENSORS: frozenset[str] = frozenset({"barrelLR", "barrelFB"})

PUNCTUATION: dict[str, str] = {
    "(": "LPAREN",
    ")": "RPAREN",
    "{": "LBRACE",
    "}": "RBRACE",
    ",": "COMMA",
    ";": "SEMICOLON",
}

token_hashmap: dict[str, str] = {
    **{a: "ACTION" for a in ACTIONS},
    **{k: "KEYWORD" for k in CONTROL_KEYWORDS},
    **{r: "RELOP" for r in RELOPS},
    **{s: "SENSOR" for s in SENSORS},
    **PUNCTUATION,
}

NUMBER_PATTERN = re.compile(r"-?[1-9][0-9]*|0")

NODE_KINDS: frozenset[str] = frozenset(
    {
        "program",
        "block",
        "action",
        "loop",
        "if",
        "while",
        "compare",
        "sensor",
        "number",
    }
)

# Parser / robot defaults
DEFAULT_MAX_DEPTH = 100
DEFAULT_FUEL = 100
FUEL_PICKUP = 10
NO_BARREL = 2**31 - 1

__all__ = [
    "ACTIONS",
    "CONTROL_KEYWORDS",
    "DEFAULT_FUEL",
    "DEFAULT_MAX_DEPTH",
    "FUEL_PICKUP",
    "INDEXED_SENSORS",
    "NODE_KINDS",
    "NO_BARREL",
    "NUMBER_PATTERN",
    "PUNCTUATION",
    "RELOPS",
    "SENSORS",
    "token_hashmap",
]
