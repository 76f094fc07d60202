"""
Provides the `Transpiler` class and emitter interface for turning RoboLang ASTs into text.

Classes and Features:
    - Emitter (Protocol): Interface for all backend emitters. Requires `__init__` and `get_output`.
    - SourceEmitter: Writes canonical RoboLang program text.
    - JsonEmitter: Writes the tree as JSON.
    - Transpiler: Picks the emitter for a target ("robo", "json") and dispatches
      the program node to the matching `emit_*` method.

Example:
    >>> transpiler = Transpiler("robo")
    >>> print(transpiler.transpile(parse_source("loop{move;}")))
    loop {
        move;
    }

Raises:
    ValueError: If the target is not supported.
    TypeError: If the root is not a "program" ASTNode.
    NotImplementedError: If the emitter lacks an `emit_*` method for a node kind.
"""

from typing import Protocol

from robo.emitters.json_emitter import JsonEmitter
from robo.emitters.source_emitter import SourceEmitter
from robo.robo_ast import ASTNode


class Emitter(Protocol):  # pragma: no cover
    """Protocol for all RoboLang emitters.

    Methods:
        __init__(): Initializes the emitter.
        get_output(): Returns the complete emitted text as a string.
    """

    def __init__(self) -> None: ...  # pragma: no cover

    def get_output(self) -> str: ...  # pragma: no cover


EmitterType = type[Emitter]
"""Alias for a concrete Emitter class type."""

TARGETS: dict[str, EmitterType] = {
    "robo": SourceEmitter,
    "source": SourceEmitter,
    "json": JsonEmitter,
}


class Transpiler:
    """Dispatches RoboLang AST nodes to the emitter for an output target.

    Attributes:
        emitter (Emitter): The selected emitter instance for the output target.
    """

    def __init__(self, target: str) -> None:
        """Initializes the transpiler with the desired output target.

        Args:
            target: The desired output format ("robo", "source" or "json").

        Raises:
            ValueError: If the target is not supported.
        """
        target = target.lower()
        if target not in TARGETS:
            raise ValueError(f"Unknown transpilation target: {target!r}")
        self.emitter: Emitter = TARGETS[target]()

    def transpile(self, program: ASTNode) -> str:
        """Transpiles a program tree into text for the selected target.

        Args:
            program: The "program" ASTNode returned by the parser.

        Returns:
            The emitted text.

        Raises:
            TypeError: If `program` is not a "program" ASTNode.
        """
        if not isinstance(program, ASTNode) or program.kind != "program":
            raise TypeError("Transpiler expects a 'program' ASTNode.")
        self._visit(program)
        return self.emitter.get_output()

    def _visit(self, node: ASTNode) -> None:
        """Invokes the emit method for a given AST node.

        Raises:
            NotImplementedError: If the emitter does not support the node kind.
        """
        method_name = f"emit_{node.kind}"
        if hasattr(self.emitter, method_name):
            emit_method = getattr(self.emitter, method_name)
            emit_method(node)
        else:
            raise NotImplementedError(
                f"No emitter method for node kind '{node.kind}' "
                f"(line {node.line}, col {node.col})"
            )


def format_program(program: ASTNode) -> str:
    """Return canonical RoboLang text for `program`."""
    return Transpiler("robo").transpile(program)


__all__ = ["Emitter", "Transpiler", "TARGETS", "format_program"]
