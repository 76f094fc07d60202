"""
Serializes RoboLang ASTs to JSON.

The `JsonEmitter` writes the `ASTNode.to_dict()` form of a program, indented for
reading. Source positions are kept so tools can map nodes back to program text.
"""

import json

from robo.robo_ast import ASTNode


class JsonEmitter:
    """Emits a program tree as a JSON document.

    Attributes:
        indent (int): Indentation passed to `json.dumps`.
    """

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent
        self.documents: list[str] = []

    def get_output(self) -> str:
        return "\n".join(self.documents)

    def emit_program(self, node: ASTNode) -> None:
        self.documents.append(json.dumps(node.to_dict(), indent=self.indent))
