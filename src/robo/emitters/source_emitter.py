"""
Translates RoboLang AST nodes back into canonical RoboLang program text.

This module defines the `SourceEmitter` class, which pretty-prints a parsed program
with one statement per line and four-space indentation. Parsing the emitted text
again yields a tree of the same shape, which makes the emitter useful both as a
formatter and as a way to inspect what the parser built.

Behavior:
    - Emits actions as `move;`, loops as `loop {`, conditionals as
      `if (lt(fuelLeft, 5)) {` with `} else {` on the closing-brace line.
    - Indexed barrel sensors keep their index: `barrelLR(2)`.
    - Maintains a code buffer (`lines`) which is retrieved with `get_output()`.

Raises:
    - `TypeError`: If a conditional node does not hold a condition node.
    - `NotImplementedError`: If a node kind has no emitter.
"""

from robo.robo_ast import ASTNode


class SourceEmitter:
    """Emits RoboLang source code from AST nodes.

    Attributes:
        lines (list[str]): Accumulated lines of emitted code.
        indent (int): Current indentation level.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return "    " * self.indent

    def get_output(self) -> str:
        return "\n".join(self.lines)

    # Expressions

    def emit_expr(self, node: ASTNode) -> str:
        method = getattr(self, f"emit_expr_{node.kind}", None)
        if method is None:
            raise NotImplementedError(f"No expression emitter for kind '{node.kind}'")
        result: str = method(node)
        return result

    def emit_expr_number(self, node: ASTNode) -> str:
        return str(node.value)

    def emit_expr_sensor(self, node: ASTNode) -> str:
        if node.children:
            return f"{node.value}({self.emit_expr(node.children[0])})"
        return str(node.value)

    def emit_expr_compare(self, node: ASTNode) -> str:
        sensor = self.emit_expr(node.children[0])
        number = self.emit_expr(node.children[1])
        return f"{node.value}({sensor}, {number})"

    def emit_condition(self, node: ASTNode) -> str:
        if not isinstance(node.value, ASTNode):
            raise TypeError(f"Expected condition node in value of '{node.kind}'")
        return self.emit_expr(node.value)

    # Statements

    def emit_program(self, node: ASTNode) -> None:
        for stmt in node.children:
            self._visit(stmt)

    def emit_block(self, node: ASTNode) -> None:
        """Emits the statements of a block one level deeper. Braces belong to the owner."""
        self.indent += 1
        for stmt in node.children:
            self._visit(stmt)
        self.indent -= 1

    def emit_action(self, node: ASTNode) -> None:
        self.lines.append(f"{self.indent_str()}{node.value};")

    def emit_loop(self, node: ASTNode) -> None:
        self.lines.append(f"{self.indent_str()}loop {{")
        self._visit(node.children[0])
        self.lines.append(f"{self.indent_str()}}}")

    def emit_while(self, node: ASTNode) -> None:
        cond = self.emit_condition(node)
        self.lines.append(f"{self.indent_str()}while ({cond}) {{")
        self._visit(node.children[0])
        self.lines.append(f"{self.indent_str()}}}")

    def emit_if(self, node: ASTNode) -> None:
        """
        Emits an `if` statement with optional `else` block.

        Parameters
        ----------
        node : ASTNode
            The if-node with condition in `value`, then-block in `children`, and
            optional else-block in `else_children`.
        """
        cond = self.emit_condition(node)
        self.lines.append(f"{self.indent_str()}if ({cond}) {{")
        self._visit(node.children[0])
        if node.else_children:
            self.lines.append(f"{self.indent_str()}}} else {{")
            self._visit(node.else_children[0])
        self.lines.append(f"{self.indent_str()}}}")

    def _visit(self, node: ASTNode) -> None:
        method = getattr(self, f"emit_{node.kind}", None)
        if method is None:
            raise NotImplementedError(
                f"No emitter method for node kind '{node.kind}' "
                f"(line {node.line}, col {node.col})"
            )
        method(node)
