"""
Defines the abstract syntax tree (AST) node structure for RoboLang.

Classes:
    ASTNode:
        A node in the syntax tree, produced by the parser and consumed by the
        interpreter and the emitters. Nodes are immutable once constructed.

    ASTDict:
        TypedDict representation for serializing ASTNode instances to plain Python
        dictionaries, suitable for JSON output or debugging.

Each ASTNode tracks:
    kind (str): One of the closed set of node kinds in `NODE_KINDS`
        ("program", "block", "action", "loop", "if", "while", "compare",
        "sensor", "number").
    value (str | int | ASTNode, optional): The action/sensor/relop keyword, the
        integer literal, or (for "if"/"while") the condition node.
    children (tuple[ASTNode, ...]): Primary child nodes.
    else_children (tuple[ASTNode, ...]): The else block of an "if".
    line (int): Source line number for error messages.
    col (int): Source column number for error messages.

Example:
    node = ASTNode("loop", children=[ASTNode("block", children=[ASTNode("action", "move")])])
"""

from typing import Any, Iterable, TypedDict, Union

from robo.robo_constants import NODE_KINDS

NodeValue = Union[str, int, "ASTNode", None]


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an ASTNode used for serialization.

    Fields:
        kind (str): The node kind (e.g. "action", "while", "sensor").
        value (Any): The node's value, which may be a string, an int, or a nested ASTDict.
        line (int): Line number in the source where the node originates.
        col (int): Column number in the source where the node originates.
        children (list[ASTDict]): Primary child nodes.
        else_children (list[ASTDict]): Else-branch nodes of an "if".
    """

    kind: str
    value: Any
    line: int
    col: int
    children: list["ASTDict"]
    else_children: list["ASTDict"]


class ASTNode:
    """
    Represents a node in the abstract syntax tree for RoboLang.

    The node kinds form a closed set; constructing a node with any other kind is
    rejected. Once built, a node cannot be modified: children are stored as tuples
    and attribute assignment raises AttributeError.

    Args:
        kind (str): The node kind, one of `NODE_KINDS`.
        value (str | int | ASTNode, optional): Keyword, integer literal or condition node.
        children (Iterable[ASTNode], optional): Primary child nodes.
        line (int): Source line number (default is 0).
        col (int): Source column number (default is 0).
        else_children (Iterable[ASTNode], optional): Else-branch nodes.

    Raises:
        ValueError: If `kind` is not a known node kind.
    """

    __slots__ = ("kind", "value", "children", "else_children", "line", "col")

    def __init__(
        self,
        kind: str,
        value: NodeValue = None,
        children: Iterable["ASTNode"] | None = None,
        line: int = 0,
        col: int = 0,
        else_children: Iterable["ASTNode"] | None = None,
    ):
        if kind not in NODE_KINDS:
            raise ValueError(f"Unknown AST node kind: {kind!r}")
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "children", tuple(children or ()))
        object.__setattr__(self, "else_children", tuple(else_children or ()))
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"ASTNode is immutable (cannot set {name!r})")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"ASTNode is immutable (cannot delete {name!r})")

    def __repr__(self) -> str:
        parts = [f"{self.kind}"]
        if self.value is not None:
            parts.append(f"value={repr(self.value)}")
        if self.children:
            preview = ", ".join(repr(c) for c in self.children[:3])
            if len(self.children) > 3:
                preview += ", ..."
            parts.append(f"children=[{preview}]")
        if self.else_children:
            preview = ", ".join(repr(c) for c in self.else_children[:3])
            parts.append(f"else_children=[{preview}]")
        return f"ASTNode({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return False
        return (
            self.kind == other.kind
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
            and self.children == other.children
            and self.else_children == other.else_children
        )

    __hash__ = None  # type: ignore[assignment]

    def same_shape(self, other: "ASTNode") -> bool:
        """Structural equality that ignores source positions.

        Walks both trees with an explicit stack, so depth is not limited by
        the Python call stack.
        """
        pending: list[tuple[Any, Any]] = [(self, other)]
        while pending:
            a, b = pending.pop()
            if not isinstance(b, ASTNode) or a.kind != b.kind:
                return False
            if isinstance(a.value, ASTNode):
                pending.append((a.value, b.value))
            elif isinstance(b.value, ASTNode) or a.value != b.value:
                return False
            if len(a.children) != len(b.children):
                return False
            if len(a.else_children) != len(b.else_children):
                return False
            pending.extend(zip(a.children, b.children))
            pending.extend(zip(a.else_children, b.else_children))
        return True

    def to_dict(self) -> ASTDict:
        val: Any = self.value
        if isinstance(val, ASTNode):
            val = val.to_dict()

        return {
            "kind": self.kind,
            "value": val,
            "line": self.line,
            "col": self.col,
            "children": [c.to_dict() for c in self.children],
            "else_children": [c.to_dict() for c in self.else_children],
        }
