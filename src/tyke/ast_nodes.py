"""Syntax tree node definitions for the Tyke language.

Every node carries an ordered ``children`` list. Literal nodes never have
children; composite nodes have a fixed arity, except ``Program``:

    A : integer

    VariableDeclaration
    `-- Integer (0)  ->  Symbol (A)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class NodeType(Enum):
    # Literals
    NONE = auto()
    INTEGER = auto()
    SYMBOL = auto()

    # Composites
    VARIABLE_DECLARATION = auto()
    VARIABLE_DECLARATION_INITIALIZED = auto()
    BINARY_OPERATOR = auto()
    PROGRAM = auto()


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass(eq=False)
class Node:
    """Base of all syntax nodes. Compare with ``compare``, not ``==``."""

    children: list[Node] = field(default_factory=list, init=False, repr=False)
    _owned: bool = field(default=False, init=False, repr=False)

    node_type = NodeType.NONE
    arity = 0  # None means unbounded

    def add_child(self, child: Node) -> Node:
        """Append ``child`` after the existing children and take ownership."""
        if child is self:
            raise ValueError("a node cannot be its own child")
        if child._owned:
            raise ValueError(f"{type(child).__name__} already has a parent")
        if self.arity is not None and len(self.children) >= self.arity:
            raise ValueError(
                f"{type(self).__name__} takes at most {self.arity} children"
            )
        child._owned = True
        self.children.append(child)
        return child

    def tag_copy(self) -> Node:
        """A fresh node of the same variant with a zero payload."""
        return type(self)()

    def label(self) -> str:
        return self.node_type.name.replace("_", " ")


# ── Literals ─────────────────────────────────────────────────────


@dataclass(eq=False)
class NoneNode(Node):
    """The definition of nothing."""

    def label(self) -> str:
        return "NONE"


@dataclass(eq=False)
class Integer(Node):
    value: int = 0

    node_type = NodeType.INTEGER

    def __post_init__(self) -> None:
        # Values saturate at the 64-bit signed bounds, as parsed literals do.
        self.value = max(INT64_MIN, min(INT64_MAX, self.value))

    def label(self) -> str:
        return f"INT:{self.value}"


@dataclass(eq=False)
class Symbol(Node):
    """A literal that is not any other literal."""

    name: str = ""

    node_type = NodeType.SYMBOL

    def label(self) -> str:
        return f"SYM:{self.name}" if self.name else "SYM"


# ── Composites ───────────────────────────────────────────────────


@dataclass(eq=False)
class VariableDeclaration(Node):
    """Children: the type node, then the symbol naming the variable."""

    node_type = NodeType.VARIABLE_DECLARATION
    arity = 2

    @property
    def type_node(self) -> Node | None:
        return self.children[0] if self.children else None

    @property
    def symbol(self) -> Node | None:
        return self.children[1] if len(self.children) > 1 else None


@dataclass(eq=False)
class VariableDeclarationInitialized(VariableDeclaration):
    """Like VariableDeclaration, plus the initializer as third child."""

    node_type = NodeType.VARIABLE_DECLARATION_INITIALIZED
    arity = 3

    @property
    def initializer(self) -> Node | None:
        return self.children[2] if len(self.children) > 2 else None


@dataclass(eq=False)
class BinaryOperator(Node):
    """Children: the left and right operands."""

    node_type = NodeType.BINARY_OPERATOR
    arity = 2


@dataclass(eq=False)
class Program(Node):
    """Expressions to execute in sequence."""

    node_type = NodeType.PROGRAM
    arity = None


# ── Tree operations ──────────────────────────────────────────────


def compare(a: Node | None, b: Node | None) -> bool:
    """Structural equality of two nodes.

    Two absent nodes are equal. Literals compare by variant and payload.
    Composite nodes never compare equal; deep comparison is not implemented.
    """
    if a is None or b is None:
        return a is None and b is None
    if a.node_type != b.node_type:
        return False
    if isinstance(a, Integer) and isinstance(b, Integer):
        return a.value == b.value
    if isinstance(a, Symbol) and isinstance(b, Symbol):
        return a.name == b.name
    return a.node_type == NodeType.NONE


def format_tree(node: Node | None, indent: int = 0) -> str:
    """Readable dump, one node per line, children indented four spaces."""
    if node is None:
        return ""
    lines: list[str] = []
    _dump(node, indent, lines)
    return "\n".join(lines)


def _dump(node: Node, indent: int, lines: list[str]) -> None:
    lines.append(" " * indent + node.label())
    for child in node.children:
        _dump(child, indent + 4, lines)
