"""JavaScript expression nodes consulted by the collection classifier.

The union is closed: CallExpression, MemberExpression, Identifier and Literal
carry the fields the classifier reads; everything else is an OtherNode whose
``kind`` keeps the ESTree type name (ObjectExpression, FunctionExpression, ...).
Nodes never own a parent reference; ParentMap is built once per file.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import ClassVar

Range = tuple[int, int]
Location = tuple[int, int]

FUNCTION_KINDS: frozenset[str] = frozenset(
    {"FunctionExpression", "ArrowFunctionExpression"})


@dataclass(frozen=True, eq=False)
class Node:
    """Base node. ``range`` is (start, end) in characters, ``loc`` is (line, column)."""

    TYPE: ClassVar[str] = "Node"

    range: Range = field(default=(0, 0), kw_only=True)
    loc: Location = field(default=(1, 0), kw_only=True)

    @property
    def type(self) -> str:
        return self.TYPE

    def children(self) -> tuple["Node", ...]:
        return ()


@dataclass(frozen=True, eq=False)
class Identifier(Node):
    TYPE: ClassVar[str] = "Identifier"

    name: str


@dataclass(frozen=True, eq=False)
class Literal(Node):
    TYPE: ClassVar[str] = "Literal"

    value: str | int | float | bool | None

    @property
    def is_string(self) -> bool:
        return isinstance(self.value, str)

    @property
    def is_number(self) -> bool:
        # bool is an int subclass; true/false are not numbers in JavaScript
        return isinstance(self.value, (int, float)) and not isinstance(self.value, bool)


@dataclass(frozen=True, eq=False)
class MemberExpression(Node):
    TYPE: ClassVar[str] = "MemberExpression"

    object: Node
    property: Node
    computed: bool = False

    def children(self) -> tuple[Node, ...]:
        return (self.object, self.property)

    @property
    def property_name(self) -> str | None:
        """Name of a plain ``obj.name`` access; None for computed or private keys."""
        if self.computed or not isinstance(self.property, Identifier):
            return None
        return self.property.name


@dataclass(frozen=True, eq=False)
class CallExpression(Node):
    TYPE: ClassVar[str] = "CallExpression"

    callee: Node
    arguments: tuple[Node, ...] = ()

    def children(self) -> tuple[Node, ...]:
        return (self.callee, *self.arguments)


@dataclass(frozen=True, eq=False)
class OtherNode(Node):
    """Any node kind the classifier treats as opaque."""

    kind: str
    nodes: tuple[Node, ...] = ()

    @property
    def type(self) -> str:
        return self.kind

    def children(self) -> tuple[Node, ...]:
        return self.nodes


class ParentMap:
    """File-scoped child -> parent lookup populated by a single pre-pass."""

    def __init__(self, parents: dict[Node, Node]) -> None:
        self._parents = parents

    @classmethod
    def build(cls, root: Node) -> "ParentMap":
        parents: dict[Node, Node] = {}
        stack = [root]
        while stack:
            node = stack.pop()
            for child in node.children():
                parents[child] = node
                stack.append(child)
        return cls(parents)

    def parent_of(self, node: Node) -> Node | None:
        return self._parents.get(node)

    def is_callee(self, node: Node) -> bool:
        """True when ``node`` is the callee of its parent call expression."""
        parent = self._parents.get(node)
        return isinstance(parent, CallExpression) and parent.callee is node

    def __len__(self) -> int:
        return len(self._parents)


def walk(root: Node) -> Iterator[tuple[Node, bool]]:
    """Yield (node, entering) pairs in depth-first order, post-order on exit."""
    stack: list[tuple[Node, bool]] = [(root, True)]
    while stack:
        node, entering = stack.pop()
        yield node, entering
        if entering:
            stack.append((node, False))
            for child in reversed(node.children()):
                stack.append((child, True))
