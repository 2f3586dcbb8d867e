"""Parser gateway: tree-sitter JavaScript CST lowered to the ESTree-shaped node union."""

import logging
from pathlib import Path
from typing import Optional

import tree_sitter
import tree_sitter_javascript

from jqlint.domain.nodes import (
    CallExpression,
    Identifier,
    Literal,
    MemberExpression,
    Node,
    OtherNode,
)
from jqlint.domain.protocols import JavaScriptParserProtocol

logger = logging.getLogger(__name__)

_IDENTIFIER_TYPES: frozenset[str] = frozenset(
    {
        "identifier",
        "property_identifier",
        "shorthand_property_identifier",
        "statement_identifier",
        "undefined",
    }
)

_LEAF_TYPES: frozenset[str] = _IDENTIFIER_TYPES | {
    "string", "number", "true", "false", "null", "regex"}

# tree-sitter node type -> ESTree type for nodes the classifier treats as opaque
_ESTREE_KINDS: dict[str, str] = {
    "program": "Program",
    "object": "ObjectExpression",
    "pair": "Property",
    "array": "ArrayExpression",
    "function": "FunctionExpression",
    "function_expression": "FunctionExpression",
    "arrow_function": "ArrowFunctionExpression",
    "this": "ThisExpression",
    "new_expression": "NewExpression",
    "template_string": "TemplateLiteral",
    "private_property_identifier": "PrivateIdentifier",
    "expression_statement": "ExpressionStatement",
    "variable_declarator": "VariableDeclarator",
    "assignment_expression": "AssignmentExpression",
    "spread_element": "SpreadElement",
}

_SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


class _Lowering:
    """One-shot conversion of a tree-sitter tree for a single source text."""

    def __init__(self, data: bytes, source: str) -> None:
        self._data = data
        self._char_at: list[int] | None = None
        if len(data) != len(source):
            # Map byte offsets to character offsets for non-ASCII sources
            char_at: list[int] = []
            for index, char in enumerate(source):
                char_at.extend([index] * len(char.encode("utf-8")))
            char_at.append(len(source))
            self._char_at = char_at

    def lower(self, root: tree_sitter.Node) -> Node:
        """Lower with an explicit post-order stack so nesting depth is not bounded by recursion."""
        lowered: list[Node] = []
        stack: list[tuple[tree_sitter.Node, Optional[int]]] = [(root, None)]
        while stack:
            ts_node, child_count = stack.pop()
            if child_count is None:
                children = self._operands(ts_node)
                stack.append((ts_node, len(children)))
                stack.extend((child, None) for child in reversed(children))
                continue
            split = len(lowered) - child_count
            operands = tuple(lowered[split:])
            del lowered[split:]
            lowered.append(self._build(ts_node, operands))
        return lowered[0]

    def _operands(self, ts_node: tree_sitter.Node) -> list[tree_sitter.Node]:
        """Child CST nodes that become fields of the lowered node, in field order."""
        kind = ts_node.type
        if kind == "call_expression":
            operands = [ts_node.child_by_field_name("function")]
            ts_args = ts_node.child_by_field_name("arguments")
            if ts_args is not None:
                if ts_args.type != "arguments":
                    # Tagged template: tag`text`
                    operands.append(ts_args)
                else:
                    operands.extend(self._named(ts_args))
            return operands
        if kind == "member_expression":
            return [ts_node.child_by_field_name("object"), ts_node.child_by_field_name("property")]
        if kind == "subscript_expression":
            return [ts_node.child_by_field_name("object"), ts_node.child_by_field_name("index")]
        if kind in _LEAF_TYPES:
            return []
        return self._named(ts_node)

    def _build(self, ts_node: tree_sitter.Node, operands: tuple[Node, ...]) -> Node:
        kind = ts_node.type
        if kind == "parenthesized_expression" and len(operands) == 1:
            return operands[0]

        pos = {"range": self._range(ts_node), "loc": self._loc(ts_node)}
        if kind == "call_expression":
            return CallExpression(operands[0], operands[1:], **pos)
        if kind == "member_expression":
            return MemberExpression(operands[0], operands[1], False, **pos)
        if kind == "subscript_expression":
            return MemberExpression(operands[0], operands[1], True, **pos)
        if kind in _IDENTIFIER_TYPES:
            return Identifier(self._text(ts_node), **pos)
        if kind == "string":
            return Literal(self._string_value(ts_node), **pos)
        if kind == "number":
            return Literal(self._number_value(self._text(ts_node)), **pos)
        if kind in ("true", "false"):
            return Literal(kind == "true", **pos)
        if kind == "null":
            return Literal(None, **pos)
        if kind == "regex":
            return Literal(self._text(ts_node), **pos)
        return OtherNode(_ESTREE_KINDS.get(kind, kind), operands, **pos)

    @staticmethod
    def _named(ts_node: tree_sitter.Node) -> list[tree_sitter.Node]:
        return [c for c in ts_node.named_children if c.type != "comment"]

    def _text(self, ts_node: tree_sitter.Node) -> str:
        return self._data[ts_node.start_byte:ts_node.end_byte].decode("utf-8")

    def _offset(self, byte_offset: int) -> int:
        if self._char_at is None:
            return byte_offset
        return self._char_at[byte_offset]

    def _range(self, ts_node: tree_sitter.Node) -> tuple[int, int]:
        return (self._offset(ts_node.start_byte), self._offset(ts_node.end_byte))

    def _loc(self, ts_node: tree_sitter.Node) -> tuple[int, int]:
        row, byte_column = ts_node.start_point
        line_start = ts_node.start_byte - byte_column
        return (row + 1, self._offset(ts_node.start_byte) - self._offset(line_start))

    def _string_value(self, ts_node: tree_sitter.Node) -> str:
        parts: list[str] = []
        for child in ts_node.named_children:
            text = self._text(child)
            parts.append(self._unescape(text) if child.type == "escape_sequence" else text)
        return "".join(parts)

    @staticmethod
    def _unescape(sequence: str) -> str:
        body = sequence[1:]
        if body[:1] in ("x", "u"):
            digits = body[1:].strip("{}")
            try:
                return chr(int(digits, 16))
            except ValueError:
                return body
        if body in ("\n", "\r\n", "\r"):
            # Line continuation
            return ""
        return _SIMPLE_ESCAPES.get(body, body)

    @staticmethod
    def _number_value(text: str) -> int | float:
        cleaned = text.replace("_", "").rstrip("n")
        try:
            return int(cleaned, 0)
        except ValueError:
            pass
        try:
            return float(cleaned)
        except ValueError:
            return float("nan")


class TreeSitterGateway(JavaScriptParserProtocol):
    """Parses JavaScript with tree-sitter and lowers it to domain nodes."""

    def __init__(self) -> None:
        language = tree_sitter.Language(tree_sitter_javascript.language())
        self._parser = tree_sitter.Parser(language)

    def parse(self, source: str) -> Optional[Node]:
        """Return the Program node, or None when the source has syntax errors."""
        data = source.encode("utf-8")
        tree = self._parser.parse(data)
        if tree.root_node.has_error:
            logger.warning("Syntax error, skipping source (%d bytes)", len(data))
            return None
        return _Lowering(data, source).lower(tree.root_node)

    def parse_file(self, file_path: Path) -> Optional[Node]:
        """Parse a file and return the Program node."""
        try:
            source = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", file_path, exc)
            return None
        logger.debug("Parsing %s", file_path)
        return self.parse(source)
