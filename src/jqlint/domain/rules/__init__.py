"""Domain models for rules, their run context and diagnostics."""

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol, Union

from jqlint.domain.classifier import NodeClassifier
from jqlint.domain.config import LintSettings
from jqlint.domain.nodes import Node, ParentMap

__all__ = [
    "Diagnostic",
    "FixFunction",
    "RuleContext",
    "RuleDescriptor",
    "RuleDocs",
    "RuleFixer",
    "RuleMeta",
    "TextEdit",
    "Visitor",
]


@dataclass(frozen=True)
class TextEdit:
    """Replace source characters ``range`` with ``text``. Applied by the host."""

    range: tuple[int, int]
    text: str


class RuleFixer:
    """Fix builder handed to fix functions. Produces edits, never applies them."""

    def replace_text(self, node: Node, text: str) -> TextEdit:
        return TextEdit(node.range, text)

    def replace_text_range(self, source_range: tuple[int, int], text: str) -> TextEdit:
        return TextEdit(source_range, text)

    def insert_text_before(self, node: Node, text: str) -> TextEdit:
        return self.insert_text_before_range(node.range, text)

    def insert_text_after(self, node: Node, text: str) -> TextEdit:
        return self.insert_text_after_range(node.range, text)

    def insert_text_before_range(self, source_range: Sequence[int], text: str) -> TextEdit:
        start = source_range[0]
        return TextEdit((start, start), text)

    def insert_text_after_range(self, source_range: Sequence[int], text: str) -> TextEdit:
        end = source_range[-1]
        return TextEdit((end, end), text)

    def remove(self, node: Node) -> TextEdit:
        return TextEdit(node.range, "")


FixResult = Union[TextEdit, Iterable[TextEdit]]
FixFunction = Callable[[RuleFixer], FixResult]


@dataclass(frozen=True)
class Diagnostic:
    """A reported problem: node, composed message and optional fix."""

    rule_id: str
    node: Node
    message: str
    fix: FixFunction | None = None

    @property
    def line(self) -> int:
        return self.node.loc[0]

    @property
    def column(self) -> int:
        return self.node.loc[1]

    def edits(self) -> list[TextEdit]:
        """Evaluate the fix function, if any, into a flat list of edits."""
        if self.fix is None:
            return []
        result = self.fix(RuleFixer())
        if isinstance(result, TextEdit):
            return [result]
        return list(result)


class ReportSink(Protocol):
    def __call__(self, diagnostic: Diagnostic) -> None: ...


@dataclass(frozen=True)
class RuleContext:
    """Everything a visitor may read while one rule runs over one file."""

    rule_id: str
    settings: LintSettings
    parents: ParentMap
    sink: ReportSink
    options: tuple[Mapping[str, Any], ...] = ()

    @property
    def classifier(self) -> NodeClassifier:
        return NodeClassifier(self.settings)

    def option(self, key: str, default: Any = None) -> Any:
        """Read a key from the first options table, ESLint style."""
        if self.options and isinstance(self.options[0], Mapping):
            return self.options[0].get(key, default)
        return default

    def report(self, node: Node, message: str, fix: FixFunction | None = None) -> None:
        self.sink(Diagnostic(rule_id=self.rule_id, node=node, message=message, fix=fix))


Visitor = Mapping[str, Callable[[Node], None]]


@dataclass(frozen=True)
class RuleDocs:
    description: str
    deprecated: bool = False
    replaced_by: tuple[str, ...] | None = None


@dataclass(frozen=True)
class RuleMeta:
    docs: RuleDocs
    type: Literal["problem", "suggestion", "layout"] = "suggestion"
    fixable: Literal["code", "whitespace"] | None = None
    schema: tuple[Mapping[str, Any], ...] = ()


@dataclass(frozen=True)
class RuleDescriptor:
    """Rule metadata plus the visitor factory the host calls once per file."""

    meta: RuleMeta
    create: Callable[[RuleContext], Visitor] = field(compare=False)
