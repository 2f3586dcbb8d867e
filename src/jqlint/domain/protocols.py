from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from jqlint.domain.nodes import Node
    from jqlint.domain.rules import RuleDescriptor
    from jqlint.use_cases.lint_source import LintResult


class JavaScriptParserProtocol(Protocol):
    """Parser collaborator: JavaScript source -> node union."""

    def parse(self, source: str) -> Optional["Node"]:
        """Return the Program node, or None when the source does not parse."""
        ...

    def parse_file(self, file_path: Path) -> Optional["Node"]:
        ...


class ConfigLoaderProtocol(Protocol):
    def load_config_from_fs(self, start: Optional[Path] = None) -> dict[str, object]:
        ...


class ReporterProtocol(Protocol):
    """Output port for the CLI: results, the run summary and the rule list."""

    def report_result(self, result: "LintResult") -> None:
        ...

    def report_summary(self, total: int) -> None:
        ...

    def report_error(self, message: str) -> None:
        ...

    def report_rules(self, rules: Mapping[str, "RuleDescriptor"]) -> None:
        ...
