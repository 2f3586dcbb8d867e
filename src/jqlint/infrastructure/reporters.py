"""Terminal reporter implementation - rich console output for lint runs."""

from collections.abc import Mapping

from rich.console import Console
from rich.table import Table
from rich.text import Text

from jqlint.domain.rules import RuleDescriptor
from jqlint.use_cases.lint_source import LintResult


class TerminalReporter:
    """
    Writes diagnostics as ``path:line:col  message  rule`` lines and the
    rule list as a table.

    The console is injected so tests can capture output in a buffer.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    @staticmethod
    def format_result(result: LintResult) -> list[str]:
        """One line per diagnostic, or a single line for an unparsable file."""
        if not result.parsed:
            return [f"{result.path}: could not parse file"]
        lines = []
        for d in result.diagnostics:
            fixable = " (fixable)" if d.fix is not None else ""
            lines.append(
                f"{result.path}:{d.line}:{d.column + 1}  {d.message}  {d.rule_id}{fixable}")
        return lines

    def report_result(self, result: LintResult) -> None:
        style = None if result.parsed else "bold red"
        for line in self.format_result(result):
            self._print(line, style)

    def report_summary(self, total: int) -> None:
        if total:
            self._print(f"\n{total} problem{'s' if total != 1 else ''}", "bold yellow")

    def report_error(self, message: str) -> None:
        self._print(message, "bold red")

    def report_rules(self, rules: Mapping[str, RuleDescriptor]) -> None:
        table = Table(title="jqlint rules", header_style="bold")
        table.add_column("Rule", style="cyan", no_wrap=True)
        table.add_column("Flags", style="magenta")
        table.add_column("Description")
        for name in sorted(rules):
            meta = rules[name].meta
            flags = []
            if meta.fixable:
                flags.append("fixable")
            if meta.docs.deprecated:
                replaced = ", ".join(meta.docs.replaced_by or ())
                flags.append(f"deprecated{': use ' + replaced if replaced else ''}")
            first_paragraph = meta.docs.description.split("\n\n", 1)[0]
            # Text cells: descriptions carry markdown links that rich would read as markup
            table.add_row(Text(name), Text("; ".join(flags)), Text(first_paragraph))
        self._console.print(table)

    def _print(self, line: str, style: str | None = None) -> None:
        self._console.print(
            Text(line, style=style or ""), highlight=False, soft_wrap=True)
