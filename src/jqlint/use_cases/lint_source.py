"""Lint JavaScript sources with the enabled built-in rules."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from jqlint.domain.config import LintConfiguration
from jqlint.domain.protocols import JavaScriptParserProtocol
from jqlint.domain.rules import Diagnostic, RuleDescriptor
from jqlint.infrastructure.dispatcher import RuleDispatcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LintResult:
    """Outcome for one source: diagnostics, or parsed=False when it did not parse."""

    path: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    parsed: bool = True


class LintSourceUseCase:
    """Parse, build the parent map and run every enabled rule once per source."""

    def __init__(
        self,
        parser: JavaScriptParserProtocol,
        configuration: LintConfiguration,
        rules: Mapping[str, RuleDescriptor],
    ) -> None:
        self._parser = parser
        self._configuration = configuration
        unknown = sorted(configuration.configured_rule_names() - set(rules))
        if unknown:
            logging.warning(
                "Configuration Warning: unknown rules ignored: %s", ", ".join(unknown))
        self._rules = {
            name: rule for name, rule in rules.items()
            if self._is_selected(name, rule, configuration)
        }
        self._options = {name: configuration.options_for(name) for name in self._rules}
        self._dispatcher = RuleDispatcher(configuration.settings)

    @staticmethod
    def _is_selected(
        name: str, rule: RuleDescriptor, configuration: LintConfiguration
    ) -> bool:
        if rule.meta.docs.deprecated and name not in configuration.configured_rule_names():
            # Deprecated rules overlap their replacements; they only run when named
            return False
        return configuration.is_enabled(name)

    @property
    def enabled_rules(self) -> list[str]:
        return sorted(self._rules)

    def lint_source(self, source: str, path: str = "<input>") -> LintResult:
        root = self._parser.parse(source)
        if root is None:
            return LintResult(path=path, parsed=False)
        diagnostics = self._dispatcher.run(root, self._rules, self._options)
        logger.debug("%s: %d diagnostics", path, len(diagnostics))
        return LintResult(path=path, diagnostics=diagnostics)

    def lint_file(self, file_path: Path) -> LintResult:
        root = self._parser.parse_file(file_path)
        if root is None:
            return LintResult(path=str(file_path), parsed=False)
        diagnostics = self._dispatcher.run(root, self._rules, self._options)
        logger.debug("%s: %d diagnostics", file_path, len(diagnostics))
        return LintResult(path=str(file_path), diagnostics=diagnostics)
