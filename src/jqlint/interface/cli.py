"""CLI entry points for jqlint - Thin Controller using Typer."""

import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import typer

from jqlint.domain.config import LintConfiguration
from jqlint.domain.protocols import (
    ConfigLoaderProtocol,
    JavaScriptParserProtocol,
    ReporterProtocol,
)
from jqlint.domain.rules import RuleDescriptor
from jqlint.use_cases.lint_source import LintSourceUseCase

EXIT_CLEAN: int = 0
EXIT_DIAGNOSTICS: int = 1
EXIT_PARSE_ERROR: int = 2


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigLoaderProtocol
    parser: JavaScriptParserProtocol
    rules: Mapping[str, RuleDescriptor]
    reporter: ReporterProtocol


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="jqlint",
            help="jqlint: find jQuery collection and utility usages that have a lighter plain JavaScript replacement.",
            add_completion=False,
        )

        @app.callback()
        def main(
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
        ) -> None:
            logging.basicConfig(
                level=logging.DEBUG if verbose else logging.WARNING,
                format="%(levelname)s %(name)s: %(message)s",
            )

        @app.command()
        def check(
            files: list[Path] = typer.Argument(..., help="JavaScript files to lint"),  # noqa: B008
            config_dir: Path | None = typer.Option(
                None, "--config-dir", help="Directory to start the configuration search from"),
        ) -> None:
            """Lint the given files with every enabled rule."""
            try:
                configuration = LintConfiguration(
                    deps.config_loader.load_config_from_fs(config_dir))
            except ValueError as exc:
                deps.reporter.report_error(f"Invalid configuration: {exc}")
                sys.exit(EXIT_PARSE_ERROR)
            use_case = LintSourceUseCase(
                parser=deps.parser, configuration=configuration, rules=deps.rules)
            exit_code = EXIT_CLEAN
            total = 0
            for file_path in files:
                result = use_case.lint_file(file_path)
                deps.reporter.report_result(result)
                if not result.parsed:
                    exit_code = EXIT_PARSE_ERROR
                elif result.diagnostics and exit_code == EXIT_CLEAN:
                    exit_code = EXIT_DIAGNOSTICS
                total += len(result.diagnostics)
            deps.reporter.report_summary(total)
            sys.exit(exit_code)

        @app.command()
        def rules() -> None:
            """List the built-in rules and their documentation."""
            deps.reporter.report_rules(deps.rules)

        return app
