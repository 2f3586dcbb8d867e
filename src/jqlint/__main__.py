"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from jqlint.domain.rules.catalog import RuleCatalog
from jqlint.infrastructure.config_file_loader import ConfigFileLoader
from jqlint.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from jqlint.infrastructure.reporters import TerminalReporter
from jqlint.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    deps = CLIDependencies(
        config_loader=ConfigFileLoader(),
        parser=TreeSitterGateway(),
        rules=RuleCatalog.all_rules(),
        reporter=TerminalReporter(),
    )
    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
