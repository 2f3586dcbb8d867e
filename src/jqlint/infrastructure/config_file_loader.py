"""Load [tool.jqlint] from pyproject.toml, or .jqlint.yaml. Infrastructure I/O only."""

import logging
import sys
from pathlib import Path

import yaml

from jqlint.domain.protocols import ConfigLoaderProtocol

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

logger = logging.getLogger(__name__)

YAML_CONFIG_NAME: str = ".jqlint.yaml"


class ConfigFileLoader(ConfigLoaderProtocol):
    """
    Finds the nearest configuration walking up from a directory.

    In each directory pyproject.toml with a [tool.jqlint] table wins over
    .jqlint.yaml. Unreadable files are logged and skipped.
    """

    def load_config_from_fs(self, start: Path | None = None) -> dict[str, object]:
        current_path = (start or Path.cwd()).resolve()
        while True:
            config = self._from_pyproject(current_path / "pyproject.toml")
            if config is None:
                config = self._from_yaml(current_path / YAML_CONFIG_NAME)
            if config is not None:
                return config
            if current_path.parent == current_path:
                return {}
            current_path = current_path.parent

    @staticmethod
    def _from_pyproject(config_file: Path) -> dict[str, object] | None:
        if not config_file.is_file():
            return None
        try:
            with config_file.open("rb") as f:
                data = toml_lib.load(f)
        except (OSError, toml_lib.TOMLDecodeError) as exc:
            logger.warning("Ignoring unreadable %s: %s", config_file, exc)
            return None
        section = (data.get("tool") or {}).get("jqlint")
        if not isinstance(section, dict):
            return None
        logger.debug("Loaded configuration from %s", config_file)
        return section

    @staticmethod
    def _from_yaml(config_file: Path) -> dict[str, object] | None:
        if not config_file.is_file():
            return None
        try:
            with config_file.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable %s: %s", config_file, exc)
            return None
        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: top level must be a mapping", config_file)
            return None
        logger.debug("Loaded configuration from %s", config_file)
        return data
