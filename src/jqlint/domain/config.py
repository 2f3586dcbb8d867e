"""Lint run configuration. Immutable value objects created by Infrastructure."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from jqlint.domain.constants import (
    DEFAULT_CONSTRUCTOR_ALIASES,
    DEFAULT_VARIABLE_PATTERN,
    SETTINGS_NAMESPACE,
    PluginClassification,
)

_KNOWN_SETTINGS: frozenset[str] = frozenset(
    {"constructorAliases", "variablePattern", "collectionReturningPlugins"})


@dataclass(frozen=True)
class LintSettings:
    """
    Per-run settings shared read-only by every rule in the run.

    Built from the ``no-jquery`` block of the settings table; absent fields
    fall back to the documented defaults.
    """

    constructor_aliases: frozenset[str] = DEFAULT_CONSTRUCTOR_ALIASES
    variable_pattern: re.Pattern[str] = field(
        default_factory=lambda: re.compile(DEFAULT_VARIABLE_PATTERN))
    collection_returning_plugins: Mapping[str, PluginClassification] = field(
        default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_config(cls, settings: Mapping[str, object] | None) -> LintSettings:
        """Build settings from the full settings table (``{"no-jquery": {...}}``)."""
        block = (settings or {}).get(SETTINGS_NAMESPACE) or {}
        if not isinstance(block, Mapping):
            raise ValueError(
                f"settings.{SETTINGS_NAMESPACE} must be a table, got {type(block).__name__}")
        unknown = sorted(set(block) - _KNOWN_SETTINGS)
        if unknown:
            logging.warning(
                "Configuration Warning: unknown %s settings ignored: %s",
                SETTINGS_NAMESPACE, ", ".join(unknown))
        return cls(
            constructor_aliases=cls._aliases(block.get("constructorAliases")),
            variable_pattern=cls._pattern(block.get("variablePattern")),
            collection_returning_plugins=cls._plugins(
                block.get("collectionReturningPlugins")),
        )

    @staticmethod
    def _aliases(raw: object) -> frozenset[str]:
        if raw is None:
            return DEFAULT_CONSTRUCTOR_ALIASES
        if not isinstance(raw, (list, tuple, set, frozenset)) or not all(
            isinstance(x, str) for x in raw
        ):
            raise ValueError("constructorAliases must be a list of strings")
        return frozenset(raw)

    @staticmethod
    def _pattern(raw: object) -> re.Pattern[str]:
        if raw is None:
            return re.compile(DEFAULT_VARIABLE_PATTERN)
        if not isinstance(raw, str):
            raise ValueError("variablePattern must be a regular expression string")
        try:
            return re.compile(raw)
        except re.error as exc:
            raise ValueError(f"variablePattern {raw!r} is not a valid regex: {exc}") from exc

    @staticmethod
    def _plugins(raw: object) -> Mapping[str, PluginClassification]:
        if raw is None:
            return MappingProxyType({})
        if not isinstance(raw, Mapping):
            raise ValueError("collectionReturningPlugins must be a table")
        plugins: dict[str, PluginClassification] = {}
        for method, value in raw.items():
            try:
                plugins[str(method)] = PluginClassification(value)
            except ValueError as exc:
                allowed = ", ".join(c.value for c in PluginClassification)
                raise ValueError(
                    f"collectionReturningPlugins.{method}: expected one of {allowed}, got {value!r}"
                ) from exc
        return MappingProxyType(plugins)

    def is_constructor_alias(self, name: str | None) -> bool:
        return name is not None and name in self.constructor_aliases

    def matches_variable(self, name: str | None) -> bool:
        return name is not None and self.variable_pattern.search(name) is not None

    def plugin_classification(self, method: str) -> PluginClassification | None:
        return self.collection_returning_plugins.get(method)


class LintConfiguration:
    """
    Immutable configuration for a lint run: settings plus rule selection.

    Created at the composition root from the dict returned by
    ConfigFileLoader. ``rules`` maps rule names to ``false`` (disabled),
    ``true`` (enabled with defaults) or an options table.
    """

    def __init__(self, config_dict: Mapping[str, object] | None = None) -> None:
        self._config: Mapping[str, object] = MappingProxyType(dict(config_dict or {}))
        raw_settings = self._config.get("settings", {})
        if not isinstance(raw_settings, Mapping):
            raise ValueError("settings must be a table")
        self._settings = LintSettings.from_config(raw_settings)
        raw_rules = self._config.get("rules", {})
        if not isinstance(raw_rules, Mapping):
            raise ValueError("rules must be a table")
        self._rules: dict[str, bool | Mapping[str, object]] = {}
        for name, value in raw_rules.items():
            if not isinstance(value, (bool, Mapping)):
                raise ValueError(
                    f"rules.{name} must be true, false or an options table")
            self._rules[str(name)] = value

    @property
    def config(self) -> Mapping[str, object]:
        """Return the loaded configuration."""
        return self._config

    @property
    def settings(self) -> LintSettings:
        return self._settings

    def is_enabled(self, rule_name: str) -> bool:
        """Rules are enabled unless explicitly set to false."""
        return self._rules.get(rule_name, True) is not False

    def options_for(self, rule_name: str) -> tuple[Mapping[str, object], ...]:
        """Options list handed to the rule, ESLint style: ``(options,)`` or ``()``."""
        value = self._rules.get(rule_name)
        if isinstance(value, Mapping):
            return (MappingProxyType(dict(value)),)
        return ()

    def configured_rule_names(self) -> set[str]:
        return set(self._rules)
