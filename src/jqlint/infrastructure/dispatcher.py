"""Single-pass rule dispatcher: walks a tree once and fires visitor callbacks."""

import logging
from collections import defaultdict
from collections.abc import Callable, Mapping

from jqlint.domain.config import LintSettings
from jqlint.domain.nodes import Node, ParentMap, walk
from jqlint.domain.rules import Diagnostic, RuleContext, RuleDescriptor

logger = logging.getLogger(__name__)

Callback = Callable[[Node], None]


class RuleDispatcher:
    """
    Runs a set of rules over one file.

    Selectors are ``"<NodeType>"`` (fired on entry) and ``"<NodeType>:exit"``
    (fired after the node's children). Callbacks for the same event run in
    rule registration order.
    """

    def __init__(self, settings: LintSettings) -> None:
        self._settings = settings

    def run(
        self,
        root: Node,
        rules: Mapping[str, RuleDescriptor],
        options: Mapping[str, tuple[Mapping[str, object], ...]] | None = None,
    ) -> list[Diagnostic]:
        parents = ParentMap.build(root)
        diagnostics: list[Diagnostic] = []
        handlers: dict[str, list[Callback]] = defaultdict(list)
        for rule_id, rule in rules.items():
            context = RuleContext(
                rule_id=rule_id,
                settings=self._settings,
                parents=parents,
                sink=diagnostics.append,
                options=(options or {}).get(rule_id, ()),
            )
            for selector, callback in rule.create(context).items():
                handlers[selector].append(callback)
        logger.debug(
            "Dispatching %d rules over %d nodes", len(rules), len(parents) + 1)

        for node, entering in walk(root):
            selector = node.type if entering else f"{node.type}:exit"
            for callback in handlers.get(selector, ()):
                callback(node)
        return sorted(diagnostics, key=lambda d: (d.node.range[0], d.rule_id))
