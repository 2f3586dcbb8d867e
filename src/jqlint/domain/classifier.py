"""Decide whether an expression chain originates from a jQuery collection."""

from jqlint.domain.config import LintSettings
from jqlint.domain.constants import (
    ALL_KNOWN_METHODS,
    NON_COLLECTION_RETURNING_ACCESSORS,
    NON_COLLECTION_RETURNING_METHODS,
    NON_COLLECTION_RETURNING_VALUE_ACCESSORS,
    QUEUE_METHOD,
    SIZING_METHODS,
    ClassifierMode,
    PluginClassification,
)
from jqlint.domain.nodes import (
    FUNCTION_KINDS,
    CallExpression,
    Identifier,
    Literal,
    MemberExpression,
    Node,
    ParentMap,
)


class ClassifierInvariantError(RuntimeError):
    """The chain walk ran out of nodes without reaching a terminal shape."""


class NodeClassifier:
    """
    Peel-and-classify resolution of call/member chains.

    Walks from the outermost node inward, one call or member layer at a time,
    until it reaches a name (decided by the constructor aliases and the
    variable pattern) or a layer whose return type is known not to be a
    collection. Unknown shapes resolve to False. Stateless: the same node,
    parent map and settings always give the same answer.

    Examples (default settings, node is the callee of the outer call):

        $('div').find('p').focus()   -> True
        this.$div.find('p').focus()  -> True
        $.each()                     -> True
        div.focus()                  -> False
        $div[0].focus()              -> False
        $div.remove.bind()           -> False
        $method('foo').focus()       -> False
    """

    def __init__(self, settings: LintSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> LintSettings:
        return self._settings

    def classify(
        self,
        node: Node,
        parents: ParentMap,
        mode: ClassifierMode = ClassifierMode.COLLECTION,
    ) -> bool:
        if mode is ClassifierMode.UTIL:
            return self.is_constructor(node)
        if mode is ClassifierMode.COLLECTION_UTIL:
            return self.is_constructor(node) or self._walk(node, parents)
        return self._walk(node, parents)

    def is_constructor(self, node: Node | None) -> bool:
        """True for an identifier naming one of the constructor aliases."""
        return isinstance(node, Identifier) and self._settings.is_constructor_alias(node.name)

    def is_collection_variable(self, node: Node | None) -> bool:
        return isinstance(node, Identifier) and self._settings.matches_variable(node.name)

    def _walk(self, node: Node | None, parents: ParentMap) -> bool:
        while node is not None:
            if isinstance(node, CallExpression):
                if self._call_returns_non_collection(node):
                    return False
                node = node.callee
            elif isinstance(node, MemberExpression):
                if not parents.is_callee(node):
                    if node.property_name is None:
                        # foo[bar], $foo[0], $foo['prop'], this.#priv
                        return False
                    # this.$foo -> True, $this.foo -> False
                    return self._settings.matches_variable(node.property_name)
                node = node.object
            elif isinstance(node, Identifier):
                if parents.is_callee(node):
                    return self.is_constructor(node)
                return self.is_collection_variable(node) or self.is_constructor(node)
            else:
                return False
        raise ClassifierInvariantError("Invalid node: chain walk exhausted")

    def _call_returns_non_collection(self, call: CallExpression) -> bool:
        callee = call.callee
        if not isinstance(callee, MemberExpression):
            return False
        name = self._method_name(callee)
        if name is None:
            # $foo[method]() can't be determined
            return True
        if self.is_constructor(callee.object):
            # Utilities never return collections, e.g. $.extend()
            return True
        plugin = self._settings.plugin_classification(name)
        args = call.arguments
        if name in NON_COLLECTION_RETURNING_METHODS or plugin is PluginClassification.NEVER:
            # $foo.toArray()
            return True
        if (
            name in NON_COLLECTION_RETURNING_ACCESSORS or plugin is PluginClassification.ACCESSOR
        ) and not args:
            # $foo.val()
            return True
        if (
            name in NON_COLLECTION_RETURNING_VALUE_ACCESSORS
            or plugin is PluginClassification.VALUE_ACCESSOR
        ) and (not args or (len(args) == 1 and not self._is_object_literal(args[0]))):
            # $foo.data() and $foo.data('bar'); $foo.data({bar: 1}) is a setter
            return True
        if name in SIZING_METHODS and (
            not args
            or (
                len(args) == 1
                and not self._is_number(args[0])
                and args[0].type not in FUNCTION_KINDS
            )
        ):
            # $foo.outerWidth() and $foo.outerWidth(true)
            return True
        if name == QUEUE_METHOD and (
            not args or (len(args) == 1 and self._is_string(args[0]))
        ):
            # $foo.queue() and $foo.queue('fx')
            return True
        if name not in ALL_KNOWN_METHODS and plugin is None:
            # Not core jQuery: assume no collection to avoid false positives
            return True
        return False

    @staticmethod
    def _method_name(callee: MemberExpression) -> str | None:
        """``$foo.find`` and ``$foo['find']`` both name ``find``."""
        if callee.property_name is not None:
            return callee.property_name
        key = callee.property
        if callee.computed and isinstance(key, Literal) and key.is_string:
            return str(key.value)
        return None

    @staticmethod
    def _is_object_literal(node: Node) -> bool:
        return node.type == "ObjectExpression"

    @staticmethod
    def _is_number(node: Node) -> bool:
        return isinstance(node, Literal) and node.is_number

    @staticmethod
    def _is_string(node: Node) -> bool:
        return isinstance(node, Literal) and node.is_string
