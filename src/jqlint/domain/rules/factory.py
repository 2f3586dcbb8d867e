"""Rule Factory: build complete rule descriptors from method or property names."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import partial
from types import MappingProxyType
from typing import Literal

from jqlint.domain.constants import ALLOW_GET_OR_SET_VALUES, ClassifierMode
from jqlint.domain.messages import Message, MessageComposer, MessageLike
from jqlint.domain.nodes import CallExpression, MemberExpression, Node
from jqlint.domain.rules import (
    FixResult,
    RuleContext,
    RuleDescriptor,
    RuleDocs,
    RuleFixer,
    RuleMeta,
    Visitor,
)

RuleFix = Callable[[Node, RuleContext, RuleFixer], FixResult]

_GET_OR_SET_SCHEMA = MappingProxyType(
    {
        "type": "object",
        "properties": {"allowGetOrSet": {"enum": list(ALLOW_GET_OR_SET_VALUES)}},
        "additionalProperties": False,
    }
)

_GET_OR_SET_HELP = (
    "\n\nUsing this method only as a getter or a setter can be allowed using the "
    "`allowGetOrSet` option:\n"
    "* `\"none\"` (default) the method can't be used at all\n"
    "* `\"get\"` the method can only be used as a getter i.e. with no arguments\n"
    "* `\"set\"` the method can only be used as a setter i.e. with arguments"
)


@dataclass(frozen=True)
class RuleOptions:
    """Construction options shared by every factory method."""

    fixable: Literal["code", "whitespace"] | None = None
    fix: RuleFix | None = None
    deprecated: bool | Sequence[str] = False
    get_and_set_options: bool = False


class RuleFactory:
    """
    Higher-order constructors for the collection / utility rule family.

    Each method returns an immutable RuleDescriptor whose visitor closes over
    the names, the message and the options. Pure construction: no I/O and no
    option validation (the host validates options against ``meta.schema``).
    """

    @staticmethod
    def collection_method_rule(
        methods: str | Sequence[str],
        message: MessageLike = None,
        options: RuleOptions | None = None,
    ) -> RuleDescriptor:
        """Disallow ``$collection.method()`` calls."""
        options = options or RuleOptions()
        names = RuleFactory._names(methods)
        msg = MessageComposer.as_message(message)
        mode = ClassifierMode.COLLECTION

        description = (
            "Disallows the "
            + "/".join(MessageComposer.collection_link(n) for n in names)
            + (" methods." if len(names) > 1 else " method.")
            + MessageComposer.message_suffix(msg)
        )
        schema: tuple = ()
        if options.get_and_set_options:
            schema = (_GET_OR_SET_SCHEMA,)
            description += _GET_OR_SET_HELP

        def create(context: RuleContext) -> Visitor:
            classifier = context.classifier

            def on_call_exit(node: Node) -> None:
                callee = RuleFactory._member_callee(node)
                if callee is None or callee.property_name not in names:
                    return
                if classifier.is_constructor(callee.object):
                    # $.method() is the utility, reported by util rules
                    return
                allow = context.option("allowGetOrSet", "none")
                has_args = bool(node.arguments)
                if (allow == "get" and not has_args) or (allow == "set" and has_args):
                    return
                if classifier.classify(callee, context.parents, mode):
                    RuleFactory._report(
                        context, node, msg, callee.property_name, mode, options)

            return {"CallExpression:exit": on_call_exit}

        return RuleFactory._descriptor(create, description, options, schema)

    @staticmethod
    def collection_property_rule(
        prop: str,
        message: MessageLike = None,
        options: RuleOptions | None = None,
    ) -> RuleDescriptor:
        """Disallow reading ``$collection.prop``."""
        options = options or RuleOptions()
        msg = MessageComposer.as_message(message)
        mode = ClassifierMode.COLLECTION
        description = (
            f"Disallows the {MessageComposer.collection_link(prop)} property."
            + MessageComposer.message_suffix(msg)
        )

        def create(context: RuleContext) -> Visitor:
            classifier = context.classifier

            def on_member_exit(node: Node) -> None:
                if not isinstance(node, MemberExpression) or node.property_name != prop:
                    return
                if context.parents.is_callee(node):
                    # A method call, not a property read
                    return
                if classifier.classify(node.object, context.parents, mode):
                    RuleFactory._report(context, node, msg, prop, mode, options)

            return {"MemberExpression:exit": on_member_exit}

        return RuleFactory._descriptor(create, description, options)

    @staticmethod
    def util_method_rule(
        methods: str | Sequence[str],
        message: MessageLike = None,
        options: RuleOptions | None = None,
    ) -> RuleDescriptor:
        """Disallow ``$.method()`` utility calls."""
        options = options or RuleOptions()
        names = RuleFactory._names(methods)
        msg = MessageComposer.as_message(message)
        mode = ClassifierMode.UTIL
        description = (
            "Disallows the "
            + "/".join(MessageComposer.global_link(n) for n in names)
            + (" utilities." if len(names) > 1 else " utility.")
            + MessageComposer.message_suffix(msg)
        )

        def create(context: RuleContext) -> Visitor:
            classifier = context.classifier

            def on_call_exit(node: Node) -> None:
                callee = RuleFactory._member_callee(node)
                if callee is None or callee.property_name not in names:
                    return
                if classifier.classify(callee.object, context.parents, mode):
                    RuleFactory._report(
                        context, node, msg, callee.property_name, mode, options)

            return {"CallExpression:exit": on_call_exit}

        return RuleFactory._descriptor(create, description, options)

    @staticmethod
    def util_property_rule(
        prop: str,
        message: MessageLike = None,
        options: RuleOptions | None = None,
    ) -> RuleDescriptor:
        """Disallow reading ``$.prop``."""
        options = options or RuleOptions()
        msg = MessageComposer.as_message(message)
        mode = ClassifierMode.UTIL
        description = (
            f"Disallows the {MessageComposer.global_link(prop)} property."
            + MessageComposer.message_suffix(msg)
        )

        def create(context: RuleContext) -> Visitor:
            classifier = context.classifier

            def on_member_exit(node: Node) -> None:
                if not isinstance(node, MemberExpression) or node.property_name != prop:
                    return
                if classifier.classify(node.object, context.parents, mode):
                    RuleFactory._report(context, node, msg, prop, mode, options)

            return {"MemberExpression:exit": on_member_exit}

        return RuleFactory._descriptor(create, description, options)

    @staticmethod
    def collection_or_util_method_rule(
        methods: str | Sequence[str],
        message: MessageLike = None,
        options: RuleOptions | None = None,
    ) -> RuleDescriptor:
        """Disallow a method that exists both on collections and as a ``$.`` utility."""
        options = options or RuleOptions()
        names = RuleFactory._names(methods)
        msg = MessageComposer.as_message(message)
        mode = ClassifierMode.COLLECTION_UTIL
        plural = len(names) > 1
        description = (
            "Disallows the "
            + "/".join(MessageComposer.collection_link(n) for n in names)
            + (" methods" if plural else " method")
            + " and "
            + "/".join(MessageComposer.global_link(n) for n in names)
            + (" utilities." if plural else " utility.")
            + MessageComposer.message_suffix(msg)
        )

        def create(context: RuleContext) -> Visitor:
            classifier = context.classifier

            def on_call_exit(node: Node) -> None:
                callee = RuleFactory._member_callee(node)
                if callee is None or callee.property_name not in names:
                    return
                if classifier.classify(callee, context.parents, mode):
                    RuleFactory._report(
                        context, node, msg, callee.property_name, mode, options)

            return {"CallExpression:exit": on_call_exit}

        return RuleFactory._descriptor(create, description, options)

    @staticmethod
    def _names(methods: str | Sequence[str]) -> tuple[str, ...]:
        return (methods,) if isinstance(methods, str) else tuple(methods)

    @staticmethod
    def _member_callee(node: Node) -> MemberExpression | None:
        if isinstance(node, CallExpression) and isinstance(node.callee, MemberExpression):
            return node.callee
        return None

    @staticmethod
    def _report(
        context: RuleContext,
        node: Node,
        message: Message | None,
        name: str,
        mode: ClassifierMode,
        options: RuleOptions,
    ) -> None:
        text = MessageComposer.to_plain_string(
            message, node, name, mode, options.deprecated)
        fix = partial(options.fix, node, context) if options.fix else None
        context.report(node, text, fix)

    @staticmethod
    def _descriptor(
        create: Callable[[RuleContext], Visitor],
        description: str,
        options: RuleOptions,
        schema: tuple = (),
    ) -> RuleDescriptor:
        deprecated = options.deprecated
        replaced_by = (
            None if isinstance(deprecated, bool) else tuple(deprecated)
        )
        return RuleDescriptor(
            meta=RuleMeta(
                docs=RuleDocs(
                    description=description,
                    deprecated=bool(deprecated),
                    replaced_by=replaced_by,
                ),
                fixable=options.fixable,
                schema=schema,
            ),
            create=create,
        )
