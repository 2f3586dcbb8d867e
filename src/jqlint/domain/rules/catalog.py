"""Built-in rules: jQuery usages that have a lighter plain-JavaScript replacement."""

import json
from collections.abc import Mapping
from functools import cache
from types import MappingProxyType

from jqlint.domain.messages import MessageComposer, MessageSubject
from jqlint.domain.nodes import (
    CallExpression,
    Identifier,
    Literal,
    MemberExpression,
    Node,
    OtherNode,
)
from jqlint.domain.rules import (
    FixResult,
    RuleContext,
    RuleDescriptor,
    RuleDocs,
    RuleFixer,
    RuleMeta,
    TextEdit,
    Visitor,
)
from jqlint.domain.rules.factory import RuleFactory, RuleOptions

AJAX_EVENTS: tuple[str, ...] = (
    "ajaxComplete",
    "ajaxError",
    "ajaxSend",
    "ajaxStart",
    "ajaxStop",
    "ajaxSuccess",
)

EVENT_SHORTHANDS: tuple[str, ...] = (
    "blur",
    "change",
    "click",
    "contextmenu",
    "dblclick",
    "focus",
    "focusin",
    "focusout",
    "keydown",
    "keypress",
    "keyup",
    "mousedown",
    "mouseenter",
    "mouseleave",
    "mousemove",
    "mouseout",
    "mouseover",
    "mouseup",
    "resize",
    "scroll",
    "select",
    "submit",
)

_SCROLL_PROPERTIES: frozenset[str] = frozenset({"scrollTop", "scrollLeft"})


class RuleFixers:
    """Fix functions bound by the factory as ``fix(node, context, fixer)``."""

    @staticmethod
    def event_shorthand(node: Node, context: RuleContext, fixer: RuleFixer) -> list[TextEdit]:
        """``.click(fn)`` -> ``.on("click", fn)``; ``.click()`` -> ``.trigger("click")``."""
        if not isinstance(node, CallExpression) or not isinstance(node.callee, MemberExpression):
            return []
        name = node.callee.property_name or ""
        if node.arguments:
            return [
                fixer.replace_text(node.callee.property, "on"),
                fixer.insert_text_before(node.arguments[0], json.dumps(name) + ", "),
            ]
        return [
            fixer.replace_text(node.callee.property, "trigger"),
            fixer.insert_text_before_range((node.range[1] - 1,), json.dumps(name)),
        ]

    @staticmethod
    def and_self(node: Node, context: RuleContext, fixer: RuleFixer) -> FixResult:
        if not isinstance(node, CallExpression) or not isinstance(node.callee, MemberExpression):
            return []
        return fixer.replace_text(node.callee.property, "addBack")

    @staticmethod
    def size(node: Node, context: RuleContext, fixer: RuleFixer) -> FixResult:
        """``$div.size()`` -> ``$div.length``."""
        if not isinstance(node, CallExpression) or not isinstance(node.callee, MemberExpression):
            return []
        return fixer.replace_text_range(
            (node.callee.property.range[0], node.range[1]), "length")


class RuleMessages:
    """Templated messages: context-free text for docs, specific text for reports."""

    @staticmethod
    def method_name(subject: MessageSubject) -> str:
        if isinstance(subject, CallExpression) and isinstance(subject.callee, MemberExpression):
            return subject.callee.property_name or ""
        return ""

    @staticmethod
    def attr(subject: MessageSubject) -> str:
        if subject is True:
            return "Prefer `Element#getAttribute`/`setAttribute`/`removeAttribute`"
        name = RuleMessages.method_name(subject)
        if name == "removeAttr":
            replacement = "removeAttribute"
        elif isinstance(subject, CallExpression) and len(subject.arguments) == 2:
            replacement = "setAttribute"
        else:
            replacement = "getAttribute"
        return f"Prefer Element#{replacement} to .{name}/$.{name}"

    @staticmethod
    def bind(subject: MessageSubject) -> str:
        if subject is True:
            return "Prefer `.on`/`.off` or `EventTarget#addEventListener`/`removeEventListener`"
        if RuleMessages.method_name(subject) == "unbind":
            return "Prefer .off or EventTarget#removeEventListener to .unbind"
        return "Prefer .on or EventTarget#addEventListener to .bind"

    @staticmethod
    def event_shorthand(subject: MessageSubject) -> str:
        if subject is True:
            return "Prefer `.on` or `.trigger`"
        return f"Prefer .on or .trigger to .{RuleMessages.method_name(subject)}"


class CustomRules:
    """Rules whose matching goes beyond a method name but still use the classifier."""

    @staticmethod
    def no_ajax_events() -> RuleDescriptor:
        description = (
            "Disallows global ajax events handlers: "
            + "/".join(MessageComposer.collection_link(e) for e in AJAX_EVENTS)
            + ". Prefer local events."
        )

        def create(context: RuleContext) -> Visitor:
            classifier = context.classifier

            def on_call_exit(node: Node) -> None:
                if not isinstance(node, CallExpression) or not isinstance(
                    node.callee, MemberExpression
                ):
                    return
                name = node.callee.property_name
                used: str | None = None
                if name == "on" and node.arguments:
                    arg = node.arguments[0]
                    if isinstance(arg, Literal) and arg.value in AJAX_EVENTS:
                        used = str(arg.value)
                if name in AJAX_EVENTS:
                    used = name
                if used and classifier.classify(node, context.parents):
                    context.report(node, f"Prefer local event to {used}")

            return {"CallExpression:exit": on_call_exit}

        return RuleDescriptor(meta=RuleMeta(docs=RuleDocs(description)), create=create)

    @staticmethod
    def no_animate() -> RuleDescriptor:
        description = (
            f"Disallows the {MessageComposer.collection_link('animate')} method. "
            "Use the `allowScroll` option to allow animations which are just used "
            "for scrolling. Prefer CSS transitions."
        )
        schema = (
            MappingProxyType(
                {
                    "type": "object",
                    "properties": {"allowScroll": {"type": "boolean"}},
                    "additionalProperties": False,
                }
            ),
        )

        def create(context: RuleContext) -> Visitor:
            classifier = context.classifier
            allow_scroll = bool(context.option("allowScroll", False))

            def on_call_exit(node: Node) -> None:
                if not isinstance(node, CallExpression) or not isinstance(
                    node.callee, MemberExpression
                ):
                    return
                if node.callee.property_name != "animate":
                    return
                if allow_scroll and node.arguments and CustomRules._only_scrolls(
                    node.arguments[0]
                ):
                    return
                if classifier.classify(node, context.parents):
                    context.report(
                        node,
                        "Prefer CSS transitions to .animate"
                        if allow_scroll
                        else "Prefer CSS transitions or CSS scroll-behaviour to .animate",
                    )

            return {"CallExpression:exit": on_call_exit}

        return RuleDescriptor(
            meta=RuleMeta(docs=RuleDocs(description), schema=schema), create=create)

    @staticmethod
    def _only_scrolls(arg: Node) -> bool:
        """True for an object literal whose keys are all scrollTop/scrollLeft."""
        if not isinstance(arg, OtherNode) or arg.kind != "ObjectExpression":
            return False
        keys: list[str | None] = []
        for prop in arg.nodes:
            if isinstance(prop, OtherNode) and prop.kind == "Property" and prop.nodes:
                key = prop.nodes[0]
            else:
                # {scrollTop} shorthand
                key = prop
            keys.append(key.name if isinstance(key, Identifier) else None)
        return all(k in _SCROLL_PROPERTIES for k in keys)


class RuleCatalog:
    """Name -> descriptor for every built-in rule. Built once per process."""

    @staticmethod
    @cache
    def all_rules() -> Mapping[str, RuleDescriptor]:
        rules: dict[str, RuleDescriptor] = {
            "no-ajax": RuleFactory.util_method_rule(
                ["ajax", "get", "getJSON", "getScript", "post"],
                "Prefer `Window.fetch`",
            ),
            "no-ajax-events": CustomRules.no_ajax_events(),
            "no-and-self": RuleFactory.collection_method_rule(
                "andSelf",
                "Prefer `.addBack` to `.andSelf`",
                RuleOptions(fixable="code", fix=RuleFixers.and_self),
            ),
            "no-animate": CustomRules.no_animate(),
            "no-attr": RuleFactory.collection_or_util_method_rule(
                ["attr", "removeAttr"], RuleMessages.attr),
            "no-bind": RuleFactory.collection_method_rule(
                ["bind", "unbind"], RuleMessages.bind),
            "no-box-model": RuleFactory.util_property_rule(
                "boxModel", "Prefer `document.compatMode`"),
            "no-browser": RuleFactory.util_property_rule(
                "browser", "Prefer `Window.navigator`"),
            "no-data": RuleFactory.collection_or_util_method_rule(
                ["data", "removeData", "hasData"], "Prefer `WeakMap`"),
            "no-event-shorthand": RuleFactory.collection_method_rule(
                EVENT_SHORTHANDS,
                RuleMessages.event_shorthand,
                RuleOptions(fixable="code", fix=RuleFixers.event_shorthand),
            ),
            "no-selector-prop": RuleFactory.collection_property_rule(
                "selector", "Prefer passing the selector string explicitly"),
            "no-size": RuleFactory.collection_method_rule(
                "size",
                "Prefer `.length` to `.size`",
                RuleOptions(fixable="code", fix=RuleFixers.size),
            ),
            "no-unbind": RuleFactory.collection_method_rule(
                "unbind",
                "Prefer `.off` to `.unbind`",
                RuleOptions(deprecated=["no-bind"]),
            ),
            "no-val": RuleFactory.collection_method_rule(
                "val",
                "Prefer `HTMLInputElement#value`",
                RuleOptions(get_and_set_options=True),
            ),
        }
        return MappingProxyType(rules)

    @staticmethod
    def get(name: str) -> RuleDescriptor | None:
        return RuleCatalog.all_rules().get(name)

    @staticmethod
    def names() -> list[str]:
        return sorted(RuleCatalog.all_rules())
