"""Unit tests for MessageComposer."""

import pytest

from jqlint.domain.constants import ClassifierMode
from jqlint.domain.messages import MessageComposer, StaticMessage, TemplatedMessage
from jqlint.domain.nodes import Identifier


class TestAsMessage:
    def test_none_stays_none(self) -> None:
        assert MessageComposer.as_message(None) is None

    def test_string_becomes_static(self) -> None:
        assert MessageComposer.as_message("Prefer x") == StaticMessage("Prefer x")

    def test_callable_becomes_templated(self) -> None:
        msg = MessageComposer.as_message(lambda subject: "text")
        assert isinstance(msg, TemplatedMessage)
        assert msg.render(True) == "text"

    def test_existing_message_is_returned_unchanged(self) -> None:
        msg = StaticMessage("a")
        assert MessageComposer.as_message(msg) is msg

    def test_unsupported_type_raises(self) -> None:
        with pytest.raises(TypeError, match="Unsupported message type"):
            MessageComposer.as_message(42)  # type: ignore[arg-type]


class TestMessageSuffix:
    def test_prefer_clause_is_shortened(self) -> None:
        msg = StaticMessage("Prefer `Array#map` to `.map`")
        assert MessageComposer.message_suffix(msg) == " Prefer `Array#map`."

    def test_other_text_is_kept(self) -> None:
        msg = StaticMessage("Use a framework")
        assert MessageComposer.message_suffix(msg) == " Use a framework."

    def test_no_message_gives_empty_suffix(self) -> None:
        assert MessageComposer.message_suffix(None) == ""

    def test_template_is_rendered_for_documentation(self) -> None:
        seen = []

        def template(subject: object) -> str:
            seen.append(subject)
            return "Prefer `EventTarget#addEventListener` to `.on`"

        MessageComposer.message_suffix(TemplatedMessage(template))
        assert seen == [True]

    def test_empty_template_result_gives_empty_suffix(self) -> None:
        assert MessageComposer.message_suffix(TemplatedMessage(lambda s: "")) == ""


class TestToPlainString:
    node = Identifier("x")

    def test_backticks_are_stripped(self) -> None:
        text = MessageComposer.to_plain_string(
            StaticMessage("Prefer `Array#map` to `.map`"),
            self.node, "map", ClassifierMode.COLLECTION)
        assert text == "Prefer Array#map to .map"

    def test_template_receives_the_node(self) -> None:
        msg = TemplatedMessage(
            lambda node: f"Prefer `x` to `.{node.name}`")  # type: ignore[union-attr]
        text = MessageComposer.to_plain_string(msg, self.node, "x", ClassifierMode.COLLECTION)
        assert text == "Prefer x to .x"

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            (ClassifierMode.COLLECTION, ".bind is not allowed"),
            (ClassifierMode.UTIL, "$.bind is not allowed"),
            (ClassifierMode.COLLECTION_UTIL, ".bind/$.bind is not allowed"),
        ],
    )
    def test_fallback_message(self, mode: ClassifierMode, expected: str) -> None:
        assert MessageComposer.to_plain_string(None, self.node, "bind", mode) == expected

    def test_empty_template_uses_fallback(self) -> None:
        text = MessageComposer.to_plain_string(
            TemplatedMessage(lambda s: ""), self.node, "size", ClassifierMode.COLLECTION)
        assert text == ".size is not allowed"

    def test_deprecated_flag(self) -> None:
        text = MessageComposer.to_plain_string(
            None, self.node, "unbind", ClassifierMode.COLLECTION, deprecated=True)
        assert text == ".unbind is not allowed. This rule is deprecated."

    def test_deprecated_with_replacements(self) -> None:
        text = MessageComposer.to_plain_string(
            None, self.node, "unbind", ClassifierMode.COLLECTION,
            deprecated=["no-bind", "no-on"])
        assert text == ".unbind is not allowed. This rule is deprecated, use no-bind, no-on."


class TestLinks:
    def test_collection_link(self) -> None:
        assert MessageComposer.collection_link("bind") == (
            "[`.bind`](https://api.jquery.com/bind/)")

    def test_unlinked_collection_method(self) -> None:
        assert MessageComposer.collection_link("hasData") == "`.hasData`"

    def test_global_link(self) -> None:
        assert MessageComposer.global_link("ajax") == (
            "[`$.ajax`](https://api.jquery.com/jQuery.ajax/)")

    def test_undocumented_utility(self) -> None:
        assert MessageComposer.global_link("camelCase") == "`$.camelCase`"
