"""Tests for the built-in rules and their fixers."""

import pytest
from js_test_utils import apply_edits, lint, messages, parse

from jqlint.domain.config import LintSettings
from jqlint.domain.nodes import Identifier
from jqlint.domain.rules import RuleContext, RuleFixer
from jqlint.domain.rules.catalog import EVENT_SHORTHANDS, RuleCatalog, RuleFixers


def rule(name: str):
    descriptor = RuleCatalog.get(name)
    assert descriptor is not None
    return descriptor


class TestCatalog:
    def test_names_are_sorted_and_complete(self) -> None:
        names = RuleCatalog.names()
        assert names == sorted(names)
        assert {"no-bind", "no-size", "no-val", "no-animate", "no-ajax-events"} <= set(names)

    def test_catalog_is_built_once(self) -> None:
        assert RuleCatalog.all_rules() is RuleCatalog.all_rules()

    def test_unknown_rule(self) -> None:
        assert RuleCatalog.get("no-such-rule") is None

    def test_every_rule_has_a_description(self) -> None:
        for name, descriptor in RuleCatalog.all_rules().items():
            assert descriptor.meta.docs.description.startswith("Disallows"), name

    def test_deprecated_rule_points_to_replacement(self) -> None:
        docs = rule("no-unbind").meta.docs
        assert docs.deprecated
        assert docs.replaced_by == ("no-bind",)


class TestNoBind:
    @pytest.mark.parametrize(
        "code",
        ["bind()", "[].bind()", "div.bind()", "div.bind", "$method('foo').bind()",
         "$div.remove.bind()"],
    )
    def test_valid(self, code: str) -> None:
        assert lint(rule("no-bind"), code) == []

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("$('div').bind()", "Prefer .on or EventTarget#addEventListener to .bind"),
            ("$div.bind()", "Prefer .on or EventTarget#addEventListener to .bind"),
            ("$('div').first().bind()", "Prefer .on or EventTarget#addEventListener to .bind"),
            ("$('div').unbind()", "Prefer .off or EventTarget#removeEventListener to .unbind"),
            ("this.$div.unbind()", "Prefer .off or EventTarget#removeEventListener to .unbind"),
        ],
    )
    def test_invalid(self, code: str, expected: str) -> None:
        assert messages(rule("no-bind"), code) == [expected]

    def test_description(self) -> None:
        assert rule("no-bind").meta.docs.description.endswith(
            " methods. Prefer `.on`/`.off` or "
            "`EventTarget#addEventListener`/`removeEventListener`.")


class TestNoAnimate:
    @pytest.mark.parametrize(
        "code",
        ["animate()", "[].animate()", "div.animate()", "div.animate", "$.animate()"],
    )
    def test_valid(self, code: str) -> None:
        assert lint(rule("no-animate"), code) == []

    def test_reports_any_animation_by_default(self) -> None:
        assert messages(rule("no-animate"), "$div.animate({scrollTop: 100})") == [
            "Prefer CSS transitions or CSS scroll-behaviour to .animate"]

    @pytest.mark.parametrize(
        "code",
        ["$div.animate({scrollTop: 100})", "$div.animate({scrollLeft: 100, scrollTop: 0})",
         "$div.animate({scrollTop})"],
    )
    def test_allow_scroll(self, code: str) -> None:
        assert lint(rule("no-animate"), code, {"allowScroll": True}) == []

    def test_allow_scroll_still_reports_other_properties(self) -> None:
        code = "$div.animate({scrollTop: 100, height: 0})"
        assert messages(rule("no-animate"), code, options={"allowScroll": True}) == [
            "Prefer CSS transitions to .animate"]

    def test_allow_scroll_reports_non_literal_argument(self) -> None:
        assert len(lint(rule("no-animate"), "$div.animate(props)", {"allowScroll": True})) == 1


class TestNoAjaxEvents:
    @pytest.mark.parametrize(
        "code",
        ["$(document).on('click', function(){})", "$form.on('submit', function(){})",
         "form.ajaxSend()", "$.ajaxStart()", "$(document).on(eventName, fn)"],
    )
    def test_valid(self, code: str) -> None:
        assert lint(rule("no-ajax-events"), code) == []

    @pytest.mark.parametrize(
        ("code", "event"),
        [
            ("$(document).on('ajaxSend', function(){})", "ajaxSend"),
            ("$form.on('ajaxError', function(){})", "ajaxError"),
            ("$form.ajaxStop()", "ajaxStop"),
            ("$(document).ajaxComplete(fn)", "ajaxComplete"),
        ],
    )
    def test_invalid(self, code: str, event: str) -> None:
        assert messages(rule("no-ajax-events"), code) == [f"Prefer local event to {event}"]


class TestFixers:
    def test_size(self) -> None:
        code = "$div.size();"
        (diagnostic,) = lint(rule("no-size"), code)
        assert diagnostic.message == "Prefer .length to .size"
        assert apply_edits(code, diagnostic) == "$div.length;"

    def test_and_self(self) -> None:
        code = "$div.andSelf('.foo')"
        (diagnostic,) = lint(rule("no-and-self"), code)
        assert apply_edits(code, diagnostic) == "$div.addBack('.foo')"

    def test_event_shorthand_handler(self) -> None:
        code = "$div.click(function () {});"
        (diagnostic,) = lint(rule("no-event-shorthand"), code)
        assert diagnostic.message == "Prefer .on or .trigger to .click"
        assert apply_edits(code, diagnostic) == '$div.on("click", function () {});'

    def test_event_shorthand_trigger(self) -> None:
        code = "$('input').focus();"
        (diagnostic,) = lint(rule("no-event-shorthand"), code)
        assert apply_edits(code, diagnostic) == '$(\'input\').trigger("focus");'

    def test_event_shorthand_covers_every_event(self) -> None:
        for event in EVENT_SHORTHANDS:
            assert len(lint(rule("no-event-shorthand"), f"$div.{event}()")) == 1, event

    @pytest.mark.parametrize(
        "fix", [RuleFixers.size, RuleFixers.and_self, RuleFixers.event_shorthand])
    def test_fixers_produce_no_edits_for_other_shapes(self, fix) -> None:
        root, parents = parse("size();")
        call = root.children()[0].children()[0]
        context = RuleContext("no-size", LintSettings(), parents, lambda d: None)
        assert fix(call, context, RuleFixer()) == []
        assert fix(Identifier("size"), context, RuleFixer()) == []

    def test_fixable_flags(self) -> None:
        fixable = {
            name for name, d in RuleCatalog.all_rules().items() if d.meta.fixable == "code"}
        assert fixable == {"no-and-self", "no-event-shorthand", "no-size"}


class TestOtherRules:
    def test_no_val_get_or_set(self) -> None:
        assert lint(rule("no-val"), "$input.val()", {"allowGetOrSet": "get"}) == []
        assert messages(rule("no-val"), "$input.val('x')", {"allowGetOrSet": "get"}) == [
            "Prefer HTMLInputElement#value"]

    def test_no_attr_messages(self) -> None:
        assert messages(rule("no-attr"), "$div.attr('id')") == [
            "Prefer Element#getAttribute to .attr/$.attr"]
        assert messages(rule("no-attr"), "$div.attr('id', 'x')") == [
            "Prefer Element#setAttribute to .attr/$.attr"]
        assert messages(rule("no-attr"), "$.removeAttr(el, 'id')") == [
            "Prefer Element#removeAttribute to .removeAttr/$.removeAttr"]

    def test_no_ajax(self) -> None:
        assert messages(rule("no-ajax"), "$.getJSON(url)") == ["Prefer Window.fetch"]
        assert lint(rule("no-ajax"), "$div.get(0)") == []

    def test_no_browser(self) -> None:
        assert len(lint(rule("no-browser"), "jQuery.browser.webkit")) == 1

    def test_no_data(self) -> None:
        assert len(lint(rule("no-data"), "$.hasData(el); $div.removeData('x');")) == 2

    def test_no_unbind_is_deprecated(self) -> None:
        assert messages(rule("no-unbind"), "$div.unbind()") == [
            "Prefer .off to .unbind. This rule is deprecated, use no-bind."]

    def test_no_selector_prop(self) -> None:
        assert len(lint(rule("no-selector-prop"), "log($div.selector)")) == 1
