"""Unit tests for Rule, RuleSet and the rule dispatch of the Govspeak rule set."""

import pytest
from utils import node_for

from govspeak_paste import GovspeakOptions, HtmlToGovspeakConverter
from govspeak_paste.converter import ConversionContext, join_fragments
from govspeak_paste.rules import Rule, RuleSet, build_rule_set, commonmark


@pytest.fixture
def rule_set() -> RuleSet:
    return build_rule_set()


@pytest.fixture
def options() -> GovspeakOptions:
    return GovspeakOptions()


@pytest.mark.unit
class TestRuleMatching:
    def test_string_filter(self, options):
        rule = Rule("paragraph", "p", lambda content, node, context: content)
        assert rule.matches(node_for("<p>x</p>", "p"), options)
        assert not rule.matches(node_for("<div>x</div>", "div"), options)

    def test_string_filter_is_case_insensitive(self, options):
        rule = Rule("paragraph", "P", lambda content, node, context: content)
        assert rule.matches(node_for("<p>x</p>", "p"), options)

    def test_list_filter(self, options):
        rule = Rule("bold", ["b", "strong"], lambda content, node, context: content)
        assert rule.matches(node_for("<strong>x</strong>", "strong"), options)
        assert not rule.matches(node_for("<em>x</em>", "em"), options)

    def test_callable_filter(self, options):
        rule = Rule("external", lambda node, opts: node.get_attribute("rel") == "external", lambda c, n, ctx: c)
        assert rule.matches(node_for('<a rel="external">x</a>', "a"), options)
        assert not rule.matches(node_for("<a>x</a>", "a"), options)


@pytest.mark.unit
class TestRuleDispatch:
    @pytest.mark.parametrize(
        "html, tag, index, expected",
        [
            ('<a href="/x">x</a>', "a", 0, "link"),
            ('<p>[x](<a href="/x">/x</a>)</p>', "a", 0, "nested_link"),
            ('<abbr title="United Kingdom">UK</abbr>', "abbr", 0, "abbr"),
            ("<abbr>UK</abbr>", "abbr", 0, "default"),
            ("<h4>x</h4>", "h4", 0, "heading"),
            ("<img src='x.png'>", "img", 0, "image"),
            ("<b>x</b>", "b", 0, "bold"),
            ("<em>x</em>", "em", 0, "italic"),
            ("<p><br></p>", "p", 0, "empty_paragraph"),
            ("<ul><li><p>x</p></li></ul>", "p", 0, "paragraph_in_list_item"),
            ("<ul><li>x</li><ul><li>y</li></ul></ul>", "ul", 1, "invalid_nested_list"),
            ("<ul><li>x</li></ul>", "ul", 0, "list"),
            ("<ol><li>x</li></ol>", "li", 0, "list_item"),
            ("<p>x</p>", "p", 0, "paragraph"),
            ("<blockquote>x</blockquote>", "blockquote", 0, "blockquote"),
            ("<span> </span>", "span", 0, "blank"),
            ("<section>x</section>", "section", 0, "default"),
        ],
    )
    def test_rule_for_node(self, rule_set, options, html, tag, index, expected):
        assert rule_set.for_node(node_for(html, tag, index), options).name == expected

    def test_govspeak_rules_replace_defaults_of_the_same_name(self, rule_set):
        names = [rule.name for rule in rule_set]
        assert names.count("heading") == 1
        assert names.count("image") == 1
        assert names.count("list_item") == 1

    def test_later_rules_take_priority(self, rule_set):
        names = [rule.name for rule in rule_set]
        assert names.index("nested_link") < names.index("link") < names.index("inline_link")
        assert names.index("invalid_nested_list") < names.index("list")


@pytest.mark.unit
class TestRuleSet:
    def test_add_rule_returns_new_rule_set(self, rule_set):
        shout = Rule("shout", "p", lambda content, node, context: f"\n\n{content.upper()}\n\n")
        extended = rule_set.add_rule(shout)

        assert "shout" in extended
        assert "shout" not in rule_set
        assert len(extended) == len(rule_set) + 1

    def test_added_rule_overrides_existing_behavior(self, rule_set):
        shout = Rule("shout", "p", lambda content, node, context: f"\n\n{content.upper()}\n\n")
        converter = HtmlToGovspeakConverter(rule_set=rule_set.add_rule(shout))
        assert converter.convert("<p>hello</p><p>world</p>") == "HELLO\n\nWORLD"

    def test_remove_rule_falls_back_to_defaults(self, rule_set):
        converter = HtmlToGovspeakConverter(rule_set=rule_set.remove_rule("bold"))
        assert converter.convert("<p><b>Bold</b> text</p>") == "**Bold** text"

    def test_get(self, rule_set):
        assert rule_set.get("abbr").append is not None
        assert rule_set.get("missing") is None

    def test_commonmark_only_rule_set(self):
        rule_set = RuleSet(commonmark.commonmark_rules(), commonmark.DEFAULT_RULE, commonmark.BLANK_RULE)
        converter = HtmlToGovspeakConverter(rule_set=rule_set)

        assert converter.convert("<h4>Title</h4>") == "#### Title"
        assert converter.convert("<p><em>x</em> and <img src='a.png' alt='A'></p>") == "_x_ and ![A](a.png)"
        assert converter.convert('<ol start="3"><li>A</li></ol>') == "3.  A"

    def test_with_default_rule(self, rule_set):
        bracket = Rule("bracket", lambda node, opts: True, lambda content, node, context: f"[{content}]")
        converter = HtmlToGovspeakConverter(rule_set=rule_set.with_default_rule(bracket))
        assert converter.convert("<p><span>x</span></p>") == "[x]"

    def test_stateful_rules(self, rule_set):
        assert [rule.name for rule in rule_set.stateful_rules] == ["abbr"]


@pytest.mark.unit
class TestConversionContext:
    def test_fresh_accumulator_per_context(self, rule_set, options):
        first = ConversionContext(options, rule_set)
        second = ConversionContext(options, rule_set)

        first.state("abbr")["UK"] = "United Kingdom"
        assert second.state("abbr") == {}

    def test_finalize_appends_and_clears(self, rule_set, options):
        context = ConversionContext(options, rule_set)
        context.state("abbr")["UK"] = "United Kingdom"

        assert context.finalize("Body") == "Body\n\n*[UK]: United Kingdom\n"
        with pytest.raises(KeyError):
            context.state("abbr")

    def test_finalize_without_state_leaves_output(self, rule_set, options):
        assert ConversionContext(options, rule_set).finalize("Body\n\n") == "Body\n\n"


@pytest.mark.unit
@pytest.mark.parametrize(
    "output, replacement, expected",
    [
        ("a", "b", "ab"),
        ("a", "\nb", "a\nb"),
        ("a\n", "\n\nb", "a\n\nb"),
        ("a\n\n\n", "b", "a\n\nb"),
        ("", "\n\nb\n\n", "\n\nb\n\n"),
        ("a\n\n", "", "a\n\n"),
    ],
)
def test_join_fragments(output, replacement, expected):
    assert join_fragments(output, replacement) == expected
