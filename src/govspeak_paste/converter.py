#  Copyright (c) 2025 Tom Villani, Ph.D.
"""HTML to Govspeak conversion.

This module turns HTML, typically the ``text/html`` flavor of a clipboard
paste from a word processor or web page, into Govspeak: the constrained
Markdown dialect of GOV.UK publishing. Formatting Govspeak does not allow is
dropped and structure (paragraphs, links, lists, two heading levels,
abbreviation references) is kept.

Pipeline
--------
1. Parse the HTML with BeautifulSoup, strip non-content elements
   (``script``, ``style``, media embeds...) and collapse whitespace.
2. Walk the tree depth-first. Each element's children are converted first,
   then the element's rule turns that content into a text fragment.
3. Let stateful rules append to the document (abbreviation references).
4. Apply whole-document text repairs and trim.

Examples
--------
Basic conversion:

    >>> from govspeak_paste import html_to_govspeak
    >>> html_to_govspeak("<h1>Title</h1><p>Some <strong>bold</strong> text</p>")
    '## Title\\n\\nSome bold text'

Custom configuration:

    >>> from govspeak_paste import GovspeakOptions, HtmlToGovspeakConverter
    >>> converter = HtmlToGovspeakConverter(GovspeakOptions(bullet_list_marker="*"))
    >>> converter.convert("<ul><li>One</li><li>Two</li></ul>")
    '* One\\n* Two'
"""

from __future__ import annotations

import copy
import html as html_lib
import logging
from functools import lru_cache
from typing import Any

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup, builder_registry
from bs4.exceptions import FeatureNotFound

from govspeak_paste.constants import HTML_PARSER_PACKAGES
from govspeak_paste.exceptions import DependencyError, InvalidInputError
from govspeak_paste.node import Node
from govspeak_paste.options import GovspeakOptions
from govspeak_paste.postprocess import post_process
from govspeak_paste.rules import RuleSet, build_rule_set
from govspeak_paste.whitespace import collapse_whitespace

logger = logging.getLogger(__name__)


def join_fragments(output: str, replacement: str) -> str:
    """Join two converted fragments.

    Newlines at the seam are replaced by the longer of the two runs, capped
    at a blank line, so adjacent blocks never drift further apart than one
    blank line and inline content is never split.
    """
    head = output.rstrip("\n")
    tail = replacement.lstrip("\n")
    trailing = len(output) - len(head)
    leading = len(replacement) - len(tail)
    return head + "\n" * min(max(trailing, leading), 2) + tail


class ConversionContext:
    """State for one top-level conversion call.

    Holds the options and rule set in use and a fresh accumulator for each
    stateful rule. A new context is created for every call, so nothing a
    rule records can leak into another conversion.

    Parameters
    ----------
    options : GovspeakOptions
        Options in effect for this call.
    rule_set : RuleSet
        Rules in effect for this call.

    """

    def __init__(self, options: GovspeakOptions, rule_set: RuleSet):
        self.options = options
        self.rule_set = rule_set
        self._state: dict[str, Any] = {
            rule.name: rule.accumulator() for rule in rule_set.stateful_rules if rule.accumulator is not None
        }

    def state(self, rule_name: str) -> Any:
        """Return the accumulator of ``rule_name`` for this call."""
        return self._state[rule_name]

    def finalize(self, output: str) -> str:
        """Join every rule's appended output to ``output`` and drop accumulated state."""
        for rule in self.rule_set.stateful_rules:
            if rule.append is not None:
                output = join_fragments(output, rule.append(self))
        self._state.clear()
        return output


def _check_parser_available(html_parser: str) -> None:
    if builder_registry.lookup(html_parser) is None:
        package = HTML_PARSER_PACKAGES.get(html_parser)
        raise DependencyError(html_parser, [package] if package else [])


class HtmlToGovspeakConverter:
    """Convert HTML markup or a parsed BeautifulSoup tree to Govspeak.

    A converter holds only immutable configuration and can be shared freely,
    including between threads.

    Parameters
    ----------
    options : GovspeakOptions, optional
        Formatting and parsing options. Defaults to ``GovspeakOptions()``.
    rule_set : RuleSet, optional
        Rules to convert with. Defaults to the Govspeak rule set.

    Raises
    ------
    DependencyError
        If the configured BeautifulSoup tree builder is not installed.

    """

    def __init__(self, options: GovspeakOptions | None = None, rule_set: RuleSet | None = None):
        self.options = options or GovspeakOptions()
        self.rule_set = rule_set or build_rule_set()
        _check_parser_available(self.options.html_parser)

    def convert(self, html: str | Tag | None) -> str:
        """Convert ``html`` to Govspeak.

        Parameters
        ----------
        html : str, bs4.Tag or None
            Markup, or an already-parsed tree. A parsed tree is copied and
            the caller's tree is left untouched.

        Returns
        -------
        str
            The Govspeak document, trimmed. Empty input gives ``""``.

        Raises
        ------
        InvalidInputError
            If ``html`` is neither a string nor a BeautifulSoup element.

        Notes
        -----
        The tree is walked recursively, two stack frames per element level.
        Under the default interpreter recursion limit (1000), markup nested
        a few hundred elements deep raises ``RecursionError``. Clipboard
        content is far shallower; callers accepting arbitrary HTML should
        bound its nesting depth first.

        """
        if html is None or (isinstance(html, str) and not html.strip()):
            return ""

        root = self._prepare_tree(html)
        context = ConversionContext(self.options, self.rule_set)
        output = self._process(Node(root), context)
        output = context.finalize(output)
        return post_process(output, self.options.br)

    def _parse(self, html: str) -> BeautifulSoup:
        try:
            soup = BeautifulSoup(html, self.options.html_parser)
        except FeatureNotFound as e:
            package = HTML_PARSER_PACKAGES.get(self.options.html_parser)
            raise DependencyError(self.options.html_parser, [package] if package else []) from e
        except ParserRejectedMarkup as e:
            logger.warning("HTML parser rejected the markup, converting it as plain text: %s", e)
            soup = BeautifulSoup(html_lib.escape(html), self.options.html_parser)
        logger.debug("Parsed %d characters of HTML with %s", len(html), self.options.html_parser)
        return soup

    def _prepare_tree(self, html: str | Tag) -> Tag:
        if isinstance(html, str):
            soup: Tag = self._parse(html)
        elif isinstance(html, Tag):
            soup = copy.copy(html)
        else:
            raise InvalidInputError(html)

        if self.options.removed_elements:
            removed = 0
            for element in soup.find_all(list(self.options.removed_elements)):
                if not element.decomposed:
                    element.decompose()
                    removed += 1
            logger.debug("Stripped %d non-content element(s)", removed)

        # Process body only if it exists, otherwise process the whole fragment
        body = soup.find("body")
        root = body if isinstance(body, Tag) else soup
        collapse_whitespace(root)
        return root

    def _process(self, parent: Node, context: ConversionContext) -> str:
        output = ""
        for node in parent.children:
            if node.is_text:
                # Users may paste Markdown, so text is never escaped
                replacement = node.text_content
            elif node.is_element:
                replacement = self._replacement_for_node(node, context)
            else:
                replacement = ""
            output = join_fragments(output, replacement)
        return output

    def _replacement_for_node(self, node: Node, context: ConversionContext) -> str:
        rule = self.rule_set.for_node(node, self.options)
        content = self._process(node, context)
        logger.debug("Converting <%s> with rule %r", node.name, rule.name)

        whitespace = node.flanking_whitespace
        if whitespace:
            content = content.strip()
        return whitespace.leading + rule.replacement(content, node, context) + whitespace.trailing


@lru_cache(maxsize=16)
def _converter_for(options: GovspeakOptions) -> HtmlToGovspeakConverter:
    return HtmlToGovspeakConverter(options)


def html_to_govspeak(html: str | Tag | None, options: GovspeakOptions | None = None) -> str:
    """Convert HTML to Govspeak.

    Parameters
    ----------
    html : str, bs4.Tag or None
        Markup, typically clipboard ``text/html`` content, or a parsed tree.
    options : GovspeakOptions, optional
        Formatting and parsing options.

    Returns
    -------
    str
        The Govspeak document.

    Examples
    --------
    >>> html_to_govspeak('<p><a href="https://www.gov.uk">GOV.UK</a></p>')
    '[GOV.UK](https://www.gov.uk)'

    """
    return _converter_for(options or GovspeakOptions()).convert(html)
