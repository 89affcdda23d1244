#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Govspeak rules layered over the CommonMark defaults.

Govspeak is the Markdown dialect used by GOV.UK publishing. Content pasted
from word processors and web pages carries formatting the style guide does
not allow (bold, italics, images, deep heading levels, link titles) along
with structural noise from the exporting tool (paragraphs inside list
items, nested lists placed beside their parent item, anchors nested inside
anchors). These rules drop the former and repair the latter.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from govspeak_paste.constants import HEADING_PREFIXES, NESTED_LINK_TAIL_PATTERN
from govspeak_paste.node import Node
from govspeak_paste.options import GovspeakOptions
from govspeak_paste.rules.base import Rule
from govspeak_paste.rules.commonmark import indent_lines, strip_newlines

if TYPE_CHECKING:
    from govspeak_paste.converter import ConversionContext

logger = logging.getLogger(__name__)

_LEADING_NEWLINES = re.compile(r"^\n+")
_TRAILING_NEWLINES = re.compile(r"\n+$")


# Links: Govspeak has no link titles


def _is_link(node: Node, options: GovspeakOptions) -> bool:
    return node.name == "a" and bool(node.get_attribute("href"))


def _link(content: str, node: Node, context: ConversionContext) -> str:
    if not content.strip():
        return ""
    return f"[{content}]({node.get_attribute('href')})"


# Abbreviations: collected and written as a reference block at the end


def _is_abbreviation(node: Node, options: GovspeakOptions) -> bool:
    return node.name == "abbr" and bool(node.get_attribute("title"))


def _abbreviation(content: str, node: Node, context: ConversionContext) -> str:
    references: dict[str, str] = context.state("abbr")
    references[content] = node.get_attribute("title") or ""
    return content


def _abbreviation_references(context: ConversionContext) -> str:
    references: dict[str, str] = context.state("abbr")
    if not references:
        return ""

    logger.debug("Appending %d abbreviation reference(s)", len(references))
    lines = "".join(f"*[{abbr}]: {title}\n" for abbr, title in references.items())
    references.clear()
    return f"\n\n{lines}"


# Headings: only h2 and h3 are allowed, h6 becomes a paragraph


def _heading(content: str, node: Node, context: ConversionContext) -> str:
    return f"\n\n{HEADING_PREFIXES[node.name]}{content}\n\n"


def _drop(content: str, node: Node, context: ConversionContext) -> str:
    return ""


def _keep_content(content: str, node: Node, context: ConversionContext) -> str:
    return content


def _is_empty_paragraph(node: Node, options: GovspeakOptions) -> bool:
    return node.name == "p" and not node.text_content.strip()


def _is_paragraph_in_list_item(node: Node, options: GovspeakOptions) -> bool:
    parent = node.parent
    return node.name == "p" and parent is not None and parent.name == "li"


def _is_nested_link(node: Node, options: GovspeakOptions) -> bool:
    """Match an anchor directly after text ending in ``](``.

    Some editors nest anchors, which leaves the inner link's href dangling
    inside the outer link's markup.
    """
    if node.name != "a":
        return False
    previous = node.previous_sibling
    return previous is not None and NESTED_LINK_TAIL_PATTERN.search(previous.text_content) is not None


def _nested_link(content: str, node: Node, context: ConversionContext) -> str:
    return node.get_attribute("href") or ""


def _is_invalid_nested_list(node: Node, options: GovspeakOptions) -> bool:
    """Match a list placed beside, instead of inside, its parent ``li``.

    Google Docs exports nested lists as children of the outer ``ul``/``ol``
    rather than of the list item they belong to.
    """
    if node.name not in ("ul", "ol"):
        return False
    previous = node.previous_element_sibling
    return previous is not None and previous.name == "li"


def _invalid_nested_list(content: str, node: Node, context: ConversionContext) -> str:
    indent = context.options.list_indent
    content = indent_lines(strip_newlines(content), indent)
    return f"{indent}{content}\n"


def _list_item(content: str, node: Node, context: ConversionContext) -> str:
    """Bullet or number a list item, indenting its continuation lines.

    Ordered numbering counts ``li`` siblings only, so stray elements inside
    an ``ol`` do not shift the numbers. The ``start`` attribute is ignored.
    """
    options = context.options
    content = _TRAILING_NEWLINES.sub("\n", _LEADING_NEWLINES.sub("", content))
    content = indent_lines(content, options.list_indent)

    prefix = f"{options.bullet_list_marker} "
    parent = node.parent
    if parent is not None and parent.name == "ol":
        list_items = [child for child in parent.element_children if child.name == "li"]
        prefix = f"{list_items.index(node) + 1}. "

    trailing = "\n" if node.next_sibling is not None and not content.endswith("\n") else ""
    return f"{prefix}{content}{trailing}"


def _blank(content: str, node: Node, context: ConversionContext) -> str:
    """Replace a blank node without merging the words on either side of it."""
    if node.is_block:
        return "\n\n"

    has_whitespace = re.search(r"\s", node.text_content) is not None
    return " " if has_whitespace and not node.flanking_whitespace else ""


BLANK_RULE = Rule("blank", lambda node, options: node.is_blank, _blank)


def govspeak_rules() -> list[Rule]:
    """Return the Govspeak rules in registration order."""
    return [
        Rule("link", _is_link, _link),
        Rule("abbr", _is_abbreviation, _abbreviation, accumulator=dict, append=_abbreviation_references),
        Rule("heading", ["h1", "h2", "h3", "h4", "h5", "h6"], _heading),
        Rule("image", "img", _drop),
        Rule("bold", ["b", "strong"], _keep_content),
        Rule("italic", ["i", "em"], _keep_content),
        Rule("empty_paragraph", _is_empty_paragraph, _drop),
        Rule("paragraph_in_list_item", _is_paragraph_in_list_item, _keep_content),
        Rule("nested_link", _is_nested_link, _nested_link),
        Rule("invalid_nested_list", _is_invalid_nested_list, _invalid_nested_list),
        Rule("list_item", "li", _list_item),
    ]
