#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Default formatting rules.

These produce plain CommonMark for the elements Govspeak shares with
Markdown. Block elements are separated by blank lines; inline elements
without a rule pass their content through. The Govspeak rules in
:mod:`govspeak_paste.rules.govspeak` are registered on top of these and
override several of them.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from govspeak_paste.node import Node
from govspeak_paste.options import GovspeakOptions
from govspeak_paste.rules.base import Rule

if TYPE_CHECKING:
    from govspeak_paste.converter import ConversionContext

_LEADING_NEWLINES = re.compile(r"^\n+")
_TRAILING_NEWLINES = re.compile(r"\n+$")
_BACKTICK_RUN = re.compile(r"`+")


def block(content: str) -> str:
    """Separate ``content`` from its neighbours with blank lines."""
    return f"\n\n{content}\n\n"


def strip_newlines(content: str) -> str:
    """Remove leading and trailing newlines."""
    return _TRAILING_NEWLINES.sub("", _LEADING_NEWLINES.sub("", content))


def indent_lines(content: str, indent: str) -> str:
    """Indent every line after the first by ``indent``."""
    return content.replace("\n", f"\n{indent}")


def _paragraph(content: str, node: Node, context: ConversionContext) -> str:
    return block(content)


def _line_break(content: str, node: Node, context: ConversionContext) -> str:
    return f"{context.options.br}\n"


def _heading(content: str, node: Node, context: ConversionContext) -> str:
    level = int(node.name[1])
    return block(f"{'#' * level} {content}")


def _blockquote(content: str, node: Node, context: ConversionContext) -> str:
    content = strip_newlines(content)
    content = re.sub(r"^", "> ", content, flags=re.MULTILINE)
    return block(content)


def _list(content: str, node: Node, context: ConversionContext) -> str:
    parent = node.parent
    if parent is not None and parent.name == "li" and parent.last_element_child == node:
        return f"\n{content}"
    return block(content)


def _list_item(content: str, node: Node, context: ConversionContext) -> str:
    options = context.options
    content = _TRAILING_NEWLINES.sub("\n", _LEADING_NEWLINES.sub("", content))
    content = indent_lines(content, "    ")

    prefix = f"{options.bullet_list_marker}   "
    parent = node.parent
    if parent is not None and parent.name == "ol":
        start = parent.get_attribute("start")
        index = parent.element_children.index(node)
        number = int(start) + index if start and start.isdigit() else index + 1
        prefix = f"{number}.  "

    trailing = "\n" if node.next_sibling is not None and not content.endswith("\n") else ""
    return f"{prefix}{content}{trailing}"


def _is_indented_code_block(node: Node, options: GovspeakOptions) -> bool:
    children = node.children
    return node.name == "pre" and bool(children) and children[0].name == "code"


def _indented_code_block(content: str, node: Node, context: ConversionContext) -> str:
    indent = context.options.code_block_indent
    code = node.children[0].text_content
    return block(indent + indent_lines(code, indent))


def _horizontal_rule(content: str, node: Node, context: ConversionContext) -> str:
    return block(context.options.hr)


def _is_inline_link(node: Node, options: GovspeakOptions) -> bool:
    return node.name == "a" and bool(node.get_attribute("href"))


def _inline_link(content: str, node: Node, context: ConversionContext) -> str:
    title = node.get_attribute("title")
    title_part = f' "{title}"' if title else ""
    return f"[{content}]({node.get_attribute('href')}{title_part})"


def _emphasis(content: str, node: Node, context: ConversionContext) -> str:
    if not content.strip():
        return ""
    return f"_{content}_"


def _strong(content: str, node: Node, context: ConversionContext) -> str:
    if not content.strip():
        return ""
    return f"**{content}**"


def _is_inline_code(node: Node, options: GovspeakOptions) -> bool:
    if node.name != "code":
        return False
    has_siblings = node.previous_sibling is not None or node.next_sibling is not None
    parent = node.parent
    is_code_block = parent is not None and parent.name == "pre" and not has_siblings
    return not is_code_block


def _inline_code(content: str, node: Node, context: ConversionContext) -> str:
    if not content.strip():
        return ""

    delimiter = "`"
    leading_space = ""
    trailing_space = ""
    runs = _BACKTICK_RUN.findall(content)
    if runs:
        if content.startswith("`"):
            leading_space = " "
        if content.endswith("`"):
            trailing_space = " "
        while delimiter in runs:
            delimiter += "`"
    return f"{delimiter}{leading_space}{content}{trailing_space}{delimiter}"


def _image(content: str, node: Node, context: ConversionContext) -> str:
    src = node.get_attribute("src")
    if not src:
        return ""
    alt = node.get_attribute("alt") or ""
    title = node.get_attribute("title")
    title_part = f' "{title}"' if title else ""
    return f"![{alt}]({src}{title_part})"


def _default(content: str, node: Node, context: ConversionContext) -> str:
    return block(content) if node.is_block else content


def _blank(content: str, node: Node, context: ConversionContext) -> str:
    return "\n\n" if node.is_block else ""


DEFAULT_RULE = Rule("default", lambda node, options: True, _default)
BLANK_RULE = Rule("blank", lambda node, options: node.is_blank, _blank)


def commonmark_rules() -> list[Rule]:
    """Return the default rules in registration order."""
    return [
        Rule("paragraph", "p", _paragraph),
        Rule("line_break", "br", _line_break),
        Rule("heading", ["h1", "h2", "h3", "h4", "h5", "h6"], _heading),
        Rule("blockquote", "blockquote", _blockquote),
        Rule("list", ["ul", "ol"], _list),
        Rule("list_item", "li", _list_item),
        Rule("indented_code_block", _is_indented_code_block, _indented_code_block),
        Rule("horizontal_rule", "hr", _horizontal_rule),
        Rule("inline_link", _is_inline_link, _inline_link),
        Rule("emphasis", ["em", "i"], _emphasis),
        Rule("strong", ["strong", "b"], _strong),
        Rule("code", _is_inline_code, _inline_code),
        Rule("image", "img", _image),
    ]
