#  Copyright (c) 2025 Tom Villani, Ph.D.
"""govspeak_paste - convert pasted HTML to Govspeak.

Govspeak is the Markdown dialect used by GOV.UK publishing tools. When
content is pasted from a word processor or a web page, the clipboard holds
HTML full of formatting Govspeak does not support. This library turns that
HTML into Govspeak, keeping paragraphs, links, lists, h2/h3 headings and
abbreviation references, and dropping bold, italics, images and link titles.

Examples
--------
    >>> from govspeak_paste import html_to_govspeak
    >>> html_to_govspeak('<p><abbr title="United Kingdom">UK</abbr></p>')
    'UK\\n\\n*[UK]: United Kingdom'

Hosts wire this into a paste handler: take the ``text/html`` clipboard
flavor, convert it, and insert the result at the cursor instead of the
default paste.
"""

from govspeak_paste.converter import ConversionContext, HtmlToGovspeakConverter, html_to_govspeak
from govspeak_paste.exceptions import (
    ConfigError,
    DependencyError,
    GovspeakPasteError,
    InvalidInputError,
    InvalidOptionsError,
    ValidationError,
)
from govspeak_paste.node import Node
from govspeak_paste.options import GovspeakOptions
from govspeak_paste.rules import Rule, RuleSet, build_rule_set

__version__ = "0.2.5"

__all__ = [
    "ConfigError",
    "ConversionContext",
    "DependencyError",
    "GovspeakOptions",
    "GovspeakPasteError",
    "HtmlToGovspeakConverter",
    "InvalidInputError",
    "InvalidOptionsError",
    "Node",
    "Rule",
    "RuleSet",
    "ValidationError",
    "build_rule_set",
    "html_to_govspeak",
    "__version__",
]
