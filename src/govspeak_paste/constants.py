#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for govspeak_paste.

This module centralizes the element tables and default configuration values
used by the converter, the rules and the command line interface.

Constants are organized by category:
1. Type Definitions
2. Govspeak Formatting Defaults
3. HTML Element Tables
4. Post-processing Patterns
5. CLI and Configuration Files
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

BulletListMarker = Literal["-", "*", "+"]
HtmlParser = Literal["html.parser", "html5lib", "lxml"]

BULLET_LIST_MARKERS: tuple[str, ...] = ("-", "*", "+")
HTML_PARSERS: tuple[str, ...] = ("html.parser", "html5lib", "lxml")

# Install names for the optional tree builders, used in DependencyError messages
HTML_PARSER_PACKAGES: dict[str, str] = {
    "html5lib": "html5lib",
    "lxml": "lxml",
}

# =============================================================================
# Govspeak Formatting Defaults
# =============================================================================

DEFAULT_BULLET_LIST_MARKER: BulletListMarker = "-"
DEFAULT_LIST_INDENT = "   "  # 3 spaces
DEFAULT_BR = "  "
DEFAULT_HR = "* * *"
DEFAULT_CODE_BLOCK_INDENT = "    "
DEFAULT_HTML_PARSER: HtmlParser = "html.parser"

# Govspeak only supports h2 and h3; h6 is demoted to a plain paragraph
HEADING_PREFIXES: dict[str, str] = {
    "h1": "## ",
    "h2": "## ",
    "h3": "### ",
    "h4": "### ",
    "h5": "### ",
    "h6": "",
}

# =============================================================================
# HTML Element Tables
# =============================================================================

# Non-content elements stripped from the tree before traversal
DEFAULT_REMOVED_ELEMENTS: tuple[str, ...] = (
    "title",
    "script",
    "noscript",
    "style",
    "video",
    "audio",
    "object",
    "iframe",
)

BLOCK_ELEMENTS = frozenset(
    {
        "address",
        "article",
        "aside",
        "audio",
        "blockquote",
        "body",
        "canvas",
        "center",
        "dd",
        "dir",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "frameset",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hgroup",
        "hr",
        "html",
        "isindex",
        "li",
        "main",
        "menu",
        "nav",
        "noframes",
        "noscript",
        "ol",
        "output",
        "p",
        "pre",
        "section",
        "table",
        "tbody",
        "td",
        "tfoot",
        "th",
        "thead",
        "tr",
        "ul",
    }
)

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "command",
        "embed",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Elements that are never treated as blank even when their text is whitespace
BLANK_EXEMPT_ELEMENTS = frozenset({"a", "th", "td", "iframe", "script", "audio", "video"})

# =============================================================================
# Post-processing Patterns
# =============================================================================

# "1. ## Heading" -> "## Heading" (only h2/h3 markers are produced)
HEADING_IN_LIST_PATTERN = re.compile(r"\d\.\s(#{2,3})")

# Link text ending like this means the next anchor is a nested-link artifact
NESTED_LINK_TAIL_PATTERN = re.compile(r"\]\($")

# =============================================================================
# CLI and Configuration Files
# =============================================================================

CONFIG_ENV_VAR = "GOVSPEAK_PASTE_CONFIG"
PYPROJECT_SECTION = "govspeak-paste"
CONFIG_FILENAMES: tuple[str, ...] = (
    ".govspeak-paste.toml",
    ".govspeak-paste.yaml",
    ".govspeak-paste.yml",
    ".govspeak-paste.json",
    "pyproject.toml",
)
DEFAULT_LOG_LEVEL = "WARNING"
