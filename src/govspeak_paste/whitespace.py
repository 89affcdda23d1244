#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Whitespace collapsing over a parsed HTML tree.

Browsers render runs of whitespace as a single space and ignore whitespace
at the edges of blocks. Pasted HTML is full of source formatting (indented
markup, newlines between tags), so the tree is normalized in place to what
a browser would display before any rule sees it:

- runs of space, tab, CR and LF in text collapse to one space;
- a leading space is dropped when the preceding text already ends in one,
  or when nothing precedes it in the current block;
- block elements and ``<br>`` trim a trailing space from the preceding text;
- other void elements (``<img>`` and friends) keep the following space;
- ``<pre>`` content is left untouched;
- comments, doctypes and processing instructions are removed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from bs4 import NavigableString, Tag
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction

from govspeak_paste.constants import BLOCK_ELEMENTS, VOID_ELEMENTS

_WHITESPACE_RUN = re.compile(r"[ \r\n\t]+")
_NON_CONTENT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


@dataclass
class _CollapseState:
    prev_text: NavigableString | None = None
    prev_void: bool = False


def _is_pre(element: Tag) -> bool:
    return element.name.lower() == "pre"


def _trim_trailing_space(state: _CollapseState) -> None:
    if state.prev_text is not None and state.prev_text.endswith(" "):
        state.prev_text = _replace_text(state.prev_text, state.prev_text[:-1])


def _replace_text(old: NavigableString, text: str) -> NavigableString:
    new = NavigableString(text)
    old.replace_with(new)
    return new


def _mark_boundary(element: Tag, state: _CollapseState) -> None:
    name = element.name.lower()
    if name in BLOCK_ELEMENTS or name == "br":
        _trim_trailing_space(state)
        state.prev_text = None
        state.prev_void = False
    elif name in VOID_ELEMENTS:
        state.prev_text = None
        state.prev_void = True


def _collapse_children(parent: Tag, state: _CollapseState) -> None:
    for child in list(parent.contents):
        if isinstance(child, _NON_CONTENT_STRINGS):
            child.extract()
        elif isinstance(child, NavigableString):
            text = _WHITESPACE_RUN.sub(" ", str(child))
            at_context_start = state.prev_text is None or state.prev_text.endswith(" ")
            if at_context_start and not state.prev_void and text.startswith(" "):
                text = text[1:]
            state.prev_void = False

            if not text:
                child.extract()
                continue
            state.prev_text = _replace_text(child, text)
        elif isinstance(child, Tag):
            _mark_boundary(child, state)
            if child.contents and not _is_pre(child):
                _collapse_children(child, state)
                _mark_boundary(child, state)


def collapse_whitespace(root: Tag) -> None:
    """Collapse insignificant whitespace in ``root`` in place.

    Parameters
    ----------
    root : bs4.Tag
        Root of the tree to normalize, typically the BeautifulSoup document
        or its ``<body>``.

    """
    if not root.contents or (root.name and _is_pre(root)):
        return

    state = _CollapseState()
    _collapse_children(root, state)

    if state.prev_text is not None:
        _trim_trailing_space(state)
        if state.prev_text is not None and not state.prev_text:
            state.prev_text.extract()
