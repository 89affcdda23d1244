#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Whole-document repairs applied after tree conversion.

Some artifacts span several independently converted nodes and cannot be
fixed by a rule looking at one node, so they are repaired on the text.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from govspeak_paste.constants import DEFAULT_BR, HEADING_IN_LIST_PATTERN

logger = logging.getLogger(__name__)


def remove_br_paragraphs(govspeak: str, br: str = DEFAULT_BR) -> str:
    """Collapse line-break markers left on lines of their own.

    Google Docs wraps whole documents in ``<b>``, so ``<b><p>Text</p><br><p>More
    text</p></b>`` converts to ``"Text\\n\\n  \\n\\nMore text"``. This reduces
    it to ``"Text\\n\\nMore text"``.

    Parameters
    ----------
    govspeak : str
        Converted document.
    br : str, default "  "
        The line-break marker the conversion used.

    Returns
    -------
    str
        Document with orphaned line breaks collapsed to a single newline.

    """
    pattern = re.compile(rf"\n(?:{re.escape(br)}\n)+\n?")
    return pattern.sub("\n", govspeak)


def extract_headings_from_lists(govspeak: str) -> str:
    """Drop ordered list numbering in front of h2/h3 markers (``1. ## Title``)."""
    return HEADING_IN_LIST_PATTERN.sub(r"\1", govspeak)


def post_process(govspeak: str, br: str = DEFAULT_BR) -> str:
    """Apply every repair in order and trim the document.

    Parameters
    ----------
    govspeak : str
        Converted document.
    br : str, default "  "
        The line-break marker the conversion used.

    Returns
    -------
    str
        The repaired document.

    """
    repairs: list[tuple[str, Callable[[str], str]]] = [
        ("orphaned line breaks", lambda text: remove_br_paragraphs(text, br)),
        ("headings in lists", extract_headings_from_lists),
    ]
    for description, repair in repairs:
        repaired = repair(govspeak)
        if repaired != govspeak:
            logger.debug("Post-processing repaired %s", description)
        govspeak = repaired
    return govspeak.strip()
