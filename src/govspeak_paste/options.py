#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML to Govspeak conversion.

Options are immutable. Build a modified copy with ``create_updated``:

    >>> from govspeak_paste.options import GovspeakOptions
    >>> options = GovspeakOptions().create_updated(bullet_list_marker="*")
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from govspeak_paste.constants import (
    BULLET_LIST_MARKERS,
    DEFAULT_BR,
    DEFAULT_BULLET_LIST_MARKER,
    DEFAULT_CODE_BLOCK_INDENT,
    DEFAULT_HR,
    DEFAULT_HTML_PARSER,
    DEFAULT_LIST_INDENT,
    DEFAULT_REMOVED_ELEMENTS,
    HTML_PARSERS,
    BulletListMarker,
    HtmlParser,
)
from govspeak_paste.exceptions import InvalidOptionsError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class GovspeakOptions(CloneFrozenMixin):
    """Configuration options for converting pasted HTML to Govspeak.

    Parameters
    ----------
    bullet_list_marker : {"-", "*", "+"}, default "-"
        Marker placed before unordered list items.
    list_indent : str, default "   "
        Indent unit for nested list content.
    br : str, default "  "
        Marker written before the newline of a ``<br>``. The orphaned line
        break repair collapses lines consisting of this marker.
    hr : str, default "* * *"
        Horizontal rule marker.
    code_block_indent : str, default "    "
        Indent for ``<pre><code>`` blocks.
    removed_elements : tuple of str
        Tags removed from the tree, with their content, before conversion.
    html_parser : {"html.parser", "html5lib", "lxml"}, default "html.parser"
        BeautifulSoup tree builder used to parse string input.

    """

    bullet_list_marker: BulletListMarker = field(
        default=DEFAULT_BULLET_LIST_MARKER,
        metadata={"help": "Marker for unordered list items", "choices": list(BULLET_LIST_MARKERS)},
    )
    list_indent: str = field(
        default=DEFAULT_LIST_INDENT,
        metadata={"help": "Indent unit for nested list content"},
    )
    br: str = field(
        default=DEFAULT_BR,
        metadata={"help": "Marker written before the newline of a line break"},
    )
    hr: str = field(
        default=DEFAULT_HR,
        metadata={"help": "Horizontal rule marker"},
    )
    code_block_indent: str = field(
        default=DEFAULT_CODE_BLOCK_INDENT,
        metadata={"help": "Indent for preformatted code blocks"},
    )
    removed_elements: tuple[str, ...] = field(
        default=DEFAULT_REMOVED_ELEMENTS,
        metadata={"help": "Tags stripped with their content before conversion"},
    )
    html_parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={"help": "BeautifulSoup tree builder", "choices": list(HTML_PARSERS)},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        InvalidOptionsError
            If any field value is unusable.

        """
        if self.bullet_list_marker not in BULLET_LIST_MARKERS:
            raise InvalidOptionsError(
                f"bullet_list_marker must be one of {', '.join(BULLET_LIST_MARKERS)}, "
                f"got {self.bullet_list_marker!r}",
                parameter_name="bullet_list_marker",
                parameter_value=self.bullet_list_marker,
            )

        if not self.list_indent or self.list_indent.strip():
            raise InvalidOptionsError(
                f"list_indent must be non-empty whitespace, got {self.list_indent!r}",
                parameter_name="list_indent",
                parameter_value=self.list_indent,
            )

        if not self.br or "\n" in self.br:
            raise InvalidOptionsError(
                f"br must be a non-empty single-line marker, got {self.br!r}",
                parameter_name="br",
                parameter_value=self.br,
            )

        if self.html_parser not in HTML_PARSERS:
            raise InvalidOptionsError(
                f"html_parser must be one of {', '.join(HTML_PARSERS)}, got {self.html_parser!r}",
                parameter_name="html_parser",
                parameter_value=self.html_parser,
            )

        # A bare string would be split into one-letter tag names
        if not isinstance(self.removed_elements, (list, tuple)) or not all(
            isinstance(tag, str) for tag in self.removed_elements
        ):
            raise InvalidOptionsError(
                f"removed_elements must be a list of tag names, got {self.removed_elements!r}",
                parameter_name="removed_elements",
                parameter_value=self.removed_elements,
            )

        # Config files hand over lists; keep the instance hashable
        object.__setattr__(self, "removed_elements", tuple(tag.lower() for tag in self.removed_elements))

    @classmethod
    def field_names(cls) -> list[str]:
        """Return the names of all configurable fields."""
        return [f.name for f in fields(cls)]
