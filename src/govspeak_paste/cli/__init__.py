"""Command-line interface for converting pasted HTML to Govspeak.

Reads HTML from a file or standard input and writes Govspeak to standard
output or a file. Useful for checking what a paste will turn into, and for
batch-converting exported documents.

Examples
--------
Convert a saved clipboard fragment::

    $ govspeak-paste fragment.html

Read from standard input::

    $ cat fragment.html | govspeak-paste

Write to a file with a different bullet marker::

    $ govspeak-paste fragment.html --bullet-marker "*" --out body.govspeak

Configuration files (``.govspeak-paste.toml``, ``.yaml``, ``.json`` or
``[tool.govspeak-paste]`` in ``pyproject.toml``) are discovered from the
current directory upwards, or named with ``--config`` or the
GOVSPEAK_PASTE_CONFIG environment variable. Command-line flags override
configuration file values.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from govspeak_paste.cli.config import discover_config_file, load_config_file, options_from_config
from govspeak_paste.constants import BULLET_LIST_MARKERS, DEFAULT_LOG_LEVEL, HTML_PARSERS
from govspeak_paste.converter import HtmlToGovspeakConverter
from govspeak_paste.exceptions import GovspeakPasteError
from govspeak_paste.logging_utils import configure_logging
from govspeak_paste.options import GovspeakOptions

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Expected a whole number, got {value!r}") from e
    if number < 1:
        raise argparse.ArgumentTypeError(f"Expected a positive number, got {number}")
    return number


def _get_version() -> str:
    from govspeak_paste import __version__

    return __version__


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the govspeak-paste command."""
    parser = argparse.ArgumentParser(
        prog="govspeak-paste",
        description="Convert HTML (for example clipboard content from a word processor) to Govspeak.",
    )
    parser.add_argument("input", nargs="?", default="-", help="HTML file to convert, or '-' for stdin (default)")
    parser.add_argument("-o", "--out", help="Write Govspeak to this file instead of stdout")
    parser.add_argument("--config", help="Configuration file (JSON, TOML or YAML)")

    formatting = parser.add_argument_group("formatting")
    formatting.add_argument(
        "--bullet-marker",
        dest="bullet_list_marker",
        choices=list(BULLET_LIST_MARKERS),
        help="Marker for unordered list items (default: -)",
    )
    formatting.add_argument(
        "--list-indent-width",
        type=_positive_int,
        help="Number of spaces nested list content is indented by (default: 3)",
    )
    formatting.add_argument(
        "--html-parser",
        choices=list(HTML_PARSERS),
        help="BeautifulSoup tree builder (default: html.parser)",
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        default=os.environ.get("GOVSPEAK_PASTE_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write log output to this file")
    logging_group.add_argument("--trace", action="store_true", help="Timestamped log output with logger names")

    parser.add_argument("--version", action="version", version=f"%(prog)s {_get_version()}")
    return parser


def resolve_options(args: argparse.Namespace) -> GovspeakOptions:
    """Combine configuration file values and command-line flags into options.

    Raises
    ------
    ConfigError
        If a configuration file is named but cannot be loaded.
    InvalidOptionsError
        If the combined values are invalid.

    """
    config_path: Optional[Path] = Path(args.config) if args.config else discover_config_file()
    config: Dict[str, Any] = load_config_file(config_path) if config_path else {}

    overrides: Dict[str, Any] = {}
    if args.bullet_list_marker:
        overrides["bullet_list_marker"] = args.bullet_list_marker
    if args.list_indent_width:
        overrides["list_indent"] = " " * args.list_indent_width
    if args.html_parser:
        overrides["html_parser"] = args.html_parser

    return options_from_config({**config, **overrides})


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_output(govspeak: str, destination: Optional[str]) -> None:
    if destination and destination != "-":
        Path(destination).write_text(govspeak + "\n", encoding="utf-8")
        logger.info("Wrote Govspeak to %s", destination)
    else:
        sys.stdout.write(govspeak + "\n")


def main(argv: Optional[list[str]] = None) -> int:
    """Run the govspeak-paste command.

    Parameters
    ----------
    argv : list of str, optional
        Arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Exit code: 0 on success, 1 on conversion, configuration or I/O errors.
        Usage errors exit with 2 from argparse.

    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, log_file=args.log_file, trace_mode=args.trace)

    try:
        options = resolve_options(args)
        converter = HtmlToGovspeakConverter(options)
        html = _read_input(args.input)
        govspeak = converter.convert(html)
        _write_output(govspeak, args.out)
    except GovspeakPasteError as e:
        logger.error(e.message)
        return 1
    except OSError as e:
        logger.error("I/O error: %s", e)
        return 1

    return 0


__all__ = ["create_parser", "main", "resolve_options"]
