"""Test utilities for the govspeak_paste test suite."""

from pathlib import Path

from bs4 import BeautifulSoup

from govspeak_paste.node import Node

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> str:
    """Return the contents of a file in tests/fixtures."""
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def node_for(html: str, tag: str, index: int = 0) -> Node:
    """Parse ``html`` and wrap the ``index``-th ``tag`` element in a Node."""
    soup = BeautifulSoup(html, "html.parser")
    return Node(soup.find_all(tag)[index])
