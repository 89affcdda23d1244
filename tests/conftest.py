"""Pytest configuration and shared fixtures for the govspeak_paste test suite."""

import logging
import os
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings
from utils import FIXTURES_DIR

from govspeak_paste import GovspeakOptions, HtmlToGovspeakConverter
from govspeak_paste.logging_utils import PACKAGE_LOGGER

settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - full conversions of realistic pastes")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests using Hypothesis")


@pytest.fixture
def converter() -> HtmlToGovspeakConverter:
    """Provide a converter with default options."""
    return HtmlToGovspeakConverter(GovspeakOptions())


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def restore_package_logging() -> Generator[None, None, None]:
    """Undo handler, level and propagation changes made by configure_logging."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    try:
        yield
    finally:
        for handler in package_logger.handlers:
            if handler not in handlers:
                handler.close()
        package_logger.handlers[:] = handlers
        package_logger.setLevel(level)
        package_logger.propagate = propagate
