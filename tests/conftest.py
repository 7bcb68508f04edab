"""Pytest configuration and shared fixtures for the abbr2markup test suite.

This module provides shared fixtures and test configuration used across
the entire test suite.
"""

import logging
import os

import pytest
from hypothesis import Phase, Verbosity, settings

from abbr2markup.logging_utils import PACKAGE_LOGGER_NAME
from abbr2markup.options import ExpandOptions, MarkupRendererOptions

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests using Hypothesis")


@pytest.fixture
def expand_options() -> ExpandOptions:
    """Provide default expansion options."""
    return ExpandOptions()


@pytest.fixture
def markup_options() -> MarkupRendererOptions:
    """Provide default markup renderer options."""
    return MarkupRendererOptions()


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """Restore the abbr2markup logger after CLI tests reconfigure logging."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    for handler in package_logger.handlers:
        if handler not in handlers:
            handler.close()
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """Run in an empty directory with no ABBR2MARKUP_* variables set."""
    for key in list(os.environ):
        if key.startswith("ABBR2MARKUP_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path
