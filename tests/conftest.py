"""Shared test fixtures for wavemap."""

import pytest

from wavemap.core import TileDistribution
from wavemap.generation.wfc import (
    HardcodedRuleProvider,
    PermissiveRuleProvider,
    TileGrid,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (skipped by default, run with --run-slow)")


def pytest_addoption(parser):
    """Add --run-slow option to pytest."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow tests (skipped by default)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is passed."""
    if config.getoption("--run-slow"):
        return

    skip_slow = pytest.mark.skip(reason="Slow test (use --run-slow to run)")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def default_distribution() -> TileDistribution:
    """The default-biased distribution."""
    return TileDistribution.default()


@pytest.fixture
def hardcoded_rules() -> HardcodedRuleProvider:
    """The realistic terrain ruleset."""
    return HardcodedRuleProvider()


@pytest.fixture
def permissive_rules() -> PermissiveRuleProvider:
    """Accept-all rules."""
    return PermissiveRuleProvider()


@pytest.fixture
def small_grid() -> TileGrid:
    """A fresh 5x5 grid with the default distribution."""
    return TileGrid(5, 5)


@pytest.fixture
def isolated_logging():
    """Drop any handlers setup_logging added to the wavemap logger."""
    import logging

    logger = logging.getLogger("wavemap")
    saved = list(logger.handlers)
    yield logger
    for handler in list(logger.handlers):
        if handler not in saved:
            handler.close()
            logger.removeHandler(handler)
