"""
Pytest configuration and common fixtures for md2html tests.

All fixtures follow camelCase naming convention.
"""

import logging
from pathlib import Path

import pytest

# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def restoreLogging():
    """
    Restore root and parser loggers after each test.

    The converter reconfigures logging on startup, so tests must not leak
    handlers or levels into each other.
    """
    rootLogger = logging.getLogger()
    parserLogger = logging.getLogger("lib.markdown")
    savedHandlers = rootLogger.handlers[:]
    savedLevel = rootLogger.level
    savedParserLevel = parserLogger.level

    yield

    for handler in rootLogger.handlers[:]:
        if handler not in savedHandlers:
            rootLogger.removeHandler(handler)
            handler.close()
    for handler in savedHandlers:
        if handler not in rootLogger.handlers:
            rootLogger.addHandler(handler)
    rootLogger.setLevel(savedLevel)
    parserLogger.setLevel(savedParserLevel)


# ============================================================================
# File Fixtures
# ============================================================================


@pytest.fixture
def missingConfig(tmp_path) -> str:
    """
    Provide path to a config file which does not exist.

    Returns:
        str: Path inside the test directory
    """
    return str(tmp_path / "missing.toml")


@pytest.fixture
def markdownFile(tmp_path) -> Path:
    """
    Provide a small Markdown document on disk.

    Returns:
        Path: Path to the written file
    """
    path = tmp_path / "doc.md"
    path.write_text("# Title\nSome *text*\n1. one\n2. two\n", encoding="utf-8")
    return path
