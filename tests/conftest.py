"""
Pytest configuration and fixtures for ocrparagraphs tests.
"""

from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def default_options():
    """Return default RebuildOptions for testing."""
    from ocrparagraphs import RebuildOptions

    return RebuildOptions()


@pytest.fixture(scope="session")
def honorific_options():
    """Return TypoOptions configured for the ﷺ honorific."""
    from ocrparagraphs import TypoOptions

    return TypoOptions(typo_symbols=("ﷺ",), similarity_threshold=0.7, high_similarity_threshold=0.9)
