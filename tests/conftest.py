"""Shared pytest configuration for jdcheck tests."""

import pytest

from jdcheck.config import CheckSettings
from jdcheck.javadoc import VerificationEngine


@pytest.fixture
def engine():
    """VerificationEngine with default settings."""
    return VerificationEngine(CheckSettings())


@pytest.fixture
def make_engine():
    """
    Factory fixture for engines with non-default settings.

    Settings accept either their snake_case or camelCase names.

    Example:
        def test_narrative(make_engine):
            engine = make_engine(allowNarrativeParamTags=True)
    """

    def _make(resolver=None, **settings) -> VerificationEngine:
        return VerificationEngine(CheckSettings(**settings), resolver=resolver)

    return _make
