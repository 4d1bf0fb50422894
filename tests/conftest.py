"""Pytest configuration and shared fixtures for the markguard test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import pytest

from markguard import HtmlSanitizer, SanitizerPolicy, SoupTreeAdapter, default_policy

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=50)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    import os

    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "security: Security property tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def policy() -> SanitizerPolicy:
    """Provide the shared default sanitization policy.

    Returns
    -------
    SanitizerPolicy
        The default, immutable policy.

    """
    return default_policy()


@pytest.fixture
def adapter() -> SoupTreeAdapter:
    """Provide a BeautifulSoup tree adapter."""
    return SoupTreeAdapter()


@pytest.fixture
def sanitizer(adapter) -> HtmlSanitizer:
    """Provide a sanitizer using the default policy and the shared adapter fixture."""
    return HtmlSanitizer(adapter=adapter)
