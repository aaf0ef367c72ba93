"""Shared fixtures for dojo tests."""

from typing import Any

import pytest

from tests.fake_session import (
    KATA_URL,
    FakeBrowserSession,
    build_kata_page,
    page_scripts,
)


@pytest.fixture
def kata_url() -> str:
    return KATA_URL


@pytest.fixture
def kata_fields() -> dict[str, Any]:
    """Field values for a valid Kata.

    Returns:
        Keyword arguments accepted by Kata(...).
    """
    return {
        "id": "abc123",
        "url": KATA_URL,
        "name": "Sum Array",
        "description": "Sum all numbers in the array.",
        "difficulty": "5 kyu",
        "language": "Python",
        "solution_placeholder": "def sum_array(arr):\n    pass",
        "tests": "test.assert_equals(sum_array([1, 2]), 3)",
        "tags": ("Fundamentals", "Arrays"),
        "category": "Fundamentals",
        "author": "jhoffner",
        "languages_available": ("Python", "Ruby"),
    }


@pytest.fixture
def kata_session() -> FakeBrowserSession:
    """A session serving a fully rendered kata page."""
    return FakeBrowserSession(build_kata_page(), scripts=page_scripts())


@pytest.fixture
def no_sleep() -> list[float]:
    """Collects requested pauses instead of sleeping.

    Pass ``sleeps.append`` as a driver's sleep callable.
    """
    return []
