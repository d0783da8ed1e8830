"""Test fixtures and configuration for mpdsonic tests.

This module provides shared fixtures organized into:
- Listing fixtures: Backend path listings used across index tests
- Database fixtures: In-memory databases with and without tags
"""

from __future__ import annotations

import pytest
from mpdsonic.memory import MemoryDatabase

# =============================================================================
# Listing Fixtures
# =============================================================================

BOSTON_PATHS = [
    "Boston/1976 - Boston/01 - More Than A Feeling.flac",
    "Boston/1976 - Boston/02 - Peace Of Mind.flac",
]


@pytest.fixture
def boston_paths() -> list[str]:
    """Two tracks from one album, two directory levels deep."""
    return list(BOSTON_PATHS)


@pytest.fixture
def library_paths() -> list[str]:
    """A sorted listing with several artists, albums and loose files."""
    return [
        "ABBA/Arrival/01 - Knowing Me, Knowing You.mp3",
        "ABBA/Arrival/02 - Dancing Queen.mp3",
        "ABBA/Gold/01 - Dancing Queen.mp3",
        "Boston/1976 - Boston/01 - More Than A Feeling.flac",
        "loose.ogg",
    ]


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def tagged_database() -> MemoryDatabase:
    """Database with tags for every file."""
    return MemoryDatabase(
        {
            "Boston/1976 - Boston/01 - More Than A Feeling.flac": {
                "ARTIST": "Boston",
                "ALBUM": "Boston",
                "TITLE": "More Than a Feeling",
            },
            "Boston/1976 - Boston/02 - Peace Of Mind.flac": {
                "ARTIST": "Boston",
                "ALBUM": "Boston",
                "TITLE": "Peace of Mind",
            },
            "Boston/demo.mp3": {
                "ARTIST": "Boston",
                "ALBUM": "Demos",
                "TITLE": "Demo",
            },
        }
    )
