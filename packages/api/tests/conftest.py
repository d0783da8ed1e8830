"""Test fixtures and configuration for mpdsonic-api tests.

This module provides shared fixtures organized into:
- Backend fixtures: In-memory database and filesystem
- App fixtures: Settings, services and a TestClient over the app
- Request helpers: Credentials
"""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from mpdsonic import MemoryDatabase, MemoryFilesystem
from mpdsonic_api.api.app import create_app
from mpdsonic_api.api.container import Services
from mpdsonic_api.services.keepalive import Keepalive
from mpdsonic_api.settings import Settings

MUSIC_DIRECTORY = Path("/music")
FILE_MTIME = 1_700_000_000
TRACK_BYTES = bytes(range(256)) * 4

# Listing order fixes the ids:
#  0 ABBA                      6 Boston/1976 - Boston/02 - Peace Of Mind.flac
#  1 ABBA/Arrival              7 10cc
#  2 ABBA/Arrival/01 - ...mp3  8 10cc/Sheet Music
#  3 Boston                    9 10cc/Sheet Music/01 - Silly Love.mp3
#  4 Boston/1976 - Boston     10 loose.ogg
#  5 Boston/.../01 - ...flac
LIBRARY = {
    "ABBA/Arrival/01 - Dancing Queen.mp3": {
        "ARTIST": "ABBA",
        "ALBUM": "Arrival",
        "TITLE": "Dancing Queen",
    },
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
    "10cc/Sheet Music/01 - Silly Love.mp3": {
        "ARTIST": "10cc",
        "ALBUM": "Sheet Music",
        "TITLE": "Silly Love",
    },
    "loose.ogg": {"TITLE": "Loose"},
}

STREAMED_PATH = "Boston/1976 - Boston/01 - More Than A Feeling.flac"


# =============================================================================
# Backend Fixtures
# =============================================================================


@pytest.fixture
def database() -> MemoryDatabase:
    """In-memory database with a small tagged library."""
    return MemoryDatabase(LIBRARY)


@pytest.fixture
def filesystem() -> MemoryFilesystem:
    """In-memory filesystem holding one streamable track."""
    return MemoryFilesystem(
        {os.path.join(MUSIC_DIRECTORY, STREAMED_PATH): TRACK_BYTES},
        mtime=FILE_MTIME,
    )


# =============================================================================
# App Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """Settings with test credentials."""
    return Settings(user="test", password="test", music_directory=MUSIC_DIRECTORY)


@pytest.fixture
def services(database: MemoryDatabase, filesystem: MemoryFilesystem) -> Services:
    """Services over the in-memory backend, keepalive disabled."""
    return Services(
        database=database,
        filesystem=filesystem,
        keepalive=Keepalive(database, interval_seconds=0),
    )


@pytest.fixture
def app(settings: Settings, services: Services) -> FastAPI:
    """Application with pre-built services."""
    return create_app(settings, services)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """TestClient running the app lifespan."""
    with TestClient(app) as client:
        yield client


# =============================================================================
# Request Helpers
# =============================================================================


@pytest.fixture
def auth() -> dict[str, str]:
    """Valid plain-password credentials as query parameters."""
    return {"u": "test", "p": "test", "c": "pytest", "v": "1.14.0"}
