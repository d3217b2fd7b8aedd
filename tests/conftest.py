"""
Shared pytest fixtures and photo factories.

Strategy: services are pure functions, so unit tests build PhotoPoint
lists directly. Integration tests go through a FastAPI TestClient built
per test, with the settings cache cleared so env changes take effect.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from timeline_api.core.config import get_settings
from timeline_api.schemas.photo import PhotoPoint

WEDDING_DAY = datetime(2024, 6, 15, tzinfo=timezone.utc)


# ------------------------------------------------------------------ #
# Photo factories
# ------------------------------------------------------------------ #

def at(hour: int, minute: float = 0, day: datetime = WEDDING_DAY) -> datetime:
    return day + timedelta(minutes=hour * 60 + minute)


def make_photo(
    photo_id: int,
    captured_at: datetime | None,
    device_model: str | None = "iPhone 13",
    device_make: str | None = None,
) -> PhotoPoint:
    return PhotoPoint(
        id=photo_id,
        captured_at=captured_at,
        device_make=device_make,
        device_model=device_model,
    )


def photos_at(*timestamps: datetime) -> list[PhotoPoint]:
    return [make_photo(i + 1, ts) for i, ts in enumerate(timestamps)]


def burst_photos(count: int = 50, start: datetime | None = None) -> list[PhotoPoint]:
    """`count` photos one second apart."""
    start = start or at(14)
    return [make_photo(i + 1, start + timedelta(seconds=i)) for i in range(count)]


def wedding_photos() -> list[PhotoPoint]:
    """
    A synthetic wedding day with six programme items:

        Getting Ready  10:00-11:38   15 photos, every 7 min
        Ceremony       14:00-14:44   80 photos, very dense
        Cocktail Hour  16:00-17:28   40 photos, every 2.25 min
        Dinner         19:00-20:58   50 photos, every 2.4 min
        First Dance    22:00-22:14   25 photos, burst
        Party          23:30-00:59   90 photos, one per minute
    """
    photos: list[PhotoPoint] = []

    def add(hour: int, minute: float, model: str = "iPhone 13") -> None:
        make = "Apple" if "iPhone" in model else "Samsung"
        photos.append(make_photo(len(photos) + 1, at(hour, minute), model, make))

    for i in range(15):
        add(10, i * 7)
    for i in range(80):
        add(14, math.floor(i * 0.56), "iPhone 14 Pro" if i % 3 == 0 else "iPhone 13")
    for i in range(40):
        add(16, i * 2.25)
    for i in range(50):
        add(19, i * 2.4)
    for i in range(25):
        add(22, math.floor(i * 0.6), "Galaxy S23")
    for i in range(90):
        add(23, 30 + i)
    return photos


def photo_json(photo: PhotoPoint) -> dict:
    return photo.model_dump(mode="json")


# ------------------------------------------------------------------ #
# Test client fixtures
# ------------------------------------------------------------------ #

def _client_with_env(monkeypatch: pytest.MonkeyPatch, **env: str) -> Iterator[TestClient]:
    monkeypatch.setenv("API_KEY", "")
    monkeypatch.setenv("LOG_JSON", "false")
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()

    from timeline_api.main import create_app

    with TestClient(create_app(), raise_server_exceptions=False) as c:
        yield c
    get_settings.cache_clear()


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """TestClient in open mode (no API key)."""
    yield from _client_with_env(monkeypatch)


@pytest.fixture
def authed_client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """TestClient with API_KEY=test-secret enforced."""
    yield from _client_with_env(monkeypatch, API_KEY="test-secret")


@pytest.fixture
def small_limit_client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    yield from _client_with_env(monkeypatch, MAX_PHOTOS_PER_REQUEST="5")
