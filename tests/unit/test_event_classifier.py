"""Unit tests for the event classification bands."""

from __future__ import annotations

import pytest

from timeline_api.schemas.event import EventType
from timeline_api.services.event_classifier import (
    EVENT_BANDS,
    UNKNOWN_CONFIDENCE,
    ClusterSignals,
    classify,
)


@pytest.mark.parametrize(
    ("signals", "expected"),
    [
        (ClusterSignals(hour=14, duration=44, density=109.0, photo_count=80), EventType.ceremony),
        (ClusterSignals(hour=22, duration=14, density=107.0, photo_count=25), EventType.first_dance),
        (ClusterSignals(hour=23, duration=89, density=60.7, photo_count=90), EventType.party),
        (ClusterSignals(hour=16, duration=88, density=27.3, photo_count=40), EventType.cocktails),
        (ClusterSignals(hour=19, duration=118, density=25.4, photo_count=50), EventType.dinner),
        (ClusterSignals(hour=10, duration=98, density=9.2, photo_count=15), EventType.prep),
        (ClusterSignals(hour=3, duration=0, density=10.0, photo_count=1), EventType.unknown),
    ],
)
def test_band_selection(signals: ClusterSignals, expected: EventType) -> None:
    assert classify(signals).event_type == expected


def test_ceremony_requires_daytime() -> None:
    signals = ClusterSignals(hour=20, duration=44, density=109.0, photo_count=80)

    assert classify(signals).event_type != EventType.ceremony


def test_ceremony_confidence_is_high() -> None:
    result = classify(ClusterSignals(hour=14, duration=44, density=109.0, photo_count=80))

    assert result.name == "Ceremony"
    assert result.confidence > 0.7


def test_unknown_has_no_name_and_lowest_confidence() -> None:
    result = classify(ClusterSignals(hour=3, duration=0, density=10.0, photo_count=1))

    assert result.name is None
    assert result.confidence == UNKNOWN_CONFIDENCE
    assert all(UNKNOWN_CONFIDENCE < band.min_confidence for band in EVENT_BANDS)


def test_cocktails_excluded_at_dinner_time() -> None:
    signals = ClusterSignals(hour=19, duration=90, density=25.0, photo_count=40)

    assert classify(signals).event_type == EventType.dinner


def test_confidence_grows_with_signal_strength() -> None:
    weak = ClusterSignals(hour=14, duration=58, density=51.0, photo_count=50)
    strong = ClusterSignals(hour=14, duration=10, density=300.0, photo_count=50)

    assert classify(strong).confidence > classify(weak).confidence


def test_larger_than_peers_boosts_ceremony_confidence() -> None:
    base = ClusterSignals(hour=14, duration=40, density=120.0, photo_count=80)
    dominant = ClusterSignals(hour=14, duration=40, density=120.0, photo_count=80, relative_size=2.0)

    assert classify(dominant).confidence > classify(base).confidence


@pytest.mark.parametrize("band", EVENT_BANDS, ids=lambda b: b.event_type.value)
def test_confidence_stays_within_band_range(band) -> None:
    extremes = [
        ClusterSignals(hour=0, duration=0, density=0.0, photo_count=1, relative_size=0.0),
        ClusterSignals(hour=12, duration=10_000, density=10_000.0, photo_count=10_000, relative_size=50.0),
    ]
    for signals in extremes:
        confidence = band.confidence(signals)
        assert band.min_confidence <= confidence <= band.max_confidence
        assert 0.0 <= confidence <= 1.0
