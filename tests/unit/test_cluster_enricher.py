"""Unit tests for turning raw clusters into event suggestions."""

from __future__ import annotations

from datetime import timedelta

import pytest

from tests.conftest import at, burst_photos, make_photo, photos_at
from timeline_api.models.clustering import RawCluster
from timeline_api.schemas.event import EventType
from timeline_api.services.cluster_enricher import (
    PALETTE,
    color_for_index,
    device_breakdown,
    enrich_cluster,
    photo_density,
)


def _cluster(photos) -> RawCluster:
    return RawCluster(photos=tuple(photos))


def test_times_duration_and_ids() -> None:
    photos = photos_at(at(14), at(14, 20), at(14, 50))
    suggestion = enrich_cluster(_cluster(photos), 0)

    assert suggestion.start_time == at(14)
    assert suggestion.end_time == at(14, 50)
    assert suggestion.duration == 50
    assert suggestion.photo_count == 3
    assert suggestion.photo_ids == [1, 2, 3]


def test_duration_is_rounded_to_whole_minutes() -> None:
    photos = photos_at(at(14), at(14) + timedelta(minutes=10, seconds=40))

    assert enrich_cluster(_cluster(photos), 0).duration == 11


def test_half_minute_duration_rounds_up() -> None:
    photos = photos_at(at(14), at(14) + timedelta(minutes=2, seconds=30))
    suggestion = enrich_cluster(_cluster(photos), 0)

    assert suggestion.duration == 3
    assert suggestion.photo_density == pytest.approx(20.0)


def test_density_formula() -> None:
    photos = photos_at(*(at(19, i * 2) for i in range(31)))  # 60 minutes
    suggestion = enrich_cluster(_cluster(photos), 0)

    expected = suggestion.photo_count / max(suggestion.duration / 60, 0.1)
    assert suggestion.photo_density == pytest.approx(expected, abs=0.01)
    assert suggestion.photo_density == pytest.approx(31.0)


def test_density_floor_for_bursts() -> None:
    suggestion = enrich_cluster(_cluster(burst_photos(50)), 0)

    assert suggestion.duration == 1
    assert suggestion.photo_density == pytest.approx(500.0)


def test_identical_timestamps_use_density_floor() -> None:
    photos = [make_photo(i, at(14)) for i in range(1, 6)]
    suggestion = enrich_cluster(_cluster(photos), 0)

    assert suggestion.duration == 0
    assert suggestion.photo_density == pytest.approx(50.0)
    assert photo_density(5, 0) == pytest.approx(50.0)


def test_device_labels_and_ordering() -> None:
    photos = [
        make_photo(1, at(14), "Pixel 8", None),
        make_photo(2, at(14, 1), "iPhone 13", "Apple"),
        make_photo(3, at(14, 2), "iPhone 13", "Apple"),
        make_photo(4, at(14, 3), None, "Canon"),
        make_photo(5, at(14, 4), "iPhone 13", "Apple"),
    ]

    devices = device_breakdown(photos)

    assert [(d.model, d.count) for d in devices] == [("Apple iPhone 13", 3), ("Pixel 8", 1)]
    assert sum(d.count for d in devices) <= len(photos)


def test_device_ties_keep_first_appearance_order() -> None:
    photos = [
        make_photo(1, at(14), "B"),
        make_photo(2, at(14, 1), "A"),
    ]

    assert [d.model for d in device_breakdown(photos)] == ["B", "A"]


def test_photos_without_devices_give_empty_breakdown() -> None:
    photos = [make_photo(i, at(14, i), None) for i in range(1, 4)]

    assert enrich_cluster(_cluster(photos), 0).devices == []


@pytest.mark.parametrize("index", [0, 3, 7, 8, 15])
def test_color_comes_from_palette_by_index(index: int) -> None:
    suggestion = enrich_cluster(_cluster(photos_at(at(14))), index)

    assert suggestion.suggested_color == PALETTE[index % len(PALETTE)]


def test_adjacent_indexes_get_distinct_colors() -> None:
    colors = [color_for_index(i) for i in range(20)]

    assert all(a != b for a, b in zip(colors, colors[1:]))


def test_unknown_events_get_positional_name() -> None:
    suggestion = enrich_cluster(_cluster(photos_at(at(3))), 4)

    assert suggestion.event_type == EventType.unknown
    assert suggestion.name == "Event 5"


def test_dense_afternoon_cluster_is_a_ceremony() -> None:
    photos = photos_at(*(at(14, i * 0.5) for i in range(80)))
    suggestion = enrich_cluster(_cluster(photos), 1, peer_sizes=[15, 80, 40])

    assert suggestion.event_type == EventType.ceremony
    assert suggestion.name == "Ceremony"
    assert suggestion.confidence > 0.7


def test_re_enrichment_is_identical() -> None:
    cluster = _cluster(photos_at(*(at(16, i * 2.25) for i in range(40))))

    first = enrich_cluster(cluster, 2, peer_sizes=[15, 80, 40])
    second = enrich_cluster(cluster, 2, peer_sizes=[15, 80, 40])

    assert first == second
    assert first.model_dump_json() == second.model_dump_json()
