"""
Turn a RawCluster into an EventSuggestion.

Pure function of (cluster, index, peer sizes): calling it twice with the
same arguments returns equal suggestions.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

import numpy as np

from timeline_api.models.clustering import RawCluster
from timeline_api.schemas.event import DeviceCount, EventSuggestion
from timeline_api.schemas.photo import PhotoPoint
from timeline_api.services.event_classifier import ClusterSignals, classify
from timeline_api.utils.rounding import round_half_up

# Indexed by timeline position so neighbouring events never share a colour.
PALETTE: tuple[str, ...] = (
    "#3B82F6",  # blue
    "#10B981",  # green
    "#F59E0B",  # amber
    "#EF4444",  # red
    "#8B5CF6",  # purple
    "#EC4899",  # pink
    "#14B8A6",  # teal
    "#F97316",  # orange
)

MIN_DENSITY_HOURS = 0.1
DENSITY_DECIMALS = 2


def color_for_index(index: int) -> str:
    return PALETTE[index % len(PALETTE)]


def photo_density(photo_count: int, duration_minutes: int) -> float:
    """Photos per hour, with the hour denominator floored at 0.1."""
    hours = max(duration_minutes / 60, MIN_DENSITY_HOURS)
    return round(photo_count / hours, DENSITY_DECIMALS)


def device_breakdown(photos: Sequence[PhotoPoint]) -> list[DeviceCount]:
    # Counter keeps first-seen order and sorted() is stable, so ties are
    # listed in the order the devices first appear in the cluster.
    counts = Counter(p.device_label for p in photos if p.device_label)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [DeviceCount(model=label, count=count) for label, count in ranked]


def relative_size(photo_count: int, peer_sizes: Sequence[int] | None) -> float:
    if not peer_sizes:
        return 1.0
    return photo_count / float(np.median(peer_sizes))


def enrich_cluster(
    cluster: RawCluster,
    index: int,
    peer_sizes: Sequence[int] | None = None,
) -> EventSuggestion:
    """
    Build the suggestion for `cluster`.

    `index` is the cluster's position in the timeline (colour, fallback
    name). `peer_sizes` are the photo counts of every cluster in the same
    run; a cluster much larger than its peers leans towards ceremony or
    party.
    """
    start, end = cluster.start_time, cluster.end_time
    duration = round_half_up((end - start).total_seconds() / 60)
    density = photo_density(cluster.size, duration)

    classification = classify(
        ClusterSignals(
            hour=start.hour,
            duration=duration,
            density=density,
            photo_count=cluster.size,
            relative_size=relative_size(cluster.size, peer_sizes),
        )
    )

    return EventSuggestion(
        name=classification.name or f"Event {index + 1}",
        event_type=classification.event_type,
        start_time=start,
        end_time=end,
        duration=duration,
        photo_count=cluster.size,
        photo_ids=cluster.photo_ids,
        photo_density=density,
        devices=device_breakdown(cluster.photos),
        suggested_color=color_for_index(index),
        confidence=classification.confidence,
    )
