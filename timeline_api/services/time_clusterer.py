"""
DBSCAN clustering on photo capture timestamps.

In one dimension, over sorted timestamps, DBSCAN's neighbourhood expansion
degenerates to chaining consecutive photos: two photos are density-connected
exactly when every consecutive gap between them is <= epsilon. So a single
pass over the sorted gaps finds every cluster boundary, and no core / border
bookkeeping is needed.

    gap <= epsilon  → same run
    gap >  epsilon  → run closes, a new one starts

Runs with fewer than `min_points` photos are noise and dropped. With
min_points=1 every run, singletons included, is a cluster.

Typical epsilon values for a wedding day:
    eps=30  → splits toasts from dinner, ceremony from portraits
    eps=60  → one cluster per programme item
    eps=120 → merges items separated by short breaks
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

import numpy as np

from timeline_api.models.clustering import RawCluster
from timeline_api.schemas.photo import PhotoPoint

logger = logging.getLogger(__name__)


def sort_chronologically(points: Sequence[PhotoPoint]) -> list[PhotoPoint]:
    # sorted() is stable, so photos sharing a timestamp keep input order.
    return sorted(points, key=lambda p: p.captured_at)  # type: ignore[arg-type, return-value]


def gaps_in_minutes(timestamps: Sequence[datetime]) -> np.ndarray:
    """Consecutive gaps of already-sorted timestamps, in minutes."""
    if len(timestamps) < 2:
        return np.empty(0, dtype=np.float64)
    seconds = [
        (later - earlier).total_seconds()
        for earlier, later in zip(timestamps, timestamps[1:])
    ]
    return np.asarray(seconds, dtype=np.float64) / 60.0


def split_into_runs(
    points: Sequence[PhotoPoint],
    epsilon: float,
) -> list[list[PhotoPoint]]:
    """Every density-connected run, noise included, in chronological order."""
    if not points:
        return []

    ordered = sort_chronologically(points)
    gaps = gaps_in_minutes([p.captured_at for p in ordered])  # type: ignore[misc]

    # A gap at position i sits between photo i and photo i + 1.
    boundaries: list[int] = (np.flatnonzero(gaps > epsilon) + 1).tolist()
    starts = [0, *boundaries]
    ends = [*boundaries, len(ordered)]

    return [ordered[start:end] for start, end in zip(starts, ends)]


def cluster_by_time(
    points: Sequence[PhotoPoint],
    epsilon: float,
    min_points: int,
) -> list[RawCluster]:
    runs = split_into_runs(points, epsilon)

    clusters = [RawCluster(photos=tuple(run)) for run in runs if len(run) >= min_points]
    num_noise = sum(len(run) for run in runs if len(run) < min_points)

    logger.info(
        "Time clustering found %d clusters with epsilon=%.1fmin, min_points=%d",
        len(clusters),
        epsilon,
        min_points,
        extra={"num_photos": len(points), "num_runs": len(runs), "num_noise": num_noise},
    )
    return clusters
