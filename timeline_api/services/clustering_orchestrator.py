"""
Clustering orchestrator: the entry point for automatic event detection.

Responsibilities:
  1. Reject invalid parameters and malformed photos before any work.
  2. Resolve epsilon (estimate it when the caller gives none).
  3. Cluster the timeline and enrich every cluster.
  4. Return suggestions in chronological order.

Everything runs synchronously in memory and shares no mutable state, so
concurrent calls on independent photo sets are safe. The HTTP layer
offloads calls to a worker thread.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from timeline_api.models.clustering import DEFAULT_CONFIG, ClusteringConfig, ClusterParameters
from timeline_api.schemas.event import EventSuggestion
from timeline_api.schemas.photo import PhotoPoint
from timeline_api.services.cluster_enricher import enrich_cluster
from timeline_api.services.epsilon_estimator import suggest_epsilon
from timeline_api.services.time_clusterer import cluster_by_time
from timeline_api.utils.photo_checks import ensure_clusterable

logger = logging.getLogger(__name__)


@dataclass
class EventDetection:
    suggestions: list[EventSuggestion]
    parameters: ClusterParameters
    epsilon_estimated: bool
    total_photos: int
    noise_photo_ids: list[int] = field(default_factory=list)


def detect_events(
    photos: Sequence[PhotoPoint],
    epsilon: float | None = None,
    min_points: int | None = None,
    config: ClusteringConfig = DEFAULT_CONFIG,
) -> EventDetection:
    """auto_detect plus the parameters it resolved and the photos left as noise."""
    resolved_min_points = config.default_min_points if min_points is None else min_points
    estimated = epsilon is None

    # Parameters are checked before the photos, even for an empty list.
    params = ClusterParameters(
        epsilon=config.default_epsilon if estimated else epsilon,  # type: ignore[arg-type]
        min_points=resolved_min_points,
    )
    ensure_clusterable(photos)
    if estimated:
        params = ClusterParameters(
            epsilon=suggest_epsilon(photos, config), min_points=resolved_min_points
        )

    clusters = cluster_by_time(photos, params.epsilon, params.min_points)
    peer_sizes = [c.size for c in clusters]

    suggestions = sorted(
        (enrich_cluster(c, index, peer_sizes) for index, c in enumerate(clusters)),
        key=lambda s: s.start_time,
    )

    clustered_ids = {pid for s in suggestions for pid in s.photo_ids}
    noise_ids = [p.id for p in photos if p.id not in clustered_ids]

    logger.info(
        "Detected %d events from %d photos",
        len(suggestions),
        len(photos),
        extra={
            "epsilon": params.epsilon,
            "epsilon_estimated": estimated,
            "min_points": params.min_points,
            "num_noise": len(noise_ids),
        },
    )
    return EventDetection(
        suggestions=suggestions,
        parameters=params,
        epsilon_estimated=estimated,
        total_photos=len(photos),
        noise_photo_ids=noise_ids,
    )


def auto_detect(
    photos: Sequence[PhotoPoint],
    epsilon: float | None = None,
    min_points: int | None = None,
    config: ClusteringConfig = DEFAULT_CONFIG,
) -> list[EventSuggestion]:
    """
    Partition `photos` into chronologically sorted event suggestions.

    `epsilon` is in minutes and estimated when omitted; `min_points`
    defaults to `config.default_min_points`. An empty photo list gives an
    empty result, not an error.
    """
    return detect_events(photos, epsilon, min_points, config).suggestions
