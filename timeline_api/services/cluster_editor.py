"""
Manual corrections to automatically detected events.

Both operations take photos rather than suggestions, re-enrich from
scratch, and leave their inputs untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from timeline_api.core.errors import EmptyEventError, InvalidSplitTimeError
from timeline_api.models.clustering import RawCluster
from timeline_api.schemas.event import EventSuggestion
from timeline_api.schemas.photo import PhotoPoint
from timeline_api.services.cluster_enricher import enrich_cluster
from timeline_api.services.time_clusterer import sort_chronologically
from timeline_api.utils.photo_checks import ensure_clusterable, is_timezone_aware

logger = logging.getLogger(__name__)


def split_at(
    photos: Sequence[PhotoPoint],
    split_time: datetime,
    index: int = 0,
) -> list[EventSuggestion]:
    """
    Split one event in two at `split_time`.

    Photos captured at or before `split_time` form the first event, later
    ones the second. Empty sides are omitted, so 0, 1 or 2 suggestions
    come back. The first event is enriched at `index`, the second at
    `index + 1`.
    """
    ensure_clusterable(photos)
    if photos and is_timezone_aware(photos[0].captured_at) != is_timezone_aware(split_time):  # type: ignore[arg-type]
        raise InvalidSplitTimeError(
            "split_time and captured_at must both be timezone-aware or both naive."
        )

    ordered = sort_chronologically(photos)
    before = [p for p in ordered if p.captured_at <= split_time]  # type: ignore[operator]
    after = [p for p in ordered if p.captured_at > split_time]  # type: ignore[operator]

    suggestions = []
    if before:
        suggestions.append(enrich_cluster(RawCluster(photos=tuple(before)), index))
    if after:
        suggestions.append(enrich_cluster(RawCluster(photos=tuple(after)), index + 1))

    logger.info(
        "Split %d photos at %s into %d/%d",
        len(ordered),
        split_time.isoformat(),
        len(before),
        len(after),
    )
    return suggestions


def merge(
    groups: Sequence[Sequence[PhotoPoint]],
    index: int = 0,
) -> EventSuggestion:
    """Merge several events' photos into a single suggestion."""
    photos = [p for group in groups for p in group]
    if not photos:
        raise EmptyEventError("Cannot merge: every group is empty.")

    ensure_clusterable(photos)
    merged = enrich_cluster(RawCluster(photos=tuple(sort_chronologically(photos))), index)

    logger.info(
        "Merged %d groups into one event of %d photos",
        sum(1 for g in groups if g),
        merged.photo_count,
    )
    return merged
