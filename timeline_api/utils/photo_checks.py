"""
Precondition checks on photo lists before any clustering work starts.

The photo store is expected to hand over only photos with a capture time.
If one slips through, the whole call fails: skipping it would silently
change photo counts and the later photo-to-event assignment.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from timeline_api.core.errors import MalformedPhotoError
from timeline_api.schemas.photo import PhotoPoint


def is_timezone_aware(ts: datetime) -> bool:
    return ts.tzinfo is not None and ts.utcoffset() is not None


def ensure_clusterable(points: Sequence[Any]) -> None:
    """Raise MalformedPhotoError unless every point can be placed on the timeline."""
    not_photos = [i for i, p in enumerate(points) if not isinstance(p, PhotoPoint)]
    if not_photos:
        raise MalformedPhotoError(
            f"Expected PhotoPoint items; got other types at positions {not_photos[:10]}."
        )

    missing = [p.id for p in points if p.captured_at is None]
    if missing:
        raise MalformedPhotoError(
            f"{len(missing)} photo(s) have no captured_at.",
            photo_ids=missing,
        )

    duplicates = sorted(pid for pid, n in Counter(p.id for p in points).items() if n > 1)
    if duplicates:
        raise MalformedPhotoError(
            f"{len(duplicates)} photo id(s) appear more than once.",
            photo_ids=duplicates,
        )

    awareness = {is_timezone_aware(p.captured_at) for p in points}
    if len(awareness) > 1:
        naive = [p.id for p in points if not is_timezone_aware(p.captured_at)]
        raise MalformedPhotoError(
            "captured_at mixes timezone-aware and naive timestamps.",
            photo_ids=naive,
        )
