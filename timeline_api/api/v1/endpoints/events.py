"""
Event detection endpoints.

POST /v1/events/auto-detect      - cluster photos into event suggestions
POST /v1/events/suggest-epsilon  - estimate the time-gap threshold only
POST /v1/events/split            - split one event at a timestamp
POST /v1/events/merge            - merge several events into one

The caller supplies the photos (already fetched from its photo store).
Suggestions are returned, never persisted.
"""

from __future__ import annotations

import asyncio
import time

from fastapi import APIRouter

from timeline_api.core.config import get_settings
from timeline_api.core.errors import TooManyPhotosError
from timeline_api.core.security import AuthDep
from timeline_api.models.clustering import ClusteringConfig
from timeline_api.schemas.photo import PhotoPoint
from timeline_api.schemas.timeline import (
    AutoDetectRequest,
    AutoDetectResponse,
    MergeRequest,
    MergeResponse,
    SplitRequest,
    SplitResponse,
    SuggestEpsilonRequest,
    SuggestEpsilonResponse,
)
from timeline_api.services.cluster_editor import merge, split_at
from timeline_api.services.clustering_orchestrator import detect_events
from timeline_api.services.epsilon_estimator import suggest_epsilon
from timeline_api.utils.photo_checks import ensure_clusterable

router = APIRouter(prefix="/events", tags=["Events"])

_ERROR_RESPONSES = {
    401: {"description": "Missing or invalid X-Api-Key header."},
    413: {"description": "Too many photos in one request."},
    422: {"description": "Invalid parameters or malformed photos."},
}


def _check_photo_limit(count: int) -> None:
    settings = get_settings()
    if count > settings.max_photos_per_request:
        raise TooManyPhotosError(count, settings.max_photos_per_request)


@router.post(
    "/auto-detect",
    response_model=AutoDetectResponse,
    summary="Detect events from photo capture times",
    description=(
        "Cluster photos by capture time (1-D DBSCAN) and classify each "
        "cluster as prep, ceremony, cocktails, dinner, first_dance, party "
        "or unknown. An empty photo list returns no suggestions. "
        "Photos in runs smaller than `min_points` are reported as noise."
    ),
    responses=_ERROR_RESPONSES,
)
async def auto_detect_events(
    body: AutoDetectRequest,
    _auth: AuthDep,
) -> AutoDetectResponse:
    _check_photo_limit(len(body.photos))
    config = ClusteringConfig.from_settings(get_settings())

    t0 = time.perf_counter()
    detection = await asyncio.to_thread(
        detect_events, body.photos, body.epsilon, body.min_points, config
    )
    elapsed_ms = (time.perf_counter() - t0) * 1000

    return AutoDetectResponse(
        epsilon_used=detection.parameters.epsilon,
        epsilon_estimated=detection.epsilon_estimated,
        min_points_used=detection.parameters.min_points,
        total_photos=detection.total_photos,
        num_events=len(detection.suggestions),
        num_noise=len(detection.noise_photo_ids),
        noise_photo_ids=detection.noise_photo_ids,
        suggestions=detection.suggestions,
        processing_time_ms=round(elapsed_ms, 2),
    )


@router.post(
    "/suggest-epsilon",
    response_model=SuggestEpsilonResponse,
    summary="Suggest a time-gap threshold for auto-detection",
    responses=_ERROR_RESPONSES,
)
async def suggest_epsilon_for_photos(
    body: SuggestEpsilonRequest,
    _auth: AuthDep,
) -> SuggestEpsilonResponse:
    _check_photo_limit(len(body.photos))
    ensure_clusterable(body.photos)
    config = ClusteringConfig.from_settings(get_settings())

    epsilon = await asyncio.to_thread(suggest_epsilon, body.photos, config)
    return SuggestEpsilonResponse(
        epsilon_minutes=epsilon,
        gaps_analysed=max(len(body.photos) - 1, 0),
    )


@router.post(
    "/split",
    response_model=SplitResponse,
    summary="Split an event in two at a timestamp",
    responses=_ERROR_RESPONSES,
)
async def split_event(
    body: SplitRequest,
    _auth: AuthDep,
) -> SplitResponse:
    _check_photo_limit(len(body.photos))
    suggestions = await asyncio.to_thread(split_at, body.photos, body.split_time, body.index)
    return SplitResponse(suggestions=suggestions)


@router.post(
    "/merge",
    response_model=MergeResponse,
    summary="Merge several events into one",
    responses=_ERROR_RESPONSES,
)
async def merge_events(
    body: MergeRequest,
    _auth: AuthDep,
) -> MergeResponse:
    photos: list[PhotoPoint] = [p for group in body.groups for p in group]
    _check_photo_limit(len(photos))
    suggestion = await asyncio.to_thread(merge, body.groups, body.index)
    return MergeResponse(suggestion=suggestion)
