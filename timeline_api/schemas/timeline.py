"""
Request / response schemas for the event detection endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field

from timeline_api.schemas.event import EventSuggestion
from timeline_api.schemas.photo import PhotoPoint


class AutoDetectRequest(BaseModel):
    """
    Request body for POST /v1/events/auto-detect

    Photos may arrive in any order; they are sorted by `captured_at`.
    Every photo must have a `captured_at`; photos without one are
    rejected rather than skipped.
    """

    photos: list[PhotoPoint] = Field(
        description="Photos to partition into events.",
    )
    epsilon: float | None = Field(
        default=None,
        gt=0,
        description="Maximum gap in minutes between consecutive photos of "
                    "the same event. Estimated from the photos when omitted.",
    )
    min_points: int | None = Field(
        default=None,
        ge=1,
        description="Minimum photos per event; smaller runs are dropped as "
                    "noise. Defaults to DEFAULT_MIN_POINTS (3).",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "photos": [
                        {"id": 1, "captured_at": "2024-06-15T14:00:00Z",
                         "device_make": "Apple", "device_model": "iPhone 13"},
                        {"id": 2, "captured_at": "2024-06-15T14:02:00Z",
                         "device_make": "Apple", "device_model": "iPhone 13"},
                        {"id": 3, "captured_at": "2024-06-15T14:05:00Z",
                         "device_make": None, "device_model": "Pixel 8"},
                    ],
                    "epsilon": 60,
                    "min_points": 3,
                }
            ]
        }
    }


class AutoDetectResponse(BaseModel):
    """Response body for POST /v1/events/auto-detect"""

    api_version: str = Field(default="1.0")
    algorithm: str = Field(default="DBSCAN-1D")
    epsilon_used: float
    epsilon_estimated: bool = Field(
        description="True when epsilon was estimated from the photo gaps.",
    )
    min_points_used: int
    total_photos: int
    num_events: int
    num_noise: int = Field(description="Photos that did not belong to any event.")
    noise_photo_ids: list[int]
    suggestions: list[EventSuggestion] = Field(
        description="Event suggestions in chronological order.",
    )
    processing_time_ms: float


class SuggestEpsilonRequest(BaseModel):
    photos: list[PhotoPoint]


class SuggestEpsilonResponse(BaseModel):
    epsilon_minutes: float
    gaps_analysed: int


class SplitRequest(BaseModel):
    """Request body for POST /v1/events/split"""

    photos: Annotated[list[PhotoPoint], Field(min_length=1)]
    split_time: datetime = Field(
        description="Photos captured at or before this instant go to the "
                    "first event, later photos to the second.",
    )
    index: int = Field(
        default=0,
        ge=0,
        description="Timeline position of the event being split; drives "
                    "colours and fallback names.",
    )


class SplitResponse(BaseModel):
    suggestions: list[EventSuggestion] = Field(
        description="One or two suggestions; empty sides are omitted.",
    )


class MergeRequest(BaseModel):
    """Request body for POST /v1/events/merge"""

    groups: Annotated[list[list[PhotoPoint]], Field(min_length=1)]
    index: int = Field(default=0, ge=0)


class MergeResponse(BaseModel):
    suggestion: EventSuggestion
