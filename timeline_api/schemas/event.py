"""
Event suggestion schemas, the output contract of the clustering engine.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class EventType(str, Enum):
    prep = "prep"
    ceremony = "ceremony"
    cocktails = "cocktails"
    dinner = "dinner"
    first_dance = "first_dance"
    party = "party"
    unknown = "unknown"


class DeviceCount(BaseModel):
    model: str = Field(description="Device label, `make model` when the make is known.")
    count: int = Field(ge=1, description="Number of photos taken with this device.")


class EventSuggestion(BaseModel):
    """
    A cluster of time-adjacent photos with a suggested name, type and colour.

    Suggestions are never persisted here; the caller turns accepted ones
    into event records and assigns `photo_ids` to them.
    """

    name: str = Field(examples=["Ceremony"])
    event_type: EventType
    start_time: datetime = Field(description="Capture time of the first photo.")
    end_time: datetime = Field(description="Capture time of the last photo.")
    duration: int = Field(ge=0, description="Rounded minutes between start and end.")
    photo_count: int = Field(ge=1)
    photo_ids: list[int] = Field(description="Photo ids in chronological order.")
    photo_density: float = Field(
        description="Photos per hour; the hour denominator is floored at 0.1 "
                    "so bursts do not blow up.",
    )
    devices: list[DeviceCount] = Field(
        description="Per-device photo counts, most used first. Photos without "
                    "a device model are not counted.",
    )
    suggested_color: str = Field(pattern=r"^#[0-9A-F]{6}$", examples=["#3B82F6"])
    confidence: float = Field(ge=0.0, le=1.0)
