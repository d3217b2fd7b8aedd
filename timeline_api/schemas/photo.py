"""
Photo input schema shared by the clustering services and the event endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class PhotoPoint(BaseModel):
    """
    Read-only snapshot of one photo as supplied by the photo store.

    `captured_at` is nullable so rows can be passed through verbatim;
    the clustering services reject photos without it instead of skipping
    them, since a silently dropped photo would corrupt the counts used
    when photos are bulk-assigned to events.
    """

    id: int = Field(description="Photo identifier, echoed back in `photo_ids`.")
    captured_at: datetime | None = Field(
        description="Capture timestamp from EXIF. Interpreted in whatever "
                    "timezone it carries; never converted.",
        examples=["2024-06-15T14:00:00Z"],
    )
    device_make: str | None = Field(default=None, examples=["Apple"])
    device_model: str | None = Field(default=None, examples=["iPhone 13"])

    model_config = {"frozen": True}

    @property
    def device_label(self) -> str | None:
        """`"{make} {model}"`, model alone without a make, None without a model."""
        if not self.device_model:
            return None
        if self.device_make:
            return f"{self.device_make} {self.device_model}"
        return self.device_model
