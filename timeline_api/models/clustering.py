"""
In-memory value objects used by the clustering services.

Nothing here is persisted; a RawCluster lives for one clustering call.

Design decisions
----------------
- Frozen dataclasses, so the same objects can be shared between
  concurrent requests without copying.
- ClusteringConfig is built explicitly (usually from Settings) and passed
  into the orchestrator; no service reads configuration on its own.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from timeline_api.core.errors import InvalidClusterParametersError
from timeline_api.schemas.photo import PhotoPoint


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class ClusterParameters:
    """Validated `(epsilon, min_points)` pair; epsilon is in minutes."""

    epsilon: float
    min_points: int

    def __post_init__(self) -> None:
        if not _is_number(self.epsilon) or not math.isfinite(self.epsilon):
            raise InvalidClusterParametersError(
                f"epsilon must be a finite number of minutes, got {self.epsilon!r}."
            )
        if self.epsilon <= 0:
            raise InvalidClusterParametersError(
                f"epsilon must be greater than 0, got {self.epsilon}."
            )
        if not isinstance(self.min_points, int) or isinstance(self.min_points, bool):
            raise InvalidClusterParametersError(
                f"min_points must be an integer, got {self.min_points!r}."
            )
        if self.min_points < 1:
            raise InvalidClusterParametersError(
                f"min_points must be at least 1, got {self.min_points}."
            )


@dataclass(frozen=True)
class ClusteringConfig:
    default_min_points: int = 3
    default_epsilon: float = 60.0
    min_epsilon: float = 30.0
    max_epsilon: float = 180.0
    epsilon_percentile: float = 0.75

    @classmethod
    def from_settings(cls, settings: Any) -> ClusteringConfig:
        return cls(
            default_min_points=settings.default_min_points,
            default_epsilon=settings.epsilon_default_minutes,
            min_epsilon=settings.epsilon_min_minutes,
            max_epsilon=settings.epsilon_max_minutes,
            epsilon_percentile=settings.epsilon_percentile,
        )


DEFAULT_CONFIG = ClusteringConfig()


@dataclass(frozen=True)
class RawCluster:
    """Time-ascending, non-empty group of photos produced by the clusterer."""

    photos: tuple[PhotoPoint, ...]

    def __post_init__(self) -> None:
        if not self.photos:
            raise ValueError("RawCluster requires at least one photo.")

    @property
    def size(self) -> int:
        return len(self.photos)

    @property
    def start_time(self) -> datetime:
        return self.photos[0].captured_at  # type: ignore[return-value]

    @property
    def end_time(self) -> datetime:
        return self.photos[-1].captured_at  # type: ignore[return-value]

    @property
    def photo_ids(self) -> list[int]:
        return [p.id for p in self.photos]
