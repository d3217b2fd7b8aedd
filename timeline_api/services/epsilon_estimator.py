"""
Epsilon (time-gap threshold) estimation for timeline clustering.

Within one programme item photos are taken every few minutes; between
items there is a break of an hour or more. The gap distribution is
therefore heavily skewed: most gaps are short and a handful are long.
Taking the 75th percentile of the sorted gaps lands on the upper end of
the "within an event" cadence, which is then clamped to a sane window:

    bursty albums  → small percentile gap → clamped up to EPSILON_MIN (30)
    sparse albums  → large percentile gap → clamped down to EPSILON_MAX (180)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from timeline_api.models.clustering import DEFAULT_CONFIG, ClusteringConfig
from timeline_api.schemas.photo import PhotoPoint
from timeline_api.services.time_clusterer import gaps_in_minutes, sort_chronologically
from timeline_api.utils.rounding import round_half_up

logger = logging.getLogger(__name__)


def suggest_epsilon(
    points: Sequence[PhotoPoint],
    config: ClusteringConfig = DEFAULT_CONFIG,
) -> float:
    """
    Suggest an epsilon in minutes for `points`.
    Returns `config.default_epsilon` when there are fewer than two photos.
    """
    if len(points) < 2:
        return config.default_epsilon

    ordered = sort_chronologically(points)
    gaps = np.sort(gaps_in_minutes([p.captured_at for p in ordered]))  # type: ignore[misc]

    index = min(int(math.floor(len(gaps) * config.epsilon_percentile)), len(gaps) - 1)
    suggested = float(round_half_up(gaps[index]))
    clamped = max(config.min_epsilon, min(suggested, config.max_epsilon))

    logger.info(
        "Suggested epsilon: %.0f minutes (from %d gaps)",
        clamped,
        len(gaps),
        extra={"percentile_gap_minutes": suggested},
    )
    return clamped
