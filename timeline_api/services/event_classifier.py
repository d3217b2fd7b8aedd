"""
Heuristic wedding event classification.

A cluster is described by a handful of signals (start hour, duration,
density, size relative to the other clusters of the same run) and matched
against an ordered table of bands. The first band whose predicate holds
wins. Confidence is not a probability: it is the band's confidence range
scaled by how far the signals sit past the band's thresholds.

Typical wedding timeline the bands are tuned on:

    Getting Ready   10:00-12:00   sparse, small
    Ceremony        14:00-14:45   very dense, short, biggest cluster
    Cocktail Hour   16:00-17:30   medium density
    Dinner          19:00-21:00   long, low density
    First Dance     22:00-22:15   very dense burst
    Party           23:30-01:00   long and dense, late

Hours are read from the timestamps as given; they are never converted
to another timezone.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from timeline_api.schemas.event import EventType

# Shared thresholds (minutes, photos/hour).
HIGH_DENSITY = 50.0
PARTY_DENSITY = 40.0
DINNER_MAX_DENSITY = 40.0
LOW_DENSITY = 30.0
SHORT_DURATION = 60
BURST_DURATION = 20
LONG_DURATION = 60
COCKTAIL_DURATION = (45, 180)
COCKTAIL_DENSITY = (10.0, 50.0)
PREP_MAX_PHOTOS = 40

UNKNOWN_CONFIDENCE = 0.35


@dataclass(frozen=True)
class ClusterSignals:
    hour: int
    duration: int
    density: float
    photo_count: int
    relative_size: float = 1.0


@dataclass(frozen=True)
class Classification:
    event_type: EventType
    name: str | None     # None → caller picks a positional fallback name
    confidence: float


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def _above(value: float, threshold: float, span: float) -> float:
    """0 at the threshold, 1 once `value` is `span` past it."""
    return _clamp((value - threshold) / span)


def _below(value: float, threshold: float, span: float) -> float:
    return _clamp((threshold - value) / span)


def _centred(value: float, low: float, high: float) -> float:
    """1 at the middle of [low, high], 0 at either edge."""
    half = (high - low) / 2
    return _clamp(1 - abs(value - (low + half)) / half)


def _dominance(s: ClusterSignals) -> float:
    # A cluster twice the median size scores 1.
    return _clamp(s.relative_size - 1.0)


def _mean(*scores: float) -> float:
    return sum(scores) / len(scores)


def _is_daytime(hour: int) -> bool:
    return 10 <= hour < 18


def _is_evening(hour: int) -> bool:
    return hour >= 18 or hour < 4


def _is_late_night(hour: int) -> bool:
    return hour >= 21 or hour < 4


@dataclass(frozen=True)
class EventBand:
    event_type: EventType
    name: str
    matches: Callable[[ClusterSignals], bool]
    strength: Callable[[ClusterSignals], float]
    min_confidence: float
    max_confidence: float

    def confidence(self, signals: ClusterSignals) -> float:
        spread = self.max_confidence - self.min_confidence
        return round(self.min_confidence + spread * _clamp(self.strength(signals)), 3)


# Evaluated top to bottom; order matters where predicates overlap.
EVENT_BANDS: tuple[EventBand, ...] = (
    EventBand(
        event_type=EventType.ceremony,
        name="Ceremony",
        matches=lambda s: (
            s.density > HIGH_DENSITY
            and s.duration < SHORT_DURATION
            and _is_daytime(s.hour)
        ),
        strength=lambda s: _mean(
            _above(s.density, HIGH_DENSITY, 100),
            _below(s.duration, SHORT_DURATION, SHORT_DURATION),
            _dominance(s),
        ),
        min_confidence=0.75,
        max_confidence=0.95,
    ),
    EventBand(
        event_type=EventType.first_dance,
        name="First Dance",
        matches=lambda s: (
            s.duration < BURST_DURATION
            and s.density > HIGH_DENSITY
            and _is_evening(s.hour)
        ),
        strength=lambda s: _mean(
            _below(s.duration, BURST_DURATION, BURST_DURATION),
            _above(s.density, HIGH_DENSITY, 100),
        ),
        min_confidence=0.60,
        max_confidence=0.85,
    ),
    EventBand(
        event_type=EventType.party,
        name="Party Time",
        matches=lambda s: (
            s.duration > LONG_DURATION
            and s.density > PARTY_DENSITY
            and _is_late_night(s.hour)
        ),
        strength=lambda s: _mean(
            _above(s.density, PARTY_DENSITY, 60),
            _above(s.duration, LONG_DURATION, 120),
            _dominance(s),
        ),
        min_confidence=0.65,
        max_confidence=0.90,
    ),
    EventBand(
        event_type=EventType.cocktails,
        name="Cocktail Hour",
        matches=lambda s: (
            COCKTAIL_DURATION[0] <= s.duration <= COCKTAIL_DURATION[1]
            and COCKTAIL_DENSITY[0] <= s.density <= COCKTAIL_DENSITY[1]
            and 15 <= s.hour < 19
        ),
        strength=lambda s: _mean(
            _centred(s.duration, *COCKTAIL_DURATION),
            _centred(s.density, *COCKTAIL_DENSITY),
        ),
        min_confidence=0.60,
        max_confidence=0.85,
    ),
    EventBand(
        event_type=EventType.dinner,
        name="Dinner",
        matches=lambda s: (
            s.duration > LONG_DURATION
            and s.density <= DINNER_MAX_DENSITY
            and 18 <= s.hour < 23
        ),
        strength=lambda s: _mean(
            _above(s.duration, LONG_DURATION, 120),
            _below(s.density, DINNER_MAX_DENSITY, DINNER_MAX_DENSITY),
        ),
        min_confidence=0.55,
        max_confidence=0.80,
    ),
    EventBand(
        event_type=EventType.prep,
        name="Getting Ready",
        matches=lambda s: (
            5 <= s.hour < 12
            and s.density < LOW_DENSITY
            and s.photo_count <= PREP_MAX_PHOTOS
        ),
        strength=lambda s: _mean(
            _below(s.density, LOW_DENSITY, LOW_DENSITY),
            _below(s.photo_count, PREP_MAX_PHOTOS, PREP_MAX_PHOTOS),
        ),
        min_confidence=0.50,
        max_confidence=0.75,
    ),
)


def classify(
    signals: ClusterSignals,
    bands: tuple[EventBand, ...] = EVENT_BANDS,
) -> Classification:
    for band in bands:
        if band.matches(signals):
            return Classification(band.event_type, band.name, band.confidence(signals))
    return Classification(EventType.unknown, None, UNKNOWN_CONFIDENCE)
