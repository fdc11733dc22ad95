"""
Streaming daily forecast aggregator.

One forward pass over an ordered observation feed produces:

- a CurrentSnapshot taken from the first observation dated today or later
- up to MAX_FORECAST_DAYS DailySummary records (index 0 = today), each with
  high/low temperature and the worst sky condition seen that day

Per-observation problems (bad timestamp, missing temperature) are recovered
locally. A pass that keeps nothing reports AggregationStatus.EMPTY_FEED
instead of raising.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from . import time_parser
from .condition import Condition, classify, worst_condition
from .const import MAX_FORECAST_DAYS, MAX_SKY_CODES_PER_DAY, MISSING_TEMPERATURE, OBSERVATION_KEY_MAP
from .time_parser import MalformedTimestamp

_LOGGER = logging.getLogger(__name__)


def _to_temperature(value: Any) -> float:
    """Coerce a temperature to float, MISSING_TEMPERATURE when absent or unusable."""
    if value is None:
        return MISSING_TEMPERATURE
    try:
        temp = float(value)
    except (TypeError, ValueError):
        _LOGGER.debug("Non-numeric temperature %r; using %s", value, MISSING_TEMPERATURE)
        return MISSING_TEMPERATURE
    if not math.isfinite(temp):
        return MISSING_TEMPERATURE
    return temp


@dataclass(frozen=True)
class Observation:
    """One timestamped sample from the feed."""

    timestamp: str
    temperature: Optional[float] = None
    sky_code: Optional[str] = None

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "Observation":
        fields: Dict[str, Any] = {}
        for key, target in OBSERVATION_KEY_MAP.items():
            if key in row and target not in fields:
                fields[target] = row[key]
        return cls(
            timestamp=fields.get("timestamp"),
            temperature=fields.get("temperature"),
            sky_code=fields.get("sky_code"),
        )


def observations_from_rows(rows: Iterable[Any]) -> List[Observation]:
    """Normalise feed rows (Observation or mapping) into Observations, skipping anything else."""
    out: List[Observation] = []
    for row in rows:
        if isinstance(row, Observation):
            out.append(row)
        elif isinstance(row, Mapping):
            out.append(Observation.from_dict(row))
        else:
            _LOGGER.debug("Skipping feed row of unsupported type %s", type(row).__name__)
    return out


@dataclass(frozen=True)
class DailySummary:
    day_label: str
    date_label: str
    high_temp: Optional[float]
    low_temp: Optional[float]
    condition: Condition

    @classmethod
    def no_data(cls) -> "DailySummary":
        """Placeholder for a day the feed did not reach."""
        return cls(day_label="", date_label="", high_temp=None, low_temp=None, condition=Condition.CLEAR)

    @property
    def has_data(self) -> bool:
        return bool(self.date_label)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "day_label": self.day_label,
            "date_label": self.date_label,
            "high_temp": self.high_temp,
            "low_temp": self.low_temp,
            "condition": int(self.condition),
            "ha_condition": self.condition.ha_condition if self.has_data else None,
        }


@dataclass(frozen=True)
class CurrentSnapshot:
    temperature: float
    sky_code: Optional[str]
    condition: Condition

    def as_dict(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "sky_code": self.sky_code,
            "condition": int(self.condition),
            "ha_condition": self.condition.ha_condition,
        }


@dataclass
class DayBucket:
    """Accumulator for one calendar date during a single pass."""

    date: date
    day_label: str
    date_label: str
    temp_min: float = math.inf
    temp_max: float = -math.inf
    sky_codes: List[str] = field(default_factory=list)
    observation_count: int = 0

    def fold_temperature(self, temperature: float) -> None:
        self.temp_min = min(self.temp_min, temperature)
        self.temp_max = max(self.temp_max, temperature)
        self.observation_count += 1

    def add_sky_code(self, sky_code: str) -> bool:
        """Append sky_code unless the bucket is full. Returns whether it was kept."""
        if len(self.sky_codes) >= MAX_SKY_CODES_PER_DAY:
            return False
        self.sky_codes.append(sky_code)
        return True

    def summarize(self) -> DailySummary:
        # untouched buckets must never leak their +/-inf sentinels
        if self.observation_count == 0:
            return DailySummary.no_data()
        return DailySummary(
            day_label=self.day_label,
            date_label=self.date_label,
            high_temp=self.temp_max,
            low_temp=self.temp_min,
            condition=worst_condition(self.sky_codes),
        )


class AggregationStatus(Enum):
    OK = "ok"
    EMPTY_FEED = "empty_feed"


@dataclass(frozen=True)
class AggregationResult:
    status: AggregationStatus
    snapshot: Optional[CurrentSnapshot]
    daily: Tuple[DailySummary, ...]

    @property
    def is_empty(self) -> bool:
        return self.status is AggregationStatus.EMPTY_FEED

    def pages(self, count: int = MAX_FORECAST_DAYS) -> Tuple[DailySummary, ...]:
        """Daily summaries padded with no-data placeholders to exactly count entries."""
        padded = list(self.daily[:count])
        padded.extend(DailySummary.no_data() for _ in range(count - len(padded)))
        return tuple(padded)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "current": self.snapshot.as_dict() if self.snapshot else None,
            "daily": [s.as_dict() for s in self.daily],
        }


def extract_snapshot(observation: Observation) -> CurrentSnapshot:
    """Current conditions from a single retained observation.

    A missing sky code reads as CLOUDY rather than CLEAR so an ambiguous
    reading never shows sunshine.
    """
    sky_code = observation.sky_code or None
    condition = classify(sky_code) if sky_code else Condition.CLOUDY
    return CurrentSnapshot(
        temperature=_to_temperature(observation.temperature),
        sky_code=sky_code,
        condition=condition,
    )


def aggregate(observations: Iterable[Observation], today: Optional[date] = None) -> AggregationResult:
    """Reduce an ordered observation feed to a snapshot and daily summaries.

    today defaults to the local calendar date at the start of the pass.
    Observations dated before today are ignored entirely. Once
    MAX_FORECAST_DAYS distinct dates are open, the first observation of a
    further date ends the pass.
    """
    if today is None:
        today = time_parser.today()

    buckets: Dict[date, DayBucket] = {}
    snapshot_source: Optional[Observation] = None
    skipped_malformed = 0
    skipped_stale = 0

    for obs in observations:
        try:
            parsed = time_parser.parse_timestamp(obs.timestamp)
        except MalformedTimestamp as exc:
            skipped_malformed += 1
            _LOGGER.debug("Skipping observation: %s", exc)
            continue

        if parsed.date < today:
            skipped_stale += 1
            continue

        bucket = buckets.get(parsed.date)
        if bucket is None:
            if len(buckets) >= MAX_FORECAST_DAYS:
                _LOGGER.debug("Reached %d forecast days at %s; ending pass", MAX_FORECAST_DAYS, obs.timestamp)
                break
            bucket = DayBucket(
                date=parsed.date,
                day_label=time_parser.day_label(parsed.local),
                date_label=time_parser.date_label(parsed.local),
            )
            buckets[parsed.date] = bucket

        bucket.fold_temperature(_to_temperature(obs.temperature))
        if obs.sky_code:
            bucket.add_sky_code(obs.sky_code)

        if snapshot_source is None:
            snapshot_source = obs

    _LOGGER.debug(
        "Aggregation pass: %d day(s), %d malformed, %d stale (today=%s)",
        len(buckets),
        skipped_malformed,
        skipped_stale,
        today,
    )

    if snapshot_source is None:
        return AggregationResult(status=AggregationStatus.EMPTY_FEED, snapshot=None, daily=())

    daily = tuple(buckets[d].summarize() for d in sorted(buckets))
    return AggregationResult(
        status=AggregationStatus.OK,
        snapshot=extract_snapshot(snapshot_source),
        daily=daily,
    )
