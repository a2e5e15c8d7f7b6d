"""Online/offline classification of buses from their latest location report.

Every function takes an optional ``now``; when omitted the wall clock is read
exactly once, so a single evaluation is internally consistent. Reports stamped
in the future count as online (negative elapsed time is within the threshold).
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal, Optional

from ..models.domain import LocationReport

ONLINE_THRESHOLD_MINUTES = 5.0
_MS_PER_MINUTE = 60_000

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True, frozen=True)
class LivenessStatus:
    is_online: bool
    label: Literal["Online", "Offline"]
    time_since: str


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _elapsed_ms(report: LocationReport, now: datetime) -> float:
    return (_as_utc(now) - _as_utc(report.observed_at)).total_seconds() * 1000


def _is_online_at(
    report: Optional[LocationReport],
    location_capable: bool,
    now: datetime,
    threshold_minutes: float,
) -> bool:
    if not location_capable or report is None:
        return False
    return _elapsed_ms(report, now) / _MS_PER_MINUTE <= threshold_minutes


def _label_at(report: Optional[LocationReport], now: datetime) -> str:
    if report is None:
        return "No data"
    minutes = math.floor(_elapsed_ms(report, now) / _MS_PER_MINUTE)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    return f"{minutes // 60}h ago"


def is_online(
    report: Optional[LocationReport],
    location_capable: bool,
    now: Optional[datetime] = None,
    *,
    threshold_minutes: float = ONLINE_THRESHOLD_MINUTES,
) -> bool:
    """Return True when a GPS-capable bus reported within the threshold (inclusive)."""
    return _is_online_at(report, location_capable, now or utc_now(), threshold_minutes)


def time_since_label(report: Optional[LocationReport], now: Optional[datetime] = None) -> str:
    """Human-readable recency of a report: "No data", "Just now", "{n}m ago" or "{n}h ago"."""
    return _label_at(report, now or utc_now())


def evaluate_status(
    report: Optional[LocationReport],
    location_capable: bool,
    now: Optional[datetime] = None,
    *,
    threshold_minutes: float = ONLINE_THRESHOLD_MINUTES,
) -> LivenessStatus:
    """Combine the online flag and the recency label using a single instant."""
    instant = now or utc_now()
    online = _is_online_at(report, location_capable, instant, threshold_minutes)
    return LivenessStatus(
        is_online=online,
        label="Online" if online else "Offline",
        time_since=_label_at(report, instant),
    )
