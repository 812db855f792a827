"""
Report Arithmetic Utilities
Helpers for downtime duration, reporting windows, reason normalization
and SLA severity
"""

import math
import re
from datetime import datetime
from typing import Optional

from const import HEAT_WEIGHTS, SEVERITY_TIERS

_WHITESPACE = re.compile(r"\s+")


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves toward +inf, like JavaScript Math.round"""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Convert aware timestamps to server-local naive time; naive values pass through"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def calc_downtime_hours(
    start: Optional[datetime], end: Optional[datetime]
) -> Optional[float]:
    """Downtime in hours, two decimals; None unless both ends are known"""
    if not start or not end:
        return None
    seconds = (end - start).total_seconds()
    return round_half_up(seconds / 3600, 2)


def minutes_between(
    start: Optional[datetime],
    end: Optional[datetime],
    now: Optional[datetime] = None,
) -> Optional[int]:
    """Whole minutes from start to end, counting an open period up to now"""
    if not start:
        return None
    finish = end or now or datetime.now()
    return int(round_half_up((finish - start).total_seconds() / 60))


def compute_window(moment: Optional[datetime] = None) -> str:
    """
    Two-hour reporting window label for the given moment
    e.g. 13:25 -> "12:00-14:00"
    """
    hour = (moment or datetime.now()).hour
    start = hour - (hour % 2)
    return f"{start:02d}:00-{start + 2:02d}:00"


def normalize_reason(reason: Optional[str]) -> str:
    """Uppercase a downtime reason and join its words with underscores"""
    return _WHITESPACE.sub("_", str(reason or "").strip().upper())


def severity_for(minutes: int) -> str:
    for cutoff, severity in SEVERITY_TIERS:
        if minutes >= cutoff:
            return severity
    return SEVERITY_TIERS[-1][1]


def heat_score(sla_breaches: int, down: int, faults: int) -> int:
    """Weighted branch ranking: breaches count most, then DOWN, then faults"""
    return (
        sla_breaches * HEAT_WEIGHTS["slaBreaches"]
        + down * HEAT_WEIGHTS["down"]
        + faults * HEAT_WEIGHTS["faults"]
    )
