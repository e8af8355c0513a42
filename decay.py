"""Availability and name-decay rules for summoner records."""

from dataclasses import dataclass
from datetime import datetime

from lookup import SummonerRecord

MIN_DECAY_MONTHS = 6
MAX_DECAY_MONTHS = 30


@dataclass(frozen=True)
class DerivedStatus:
    available: bool
    decay_months: int


def decay_months(level: int) -> int:
    """Months of inactivity before a name frees up, clamped to [6, 30]."""
    return min(MAX_DECAY_MONTHS, max(MIN_DECAY_MONTHS, level))


def decay_formula(level: int) -> str:
    return f"min({MAX_DECAY_MONTHS}, max({MIN_DECAY_MONTHS}, {level})) = {decay_months(level)} months"


def is_available(record: SummonerRecord, now: datetime) -> bool:
    return record.availability_date <= now


def derive(record: SummonerRecord, now: datetime) -> DerivedStatus:
    """
    Compute the facts shown for a found summoner.

    `now` must be passed in and the result must not be stored with the
    record: availability flips once the clock passes availability_date.
    """
    return DerivedStatus(
        available=is_available(record, now),
        decay_months=decay_months(record.level),
    )
