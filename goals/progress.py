"""
Progress aggregation for fitness goals.

Everything here is derived from the full list of progress log entries of a
goal; nothing is cached. All functions are pure: the reference "today" is
passed in by the caller and only defaults to the active Django time zone's
current date when omitted.

Calendar days are taken in ``tz`` when given, otherwise in the active time
zone (``settings.TIME_ZONE``). Naive datetimes are treated as already being
in that zone.
"""
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Optional

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime


@dataclass(frozen=True)
class ProgressSummary:
    total: Any
    streak: int


def _field(entry, name):
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def calendar_day(value, tz=None) -> Optional[date]:
    """Return the calendar day of a timestamp, or None if it can't be read."""
    if isinstance(value, str):
        try:
            parsed = parse_datetime(value) or parse_date(value)
        except ValueError:
            return None
        value = parsed

    if isinstance(value, datetime):
        if timezone.is_naive(value):
            return value.date()
        if tz is not None:
            return value.astimezone(tz).date()
        return timezone.localtime(value).date()

    if isinstance(value, date):
        return value

    return None


def _reference_day(reference_date, tz=None) -> date:
    if reference_date is None:
        if tz is not None:
            return timezone.now().astimezone(tz).date()
        return timezone.localdate()
    return calendar_day(reference_date, tz)


def calculate_streak(timestamps: Iterable, reference_date, tz=None) -> int:
    # A day counts once no matter how many entries it has.
    covered = {calendar_day(ts, tz) for ts in timestamps}
    covered.discard(None)

    streak = 0
    cursor = _reference_day(reference_date, tz)
    while cursor in covered:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def compute_progress(entries: Iterable, reference_date=None, tz=None) -> ProgressSummary:
    """
    Reduce log entries to the cumulative total and the current streak.

    ``entries`` may be model instances or mappings with ``value`` and
    ``logged_at``, in any order. Entries dated after the reference day never
    count towards the streak; entries with an unreadable ``logged_at`` still
    count towards the total.
    """
    entries = list(entries)
    total = sum(_field(entry, 'value') for entry in entries)
    streak = calculate_streak(
        (_field(entry, 'logged_at') for entry in entries),
        reference_date,
        tz
    )
    return ProgressSummary(total=total, streak=streak)


def progress_percentage(total, target_value) -> float:
    if target_value is None or target_value <= 0:
        return 0.0
    percentage = float(total) * 100 / float(target_value)
    return max(0.0, min(100.0, percentage))


def days_left(created_at: datetime, deadline_days: int, now: datetime) -> int:
    elapsed = (now - created_at).days
    return max(0, deadline_days - elapsed)


def crossed_target(prior_total, new_total, target_value) -> bool:
    """True only for the append that moves the total from below the target to at or above it."""
    return prior_total < target_value <= new_total


def summarize_goal(goal, entries: Iterable, now: Optional[datetime] = None, tz=None) -> dict:
    now = now or timezone.now()
    summary = compute_progress(entries, reference_date=now, tz=tz)

    return {
        'total_progress': summary.total,
        'percentage': progress_percentage(summary.total, goal.target_value),
        'streak': summary.streak,
        'days_left': days_left(goal.created_at, goal.deadline_days, now),
        'is_completed': summary.total >= goal.target_value,
        'has_logged_today': summary.streak > 0,
    }
