"""
Due-date parsing and relative classification.

Due dates carry no reliable time of day, so every value is reduced to its
calendar date component before comparing. A stored "2026-02-07T00:00:00Z"
must read as Feb 7 regardless of the local zone.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from .constants import OVERDUE, PLAIN, SOON, SOON_DAYS, TODAY
from .errors import ValidationError


@dataclass(frozen=True)
class DueDateStatus:
    bucket: str
    days_diff: int
    display_text: str


def to_local_date(value) -> Optional[date]:
    """Return the calendar date of a date, datetime or ISO string; None for empty input."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"Invalid date value: {value!r}")
    s = value.strip()
    if not s:
        return None
    date_only = s.split("T", 1)[0].split(" ", 1)[0]
    try:
        return datetime.strptime(date_only, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from None


def format_month_day(d: date) -> str:
    return f"{d.month}/{d.day}"


def classify(due_date, today: Optional[date] = None) -> Optional[DueDateStatus]:
    due = to_local_date(due_date)
    if due is None:
        return None
    if today is None:
        today = date.today()
    diff = (due - today).days
    formatted = format_month_day(due)
    if diff < 0:
        return DueDateStatus(OVERDUE, diff, f"{formatted} (overdue)")
    if diff == 0:
        return DueDateStatus(TODAY, diff, f"{formatted} (today)")
    if diff <= SOON_DAYS:
        return DueDateStatus(SOON, diff, f"{formatted} (D-{diff})")
    return DueDateStatus(PLAIN, diff, formatted)


def is_overdue(due_date, today: Optional[date] = None) -> bool:
    status = classify(due_date, today)
    return status is not None and status.bucket == OVERDUE
