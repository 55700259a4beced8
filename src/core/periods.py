"""Calendar-month arithmetic shared by the dashboard, calendar and targets."""
from __future__ import annotations

import calendar
from datetime import date, datetime, time

from django.utils import timezone


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of the month."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def shift_month(day: date, months: int) -> date:
    """Move *day* by *months* calendar months, capping the day to the target month length.

    ``shift_month(date(2024, 3, 31), -1)`` is ``date(2024, 2, 29)``.
    """
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(day.day, days_in_month(year, month)))


def start_of_day(day: date) -> datetime:
    """Midnight of *day* in the current timezone, as an aware datetime."""
    return timezone.make_aware(datetime.combine(day, time.min))


def period_key(day: date) -> str:
    """``"YYYY-MM"`` period string for *day*."""
    return f"{day.year:04d}-{day.month:02d}"


def parse_period(period: str) -> tuple[int, int]:
    """Split a ``"YYYY-MM"`` string into ``(year, month)``; raises ``ValueError`` when malformed."""
    year_part, _, month_part = period.partition("-")
    year, month = int(year_part), int(month_part)
    if not 1 <= month <= 12:
        raise ValueError(f"Mois invalide : {period!r}")
    return year, month
