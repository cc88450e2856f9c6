"""Recurrence resolver: decides whether a cash flow occurs in a given month.

The simulator steps one calendar month at a time, so every rule here is
month-granular: start and end dates are compared by year+month only.
"""
from __future__ import annotations

import calendar
from datetime import date

from planner.models.cashflow import Cashflow, Frequency


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start``'s month to ``end``'s month."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by ``months`` calendar months, clamping the day of month."""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def month_label(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def is_active(cashflow: Cashflow, target_month: date) -> bool:
    """Return True if ``cashflow`` occurs in the month containing ``target_month``.

    weekly and fortnightly flows count once per month, the same as monthly.
    A monthly anchor day does not affect activity: the simulator evaluates
    each month once, so there is no day within the month to compare against.
    """
    recurrence = cashflow.recurrence
    months_since_start = months_between(recurrence.start_date, target_month)
    if months_since_start < 0:
        return False
    if recurrence.end_date is not None and months_between(recurrence.end_date, target_month) > 0:
        return False

    frequency = recurrence.frequency
    if frequency == Frequency.once:
        return months_since_start == 0
    if frequency in (Frequency.weekly, Frequency.fortnightly, Frequency.monthly):
        return True
    if frequency == Frequency.quarterly:
        return months_since_start % 3 == 0
    if frequency == Frequency.annually:
        return months_since_start % 12 == 0
    return False
