from __future__ import annotations

from datetime import date
from typing import Optional

import pandas as pd

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def resolve_today(today: Optional[date]) -> date:
    return today if today is not None else date.today()


def age_at(date_of_birth: date, on: date) -> int:
    """Whole years elapsed, not counting a birthday that has not happened yet this year."""
    age = on.year - date_of_birth.year
    if (on.month, on.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def current_age(date_of_birth: Optional[date], today: date) -> Optional[int]:
    return age_at(date_of_birth, today) if date_of_birth is not None else None


def add_months(start: date, months: int) -> date:
    """Calendar month offset, clamped to the last day of short months."""
    return (pd.Timestamp(start) + pd.DateOffset(months=months)).date()


def month_label(value: date) -> str:
    """Coarse month/year tag such as 'Mar 2038', independent of the process locale."""
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.year}"
