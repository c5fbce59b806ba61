"""
Partial date helpers for resume validation rules.

Resume dates are often partial ("2019", "2019-06"); these helpers parse them
into datetime.date values and compare them.
"""

import calendar
import re
from datetime import date, timedelta
from typing import Optional

from vitae.utils.timestamp import parse_timestamp

MIN_YEAR = 1900
MAX_YEAR = 2100

PARTIAL_DATE_PATTERN = re.compile(r"^(\d{4})(?:-(\d{1,2}))?(?:-(\d{1,2}))?$")


def parse_partial_date(text: str, fill_end: bool = False) -> Optional[date]:
    """
    Parse YYYY, YYYY-MM, YYYY-MM-DD or an ISO date-time.

    Args:
        text: Date string
        fill_end: Fill missing components with the end of the period
                  (Dec 31 for a year, last day for a month) instead of the start

    Returns:
        date, or None if the text is not a recognizable date between 1900 and 2100

    Examples:
        parse_partial_date("2019")                  # date(2019, 1, 1)
        parse_partial_date("2019", fill_end=True)   # date(2019, 12, 31)
        parse_partial_date("2020-02", fill_end=True)  # date(2020, 2, 29)
    """
    if not isinstance(text, str) or not text.strip():
        return None
    text = text.strip()

    if "T" in text:
        dt = parse_timestamp(text)
        if dt is None or not MIN_YEAR <= dt.year <= MAX_YEAR:
            return None
        return dt.date()

    match = PARTIAL_DATE_PATTERN.match(text)
    if not match:
        return None

    year = int(match.group(1))
    if not MIN_YEAR <= year <= MAX_YEAR:
        return None

    month_text, day_text = match.group(2), match.group(3)
    month = int(month_text) if month_text else (12 if fill_end else 1)
    if not 1 <= month <= 12:
        return None

    if day_text:
        day = int(day_text)
    elif fill_end:
        day = calendar.monthrange(year, month)[1]
    else:
        day = 1

    try:
        return date(year, month, day)
    except ValueError:
        return None


def is_future_date(value: date, tolerance_days: int = 30, today: Optional[date] = None) -> bool:
    """True if value lies more than tolerance_days after today."""
    today = today or date.today()
    return value > today + timedelta(days=tolerance_days)


def calculate_age(birth_date: date, reference: Optional[date] = None) -> int:
    """Whole years between birth_date and reference (default today)."""
    reference = reference or date.today()
    age = reference.year - birth_date.year
    if (reference.month, reference.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def calculate_duration_years(start: date, end: date) -> float:
    """Duration in years, rounded to one decimal place."""
    return round((end - start).days / 365.25, 1)


def is_chronological(start: date, end: date) -> bool:
    """True if start is on or before end."""
    return start <= end


def format_date(value: date) -> str:
    return value.isoformat()
