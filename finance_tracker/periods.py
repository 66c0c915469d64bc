"""Month/year helpers shared by the gateway and the period selectors."""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

from .settings import get_config_value, month_names


def month_number(month_name: str) -> int:
    """Return 1-12 for an English month name.

    Raises:
        ValueError: If the name is not one of the configured months
    """
    names = month_names()
    if month_name not in names:
        raise ValueError(f"Unknown month: {month_name!r}")
    return names.index(month_name) + 1


def month_name(number: int) -> str:
    if not 1 <= number <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {number}")
    return month_names()[number - 1]


def month_date_range(month: int, year: int) -> Tuple[str, str]:
    """Half-open ISO date range ``[start, end)`` covering one calendar month.

    December rolls over into January of the following year.

    Example:
        >>> month_date_range(12, 2024)
        ('2024-12-01', '2025-01-01')
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start.isoformat(), end.isoformat()


def current_period(today: Optional[date] = None) -> Tuple[str, str]:
    """Return ``(month name, year string)`` for today."""
    today = today or date.today()
    return month_name(today.month), str(today.year)


def year_options(today: Optional[date] = None) -> List[str]:
    today = today or date.today()
    back = int(get_config_value('options', 'years', 'back', default=5))
    forward = int(get_config_value('options', 'years', 'forward', default=75))
    return [str(year) for year in range(today.year - back, today.year + forward + 1)]
