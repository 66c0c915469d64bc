"""Formatting utilities for currency, dates and text display."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Union

from .settings import get_options


def currency_symbols() -> Dict[str, str]:
    return {c['value']: c['symbol'] for c in get_options()['currencies']}


def escape_dollar_for_markdown(text: str) -> str:
    """Escape dollar signs so markdown does not treat them as LaTeX delimiters.

    Example:
        >>> escape_dollar_for_markdown("$ 1,234.56")
        '\\\\$ 1,234.56'
    """
    return text.replace("$", "\\$")


def format_amount(
    amount: Union[float, int, None],
    currency: Optional[str] = None,
    decimals: int = 2,
) -> str:
    """Format an amount with thousands separators and an optional currency.

    Args:
        amount: The amount to format; ``None`` renders as zero
        currency: Currency code; rendered through its symbol when known
        decimals: Number of decimal places

    Returns:
        Formatted string (e.g. "AED 1,234.50" or "1,234.50")

    Example:
        >>> format_amount(1234.5, 'INR', decimals=0)
        '₹ 1,234'
    """
    formatted = f"{float(amount or 0):,.{decimals}f}"
    if not currency:
        return formatted
    symbol = currency_symbols().get(currency, currency)
    return f"{symbol} {formatted}"


def format_date(value: Any) -> str:
    """Render an ISO date (or date/datetime) as e.g. "Mar 05, 2025".

    Unparseable values are returned as text.
    """
    if value is None or value == '':
        return ''
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        try:
            value = date.fromisoformat(str(value)[:10])
        except ValueError:
            return str(value)
    return value.strftime("%b %d, %Y")


def truncate_text(text: Optional[str], max_length: int = 60) -> str:
    text = text or ''
    if len(text) <= max_length:
        return text
    return text[:max_length] + '...'
