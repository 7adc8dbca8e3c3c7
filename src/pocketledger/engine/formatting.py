from __future__ import annotations

from datetime import date, datetime

from pocketledger.domain.schemas import parse_timestamp


def format_currency(amount: float, symbol: str = "") -> str:
    return f"{symbol}{amount:,.2f}"


def format_display_date(value: str | date) -> str:
    """`2026-01-05T10:00:00` -> `Jan 5, 2026`."""
    if isinstance(value, str):
        value = parse_timestamp(value)
    day = value.date() if isinstance(value, datetime) else value
    return f"{day:%b} {day.day}, {day.year}"
