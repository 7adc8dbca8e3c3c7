from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable

from pocketledger.domain.models import TimePeriod, Transaction
from pocketledger.domain.schemas import to_local_naive

DateBounds = tuple[datetime, datetime]


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max)


def week_start(day: date) -> date:
    """Sunday on or before `day`."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def month_start(day: date) -> date:
    return day.replace(day=1)


def month_end(day: date) -> date:
    return day.replace(day=monthrange(day.year, day.month)[1])


def shift_months(day: date, months: int) -> date:
    """First day of the month `months` away from the month containing `day`."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def resolve_reference(reference: datetime | date | None = None) -> datetime:
    if reference is None:
        return datetime.now()
    if isinstance(reference, datetime):
        return to_local_naive(reference)
    return start_of_day(reference)


def reference_day(reference: datetime | date | None = None) -> date:
    return resolve_reference(reference).date()


def coerce_period(period: Any) -> TimePeriod | None:
    try:
        return TimePeriod(period)
    except ValueError:
        return None


def period_bounds(period: TimePeriod | str, reference: datetime | date | None = None) -> DateBounds | None:
    """Closed interval of the named period containing `reference`, or None for unknown periods."""
    kind = coerce_period(period)
    today = reference_day(reference)

    if kind is TimePeriod.DAILY:
        return start_of_day(today), end_of_day(today)
    if kind is TimePeriod.WEEKLY:
        start = week_start(today)
        return start_of_day(start), end_of_day(start + timedelta(days=6))
    if kind is TimePeriod.MONTHLY:
        return start_of_day(month_start(today)), end_of_day(month_end(today))
    return None


def previous_period_bounds(period: TimePeriod | str, reference: datetime | date | None = None) -> DateBounds:
    kind = coerce_period(period)
    today = reference_day(reference)

    if kind is TimePeriod.DAILY:
        yesterday = today - timedelta(days=1)
        return start_of_day(yesterday), end_of_day(yesterday)
    if kind is TimePeriod.WEEKLY:
        # Rolling 7 days ending the day before the reference day.
        return start_of_day(today - timedelta(days=7)), end_of_day(today - timedelta(days=1))
    if kind is TimePeriod.MONTHLY:
        previous = shift_months(today, -1)
        return start_of_day(previous), end_of_day(month_end(previous))
    raise ValueError(f"Unsupported period: {period!r}")


def as_bound(value: datetime | date, *, upper: bool) -> datetime:
    """Naive local datetime for a range bound; a plain date covers its whole day."""
    if isinstance(value, datetime):
        return to_local_naive(value)
    return end_of_day(value) if upper else start_of_day(value)


def filter_by_date_range(
    transactions: Iterable[Transaction],
    start: datetime | date,
    end: datetime | date,
) -> list[Transaction]:
    """Transactions dated within [start, end]. Plain dates cover the whole day."""
    lower = as_bound(start, upper=False)
    upper = as_bound(end, upper=True)
    return [txn for txn in transactions if lower <= txn.date <= upper]


def filter_by_period(
    transactions: Iterable[Transaction],
    period: TimePeriod | str,
    reference: datetime | date | None = None,
) -> list[Transaction]:
    bounds = period_bounds(period, reference)
    if bounds is None:
        return list(transactions)
    return filter_by_date_range(transactions, *bounds)
