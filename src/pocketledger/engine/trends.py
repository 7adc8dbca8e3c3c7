from __future__ import annotations

from calendar import day_abbr, month_abbr
from datetime import date, datetime, timedelta
from typing import Iterable

from pocketledger.domain.models import (
    ComparisonTimeFrame,
    IncomeExpensePoint,
    TimePeriod,
    Transaction,
    TransactionType,
    TrendGranularity,
    TrendSeries,
)
from pocketledger.engine.aggregation import get_expenses, get_income, get_total
from pocketledger.engine.periods import (
    DateBounds,
    end_of_day,
    filter_by_date_range,
    month_end,
    previous_period_bounds,
    reference_day,
    shift_months,
    start_of_day,
)

MONTHS_PER_GRANULARITY = {
    TrendGranularity.QUARTER: 3,
    TrendGranularity.HALF_YEAR: 6,
    TrendGranularity.YEARLY: 12,
}


def get_spending_trend(
    transactions: Iterable[Transaction],
    period: TimePeriod | str,
    reference: datetime | date | None = None,
) -> float:
    """Percent change of this period's expenses against the preceding period.

    Returns 100 when the preceding period has no expenses.
    """
    ledger = list(transactions)
    current = get_expenses(ledger, period, reference)
    start, end = previous_period_bounds(period, reference)
    previous = get_total(filter_by_date_range(ledger, start, end), TransactionType.EXPENSE)
    if previous == 0:
        return 100.0
    return (current - previous) / previous * 100


def _day_label(day: date) -> str:
    return day_abbr[day.weekday()]


def _month_label(day: date) -> str:
    return month_abbr[day.month]


def trend_buckets(
    granularity: TrendGranularity | str,
    reference: datetime | date | None = None,
) -> list[tuple[str, DateBounds]]:
    """Oldest-first (label, [start, end]) buckets for a category trend chart."""
    kind = TrendGranularity(granularity)
    today = reference_day(reference)
    buckets: list[tuple[str, DateBounds]] = []

    if kind is TrendGranularity.WEEKLY:
        for offset in range(6, -1, -1):
            day = today - timedelta(days=offset)
            buckets.append((_day_label(day), (start_of_day(day), end_of_day(day))))
    elif kind is TrendGranularity.MONTHLY:
        for offset in range(3, -1, -1):
            last = today - timedelta(days=offset * 7)
            first = last - timedelta(days=6)
            buckets.append((f"Week {4 - offset}", (start_of_day(first), end_of_day(last))))
    else:
        for offset in range(MONTHS_PER_GRANULARITY[kind] - 1, -1, -1):
            first = shift_months(today, -offset)
            buckets.append((_month_label(first), (start_of_day(first), end_of_day(month_end(first)))))
    return buckets


def get_category_spending_trend(
    transactions: Iterable[Transaction],
    category_id: str,
    granularity: TrendGranularity | str,
    reference: datetime | date | None = None,
) -> TrendSeries:
    expenses = [
        txn for txn in transactions if txn.type == TransactionType.EXPENSE and txn.category == category_id
    ]
    labels: list[str] = []
    data: list[float] = []
    for label, (start, end) in trend_buckets(granularity, reference):
        labels.append(label)
        data.append(sum((txn.amount for txn in filter_by_date_range(expenses, start, end)), 0.0))
    return TrendSeries(labels=tuple(labels), data=tuple(data))


def _comparison_anchors(kind: ComparisonTimeFrame, today: date) -> list[tuple[str, TimePeriod, date]]:
    if kind is ComparisonTimeFrame.WEEK:
        return [
            (_day_label(today - timedelta(days=offset)), TimePeriod.DAILY, today - timedelta(days=offset))
            for offset in range(6, -1, -1)
        ]
    if kind is ComparisonTimeFrame.MONTH:
        return [
            (f"Week {4 - offset}", TimePeriod.WEEKLY, today - timedelta(days=offset * 7))
            for offset in range(3, -1, -1)
        ]
    return [
        (_month_label(shift_months(today, -offset)), TimePeriod.MONTHLY, shift_months(today, -offset))
        for offset in range(5, -1, -1)
    ]


def get_income_expense_comparison(
    transactions: Iterable[Transaction],
    time_frame: ComparisonTimeFrame | str,
    reference: datetime | date | None = None,
) -> list[IncomeExpensePoint]:
    kind = ComparisonTimeFrame(time_frame)
    ledger = list(transactions)
    points: list[IncomeExpensePoint] = []
    for label, period, anchor in _comparison_anchors(kind, reference_day(reference)):
        income = get_income(ledger, period, anchor)
        expense = get_expenses(ledger, period, anchor)
        points.append(IncomeExpensePoint(label=label, income=income, expense=expense, net=income - expense))
    return points
