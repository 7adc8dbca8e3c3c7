from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable

from pocketledger.domain.models import Budget, TimePeriod, Transaction, TransactionType
from pocketledger.engine.aggregation import get_expenses, get_income, get_total
from pocketledger.engine.periods import as_bound, filter_by_date_range

LOOKBACK_DAYS = 30


def trailing_expenses(
    transactions: Iterable[Transaction],
    reference: datetime | date | None = None,
    lookback_days: int = LOOKBACK_DAYS,
) -> float:
    end = datetime.now() if reference is None else as_bound(reference, upper=True)
    start = end - timedelta(days=lookback_days)
    return get_total(filter_by_date_range(transactions, start, end), TransactionType.EXPENSE)


def get_forecast_expenses(
    transactions: Iterable[Transaction],
    budgets: Iterable[Budget],
    days_ahead: int = 30,
    reference: datetime | date | None = None,
) -> float:
    """
    Project expenses over the next `days_ahead` days.

    Trailing 30-day average daily spend plus the daily share of every monthly
    budget. Monthly budgeted spend already present in the trailing actuals is
    counted twice; callers treat the figure as an upper-leaning estimate.
    """
    if days_ahead < 0:
        raise ValueError("days_ahead must be >= 0")

    avg_daily_expense = trailing_expenses(transactions, reference) / LOOKBACK_DAYS
    budget_total = sum((b.amount for b in budgets if b.period == TimePeriod.MONTHLY), 0.0)
    return avg_daily_expense * days_ahead + (budget_total / LOOKBACK_DAYS) * days_ahead


def get_savings_rate(
    transactions: Iterable[Transaction],
    period: TimePeriod | str = TimePeriod.MONTHLY,
    reference: datetime | date | None = None,
) -> float:
    ledger = list(transactions)
    income = get_income(ledger, period, reference)
    if income == 0:
        return 0.0
    expense = get_expenses(ledger, period, reference)
    return (income - expense) / income * 100
