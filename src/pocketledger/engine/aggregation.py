from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from typing import Iterable, Sequence

from pocketledger.domain.models import (
    Category,
    CategorySpending,
    TimePeriod,
    Transaction,
    TransactionType,
    uncategorized,
)
from pocketledger.engine.periods import filter_by_date_range, filter_by_period


def get_total(transactions: Iterable[Transaction], txn_type: TransactionType | str) -> float:
    kind = TransactionType(txn_type)
    return sum((txn.amount for txn in transactions if txn.type == kind), 0.0)


def get_balance(transactions: Iterable[Transaction]) -> float:
    items = list(transactions)
    return get_total(items, TransactionType.INCOME) - get_total(items, TransactionType.EXPENSE)


def get_income(
    transactions: Iterable[Transaction],
    period: TimePeriod | str,
    reference: datetime | date | None = None,
) -> float:
    return get_total(filter_by_period(transactions, period, reference), TransactionType.INCOME)


def get_expenses(
    transactions: Iterable[Transaction],
    period: TimePeriod | str,
    reference: datetime | date | None = None,
) -> float:
    return get_total(filter_by_period(transactions, period, reference), TransactionType.EXPENSE)


def get_current_balance(transactions: Iterable[Transaction]) -> float:
    """All-time income minus expense; never period-scoped."""
    return get_balance(transactions)


def category_index(categories: Iterable[Category]) -> dict[str, Category]:
    return {category.id: category for category in categories}


def get_category_by_id(categories: Iterable[Category], category_id: str) -> Category | None:
    return category_index(categories).get(category_id)


def resolve_category(
    categories: Iterable[Category] | dict[str, Category],
    category_id: str,
    txn_type: TransactionType = TransactionType.EXPENSE,
) -> Category:
    index = categories if isinstance(categories, dict) else category_index(categories)
    return index.get(category_id) or uncategorized(txn_type)


def get_category_spending(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    txn_type: TransactionType | str,
    period: TimePeriod | str,
    reference: datetime | date | None = None,
) -> list[CategorySpending]:
    kind = TransactionType(txn_type)
    totals: dict[str, float] = defaultdict(float)
    for txn in filter_by_period(transactions, period, reference):
        if txn.type == kind:
            totals[txn.category] += txn.amount

    grand_total = sum(totals.values())
    index = category_index(categories)
    spending = [
        CategorySpending(
            category=resolve_category(index, category_id, kind),
            amount=amount,
            percentage=(amount / grand_total * 100) if grand_total > 0 else 0.0,
        )
        for category_id, amount in totals.items()
    ]
    # sorted() is stable, so ties keep first-appearance order.
    return sorted(spending, key=lambda item: item.amount, reverse=True)


def get_top_spending_categories(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    period: TimePeriod | str = TimePeriod.MONTHLY,
    limit: int = 5,
    reference: datetime | date | None = None,
) -> list[CategorySpending]:
    spending = get_category_spending(transactions, categories, TransactionType.EXPENSE, period, reference)
    return spending[: max(0, limit)]


def get_transactions_by_date(transactions: Iterable[Transaction]) -> dict[str, list[Transaction]]:
    groups: dict[str, list[Transaction]] = defaultdict(list)
    for txn in transactions:
        groups[txn.date.date().isoformat()].append(txn)
    return dict(groups)


def get_transactions_by_month(transactions: Iterable[Transaction]) -> dict[str, list[Transaction]]:
    groups: dict[str, list[Transaction]] = defaultdict(list)
    for txn in transactions:
        groups[f"{txn.date.year:04d}-{txn.date.month:02d}"].append(txn)
    return dict(groups)


def get_transactions_by_category(
    transactions: Iterable[Transaction],
    category_id: str,
    period: TimePeriod | str = TimePeriod.MONTHLY,
    reference: datetime | date | None = None,
) -> list[Transaction]:
    return [txn for txn in filter_by_period(transactions, period, reference) if txn.category == category_id]


def get_transactions_by_date_range(
    transactions: Iterable[Transaction],
    start: datetime | date,
    end: datetime | date,
) -> list[Transaction]:
    return filter_by_date_range(transactions, start, end)


def newest_first(transactions: Iterable[Transaction]) -> list[Transaction]:
    return sorted(transactions, key=lambda txn: txn.date, reverse=True)


def get_transactions_by_page(
    transactions: Iterable[Transaction],
    page: int,
    limit: int = 20,
) -> list[Transaction]:
    if page < 1 or limit < 1:
        return []
    start = (page - 1) * limit
    return newest_first(transactions)[start : start + limit]


def get_recent_transactions(transactions: Iterable[Transaction], limit: int = 10) -> list[Transaction]:
    return newest_first(transactions)[: max(0, limit)]


def get_unused_categories(
    transactions: Iterable[Transaction],
    categories: Sequence[Category],
) -> list[Category]:
    used = {txn.category for txn in transactions}
    return [category for category in categories if category.id not in used]
