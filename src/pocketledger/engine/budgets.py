from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from pocketledger.domain.models import Budget, BudgetProgress, Category, Transaction, TransactionType
from pocketledger.engine.aggregation import category_index
from pocketledger.engine.periods import filter_by_period


def budget_spent(
    budget: Budget,
    transactions: Iterable[Transaction],
    reference: datetime | date | None = None,
) -> float:
    return sum(
        (
            txn.amount
            for txn in filter_by_period(transactions, budget.period, reference)
            if txn.type == TransactionType.EXPENSE and txn.category == budget.category_id
        ),
        0.0,
    )


def get_budget_progress(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    reference: datetime | date | None = None,
) -> list[BudgetProgress]:
    """
    Spend against each budget within the budget's own period.

    Budgets whose category no longer exists are dropped. Output keeps the
    input budget order; overspending yields a negative `remaining` and a
    percentage above 100.
    """
    index = category_index(categories)
    ledger = list(transactions)
    progress: list[BudgetProgress] = []
    for budget in budgets:
        category = index.get(budget.category_id)
        if category is None:
            continue
        spent = budget_spent(budget, ledger, reference)
        progress.append(
            BudgetProgress(
                budget=budget,
                category=category,
                spent=spent,
                remaining=budget.amount - spent,
                percentage=(spent / budget.amount * 100) if budget.amount > 0 else 0.0,
            )
        )
    return progress
