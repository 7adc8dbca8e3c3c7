from __future__ import annotations

from pocketledger.engine.aggregation import (
    get_balance,
    get_category_by_id,
    get_category_spending,
    get_current_balance,
    get_expenses,
    get_income,
    get_recent_transactions,
    get_top_spending_categories,
    get_total,
    get_transactions_by_category,
    get_transactions_by_date,
    get_transactions_by_date_range,
    get_transactions_by_month,
    get_transactions_by_page,
    get_unused_categories,
)
from pocketledger.engine.budgets import get_budget_progress
from pocketledger.engine.forecast import get_forecast_expenses, get_savings_rate
from pocketledger.engine.periods import filter_by_period, period_bounds, previous_period_bounds
from pocketledger.engine.trends import (
    get_category_spending_trend,
    get_income_expense_comparison,
    get_spending_trend,
)

__all__ = [
    "filter_by_period",
    "get_balance",
    "get_budget_progress",
    "get_category_by_id",
    "get_category_spending",
    "get_category_spending_trend",
    "get_current_balance",
    "get_expenses",
    "get_forecast_expenses",
    "get_income",
    "get_income_expense_comparison",
    "get_recent_transactions",
    "get_savings_rate",
    "get_spending_trend",
    "get_top_spending_categories",
    "get_total",
    "get_transactions_by_category",
    "get_transactions_by_date",
    "get_transactions_by_date_range",
    "get_transactions_by_month",
    "get_transactions_by_page",
    "get_unused_categories",
    "period_bounds",
    "previous_period_bounds",
]
