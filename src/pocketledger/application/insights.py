from __future__ import annotations

from datetime import date, datetime

from pocketledger.domain.models import (
    BudgetProgress,
    Category,
    CategorySpending,
    ComparisonTimeFrame,
    FinanceState,
    IncomeExpensePoint,
    TimePeriod,
    Transaction,
    TransactionType,
    TrendGranularity,
    TrendSeries,
)
from pocketledger.engine import aggregation, budgets, forecast, periods, trends
from pocketledger.infrastructure.store import FinanceStore, StoreNotInitializedError

Reference = datetime | date | None


class FinanceInsights:
    """Engine queries bound to one FinanceState snapshot.

    `reference` pins "now" for every period computation; individual calls may
    override it.
    """

    def __init__(self, state: FinanceState | None, reference: Reference = None) -> None:
        if state is None:
            raise StoreNotInitializedError("FinanceInsights requires a loaded FinanceState snapshot")
        self._state = state
        self._reference = reference

    @classmethod
    def from_store(cls, store: FinanceStore, reference: Reference = None) -> "FinanceInsights":
        return cls(store.state, reference)

    @property
    def state(self) -> FinanceState:
        return self._state

    @property
    def reference(self) -> Reference:
        return self._reference

    def _ref(self, reference: Reference) -> Reference:
        return reference if reference is not None else self._reference

    # ---- period filter ----
    def filter_by_period(self, period: TimePeriod | str, reference: Reference = None) -> list[Transaction]:
        return periods.filter_by_period(self._state.transactions, period, self._ref(reference))

    # ---- aggregation ----
    def get_income(self, period: TimePeriod | str, reference: Reference = None) -> float:
        return aggregation.get_income(self._state.transactions, period, self._ref(reference))

    def get_expenses(self, period: TimePeriod | str, reference: Reference = None) -> float:
        return aggregation.get_expenses(self._state.transactions, period, self._ref(reference))

    def get_current_balance(self) -> float:
        return aggregation.get_current_balance(self._state.transactions)

    def get_category_spending(
        self,
        txn_type: TransactionType | str,
        period: TimePeriod | str,
        reference: Reference = None,
    ) -> list[CategorySpending]:
        return aggregation.get_category_spending(
            self._state.transactions, self._state.categories, txn_type, period, self._ref(reference)
        )

    def get_top_spending_categories(
        self,
        period: TimePeriod | str = TimePeriod.MONTHLY,
        limit: int = 5,
    ) -> list[CategorySpending]:
        return aggregation.get_top_spending_categories(
            self._state.transactions, self._state.categories, period, limit, self._reference
        )

    def get_category_by_id(self, category_id: str) -> Category | None:
        return aggregation.get_category_by_id(self._state.categories, category_id)

    def get_transactions_by_date(self) -> dict[str, list[Transaction]]:
        return aggregation.get_transactions_by_date(self._state.transactions)

    def get_transactions_by_month(self) -> dict[str, list[Transaction]]:
        return aggregation.get_transactions_by_month(self._state.transactions)

    def get_transactions_by_page(self, page: int, limit: int = 20) -> list[Transaction]:
        return aggregation.get_transactions_by_page(self._state.transactions, page, limit)

    def get_recent_transactions(self, limit: int = 10) -> list[Transaction]:
        return aggregation.get_recent_transactions(self._state.transactions, limit)

    def get_transactions_by_category(
        self,
        category_id: str,
        period: TimePeriod | str = TimePeriod.MONTHLY,
    ) -> list[Transaction]:
        return aggregation.get_transactions_by_category(
            self._state.transactions, category_id, period, self._reference
        )

    def get_transactions_by_date_range(self, start: datetime | date, end: datetime | date) -> list[Transaction]:
        return aggregation.get_transactions_by_date_range(self._state.transactions, start, end)

    def get_unused_categories(self) -> list[Category]:
        return aggregation.get_unused_categories(self._state.transactions, self._state.categories)

    # ---- budgets ----
    def get_budget_progress(self) -> list[BudgetProgress]:
        return budgets.get_budget_progress(
            self._state.budgets, self._state.transactions, self._state.categories, self._reference
        )

    # ---- trends ----
    def get_spending_trend(self, period: TimePeriod | str) -> float:
        return trends.get_spending_trend(self._state.transactions, period, self._reference)

    def get_category_spending_trend(
        self,
        category_id: str,
        granularity: TrendGranularity | str,
    ) -> TrendSeries:
        return trends.get_category_spending_trend(
            self._state.transactions, category_id, granularity, self._reference
        )

    def get_income_expense_comparison(self, time_frame: ComparisonTimeFrame | str) -> list[IncomeExpensePoint]:
        return trends.get_income_expense_comparison(self._state.transactions, time_frame, self._reference)

    # ---- forecast & ratios ----
    def get_forecast_expenses(self, days_ahead: int = 30) -> float:
        return forecast.get_forecast_expenses(
            self._state.transactions, self._state.budgets, days_ahead, self._reference
        )

    def get_savings_rate(self, period: TimePeriod | str = TimePeriod.MONTHLY) -> float:
        return forecast.get_savings_rate(self._state.transactions, period, self._reference)
