from __future__ import annotations

import logging
import time
from datetime import date

from pocketledger.application.insights import FinanceInsights
from pocketledger.config import Settings
from pocketledger.domain.models import (
    ComparisonTimeFrame,
    HistorySection,
    TimePeriod,
    TransactionType,
)
from pocketledger.domain.schemas import (
    BudgetProgressView,
    CategorySpendingView,
    ComparisonPointView,
    DashboardSummary,
    MonthlySummary,
)
from pocketledger.engine.periods import reference_day
from pocketledger.infrastructure.store import StoreNotInitializedError

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(self, insights: FinanceInsights | None, settings: Settings | None = None):
        if insights is None:
            raise StoreNotInitializedError("DashboardService requires FinanceInsights over a loaded snapshot")
        self._insights = insights
        self._settings = settings or Settings()

    def _reference_day(self) -> date:
        return reference_day(self._insights.reference)

    def build(self, period: TimePeriod | str = TimePeriod.MONTHLY) -> DashboardSummary:
        period = TimePeriod(period)
        insights = self._insights
        logger.info("Dashboard build start period=%s", period.value)
        t0 = time.perf_counter()

        t = time.perf_counter()
        balance = insights.get_current_balance()
        income = insights.get_income(period)
        expenses = insights.get_expenses(period)
        savings_rate = insights.get_savings_rate(period)
        logger.info("Totals complete in %.2fs income=%.2f expenses=%.2f", time.perf_counter() - t, income, expenses)

        t = time.perf_counter()
        trend = insights.get_spending_trend(period)
        top = insights.get_top_spending_categories(period, self._settings.top_categories)
        logger.info("Trend and categories complete in %.2fs categories=%d", time.perf_counter() - t, len(top))

        t = time.perf_counter()
        progress = insights.get_budget_progress()
        forecast = insights.get_forecast_expenses(self._settings.forecast_days)
        logger.info("Budgets and forecast complete in %.2fs budgets=%d", time.perf_counter() - t, len(progress))

        summary = DashboardSummary(
            period=period,
            reference_date=self._reference_day(),
            balance=round(balance, 2),
            income=round(income, 2),
            expenses=round(expenses, 2),
            savings_rate=round(savings_rate, 2),
            spending_trend=round(trend, 2),
            forecast_expenses=round(forecast, 2),
            forecast_days=self._settings.forecast_days,
            top_categories=[CategorySpendingView.from_domain(item) for item in top],
            budgets=[BudgetProgressView.from_domain(item) for item in progress],
        )
        logger.info("Dashboard build complete in %.2fs", time.perf_counter() - t0)
        return summary

    def monthly_summary(self) -> MonthlySummary:
        insights = self._insights
        t0 = time.perf_counter()
        income = insights.get_income(TimePeriod.MONTHLY)
        expenses = insights.get_expenses(TimePeriod.MONTHLY)
        summary = MonthlySummary(
            month=self._reference_day().strftime("%Y-%m"),
            income=round(income, 2),
            expenses=round(expenses, 2),
            net=round(income - expenses, 2),
            savings_rate=round(insights.get_savings_rate(TimePeriod.MONTHLY), 2),
            expense_breakdown=[
                CategorySpendingView.from_domain(item)
                for item in insights.get_category_spending(TransactionType.EXPENSE, TimePeriod.MONTHLY)
            ],
            income_breakdown=[
                CategorySpendingView.from_domain(item)
                for item in insights.get_category_spending(TransactionType.INCOME, TimePeriod.MONTHLY)
            ],
            comparison=[
                ComparisonPointView.from_domain(point)
                for point in insights.get_income_expense_comparison(ComparisonTimeFrame.YEAR)
            ],
        )
        logger.info("Monthly summary month=%s complete in %.2fs", summary.month, time.perf_counter() - t0)
        return summary

    def history(self, type_filter: TransactionType | str | None = None) -> list[HistorySection]:
        """Day sections, newest first, each with a signed day total. Empty days are dropped."""
        all_types = type_filter is None or (isinstance(type_filter, str) and type_filter.strip().lower() == "all")
        kind = None if all_types else TransactionType(type_filter)
        sections: list[HistorySection] = []
        for day, transactions in self._insights.get_transactions_by_date().items():
            kept = tuple(txn for txn in transactions if kind is None or txn.type == kind)
            if not kept:
                continue
            sections.append(
                HistorySection(
                    day=date.fromisoformat(day),
                    day_total=sum((txn.signed_amount() for txn in kept), 0.0),
                    transactions=kept,
                )
            )
        return sorted(sections, key=lambda section: section.day, reverse=True)
