from __future__ import annotations

import unittest
from datetime import datetime

from pocketledger.domain.models import (
    ComparisonTimeFrame,
    TimePeriod,
    Transaction,
    TransactionType,
    TrendGranularity,
)
from pocketledger.engine.trends import (
    get_category_spending_trend,
    get_income_expense_comparison,
    get_spending_trend,
)

# Wednesday 2026-03-18.
REFERENCE = datetime(2026, 3, 18, 12, 0)


def _txn(
    id: str,
    amount: float,
    when: datetime,
    category: str = "food",
    txn_type: TransactionType = TransactionType.EXPENSE,
) -> Transaction:
    return Transaction(id=id, amount=amount, description="", date=when, category=category, type=txn_type)


class SpendingTrendTests(unittest.TestCase):
    def test_no_previous_expense_reports_plus_100(self) -> None:
        txns = [_txn("now", 50, datetime(2026, 3, 10))]

        self.assertEqual(get_spending_trend(txns, TimePeriod.MONTHLY, REFERENCE), 100)

    def test_monthly_compares_with_previous_calendar_month(self) -> None:
        txns = [
            _txn("feb_start", 40, datetime(2026, 2, 1, 0, 0)),
            _txn("feb_end", 60, datetime(2026, 2, 28, 23, 0)),
            _txn("jan", 999, datetime(2026, 1, 31, 12, 0)),
            _txn("mar", 150, datetime(2026, 3, 3, 12, 0)),
        ]

        self.assertAlmostEqual(get_spending_trend(txns, TimePeriod.MONTHLY, REFERENCE), 50.0)

    def test_weekly_compares_with_seven_days_before_reference(self) -> None:
        txns = [
            _txn("prev_window", 80, datetime(2026, 3, 12, 10, 0)),
            _txn("too_old", 500, datetime(2026, 3, 10, 10, 0)),
            _txn("this_week", 40, datetime(2026, 3, 18, 9, 0)),
        ]

        self.assertAlmostEqual(get_spending_trend(txns, TimePeriod.WEEKLY, REFERENCE), -50.0)

    def test_daily_compares_with_yesterday(self) -> None:
        txns = [
            _txn("yesterday", 20, datetime(2026, 3, 17, 8, 0)),
            _txn("today", 30, datetime(2026, 3, 18, 8, 0)),
            _txn("income", 500, datetime(2026, 3, 17, 8, 0), txn_type=TransactionType.INCOME),
        ]

        self.assertAlmostEqual(get_spending_trend(txns, TimePeriod.DAILY, REFERENCE), 50.0)

    def test_unsupported_period_raises(self) -> None:
        with self.assertRaises(ValueError):
            get_spending_trend([], "quarterly", REFERENCE)


class CategorySpendingTrendTests(unittest.TestCase):
    def test_weekly_granularity_has_seven_daily_points(self) -> None:
        txns = [
            _txn("today", 12, datetime(2026, 3, 18, 7, 0)),
            _txn("today_other_cat", 99, datetime(2026, 3, 18, 7, 0), category="fun"),
            _txn("sunday", 8, datetime(2026, 3, 15, 23, 0)),
        ]

        series = get_category_spending_trend(txns, "food", TrendGranularity.WEEKLY, REFERENCE)

        self.assertEqual(series.labels, ("Thu", "Fri", "Sat", "Sun", "Mon", "Tue", "Wed"))
        self.assertEqual(series.data, (0.0, 0.0, 0.0, 8.0, 0.0, 0.0, 12.0))

    def test_monthly_granularity_has_four_weekly_points(self) -> None:
        txns = [
            _txn("week1", 10, datetime(2026, 2, 20, 12, 0)),
            _txn("week3", 30, datetime(2026, 3, 5, 0, 0)),
            _txn("week4", 5, datetime(2026, 3, 12, 0, 0)),
            _txn("ignored_income", 70, datetime(2026, 3, 12), txn_type=TransactionType.INCOME),
        ]

        series = get_category_spending_trend(txns, "food", "monthly", REFERENCE)

        self.assertEqual(series.labels, ("Week 1", "Week 2", "Week 3", "Week 4"))
        self.assertEqual(series.data, (10.0, 0.0, 30.0, 5.0))

    def test_month_granularities_use_calendar_months(self) -> None:
        txns = [
            _txn("jan", 25, datetime(2026, 1, 31, 23, 0)),
            _txn("dec", 40, datetime(2025, 12, 1, 0, 0)),
        ]

        quarter = get_category_spending_trend(txns, "food", TrendGranularity.QUARTER, REFERENCE)
        half = get_category_spending_trend(txns, "food", "6months", REFERENCE)
        year = get_category_spending_trend(txns, "food", TrendGranularity.YEARLY, REFERENCE)

        self.assertEqual(quarter.labels, ("Jan", "Feb", "Mar"))
        self.assertEqual(quarter.data, (25.0, 0.0, 0.0))
        self.assertEqual(half.labels, ("Oct", "Nov", "Dec", "Jan", "Feb", "Mar"))
        self.assertEqual(half.data, (0.0, 0.0, 40.0, 25.0, 0.0, 0.0))
        self.assertEqual(len(year.labels), 12)
        self.assertEqual(year.labels[0], "Apr")
        self.assertEqual(len(year.data), 12)

    def test_unknown_granularity_raises(self) -> None:
        with self.assertRaises(ValueError):
            get_category_spending_trend([], "food", "decade", REFERENCE)


class IncomeExpenseComparisonTests(unittest.TestCase):
    def test_week_time_frame_has_daily_points(self) -> None:
        txns = [
            _txn("pay", 300, datetime(2026, 3, 18, 9, 0), category="salary", txn_type=TransactionType.INCOME),
            _txn("lunch", 20, datetime(2026, 3, 18, 13, 0)),
        ]

        points = get_income_expense_comparison(txns, ComparisonTimeFrame.WEEK, REFERENCE)

        self.assertEqual(len(points), 7)
        self.assertEqual(points[-1].label, "Wed")
        self.assertEqual((points[-1].income, points[-1].expense, points[-1].net), (300, 20, 280))
        self.assertTrue(all(p.income == 0 and p.expense == 0 for p in points[:-1]))

    def test_month_time_frame_uses_calendar_weeks(self) -> None:
        txns = [
            _txn("w1", 10, datetime(2026, 2, 22, 0, 0)),
            _txn("w4", 40, datetime(2026, 3, 21, 20, 0)),
        ]

        points = get_income_expense_comparison(txns, "month", REFERENCE)

        self.assertEqual([p.label for p in points], ["Week 1", "Week 2", "Week 3", "Week 4"])
        self.assertEqual([p.expense for p in points], [10, 0, 0, 40])

    def test_year_time_frame_has_six_months(self) -> None:
        txns = [_txn("oct", 15, datetime(2025, 10, 31, 12, 0))]

        points = get_income_expense_comparison(txns, ComparisonTimeFrame.YEAR, REFERENCE)

        self.assertEqual([p.label for p in points], ["Oct", "Nov", "Dec", "Jan", "Feb", "Mar"])
        self.assertEqual(points[0].net, -15)


if __name__ == "__main__":
    unittest.main()
