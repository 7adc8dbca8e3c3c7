from __future__ import annotations

import unittest
from datetime import datetime

from pocketledger.domain.models import Budget, Category, TimePeriod, Transaction, TransactionType
from pocketledger.engine.budgets import get_budget_progress

REFERENCE = datetime(2026, 3, 18, 12, 0)

CATEGORIES = (
    Category(id="food", name="Food", icon="food", color="#FF5733", type=TransactionType.EXPENSE),
    Category(id="fun", name="Entertainment", icon="movie", color="#9B59B6", type=TransactionType.EXPENSE),
)


def _txn(id: str, amount: float, category: str, when: datetime = REFERENCE, txn_type: TransactionType = TransactionType.EXPENSE) -> Transaction:
    return Transaction(id=id, amount=amount, description="", date=when, category=category, type=txn_type)


class BudgetProgressTests(unittest.TestCase):
    def test_over_budget_is_representable(self) -> None:
        budget = Budget(id="b1", category_id="food", amount=100, period=TimePeriod.MONTHLY)
        txns = [_txn("t1", 90, "food"), _txn("t2", 60, "food", datetime(2026, 3, 2))]

        [progress] = get_budget_progress([budget], txns, CATEGORIES, REFERENCE)

        self.assertEqual(progress.spent, 150)
        self.assertEqual(progress.remaining, -50)
        self.assertEqual(progress.percentage, 150)
        self.assertTrue(progress.over_budget)
        self.assertEqual(progress.category.name, "Food")

    def test_only_expenses_in_category_and_period_count(self) -> None:
        budget = Budget(id="b1", category_id="food", amount=200, period=TimePeriod.WEEKLY)
        txns = [
            _txn("in_week", 40, "food", datetime(2026, 3, 16, 9, 0)),
            _txn("last_week", 70, "food", datetime(2026, 3, 13, 9, 0)),
            _txn("other_category", 25, "fun"),
            _txn("refund", 15, "food", txn_type=TransactionType.INCOME),
        ]

        [progress] = get_budget_progress([budget], txns, CATEGORIES, REFERENCE)

        self.assertEqual(progress.spent, 40)
        self.assertEqual(progress.remaining, 160)
        self.assertEqual(progress.percentage, 20)
        self.assertFalse(progress.over_budget)

    def test_budget_with_missing_category_is_dropped(self) -> None:
        budgets = [
            Budget(id="b1", category_id="gone", amount=50, period=TimePeriod.MONTHLY),
            Budget(id="b2", category_id="fun", amount=50, period=TimePeriod.MONTHLY),
        ]

        result = get_budget_progress(budgets, [], CATEGORIES, REFERENCE)

        self.assertEqual([p.budget.id for p in result], ["b2"])

    def test_zero_amount_budget_has_zero_percentage(self) -> None:
        budget = Budget(id="b1", category_id="food", amount=0, period=TimePeriod.DAILY)

        [progress] = get_budget_progress([budget], [_txn("t1", 10, "food")], CATEGORIES, REFERENCE)

        self.assertEqual(progress.percentage, 0)
        self.assertEqual(progress.remaining, -10)

    def test_output_follows_budget_order(self) -> None:
        budgets = [
            Budget(id="b-fun", category_id="fun", amount=10, period=TimePeriod.MONTHLY),
            Budget(id="b-food", category_id="food", amount=1000, period=TimePeriod.MONTHLY),
        ]
        txns = [_txn("t1", 500, "food"), _txn("t2", 1, "fun")]

        result = get_budget_progress(budgets, txns, CATEGORIES, REFERENCE)

        self.assertEqual([p.budget.id for p in result], ["b-fun", "b-food"])


if __name__ == "__main__":
    unittest.main()
