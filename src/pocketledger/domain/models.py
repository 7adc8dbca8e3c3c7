from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class LenientStrEnum(str, Enum):
    """Accepts values regardless of case and surrounding whitespace."""

    @classmethod
    def _missing_(cls, value: object) -> "LenientStrEnum | None":
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class TransactionType(LenientStrEnum):
    INCOME = "income"
    EXPENSE = "expense"


class TimePeriod(LenientStrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class TrendGranularity(LenientStrEnum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTER = "3months"
    HALF_YEAR = "6months"
    YEARLY = "yearly"


class ComparisonTimeFrame(LenientStrEnum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    icon: str
    color: str
    type: TransactionType


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: float
    description: str
    date: datetime
    category: str
    type: TransactionType

    def signed_amount(self) -> float:
        return self.amount if self.type == TransactionType.INCOME else -self.amount


@dataclass(frozen=True)
class Budget:
    id: str
    category_id: str
    amount: float
    period: TimePeriod


@dataclass(frozen=True)
class Account:
    id: str
    name: str
    balance: float


@dataclass(frozen=True)
class FinanceState:
    """Immutable snapshot of everything the store holds."""

    transactions: tuple[Transaction, ...] = ()
    categories: tuple[Category, ...] = ()
    budgets: tuple[Budget, ...] = ()
    accounts: tuple[Account, ...] = ()


UNCATEGORIZED_ID = "unknown"


def uncategorized(txn_type: TransactionType = TransactionType.EXPENSE) -> Category:
    return Category(
        id=UNCATEGORIZED_ID,
        name="Uncategorized",
        icon="help-circle",
        color="#999999",
        type=txn_type,
    )


@dataclass(frozen=True)
class CategorySpending:
    category: Category
    amount: float
    percentage: float


@dataclass(frozen=True)
class BudgetProgress:
    budget: Budget
    category: Category
    spent: float
    remaining: float
    percentage: float

    @property
    def over_budget(self) -> bool:
        return self.spent > self.budget.amount


@dataclass(frozen=True)
class TrendSeries:
    labels: tuple[str, ...] = ()
    data: tuple[float, ...] = ()


@dataclass(frozen=True)
class IncomeExpensePoint:
    label: str
    income: float
    expense: float
    net: float


@dataclass(frozen=True)
class HistorySection:
    day: date
    day_total: float
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)
