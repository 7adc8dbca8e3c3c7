from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pocketledger.domain.models import (
    Account,
    Budget,
    BudgetProgress,
    Category,
    CategorySpending,
    IncomeExpensePoint,
    TimePeriod,
    Transaction,
    TransactionType,
)


def to_local_naive(value: datetime) -> datetime:
    """Express an aware timestamp as local wall time; naive values are already local."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_timestamp(text: str) -> datetime:
    return to_local_naive(datetime.fromisoformat(text.strip()))


def _coerce_datetime(value: Any) -> Any:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return value
    return value


# ---- drafts: inputs to store mutations ----

class TransactionDraft(BaseModel):
    amount: float = Field(gt=0)
    description: str = ""
    date: datetime
    category: str
    type: TransactionType

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, value: Any) -> Any:
        return _coerce_datetime(value)

    @field_validator("date")
    @classmethod
    def localize_date(cls, value: datetime) -> datetime:
        return to_local_naive(value)

    def to_domain(self, txn_id: str) -> Transaction:
        return Transaction(
            id=txn_id,
            amount=self.amount,
            description=self.description,
            date=self.date,
            category=self.category,
            type=self.type,
        )


class BudgetDraft(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    category_id: str = Field(alias="categoryId", min_length=1)
    amount: float = Field(gt=0)
    period: TimePeriod = TimePeriod.MONTHLY


class CategoryDraft(BaseModel):
    name: str = Field(min_length=1)
    icon: str = "help-circle"
    color: str = "#999999"
    type: TransactionType = TransactionType.EXPENSE

    def to_domain(self, category_id: str) -> Category:
        return Category(id=category_id, name=self.name, icon=self.icon, color=self.color, type=self.type)


# ---- persisted records: the JSON shape of each stored collection ----

class TransactionRecord(BaseModel):
    id: str
    amount: float
    description: str = ""
    date: str
    category: str
    type: TransactionType

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        try:
            datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise ValueError(f"date must be an ISO-8601 timestamp, got {value!r}") from exc
        return value

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            amount=self.amount,
            description=self.description,
            date=parse_timestamp(self.date),
            category=self.category,
            type=self.type,
        )

    @classmethod
    def from_domain(cls, txn: Transaction) -> "TransactionRecord":
        return cls(
            id=txn.id,
            amount=txn.amount,
            description=txn.description,
            date=txn.date.isoformat(),
            category=txn.category,
            type=txn.type,
        )


class CategoryRecord(BaseModel):
    id: str
    name: str
    icon: str
    color: str
    type: TransactionType

    def to_domain(self) -> Category:
        return Category(id=self.id, name=self.name, icon=self.icon, color=self.color, type=self.type)

    @classmethod
    def from_domain(cls, category: Category) -> "CategoryRecord":
        return cls(id=category.id, name=category.name, icon=category.icon, color=category.color, type=category.type)


class BudgetRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    id: str
    category_id: str = Field(alias="categoryId")
    amount: float
    period: TimePeriod

    def to_domain(self) -> Budget:
        return Budget(id=self.id, category_id=self.category_id, amount=self.amount, period=self.period)

    @classmethod
    def from_domain(cls, budget: Budget) -> "BudgetRecord":
        return cls(id=budget.id, category_id=budget.category_id, amount=budget.amount, period=budget.period)


class AccountRecord(BaseModel):
    id: str
    name: str
    balance: float

    def to_domain(self) -> Account:
        return Account(id=self.id, name=self.name, balance=self.balance)

    @classmethod
    def from_domain(cls, account: Account) -> "AccountRecord":
        return cls(id=account.id, name=account.name, balance=account.balance)


# ---- dashboard output ----

class CategorySpendingView(BaseModel):
    category_id: str
    name: str
    icon: str
    color: str
    amount: float
    percentage: float

    @classmethod
    def from_domain(cls, item: CategorySpending) -> "CategorySpendingView":
        return cls(
            category_id=item.category.id,
            name=item.category.name,
            icon=item.category.icon,
            color=item.category.color,
            amount=round(item.amount, 2),
            percentage=round(item.percentage, 2),
        )


class BudgetProgressView(BaseModel):
    budget_id: str
    category_id: str
    category_name: str
    period: TimePeriod
    amount: float
    spent: float
    remaining: float
    percentage: float
    over_budget: bool

    @classmethod
    def from_domain(cls, item: BudgetProgress) -> "BudgetProgressView":
        return cls(
            budget_id=item.budget.id,
            category_id=item.category.id,
            category_name=item.category.name,
            period=item.budget.period,
            amount=round(item.budget.amount, 2),
            spent=round(item.spent, 2),
            remaining=round(item.remaining, 2),
            percentage=round(item.percentage, 2),
            over_budget=item.over_budget,
        )


class ComparisonPointView(BaseModel):
    label: str
    income: float
    expense: float
    net: float

    @classmethod
    def from_domain(cls, point: IncomeExpensePoint) -> "ComparisonPointView":
        return cls(
            label=point.label,
            income=round(point.income, 2),
            expense=round(point.expense, 2),
            net=round(point.net, 2),
        )


class DashboardSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    schema_version: str = Field(default="pocketledger.dashboard.v1", alias="schema")
    period: TimePeriod
    reference_date: date
    balance: float
    income: float
    expenses: float
    savings_rate: float
    spending_trend: float
    forecast_expenses: float
    forecast_days: int
    top_categories: List[CategorySpendingView] = Field(default_factory=list)
    budgets: List[BudgetProgressView] = Field(default_factory=list)


class MonthlySummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    schema_version: str = Field(default="pocketledger.monthly_summary.v1", alias="schema")
    month: str = Field(description="Calendar month in YYYY-MM format, e.g. 2026-01.")
    income: float
    expenses: float
    net: float
    savings_rate: float
    expense_breakdown: List[CategorySpendingView] = Field(default_factory=list)
    income_breakdown: List[CategorySpendingView] = Field(default_factory=list)
    comparison: List[ComparisonPointView] = Field(default_factory=list)
