from __future__ import annotations

from pocketledger.domain.models import Account, Category, FinanceState, TransactionType

_EXPENSE = TransactionType.EXPENSE
_INCOME = TransactionType.INCOME

DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id="1", name="Food", icon="food", color="#FF5733", type=_EXPENSE),
    Category(id="2", name="Transport", icon="car", color="#3498DB", type=_EXPENSE),
    Category(id="3", name="Housing", icon="home", color="#2ECC71", type=_EXPENSE),
    Category(id="4", name="Entertainment", icon="movie", color="#9B59B6", type=_EXPENSE),
    Category(id="5", name="Healthcare", icon="medical", color="#E74C3C", type=_EXPENSE),
    Category(id="6", name="Utilities", icon="flash", color="#F39C12", type=_EXPENSE),
    Category(id="7", name="Salary", icon="cash", color="#27AE60", type=_INCOME),
    Category(id="8", name="Investment", icon="trending-up", color="#16A085", type=_INCOME),
    Category(id="9", name="Gifts", icon="gift", color="#8E44AD", type=_INCOME),
)

DEFAULT_ACCOUNT = Account(id="1", name="Main Account", balance=0.0)


def default_state() -> FinanceState:
    return FinanceState(categories=DEFAULT_CATEGORIES, accounts=(DEFAULT_ACCOUNT,))
