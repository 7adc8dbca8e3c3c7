from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from decimal import Decimal
from typing import Any, Callable

from pydantic import BaseModel

from pocketledger.domain.models import Account, Budget, Category, FinanceState, Transaction
from pocketledger.domain.schemas import BudgetDraft, CategoryDraft, TransactionDraft

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def new_id() -> str:
    return str(uuid.uuid4())


def _validate(model: type[BaseModel], payload: BaseModel | dict[str, Any]) -> Any:
    if isinstance(payload, model):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump()
    return model.model_validate(payload)


def _add_money(balance: float, delta: float) -> float:
    return float(Decimal(str(balance)) + Decimal(str(delta)))


def apply_account_delta(accounts: tuple[Account, ...], account_id: str, delta: float) -> tuple[Account, ...]:
    return tuple(
        replace(account, balance=_add_money(account.balance, delta)) if account.id == account_id else account
        for account in accounts
    )


def _apply_to_default_account(accounts: tuple[Account, ...], delta: float) -> tuple[Account, ...]:
    if not accounts:
        logger.warning("No account available to apply balance delta=%.2f", delta)
        return accounts
    return apply_account_delta(accounts, accounts[0].id, delta)


def _find_transaction(state: FinanceState, txn_id: str) -> Transaction | None:
    return next((txn for txn in state.transactions if txn.id == txn_id), None)


def add_transaction(
    state: FinanceState,
    draft: TransactionDraft | dict[str, Any],
    id_factory: IdFactory = new_id,
) -> tuple[FinanceState, Transaction]:
    txn = _validate(TransactionDraft, draft).to_domain(id_factory())
    new_state = replace(
        state,
        transactions=state.transactions + (txn,),
        accounts=_apply_to_default_account(state.accounts, txn.signed_amount()),
    )
    return new_state, txn


def delete_transaction(state: FinanceState, txn_id: str) -> FinanceState:
    txn = _find_transaction(state, txn_id)
    if txn is None:
        logger.info("delete_transaction ignored unknown id=%s", txn_id)
        return state
    return replace(
        state,
        transactions=tuple(t for t in state.transactions if t.id != txn_id),
        accounts=_apply_to_default_account(state.accounts, -txn.signed_amount()),
    )


def update_transaction(
    state: FinanceState,
    txn_id: str,
    draft: TransactionDraft | dict[str, Any],
) -> tuple[FinanceState, Transaction | None]:
    """Replace a transaction in place, keeping its id and position in the ledger."""
    old = _find_transaction(state, txn_id)
    if old is None:
        logger.info("update_transaction ignored unknown id=%s", txn_id)
        return state, None

    new = _validate(TransactionDraft, draft).to_domain(old.id)
    accounts = _apply_to_default_account(state.accounts, -old.signed_amount())
    accounts = _apply_to_default_account(accounts, new.signed_amount())
    new_state = replace(
        state,
        transactions=tuple(new if t.id == txn_id else t for t in state.transactions),
        accounts=accounts,
    )
    return new_state, new


def add_category(
    state: FinanceState,
    draft: CategoryDraft | dict[str, Any],
    id_factory: IdFactory = new_id,
) -> tuple[FinanceState, Category]:
    category = _validate(CategoryDraft, draft).to_domain(id_factory())
    return replace(state, categories=state.categories + (category,)), category


def set_budget(
    state: FinanceState,
    draft: BudgetDraft | dict[str, Any],
    id_factory: IdFactory = new_id,
) -> tuple[FinanceState, Budget]:
    """Upsert by category: an existing budget keeps its id and gets the new amount and period."""
    payload = _validate(BudgetDraft, draft)
    existing = next((b for b in state.budgets if b.category_id == payload.category_id), None)

    if existing is not None:
        budget = replace(existing, amount=payload.amount, period=payload.period)
        budgets = tuple(budget if b.id == existing.id else b for b in state.budgets)
    else:
        budget = Budget(
            id=id_factory(),
            category_id=payload.category_id,
            amount=payload.amount,
            period=payload.period,
        )
        budgets = state.budgets + (budget,)
    return replace(state, budgets=budgets), budget


def update_account(state: FinanceState, account_id: str, delta: float) -> FinanceState:
    if not any(account.id == account_id for account in state.accounts):
        logger.info("update_account ignored unknown id=%s", account_id)
        return state
    return replace(state, accounts=apply_account_delta(state.accounts, account_id, delta))
