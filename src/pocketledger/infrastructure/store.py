from __future__ import annotations

import logging
from typing import Any, Iterable

from pydantic import BaseModel, TypeAdapter, ValidationError

from pocketledger.application import commands
from pocketledger.application.commands import IdFactory, new_id
from pocketledger.domain.models import Account, Budget, Category, FinanceState, Transaction
from pocketledger.domain.schemas import (
    AccountRecord,
    BudgetDraft,
    BudgetRecord,
    CategoryDraft,
    CategoryRecord,
    TransactionDraft,
    TransactionRecord,
)
from pocketledger.infrastructure.defaults import default_state
from pocketledger.infrastructure.storage import Storage, StorageError

logger = logging.getLogger(__name__)

TRANSACTIONS_KEY = "transactions"
CATEGORIES_KEY = "categories"
BUDGETS_KEY = "budgets"
ACCOUNTS_KEY = "accounts"

_ADAPTERS: dict[str, TypeAdapter[Any]] = {
    TRANSACTIONS_KEY: TypeAdapter(list[TransactionRecord]),
    CATEGORIES_KEY: TypeAdapter(list[CategoryRecord]),
    BUDGETS_KEY: TypeAdapter(list[BudgetRecord]),
    ACCOUNTS_KEY: TypeAdapter(list[AccountRecord]),
}


class StoreNotInitializedError(RuntimeError):
    pass


def dump_collection(key: str, records: Iterable[BaseModel]) -> str:
    return _ADAPTERS[key].dump_json(list(records), by_alias=True).decode("utf-8")


def load_collection(key: str, raw: str) -> list[Any]:
    return _ADAPTERS[key].validate_json(raw)


class FinanceStore:
    """
    Single source of mutable truth.

    Holds the current FinanceState snapshot, applies mutations through the
    pure commands in `pocketledger.application.commands`, and writes every
    collection back to storage after each change. Readers only ever see
    complete snapshots.
    """

    def __init__(self, storage: Storage, id_factory: IdFactory = new_id) -> None:
        self._storage = storage
        self._id_factory = id_factory
        self._state: FinanceState | None = None

    @classmethod
    def open(cls, storage: Storage, id_factory: IdFactory = new_id) -> "FinanceStore":
        store = cls(storage, id_factory=id_factory)
        store.load()
        return store

    # ---- snapshot access ----
    @property
    def is_loaded(self) -> bool:
        return self._state is not None

    @property
    def state(self) -> FinanceState:
        if self._state is None:
            raise StoreNotInitializedError("FinanceStore.load() must run before the store is read")
        return self._state

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self.state.transactions

    @property
    def categories(self) -> tuple[Category, ...]:
        return self.state.categories

    @property
    def budgets(self) -> tuple[Budget, ...]:
        return self.state.budgets

    @property
    def accounts(self) -> tuple[Account, ...]:
        return self.state.accounts

    # ---- persistence ----
    def load(self) -> FinanceState:
        defaults = default_state()
        transactions = self._read(TRANSACTIONS_KEY)
        categories = self._read(CATEGORIES_KEY)
        budgets = self._read(BUDGETS_KEY)
        accounts = self._read(ACCOUNTS_KEY)

        self._state = FinanceState(
            transactions=tuple(r.to_domain() for r in transactions or ()),
            categories=tuple(r.to_domain() for r in categories) if categories is not None else defaults.categories,
            budgets=tuple(r.to_domain() for r in budgets or ()),
            accounts=tuple(r.to_domain() for r in accounts) if accounts is not None else defaults.accounts,
        )
        if categories is None:
            self._write(CATEGORIES_KEY, [CategoryRecord.from_domain(c) for c in self._state.categories])
        if accounts is None:
            self._write(ACCOUNTS_KEY, [AccountRecord.from_domain(a) for a in self._state.accounts])

        logger.info(
            "FinanceStore loaded storage=%s transactions=%d categories=%d budgets=%d accounts=%d",
            self._storage.name,
            len(self._state.transactions),
            len(self._state.categories),
            len(self._state.budgets),
            len(self._state.accounts),
        )
        return self._state

    def save(self) -> None:
        state = self.state
        self._write(TRANSACTIONS_KEY, [TransactionRecord.from_domain(t) for t in state.transactions])
        self._write(CATEGORIES_KEY, [CategoryRecord.from_domain(c) for c in state.categories])
        self._write(BUDGETS_KEY, [BudgetRecord.from_domain(b) for b in state.budgets])
        self._write(ACCOUNTS_KEY, [AccountRecord.from_domain(a) for a in state.accounts])

    def _read(self, key: str) -> list[Any] | None:
        try:
            raw = self._storage.get_item(key)
        except StorageError:
            logger.exception("FinanceStore could not read key=%s; using defaults", key)
            return None
        if raw is None:
            return None
        try:
            return load_collection(key, raw)
        except ValidationError as exc:
            logger.error("FinanceStore found corrupt key=%s; using defaults: %s", key, exc)
            return None

    def _write(self, key: str, records: list[BaseModel]) -> None:
        try:
            self._storage.set_item(key, dump_collection(key, records))
        except StorageError:
            logger.exception("FinanceStore failed to persist key=%s", key)

    def _commit(self, state: FinanceState, action: str) -> None:
        if state is self._state:
            return
        self._state = state
        logger.info("FinanceStore applied %s", action)
        self.save()

    # ---- mutations ----
    def add_transaction(self, draft: TransactionDraft | dict[str, Any]) -> Transaction:
        state, txn = commands.add_transaction(self.state, draft, self._id_factory)
        self._commit(state, f"add_transaction id={txn.id}")
        return txn

    def delete_transaction(self, txn_id: str) -> None:
        self._commit(commands.delete_transaction(self.state, txn_id), f"delete_transaction id={txn_id}")

    def update_transaction(self, txn_id: str, draft: TransactionDraft | dict[str, Any]) -> Transaction | None:
        state, txn = commands.update_transaction(self.state, txn_id, draft)
        self._commit(state, f"update_transaction id={txn_id}")
        return txn

    def add_category(self, draft: CategoryDraft | dict[str, Any]) -> Category:
        state, category = commands.add_category(self.state, draft, self._id_factory)
        self._commit(state, f"add_category id={category.id}")
        return category

    def set_budget(self, draft: BudgetDraft | dict[str, Any]) -> Budget:
        state, budget = commands.set_budget(self.state, draft, self._id_factory)
        self._commit(state, f"set_budget id={budget.id} category_id={budget.category_id}")
        return budget

    def update_account(self, account_id: str, delta: float) -> None:
        self._commit(commands.update_account(self.state, account_id, delta), f"update_account id={account_id}")
