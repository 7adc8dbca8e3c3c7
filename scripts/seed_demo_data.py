#!/usr/bin/env python3
from __future__ import annotations

import logging
import sys
from datetime import datetime, timedelta

from pocketledger.config import configure_logging, load_settings
from pocketledger.engine.formatting import format_currency, format_display_date
from pocketledger.infrastructure.storage import JsonFileStorage
from pocketledger.infrastructure.store import FinanceStore

logger = logging.getLogger("seed_demo_data")

# (days ago, amount, description, category id, type)
DEMO_TRANSACTIONS = [
    (0, 42.50, "Groceries", "1", "expense"),
    (1, 12.00, "Bus pass top-up", "2", "expense"),
    (2, 3200.00, "Salary", "7", "income"),
    (3, 65.99, "Concert tickets", "4", "expense"),
    (5, 1200.00, "Rent", "3", "expense"),
    (8, 88.10, "Electricity", "6", "expense"),
    (12, 27.30, "Pharmacy", "5", "expense"),
    (20, 150.00, "Dividends", "8", "income"),
    (34, 39.90, "Groceries", "1", "expense"),
    (40, 1200.00, "Rent", "3", "expense"),
]

DEMO_BUDGETS = [
    {"categoryId": "1", "amount": 400, "period": "monthly"},
    {"categoryId": "4", "amount": 50, "period": "weekly"},
]


def main() -> int:
    settings = load_settings()
    configure_logging(settings.log_level)
    store = FinanceStore.open(JsonFileStorage(settings.data_dir))
    if store.transactions:
        print(f"[seed] {settings.data_dir} already holds {len(store.transactions)} transactions", file=sys.stderr)
        return 1

    now = datetime.now().replace(microsecond=0)
    for days_ago, amount, description, category, txn_type in DEMO_TRANSACTIONS:
        store.add_transaction(
            {
                "amount": amount,
                "description": description,
                "date": now - timedelta(days=days_ago),
                "category": category,
                "type": txn_type,
            }
        )
    for budget in DEMO_BUDGETS:
        store.set_budget(budget)

    for txn in store.transactions:
        sign = "+" if txn.type.value == "income" else "-"
        print(
            f"{format_display_date(txn.date)}  {txn.description:<20} "
            f"{sign} {format_currency(txn.amount, settings.currency_symbol)}"
        )
    logger.info("Seeded %d transactions into %s", len(store.transactions), settings.data_dir)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
