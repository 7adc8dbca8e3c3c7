from __future__ import annotations

import sys

from pocketledger.application.dashboard import DashboardService
from pocketledger.application.insights import FinanceInsights
from pocketledger.config import configure_logging, load_settings
from pocketledger.infrastructure.storage import JsonFileStorage
from pocketledger.infrastructure.store import FinanceStore


def main() -> int:
    settings = load_settings()
    configure_logging(settings.log_level)

    period = sys.argv[1] if len(sys.argv) > 1 else "monthly"
    store = FinanceStore.open(JsonFileStorage(settings.data_dir))
    dashboard = DashboardService(FinanceInsights.from_store(store), settings)
    summary = dashboard.build(period)
    print(summary.model_dump_json(indent=2, by_alias=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
