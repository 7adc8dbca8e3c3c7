from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    log_level: str = "INFO"
    currency_symbol: str = "R"
    top_categories: int = 5
    forecast_days: int = 30


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value


def load_settings(dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv(override=False)
    return Settings(
        data_dir=Path(os.getenv("POCKETLEDGER_DATA_DIR", "data")).expanduser(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        currency_symbol=os.getenv("POCKETLEDGER_CURRENCY_SYMBOL", "R"),
        top_categories=_int_env("POCKETLEDGER_TOP_CATEGORIES", 5),
        forecast_days=_int_env("POCKETLEDGER_FORECAST_DAYS", 30),
    )


def configure_logging(level: str | None = None) -> None:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, name, logging.INFO), format=LOG_FORMAT)
