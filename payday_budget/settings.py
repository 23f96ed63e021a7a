from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from payday_budget.expenses import DEFAULT_PAY_DAY, parse_pay_day

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    database_url: str
    frontend_origin: str
    default_pay_day: int
    log_level: str


def load_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./payday_budget.db"),
        frontend_origin=os.getenv("FRONTEND_ORIGIN", "http://localhost:3000"),
        default_pay_day=get_default_pay_day(),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )


def get_default_pay_day() -> int:
    return parse_pay_day(os.getenv("DEFAULT_PAY_DAY"), default=DEFAULT_PAY_DAY)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level if level in LOG_LEVELS else "INFO",
        format=LOG_FORMAT,
    )
