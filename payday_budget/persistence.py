from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

from sqlalchemy import Column, DateTime, MetaData, String, Table, Text, func, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from payday_budget.expenses import (
    DEFAULT_PAY_DAY,
    ExpenseCollection,
    PaydayConfig,
    parse_pay_day,
)
from payday_budget.extraction import extract_expense_records

logger = logging.getLogger(__name__)

STATE_KEY = "budgetData"
LIST_KEYS = {
    "monthly": "monthlyExpenses",
    "weekly": "weeklyExpenses",
    "daily": "dailyExpenses",
}
PAY_DAY_KEY = "payDay"

metadata = MetaData()

budget_state = Table(
    "budget_state",
    metadata,
    Column("key", String(64), primary_key=True),
    Column("payload", Text, nullable=False),
    Column(
        "updated_at",
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    ),
)


def encode_budget_state(collection: ExpenseCollection, config: PaydayConfig) -> dict[str, Any]:
    """Build the stored shape: string field values, no ``day`` on daily rows."""
    return {
        LIST_KEYS["monthly"]: [
            {**_encoded_row(expense.name, expense.amount), "day": _text(expense.day_of_month)}
            for expense in collection.monthly
        ],
        LIST_KEYS["weekly"]: [
            {**_encoded_row(expense.name, expense.amount), "day": _text(expense.day_of_week)}
            for expense in collection.weekly
        ],
        LIST_KEYS["daily"]: [
            _encoded_row(expense.name, expense.amount)
            for expense in collection.daily
        ],
        PAY_DAY_KEY: str(config.pay_day_of_month),
    }


def decode_budget_state(
    payload: Any,
    default_pay_day: int = DEFAULT_PAY_DAY,
) -> tuple[ExpenseCollection, PaydayConfig]:
    """Rebuild expenses and pay day from stored data, skipping what can't be read."""
    if not isinstance(payload, Mapping):
        return ExpenseCollection(), PaydayConfig(default_pay_day)
    collection = ExpenseCollection(
        monthly=extract_expense_records("monthly", _mapping_rows(payload, LIST_KEYS["monthly"])),
        weekly=extract_expense_records("weekly", _mapping_rows(payload, LIST_KEYS["weekly"])),
        daily=extract_expense_records("daily", _mapping_rows(payload, LIST_KEYS["daily"])),
    )
    pay_day = parse_pay_day(payload.get(PAY_DAY_KEY), default=default_pay_day)
    return collection, PaydayConfig(pay_day)


class BudgetStateStore:
    """Keeps one JSON budget document per key in the ``budget_state`` table."""

    def __init__(self, engine: Engine, key: str = STATE_KEY, default_pay_day: int = DEFAULT_PAY_DAY) -> None:
        self.engine = engine
        self.key = key
        self.default_pay_day = default_pay_day

    def create_schema(self) -> None:
        metadata.create_all(self.engine)

    def load(self) -> Optional[tuple[ExpenseCollection, PaydayConfig]]:
        payload = self.load_raw()
        if payload is None:
            return None
        return decode_budget_state(payload, default_pay_day=self.default_pay_day)

    def load_raw(self) -> Optional[Mapping[str, Any]]:
        try:
            with self.engine.begin() as conn:
                text = conn.execute(
                    select(budget_state.c.payload).where(budget_state.c.key == self.key)
                ).scalar()
        except SQLAlchemyError:
            logger.exception("Failed to load budget state %s", self.key)
            return None
        if not text:
            return None
        try:
            payload = json.loads(text)
        except ValueError:
            logger.warning("Ignoring unreadable budget state %s", self.key)
            return None
        if not isinstance(payload, Mapping):
            logger.warning("Ignoring budget state %s: expected an object", self.key)
            return None
        return payload

    def save(self, collection: ExpenseCollection, config: PaydayConfig) -> bool:
        return self.save_raw(encode_budget_state(collection, config))

    def save_raw(self, payload: Mapping[str, Any]) -> bool:
        try:
            text = json.dumps(payload)
        except (TypeError, ValueError):
            logger.exception("Failed to encode budget state %s", self.key)
            return False
        try:
            with self.engine.begin() as conn:
                result = conn.execute(
                    update(budget_state)
                    .where(budget_state.c.key == self.key)
                    .values(payload=text)
                )
                if result.rowcount == 0:
                    conn.execute(insert(budget_state).values(key=self.key, payload=text))
        except SQLAlchemyError:
            logger.exception("Failed to save budget state %s", self.key)
            return False
        logger.debug("Saved budget state %s", self.key)
        return True


def _encoded_row(name: str, amount: Any) -> dict[str, str]:
    return {"name": name or "", "amount": _text(amount)}


def _mapping_rows(payload: Mapping[str, Any], list_key: str) -> list[Mapping[str, Any]]:
    rows = payload.get(list_key)
    if not isinstance(rows, list):
        return []
    return [row for row in rows if isinstance(row, Mapping)]


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
