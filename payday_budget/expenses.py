from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

ZERO = Decimal("0")
DEFAULT_PAY_DAY = 25
DEFAULT_DAY_OF_MONTH = 1
CADENCES = ("monthly", "weekly", "daily")

_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INTEGER_PREFIX = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class MonthlyExpense:
    name: str
    amount: Decimal
    day_of_month: int = DEFAULT_DAY_OF_MONTH


@dataclass(frozen=True)
class WeeklyExpense:
    name: str
    amount: Decimal
    # 0 is Sunday, 6 is Saturday.
    day_of_week: Optional[int] = None


@dataclass(frozen=True)
class DailyExpense:
    name: str
    amount: Decimal


@dataclass(frozen=True)
class ExpenseCollection:
    """Recurring expenses grouped by cadence, in insertion order."""

    monthly: tuple[MonthlyExpense, ...] = ()
    weekly: tuple[WeeklyExpense, ...] = ()
    daily: tuple[DailyExpense, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "monthly", tuple(self.monthly))
        object.__setattr__(self, "weekly", tuple(self.weekly))
        object.__setattr__(self, "daily", tuple(self.daily))


@dataclass(frozen=True)
class PaydayConfig:
    pay_day_of_month: int = DEFAULT_PAY_DAY

    def __post_init__(self) -> None:
        object.__setattr__(self, "pay_day_of_month", parse_pay_day(self.pay_day_of_month))


@dataclass(frozen=True)
class BudgetSnapshot:
    monthly_total: Decimal
    payday_total: Decimal


def parse_amount(value: object) -> Decimal:
    """Read an amount the way a form field is read.

    Leading numeric text is used (``"12.50abc"`` reads as 12.50). Blank,
    non-numeric, non-finite and negative values all read as zero.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float)):
        parsed = Decimal(str(value))
    else:
        match = _NUMBER_PREFIX.match(str(value))
        if not match:
            return ZERO
        try:
            parsed = Decimal(match.group(1))
        except InvalidOperation:
            return ZERO
    if not parsed.is_finite() or parsed < ZERO:
        return ZERO
    # Amounts too large for a float read as zero.
    if math.isinf(float(parsed)):
        return ZERO
    return parsed


def parse_day_of_month(value: object) -> int:
    day = _parse_integer(value)
    if day is None or not 1 <= day <= 31:
        return DEFAULT_DAY_OF_MONTH
    return day


def parse_day_of_week(value: object) -> Optional[int]:
    day = _parse_integer(value)
    if day is None or not 0 <= day <= 6:
        return None
    return day


def parse_pay_day(value: object, default: int = DEFAULT_PAY_DAY) -> int:
    day = _parse_integer(value)
    if day is None or not 1 <= day <= 31:
        return default
    return day


def validate_cadence(cadence: str) -> str:
    normalized = cadence.strip().lower()
    if normalized not in CADENCES:
        raise ValueError("Only monthly, weekly, or daily expenses are supported.")
    return normalized


def iter_amounts(expenses: Iterable[MonthlyExpense | WeeklyExpense | DailyExpense]) -> Iterable[Decimal]:
    for expense in expenses:
        yield parse_amount(expense.amount)


def _parse_integer(value: object) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        try:
            return int(value)
        except (ValueError, OverflowError):
            return None
    match = _INTEGER_PREFIX.match(str(value))
    if not match:
        return None
    return int(match.group(1))
