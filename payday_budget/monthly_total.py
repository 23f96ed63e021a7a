from __future__ import annotations

from decimal import Decimal

from payday_budget.expenses import ZERO, ExpenseCollection, iter_amounts

# A month is always counted as 31 days, whatever the calendar month.
DAYS_IN_MONTH = Decimal("31")
DAYS_IN_WEEK = Decimal("7")


def compute_monthly_total(collection: ExpenseCollection) -> Decimal:
    """Sum every expense as a monthly-equivalent amount.

    Monthly amounts count once, weekly amounts 31/7 times and daily amounts
    31 times.
    """
    monthly = _sum_amounts(collection.monthly)
    weekly = _sum_amounts(collection.weekly)
    daily = _sum_amounts(collection.daily)
    return monthly + weekly * DAYS_IN_MONTH / DAYS_IN_WEEK + daily * DAYS_IN_MONTH


def _sum_amounts(expenses) -> Decimal:
    total = ZERO
    for amount in iter_amounts(expenses):
        total += amount
    return total
