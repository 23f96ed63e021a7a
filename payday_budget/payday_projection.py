from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable

from payday_budget.expenses import (
    ZERO,
    DailyExpense,
    ExpenseCollection,
    MonthlyExpense,
    WeeklyExpense,
    parse_amount,
    parse_day_of_month,
    parse_day_of_week,
    parse_pay_day,
)

WEEKLY_DAYS = 7


def resolve_payday_date(today: date, pay_day_of_month: int) -> date:
    """Return the next payday strictly after ``today``.

    A pay day on or before today's day of the month falls in next month.
    Days past the end of the target month carry into the month after it.
    """
    pay_day = parse_pay_day(pay_day_of_month)
    if pay_day <= today.day:
        return _calendar_date(today.year, today.month + 1, pay_day)
    return _calendar_date(today.year, today.month, pay_day)


def project_expenses_until_payday(
    collection: ExpenseCollection,
    today: date,
    pay_day_of_month: int,
) -> Decimal:
    pay_day = parse_pay_day(pay_day_of_month)
    payday_date = resolve_payday_date(today, pay_day)
    return (
        project_daily_expenses(collection.daily, today, payday_date, pay_day)
        + project_weekly_expenses(collection.weekly, today, payday_date)
        + project_monthly_expenses(collection.monthly, today, payday_date)
    )


def project_daily_expenses(
    expenses: Iterable[DailyExpense],
    today: date,
    payday_date: date,
    pay_day_of_month: int,
) -> Decimal:
    days = days_until_payday(today, payday_date, pay_day_of_month)
    total = ZERO
    for expense in expenses:
        total += parse_amount(expense.amount) * days
    return total


def project_weekly_expenses(
    expenses: Iterable[WeeklyExpense],
    today: date,
    payday_date: date,
) -> Decimal:
    total = ZERO
    for expense in expenses:
        day_of_week = parse_day_of_week(expense.day_of_week)
        if day_of_week is None:
            continue
        first_date = next_weekday_after(today, day_of_week)
        occurrences = count_weekly_occurrences(first_date, payday_date)
        total += parse_amount(expense.amount) * occurrences
    return total


def project_monthly_expenses(
    expenses: Iterable[MonthlyExpense],
    today: date,
    payday_date: date,
) -> Decimal:
    total = ZERO
    for expense in expenses:
        due_date = monthly_due_date(today, parse_day_of_month(expense.day_of_month))
        if due_date < payday_date:
            total += parse_amount(expense.amount)
    return total


def days_until_payday(today: date, payday_date: date, pay_day_of_month: int) -> int:
    """Count the days of daily spending left before payday.

    When today is the pay day and the payday date is in this month, today's
    spending still counts as one day.
    """
    if today.day == parse_pay_day(pay_day_of_month) and _same_month(today, payday_date):
        return 1
    return max(0, (payday_date - today).days)


def next_weekday_after(today: date, day_of_week: int) -> date:
    """First date after ``today`` falling on ``day_of_week`` (0 is Sunday)."""
    offset = (day_of_week - _sunday_based_weekday(today)) % WEEKLY_DAYS
    return today + timedelta(days=offset or WEEKLY_DAYS)


def count_weekly_occurrences(first_date: date, payday_date: date) -> int:
    """Count ``first_date`` and each week after it that lands before payday."""
    if first_date >= payday_date:
        return 0
    days_between = (payday_date - first_date).days
    return (days_between - 1) // WEEKLY_DAYS + 1


def monthly_due_date(today: date, day_of_month: int) -> date:
    """Next due date of a monthly expense, rolling past today into next month."""
    if day_of_month <= today.day:
        return _calendar_date(today.year, today.month + 1, day_of_month)
    return _calendar_date(today.year, today.month, day_of_month)


def _calendar_date(year: int, month: int, day: int) -> date:
    total_month = month - 1
    year += total_month // 12
    month = total_month % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


def _same_month(first: date, second: date) -> bool:
    return (first.year, first.month) == (second.year, second.month)


def _sunday_based_weekday(value: date) -> int:
    return value.isoweekday() % WEEKLY_DAYS