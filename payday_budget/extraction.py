from __future__ import annotations

from typing import Iterable, Mapping, Sequence, Union

from payday_budget.expenses import (
    DailyExpense,
    ExpenseCollection,
    MonthlyExpense,
    WeeklyExpense,
    parse_amount,
    parse_day_of_month,
    parse_day_of_week,
    validate_cadence,
)

CADENCE_FIELDS: dict[str, tuple[str, ...]] = {
    "monthly": ("monthly-name", "monthly-amount", "monthly-day"),
    "weekly": ("weekly-name", "weekly-amount", "weekly-day"),
    "daily": ("daily-name", "daily-amount"),
}

RawRow = Union[Mapping[str, object], Sequence[object]]
ExpenseRecord = Union[MonthlyExpense, WeeklyExpense, DailyExpense]


def field_key(field_name: str) -> str:
    """``monthly-amount`` -> ``amount``."""
    return field_name.split("-")[-1]


def extract_raw_rows(cadence: str, rows: Iterable[RawRow]) -> list[dict[str, str]]:
    """Collect field values per row, dropping rows whose fields are all blank.

    A row is either a mapping keyed by form field name (``weekly-day``) or
    record key (``day``), or a sequence of values in field order.
    """
    fields = CADENCE_FIELDS[validate_cadence(cadence)]
    extracted: list[dict[str, str]] = []
    for row in rows:
        values = {
            field_key(field_name): _field_value(row, field_name, position)
            for position, field_name in enumerate(fields)
        }
        if any(values.values()):
            extracted.append(values)
    return extracted


def extract_expense_records(cadence: str, rows: Iterable[RawRow]) -> tuple[ExpenseRecord, ...]:
    normalized = validate_cadence(cadence)
    return tuple(
        build_expense_record(normalized, values)
        for values in extract_raw_rows(normalized, rows)
    )


def extract_expense_collection(
    monthly: Iterable[RawRow] = (),
    weekly: Iterable[RawRow] = (),
    daily: Iterable[RawRow] = (),
) -> ExpenseCollection:
    return ExpenseCollection(
        monthly=extract_expense_records("monthly", monthly),
        weekly=extract_expense_records("weekly", weekly),
        daily=extract_expense_records("daily", daily),
    )


def build_expense_record(cadence: str, values: Mapping[str, object]) -> ExpenseRecord:
    normalized = validate_cadence(cadence)
    name = _text(values.get("name"))
    amount = parse_amount(values.get("amount"))
    if normalized == "monthly":
        return MonthlyExpense(
            name=name,
            amount=amount,
            day_of_month=parse_day_of_month(values.get("day")),
        )
    if normalized == "weekly":
        return WeeklyExpense(
            name=name,
            amount=amount,
            day_of_week=parse_day_of_week(values.get("day")),
        )
    return DailyExpense(name=name, amount=amount)


def _field_value(row: RawRow, field_name: str, position: int) -> str:
    if isinstance(row, Mapping):
        value = row.get(field_name, row.get(field_key(field_name)))
    else:
        value = row[position] if position < len(row) else None
    return _text(value)


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value)
