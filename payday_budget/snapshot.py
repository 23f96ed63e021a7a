from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext

from payday_budget.expenses import BudgetSnapshot, ExpenseCollection, PaydayConfig, parse_amount
from payday_budget.monthly_total import compute_monthly_total
from payday_budget.payday_projection import project_expenses_until_payday

CENT = Decimal("0.01")
CURRENCY_SYMBOL = "£"


def on_expense_collection_changed(
    collection: ExpenseCollection,
    config: PaydayConfig,
    today: date,
) -> BudgetSnapshot:
    """Recompute both totals after any change to the expenses or pay day."""
    return BudgetSnapshot(
        monthly_total=compute_monthly_total(collection),
        payday_total=project_expenses_until_payday(
            collection, today, config.pay_day_of_month
        ),
    )


def quantize_money(amount: Decimal | int | float | str) -> Decimal:
    value = _coerce_amount(amount)
    with localcontext() as ctx:
        # Keep every whole-pound digit plus the pennies.
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(amount: Decimal | int | float | str) -> str:
    """Format as pounds with two decimals, e.g. ``£1,234.50``."""
    value = quantize_money(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{value.copy_abs():,.2f}"


def _coerce_amount(amount: Decimal | int | float | str) -> Decimal:
    if isinstance(amount, Decimal):
        return amount if amount.is_finite() else Decimal("0")
    return parse_amount(amount)
