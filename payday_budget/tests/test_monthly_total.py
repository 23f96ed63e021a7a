import unittest
from decimal import Decimal

from payday_budget.expenses import DailyExpense, ExpenseCollection, MonthlyExpense, WeeklyExpense
from payday_budget.monthly_total import compute_monthly_total


class MonthlyTotalTests(unittest.TestCase):
    def test_normalizes_each_cadence_to_a_31_day_month(self) -> None:
        collection = ExpenseCollection(
            monthly=[MonthlyExpense(name="Rent", amount=Decimal("900"), day_of_month=1)],
            weekly=[WeeklyExpense(name="Food", amount=Decimal("70"), day_of_week=5)],
            daily=[DailyExpense(name="Coffee", amount=Decimal("2.50"))],
        )

        total = compute_monthly_total(collection)

        self.assertEqual(total, Decimal("900") + Decimal("310") + Decimal("77.50"))

    def test_weekly_amount_rounds_to_pennies(self) -> None:
        collection = ExpenseCollection(
            weekly=[WeeklyExpense(name="Travel", amount=Decimal("10"), day_of_week=1)],
        )

        total = compute_monthly_total(collection)

        self.assertEqual(total.quantize(Decimal("0.01")), Decimal("44.29"))

    def test_total_ignores_record_order(self) -> None:
        expenses = [
            MonthlyExpense(name="Rent", amount=Decimal("900.10"), day_of_month=1),
            MonthlyExpense(name="Phone", amount=Decimal("15.33"), day_of_month=12),
            MonthlyExpense(name="Gym", amount=Decimal("29.99"), day_of_month=28),
        ]
        weekly = [
            WeeklyExpense(name="Food", amount=Decimal("61.17"), day_of_week=5),
            WeeklyExpense(name="Fuel", amount=Decimal("40.03"), day_of_week=2),
        ]

        forward = compute_monthly_total(ExpenseCollection(monthly=expenses, weekly=weekly))
        backward = compute_monthly_total(
            ExpenseCollection(monthly=expenses[::-1], weekly=weekly[::-1])
        )

        self.assertEqual(forward, backward)

    def test_unparseable_amounts_count_as_zero(self) -> None:
        collection = ExpenseCollection(
            monthly=[MonthlyExpense(name="Rent", amount="n/a")],
            daily=[DailyExpense(name="Snacks", amount="3 quid")],
        )

        self.assertEqual(compute_monthly_total(collection), Decimal("93"))

    def test_out_of_range_amount_totals_zero(self) -> None:
        collection = ExpenseCollection(
            daily=[DailyExpense(name="Coffee", amount="1e999999")],
            weekly=[WeeklyExpense(name="Food", amount="1e999999", day_of_week=1)],
        )

        self.assertEqual(compute_monthly_total(collection), Decimal("0"))

    def test_empty_collection_totals_zero(self) -> None:
        self.assertEqual(compute_monthly_total(ExpenseCollection()), Decimal("0"))


if __name__ == "__main__":
    unittest.main()
