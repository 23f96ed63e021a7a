import unittest
from decimal import Decimal

from payday_budget.expenses import (
    ExpenseCollection,
    MonthlyExpense,
    PaydayConfig,
    parse_amount,
    parse_day_of_month,
    parse_day_of_week,
    parse_pay_day,
    validate_cadence,
)


class ParseAmountTests(unittest.TestCase):
    def test_reads_leading_number(self) -> None:
        self.assertEqual(parse_amount("12.50"), Decimal("12.50"))
        self.assertEqual(parse_amount(" 12.5abc"), Decimal("12.5"))
        self.assertEqual(parse_amount(".75"), Decimal("0.75"))
        self.assertEqual(parse_amount("1e2"), Decimal("100"))

    def test_accepts_numbers(self) -> None:
        self.assertEqual(parse_amount(3), Decimal("3"))
        self.assertEqual(parse_amount(0.1), Decimal("0.1"))
        self.assertEqual(parse_amount(Decimal("4.20")), Decimal("4.20"))

    def test_unreadable_values_are_zero(self) -> None:
        for value in (None, "", "   ", "abc", "£5", True, Decimal("NaN"), float("inf")):
            with self.subTest(value=value):
                self.assertEqual(parse_amount(value), Decimal("0"))

    def test_negative_values_are_zero(self) -> None:
        self.assertEqual(parse_amount("-4"), Decimal("0"))

    def test_amounts_beyond_float_range_are_zero(self) -> None:
        self.assertEqual(parse_amount("1e999999"), Decimal("0"))
        self.assertEqual(parse_amount(Decimal("1e400")), Decimal("0"))
        self.assertEqual(parse_amount("1e300"), Decimal("1e300"))


class ParseDayTests(unittest.TestCase):
    def test_day_of_month_defaults_to_first(self) -> None:
        self.assertEqual(parse_day_of_month("15"), 15)
        self.assertEqual(parse_day_of_month(None), 1)
        self.assertEqual(parse_day_of_month(""), 1)
        self.assertEqual(parse_day_of_month("32"), 1)

    def test_day_of_week_is_optional(self) -> None:
        self.assertEqual(parse_day_of_week("0"), 0)
        self.assertEqual(parse_day_of_week(6), 6)
        self.assertIsNone(parse_day_of_week(""))
        self.assertIsNone(parse_day_of_week("7"))
        self.assertIsNone(parse_day_of_week("Monday"))

    def test_pay_day_defaults_to_25(self) -> None:
        self.assertEqual(parse_pay_day("28"), 28)
        self.assertEqual(parse_pay_day(None), 25)
        self.assertEqual(parse_pay_day("0"), 25)
        self.assertEqual(parse_pay_day("x", default=1), 1)


class ExpenseCollectionTests(unittest.TestCase):
    def test_sequences_are_stored_as_tuples(self) -> None:
        rent = MonthlyExpense(name="Rent", amount=Decimal("900"))
        collection = ExpenseCollection(monthly=[rent])

        self.assertEqual(collection.monthly, (rent,))
        self.assertEqual(ExpenseCollection().daily, ())

    def test_payday_config_recovers_from_bad_day(self) -> None:
        self.assertEqual(PaydayConfig("40").pay_day_of_month, 25)
        self.assertEqual(PaydayConfig("15").pay_day_of_month, 15)

    def test_rejects_unknown_cadence(self) -> None:
        self.assertEqual(validate_cadence(" Weekly "), "weekly")
        with self.assertRaises(ValueError):
            validate_cadence("yearly")


if __name__ == "__main__":
    unittest.main()
