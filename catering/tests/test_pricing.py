import unittest
from catering.logic.pricing.calculator import compute_price, quote

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]


class TestComputePrice(unittest.TestCase):

    def test_known_quotes(self):
        cases = [
            ("diet", ["lunch", "dinner"], ["monday", "wednesday", "friday"], 774000),
            ("protein", ["breakfast", "lunch", "dinner"], WEEKDAYS, 2580000),
            ("royal", ["dinner"], ["sunday"], 258000),
            ("royal", ["breakfast", "lunch", "dinner"], WEEKDAYS + ["saturday", "sunday"], 5418000),
        ]
        for plan, meals, days, expected in cases:
            with self.subTest(plan=plan, meals=meals, days=days):
                self.assertEqual(compute_price(plan, meals, days), expected)

    def test_incomplete_selection_is_zero(self):
        for plan in ("diet", "protein", "royal"):
            self.assertEqual(compute_price(plan, [], ["monday"]), 0)
            self.assertEqual(compute_price(plan, ["lunch"], []), 0)
            self.assertEqual(compute_price(plan, [], []), 0)

    def test_unknown_plan_is_zero(self):
        self.assertEqual(compute_price("", ["lunch"], ["monday"]), 0)
        self.assertEqual(compute_price("vegan", ["lunch"], ["monday"]), 0)
        self.assertEqual(compute_price(None, ["lunch"], ["monday"]), 0)

    def test_same_input_same_output(self):
        args = ("protein", ["breakfast", "dinner"], ["monday", "friday"])
        self.assertEqual(compute_price(*args), compute_price(*args))

    def test_duplicates_and_unknown_ids_are_not_counted(self):
        self.assertEqual(
            compute_price("diet", ["lunch", "lunch", "brunch"], ["monday", "monday"]),
            compute_price("diet", ["lunch"], ["monday"]),
        )

    def test_result_is_whole_rupiah(self):
        price = compute_price("diet", ["lunch", "dinner"], ["monday", "wednesday", "friday"])
        self.assertIsInstance(price, int)


class TestQuote(unittest.TestCase):

    def test_quote_formats_total(self):
        q = quote("diet", ["lunch", "dinner"], ["monday", "wednesday", "friday"])
        self.assertEqual(q["total_price"], 774000)
        self.assertEqual(q["total_price_formatted"], "Rp 774.000")
        self.assertEqual(q["meal_count"], 2)
        self.assertEqual(q["day_count"], 3)
        self.assertTrue(q["complete"])

    def test_incomplete_quote(self):
        q = quote("", [], [])
        self.assertEqual(q["total_price"], 0)
        self.assertIsNone(q["plan"])
        self.assertFalse(q["complete"])


if __name__ == '__main__':
    unittest.main()
