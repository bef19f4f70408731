import tempfile
import unittest
from datetime import date, datetime, timezone
from pathlib import Path

from catering.domain.Caller import CallerContext, ROLE_ADMIN
from catering.domain.Subscription import Subscription
from catering.domain.errors import AuthenticationError, AuthorizationError, ValidationError
from catering.infra.Subscription_Repository import SubscriptionRepository
from catering.logic.reporting.export import export_filename, metrics_to_csv
from catering.logic.reporting.metrics import MetricsService, compute_metrics, compute_owner_summary, format_metrics


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


def sub(status, price, created_at, reactivated_at=None, owner="alice"):
    return Subscription(owner_id=owner, name="Customer", phone="081234567890", plan="diet",
                        meal_types=["lunch"], delivery_days=["monday"], total_price=price,
                        created_at=created_at, status=status, reactivated_at=reactivated_at)


class TestComputeMetrics(unittest.TestCase):

    def setUp(self):
        self.subs = [
            sub("active", 774000, utc(2025, 3, 1, 0, 0)),
            sub("active", 2580000, utc(2025, 3, 31, 23, 59, 59)),
            sub("paused", 500000, utc(2025, 2, 10)),
            sub("cancelled", 300000, utc(2025, 3, 15)),
            sub("active", 258000, utc(2025, 1, 5), reactivated_at=utc(2025, 3, 20)),
        ]

    def test_march_window(self):
        m = compute_metrics(self.subs, date(2025, 3, 1), date(2025, 3, 31))
        self.assertEqual(m["new_subscriptions"], 3)
        self.assertEqual(m["reactivations"], 1)
        self.assertEqual(m["total_active"], 3)
        self.assertEqual(m["total_paused"], 1)
        self.assertEqual(m["total_cancelled"], 1)
        self.assertEqual(m["monthly_recurring_revenue"], 774000 + 2580000 + 258000)
        self.assertAlmostEqual(m["average_subscription_value"], (774000 + 2580000 + 258000) / 3)
        self.assertAlmostEqual(m["subscription_growth"], 100.0)

    def test_window_only_affects_windowed_counts(self):
        m = compute_metrics(self.subs, date(2025, 2, 1), date(2025, 2, 28))
        self.assertEqual(m["new_subscriptions"], 1)
        self.assertEqual(m["reactivations"], 0)
        self.assertEqual(m["total_active"], 3)
        self.assertEqual(m["monthly_recurring_revenue"], 3612000)

    def test_single_day_window_is_inclusive(self):
        m = compute_metrics(self.subs, date(2025, 3, 31), date(2025, 3, 31))
        self.assertEqual(m["new_subscriptions"], 1)

    def test_reactivated_subscription_counts_once(self):
        m = compute_metrics(self.subs, date(2025, 1, 1), date(2025, 3, 31))
        self.assertEqual(m["reactivations"], 1)
        self.assertEqual(m["new_subscriptions"], 5)

    def test_no_active_subscriptions(self):
        only_cancelled = [sub("cancelled", 300000, utc(2025, 3, 2))]
        m = compute_metrics(only_cancelled, date(2025, 3, 1), date(2025, 3, 31))
        self.assertEqual(m["total_active"], 0)
        self.assertEqual(m["monthly_recurring_revenue"], 0)
        self.assertEqual(m["average_subscription_value"], 0)
        self.assertEqual(m["subscription_growth"], 0)

    def test_empty_store(self):
        m = compute_metrics([], date(2025, 3, 1), date(2025, 3, 31))
        self.assertEqual(m["new_subscriptions"], 0)
        self.assertEqual(m["subscription_growth"], 0)

    def test_inverted_window_is_rejected(self):
        with self.assertRaises(ValidationError):
            compute_metrics(self.subs, date(2025, 3, 31), date(2025, 3, 1))

    def test_formatted_values(self):
        m = compute_metrics(self.subs, date(2025, 3, 1), date(2025, 3, 31))
        formatted = format_metrics(m)
        self.assertEqual(formatted["monthly_recurring_revenue"], "Rp 3.612.000")
        self.assertEqual(formatted["average_subscription_value"], "Rp 1.204.000")
        self.assertEqual(formatted["subscription_growth"], "100.0%")

    def test_owner_summary(self):
        summary = compute_owner_summary(self.subs)
        self.assertEqual(summary, {"active": 3, "paused": 1, "cancelled": 1, "monthly_total": 3612000})


class TestMetricsExport(unittest.TestCase):

    def test_csv_rows(self):
        m = compute_metrics([sub("active", 774000, utc(2025, 3, 3))], date(2025, 3, 1), date(2025, 3, 31))
        lines = metrics_to_csv(m).splitlines()
        self.assertEqual(lines[0], "Metric,Value")
        self.assertIn("New Subscriptions,1", lines)
        self.assertIn("Monthly Recurring Revenue,774000", lines)
        self.assertIn("Subscription Growth,100.0%", lines)
        self.assertIn("Average Subscription Value,774000", lines)
        self.assertEqual(len(lines), 9)

    def test_filename(self):
        m = compute_metrics([], date(2025, 3, 1), date(2025, 3, 31))
        self.assertEqual(export_filename(m, "csv"), "sea-catering-metrics-2025-03-01-to-2025-03-31.csv")


class TestMetricsService(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.repo = SubscriptionRepository(Path(self._tmp.name) / "subscriptions.json")
        self.repo.add(sub("active", 774000, utc(2025, 3, 2)))
        self.service = MetricsService(self.repo, clock=lambda: utc(2025, 3, 18, 12, 0))

    def tearDown(self):
        self._tmp.cleanup()

    def test_admin_only(self):
        with self.assertRaises(AuthenticationError):
            self.service.dashboard(None)
        with self.assertRaises(AuthorizationError):
            self.service.dashboard(CallerContext(account_id="alice"))

    def test_defaults_to_current_month(self):
        m = self.service.dashboard(CallerContext(account_id="root", role=ROLE_ADMIN))
        self.assertEqual(m["start_date"], date(2025, 3, 1))
        self.assertEqual(m["end_date"], date(2025, 3, 18))
        self.assertEqual(m["new_subscriptions"], 1)


if __name__ == '__main__':
    unittest.main()
