import unittest
from datetime import date

from catering.events.Event_Bus import EventBus, SUBSCRIPTION_CREATED
from catering.events.web_observers import ActivityFeed
from catering.infra.pdf_utils import generate_pdf_for_metrics
from catering.logic.reporting.metrics import compute_metrics


class TestEventBus(unittest.TestCase):

    def test_failing_listener_does_not_stop_others(self):
        bus = EventBus()
        seen = []

        def broken(name, payload):
            raise RuntimeError("boom")

        bus.subscribe(SUBSCRIPTION_CREATED, broken)
        bus.subscribe(SUBSCRIPTION_CREATED, lambda n, p: seen.append(p))
        with self.assertLogs('catering.events.Event_Bus', level='ERROR'):
            bus.publish(SUBSCRIPTION_CREATED, {"x": 1})
        self.assertEqual(seen, [{"x": 1}])

    def test_subscribe_twice_delivers_once(self):
        bus = EventBus()
        seen = []
        cb = lambda n, p: seen.append(n)  # noqa: E731
        bus.subscribe(SUBSCRIPTION_CREATED, cb)
        bus.subscribe(SUBSCRIPTION_CREATED, cb)
        bus.publish(SUBSCRIPTION_CREATED, {})
        self.assertEqual(len(seen), 1)
        bus.unsubscribe(SUBSCRIPTION_CREATED, cb)
        bus.unsubscribe(SUBSCRIPTION_CREATED, cb)


class TestActivityFeed(unittest.TestCase):

    def test_buffer_is_bounded(self):
        feed = ActivityFeed(max_events=3)
        bus = EventBus()
        feed.start(bus)
        feed.start(bus)
        for i in range(5):
            bus.publish(SUBSCRIPTION_CREATED, {"subscription": {"id": i, "plan": "diet", "status": "active"},
                                               "actor_id": "u"})
        result = feed.get_events()
        self.assertEqual([e['id'] for e in result['events']], [3, 4, 5])
        self.assertEqual(result['next_cursor'], 5)
        self.assertEqual(result['events'][0]['subscription_id'], 2)

    def test_empty_feed_cursor(self):
        self.assertEqual(ActivityFeed().get_events(7), {'events': [], 'next_cursor': 7})


class TestMetricsPdf(unittest.TestCase):

    def test_pdf_bytes(self):
        metrics = compute_metrics([], date(2025, 3, 1), date(2025, 3, 31))
        pdf = generate_pdf_for_metrics(metrics)
        self.assertTrue(pdf.startswith(b"%PDF"))


if __name__ == '__main__':
    unittest.main()
