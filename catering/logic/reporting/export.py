"""CSV export of dashboard metrics (Metric,Value rows)."""
import csv
import io
from typing import Any, Dict

__all__ = ["metrics_to_csv", "export_filename"]

_ROWS = [
    ('New Subscriptions', 'new_subscriptions'),
    ('Monthly Recurring Revenue', 'monthly_recurring_revenue'),
    ('Reactivations', 'reactivations'),
    ('Subscription Growth', 'subscription_growth'),
    ('Total Active Subscriptions', 'total_active'),
    ('Total Paused Subscriptions', 'total_paused'),
    ('Total Cancelled Subscriptions', 'total_cancelled'),
    ('Average Subscription Value', 'average_subscription_value'),
]


def metrics_to_csv(metrics: Dict[str, Any]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator='\n')
    writer.writerow(['Metric', 'Value'])
    for label, key in _ROWS:
        value = metrics.get(key, 0)
        if key == 'subscription_growth':
            value = f"{float(value):.1f}%"
        elif isinstance(value, float):
            value = round(value)
        writer.writerow([label, value])
    return buf.getvalue()


def export_filename(metrics: Dict[str, Any], extension: str) -> str:
    return f"sea-catering-metrics-{metrics['start_date']}-to-{metrics['end_date']}.{extension}"
