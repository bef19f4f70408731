"""Dashboard metrics aggregation.

A full scan over all subscriptions, computed on demand. Windowed counts (new
subscriptions, reactivations) use [start_date, end_date] inclusive, with the end
date running to the end of that day in UTC. Status totals and MRR describe the
current state of the whole set and ignore the window.
"""
from __future__ import annotations
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, Iterable, Optional

from catering.domain.Caller import CallerContext
from catering.domain.errors import AuthorizationError, ValidationError
from catering.infra.Subscription_Repository import SubscriptionRepository
from catering.logic.lifecycle.service import require_caller
from catering.utilities.constants import STATUS_ACTIVE, STATUS_CANCELLED, STATUS_PAUSED
from catering.utilities.formatting import format_percent, format_rupiah

__all__ = ["compute_metrics", "compute_owner_summary", "format_metrics", "MetricsService"]


def _in_window(ts: Optional[datetime], start_date: date, end_date: date) -> bool:
    if ts is None:
        return False
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc)
    return start_date <= ts.date() <= end_date


def compute_metrics(subscriptions: Iterable, start_date: date, end_date: date) -> Dict[str, Any]:
    """Aggregate business health for the window.

    Returns:
    {
      'start_date': date, 'end_date': date,
      'new_subscriptions': int, 'reactivations': int,
      'total_active': int, 'total_paused': int, 'total_cancelled': int,
      'monthly_recurring_revenue': int,
      'average_subscription_value': float,   # 0 when nothing is active
      'subscription_growth': float,          # percent, 0 when nothing is active
    }
    """
    if start_date > end_date:
        raise ValidationError("Invalid date range", {"start_date": "Start date must not be after end date"})

    new_subs = reactivations = 0
    counts = {STATUS_ACTIVE: 0, STATUS_PAUSED: 0, STATUS_CANCELLED: 0}
    mrr = 0
    for sub in subscriptions:
        if _in_window(sub.created_at, start_date, end_date):
            new_subs += 1
        if _in_window(sub.reactivated_at, start_date, end_date):
            reactivations += 1
        if sub.status in counts:
            counts[sub.status] += 1
        if sub.status == STATUS_ACTIVE:
            mrr += sub.total_price or 0

    total_active = counts[STATUS_ACTIVE]
    return {
        'start_date': start_date,
        'end_date': end_date,
        'new_subscriptions': new_subs,
        'reactivations': reactivations,
        'total_active': total_active,
        'total_paused': counts[STATUS_PAUSED],
        'total_cancelled': counts[STATUS_CANCELLED],
        'monthly_recurring_revenue': mrr,
        'average_subscription_value': mrr / total_active if total_active else 0,
        'subscription_growth': new_subs / total_active * 100 if total_active else 0,
    }


def compute_owner_summary(subscriptions: Iterable) -> Dict[str, int]:
    """Customer dashboard header: how many plans in each state and the monthly spend."""
    summary = {'active': 0, 'paused': 0, 'cancelled': 0, 'monthly_total': 0}
    for sub in subscriptions:
        if sub.status in summary:
            summary[sub.status] += 1
        if sub.status == STATUS_ACTIVE:
            summary['monthly_total'] += sub.total_price or 0
    return summary


def format_metrics(metrics: Dict[str, Any]) -> Dict[str, str]:
    """Display strings for the money and percentage fields."""
    return {
        'monthly_recurring_revenue': format_rupiah(metrics['monthly_recurring_revenue']),
        'average_subscription_value': format_rupiah(metrics['average_subscription_value']),
        'subscription_growth': format_percent(metrics['subscription_growth']),
    }


class MetricsService:
    def __init__(self, repository: SubscriptionRepository, clock: Callable[[], datetime] = None):
        self.repository = repository
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def dashboard(self, caller: Optional[CallerContext], start_date: Optional[date] = None,
                  end_date: Optional[date] = None) -> Dict[str, Any]:
        """Admin-only metrics. Defaults to the current month up to today."""
        caller = require_caller(caller)
        if not caller.is_admin:
            raise AuthorizationError("Admin access required")
        today = self.clock().date()
        end_date = end_date or today
        start_date = start_date or end_date.replace(day=1)
        return compute_metrics(self.repository.list_all(), start_date, end_date)
