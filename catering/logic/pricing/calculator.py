"""Monthly price calculation for a plan selection.

price = unit_price(plan) x |meal_types| x |delivery_days| x 4.3, rounded to whole rupiah.
An unknown plan or an empty selection quotes 0, which the UI shows as "no price yet".
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable

from catering.domain.Plan import get_plan
from catering.utilities.constants import DELIVERY_DAYS, MEAL_TYPES, WEEKS_PER_MONTH
from catering.utilities.formatting import format_rupiah

__all__ = ["compute_price", "quote"]


def _count(selection: Iterable[str], allowed) -> int:
    if not selection or isinstance(selection, str):
        return 0
    return len({s for s in selection if s in allowed})


def compute_price(plan, meal_types: Iterable[str], delivery_days: Iterable[str]) -> int:
    """Return the monthly price in rupiah, or 0 for an incomplete selection."""
    selected = get_plan(plan)
    if selected is None:
        return 0
    meals = _count(meal_types, MEAL_TYPES)
    days = _count(delivery_days, DELIVERY_DAYS)
    if meals == 0 or days == 0:
        return 0
    amount = Decimal(selected.unit_price) * meals * days * Decimal(WEEKS_PER_MONTH)
    return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def quote(plan, meal_types: Iterable[str], delivery_days: Iterable[str]) -> Dict[str, Any]:
    """Price quote structure for live re-calculation in a checkout form."""
    total = compute_price(plan, meal_types, delivery_days)
    selected = get_plan(plan)
    return {
        "plan": selected.id if selected else None,
        "unit_price": selected.unit_price if selected else 0,
        "meal_count": _count(meal_types, MEAL_TYPES),
        "day_count": _count(delivery_days, DELIVERY_DAYS),
        "weeks_per_month": float(WEEKS_PER_MONTH),
        "total_price": total,
        "total_price_formatted": format_rupiah(total),
        "complete": total > 0,
    }
