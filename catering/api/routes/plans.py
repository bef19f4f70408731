from fastapi import APIRouter, HTTPException

from catering.domain.Plan import get_plan, list_plans
from catering.logic.pricing.calculator import quote
from catering.utilities.formatting import format_rupiah
from catering.utilities.validators import QuoteInput

router = APIRouter(prefix="/api/plans", tags=["plans"])


def _present(plan):
    data = plan.to_dict()
    data["unit_price_formatted"] = format_rupiah(plan.unit_price)
    return data


@router.get("")
def api_list_plans():
    plans = list_plans()
    return {"count": len(plans), "plans": [_present(p) for p in plans]}


@router.get("/{plan_id}")
def api_get_plan(plan_id: str):
    """Plan details with the default selections used to pre-fill checkout."""
    plan = get_plan(plan_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="Plan not found")
    return _present(plan)


@router.post("/quote")
def api_quote(payload: QuoteInput):
    """Live price for the current selection; incomplete selections quote 0."""
    return quote(payload.plan, payload.meal_types, payload.delivery_days)
