import logging

from fastapi import APIRouter, Body, Depends, Response

from catering.api.dependencies import Services, get_caller, get_services, require_csrf, rotate_csrf
from catering.domain.Caller import CallerContext
from catering.logic.reporting.metrics import compute_owner_summary
from catering.utilities.formatting import format_rupiah
from catering.utilities.validators import PauseInput, StatusUpdateInput

router = APIRouter(prefix="/api/subscriptions", tags=["subscriptions"])
logger = logging.getLogger(__name__)


def present(subscription):
    data = subscription.to_dict()
    data["total_price_formatted"] = format_rupiah(subscription.total_price)
    return data


@router.post("", status_code=201)
def api_create_subscription(response: Response,
                            caller: CallerContext = Depends(get_caller),
                            session_id: str = Depends(require_csrf),
                            payload: dict = Body(...),
                            services: Services = Depends(get_services)):
    """Create a subscription. The response carries a fresh X-CSRF-Token for the next form."""
    subscription = services.subscriptions.create(caller, payload)
    rotate_csrf(response, session_id, services)
    return present(subscription)


@router.get("")
def api_list_subscriptions(caller: CallerContext = Depends(get_caller),
                           services: Services = Depends(get_services)):
    """Own subscriptions (all of them for an admin). Not paginated."""
    subs = services.subscriptions.list(caller)
    return {"count": len(subs), "subscriptions": [present(s) for s in subs]}


@router.get("/summary")
def api_subscription_summary(caller: CallerContext = Depends(get_caller),
                             services: Services = Depends(get_services)):
    mine = [s for s in services.subscriptions.list(caller) if s.owner_id == caller.account_id]
    summary = compute_owner_summary(mine)
    summary["monthly_total_formatted"] = format_rupiah(summary["monthly_total"])
    return summary


@router.get("/{subscription_id}")
def api_get_subscription(subscription_id: int, caller: CallerContext = Depends(get_caller),
                         services: Services = Depends(get_services)):
    return present(services.subscriptions.get(caller, subscription_id))


@router.post("/{subscription_id}/pause")
def api_pause(subscription_id: int, payload: PauseInput, caller: CallerContext = Depends(get_caller),
              services: Services = Depends(get_services)):
    sub = services.subscriptions.pause(caller, subscription_id, payload.start_date, payload.end_date)
    return present(sub)


@router.post("/{subscription_id}/resume")
def api_resume(subscription_id: int, caller: CallerContext = Depends(get_caller),
               services: Services = Depends(get_services)):
    return present(services.subscriptions.resume(caller, subscription_id))


@router.post("/{subscription_id}/cancel")
def api_cancel(subscription_id: int, caller: CallerContext = Depends(get_caller),
               services: Services = Depends(get_services)):
    return present(services.subscriptions.cancel(caller, subscription_id))


@router.post("/{subscription_id}/reactivate")
def api_reactivate(subscription_id: int, caller: CallerContext = Depends(get_caller),
                   services: Services = Depends(get_services)):
    return present(services.subscriptions.reactivate(caller, subscription_id))


@router.patch("/{subscription_id}/status")
def api_update_status(subscription_id: int, payload: StatusUpdateInput,
                      caller: CallerContext = Depends(get_caller),
                      services: Services = Depends(get_services)):
    sub = services.subscriptions.update_status(caller, subscription_id, payload.status,
                                               payload.pause_start, payload.pause_end)
    return present(sub)
