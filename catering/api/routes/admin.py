from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from catering.api.dependencies import Services, get_caller, get_services
from catering.api.routes.subscriptions import present
from catering.domain.Caller import CallerContext
from catering.domain.errors import AuthorizationError
from catering.infra.pdf_utils import generate_pdf_for_metrics
from catering.logic.reporting.export import export_filename, metrics_to_csv
from catering.logic.reporting.metrics import format_metrics
from catering.utilities.validators import StatusUpdateInput

router = APIRouter(prefix="/api/admin", tags=["admin"])


def get_admin(caller: CallerContext = Depends(get_caller)) -> CallerContext:
    if not caller.is_admin:
        raise AuthorizationError("Admin access required")
    return caller


@router.get("/metrics")
def api_metrics(start_date: Optional[date] = Query(default=None), end_date: Optional[date] = Query(default=None),
                caller: CallerContext = Depends(get_admin), services: Services = Depends(get_services)):
    """
    Dashboard metrics for [start_date, end_date] (defaults: first of this month .. today).

    Status totals, MRR and average value describe all subscriptions regardless of the dates.
    """
    metrics = services.metrics.dashboard(caller, start_date, end_date)
    return {**metrics, "formatted": format_metrics(metrics)}


@router.get("/metrics/export.csv")
def api_metrics_csv(start_date: Optional[date] = Query(default=None), end_date: Optional[date] = Query(default=None),
                    caller: CallerContext = Depends(get_admin), services: Services = Depends(get_services)):
    metrics = services.metrics.dashboard(caller, start_date, end_date)
    return Response(
        content=metrics_to_csv(metrics),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(metrics, "csv")}"'},
    )


@router.get("/metrics/export.pdf")
def api_metrics_pdf(start_date: Optional[date] = Query(default=None), end_date: Optional[date] = Query(default=None),
                    caller: CallerContext = Depends(get_admin), services: Services = Depends(get_services)):
    metrics = services.metrics.dashboard(caller, start_date, end_date)
    return Response(
        content=generate_pdf_for_metrics(metrics),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(metrics, "pdf")}"'},
    )


@router.get("/subscriptions")
def api_all_subscriptions(caller: CallerContext = Depends(get_admin), services: Services = Depends(get_services)):
    subs = services.subscriptions.list(caller)
    return {"count": len(subs), "subscriptions": [present(s) for s in subs]}


@router.patch("/subscriptions/{subscription_id}/status")
def api_override_status(subscription_id: int, payload: StatusUpdateInput,
                        caller: CallerContext = Depends(get_admin), services: Services = Depends(get_services)):
    sub = services.subscriptions.update_status(caller, subscription_id, payload.status,
                                               payload.pause_start, payload.pause_end)
    return present(sub)


@router.get("/testimonials")
def api_all_testimonials(caller: CallerContext = Depends(get_admin), services: Services = Depends(get_services)):
    items = services.testimonials.list_all(caller)
    return {"count": len(items), "testimonials": [t.to_dict() for t in items]}


@router.post("/testimonials/{testimonial_id}/approve")
def api_approve_testimonial(testimonial_id: int, caller: CallerContext = Depends(get_admin),
                            services: Services = Depends(get_services)):
    return services.testimonials.approve(caller, testimonial_id).to_dict()


@router.get("/activity")
def api_activity(since: Optional[int] = Query(default=None, description="Return events with id greater than this value"),
                 caller: CallerContext = Depends(get_admin), services: Services = Depends(get_services)):
    """
    Recent subscription and testimonial activity.

    Client polling strategy:
        1. First call without 'since' to load the current backlog.
        2. Store 'next_cursor' from the response.
        3. Subsequent polls: /api/admin/activity?since=<next_cursor>
    """
    return services.activity.get_events(since)
