from fastapi import APIRouter, Body, Depends, Response

from catering.api.dependencies import Services, get_caller, get_services, require_csrf, rotate_csrf
from catering.domain.Caller import CallerContext

router = APIRouter(prefix="/api/testimonials", tags=["testimonials"])


def _public(testimonial):
    data = testimonial.to_dict()
    data.pop("owner_id", None)
    return data


@router.get("")
def api_list_testimonials(services: Services = Depends(get_services)):
    """Approved testimonials for the landing page."""
    items = services.testimonials.list_approved()
    return {"count": len(items), "testimonials": [_public(t) for t in items]}


@router.get("/mine")
def api_my_testimonials(caller: CallerContext = Depends(get_caller), services: Services = Depends(get_services)):
    items = services.testimonials.list_mine(caller)
    return {"count": len(items), "testimonials": [t.to_dict() for t in items]}


@router.post("", status_code=201)
def api_submit_testimonial(response: Response,
                           caller: CallerContext = Depends(get_caller),
                           session_id: str = Depends(require_csrf),
                           payload: dict = Body(...),
                           services: Services = Depends(get_services)):
    testimonial = services.testimonials.create(caller, payload)
    rotate_csrf(response, session_id, services)
    return testimonial.to_dict()
